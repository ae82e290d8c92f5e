from sqlalchemy import Column, Integer, String, Text
from app.core.database import Base


class Company(Base):
    """Company that posts jobs. Only read by the jobs API."""
    __tablename__ = "companies"

    handle = Column(String(25), primary_key=True)
    name = Column(Text, unique=True, nullable=False)
    num_employees = Column(Integer, nullable=True)
    description = Column(Text, nullable=False, default="")
    logo_url = Column(Text, nullable=True)

    def __repr__(self):
        return f"<Company(handle='{self.handle}', name='{self.name}')>"
