from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, Numeric, Text
from app.core.database import Base


class Job(Base):
    """
    Job posting offered by a company.

    Read and written through raw parameterized SQL in app.crud.job; this
    declaration owns the table definition.
    """
    __tablename__ = "jobs"
    __table_args__ = (
        CheckConstraint("salary >= 0", name="ck_jobs_salary_non_negative"),
        CheckConstraint("equity <= 1.0", name="ck_jobs_equity_max_one"),
    )

    id = Column(Integer, primary_key=True, index=True)
    title = Column(Text, nullable=False, index=True)
    salary = Column(Integer, nullable=True)
    equity = Column(Numeric, nullable=True)
    company_handle = Column(
        Text,
        ForeignKey("companies.handle", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    def __repr__(self):
        return f"<Job(id={self.id}, title='{self.title}', company_handle='{self.company_handle}')>"
