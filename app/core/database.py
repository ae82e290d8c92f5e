import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from app.core.config import settings

logger = logging.getLogger(__name__)

# Create SQLAlchemy engine
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,  # Verify connections before using them
    pool_size=10,
    max_overflow=20
)

# Create SessionLocal class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create Base class for models
Base = declarative_base()


def get_db():
    """
    Dependency function to get database session.
    Used in FastAPI endpoints with Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None):
    """
    Initialize database.

    Registers the table declarations on Base.metadata. Tables are only
    created when AUTO_CREATE_TABLES is enabled, since no migrations ship
    with the service.
    """
    from app.models import company, job  # noqa: F401  Import models to register them

    if settings.AUTO_CREATE_TABLES:
        logger.info("Creating missing tables")
        Base.metadata.create_all(bind=bind or engine)
