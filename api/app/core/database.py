from sqlmodel import SQLModel, create_engine, Session
from app.core.config import settings
import logging

logger = logging.getLogger(__name__)

# Create database engine
# Ensure the URL uses postgresql:// (not postgres://) for SQLAlchemy
db_url = settings.sqlalchemy_database_url

logger.info(f"Connecting to database: {db_url[:20]}...")  # Log partial URL for debugging

if db_url.startswith("sqlite"):
    # SQLite is used for local development and tests; it has no connection pool options
    engine = create_engine(
        db_url,
        echo=False,
        connect_args={"check_same_thread": False},
    )
else:
    engine = create_engine(
        db_url,
        echo=False,  # Set to False in production to reduce logs
        pool_pre_ping=True,  # Verify connections before using
        pool_size=5,
        max_overflow=10,
    )


def get_session():
    """Dependency for getting database sessions."""
    with Session(engine) as session:
        yield session


def init_db():
    """Initialize database tables and the catalog code counters."""
    # Import models so every table is registered with SQLModel.metadata
    from app import models  # noqa: F401
    from app.services.code_generation_service import ensure_code_sequences

    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        ensure_code_sequences(session)
        session.commit()
