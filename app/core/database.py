import logging
import re
from typing import Any, Sequence

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Result
from sqlalchemy.ext.declarative import declarative_base
from sqlalchemy.orm import Session, sessionmaker
from app.core.config import settings

logger = logging.getLogger(__name__)

# Create SQLAlchemy engine
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,  # Verify connections before using them
)

# Create SessionLocal class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create Base class for models
Base = declarative_base()

# Positional placeholder as produced by app.crud.sql ($1, $2, ...)
_PLACEHOLDER = re.compile(r"\$(\d+)")


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


def run_query(db: Session, sql: str, values: Sequence[Any] = ()) -> Result:
    """
    Execute SQL written with positional `$N` placeholders.

    Each `$N` is rewritten to the named bind `:pN` and bound to `values[N-1]`,
    so the same statement runs on any SQLAlchemy dialect.

    Args:
        db: Database session
        sql: Statement text containing `$1`..`$len(values)`
        values: Positional parameter values

    Returns:
        SQLAlchemy Result of the execution
    """
    statement = text(_PLACEHOLDER.sub(r":p\1", sql))
    params = {f"p{idx}": value for idx, value in enumerate(values, start=1)}
    return db.execute(statement, params)


def init_db():
    """
    Initialize database.

    Imports the models so they register on Base.metadata, then creates any
    missing tables unless CREATE_TABLES_ON_STARTUP is disabled.
    """
    from app.models import company, job, user, application  # noqa: F401  Import models to register them

    if settings.CREATE_TABLES_ON_STARTUP:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created")
