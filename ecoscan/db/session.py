"""Database session and engine management."""
from sqlalchemy import create_engine
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from loguru import logger

from ecoscan.config import settings
from ecoscan.utils.exceptions import StorageError


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        # SQLite connections are shared across the threadpool FastAPI runs sync endpoints in
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_size": 10,
        "max_overflow": 20,
        "pool_recycle": 3600,  # Recycle connections after 1 hour
    }


engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    echo=settings.ENVIRONMENT == "debug",
    **_engine_options(settings.DATABASE_URL),
)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    expire_on_commit=False,  # Keep objects usable after commit
)


def commit_or_raise(db: Session, action: str) -> None:
    """Commit the unit of work, rolling back and raising ``StorageError`` on failure."""
    try:
        db.commit()
    except SQLAlchemyError as exc:
        logger.error(f"Commit failed while trying to {action}: {exc}")
        db.rollback()
        raise StorageError(f"Could not {action}.") from exc


def dialect_insert(db: Session, model):
    """Return an ``INSERT`` construct supporting ``ON CONFLICT`` for the bound dialect."""
    dialect = db.get_bind().dialect.name
    if dialect == "postgresql":
        return pg_insert(model)
    if dialect == "sqlite":
        return sqlite_insert(model)
    raise StorageError(f"Unsupported database dialect for upserts: {dialect}")
