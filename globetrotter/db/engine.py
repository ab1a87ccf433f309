"""Database engine and session factory."""

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from globetrotter.config import Settings
from globetrotter.db.models import Base


def create_engine_from_settings(settings: Settings) -> Engine:
    """Create SQLAlchemy engine from settings.

    Raises:
        ValueError: If the store URL is unset or empty.
    """
    if not settings.store_url:
        raise ValueError(
            "GLOBETROTTER_STORE_URL must be set to a valid connection string. "
            "Please configure the store_url setting."
        )

    return create_engine(settings.store_url, pool_pre_ping=True, echo=False)


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Create sessionmaker for creating database sessions.

    Args:
        engine: SQLAlchemy engine

    Returns:
        Sessionmaker bound to the engine
    """
    return sessionmaker(bind=engine, expire_on_commit=False)


def init_schema(engine: Engine) -> None:
    """Create the record table if it does not exist."""
    Base.metadata.create_all(engine)
