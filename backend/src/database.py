"""Database engine and session factory.

Used when STORE_BACKEND=sql. The engine is created by the application entry
point, not at import time, so tests can bind their own database.
"""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from models.base import Base


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """Create an engine with settings appropriate for the backend.

    Args:
        database_url: SQLAlchemy connection string
        echo: Log SQL statements

    Returns:
        Engine: Configured SQLAlchemy engine
    """
    engine_kwargs = {
        "pool_pre_ping": True,  # Verify connections before using
        "echo": echo,
    }

    if database_url.startswith("sqlite"):
        engine_kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in database_url or database_url in ("sqlite://", "sqlite:///"):
            # One shared connection, otherwise each session sees an empty database
            engine_kwargs["poolclass"] = StaticPool
    else:
        engine_kwargs["pool_size"] = 5
        engine_kwargs["max_overflow"] = 10

    return create_engine(database_url, **engine_kwargs)


def create_session_factory(engine: Engine) -> sessionmaker:
    """Create a session factory bound to ``engine``."""
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=engine,
    )


def init_db(engine: Engine) -> None:
    """Create all tables (development and tests; production uses migrations)."""
    Base.metadata.create_all(bind=engine)
