"""Base SQLAlchemy declarative base for all models"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import BigInteger, Integer
from sqlalchemy.orm import declarative_base


# BIGSERIAL on PostgreSQL, INTEGER PRIMARY KEY (rowid alias) on SQLite
SequenceKey = BigInteger().with_variant(Integer(), "sqlite")


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive datetimes read back from SQLite."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


Base = declarative_base()
