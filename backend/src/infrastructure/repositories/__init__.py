"""Repository and unit-of-work implementations."""

from .memory_repository import (
    InMemoryStore,
    InMemoryUnitOfWork,
    in_memory_uow_factory,
)
from .sqlalchemy_repository import (
    SqlAlchemyUnitOfWork,
    sqlalchemy_uow_factory,
)

__all__ = [
    "InMemoryStore",
    "InMemoryUnitOfWork",
    "in_memory_uow_factory",
    "SqlAlchemyUnitOfWork",
    "sqlalchemy_uow_factory",
]
