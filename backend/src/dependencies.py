"""Service wiring and FastAPI dependencies.

The application lifespan builds one ServiceContainer per process and stores
it on ``app.state.services``. Route handlers receive the services through
the ``get_*`` dependencies below, so tests can swap the container.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import HTTPException, Request, status
from sqlalchemy.engine import Engine

from config import Settings
from database import create_db_engine, create_session_factory, init_db
from domain.assignments import AssignmentMatcher
from domain.clock import Clock, SystemClock
from domain.commitments import CommitmentLedger, OrderIntakeService
from domain.locks import KeyedLock
from domain.unit_of_work import UnitOfWorkFactory
from infrastructure.repositories import (
    InMemoryStore,
    in_memory_uow_factory,
    sqlalchemy_uow_factory,
)


logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """Process-wide services sharing one store and one lock registry."""
    store_backend: str
    ledger: CommitmentLedger
    matcher: AssignmentMatcher
    intake: OrderIntakeService
    engine: Optional[Engine] = None

    def close(self) -> None:
        if self.engine is not None:
            self.engine.dispose()


def build_services(settings: Settings, clock: Optional[Clock] = None) -> ServiceContainer:
    """Create the ledger, matcher and intake service for the configured store.

    Args:
        settings: Application settings (STORE_BACKEND selects the store)
        clock: Time source shared by ledger and matcher

    Returns:
        ServiceContainer ready to be placed on app.state
    """
    clock = clock or SystemClock()
    locks = KeyedLock()
    engine = None

    if settings.uses_sql_store:
        engine = create_db_engine(settings.DATABASE_URL, echo=settings.DEBUG)
        init_db(engine)
        uow_factory: UnitOfWorkFactory = sqlalchemy_uow_factory(create_session_factory(engine))
        store_backend = "sql"
    else:
        uow_factory = in_memory_uow_factory(InMemoryStore())
        store_backend = "memory"

    ledger = CommitmentLedger(uow_factory, clock=clock, locks=locks)
    matcher = AssignmentMatcher(uow_factory, clock=clock, locks=locks)

    logger.info(f"Services initialized with {store_backend} store")
    return ServiceContainer(
        store_backend=store_backend,
        ledger=ledger,
        matcher=matcher,
        intake=OrderIntakeService(ledger),
        engine=engine,
    )


def get_services(request: Request) -> ServiceContainer:
    """Return the container built by the application lifespan.

    Raises:
        HTTPException 503: If called before startup completed
    """
    services = getattr(request.app.state, "services", None)
    if services is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service is starting up",
        )
    return services


def get_ledger(request: Request) -> CommitmentLedger:
    return get_services(request).ledger


def get_matcher(request: Request) -> AssignmentMatcher:
    return get_services(request).matcher


def get_intake(request: Request) -> OrderIntakeService:
    return get_services(request).intake
