"""Pytest fixtures for DenimFlow tests.

Provides reusable test fixtures for:
- Deterministic clock and shared per-SKU locks
- In-memory store with ledger, matcher and intake services
- In-memory SQLite engine and SQLAlchemy unit of work
- FastAPI TestClient backed by the in-memory store

Usage:
    def test_fifo(ledger, matcher, clock):
        ledger.add_commitment("ST-32-S-30-STA", "order-1", 1001)
"""

import sys
import os
from pathlib import Path
from typing import Generator

# Set environment variables BEFORE any imports to ensure they take effect
os.environ.setdefault("STORE_BACKEND", "memory")
os.environ.setdefault("LOG_JSON", "false")

backend_src = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(backend_src))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from config import Settings
from database import create_db_engine, create_session_factory, init_db
from domain.assignments import AssignmentMatcher
from domain.clock import DeterministicClock
from domain.commitments import CommitmentLedger, OrderIntakeService
from domain.locks import KeyedLock
from infrastructure.repositories import (
    InMemoryStore,
    in_memory_uow_factory,
    sqlalchemy_uow_factory,
)


@pytest.fixture
def clock() -> DeterministicClock:
    return DeterministicClock()


@pytest.fixture
def locks() -> KeyedLock:
    return KeyedLock()


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def uow_factory(store):
    return in_memory_uow_factory(store)


@pytest.fixture
def ledger(uow_factory, clock, locks) -> CommitmentLedger:
    return CommitmentLedger(uow_factory, clock=clock, locks=locks)


@pytest.fixture
def matcher(uow_factory, clock, locks) -> AssignmentMatcher:
    return AssignmentMatcher(uow_factory, clock=clock, locks=locks)


@pytest.fixture
def intake(ledger) -> OrderIntakeService:
    return OrderIntakeService(ledger)


@pytest.fixture
def sql_engine() -> Generator[Engine, None, None]:
    """Fresh in-memory SQLite database per test."""
    engine = create_db_engine("sqlite://")
    init_db(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sql_session_factory(sql_engine) -> sessionmaker:
    return create_session_factory(sql_engine)


@pytest.fixture
def sql_uow_factory(sql_session_factory):
    return sqlalchemy_uow_factory(sql_session_factory)


@pytest.fixture
def sql_ledger(sql_uow_factory, clock, locks) -> CommitmentLedger:
    return CommitmentLedger(sql_uow_factory, clock=clock, locks=locks)


@pytest.fixture
def sql_matcher(sql_uow_factory, clock, locks) -> AssignmentMatcher:
    return AssignmentMatcher(sql_uow_factory, clock=clock, locks=locks)


@pytest.fixture
def test_settings() -> Settings:
    return Settings(STORE_BACKEND="memory", LOG_JSON=False, LOG_LEVEL="WARNING")


@pytest.fixture
def client(test_settings) -> Generator[TestClient, None, None]:
    """TestClient with the lifespan running (services on app.state)."""
    from main import create_app

    app = create_app(test_settings)
    with TestClient(app) as test_client:
        yield test_client
