"""
Test Configuration and Fixtures

Every test gets its own SQLite database file, so tests can open several
units of work against the same data without sharing state.
"""

from collections.abc import Generator

import pytest
from sqlalchemy.engine import Engine

from rostering.application.services import EmployeeService
from rostering.core.db import create_db_engine, get_session_factory, init_db
from rostering.infrastructure.database.unit_of_work import UnitOfWorkManager
from rostering.tests.utils.factories import (
    OTHER_TENANT_ID,
    TENANT_ID,
    TenantFactory,
    TenantSeed,
)


@pytest.fixture
def engine(tmp_path) -> Generator[Engine, None, None]:
    """Provide an engine on a fresh database with all tables created."""
    engine = create_db_engine(f"sqlite:///{tmp_path / 'rostering.db'}", echo=False)
    init_db(engine)

    yield engine

    engine.dispose()


@pytest.fixture
def uow_manager(engine) -> UnitOfWorkManager:
    return UnitOfWorkManager(get_session_factory(engine))


@pytest.fixture
def employee_service(uow_manager) -> EmployeeService:
    return EmployeeService(uow_manager)


@pytest.fixture
def tenant(uow_manager) -> TenantSeed:
    """Tenant 1, rostering in Europe/London."""
    return TenantFactory.seed(uow_manager, TENANT_ID, timezone="Europe/London")


@pytest.fixture
def other_tenant(uow_manager) -> TenantSeed:
    """Tenant 2, rostering in America/New_York."""
    return TenantFactory.seed(uow_manager, OTHER_TENANT_ID, timezone="America/New_York")
