"""
Unit of work over one SQLModel session.

A unit of work owns the session shared by the rostering repositories for one
service operation: it commits when the block exits normally, rolls back when
it raises, and maps a failed version check at commit to ``ConcurrencyError``.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.orm.exc import StaleDataError
from sqlmodel import Session

from rostering.core.db import get_session_factory
from rostering.core.observability import get_logger
from rostering.domain.shared.exceptions import ConcurrencyError, DatabaseError

from .repositories import (
    ContractRepository,
    EmployeeAvailabilityRepository,
    EmployeeRepository,
    RosterStateRepository,
    SkillRepository,
)

logger = get_logger(__name__)


class UnitOfWorkInterface(ABC):
    """Transaction boundary exposing the rostering repositories."""

    employees: EmployeeRepository
    employee_availabilities: EmployeeAvailabilityRepository
    skills: SkillRepository
    contracts: ContractRepository
    roster_states: RosterStateRepository

    @abstractmethod
    def __enter__(self):
        pass

    @abstractmethod
    def __exit__(self, exc_type, exc_val, exc_tb):
        pass

    @abstractmethod
    def commit(self) -> None:
        pass

    @abstractmethod
    def rollback(self) -> None:
        pass


class SqlModelUnitOfWork(UnitOfWorkInterface):
    """
    Unit of work backed by a SQLModel session.

    Repositories are bound to the session on entry and must not be used once
    the block has exited.
    """

    def __init__(self, session_factory: sessionmaker | None = None):
        """
        Args:
            session_factory: Factory for the session, defaults to the shared
                factory bound to the configured engine
        """
        self._session_factory = session_factory
        self._session: Session | None = None

    def __enter__(self):
        session_factory = self._session_factory or get_session_factory()
        self._session = session_factory()

        self.employees = EmployeeRepository(self._session)
        self.employee_availabilities = EmployeeAvailabilityRepository(self._session)
        self.skills = SkillRepository(self._session)
        self.contracts = ContractRepository(self._session)
        self.roster_states = RosterStateRepository(self._session)

        logger.debug("Unit of work started")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        try:
            if exc_type is not None:
                self.rollback()
                logger.debug(
                    "Unit of work rolled back", error_type=exc_type.__name__
                )
            else:
                self.commit()
                logger.debug("Unit of work committed")
        finally:
            if self._session:
                self._session.close()
                self._session = None

    def commit(self) -> None:
        """
        Commit the current transaction.

        Raises:
            ConcurrencyError: If a versioned row was changed by another transaction
            DatabaseError: If commit fails
        """
        if not self._session:
            raise DatabaseError("No active session to commit")

        try:
            self._session.commit()
        except StaleDataError as e:
            self.rollback()
            raise ConcurrencyError("record", None) from e
        except SQLAlchemyError as e:
            self.rollback()
            raise DatabaseError(f"Failed to commit transaction: {str(e)}") from e

    def rollback(self) -> None:
        if not self._session:
            raise DatabaseError("No active session to rollback")

        try:
            self._session.rollback()
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to rollback transaction: {str(e)}") from e

    @property
    def session(self) -> Session:
        """
        Session of the open unit of work.

        Raises:
            DatabaseError: If the unit of work is not open
        """
        if not self._session:
            raise DatabaseError("No active database session")
        return self._session


class UnitOfWorkManager:
    """Creates units of work sharing one session factory."""

    def __init__(self, session_factory: sessionmaker | None = None):
        self._session_factory = session_factory

    def create_unit_of_work(self) -> UnitOfWorkInterface:
        return SqlModelUnitOfWork(self._session_factory)

    @contextmanager
    def transaction(self) -> Iterator[UnitOfWorkInterface]:
        """
        Run a block in a new unit of work.

        Usage:
            with uow_manager.transaction() as uow:
                employee = uow.employees.find_by_id(employee_id)
                employee.name = new_name
                uow.employees.save(employee, expected_version=version)
        """
        with self.create_unit_of_work() as uow:
            yield uow


_uow_manager: UnitOfWorkManager | None = None


def get_unit_of_work_manager() -> UnitOfWorkManager:
    """Return the process-wide manager bound to the configured engine."""
    global _uow_manager
    if _uow_manager is None:
        _uow_manager = UnitOfWorkManager()
    return _uow_manager
