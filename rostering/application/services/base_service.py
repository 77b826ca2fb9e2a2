"""
Base application service providing common functionality.

This module provides a base class for all application services, including
bean validation through the validation gateway and transaction management.
"""

from abc import ABC
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from rostering.application.validation import ValidationGateway
from rostering.infrastructure.database.unit_of_work import (
    UnitOfWorkInterface,
    UnitOfWorkManager,
    get_unit_of_work_manager,
)


class ApplicationServiceBase(ABC):
    """
    Base class for application services.

    Every public operation runs in one unit of work. Operations accept an
    optional ``uow`` so a caller can compose several of them into a single
    transaction.
    """

    def __init__(
        self,
        uow_manager: UnitOfWorkManager | None = None,
        validation_gateway: ValidationGateway | None = None,
    ):
        """
        Initialize the application service.

        Args:
            uow_manager: Manager creating unit of work instances, defaults to
                the globally configured one
            validation_gateway: Gateway used to validate entities
        """
        self._uow_manager = uow_manager or get_unit_of_work_manager()
        self._validation_gateway = validation_gateway or ValidationGateway()

    def validate_bean(self, tenant_id: int, entity: Any) -> None:
        """
        Validate an entity for the given tenant.

        Raises:
            ValidationError: If field rules fail
            TenantMismatchError: If the entity belongs to another tenant
        """
        self._validation_gateway.validate(tenant_id, entity)

    @contextmanager
    def transaction(self) -> Iterator[UnitOfWorkInterface]:
        """Open a new unit of work."""
        with self._uow_manager.transaction() as uow:
            yield uow

    @contextmanager
    def _unit_of_work(
        self, uow: UnitOfWorkInterface | None = None
    ) -> Iterator[UnitOfWorkInterface]:
        """Join ``uow`` when given, otherwise run in a new unit of work."""
        if uow is not None:
            yield uow
        else:
            with self.transaction() as new_uow:
                yield new_uow
