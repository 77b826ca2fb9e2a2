"""Reconciles imported employee records with the employees already stored."""

from typing import TYPE_CHECKING

from rostering.application.dtos import EmployeeView
from rostering.core.observability import IMPORTED_EMPLOYEES, get_logger
from rostering.infrastructure.database.unit_of_work import UnitOfWorkInterface
from rostering.infrastructure.importing import deduplicate_by_name
from rostering.models import Employee

if TYPE_CHECKING:
    from .employee_service import EmployeeService

logger = get_logger(__name__)


class EmployeeImportReconciler:
    """
    Merges imported employee records into a tenant's employees.

    A record whose name matches a stored employee updates that employee but
    keeps its contract; any other record creates a new employee. Records are
    written through the service's create and update paths inside the caller's
    unit of work, so one import counts as a single service operation.
    """

    def __init__(self, employee_service: "EmployeeService"):
        self._service = employee_service

    def reconcile(
        self,
        uow: UnitOfWorkInterface,
        tenant_id: int,
        records: list[EmployeeView],
    ) -> list[Employee]:
        unique_records = deduplicate_by_name(records)
        skipped = len(records) - len(unique_records)
        created = updated = 0

        for record in unique_records:
            self._service._convert_employee(uow, tenant_id, record)

            existing = uow.employees.find_by_name(tenant_id, record.name)
            if existing is not None:
                record = record.model_copy(
                    update={
                        "contract_id": existing.contract_id,
                        "id": existing.id,
                        "version": existing.version,
                    }
                )
                self._service._update_employee(uow, tenant_id, record)
                updated += 1
            else:
                self._service._create_employee(uow, tenant_id, record)
                created += 1

        IMPORTED_EMPLOYEES.labels(outcome="created").inc(created)
        IMPORTED_EMPLOYEES.labels(outcome="updated").inc(updated)
        IMPORTED_EMPLOYEES.labels(outcome="skipped").inc(skipped)
        logger.info(
            "Employee list imported",
            tenant_id=tenant_id,
            created=created,
            updated=updated,
            skipped=skipped,
        )

        return uow.employees.find_all_by_tenant_id(tenant_id)
