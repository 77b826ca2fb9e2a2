"""
Employee Application Service

Orchestrates employee and employee availability use cases: conversion from
views, tenant-scoped CRUD and bulk import from an employee list workbook.
Each public operation runs in one unit of work.
"""

from typing import BinaryIO
from zoneinfo import ZoneInfo

from sqlalchemy.orm.attributes import flag_modified

from rostering.application.dtos import EmployeeAvailabilityView, EmployeeView
from rostering.core.observability import get_logger, monitor_operation
from rostering.domain.shared.exceptions import (
    EntityNotFoundError,
    TenantImmutabilityError,
    ValidationError,
)
from rostering.infrastructure.database.unit_of_work import UnitOfWorkInterface
from rostering.infrastructure.importing import EmployeeListXlsxReader
from rostering.models import Employee, EmployeeAvailability

from .base_service import ApplicationServiceBase
from .employee_import import EmployeeImportReconciler

logger = get_logger(__name__)


class EmployeeService(ApplicationServiceBase):
    """
    Application service for employee and availability management.

    Usage:
        service = EmployeeService()
        employee = service.create_employee(tenant_id, EmployeeView(...))
    """

    def __init__(
        self,
        uow_manager=None,
        validation_gateway=None,
        employee_list_reader: EmployeeListXlsxReader | None = None,
    ):
        super().__init__(uow_manager, validation_gateway)
        self._employee_list_reader = employee_list_reader or EmployeeListXlsxReader()
        self._import_reconciler = EmployeeImportReconciler(self)

    # ************************************************************************
    # Employee
    # ************************************************************************

    @monitor_operation("convert_from_employee_view")
    def convert_from_employee_view(
        self,
        tenant_id: int,
        view: EmployeeView,
        uow: UnitOfWorkInterface | None = None,
    ) -> Employee:
        """
        Build a validated, transient employee from a view.

        Args:
            tenant_id: Tenant of the caller
            view: Employee view; identity and version are copied as given

        Returns:
            Employee not attached to any session

        Raises:
            EntityNotFoundError: If the contract or a skill does not exist
            ValidationError: If the employee breaks a field rule
            TenantMismatchError: If the employee, its contract or a skill
                belongs to another tenant
        """
        with self._unit_of_work(uow) as uow:
            return self._convert_employee(uow, tenant_id, view)

    @monitor_operation("get_employee_list")
    def get_employee_list(
        self, tenant_id: int, uow: UnitOfWorkInterface | None = None
    ) -> list[Employee]:
        with self._unit_of_work(uow) as uow:
            return uow.employees.find_all_by_tenant_id(tenant_id)

    @monitor_operation("get_employee")
    def get_employee(
        self, tenant_id: int, id: int, uow: UnitOfWorkInterface | None = None
    ) -> Employee:
        """
        Get one employee of a tenant.

        Raises:
            EntityNotFoundError: If no employee has this id
            TenantMismatchError: If the employee belongs to another tenant
        """
        with self._unit_of_work(uow) as uow:
            employee = uow.employees.find_by_id(id)
            if employee is None:
                raise EntityNotFoundError("Employee", id)

            self.validate_bean(tenant_id, employee)
            return employee

    @monitor_operation("delete_employee")
    def delete_employee(
        self, tenant_id: int, id: int, uow: UnitOfWorkInterface | None = None
    ) -> bool:
        """
        Delete an employee together with its availability records.

        Returns:
            False if no employee has this id, True once deleted

        Raises:
            TenantMismatchError: If the employee belongs to another tenant
        """
        with self._unit_of_work(uow) as uow:
            employee = uow.employees.find_by_id(id)
            if employee is None:
                return False

            self.validate_bean(tenant_id, employee)
            removed = uow.employee_availabilities.delete_all_by_employee_id(id)
            uow.employees.delete_by_id(id)

        logger.info(
            "Employee deleted",
            tenant_id=tenant_id,
            employee_id=id,
            availabilities_deleted=removed,
        )
        return True

    @monitor_operation("create_employee")
    def create_employee(
        self,
        tenant_id: int,
        view: EmployeeView,
        uow: UnitOfWorkInterface | None = None,
    ) -> Employee:
        """
        Create an employee.

        Raises:
            ValidationError: If the view carries an id, or a field rule fails
            EntityNotFoundError: If the contract or a skill does not exist
            TenantMismatchError: If a referenced entity belongs to another tenant
        """
        if view.id is not None:
            raise ValidationError(
                "id", view.id, "must be null when creating", "ID_NOT_ALLOWED"
            )

        with self._unit_of_work(uow) as uow:
            employee = self._create_employee(uow, tenant_id, view)

        logger.info(
            "Employee created", tenant_id=tenant_id, employee_id=employee.id
        )
        return employee

    @monitor_operation("update_employee")
    def update_employee(
        self,
        tenant_id: int,
        view: EmployeeView,
        uow: UnitOfWorkInterface | None = None,
    ) -> Employee:
        """
        Update a stored employee in place.

        The view's ``version`` must match the stored version.

        Raises:
            ValidationError: If id or version is missing, or a field rule fails
            EntityNotFoundError: If the employee, contract or a skill does not exist
            TenantImmutabilityError: If the view moves the employee to another tenant
            TenantMismatchError: If a referenced entity belongs to another tenant
            ConcurrencyError: If the employee changed since ``view.version``
        """
        _require_identity(view)

        with self._unit_of_work(uow) as uow:
            employee = self._update_employee(uow, tenant_id, view)

        logger.info(
            "Employee updated",
            tenant_id=tenant_id,
            employee_id=employee.id,
            version=employee.version,
        )
        return employee

    @monitor_operation("import_employees_from_excel")
    def import_employees_from_excel(
        self,
        tenant_id: int,
        stream: BinaryIO,
        uow: UnitOfWorkInterface | None = None,
    ) -> list[Employee]:
        """
        Create or update employees from an ``.xlsx`` employee list.

        Rows are matched to stored employees by name; stored contracts are
        kept. Re-importing the same file changes nothing.

        Returns:
            All employees of the tenant after the import

        Raises:
            ImportFormatError: If the workbook cannot be read; nothing is written
        """
        with self._unit_of_work(uow) as uow:
            records = self._employee_list_reader.get_employee_list_from_excel_file(
                uow, tenant_id, stream
            )
            return self._import_reconciler.reconcile(uow, tenant_id, records)

    def _create_employee(
        self, uow: UnitOfWorkInterface, tenant_id: int, view: EmployeeView
    ) -> Employee:
        employee = self._convert_employee(uow, tenant_id, view)
        return uow.employees.save(employee)

    def _update_employee(
        self, uow: UnitOfWorkInterface, tenant_id: int, view: EmployeeView
    ) -> Employee:
        new_employee = self._build_employee(uow, view)
        old_employee = uow.employees.find_by_id(view.id)
        if old_employee is None:
            raise EntityNotFoundError("Employee", view.id)

        if old_employee.tenant_id != new_employee.tenant_id:
            raise TenantImmutabilityError(
                "Employee",
                old_employee.id,
                old_employee.tenant_id,
                new_employee.tenant_id,
            )
        self.validate_bean(tenant_id, new_employee)

        if old_employee.skill_proficiency_ids != new_employee.skill_proficiency_ids:
            # Link rows alone never UPDATE the employee row or its version
            flag_modified(old_employee, "name")
        old_employee.name = new_employee.name
        old_employee.skill_proficiency_set = list(new_employee.skill_proficiency_set)
        old_employee.contract = new_employee.contract
        old_employee.contract_id = new_employee.contract_id
        old_employee.short_id = new_employee.short_id
        old_employee.color = new_employee.color
        return uow.employees.save(old_employee, expected_version=view.version)

    def _convert_employee(
        self, uow: UnitOfWorkInterface, tenant_id: int, view: EmployeeView
    ) -> Employee:
        employee = self._build_employee(uow, view)
        self.validate_bean(tenant_id, employee)
        employee.id = view.id
        employee.version = view.version
        return employee

    def _build_employee(self, uow: UnitOfWorkInterface, view: EmployeeView) -> Employee:
        """Resolve the view's references into a transient employee."""
        contract = None
        if view.contract_id is not None:
            contract = uow.contracts.find_by_id(view.contract_id)
            if contract is None:
                raise EntityNotFoundError("Contract", view.contract_id)

        skill_ids = sorted(set(view.skill_proficiency_ids))
        skills = uow.skills.find_all_by_ids(skill_ids)
        found_ids = {skill.id for skill in skills}
        for skill_id in skill_ids:
            if skill_id not in found_ids:
                raise EntityNotFoundError("Skill", skill_id)

        return Employee(
            tenant_id=view.tenant_id,
            name=view.name,
            contract_id=view.contract_id,
            contract=contract,
            skill_proficiency_set=skills,
            short_id=view.short_id,
            color=view.color,
        )

    # ************************************************************************
    # EmployeeAvailability
    # ************************************************************************

    @monitor_operation("convert_from_employee_availability_view")
    def convert_from_employee_availability_view(
        self,
        tenant_id: int,
        view: EmployeeAvailabilityView,
        uow: UnitOfWorkInterface | None = None,
    ) -> EmployeeAvailability:
        """
        Build a transient availability, placing the view's local times in the
        tenant's roster time zone.

        Raises:
            ValidationError: If the view's times are not local or not ordered
            EntityNotFoundError: If the employee or the tenant's roster state
                does not exist
            TenantMismatchError: If the employee belongs to another tenant
        """
        with self._unit_of_work(uow) as uow:
            return self._convert_availability(uow, tenant_id, view)

    @monitor_operation("get_employee_availability")
    def get_employee_availability(
        self, tenant_id: int, id: int, uow: UnitOfWorkInterface | None = None
    ) -> EmployeeAvailabilityView:
        with self._unit_of_work(uow) as uow:
            availability = uow.employee_availabilities.find_by_id(id)
            if availability is None:
                raise EntityNotFoundError("EmployeeAvailability", id)

            self.validate_bean(tenant_id, availability)
            zone = self._roster_zone(uow, tenant_id)
            return EmployeeAvailabilityView.from_domain(zone, availability)

    @monitor_operation("create_employee_availability")
    def create_employee_availability(
        self,
        tenant_id: int,
        view: EmployeeAvailabilityView,
        uow: UnitOfWorkInterface | None = None,
    ) -> EmployeeAvailabilityView:
        """
        Create an availability record.

        Returns:
            The stored record as a view, with identity and initial version
        """
        if view.id is not None:
            raise ValidationError(
                "id", view.id, "must be null when creating", "ID_NOT_ALLOWED"
            )

        with self._unit_of_work(uow) as uow:
            availability = self._convert_availability(uow, tenant_id, view)
            self.validate_bean(tenant_id, availability)
            availability = uow.employee_availabilities.save(availability)

            zone = self._roster_zone(uow, tenant_id)
            created = EmployeeAvailabilityView.from_domain(zone, availability)

        logger.info(
            "Employee availability created",
            tenant_id=tenant_id,
            availability_id=created.id,
            employee_id=created.employee_id,
        )
        return created

    @monitor_operation("update_employee_availability")
    def update_employee_availability(
        self,
        tenant_id: int,
        view: EmployeeAvailabilityView,
        uow: UnitOfWorkInterface | None = None,
    ) -> EmployeeAvailabilityView:
        """
        Update a stored availability record in place.

        The record is flushed before it is projected so the returned view
        carries the advanced version.

        Raises:
            ValidationError: If id or version is missing, or a field rule fails
            EntityNotFoundError: If the record, employee or roster state does not exist
            TenantImmutabilityError: If the record belongs to another tenant
            ConcurrencyError: If the record changed since ``view.version``
        """
        _require_identity(view)

        with self._unit_of_work(uow) as uow:
            new_availability = self._convert_availability(uow, tenant_id, view)
            old_availability = uow.employee_availabilities.find_by_id(view.id)
            if old_availability is None:
                raise EntityNotFoundError("EmployeeAvailability", view.id)

            if old_availability.tenant_id != new_availability.tenant_id:
                raise TenantImmutabilityError(
                    "EmployeeAvailability",
                    old_availability.id,
                    old_availability.tenant_id,
                    new_availability.tenant_id,
                )
            self.validate_bean(tenant_id, new_availability)

            old_availability.employee = new_availability.employee
            old_availability.employee_id = new_availability.employee_id
            old_availability.start_date_time = new_availability.start_date_time
            old_availability.end_date_time = new_availability.end_date_time
            old_availability.state = new_availability.state
            availability = uow.employee_availabilities.save_and_flush(
                old_availability, expected_version=view.version
            )

            zone = self._roster_zone(uow, tenant_id)
            updated = EmployeeAvailabilityView.from_domain(zone, availability)

        logger.info(
            "Employee availability updated",
            tenant_id=tenant_id,
            availability_id=updated.id,
            version=updated.version,
        )
        return updated

    @monitor_operation("delete_employee_availability")
    def delete_employee_availability(
        self, tenant_id: int, id: int, uow: UnitOfWorkInterface | None = None
    ) -> bool:
        with self._unit_of_work(uow) as uow:
            availability = uow.employee_availabilities.find_by_id(id)
            if availability is None:
                return False

            self.validate_bean(tenant_id, availability)
            uow.employee_availabilities.delete_by_id(id)

        logger.info(
            "Employee availability deleted", tenant_id=tenant_id, availability_id=id
        )
        return True

    def _convert_availability(
        self,
        uow: UnitOfWorkInterface,
        tenant_id: int,
        view: EmployeeAvailabilityView,
    ) -> EmployeeAvailability:
        self._validation_gateway.validate_fields(view)

        employee = uow.employees.find_by_id(view.employee_id)
        if employee is None:
            raise EntityNotFoundError("Employee", view.employee_id)
        self.validate_bean(tenant_id, employee)

        zone = self._roster_zone(uow, tenant_id)
        return view.to_domain(zone, employee)

    def _roster_zone(self, uow: UnitOfWorkInterface, tenant_id: int) -> ZoneInfo:
        roster_state = uow.roster_states.find_by_tenant_id(tenant_id)
        if roster_state is None:
            raise EntityNotFoundError("RosterState", tenant_id)
        return roster_state.zone_info


def _require_identity(view: EmployeeView | EmployeeAvailabilityView) -> None:
    if view.id is None:
        raise ValidationError("id", None, "must not be null when updating", "REQUIRED")
    if view.version is None:
        raise ValidationError(
            "version", None, "must not be null when updating", "REQUIRED"
        )
