"""
Employee Service Tests

Covers conversion, tenant-scoped CRUD, tenant immutability and optimistic
locking of employees.
"""

import pytest

from rostering.domain.shared.exceptions import (
    ConcurrencyError,
    EntityNotFoundError,
    ErrorType,
    TenantImmutabilityError,
    TenantMismatchError,
    ValidationError,
)
from rostering.tests.utils.factories import (
    OTHER_TENANT_ID,
    TENANT_ID,
    AvailabilityViewFactory,
    EmployeeViewFactory,
)


def _update_view(tenant, employee, **overrides):
    fields = {
        "name": employee.name,
        "contract_id": employee.contract_id,
        "skill_ids": employee.skill_proficiency_ids,
        "short_id": employee.short_id,
        "color": employee.color,
        "id": employee.id,
        "version": employee.version,
    }
    fields.update(overrides)
    return EmployeeViewFactory.create(tenant, **fields)


class TestConvertFromEmployeeView:
    def test_resolves_references(self, employee_service, tenant):
        view = EmployeeViewFactory.create(tenant, skill_ids=tenant.skill_ids, id=5, version=3)

        employee = employee_service.convert_from_employee_view(TENANT_ID, view)

        assert employee.contract.id == tenant.contract.id
        assert employee.skill_proficiency_ids == sorted(tenant.skill_ids)
        assert employee.id == 5
        assert employee.version == 3

    def test_missing_contract(self, employee_service, tenant):
        view = EmployeeViewFactory.create(tenant, contract_id=9999)

        with pytest.raises(EntityNotFoundError) as exc_info:
            employee_service.convert_from_employee_view(TENANT_ID, view)

        assert exc_info.value.entity_type == "Contract"

    def test_missing_skill(self, employee_service, tenant):
        view = EmployeeViewFactory.create(tenant, skill_ids=[tenant.skills[0].id, 9999])

        with pytest.raises(EntityNotFoundError) as exc_info:
            employee_service.convert_from_employee_view(TENANT_ID, view)

        assert exc_info.value.lookup == 9999

    def test_skill_of_other_tenant(self, employee_service, tenant, other_tenant):
        view = EmployeeViewFactory.create(tenant, skill_ids=other_tenant.skill_ids[:1])

        with pytest.raises(TenantMismatchError):
            employee_service.convert_from_employee_view(TENANT_ID, view)


class TestEmployeeCrud:
    def test_create_and_get(self, employee_service, tenant):
        created = employee_service.create_employee(
            TENANT_ID, EmployeeViewFactory.create(tenant, skill_ids=tenant.skill_ids)
        )

        assert created.id is not None
        assert created.version == 1

        fetched = employee_service.get_employee(TENANT_ID, created.id)
        assert fetched.name == "Amy Cole"
        assert fetched.contract.name == "Full Time"
        assert fetched.skill_proficiency_ids == sorted(tenant.skill_ids)

    def test_get_from_other_tenant(self, employee_service, tenant, other_tenant):
        created = employee_service.create_employee(
            TENANT_ID, EmployeeViewFactory.create(tenant)
        )

        with pytest.raises(TenantMismatchError) as exc_info:
            employee_service.get_employee(OTHER_TENANT_ID, created.id)

        assert exc_info.value.error_type is ErrorType.TENANT_MISMATCH

    def test_get_missing(self, employee_service, tenant):
        # Existence is checked before tenancy
        with pytest.raises(EntityNotFoundError):
            employee_service.get_employee(OTHER_TENANT_ID, 9999)

    def test_create_rejects_identity(self, employee_service, tenant):
        with pytest.raises(ValidationError) as exc_info:
            employee_service.create_employee(
                TENANT_ID, EmployeeViewFactory.create(tenant, id=1)
            )

        assert exc_info.value.field_name == "id"

    def test_create_invalid_fields(self, employee_service, tenant):
        view = EmployeeViewFactory.create(tenant, name=" Amy", color="teal")

        with pytest.raises(ValidationError):
            employee_service.create_employee(TENANT_ID, view)

        assert employee_service.get_employee_list(TENANT_ID) == []

    def test_create_for_other_tenant(self, employee_service, tenant, other_tenant):
        view = EmployeeViewFactory.create(tenant, tenant_id=OTHER_TENANT_ID)

        with pytest.raises(TenantMismatchError):
            employee_service.create_employee(TENANT_ID, view)

    def test_get_employee_list_is_tenant_scoped(
        self, employee_service, tenant, other_tenant
    ):
        employee_service.create_employee(TENANT_ID, EmployeeViewFactory.create(tenant))
        employee_service.create_employee(
            TENANT_ID, EmployeeViewFactory.create(tenant, name="Beth Fox", short_id="BF")
        )
        employee_service.create_employee(
            OTHER_TENANT_ID, EmployeeViewFactory.create(other_tenant, name="Cara Hu")
        )

        names = [e.name for e in employee_service.get_employee_list(TENANT_ID)]

        assert names == ["Amy Cole", "Beth Fox"]


class TestUpdateEmployee:
    def test_update_copies_fields_and_advances_version(self, employee_service, tenant):
        created = employee_service.create_employee(
            TENANT_ID, EmployeeViewFactory.create(tenant)
        )
        view = _update_view(
            tenant,
            created,
            name="Amy Cole-Hart",
            contract_id=tenant.other_contract.id,
            skill_ids=tenant.skill_ids[1:],
            short_id="ACH",
            color="#FDCB6E",
        )

        updated = employee_service.update_employee(TENANT_ID, view)

        assert updated.id == created.id
        assert updated.version == 2
        stored = employee_service.get_employee(TENANT_ID, created.id)
        assert stored.name == "Amy Cole-Hart"
        assert stored.contract.id == tenant.other_contract.id
        assert stored.skill_proficiency_ids == sorted(tenant.skill_ids[1:])
        assert stored.short_id == "ACH"
        assert stored.color == "#FDCB6E"

    def test_update_requires_identity_and_version(self, employee_service, tenant):
        created = employee_service.create_employee(
            TENANT_ID, EmployeeViewFactory.create(tenant)
        )

        with pytest.raises(ValidationError) as exc_info:
            employee_service.update_employee(
                TENANT_ID, _update_view(tenant, created, version=None)
            )
        assert exc_info.value.field_name == "version"

        with pytest.raises(ValidationError) as exc_info:
            employee_service.update_employee(
                TENANT_ID, _update_view(tenant, created, id=None)
            )
        assert exc_info.value.field_name == "id"

    def test_update_missing(self, employee_service, tenant):
        view = EmployeeViewFactory.create(tenant, id=9999, version=1)

        with pytest.raises(EntityNotFoundError):
            employee_service.update_employee(TENANT_ID, view)

    def test_tenant_cannot_change(self, employee_service, tenant, other_tenant):
        created = employee_service.create_employee(
            TENANT_ID, EmployeeViewFactory.create(tenant)
        )
        view = _update_view(
            tenant, created, name="Moved", tenant_id=OTHER_TENANT_ID, skill_ids=[]
        )

        with pytest.raises(TenantImmutabilityError) as exc_info:
            employee_service.update_employee(OTHER_TENANT_ID, view)

        assert exc_info.value.stored_tenant_id == TENANT_ID
        stored = employee_service.get_employee(TENANT_ID, created.id)
        assert stored.name == "Amy Cole"
        assert stored.version == 1

    def test_second_update_from_same_version_conflicts(self, employee_service, tenant):
        created = employee_service.create_employee(
            TENANT_ID, EmployeeViewFactory.create(tenant)
        )

        employee_service.update_employee(
            TENANT_ID, _update_view(tenant, created, name="First")
        )
        with pytest.raises(ConcurrencyError) as exc_info:
            employee_service.update_employee(
                TENANT_ID, _update_view(tenant, created, name="Second")
            )

        assert exc_info.value.error_type is ErrorType.CONCURRENCY
        assert employee_service.get_employee(TENANT_ID, created.id).name == "First"

    def test_skill_only_update_advances_version(self, employee_service, tenant):
        created = employee_service.create_employee(
            TENANT_ID, EmployeeViewFactory.create(tenant)
        )

        updated = employee_service.update_employee(
            TENANT_ID, _update_view(tenant, created, skill_ids=[tenant.skill_ids[1]])
        )
        assert updated.version == 2

        with pytest.raises(ConcurrencyError):
            employee_service.update_employee(
                TENANT_ID,
                _update_view(tenant, created, skill_ids=[tenant.skill_ids[2]]),
            )

        stored = employee_service.get_employee(TENANT_ID, created.id)
        assert stored.skill_proficiency_ids == [tenant.skill_ids[1]]
        assert stored.version == 2

    def test_unchanged_update_keeps_version(self, employee_service, tenant):
        created = employee_service.create_employee(
            TENANT_ID, EmployeeViewFactory.create(tenant)
        )

        updated = employee_service.update_employee(
            TENANT_ID, _update_view(tenant, created)
        )

        assert updated.version == 1


class TestDeleteEmployee:
    def test_delete(self, employee_service, tenant):
        created = employee_service.create_employee(
            TENANT_ID, EmployeeViewFactory.create(tenant)
        )

        assert employee_service.delete_employee(TENANT_ID, created.id) is True

        with pytest.raises(EntityNotFoundError):
            employee_service.get_employee(TENANT_ID, created.id)

    def test_delete_missing(self, employee_service, tenant):
        assert employee_service.delete_employee(TENANT_ID, 9999) is False

    def test_delete_from_other_tenant(self, employee_service, tenant, other_tenant):
        created = employee_service.create_employee(
            TENANT_ID, EmployeeViewFactory.create(tenant)
        )

        with pytest.raises(TenantMismatchError):
            employee_service.delete_employee(OTHER_TENANT_ID, created.id)

        assert employee_service.get_employee(TENANT_ID, created.id).id == created.id

    def test_delete_removes_availabilities(self, employee_service, tenant):
        created = employee_service.create_employee(
            TENANT_ID, EmployeeViewFactory.create(tenant)
        )
        availability = employee_service.create_employee_availability(
            TENANT_ID, AvailabilityViewFactory.create(TENANT_ID, created.id)
        )

        employee_service.delete_employee(TENANT_ID, created.id)

        with pytest.raises(EntityNotFoundError):
            employee_service.get_employee_availability(TENANT_ID, availability.id)


class TestUnitOfWorkComposition:
    def test_operations_join_a_callers_unit_of_work(
        self, employee_service, uow_manager, tenant
    ):
        with pytest.raises(RuntimeError):
            with uow_manager.transaction() as uow:
                employee_service.create_employee(
                    TENANT_ID, EmployeeViewFactory.create(tenant), uow=uow
                )
                assert len(employee_service.get_employee_list(TENANT_ID, uow=uow)) == 1
                raise RuntimeError("abort")

        assert employee_service.get_employee_list(TENANT_ID) == []
