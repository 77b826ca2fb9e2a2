"""Tests for field rules and tenant checks of the validation gateway."""

from datetime import datetime, timezone

import pytest

from rostering.application.dtos import EmployeeAvailabilityView
from rostering.application.validation import ValidationGateway
from rostering.domain.shared.exceptions import (
    MultipleValidationError,
    TenantMismatchError,
    ValidationError,
)
from rostering.models import Contract, Employee, EmployeeAvailability, Skill


@pytest.fixture
def gateway():
    return ValidationGateway()


def _contract(tenant_id=1):
    return Contract(id=10, tenant_id=tenant_id, name="Full Time")


def _employee(**overrides):
    fields = {
        "id": 1,
        "tenant_id": 1,
        "name": "Amy Cole",
        "contract": _contract(),
        "skill_proficiency_set": [Skill(id=20, tenant_id=1, name="Nursing")],
        "short_id": "AC",
        "color": "#A1C4FD",
    }
    fields.update(overrides)
    return Employee(**fields)


class TestEmployeeRules:
    def test_valid_employee(self, gateway):
        gateway.validate(1, _employee())
        assert gateway.violations(_employee()) == []

    def test_single_violation_is_raised_as_is(self, gateway):
        with pytest.raises(ValidationError) as exc_info:
            gateway.validate(1, _employee(name=" Amy"))

        assert not isinstance(exc_info.value, MultipleValidationError)
        assert exc_info.value.field_name == "name"

    def test_all_violations_are_reported(self, gateway):
        employee = _employee(name="", contract=None, short_id="ABCD", color="blue")

        with pytest.raises(MultipleValidationError) as exc_info:
            gateway.validate(1, employee)

        fields = [error.field_name for error in exc_info.value.validation_errors]
        assert fields == ["name", "contract", "short_id", "color"]

    def test_violations_do_not_raise(self, gateway):
        violations = gateway.violations(_employee(color="#12345"))

        assert [v.field_name for v in violations] == ["color"]


class TestTenantRules:
    def test_employee_of_other_tenant(self, gateway):
        with pytest.raises(TenantMismatchError) as exc_info:
            gateway.validate(2, _employee())

        assert exc_info.value.entity_type == "Employee"
        assert exc_info.value.actual_tenant_id == 1

    def test_skill_of_other_tenant(self, gateway):
        employee = _employee(
            skill_proficiency_set=[Skill(id=21, tenant_id=2, name="Triage")]
        )

        with pytest.raises(TenantMismatchError) as exc_info:
            gateway.validate(1, employee)

        assert exc_info.value.entity_type == "Skill"
        assert exc_info.value.entity_id == 21

    def test_contract_of_other_tenant(self, gateway):
        with pytest.raises(TenantMismatchError) as exc_info:
            gateway.validate(1, _employee(contract=_contract(tenant_id=2)))

        assert exc_info.value.entity_type == "Contract"

    def test_field_rules_run_before_tenant_rules(self, gateway):
        with pytest.raises(ValidationError):
            gateway.validate(2, _employee(short_id=""))

    def test_availability_employee_of_other_tenant(self, gateway):
        availability = EmployeeAvailability(
            id=5,
            tenant_id=1,
            employee=_employee(tenant_id=2),
            start_date_time=datetime(2024, 3, 4, 9, tzinfo=timezone.utc),
            end_date_time=datetime(2024, 3, 4, 17, tzinfo=timezone.utc),
        )

        with pytest.raises(TenantMismatchError) as exc_info:
            gateway.validate(1, availability)

        assert exc_info.value.entity_type == "Employee"


class TestAvailabilityRules:
    def _view(self, start, end):
        return EmployeeAvailabilityView(
            tenant_id=1, employee_id=1, start_date_time=start, end_date_time=end
        )

    def test_end_must_follow_start(self, gateway):
        view = self._view(datetime(2024, 3, 4, 17), datetime(2024, 3, 4, 9))

        [violation] = gateway.violations(view)

        assert violation.field_name == "end_date_time"
        assert violation.error_code == "INVALID_RANGE"

    def test_view_times_must_be_local(self, gateway):
        view = self._view(
            datetime(2024, 3, 4, 9, tzinfo=timezone.utc), datetime(2024, 3, 4, 17)
        )

        [violation] = gateway.violations(view)

        assert violation.error_code == "NOT_LOCAL"

    def test_contract_limits_must_not_be_negative(self, gateway):
        contract = Contract(tenant_id=1, name="Odd", maximum_minutes_per_week=-1)

        [violation] = gateway.violations(contract)

        assert violation.field_name == "maximum_minutes_per_week"
