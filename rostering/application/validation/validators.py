"""
Validation gateway for rostering entities and views.

Field rules are plain functions, one per type, that append violations to a
``ValidationContext``. Tenant rules run once the field rules pass and check
the entity as well as every entity it references.
"""

from collections.abc import Callable
from typing import Any

from rostering.application.dtos import EmployeeAvailabilityView
from rostering.domain.shared.exceptions import (
    MultipleValidationError,
    TenantMismatchError,
    ValidationError,
)
from rostering.domain.shared.validation import HEX_COLOR, ValidationContext, check_name
from rostering.models import Contract, Employee, EmployeeAvailability, Skill

FieldRule = Callable[[ValidationContext, Any], None]


def employee_rules(context: ValidationContext, employee: Employee) -> None:
    context.require("tenant_id", employee.tenant_id)
    check_name(context, employee.name)
    context.require("contract", employee.contract)
    context.check_length("short_id", employee.short_id, 1, 3)
    if context.require("color", employee.color):
        context.check_pattern(
            "color", employee.color, HEX_COLOR, "must be a #RRGGBB color"
        )


def _check_interval(context: ValidationContext, start: Any, end: Any) -> None:
    present = context.require("start_date_time", start)
    present = context.require("end_date_time", end) and present
    if present and start >= end:
        context.add_error(
            "end_date_time", end, "must be after start_date_time", "INVALID_RANGE"
        )


def availability_rules(
    context: ValidationContext, availability: EmployeeAvailability
) -> None:
    context.require("tenant_id", availability.tenant_id)
    context.require("employee", availability.employee)
    context.require("state", availability.state)
    _check_interval(context, availability.start_date_time, availability.end_date_time)


def availability_view_rules(
    context: ValidationContext, view: EmployeeAvailabilityView
) -> None:
    for field_name in ("start_date_time", "end_date_time"):
        value = getattr(view, field_name)
        if value is not None and value.tzinfo is not None:
            context.add_error(
                field_name,
                value,
                "must be a local date-time without offset",
                "NOT_LOCAL",
            )
    if not context.has_errors:
        _check_interval(context, view.start_date_time, view.end_date_time)


def skill_rules(context: ValidationContext, skill: Skill) -> None:
    context.require("tenant_id", skill.tenant_id)
    check_name(context, skill.name)


def contract_rules(context: ValidationContext, contract: Contract) -> None:
    context.require("tenant_id", contract.tenant_id)
    check_name(context, contract.name)
    for period in ("day", "week", "month", "year"):
        field_name = f"maximum_minutes_per_{period}"
        context.check_non_negative(field_name, getattr(contract, field_name))


FIELD_RULES: dict[type, FieldRule] = {
    Employee: employee_rules,
    EmployeeAvailability: availability_rules,
    EmployeeAvailabilityView: availability_view_rules,
    Skill: skill_rules,
    Contract: contract_rules,
}


class ValidationGateway:
    """
    Validates entities before they are persisted or returned.

    Usage:
        gateway = ValidationGateway()
        gateway.validate(tenant_id, employee)  # raises on any violation
    """

    def __init__(self, field_rules: dict[type, FieldRule] | None = None):
        self._field_rules = dict(FIELD_RULES if field_rules is None else field_rules)

    def violations(self, entity: Any) -> list[ValidationError]:
        """Return the field-rule violations of ``entity`` without raising."""
        rule = self._field_rules.get(type(entity))
        context = ValidationContext()
        if rule is not None:
            rule(context, entity)
        return context.errors

    def validate(self, tenant_id: int, entity: Any) -> None:
        """
        Check field rules, then tenant consistency.

        Raises:
            ValidationError: For a single field violation
            MultipleValidationError: For several field violations
            TenantMismatchError: If the entity or a referenced entity belongs
                to a tenant other than ``tenant_id``
        """
        self.validate_fields(entity)
        self.validate_tenant(tenant_id, entity)

    def validate_fields(self, entity: Any) -> None:
        """Raise the field-rule violations of ``entity``, if any."""
        errors = self.violations(entity)
        if len(errors) == 1:
            raise errors[0]
        if errors:
            raise MultipleValidationError(errors)

    def validate_tenant(self, tenant_id: int, entity: Any) -> None:
        """Raise ``TenantMismatchError`` unless everything belongs to ``tenant_id``."""
        _check_owner(tenant_id, entity)

        if isinstance(entity, Employee):
            for skill in entity.skill_proficiency_set:
                _check_owner(tenant_id, skill)
            if entity.contract is not None:
                _check_owner(tenant_id, entity.contract)
        elif isinstance(entity, EmployeeAvailability):
            if entity.employee is not None:
                _check_owner(tenant_id, entity.employee)


def _check_owner(tenant_id: int, entity: Any) -> None:
    if entity.tenant_id != tenant_id:
        raise TenantMismatchError(
            _entity_type(entity),
            getattr(entity, "id", None),
            tenant_id,
            entity.tenant_id,
        )


def _entity_type(entity: Any) -> str:
    name = type(entity).__name__
    return name[: -len("View")] if name.endswith("View") else name
