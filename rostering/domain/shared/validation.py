"""
Field-level validation utilities.

Rules append to a ``ValidationContext`` instead of raising, so a whole entity
can be checked in one pass and every violation reported together.
"""

import re
from typing import Any

from .exceptions import ValidationError

NO_SURROUNDING_WHITESPACE = re.compile(r"^(?!\s).*(?<!\s)$", re.DOTALL)
HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")


class ValidationContext:
    """Context collecting validation errors for one entity."""

    def __init__(self) -> None:
        self.errors: list[ValidationError] = []

    def add_error(
        self, field_name: str, value: Any, message: str, error_code: str | None = None
    ) -> None:
        """Add validation error."""
        self.errors.append(ValidationError(field_name, value, message, error_code))

    @property
    def has_errors(self) -> bool:
        """Check if context has validation errors."""
        return len(self.errors) > 0

    def require(self, field_name: str, value: Any) -> bool:
        """Record a violation if ``value`` is missing; return whether it is present."""
        if value is None:
            self.add_error(field_name, value, "must not be null", "REQUIRED")
            return False
        return True

    def check_length(
        self, field_name: str, value: str | None, min_length: int, max_length: int
    ) -> None:
        if not self.require(field_name, value):
            return
        if not min_length <= len(value) <= max_length:
            self.add_error(
                field_name,
                value,
                f"size must be between {min_length} and {max_length}",
                "INVALID_LENGTH",
            )

    def check_pattern(
        self,
        field_name: str,
        value: str | None,
        pattern: re.Pattern[str],
        message: str,
    ) -> None:
        if value is None:
            return
        if not pattern.match(value):
            self.add_error(field_name, value, message, "INVALID_FORMAT")

    def check_non_negative(self, field_name: str, value: int | None) -> None:
        if value is not None and value < 0:
            self.add_error(field_name, value, "must be zero or greater", "NEGATIVE")


def check_name(context: ValidationContext, value: str | None) -> None:
    """Names are 1-120 characters without leading or trailing whitespace."""
    context.check_length("name", value, 1, 120)
    context.check_pattern(
        "name",
        value,
        NO_SURROUNDING_WHITESPACE,
        "should not contain any leading or trailing whitespaces",
    )
