"""
Domain Exceptions with Type Discrimination

Defines the error taxonomy of the rostering core. Every error carries an
``ErrorType`` so callers can branch on ``error.error_type`` instead of
catching individual classes.
"""

from enum import Enum


class ErrorType(str, Enum):
    """Error type enumeration for discriminated unions."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    TENANT_MISMATCH = "tenant_mismatch"
    TENANT_IMMUTABLE = "tenant_immutable"
    CONCURRENCY = "concurrency"
    IMPORT_FORMAT = "import_format"
    REPOSITORY = "repository"


class DomainError(Exception):
    """Base class for all domain errors with type discrimination."""

    def __init__(
        self,
        message: str,
        error_type: ErrorType,
        details: dict[str, str | int | bool | None] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.details = details or {}

    def to_dict(self) -> dict[str, str | dict[str, str | int | bool | None]]:
        """Convert error to dictionary for API responses."""
        return {
            "type": self.error_type.value,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(DomainError):
    """Raised when field-level validation rules are violated."""

    def __init__(
        self,
        field_name: str,
        value: object,
        message: str,
        error_code: str | None = None,
        details: dict[str, str | int | bool | None] | None = None,
    ) -> None:
        self.field_name = field_name
        self.value = value
        self.error_code = error_code or "VALIDATION_ERROR"

        full_message = f"Validation failed for field '{field_name}': {message}"
        details = details or {}
        details.update(
            {
                "field": field_name,
                "value": str(value) if value is not None else None,
                "error_code": self.error_code,
            }
        )

        super().__init__(full_message, ErrorType.VALIDATION, details)

    def to_dict(self) -> dict[str, str | None]:
        """Convert to dictionary for API responses."""
        return {
            "type": self.error_type.value,
            "field": self.field_name,
            "value": str(self.value) if self.value is not None else None,
            "message": self.message,
            "error_code": self.error_code,
        }


class MultipleValidationError(ValidationError):
    """Raised when multiple validation errors occur."""

    def __init__(self, validation_errors: list[ValidationError]) -> None:
        self.validation_errors = validation_errors
        messages = [error.message for error in validation_errors]
        combined_message = "Multiple validation errors: " + "; ".join(messages)

        details: dict[str, str | int | bool | None] = {
            "error_count": len(validation_errors),
            "fields": ",".join(error.field_name for error in validation_errors),
        }

        super().__init__(
            "multiple_fields",
            None,
            combined_message,
            "MULTIPLE_VALIDATION_ERRORS",
            details,
        )

    @property
    def error_count(self) -> int:
        """Get the number of validation errors."""
        return len(self.validation_errors)


class EntityNotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""

    def __init__(self, entity_type: str, lookup: str | int | None) -> None:
        details = {"entity_type": entity_type, "lookup": str(lookup)}
        super().__init__(
            f"No {entity_type} entity found with ID ({lookup}).",
            ErrorType.NOT_FOUND,
            details,
        )
        self.entity_type = entity_type
        self.lookup = lookup


class TenantMismatchError(DomainError):
    """Raised when an entity or one of its references belongs to another tenant."""

    def __init__(
        self,
        entity_type: str,
        entity_id: int | None,
        expected_tenant_id: int,
        actual_tenant_id: int | None,
    ) -> None:
        details = {
            "entity_type": entity_type,
            "entity_id": entity_id,
            "expected_tenant_id": expected_tenant_id,
            "actual_tenant_id": actual_tenant_id,
        }
        super().__init__(
            f"The tenantId ({expected_tenant_id}) does not match the {entity_type} "
            f"({entity_id})'s tenantId ({actual_tenant_id}).",
            ErrorType.TENANT_MISMATCH,
            details,
        )
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.expected_tenant_id = expected_tenant_id
        self.actual_tenant_id = actual_tenant_id


class TenantImmutabilityError(DomainError):
    """Raised when an update would move an entity to a different tenant."""

    def __init__(
        self,
        entity_type: str,
        entity_id: int | None,
        stored_tenant_id: int,
        requested_tenant_id: int | None,
    ) -> None:
        details = {
            "entity_type": entity_type,
            "entity_id": entity_id,
            "stored_tenant_id": stored_tenant_id,
            "requested_tenant_id": requested_tenant_id,
        }
        super().__init__(
            f"{entity_type} entity with tenantId ({stored_tenant_id}) "
            f"cannot change tenants.",
            ErrorType.TENANT_IMMUTABLE,
            details,
        )
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.stored_tenant_id = stored_tenant_id
        self.requested_tenant_id = requested_tenant_id


class ImportFormatError(DomainError):
    """Raised when an import source cannot be read."""

    def __init__(
        self, message: str, row: int | None = None, column: str | None = None
    ) -> None:
        location = []
        if row is not None:
            location.append(f"row {row}")
        if column is not None:
            location.append(f"column '{column}'")
        full_message = message if not location else f"{message} ({', '.join(location)})"

        super().__init__(
            full_message, ErrorType.IMPORT_FORMAT, {"row": row, "column": column}
        )
        self.row = row
        self.column = column


# Repository exceptions
class RepositoryError(DomainError):
    """Base class for repository-related errors."""

    def __init__(
        self,
        message: str,
        error_type: ErrorType = ErrorType.REPOSITORY,
        details: dict[str, str | int | bool | None] | None = None,
    ) -> None:
        super().__init__(message, error_type, details)


class DatabaseError(RepositoryError):
    """Raised when a database operation fails."""

    pass


class ConcurrencyError(RepositoryError):
    """Raised when an optimistic-lock version check fails."""

    def __init__(
        self,
        entity_type: str,
        entity_id: int | None,
        expected_version: int | None = None,
        actual_version: int | None = None,
    ) -> None:
        message = f"Concurrent modification of {entity_type}"
        if entity_id is not None:
            message += f": {entity_id}"
        if expected_version is not None:
            message += (
                f" (expected version {expected_version}, found {actual_version})"
            )
        details = {
            "entity_type": entity_type,
            "entity_id": entity_id,
            "expected_version": expected_version,
            "actual_version": actual_version,
        }
        super().__init__(message, ErrorType.CONCURRENCY, details)
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.expected_version = expected_version
        self.actual_version = actual_version
