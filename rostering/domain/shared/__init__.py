"""Shared domain building blocks: error taxonomy, validation and time zones."""

from .exceptions import (
    ConcurrencyError,
    DatabaseError,
    DomainError,
    EntityNotFoundError,
    ErrorType,
    ImportFormatError,
    MultipleValidationError,
    RepositoryError,
    TenantImmutabilityError,
    TenantMismatchError,
    ValidationError,
)

__all__ = [
    "ConcurrencyError",
    "DatabaseError",
    "DomainError",
    "EntityNotFoundError",
    "ErrorType",
    "ImportFormatError",
    "MultipleValidationError",
    "RepositoryError",
    "TenantImmutabilityError",
    "TenantMismatchError",
    "ValidationError",
]
