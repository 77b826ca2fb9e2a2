"""
Application Services

Use-case orchestration for employees and their availability.
"""

from .base_service import ApplicationServiceBase
from .employee_import import EmployeeImportReconciler, deduplicate_by_name
from .employee_service import EmployeeService

__all__ = [
    "ApplicationServiceBase",
    "EmployeeImportReconciler",
    "EmployeeService",
    "deduplicate_by_name",
]
