"""
Data Transfer Objects for application layer.

This module contains DTOs used for communication between the application layer
and external interfaces.
"""

from .employee_dtos import EmployeeAvailabilityView, EmployeeView

__all__ = [
    "EmployeeAvailabilityView",
    "EmployeeView",
]
