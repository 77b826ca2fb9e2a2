"""Repository implementations for rostering entities."""

from .base import BaseRepository
from .employee_repository import EmployeeAvailabilityRepository, EmployeeRepository
from .roster_state_repository import RosterStateRepository
from .skill_repository import ContractRepository, SkillRepository

__all__ = [
    "BaseRepository",
    "ContractRepository",
    "EmployeeAvailabilityRepository",
    "EmployeeRepository",
    "RosterStateRepository",
    "SkillRepository",
]
