"""Rostering SQLModel classes exports (explicit, no star imports)."""

from .base import AvailabilityState, UTCDateTime
from .contract import Contract
from .employee import Employee, EmployeeAvailability, EmployeeSkillProficiencyLink
from .roster_state import RosterState
from .skill import Skill

__all__ = [
    "AvailabilityState",
    "UTCDateTime",
    "Contract",
    "Employee",
    "EmployeeAvailability",
    "EmployeeSkillProficiencyLink",
    "RosterState",
    "Skill",
]
