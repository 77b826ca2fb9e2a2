"""
Employee-related Data Transfer Objects.

Views are the only shapes crossing the service boundary. They carry plain
ids instead of entity references, and availability times as wall-clock
date-times of the tenant's roster time zone. Field rules are enforced by the
validation gateway, not here, so every violation is reported the same way.
"""

from datetime import datetime
from zoneinfo import ZoneInfo

from pydantic import BaseModel, ConfigDict, Field

from rostering.domain.shared.time_zones import to_instant, to_local
from rostering.models import AvailabilityState, Employee, EmployeeAvailability


class EmployeeView(BaseModel):
    """DTO for creating, updating and importing employees."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "tenant_id": 1,
                "name": "Amy Cole",
                "contract_id": 3,
                "skill_proficiency_ids": [1, 4],
                "short_id": "AC",
                "color": "#A1C4FD",
            }
        }
    )

    tenant_id: int = Field(..., description="Owning tenant")
    id: int | None = Field(None, description="Identity, omitted on creation")
    version: int | None = Field(
        None, description="Version last read by the caller, required on update"
    )
    name: str = Field(..., description="Employee name")
    contract_id: int | None = Field(None, description="Contract the employee works under")
    skill_proficiency_ids: list[int] = Field(
        default_factory=list, description="Skills the employee is proficient in"
    )
    short_id: str = Field(..., description="Up to three characters shown on rosters")
    color: str = Field(..., description="Display color as #RRGGBB")

    @classmethod
    def from_domain(cls, employee: Employee) -> "EmployeeView":
        return cls(
            tenant_id=employee.tenant_id,
            id=employee.id,
            version=employee.version,
            name=employee.name,
            contract_id=employee.contract_id,
            skill_proficiency_ids=employee.skill_proficiency_ids,
            short_id=employee.short_id,
            color=employee.color,
        )


class EmployeeAvailabilityView(BaseModel):
    """DTO for employee availability with tenant-local date-times."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "tenant_id": 1,
                "employee_id": 7,
                "start_date_time": "2024-03-31T09:00:00",
                "end_date_time": "2024-03-31T17:00:00",
                "state": "DESIRED",
            }
        }
    )

    tenant_id: int = Field(..., description="Owning tenant")
    id: int | None = Field(None, description="Identity, omitted on creation")
    version: int | None = Field(
        None, description="Version last read by the caller, required on update"
    )
    employee_id: int = Field(..., description="Employee the record belongs to")
    start_date_time: datetime = Field(..., description="Local start, without offset")
    end_date_time: datetime = Field(..., description="Local end, without offset")
    state: AvailabilityState = Field(AvailabilityState.UNAVAILABLE)

    @classmethod
    def from_domain(
        cls, zone: ZoneInfo, availability: EmployeeAvailability
    ) -> "EmployeeAvailabilityView":
        """Project a stored availability onto the wall clock of ``zone``."""
        return cls(
            tenant_id=availability.tenant_id,
            id=availability.id,
            version=availability.version,
            employee_id=availability.employee_id,
            start_date_time=to_local(availability.start_date_time, zone),
            end_date_time=to_local(availability.end_date_time, zone),
            state=availability.state,
        )

    def to_domain(self, zone: ZoneInfo, employee: Employee) -> EmployeeAvailability:
        """
        Build a transient availability for ``employee``.

        The tenant is taken from the employee; identity and version from the
        view.
        """
        return EmployeeAvailability(
            id=self.id,
            version=self.version,
            tenant_id=employee.tenant_id,
            employee_id=employee.id,
            employee=employee,
            start_date_time=to_instant(self.start_date_time, zone),
            end_date_time=to_instant(self.end_date_time, zone),
            state=self.state,
        )
