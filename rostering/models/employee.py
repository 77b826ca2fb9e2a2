"""Employee and EmployeeAvailability SQLModels."""

from datetime import datetime

from sqlalchemy import Column
from sqlmodel import Field, Relationship, SQLModel

from .base import AvailabilityState, UTCDateTime, version_column
from .contract import Contract
from .skill import Skill

_employee_version = version_column()
_availability_version = version_column()


class EmployeeSkillProficiencyLink(SQLModel, table=True):
    """Association between employees and the skills they are proficient in."""

    __tablename__ = "employee_skill_proficiencies"

    employee_id: int | None = Field(
        default=None, foreign_key="employees.id", primary_key=True
    )
    skill_id: int | None = Field(default=None, foreign_key="skills.id", primary_key=True)


class EmployeeBase(SQLModel):
    """Base employee fields."""

    tenant_id: int = Field(index=True)
    name: str = Field(max_length=120, index=True)
    short_id: str = Field(max_length=3)
    color: str = Field(max_length=7)


class Employee(EmployeeBase, table=True):
    """
    Employee table model.

    The contract and skill proficiencies are loaded eagerly so an employee
    stays fully readable after its unit of work has closed.
    """

    __tablename__ = "employees"
    __mapper_args__ = {"version_id_col": _employee_version}

    id: int | None = Field(default=None, primary_key=True)
    version: int | None = Field(default=None, sa_column=_employee_version)

    contract_id: int | None = Field(default=None, foreign_key="contracts.id")
    contract: Contract | None = Relationship(sa_relationship_kwargs={"lazy": "selectin"})
    skill_proficiency_set: list[Skill] = Relationship(
        link_model=EmployeeSkillProficiencyLink,
        sa_relationship_kwargs={"lazy": "selectin"},
    )

    @property
    def skill_proficiency_ids(self) -> list[int]:
        return sorted(skill.id for skill in self.skill_proficiency_set)

    def __str__(self) -> str:
        return f"{self.name} ({self.id})"


class EmployeeAvailability(SQLModel, table=True):
    """
    Employee availability table model.

    Start and end are absolute instants; they are only turned into wall-clock
    times at the service boundary, using the tenant's roster time zone.
    """

    __tablename__ = "employee_availabilities"
    __mapper_args__ = {"version_id_col": _availability_version}

    id: int | None = Field(default=None, primary_key=True)
    version: int | None = Field(default=None, sa_column=_availability_version)
    tenant_id: int = Field(index=True)

    employee_id: int | None = Field(default=None, foreign_key="employees.id", index=True)
    employee: Employee | None = Relationship(sa_relationship_kwargs={"lazy": "selectin"})

    start_date_time: datetime = Field(sa_column=Column(UTCDateTime(), nullable=False))
    end_date_time: datetime = Field(sa_column=Column(UTCDateTime(), nullable=False))
    state: AvailabilityState = Field(default=AvailabilityState.UNAVAILABLE)

    def __str__(self) -> str:
        return f"{self.employee}:{self.start_date_time}-{self.end_date_time}"
