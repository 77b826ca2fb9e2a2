"""RosterState SQLModel holding per-tenant roster configuration."""

from datetime import date
from zoneinfo import ZoneInfo

from sqlmodel import Field, SQLModel

from rostering.domain.shared.time_zones import resolve_zone

from .base import version_column

_roster_state_version = version_column()


class RosterStateBase(SQLModel):
    """Base roster state fields."""

    tenant_id: int = Field(unique=True, index=True)
    tenant_name: str | None = Field(default=None, max_length=120)
    timezone: str = Field(default="UTC", max_length=64)

    # Planning window, consumed by the solver side
    publish_notice: int = Field(default=14, ge=0)
    publish_length: int = Field(default=7, ge=1)
    draft_length: int = Field(default=14, ge=1)
    first_draft_date: date | None = None
    rotation_length: int = Field(default=7, ge=1)
    unplanned_rotation_offset: int = Field(default=0, ge=0)
    last_historic_date: date | None = None


class RosterState(RosterStateBase, table=True):
    """
    Roster state table model.

    One row per tenant; read-only for the employee service, which only needs
    the time zone.
    """

    __tablename__ = "roster_states"
    __mapper_args__ = {"version_id_col": _roster_state_version}

    id: int | None = Field(default=None, primary_key=True)
    version: int | None = Field(default=None, sa_column=_roster_state_version)

    @property
    def zone_info(self) -> ZoneInfo:
        return resolve_zone(self.timezone)
