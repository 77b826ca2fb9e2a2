"""Contract SQLModel describing an employee's working-time limits."""

from sqlmodel import Field, SQLModel

from .base import version_column

_contract_version = version_column()


class ContractBase(SQLModel):
    """Base contract fields."""

    tenant_id: int = Field(index=True)
    name: str = Field(max_length=120, index=True)

    maximum_minutes_per_day: int | None = Field(default=None, ge=0)
    maximum_minutes_per_week: int | None = Field(default=None, ge=0)
    maximum_minutes_per_month: int | None = Field(default=None, ge=0)
    maximum_minutes_per_year: int | None = Field(default=None, ge=0)


class Contract(ContractBase, table=True):
    """Contract table model."""

    __tablename__ = "contracts"
    __mapper_args__ = {"version_id_col": _contract_version}

    id: int | None = Field(default=None, primary_key=True)
    version: int | None = Field(default=None, sa_column=_contract_version)

    def __str__(self) -> str:
        return f"{self.name} ({self.id})"
