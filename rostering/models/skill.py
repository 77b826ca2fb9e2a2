"""Skill SQLModel for employee proficiencies."""

from sqlmodel import Field, SQLModel

from .base import version_column

_skill_version = version_column()


class SkillBase(SQLModel):
    """Base skill fields."""

    tenant_id: int = Field(index=True)
    name: str = Field(max_length=120, index=True)


class Skill(SkillBase, table=True):
    """
    Skill table model.

    Represents a tenant-scoped skill an employee can be proficient in.
    """

    __tablename__ = "skills"
    __mapper_args__ = {"version_id_col": _skill_version}

    id: int | None = Field(default=None, primary_key=True)
    version: int | None = Field(default=None, sa_column=_skill_version)

    def __str__(self) -> str:
        return f"{self.name} ({self.id})"
