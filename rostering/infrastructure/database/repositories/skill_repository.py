"""Skill and contract repositories."""

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select

from rostering.domain.shared.exceptions import DatabaseError
from rostering.models import Contract, Skill

from .base import BaseRepository


class SkillRepository(BaseRepository[Skill]):
    """Repository implementation for Skill entities."""

    @property
    def entity_class(self):
        """Return the Skill entity class."""
        return Skill

    def find_by_name(self, tenant_id: int, name: str) -> Skill | None:
        """
        Find a skill of a tenant by exact name.

        Raises:
            DatabaseError: If database operation fails
        """
        try:
            statement = (
                select(Skill)
                .where(Skill.tenant_id == tenant_id, Skill.name == name)
                .order_by(Skill.id)
            )
            return self.session.exec(statement).first()
        except SQLAlchemyError as e:
            raise DatabaseError(f"Error finding skill by name {name}: {str(e)}") from e

    def find_all_by_ids(self, skill_ids: list[int]) -> list[Skill]:
        """
        Load several skills at once, in id order.

        Missing ids are simply absent from the result.

        Raises:
            DatabaseError: If database operation fails
        """
        if not skill_ids:
            return []
        try:
            statement = select(Skill).where(Skill.id.in_(skill_ids)).order_by(Skill.id)
            return list(self.session.exec(statement).all())
        except SQLAlchemyError as e:
            raise DatabaseError(f"Error finding skills {skill_ids}: {str(e)}") from e


class ContractRepository(BaseRepository[Contract]):
    """Repository implementation for Contract entities."""

    @property
    def entity_class(self):
        """Return the Contract entity class."""
        return Contract

    def find_by_name(self, tenant_id: int, name: str) -> Contract | None:
        """
        Find a contract of a tenant by exact name.

        Raises:
            DatabaseError: If database operation fails
        """
        try:
            statement = (
                select(Contract)
                .where(Contract.tenant_id == tenant_id, Contract.name == name)
                .order_by(Contract.id)
            )
            return self.session.exec(statement).first()
        except SQLAlchemyError as e:
            raise DatabaseError(
                f"Error finding contract by name {name}: {str(e)}"
            ) from e
