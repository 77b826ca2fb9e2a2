"""Roster state repository supplying the tenant's time zone."""

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select

from rostering.domain.shared.exceptions import DatabaseError
from rostering.models import RosterState

from .base import BaseRepository


class RosterStateRepository(BaseRepository[RosterState]):
    """Repository implementation for RosterState entities."""

    @property
    def entity_class(self):
        """Return the RosterState entity class."""
        return RosterState

    def find_by_tenant_id(self, tenant_id: int) -> RosterState | None:
        """
        Get the roster state of a tenant.

        Args:
            tenant_id: Owning tenant

        Returns:
            RosterState if the tenant has one, None otherwise

        Raises:
            DatabaseError: If database operation fails
        """
        try:
            statement = select(RosterState).where(RosterState.tenant_id == tenant_id)
            return self.session.exec(statement).first()
        except SQLAlchemyError as e:
            raise DatabaseError(
                f"Error finding roster state of tenant {tenant_id}: {str(e)}"
            ) from e
