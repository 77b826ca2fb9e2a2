"""
Base repository implementation providing tenant-scoped CRUD operations.

This module provides a generic base repository class that implements the
persistence operations shared by every rostering entity using SQLModel and
SQLAlchemy. Concrete repositories extend it with entity-specific queries.

Repositories never commit: the unit of work owning the session decides when
a transaction ends.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm.exc import StaleDataError
from sqlmodel import Session, SQLModel, select

from rostering.domain.shared.exceptions import ConcurrencyError, DatabaseError

EntityType = TypeVar("EntityType", bound=SQLModel)


class BaseRepository(Generic[EntityType], ABC):
    """
    Base repository class providing generic CRUD operations.

    Concrete repositories must provide the ``entity_class`` property. Entities
    are expected to expose ``id``, ``version`` and ``tenant_id`` attributes.
    """

    def __init__(self, session: Session):
        """
        Initialize repository with database session.

        Args:
            session: SQLModel database session
        """
        self.session = session

    @property
    @abstractmethod
    def entity_class(self) -> type[EntityType]:
        """Return the SQLModel entity class managed by this repository."""
        pass

    @property
    def entity_name(self) -> str:
        return self.entity_class.__name__

    def find_by_id(self, entity_id: int) -> EntityType | None:
        """
        Get entity by ID.

        Args:
            entity_id: Identity of the entity

        Returns:
            Entity if found, None otherwise

        Raises:
            DatabaseError: If database operation fails
        """
        try:
            return self.session.get(self.entity_class, entity_id)
        except SQLAlchemyError as e:
            raise DatabaseError(f"Database error during find_by_id: {str(e)}") from e

    def find_all_by_tenant_id(
        self, tenant_id: int, limit: int | None = None, offset: int = 0
    ) -> list[EntityType]:
        """
        Get all entities of a tenant ordered by identity.

        Args:
            tenant_id: Owning tenant
            limit: Maximum number of entities to return, unbounded if None
            offset: Number of entities to skip

        Returns:
            List of entities

        Raises:
            DatabaseError: If database operation fails
        """
        try:
            statement = (
                select(self.entity_class)
                .where(self.entity_class.tenant_id == tenant_id)
                .order_by(self.entity_class.id)
                .offset(offset)
            )
            if limit is not None:
                statement = statement.limit(limit)
            return list(self.session.exec(statement).all())
        except SQLAlchemyError as e:
            raise DatabaseError(
                f"Database error during find_all_by_tenant_id: {str(e)}"
            ) from e

    def save(
        self, entity: EntityType, expected_version: int | None = None
    ) -> EntityType:
        """
        Add or update an entity in the current transaction.

        New entities are flushed immediately so they get their identity and
        initial version. Changes to stored entities are written at commit,
        where the version column turns the UPDATE into a compare-and-swap.

        Args:
            entity: Entity to save
            expected_version: Version the caller last read, checked before writing

        Returns:
            Saved entity

        Raises:
            ConcurrencyError: If the stored version differs from expected_version
            DatabaseError: If database operation fails
        """
        self._check_version(entity, expected_version)
        is_new = entity.id is None
        try:
            self.session.add(entity)
        except SQLAlchemyError as e:
            raise DatabaseError(f"Database error during save: {str(e)}") from e

        if is_new:
            self._flush(entity)
        return entity

    def save_and_flush(
        self, entity: EntityType, expected_version: int | None = None
    ) -> EntityType:
        """
        Save an entity and write it to the database right away.

        After this returns the entity carries its advanced version.

        Raises:
            ConcurrencyError: If the version check or the UPDATE fails
            DatabaseError: If database operation fails
        """
        self.save(entity, expected_version)
        self._flush(entity)
        return entity

    def delete_by_id(self, entity_id: int) -> bool:
        """
        Delete an entity by ID.

        Args:
            entity_id: Identity of the entity to delete

        Returns:
            True if entity was deleted, False if not found

        Raises:
            DatabaseError: If database operation fails
        """
        entity = self.find_by_id(entity_id)
        if entity is None:
            return False

        try:
            self.session.delete(entity)
        except SQLAlchemyError as e:
            raise DatabaseError(f"Database error during delete: {str(e)}") from e
        self._flush(entity)
        return True

    def _check_version(self, entity: EntityType, expected_version: int | None) -> None:
        if expected_version is None or entity.id is None:
            return
        if entity.version != expected_version:
            raise ConcurrencyError(
                self.entity_name, entity.id, expected_version, entity.version
            )

    def _flush(self, entity: EntityType) -> None:
        try:
            self.session.flush()
        except StaleDataError as e:
            raise ConcurrencyError(self.entity_name, entity.id) from e
        except SQLAlchemyError as e:
            raise DatabaseError(f"Database error during flush: {str(e)}") from e
