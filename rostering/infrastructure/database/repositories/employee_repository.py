"""
Employee and employee availability repositories.

Adds name lookup for import reconciliation and the per-employee availability
queries used when an employee is removed.
"""

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select

from rostering.domain.shared.exceptions import DatabaseError
from rostering.models import Employee, EmployeeAvailability

from .base import BaseRepository


class EmployeeRepository(BaseRepository[Employee]):
    """Repository implementation for Employee entities."""

    @property
    def entity_class(self):
        """Return the Employee entity class."""
        return Employee

    def find_by_name(self, tenant_id: int, name: str) -> Employee | None:
        """
        Find an employee of a tenant by exact name.

        Names are not unique at the storage level; the lowest id wins.

        Args:
            tenant_id: Owning tenant
            name: Employee name, compared exactly

        Returns:
            Employee if found, None otherwise

        Raises:
            DatabaseError: If database operation fails
        """
        try:
            statement = (
                select(Employee)
                .where(Employee.tenant_id == tenant_id, Employee.name == name)
                .order_by(Employee.id)
            )
            return self.session.exec(statement).first()
        except SQLAlchemyError as e:
            raise DatabaseError(
                f"Error finding employee by name {name}: {str(e)}"
            ) from e


class EmployeeAvailabilityRepository(BaseRepository[EmployeeAvailability]):
    """Repository implementation for EmployeeAvailability entities."""

    @property
    def entity_class(self):
        """Return the EmployeeAvailability entity class."""
        return EmployeeAvailability

    def find_all_by_employee_id(self, employee_id: int) -> list[EmployeeAvailability]:
        """
        Find the availability records of one employee ordered by start.

        Raises:
            DatabaseError: If database operation fails
        """
        try:
            statement = (
                select(EmployeeAvailability)
                .where(EmployeeAvailability.employee_id == employee_id)
                .order_by(EmployeeAvailability.start_date_time, EmployeeAvailability.id)
            )
            return list(self.session.exec(statement).all())
        except SQLAlchemyError as e:
            raise DatabaseError(
                f"Error finding availabilities of employee {employee_id}: {str(e)}"
            ) from e

    def delete_all_by_employee_id(self, employee_id: int) -> int:
        """
        Delete every availability record of an employee.

        Returns:
            Number of records deleted

        Raises:
            DatabaseError: If database operation fails
        """
        availabilities = self.find_all_by_employee_id(employee_id)
        try:
            for availability in availabilities:
                self.session.delete(availability)
            self.session.flush()
        except SQLAlchemyError as e:
            raise DatabaseError(
                f"Error deleting availabilities of employee {employee_id}: {str(e)}"
            ) from e
        return len(availabilities)
