"""Database infrastructure: repositories and the unit of work."""

from .unit_of_work import (
    SqlModelUnitOfWork,
    UnitOfWorkInterface,
    UnitOfWorkManager,
    get_unit_of_work_manager,
)

__all__ = [
    "SqlModelUnitOfWork",
    "UnitOfWorkInterface",
    "UnitOfWorkManager",
    "get_unit_of_work_manager",
]
