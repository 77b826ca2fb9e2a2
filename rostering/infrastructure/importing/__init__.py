"""Import sources for employee data."""

from .employee_list_xlsx import EmployeeListXlsxReader, deduplicate_by_name

__all__ = ["EmployeeListXlsxReader", "deduplicate_by_name"]
