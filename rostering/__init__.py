"""Tenant-scoped employee and availability data core for employee rostering."""

__version__ = "0.1.0"
