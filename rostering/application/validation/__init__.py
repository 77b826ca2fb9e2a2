"""
Application layer validation components.

Field-level rule functions and the validation gateway used by every
mutating service operation.
"""

from .validators import FIELD_RULES, ValidationGateway

__all__ = [
    "FIELD_RULES",
    "ValidationGateway",
]
