"""Assignment module for DenimFlow.

This module implements FIFO allocation of newly available inventory units
to open commitments.
"""

from .errors import AllocationConflictError
from .models import Assignment
from .ports import AssignmentRepositoryPort
from .matcher import AssignmentMatcher

__all__ = [
    "AllocationConflictError",
    "Assignment",
    "AssignmentRepositoryPort",
    "AssignmentMatcher",
]
