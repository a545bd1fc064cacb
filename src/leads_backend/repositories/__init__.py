"""
Repository pattern implementation for direct database access.

SoftDeleteRepository covers plain entities, AssignmentRepository covers
link tables between two collections.
"""

from .base import SoftDeleteRepository, RepositoryError
from .assignment import AssignmentRelation, AssignmentRepository

__all__ = [
    'SoftDeleteRepository',
    'RepositoryError',
    'AssignmentRelation',
    'AssignmentRepository',
]
