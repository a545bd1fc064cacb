from .base import Base, metadata
from .auth import User
from .role import Role, Permission, role_permission, RESOURCES, ACTIONS
from .madaris import Madrasa, Curriculum, Subject
from .organization import Department, Section, Program
from .lead import Lead, LeadResponse
from .assignment import MadrasaCurriculumAssignment, CurriculumSubjectAssignment, LeadUserAssignment

__all__ = [
    'Base',
    'metadata',
    # Actor and authorization models
    'User',
    'Role',
    'Permission',
    'role_permission',
    'RESOURCES',
    'ACTIONS',
    # Reference data
    'Madrasa',
    'Curriculum',
    'Subject',
    # Organization
    'Department',
    'Section',
    'Program',
    # Leads
    'Lead',
    'LeadResponse',
    # Assignments
    'MadrasaCurriculumAssignment',
    'CurriculumSubjectAssignment',
    'LeadUserAssignment',
]
