"""
Domain errors raised by the permission engine and the repositories.

These are expected, caller-recoverable outcomes. They carry no HTTP
knowledge; the API layer maps them to status codes in
``leads_backend.api.exceptions``.
"""

from typing import Any, Dict, Iterable, Optional, Tuple


class DomainError(Exception):
    """Base class for every typed outcome of the core."""

    default_message = "Domain error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class Unauthenticated(DomainError):
    default_message = "Not authorized to access this route"


class AccountDeactivated(DomainError):
    default_message = "User account is deactivated"


class Forbidden(DomainError):
    """Authenticated, but lacking the required permission(s)."""

    def __init__(self, requirements: Iterable[Tuple[str, str]], mode: str = "all"):
        self.requirements = list(requirements)
        self.mode = mode
        joiner = " or " if mode == "any" else " and "
        wanted = joiner.join(f"{action} {resource}" for resource, action in self.requirements)
        super().__init__(
            f"Access denied: You don't have permission to {wanted}. Please contact your administrator."
        )


class NotFound(DomainError):
    """Target entity does not exist or is already inactive."""

    def __init__(self, entity_type: str, entity_id: Any):
        super().__init__(f"{entity_type} with id {entity_id} not found")
        self.entity_type = entity_type
        self.entity_id = entity_id


class ReferenceNotFound(DomainError):
    """One side of an assignment does not resolve to a stored entity."""

    def __init__(self, entity_type: str, entity_id: Any):
        super().__init__(f"{entity_type} with ID {entity_id} not found")
        self.entity_type = entity_type
        self.entity_id = entity_id


class ReferenceInactive(DomainError):
    """One side of an assignment resolves, but is soft-deleted."""

    def __init__(self, entity_type: str, entity_id: Any, label: Optional[str] = None):
        super().__init__(f'{entity_type} "{label or entity_id}" is inactive')
        self.entity_type = entity_type
        self.entity_id = entity_id


class DuplicateAssignment(DomainError):
    """An active link already exists for the (ref_a, ref_b) pair."""

    def __init__(self, relation: str, ref_a: Any, ref_b: Any, message: Optional[str] = None):
        super().__init__(message or f"{relation} already exists for ({ref_a}, {ref_b})")
        self.relation = relation
        self.ref_a = ref_a
        self.ref_b = ref_b


class DuplicateEntity(DomainError):
    """A plain entity violates one of its unique constraints."""

    def __init__(self, entity_type: str, criteria: Optional[Dict[str, Any]] = None):
        super().__init__(f"{entity_type} already exists")
        self.entity_type = entity_type
        self.criteria = criteria or {}


class InvalidOperation(DomainError):
    """A request that is well-formed but not allowed by a business rule."""


class NotParticipant(DomainError):
    """The actor neither created the lead nor is actively assigned to it."""

    def __init__(self, activity: str):
        super().__init__(f"Access denied: You are not authorized to {activity} for this lead")
        self.activity = activity
