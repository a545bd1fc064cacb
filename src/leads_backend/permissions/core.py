"""
Role based permission engine.

An actor holds one role; the role holds a set of permissions, each naming a
``(resource, action)`` pair. A check succeeds only when the actor's role is
active and carries an active permission with exactly that pair. ``manage``
is a separate action and grants nothing beyond itself.
"""

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple
from sqlalchemy.orm import Session

from leads_backend.errors import AccountDeactivated, Forbidden, Unauthenticated
from leads_backend.model.role import ACTIONS, RESOURCES, Permission, Role, role_permission
from leads_backend.permissions.principal import Claims, Principal, Requirement, build_claims

logger = logging.getLogger(__name__)


def validate_requirements(requirements: Iterable[Requirement]) -> List[Requirement]:
    checked = []
    for resource, action in requirements:
        if resource not in RESOURCES:
            raise ValueError(f"Unknown resource '{resource}'")
        if action not in ACTIONS:
            raise ValueError(f"Unknown action '{action}'")
        checked.append((resource, action))
    return checked


class PermissionEngine:
    """
    Evaluates permission checks for principals within one request.

    The engine owns a request-scoped cache of loaded claims keyed by role id,
    so the role graph is read from storage at most once per role for the
    lifetime of the engine instance. Create a fresh engine per request.
    """

    def __init__(self, db: Session):
        self.db = db
        self._claims_cache: Dict[str, Tuple[Optional[str], Claims]] = {}

    def ensure_loaded(self, principal: Principal) -> Principal:
        """Attach role name and claims to ``principal`` if not present yet. Idempotent."""
        if principal.is_loaded:
            return principal

        if principal.role_id is None:
            principal.claims = Claims()
            return principal

        if principal.role_id not in self._claims_cache:
            role_name, values = db_get_role_permissions(principal.role_id, self.db)
            self._claims_cache[principal.role_id] = (role_name, build_claims(values))

        role_name, claims = self._claims_cache[principal.role_id]
        principal.role_name = principal.role_name or role_name
        principal.claims = claims
        principal.clear_permission_cache()
        return principal

    def has_permission(self, principal: Optional[Principal], resource: str, action: str) -> bool:
        """
        True when the principal's role grants exactly ``resource:action``.

        A missing, unloaded or unauthorised principal yields False, never an
        error. The pair itself must name a known resource and action; a typo
        in either is a programming error and raises ``ValueError``. The
        combinators below validate their requirement lists the same way.
        """
        validate_requirements([(resource, action)])
        if principal is None:
            return False
        return self.ensure_loaded(principal).permitted(resource, action)

    def has_any_permission(self, principal: Optional[Principal], requirements: Sequence[Requirement]) -> bool:
        requirements = validate_requirements(requirements)
        if not requirements or principal is None:
            return False
        self.ensure_loaded(principal)
        return any(principal.permitted(resource, action) for resource, action in requirements)

    def has_all_permissions(self, principal: Optional[Principal], requirements: Sequence[Requirement]) -> bool:
        requirements = validate_requirements(requirements)
        if not requirements:
            return True
        if principal is None:
            return False
        self.ensure_loaded(principal)
        return all(principal.permitted(resource, action) for resource, action in requirements)

    def require_authenticated(self, principal: Optional[Principal]) -> Principal:
        if principal is None or principal.user_id is None:
            raise Unauthenticated()
        return principal

    def require_active(self, principal: Principal) -> Principal:
        if not principal.is_active:
            logger.info(f"Rejected deactivated user {principal.user_id}")
            raise AccountDeactivated()
        return principal

    def _require(self, principal: Optional[Principal]) -> Principal:
        return self.require_active(self.require_authenticated(principal))

    def require_permission(self, principal: Optional[Principal], resource: str, action: str) -> Principal:
        principal = self._require(principal)
        if not self.has_permission(principal, resource, action):
            logger.info(f"User {principal.user_id} ({principal.role_name}) denied {resource}:{action}")
            raise Forbidden([(resource, action)])
        return principal

    def require_any_permission(self, principal: Optional[Principal], requirements: Sequence[Requirement]) -> Principal:
        principal = self._require(principal)
        if not self.has_any_permission(principal, requirements):
            logger.info(f"User {principal.user_id} ({principal.role_name}) denied any of {list(requirements)}")
            raise Forbidden(requirements, mode="any")
        return principal

    def require_all_permissions(self, principal: Optional[Principal], requirements: Sequence[Requirement]) -> Principal:
        principal = self._require(principal)
        if not self.has_all_permissions(principal, requirements):
            missing = [(r, a) for r, a in requirements if not principal.permitted(r, a)]
            logger.info(f"User {principal.user_id} ({principal.role_name}) missing {missing}")
            raise Forbidden(missing, mode="all")
        return principal


def db_get_role_permissions(role_id: str, db: Session) -> Tuple[Optional[str], List[Requirement]]:
    """Role name and active (resource, action) pairs of an active role.

    An inactive or unknown role yields no permissions.
    """

    role = db.query(Role.name, Role.is_active).filter(Role.id == role_id).first()

    if role is None:
        logger.warning(f"Role {role_id} not found while loading permissions")
        return None, []

    if not role.is_active:
        return role.name, []

    values = (
        db.query(Permission.resource, Permission.action)
        .select_from(Role)
        .join(role_permission, role_permission.c.role_id == Role.id)
        .join(Permission, Permission.id == role_permission.c.permission_id)
        .filter(Role.id == role_id, Permission.is_active == True)
        .distinct()
        .all()
    )

    return role.name, [(row.resource, row.action) for row in values]
