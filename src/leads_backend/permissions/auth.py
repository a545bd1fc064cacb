"""
Bearer authentication and route gating.

Dependencies in this module are request scoped: FastAPI resolves
``get_db`` and ``get_permission_engine`` once per request, so every
check in one request shares the same session and the same loaded claims.
"""

import logging
from typing import Annotated, Optional
from sqlalchemy.orm import Session
from fastapi import Depends, Request
from fastapi.security.utils import get_authorization_scheme_param

from leads_backend.database import get_db
from leads_backend.errors import Unauthenticated
from leads_backend.interface.tokens import decode_access_token
from leads_backend.model.auth import User
from leads_backend.permissions.core import PermissionEngine, validate_requirements
from leads_backend.permissions.principal import Principal, Requirement

logger = logging.getLogger(__name__)


class PrincipalBuilder:
    """Builder for creating Principal objects from stored users"""

    @staticmethod
    def build(user: User) -> Principal:
        return Principal(
            user_id=user.id,
            email=user.email,
            role_id=user.role_id,
            role_name=user.role.name if user.role is not None else None,
            is_active=bool(user.is_active),
        )


def parse_authorization_header(request: Request) -> Optional[str]:
    """Bearer token from the Authorization header, None when the header is absent"""

    authorization = request.headers.get("Authorization")
    if not authorization:
        return None

    scheme, param = get_authorization_scheme_param(authorization)

    if scheme.lower() != "bearer" or not param:
        raise Unauthenticated("Invalid authorization format")

    return param


def get_permission_engine(db: Annotated[Session, Depends(get_db)]) -> PermissionEngine:
    return PermissionEngine(db)


def get_optional_principal(
    token: Annotated[Optional[str], Depends(parse_authorization_header)],
    db: Annotated[Session, Depends(get_db)],
) -> Optional[Principal]:

    if token is None:
        return None

    user_id = decode_access_token(token)
    if user_id is None:
        raise Unauthenticated()

    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        logger.info(f"Token subject {user_id} does not resolve to a user")
        raise Unauthenticated()

    return PrincipalBuilder.build(user)


def get_current_principal(
    principal: Annotated[Optional[Principal], Depends(get_optional_principal)],
    engine: Annotated[PermissionEngine, Depends(get_permission_engine)],
) -> Principal:
    """Main dependency for getting the authenticated, active principal with loaded claims"""

    engine.require_authenticated(principal)
    engine.require_active(principal)
    return engine.ensure_loaded(principal)


def requires(resource: str, action: str):
    """Dependency that admits only principals holding ``resource:action``"""

    validate_requirements([(resource, action)])

    def dependency(
        principal: Annotated[Principal, Depends(get_current_principal)],
        engine: Annotated[PermissionEngine, Depends(get_permission_engine)],
    ) -> Principal:
        return engine.require_permission(principal, resource, action)

    return dependency


def requires_any(*requirements: Requirement):
    checked = validate_requirements(requirements)

    def dependency(
        principal: Annotated[Principal, Depends(get_current_principal)],
        engine: Annotated[PermissionEngine, Depends(get_permission_engine)],
    ) -> Principal:
        return engine.require_any_permission(principal, checked)

    return dependency


def requires_all(*requirements: Requirement):
    checked = validate_requirements(requirements)

    def dependency(
        principal: Annotated[Principal, Depends(get_current_principal)],
        engine: Annotated[PermissionEngine, Depends(get_permission_engine)],
    ) -> Principal:
        return engine.require_all_permissions(principal, checked)

    return dependency
