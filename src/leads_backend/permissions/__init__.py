"""
Permission system for the leads backend.

Main components:
- principal: Principal snapshot with structured claims
- core: PermissionEngine, exact (resource, action) matching and its combinators
- auth: Bearer authentication and the requires/requires_any/requires_all dependencies
"""

from .principal import (
    Principal,
    Claims,
    Requirement,
    build_claims,
)

from .core import (
    PermissionEngine,
    db_get_role_permissions,
    validate_requirements,
)

from .auth import (
    PrincipalBuilder,
    get_current_principal,
    get_optional_principal,
    get_permission_engine,
    requires,
    requires_any,
    requires_all,
)

__all__ = [
    'Principal',
    'Claims',
    'Requirement',
    'build_claims',
    'PermissionEngine',
    'db_get_role_permissions',
    'validate_requirements',
    'PrincipalBuilder',
    'get_current_principal',
    'get_optional_principal',
    'get_permission_engine',
    'requires',
    'requires_any',
    'requires_all',
]
