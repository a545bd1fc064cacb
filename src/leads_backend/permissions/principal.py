from collections import defaultdict
from typing import Optional, Dict, Iterable, List, Set, Tuple
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

Requirement = Tuple[str, str]


class Claims(BaseModel):
    """Permissions granted through the actor's role, as resource -> actions"""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    general: Dict[str, Set[str]] = Field(default_factory=dict)

    def has_general_permission(self, resource: str, action: str) -> bool:
        """Exact (resource, action) match, no implied actions"""
        return resource in self.general and action in self.general[resource]

    def as_list(self) -> List[str]:
        return sorted(f"{resource}:{action}" for resource, actions in self.general.items() for action in actions)


def build_claims(permission_values: Iterable[Requirement]) -> Claims:
    """Build structured claims from (resource, action) tuples"""

    general: Dict[str, Set[str]] = defaultdict(set)

    for resource, action in permission_values:
        general[resource].add(action)

    return Claims(general=dict(general))


class Principal(BaseModel):
    """
    Snapshot of the authenticated actor for the lifetime of one request.

    ``claims`` stays ``None`` until the permission engine has loaded the
    actor's role and its permissions; an empty ``Claims`` means "loaded,
    grants nothing".
    """

    user_id: Optional[str] = None
    email: Optional[str] = None
    role_id: Optional[str] = None
    role_name: Optional[str] = None
    is_active: bool = True

    claims: Optional[Claims] = None

    # Cache for permission checks (using private attribute)
    _permission_cache: Dict[str, bool] = PrivateAttr(default_factory=dict)

    @property
    def is_loaded(self) -> bool:
        return self.claims is not None

    def get_user_id(self) -> Optional[str]:
        return self.user_id

    def clear_permission_cache(self):
        """Clear the permission cache"""
        self._permission_cache.clear()

    def _cache_key(self, resource: str, action: str) -> str:
        return f"{resource}:{action}"

    def permitted(self, resource: str, action: str | List[str]) -> bool:
        """
        Permission check with caching.

        Args:
            resource: The resource name (e.g., "leads", "madaris")
            action: Single action or list of actions, any of which suffices

        Returns:
            True if permission is granted, False otherwise. An actor whose
            claims were never loaded is granted nothing.
        """

        if isinstance(action, list):
            return any(self.permitted(resource, a) for a in action)

        if self.claims is None:
            return False

        cache_key = self._cache_key(resource, action)
        if cache_key in self._permission_cache:
            return self._permission_cache[cache_key]

        result = self.claims.has_general_permission(resource, action)

        self._permission_cache[cache_key] = result

        return result
