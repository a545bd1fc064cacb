"""
Principal and claims tests that need no database.
"""

from leads_backend.permissions.principal import Claims, Principal, build_claims


class TestClaims:

    def test_build_claims_groups_actions_by_resource(self):
        claims = build_claims([("leads", "read"), ("leads", "update"), ("users", "read")])

        assert claims.general == {"leads": {"read", "update"}, "users": {"read"}}

    def test_exact_match_only(self):
        claims = build_claims([("leads", "manage")])

        assert claims.has_general_permission("leads", "manage")
        assert not claims.has_general_permission("leads", "read")
        assert not claims.has_general_permission("users", "manage")

    def test_as_list(self):
        claims = build_claims([("users", "read"), ("leads", "create")])

        assert claims.as_list() == ["leads:create", "users:read"]


class TestPrincipal:

    def test_unloaded_principal_is_granted_nothing(self):
        principal = Principal(user_id="u-1", role_id="r-1")

        assert not principal.is_loaded
        assert not principal.permitted("leads", "read")

    def test_empty_claims_count_as_loaded(self):
        principal = Principal(user_id="u-1", claims=Claims())

        assert principal.is_loaded
        assert not principal.permitted("leads", "read")

    def test_action_list_is_any_of(self):
        principal = Principal(user_id="u-1", claims=build_claims([("leads", "update")]))

        assert principal.permitted("leads", ["read", "update"])
        assert not principal.permitted("leads", ["read", "delete"])

    def test_results_are_memoised_until_cleared(self):
        principal = Principal(user_id="u-1", claims=build_claims([("leads", "read")]))

        assert principal.permitted("leads", "read")

        # Swapping claims without clearing keeps the memoised answer
        principal.claims = Claims()
        assert principal.permitted("leads", "read")

        principal.clear_permission_cache()
        assert not principal.permitted("leads", "read")
