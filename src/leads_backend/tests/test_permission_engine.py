"""
Permission engine tests against a seeded SQLite database.
"""

import pytest
from unittest.mock import patch

from leads_backend.errors import AccountDeactivated, Forbidden, Unauthenticated
from leads_backend.model import Permission
from leads_backend.permissions import core
from leads_backend.permissions.core import PermissionEngine
from leads_backend.permissions.principal import Principal


class TestHasPermission:

    def test_granted_pair(self, db, make_user, principal_for):
        engine = PermissionEngine(db)
        principal = principal_for(make_user("Manager"))

        assert engine.has_permission(principal, "leads", "create")
        assert engine.has_permission(principal, "users", "read")

    def test_missing_pair_is_false_not_an_error(self, db, make_user, principal_for):
        engine = PermissionEngine(db)
        principal = principal_for(make_user("Manager"))

        assert not engine.has_permission(principal, "leads", "delete")
        assert not engine.has_permission(principal, "roles", "read")

    def test_manage_does_not_imply_other_actions(self, db, make_user, make_role, principal_for):
        make_role("Lead Manager", [("leads", "manage")])
        engine = PermissionEngine(db)
        principal = principal_for(make_user("Lead Manager"))

        assert engine.has_permission(principal, "leads", "manage")
        for action in ("create", "read", "update", "delete"):
            assert not engine.has_permission(principal, "leads", action)

    def test_inactive_permission_is_ignored(self, db, make_user, principal_for):
        permission = db.query(Permission).filter(Permission.resource == "leads", Permission.action == "read").one()
        permission.is_active = False
        db.commit()

        principal = principal_for(make_user("Manager"))

        assert not PermissionEngine(db).has_permission(principal, "leads", "read")
        assert PermissionEngine(db).has_permission(principal, "leads", "create")

    def test_inactive_role_grants_nothing(self, db, roles, make_user, principal_for):
        user = make_user("Admin")
        roles["Admin"].is_active = False
        db.commit()

        engine = PermissionEngine(db)
        principal = principal_for(user)

        assert not engine.has_permission(principal, "leads", "read")
        assert principal.role_name == "Admin"

    def test_no_principal(self, db):
        assert not PermissionEngine(db).has_permission(None, "leads", "read")

    def test_unknown_names_are_rejected(self, db, make_user, principal_for):
        principal = principal_for(make_user("Manager"))

        with pytest.raises(ValueError):
            PermissionEngine(db).has_permission(principal, "lead", "read")
        with pytest.raises(ValueError):
            PermissionEngine(db).has_permission(principal, "leads", "view")

    def test_unknown_names_raise_even_without_principal(self, db):
        engine = PermissionEngine(db)

        with pytest.raises(ValueError):
            engine.has_permission(None, "lead", "read")
        with pytest.raises(ValueError):
            engine.has_any_permission(None, [("leads", "read"), ("inbox", "view")])
        with pytest.raises(ValueError):
            engine.has_all_permissions(None, [("department", "read")])


class TestCombinators:

    def test_any_needs_one(self, db, make_user, principal_for):
        engine = PermissionEngine(db)
        principal = principal_for(make_user("Sales Representative"))

        assert engine.has_any_permission(principal, [("users", "read"), ("leads", "read")])
        assert not engine.has_any_permission(principal, [("users", "read"), ("roles", "read")])

    def test_all_needs_every_one(self, db, make_user, principal_for):
        engine = PermissionEngine(db)
        principal = principal_for(make_user("Sales Representative"))

        assert engine.has_all_permissions(principal, [("leads", "read"), ("leads", "update")])
        assert not engine.has_all_permissions(principal, [("leads", "read"), ("leads", "delete")])

    def test_empty_requirements(self, db, make_user, principal_for):
        engine = PermissionEngine(db)
        principal = principal_for(make_user("Viewer"))

        assert not engine.has_any_permission(principal, [])
        assert engine.has_all_permissions(principal, [])


class TestRequire:

    def test_require_authenticated(self, db):
        engine = PermissionEngine(db)

        with pytest.raises(Unauthenticated):
            engine.require_authenticated(None)
        with pytest.raises(Unauthenticated):
            engine.require_authenticated(Principal())

    def test_require_active(self, db, make_user, principal_for):
        principal = principal_for(make_user("Manager", is_active=False))

        with pytest.raises(AccountDeactivated):
            PermissionEngine(db).require_active(principal)

    def test_deactivated_user_fails_before_permission_check(self, db, make_user, principal_for):
        principal = principal_for(make_user("Super Admin", is_active=False))

        with pytest.raises(AccountDeactivated):
            PermissionEngine(db).require_permission(principal, "leads", "read")

    def test_forbidden_names_the_missing_pair(self, db, make_user, principal_for):
        principal = principal_for(make_user("Viewer"))

        with pytest.raises(Forbidden) as error:
            PermissionEngine(db).require_permission(principal, "leads", "delete")

        assert error.value.requirements == [("leads", "delete")]
        assert error.value.message == (
            "Access denied: You don't have permission to delete leads. Please contact your administrator."
        )

    def test_require_any_message_joins_with_or(self, db, make_user, principal_for):
        principal = principal_for(make_user("Viewer"))

        with pytest.raises(Forbidden) as error:
            PermissionEngine(db).require_any_permission(principal, [("users", "read"), ("roles", "read")])

        assert "read users or read roles" in error.value.message

    def test_require_all_reports_only_missing(self, db, make_user, principal_for):
        principal = principal_for(make_user("Viewer"))

        with pytest.raises(Forbidden) as error:
            PermissionEngine(db).require_all_permissions(principal, [("leads", "read"), ("leads", "update")])

        assert error.value.requirements == [("leads", "update")]

    def test_granted_returns_principal(self, db, admin_user, principal_for):
        principal = principal_for(admin_user)

        assert PermissionEngine(db).require_permission(principal, "madaris", "manage") is principal


class TestEnsureLoaded:

    def test_loads_once_per_engine(self, db, make_user, principal_for):
        first = principal_for(make_user("Manager"))
        second = principal_for(make_user("Manager"))
        engine = PermissionEngine(db)

        with patch.object(core, "db_get_role_permissions", wraps=core.db_get_role_permissions) as loader:
            engine.ensure_loaded(first)
            engine.ensure_loaded(first)
            engine.has_permission(first, "leads", "read")
            engine.has_all_permissions(second, [("leads", "read"), ("users", "read")])

        assert loader.call_count == 1
        assert first.is_loaded and second.is_loaded

    def test_new_engine_reloads(self, db, make_user, principal_for):
        user = make_user("Manager")

        with patch.object(core, "db_get_role_permissions", wraps=core.db_get_role_permissions) as loader:
            PermissionEngine(db).has_permission(principal_for(user), "leads", "read")
            PermissionEngine(db).has_permission(principal_for(user), "leads", "read")

        assert loader.call_count == 2

    def test_principal_without_role(self, db):
        principal = PermissionEngine(db).ensure_loaded(Principal(user_id="u-1"))

        assert principal.is_loaded
        assert principal.claims.general == {}
