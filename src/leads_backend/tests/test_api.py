"""
HTTP tests through the FastAPI application.

Requests run against the same in-memory database the fixtures populate.
"""

import pytest
from unittest.mock import patch
from sqlalchemy.exc import OperationalError

from leads_backend.interface.tokens import create_access_token
from leads_backend.model import Curriculum, Department, Lead, Madrasa, User
from leads_backend.tests.conftest import DEFAULT_PASSWORD


class TestAuth:

    def test_login_returns_token_and_permissions(self, client, db, admin_user):
        response = client.post("/auth/login", json={"email": "ADMIN@example.com", "password": DEFAULT_PASSWORD})

        assert response.status_code == 200
        body = response.json()
        assert body["token_type"] == "bearer"
        assert body["principal"]["role_name"] == "Super Admin"
        assert "madaris:manage" in body["principal"]["permissions"]

        db.expire_all()
        assert db.get(User, admin_user.id).last_login is not None

        me = client.get("/auth/me", headers={"Authorization": f"Bearer {body['access_token']}"})
        assert me.status_code == 200
        assert me.json()["email"] == "admin@example.com"

    def test_login_wrong_password(self, client, admin_user):
        response = client.post("/auth/login", json={"email": "admin@example.com", "password": "wrong"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid credentials"

    def test_login_deactivated(self, client, make_user):
        make_user("Viewer", email="gone@example.com", is_active=False)

        response = client.post("/auth/login", json={"email": "gone@example.com", "password": DEFAULT_PASSWORD})

        assert response.status_code == 401
        assert response.json()["detail"] == "User account is deactivated"

    def test_missing_token(self, client):
        response = client.get("/leads")

        assert response.status_code == 401
        assert response.json()["detail"] == "Not authorized to access this route"

    def test_malformed_token(self, client):
        assert client.get("/leads", headers={"Authorization": "Bearer not-a-token"}).status_code == 401
        assert client.get("/leads", headers={"Authorization": "Basic abc"}).status_code == 401

    def test_token_for_unknown_user(self, client):
        headers = {"Authorization": f"Bearer {create_access_token('no-such-user')}"}

        assert client.get("/auth/me", headers=headers).status_code == 401

    def test_deactivated_user_with_valid_token(self, client, make_user, auth_headers):
        user = make_user("Super Admin", is_active=False)

        response = client.get("/leads", headers=auth_headers(user))

        assert response.status_code == 401
        assert response.json()["detail"] == "User account is deactivated"

    def test_change_password(self, client, admin_user, auth_headers):
        headers = auth_headers(admin_user)

        wrong = client.post("/auth/password", headers=headers, json={"current_password": "nope", "new_password": "secret99"})
        assert wrong.status_code == 401

        changed = client.post("/auth/password", headers=headers, json={"current_password": DEFAULT_PASSWORD, "new_password": "secret99"})
        assert changed.status_code == 204

        login = client.post("/auth/login", json={"email": "admin@example.com", "password": "secret99"})
        assert login.status_code == 200


class TestPermissionGate:

    def test_forbidden_message(self, client, viewer_user, auth_headers):
        response = client.post("/leads", headers=auth_headers(viewer_user), json={"title": "New", "description": "Call back"})

        assert response.status_code == 403
        assert response.json()["detail"] == (
            "Access denied: You don't have permission to create leads. Please contact your administrator."
        )

    def test_viewer_can_read(self, client, viewer_user, auth_headers):
        assert client.get("/leads", headers=auth_headers(viewer_user)).status_code == 200

    def test_manage_alone_does_not_open_routes(self, client, make_role, make_user, auth_headers):
        make_role("Lead Manager", [("leads", "manage")])
        user = make_user("Lead Manager")

        assert client.get("/leads", headers=auth_headers(user)).status_code == 403


class TestLeads:

    def test_crud_cycle(self, client, db, admin_user, auth_headers):
        headers = auth_headers(admin_user)

        created = client.post("/leads", headers=headers, json={
            "title": "Open day enquiry",
            "description": "Parent asked about admissions",
            "priority": "high",
            "source": "website",
        })
        assert created.status_code == 201
        lead = created.json()
        assert lead["status"] == "new"
        assert lead["created_by"] == admin_user.id

        listed = client.get("/leads", headers=headers, params={"priority": "high"})
        assert listed.status_code == 200
        assert listed.headers["X-Total-Count"] == "1"
        assert [item["id"] for item in listed.json()] == [lead["id"]]

        updated = client.patch(f"/leads/{lead['id']}", headers=headers, json={"status": "contacted", "response": "Called back"})
        assert updated.status_code == 200
        assert updated.json()["status"] == "contacted"

        deleted = client.delete(f"/leads/{lead['id']}", headers=headers)
        assert deleted.status_code == 204
        assert client.get(f"/leads/{lead['id']}", headers=headers).status_code == 404
        assert client.delete(f"/leads/{lead['id']}", headers=headers).status_code == 404
        assert client.get("/leads", headers=headers).headers["X-Total-Count"] == "0"

        db.expire_all()
        assert db.get(Lead, lead["id"]).is_active is False

        revived = client.patch(f"/leads/{lead['id']}/reactivate", headers=headers)
        assert revived.status_code == 200
        assert revived.json()["is_active"] is True

    def test_invalid_status(self, client, admin_user, auth_headers):
        response = client.post("/leads", headers=auth_headers(admin_user), json={
            "title": "Bad", "description": "x", "status": "lost",
        })

        assert response.status_code == 422

    def test_null_fields_leave_values_unchanged(self, client, admin_user, auth_headers):
        headers = auth_headers(admin_user)
        madrasa = client.post("/madaris/madrasas", headers=headers, json={"name": "Jamia Darul Uloom", "reg_no": "R-7"}).json()

        response = client.patch(f"/madaris/madrasas/{madrasa['id']}", headers=headers, json={"name": None, "address": "Main Road"})

        assert response.status_code == 200
        assert response.json()["name"] == "Jamia Darul Uloom"
        assert response.json()["address"] == "Main Road"

    def test_lead_with_inactive_department(self, client, db, admin_user, auth_headers):
        department = Department(name="Admissions", is_active=False)
        db.add(department)
        db.commit()

        response = client.post("/leads", headers=auth_headers(admin_user), json={
            "title": "Transfer", "description": "Moving schools", "department_id": department.id,
        })

        assert response.status_code == 400
        assert response.json()["detail"] == 'Department "Admissions" is inactive'


class TestOrganization:

    def test_department_section_program(self, client, admin_user, auth_headers):
        headers = auth_headers(admin_user)

        department = client.post("/departments", headers=headers, json={"name": "Outreach"})
        assert department.status_code == 201
        department_id = department.json()["id"]

        section = client.post("/sections", headers=headers, json={"name": "Schools", "department_id": department_id})
        assert section.status_code == 201

        listed = client.get("/sections", headers=headers, params={"department_id": department_id})
        assert listed.headers["X-Total-Count"] == "1"

        program = client.post("/programs", headers=headers, json={"name": "Evening Hifz"})
        assert program.status_code == 201

        lead = client.post("/leads", headers=headers, json={
            "title": "School visit", "description": "Principal wants a demo",
            "department_id": department_id, "section_id": section.json()["id"], "program_id": program.json()["id"],
        })
        assert lead.status_code == 201
        assert lead.json()["program_id"] == program.json()["id"]

    def test_section_needs_existing_department(self, client, admin_user, auth_headers):
        response = client.post("/sections", headers=auth_headers(admin_user), json={"name": "Orphan", "department_id": "missing"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Department with ID missing not found"

    def test_duplicate_program_name(self, client, admin_user, auth_headers):
        headers = auth_headers(admin_user)
        client.post("/programs", headers=headers, json={"name": "Tajweed"})

        response = client.post("/programs", headers=headers, json={"name": "Tajweed"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Program already exists"

    def test_viewer_reads_but_cannot_write(self, client, viewer_user, auth_headers):
        headers = auth_headers(viewer_user)

        assert client.get("/departments", headers=headers).status_code == 200
        response = client.post("/departments", headers=headers, json={"name": "Finance"})
        assert response.status_code == 403
        assert "create departments" in response.json()["detail"]


class TestAssignments:

    @pytest.fixture
    def pair(self, db):
        madrasa = Madrasa(name="Madrasa Al-Huda")
        curriculum = Curriculum(title="Arabic Grammar", status="active")
        db.add_all([madrasa, curriculum])
        db.commit()
        return madrasa.id, curriculum.id

    def test_assign_remove_reassign(self, client, pair, admin_user, auth_headers):
        headers = auth_headers(admin_user)
        madrasa_id, curriculum_id = pair
        payload = {"madrasa_id": madrasa_id, "curriculum_id": curriculum_id}

        created = client.post("/madaris/madrasa-curriculum-assignments", headers=headers, json=payload)
        assert created.status_code == 201
        assignment_id = created.json()["id"]

        duplicate = client.post("/madaris/madrasa-curriculum-assignments", headers=headers, json=payload)
        assert duplicate.status_code == 400
        assert duplicate.json()["detail"] == "This curriculum is already assigned to the madrasa"

        listed = client.get("/madaris/madrasa-curriculum-assignments", headers=headers, params={"madrasa_id": madrasa_id})
        assert listed.headers["X-Total-Count"] == "1"

        assert client.delete(f"/madaris/madrasa-curriculum-assignments/{assignment_id}", headers=headers).status_code == 204
        assert client.delete(f"/madaris/madrasa-curriculum-assignments/{assignment_id}", headers=headers).status_code == 404

        again = client.post("/madaris/madrasa-curriculum-assignments", headers=headers, json=payload)
        assert again.status_code == 201
        assert again.json()["id"] == assignment_id

    def test_unknown_reference(self, client, pair, admin_user, auth_headers):
        madrasa_id, _ = pair

        response = client.post("/madaris/madrasa-curriculum-assignments", headers=auth_headers(admin_user),
                               json={"madrasa_id": madrasa_id, "curriculum_id": "missing"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Curriculum with ID missing not found"

    def test_viewer_cannot_assign(self, client, pair, viewer_user, auth_headers):
        madrasa_id, curriculum_id = pair

        response = client.post("/madaris/madrasa-curriculum-assignments", headers=auth_headers(viewer_user),
                               json={"madrasa_id": madrasa_id, "curriculum_id": curriculum_id})

        assert response.status_code == 403

    def test_lead_assignees(self, client, db, admin_user, make_user, auth_headers):
        headers = auth_headers(admin_user)
        lead = Lead(title="Referral", description="Sent by an alumnus")
        other_lead = Lead(title="Walk-in", description="Visited the office")
        db.add_all([lead, other_lead])
        db.commit()
        rep = make_user("Sales Representative")

        created = client.post(f"/leads/{lead.id}/assignees", headers=headers, json={"user_id": rep.id})
        assert created.status_code == 201
        assignment_id = created.json()["id"]

        listed = client.get(f"/leads/{lead.id}/assignees", headers=headers)
        assert [item["user_id"] for item in listed.json()] == [rep.id]

        assert client.delete(f"/leads/{other_lead.id}/assignees/{assignment_id}", headers=headers).status_code == 404
        assert client.delete(f"/leads/{lead.id}/assignees/{assignment_id}", headers=headers).status_code == 204
        assert client.get(f"/leads/{lead.id}/assignees", headers=headers).headers["X-Total-Count"] == "0"


class TestUsersAndRoles:

    def test_create_user_with_inactive_role(self, client, db, roles, admin_user, auth_headers):
        roles["Viewer"].is_active = False
        db.commit()

        response = client.post("/users", headers=auth_headers(admin_user), json={
            "name": "New Person", "email": "new@example.com", "password": "secret1", "role_id": roles["Viewer"].id,
        })

        assert response.status_code == 400
        assert response.json()["detail"] == 'Role "Viewer" is inactive'

    def test_create_user(self, client, roles, admin_user, auth_headers):
        response = client.post("/users", headers=auth_headers(admin_user), json={
            "name": "New Person", "email": "New@Example.com", "password": "secret1", "role_id": roles["Viewer"].id,
        })

        assert response.status_code == 201
        assert response.json()["email"] == "new@example.com"
        assert "password" not in response.json()

    def test_cannot_deactivate_self(self, client, admin_user, auth_headers):
        response = client.delete(f"/users/{admin_user.id}", headers=auth_headers(admin_user))

        assert response.status_code == 400
        assert response.json()["detail"] == "You cannot deactivate your own account"

    def test_role_permissions_take_effect(self, client, db, roles, admin_user, make_user, auth_headers):
        user = make_user("Viewer")
        assert client.get("/users", headers=auth_headers(user)).status_code == 403

        permission = next(p for p in client.get("/permissions", headers=auth_headers(admin_user), params={"limit": 1000}).json()
                          if p["resource"] == "users" and p["action"] == "read")
        role = client.get(f"/roles/{roles['Viewer'].id}", headers=auth_headers(admin_user)).json()
        permission_ids = [p["id"] for p in role["permissions"]] + [permission["id"]]

        patched = client.patch(f"/roles/{roles['Viewer'].id}", headers=auth_headers(admin_user), json={"permission_ids": permission_ids})
        assert patched.status_code == 200

        assert client.get("/users", headers=auth_headers(user)).status_code == 200


class TestErrors:

    def test_storage_failure_is_500(self, client, admin_user, auth_headers):
        headers = auth_headers(admin_user)

        with patch("leads_backend.api.api_builder.list_db", side_effect=OperationalError("SELECT", {}, Exception("down"))):
            response = client.get("/leads", headers=headers)

        assert response.status_code == 500

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}
