"""
Pytest configuration and fixtures for all tests.

Every test gets its own in-memory SQLite database seeded with the bundled
permissions and roles.
"""

import os
import sys
import pytest
from typing import Callable, Generator
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

# Ensure leads_backend is importable
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(__file__))))

from leads_backend.database import Database
from leads_backend.interface.tokens import create_access_token, encrypt_password
from leads_backend.model import Base, Permission, Role, User
from leads_backend.permissions.auth import PrincipalBuilder
from leads_backend.permissions.principal import Principal
from leads_backend.seeding import seed_from_file
from leads_backend.server import create_app

DEFAULT_PASSWORD = "password123"


@pytest.fixture(scope="function")
def database() -> Generator[Database, None, None]:
    """In-memory SQLite storage handle with all tables created."""
    database = Database("sqlite://")
    database.create_all()
    try:
        yield database
    finally:
        Base.metadata.drop_all(bind=database.engine)
        database.dispose()


@pytest.fixture
def db(database) -> Generator[Session, None, None]:
    session = database.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def roles(db) -> dict:
    """Seeded roles by name."""
    return {role.name: role for role in seed_from_file(db)}


@pytest.fixture
def make_user(db, roles) -> Callable[..., User]:
    counter = {"n": 0}

    def _make_user(role_name: str = "Super Admin", email: str = None, is_active: bool = True, password: str = DEFAULT_PASSWORD) -> User:
        counter["n"] += 1
        user = User(
            name=f"{role_name} {counter['n']}",
            email=email or f"user{counter['n']}@example.com",
            password=encrypt_password(password),
            role_id=roles[role_name].id,
            is_active=is_active,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def admin_user(make_user) -> User:
    return make_user("Super Admin", email="admin@example.com")


@pytest.fixture
def viewer_user(make_user) -> User:
    return make_user("Viewer", email="viewer@example.com")


@pytest.fixture
def principal_for() -> Callable[[User], Principal]:
    return PrincipalBuilder.build


@pytest.fixture
def app(database):
    return create_app(database)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def auth_headers() -> Callable[[User], dict]:
    def _auth_headers(user: User) -> dict:
        return {"Authorization": f"Bearer {create_access_token(user.id)}"}
    return _auth_headers


@pytest.fixture
def make_role(db, roles) -> Callable[..., Role]:
    """Role holding exactly the given seeded (resource, action) permissions."""

    def _make_role(name: str, permissions: list, is_active: bool = True) -> Role:
        role = Role(name=name, is_active=is_active)
        role.permissions = [
            db.query(Permission).filter(Permission.resource == resource, Permission.action == action).one()
            for resource, action in permissions
        ]
        db.add(role)
        db.commit()
        db.refresh(role)
        roles[name] = role
        return role

    return _make_role
