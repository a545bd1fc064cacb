import logging
import pytest

from leads_backend.model import Role, User
from leads_backend.seeding import DEFAULT_SEED_FILE
from leads_backend.server import startup_logic
from leads_backend.settings import settings


@pytest.fixture
def bootstrap(monkeypatch):
    """Environment asking for seeding and an administrator at startup."""
    monkeypatch.setattr(settings, "SEED_FILE", DEFAULT_SEED_FILE)
    monkeypatch.setattr(settings, "ADMIN_EMAIL", "root@example.com")
    monkeypatch.setattr(settings, "ADMIN_PASSWORD", "rootpassword")
    monkeypatch.setattr(settings, "ADMIN_ROLE", "Super Admin")


def test_startup_seeds_in_production(database, bootstrap, monkeypatch):
    monkeypatch.setattr(settings, "DEBUG_MODE", "production")

    startup_logic(database)

    with database.session() as db:
        assert db.query(Role).count() == 6
        admin = db.query(User).filter(User.email == "root@example.com").one()
        assert admin.role.name == "Super Admin"


def test_startup_outside_production_warns(database, bootstrap, monkeypatch, caplog):
    monkeypatch.setattr(settings, "DEBUG_MODE", "development")

    with caplog.at_level(logging.WARNING, logger="leads_backend.server"):
        startup_logic(database)

    assert "skipping SEED_FILE and ADMIN_EMAIL bootstrap" in caplog.text
    with database.session() as db:
        assert db.query(Role).count() == 0
        assert db.query(User).count() == 0


def test_startup_without_bootstrap_is_quiet(database, monkeypatch, caplog):
    monkeypatch.setattr(settings, "DEBUG_MODE", "development")
    monkeypatch.setattr(settings, "SEED_FILE", None)
    monkeypatch.setattr(settings, "ADMIN_EMAIL", None)

    with caplog.at_level(logging.WARNING, logger="leads_backend.server"):
        startup_logic(database)

    assert caplog.text == ""
