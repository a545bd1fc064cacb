import pytest
from click.testing import CliRunner

from leads_backend.cli.cli import cli
from leads_backend.database import Database
from leads_backend.interface.tokens import decrypt_password
from leads_backend.model import Permission, Role, User


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite:///{tmp_path / 'leads.db'}"


@pytest.fixture
def runner():
    return CliRunner()


def _count(database_url, model):
    database = Database(database_url)
    try:
        with database.session() as db:
            return db.query(model).count()
    finally:
        database.dispose()


class TestCli:

    def test_seed_is_idempotent(self, runner, database_url):
        assert runner.invoke(cli, ["initdb", "--database-url", database_url]).exit_code == 0

        first = runner.invoke(cli, ["seed", "--database-url", database_url])
        assert first.exit_code == 0, first.output
        assert "Seeded 6 roles" in first.output

        permissions = _count(database_url, Permission)

        second = runner.invoke(cli, ["seed", "--database-url", database_url])
        assert second.exit_code == 0, second.output
        assert _count(database_url, Permission) == permissions == 42
        assert _count(database_url, Role) == 6

    def test_create_admin(self, runner, database_url):
        runner.invoke(cli, ["initdb", "--database-url", database_url])
        runner.invoke(cli, ["seed", "--database-url", database_url])

        args = ["create-admin", "--email", "Root@Example.com", "--password", "s3cret!", "--database-url", database_url]
        result = runner.invoke(cli, args)
        assert result.exit_code == 0, result.output

        # A second run finds the existing account
        assert runner.invoke(cli, args).exit_code == 0

        database = Database(database_url)
        try:
            with database.session() as db:
                users = db.query(User).all()
                assert len(users) == 1
                assert users[0].email == "root@example.com"
                assert users[0].role.name == "Super Admin"
                assert decrypt_password(users[0].password) == "s3cret!"
        finally:
            database.dispose()

    def test_create_admin_unknown_role(self, runner, database_url):
        runner.invoke(cli, ["initdb", "--database-url", database_url])

        result = runner.invoke(cli, ["create-admin", "--email", "root@example.com", "--password", "s3cret!",
                                     "--role", "Nobody", "--database-url", database_url])

        assert result.exit_code != 0
        assert "Role with ID Nobody not found" in result.output
