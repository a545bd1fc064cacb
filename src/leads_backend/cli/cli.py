import click
from leads_backend.database import init_database
from leads_backend.errors import DomainError
from leads_backend.seeding import DEFAULT_SEED_FILE, init_admin_user, seed_from_file
from leads_backend.server import configure_logging
from leads_backend.settings import settings

def _database(url):
    configure_logging()
    return init_database(url)

@click.command()
@click.option("--database-url", "database_url", default=None, help="SQLAlchemy URL, defaults to the configured database")
def initdb(database_url):
    """Create all tables directly from the models (development only, use alembic otherwise)."""

    database = _database(database_url)
    database.create_all()
    database.dispose()

    click.echo("Schema created")

@click.command()
@click.option("--file", "-f", "filename", default=None, type=click.Path(exists=True, dir_okay=False), help="Seed document, defaults to the bundled seed.yaml")
@click.option("--database-url", "database_url", default=None)
def seed(filename, database_url):
    """Load permissions and roles from a YAML seed document. Safe to run repeatedly."""

    filename = filename or settings.SEED_FILE or DEFAULT_SEED_FILE
    database = _database(database_url)

    try:
        with database.session() as db:
            roles = seed_from_file(db, filename)
    finally:
        database.dispose()

    click.echo(f"Seeded {len(roles)} roles from {filename}")

@click.command()
@click.option("--email", "-e", "email", prompt=True)
@click.option("--password", "-p", "password", prompt=True, hide_input=True, confirmation_prompt=True)
@click.option("--name", "-n", "name", default="Administrator", show_default=True)
@click.option("--role", "-r", "role_name", default=None, help="Role to bind the user to, defaults to ADMIN_ROLE")
@click.option("--database-url", "database_url", default=None)
def create_admin(email, password, name, role_name, database_url):
    """Create the administrator account bound to an existing role."""

    database = _database(database_url)

    try:
        with database.session() as db:
            admin = init_admin_user(db, email, password, role_name or settings.ADMIN_ROLE, name=name)
            click.echo(f"Administrator {admin.email} ({admin.id})")
    except DomainError as e:
        raise click.ClickException(e.message)
    finally:
        database.dispose()

@click.group()
def cli():
    pass

cli.add_command(initdb,"initdb")
cli.add_command(seed,"seed")
cli.add_command(create_admin,"create-admin")

if __name__ == '__main__':
    cli()
