from typing import Optional

import typer

from typer import Option

from models import Account, AccountRole, Workspace

app = typer.Typer(help="Administrative commands for the embed API")


@app.command()
def migrate(
    revision: str = Option("head", "--revision", help="Alembic revision to upgrade to"),
    config_path: str = Option("alembic.ini", "--config"),
):
    """Apply database migrations."""
    from alembic import command
    from alembic.config import Config

    command.upgrade(Config(config_path), revision)
    typer.echo(f"Database upgraded to {revision}")


@app.command()
def create_workspace(
    name: str = Option(..., "--name"),
    slug: str = Option(..., "--slug"),
):
    from db.session import session_scope

    with session_scope() as db:
        if db.query(Workspace).filter(Workspace.slug == slug).first():
            typer.echo(f"Workspace with slug '{slug}' already exists", err=True)
            raise typer.Exit(code=1)

        workspace = Workspace(name=name, slug=slug)
        db.add(workspace)
        db.flush()
        typer.echo(f"Created workspace {workspace.id} ({slug})")


@app.command()
def create_admin(
    username: str = Option(..., "--username"),
    password: str = Option(..., "--password", prompt=True, hide_input=True, confirmation_prompt=True),
):
    from core.auth import get_auth_provider
    from db.session import session_scope

    provider = get_auth_provider()

    with session_scope() as db:
        if db.query(Account).filter(Account.username == username).first():
            typer.echo(f"Account '{username}' already exists", err=True)
            raise typer.Exit(code=1)

        account = Account(
            username=username,
            password_hash=provider.hash_password(password),
            role=AccountRole.ADMIN,
        )
        db.add(account)
        db.flush()
        typer.echo(f"Created admin account {account.id} ({username})")


@app.command()
def create_api_key(
    created_by: Optional[int] = Option(None, "--created-by", help="Account id recorded as the key's creator"),
):
    """Create a key for the public embed API and print its secret."""
    from db.session import session_scope
    from services.api_key_service import ApiKeyService

    with session_scope() as db:
        api_key = ApiKeyService(db).create(created_by=created_by)
        typer.echo(api_key.secret)


@app.command()
def issue_token(
    username: str = Option(..., "--username"),
    expires_minutes: Optional[int] = Option(None, "--expires-minutes"),
):
    """Print a bearer token for an existing account."""
    from core.auth import get_auth_provider
    from db.session import session_scope

    with session_scope() as db:
        account = db.query(Account).filter(Account.username == username).first()
        if not account or account.suspended:
            typer.echo(f"No active account named '{username}'", err=True)
            raise typer.Exit(code=1)

        token = get_auth_provider().create_access_token(account.id, account.username, expires_minutes)
        typer.echo(token)


if __name__ == "__main__":
    app()
