import json

import click
from flask.cli import with_appcontext

from feedback_portal.extensions import db
from feedback_portal.services import settings as settings_service
from feedback_portal.services.credentials import upsert_credentials
from feedback_portal.services.errors import ServiceError


@click.group()
def admin():
    """Admin account management."""


@admin.command("set-password")
@click.option("--username", required=True)
@click.option("--password", required=True, prompt=True, hide_input=True, confirmation_prompt=True)
@with_appcontext
def admin_set_password(username, password):
    try:
        cred = upsert_credentials(username, password)
    except ServiceError as exc:
        raise click.ClickException(exc.message)
    click.echo(f"Admin credentials saved for {cred.username}")


@click.group("settings")
def settings_group():
    """Feedback settings (domains, concern types, prompt texts)."""


@settings_group.command("show")
@with_appcontext
def settings_show():
    click.echo(json.dumps(settings_service.get_current_settings(), ensure_ascii=False, indent=2))


@settings_group.command("reset")
@click.confirmation_option(prompt="Replace the current settings with the defaults?")
@with_appcontext
def settings_reset():
    saved = settings_service.reset_settings(saved_by="cli")
    click.echo(f"Settings reset to defaults (version {saved['settings_version']})")


@click.command("init-db")
@with_appcontext
def init_db():
    """Create tables directly (local dev/demo). Use `flask db upgrade` elsewhere."""
    db.create_all()
    click.echo("Database tables created")


def register_cli(app):
    app.cli.add_command(admin)
    app.cli.add_command(settings_group)
    app.cli.add_command(init_db)
