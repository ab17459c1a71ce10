import os
from datetime import datetime, timedelta
from functools import wraps
import click
from flask import current_app
from flask.cli import with_appcontext
from flask_migrate import migrate as alembic_migrate, stamp as alembic_stamp, upgrade as alembic_upgrade
from models import db
from models.account import OneTimeCode

TRUTHY = ("1", "true", "yes")


def _is_production() -> bool:
    envs = ((current_app.config.get("ENV") or "").lower(), (os.getenv("APP_ENV") or "").lower())
    return "production" in envs


def production_guard(fn):
    """Refuse schema changes in production unless ALLOW_DB_MIGRATIONS is set."""

    @wraps(fn)
    def wrapper(*args, **kwargs):
        if _is_production() and (os.getenv("ALLOW_DB_MIGRATIONS") or "").lower() not in TRUTHY:
            raise click.ClickException("Refusing to run DB migration in production without ALLOW_DB_MIGRATIONS=true")
        return fn(*args, **kwargs)

    return wrapper


@click.command("db-migrate-safe")
@click.option("-m", "--message", default="auto migration", help="Migration message")
@with_appcontext
def db_migrate_safe(message):
    """Generate a migration script from the current models."""
    alembic_migrate(message=message)
    click.echo("Migration script generated.")


@click.command("db-upgrade-safe")
@with_appcontext
@production_guard
def db_upgrade_safe():
    """Apply pending migrations."""
    alembic_upgrade()
    click.echo("Database upgraded.")


@click.command("db-stamp-safe")
@click.option("--revision", default="head", help="Revision to stamp, default 'head'")
@with_appcontext
@production_guard
def db_stamp_safe(revision):
    """Record a revision without running migrations."""
    alembic_stamp(revision=revision)
    click.echo(f"Database stamped at {revision}.")


def purge_expired_otps(now=None) -> int:
    """Delete codes past the OTP expiry window; returns how many went."""
    ttl = current_app.config["OTP_EXPIRY_MINUTES"]
    cutoff = (now or datetime.utcnow()) - timedelta(minutes=ttl)
    removed = OneTimeCode.query.filter(OneTimeCode.created_at < cutoff).delete(synchronize_session=False)
    db.session.commit()
    return removed


@click.command("purge-expired-otps")
@with_appcontext
def purge_expired_otps_command():
    """Delete one-time codes that can no longer be used."""
    removed = purge_expired_otps()
    click.echo(f"Removed {removed} expired OTP(s).")


def register_cli(app):
    for command in (db_migrate_safe, db_upgrade_safe, db_stamp_safe, purge_expired_otps_command):
        app.cli.add_command(command)
