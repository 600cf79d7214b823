"""Flask CLI commands for development catalog seeding and admin accounts."""

from __future__ import annotations

import logging

import click
from flask import current_app
from flask.cli import with_appcontext
from sqlalchemy.exc import SQLAlchemyError

from storefront.core.extensions import db
from storefront.seeds import catalog

LOGGER = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    """Raise logging verbosity for seed modules when requested."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.getLogger(catalog.__name__).setLevel(level)
    LOGGER.setLevel(level)


def _echo_summary(summary: dict[str, dict[str, int]]) -> None:
    """Pretty-print a tabular summary of seed results."""
    click.echo("Seed summary:")
    if not summary:
        click.echo("  (no changes)")
        return
    width = max(len(name) for name in summary)
    for table, counters in sorted(summary.items()):
        created = counters.get("created", 0)
        existing = counters.get("existing", 0)
        click.echo(f"  {table.ljust(width)}  created={created:>2}  existing={existing:>2}")


def _ensure_non_production() -> None:
    """Abort seeding when running in production."""
    config = current_app.config
    is_debug = bool(config.get("DEBUG"))
    is_testing = bool(config.get("TESTING"))
    if not is_debug and not is_testing:
        raise click.UsageError("Seed commands are restricted to non-production environments.")


@click.group("seed")
@click.option("--verbose", is_flag=True, help="Enable verbose logging for seeding.")
@click.pass_context
def seed_cli(ctx: click.Context, verbose: bool) -> None:
    """Collection of database seeding commands."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    _configure_logging(verbose)


@seed_cli.command("catalog")
@click.pass_context
@with_appcontext
def catalog_command(ctx: click.Context) -> None:
    """Populate the product catalog with idempotent demo fixtures."""
    _ensure_non_production()
    verbose = bool(ctx.obj.get("verbose", False))
    try:
        summary = catalog.seed_catalog(db, verbose=verbose)
    except SQLAlchemyError as exc:  # pragma: no cover - CLI safeguard
        db.session.rollback()
        raise click.ClickException(f"Seeding failed: {exc}") from exc
    _echo_summary(summary)


@seed_cli.command("admin")
@click.option("--email", required=True, help="Admin email address.")
@click.option("--name", required=True, help="Display name.")
@click.option("--password", required=True, hide_input=True, help="Account password.")
@with_appcontext
def admin_command(email: str, name: str, password: str) -> None:
    """Create an admin account, or promote an existing one."""
    _ensure_non_production()
    if len(password) < 6:
        raise click.BadParameter("must be at least 6 characters", param_hint="--password")
    try:
        _, created = catalog.seed_admin(db, email=email, name=name, password=password)
    except (SQLAlchemyError, ValueError) as exc:
        db.session.rollback()
        raise click.ClickException(f"Admin seeding failed: {exc}") from exc
    click.echo(f"Admin {'created' if created else 'promoted'}: {email.strip().lower()}")
