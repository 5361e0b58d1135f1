# Overview: Flask CLI commands for inspecting the demo store.

# backend/catalogshare/cli.py
# Commands Legend (run from the backend directory):
# - Set FLASK_APP to wsgi.py (PowerShell: $env:FLASK_APP="wsgi.py").
# - python -m flask demo stats
#   Print the merchant's dashboard counters.
# - python -m flask demo catalogues --limit 3
#   List the most viewed catalogues.
# - python -m flask demo share-link 1 --base-url http://localhost:5000
#   Share a catalogue and print its WhatsApp link.
#
# The store is in memory, so each command runs against a freshly seeded copy.

from __future__ import annotations

import click
from flask import current_app
from flask.cli import with_appcontext

from .extensions import get_storage
from .services import share_service


@click.group('demo')
def demo_group():
    """Inspect the seeded demo store."""


@demo_group.command('stats')
@with_appcontext
def stats_command():
    """Print dashboard counters for the configured merchant."""
    user_id = current_app.config["DEFAULT_USER_ID"]
    stats = get_storage().get_store_stats(user_id)
    if stats is None:
        click.echo(f"No stats recorded for user {user_id}")
        return
    for name, value in stats.to_dict().items():
        if name in ("id", "user_id"):
            continue
        click.echo(f"{name:<20} {value}")


@demo_group.command('catalogues')
@click.option('--limit', default=3, show_default=True, type=int, help='How many catalogues to show')
@with_appcontext
def catalogues_command(limit: int):
    """List the most viewed catalogues."""
    user_id = current_app.config["DEFAULT_USER_ID"]
    catalogues = get_storage().list_popular_catalogues(user_id, limit)
    if not catalogues:
        click.echo("No catalogues found")
        return
    for c in catalogues:
        click.echo(f"{c.id:>4}  {c.name:<30} views={c.view_count} shares={c.share_count}")


@demo_group.command('share-link')
@click.argument('catalogue_id', type=int)
@click.option('--base-url', default='http://localhost:5000', show_default=True)
@click.option('--message', default=None, help='Message text placed before the link')
@with_appcontext
def share_link_command(catalogue_id: int, base_url: str, message: str | None):
    """Share a catalogue and print the WhatsApp link."""
    try:
        result = share_service.share_catalogue(
            get_storage(), catalogue_id, base_url=base_url, message=message
        )
    except share_service.ShareError as exc:
        raise click.ClickException(str(exc))
    if result is None:
        raise click.ClickException(f"Catalogue {catalogue_id} not found")
    click.echo(result["whatsapp_url"])


def register_commands(app):
    app.cli.add_command(demo_group)
