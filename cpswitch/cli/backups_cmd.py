# -*- coding: utf-8 -*-
"""CLI commands for Claude settings backups."""
from __future__ import annotations

from datetime import datetime

import click

from ..settings import list_backups, restore_backup
from .providers_cmd import handle_errors


@click.group("backups")
def backups_group() -> None:
    """Inspect and restore backups of Claude settings.json."""


@backups_group.command("list")
@handle_errors
def list_cmd() -> None:
    """Show backups, newest first."""
    backups = list_backups()
    if not backups:
        click.echo("No backups found.")
        return
    for record in backups:
        when = datetime.fromtimestamp(record.mtime / 1000)
        click.echo(
            f"{record.name}  {when:%Y-%m-%d %H:%M:%S}  {record.size} bytes",
        )


@backups_group.command("restore")
@click.argument("name")
@handle_errors
def restore_cmd(name: str) -> None:
    """Restore settings.json from backup NAME."""
    restore_backup(name)
    click.echo(f"Restored backup '{name}'.")
