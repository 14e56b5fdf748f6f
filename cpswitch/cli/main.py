# -*- coding: utf-8 -*-
"""``claude-provider`` command line entry point."""
from __future__ import annotations

import logging
import os
import socket

import click

from .. import __version__
from ..constant import DEFAULT_HOST, DEFAULT_PORT, LOG_LEVEL_ENV
from .backups_cmd import backups_group
from .providers_cmd import (
    add_cmd,
    current_cmd,
    fail,
    list_cmd,
    remove_cmd,
    select_cmd,
    update_cmd,
    use_cmd,
)

LOG_LEVELS = ("critical", "error", "warning", "info", "debug")


def find_available_port(host: str, start: int, attempts: int = 20) -> int:
    """First port in ``[start, start + attempts)`` free on *host*."""
    for port in range(start, start + attempts):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
            try:
                sock.bind((host, port))
            except OSError:
                continue
            return port
    raise OSError("No available port found.")


@click.group()
@click.version_option(__version__, "-v", "--version", message="%(version)s")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=lambda: os.environ.get(LOG_LEVEL_ENV, "warning").lower(),
    show_default="warning",
    help=f"Log level (also via {LOG_LEVEL_ENV})",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str) -> None:
    """Claude provider switcher."""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["log_level"] = log_level


@cli.command("version")
def version_cmd() -> None:
    """Show CLI version."""
    click.echo(__version__)


@cli.command("serve")
@click.option("--host", default=DEFAULT_HOST, show_default=True)
@click.option("--port", type=int, default=DEFAULT_PORT, show_default=True)
@click.pass_context
def serve_cmd(ctx: click.Context, host: str, port: int) -> None:
    """Start the local API server."""
    import uvicorn

    from ..app import create_app

    try:
        port = find_available_port(host, port)
    except OSError as exc:
        fail(str(exc))

    click.echo(f"Server running at http://{host}:{port}")
    uvicorn.run(
        create_app(),
        host=host,
        port=port,
        log_level=(ctx.obj or {}).get("log_level", "info"),
    )


for _command in (
    list_cmd,
    current_cmd,
    use_cmd,
    select_cmd,
    add_cmd,
    update_cmd,
    remove_cmd,
    backups_group,
):
    cli.add_command(_command)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
