# -*- coding: utf-8 -*-
"""CLI commands for managing provider profiles."""
from __future__ import annotations

import functools
from typing import Callable, Optional

import click

from ..errors import ProviderSwitchError
from ..providers import (
    ProviderProfile,
    ProviderUpdate,
    create_provider,
    delete_provider,
    edit_provider,
    ensure_registry,
    get_current_provider,
)
from ..switch import use_provider


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def fail(message: str) -> None:
    click.echo(click.style(message, fg="red"), err=True)
    raise SystemExit(1)


def handle_errors(func: Callable) -> Callable:
    """Turn domain errors into a red message and exit status 1."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ProviderSwitchError as exc:
            fail(str(exc))

    return wrapper


def format_provider(provider: ProviderProfile) -> str:
    """``[id] name (baseUrl) [model: m]``"""
    parts = [f"[{provider.id or '-'}] {provider.name}"]
    if provider.base_url:
        parts.append(f"({provider.base_url})")
    if provider.model:
        parts.append(f"[model: {provider.model}]")
    return " ".join(parts)


def _read_token(token: Optional[str], token_stdin: bool) -> Optional[str]:
    if token and token_stdin:
        fail("Use either --token or --token-stdin, not both.")
    if not token_stdin:
        return token.strip() if token else token
    stdin = click.get_text_stream("stdin")
    if stdin.isatty():
        fail("No stdin input detected for --token-stdin.")
    return stdin.read().strip()


def provider_options(func: Callable) -> Callable:
    """Options shared by ``add`` and ``update``."""
    options = [
        click.option("--base-url", default=None, help="API base URL"),
        click.option("--token", default=None, help="Auth token"),
        click.option(
            "--token-stdin",
            is_flag=True,
            default=False,
            help="Read auth token from stdin",
        ),
        click.option("--model", default=None, help="Model name"),
        click.option("--website", default=None, help="Website URL"),
        click.option("--description", default=None, help="Description"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _apply(reference: str) -> None:
    provider = use_provider(reference)
    click.echo(f"Applied provider '{provider.name}'.")


# ---------------------------------------------------------------------------
# list / current
# ---------------------------------------------------------------------------


@click.command("list")
@handle_errors
def list_cmd() -> None:
    """List configured providers (* marks the current one)."""
    doc = ensure_registry()
    for provider in doc.providers:
        marker = "*" if provider.id == doc.current else " "
        click.echo(f"{marker} {format_provider(provider)}")


@click.command("current")
@handle_errors
def current_cmd() -> None:
    """Show the current provider."""
    doc = ensure_registry()
    if not doc.current:
        click.echo("No provider selected.")
        return
    provider = get_current_provider()
    if provider is None:
        click.echo("Current provider not found in config.")
        return
    click.echo(format_provider(provider))


# ---------------------------------------------------------------------------
# use / select
# ---------------------------------------------------------------------------


@click.command("use")
@click.argument("reference")
@handle_errors
def use_cmd(reference: str) -> None:
    """Use provider REFERENCE (id or name) and apply it to Claude settings."""
    _apply(reference)


@click.command("select")
@handle_errors
def select_cmd() -> None:
    """Interactively select a provider and apply it to Claude settings."""
    doc = ensure_registry()
    if not doc.providers:
        fail("No providers configured.")
    if not click.get_text_stream("stdin").isatty():
        fail("Interactive select requires a TTY terminal.")

    for index, provider in enumerate(doc.providers, start=1):
        marker = "*" if provider.id == doc.current else " "
        click.echo(f"{index}. {marker} {format_provider(provider)}")

    choice = click.prompt(
        "Select provider by number",
        type=click.IntRange(1, len(doc.providers)),
    )
    _apply(doc.providers[choice - 1].id)


# ---------------------------------------------------------------------------
# add / update / remove
# ---------------------------------------------------------------------------


@click.command("add")
@click.argument("name")
@click.option(
    "--id",
    "provider_id",
    default=None,
    help="Stable provider id (lowercase letters/numbers/hyphen)",
)
@provider_options
@handle_errors
def add_cmd(
    name: str,
    provider_id: Optional[str],
    base_url: Optional[str],
    token: Optional[str],
    token_stdin: bool,
    model: Optional[str],
    website: Optional[str],
    description: Optional[str],
) -> None:
    """Add a custom provider called NAME."""
    auth_token = _read_token(token, token_stdin)
    if not base_url or not base_url.strip():
        fail("Base URL is required.")
    if not auth_token:
        fail("Auth token is required.")

    create_provider(
        ProviderProfile(
            id=provider_id,
            name=name,
            base_url=base_url,
            auth_token=auth_token,
            model=model,
            website=website,
            description=description,
        ),
    )
    click.echo(f"Added provider '{name}'.")


@click.command("update")
@click.argument("reference")
@click.option("--name", default=None, help="New provider name")
@provider_options
@handle_errors
def update_cmd(
    reference: str,
    name: Optional[str],
    base_url: Optional[str],
    token: Optional[str],
    token_stdin: bool,
    model: Optional[str],
    website: Optional[str],
    description: Optional[str],
) -> None:
    """Update provider REFERENCE; omitted options keep stored values."""
    changes = ProviderUpdate(
        name=name,
        base_url=base_url,
        auth_token=_read_token(token, token_stdin),
        model=model,
        website=website,
        description=description,
    )
    edit_provider(reference, changes)
    click.echo(f"Updated provider '{reference}'.")


@click.command("remove")
@click.argument("reference")
@handle_errors
def remove_cmd(reference: str) -> None:
    """Remove provider REFERENCE (id or name)."""
    delete_provider(reference)
    click.echo(f"Removed provider '{reference}'.")
