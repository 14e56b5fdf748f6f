# -*- coding: utf-8 -*-
"""Resolve on-disk locations of the registry, backups and Claude settings."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, Optional

from pydantic import BaseModel, Field

from ..constant import (
    APP_DIR_NAME,
    BACKUP_DIR_ENV,
    BACKUP_DIR_NAME,
    CLAUDE_DIR_ENV,
    CLAUDE_DIR_NAME,
    CLAUDE_SETTINGS_FILE,
    CLAUDE_SETTINGS_PATH_ENV,
    CONFIG_DIR_ENV,
    CONFIG_FILE,
    CONFIG_PATH_ENV,
)


class PathsOptions(BaseModel):
    """Explicit path overrides; every field is optional."""

    config_dir: Optional[Path] = None
    config_path: Optional[Path] = None
    backup_dir: Optional[Path] = None
    claude_dir: Optional[Path] = None
    claude_settings_path: Optional[Path] = None


class ResolvedPaths(BaseModel):
    """Final locations used by the store and the settings writer."""

    config_dir: Path
    config_path: Path
    backup_dir: Path
    claude_dir: Path
    claude_settings_path: Path = Field(
        ...,
        description="settings.json consumed by Claude Code",
    )


def _pick(
    explicit: Optional[Path],
    environ: Mapping[str, str],
    env_key: str,
) -> Optional[Path]:
    if explicit:
        return Path(explicit).expanduser()
    value = environ.get(env_key, "")
    if value:
        return Path(value).expanduser()
    return None


def resolve_paths(
    options: Optional[PathsOptions] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ResolvedPaths:
    """Return final paths by precedence: *options* > env vars > defaults.

    ``config_dir`` falls back to the parent of ``config_path``,
    ``backup_dir`` to ``<config_dir>/backups`` and ``claude_dir`` to the
    parent of ``claude_settings_path``. No file system access happens here.
    """
    if options is None:
        options = PathsOptions()
    if environ is None:
        environ = os.environ

    home = Path.home()

    config_path = _pick(
        options.config_path,
        environ,
        CONFIG_PATH_ENV,
    ) or (home / ".config" / APP_DIR_NAME / CONFIG_FILE)
    config_dir = (
        _pick(options.config_dir, environ, CONFIG_DIR_ENV)
        or config_path.parent
    )
    backup_dir = (
        _pick(options.backup_dir, environ, BACKUP_DIR_ENV)
        or config_dir / BACKUP_DIR_NAME
    )

    claude_settings_path = _pick(
        options.claude_settings_path,
        environ,
        CLAUDE_SETTINGS_PATH_ENV,
    ) or (home / CLAUDE_DIR_NAME / CLAUDE_SETTINGS_FILE)
    claude_dir = (
        _pick(options.claude_dir, environ, CLAUDE_DIR_ENV)
        or claude_settings_path.parent
    )

    return ResolvedPaths(
        config_dir=config_dir,
        config_path=config_path,
        backup_dir=backup_dir,
        claude_dir=claude_dir,
        claude_settings_path=claude_settings_path,
    )
