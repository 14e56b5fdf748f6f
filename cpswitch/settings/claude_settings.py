# -*- coding: utf-8 -*-
"""Apply providers to Claude Code's settings.json and manage its backups.

Only the ``env`` mapping of settings.json is touched; every other
top-level key is written back unchanged.

Backup-then-write is two sequential steps inside one call. Two processes
applying at the same time may interleave those steps (last writer wins);
no cross-process lock is taken.
"""

from __future__ import annotations

import logging
import os
import re
import shutil
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..config.fs import (
    ensure_dir,
    ensure_owner_only,
    read_json,
    write_bytes,
    write_json,
)
from ..config.paths import PathsOptions, resolve_paths
from ..constant import (
    API_TIMEOUT_MS_VALUE,
    BACKUP_PREFIX,
    BACKUP_RETENTION,
    ENV_API_TIMEOUT_MS,
    ENV_AUTH_TOKEN,
    ENV_BASE_URL,
    ENV_DISABLE_NONESSENTIAL_TRAFFIC,
    ENV_MODEL,
)
from ..errors import (
    BackupNotFoundError,
    InvalidBackupNameError,
    InvalidBackupPathError,
)
from ..providers.models import ProviderProfile
from ..providers.presets import is_passthrough
from .models import BackupRecord

logger = logging.getLogger(__name__)

BACKUP_NAME_PATTERN = re.compile(
    r"^settings\.backup-\d{4}-\d{2}-\d{2}T\d{2}-\d{2}-\d{2}-\d{3}Z\.json$",
)

# ---------------------------------------------------------------------------
# Read
# ---------------------------------------------------------------------------


def read_claude_settings(
    options: Optional[PathsOptions] = None,
) -> Dict[str, Any]:
    """Return parsed settings.json, or ``{}`` when it does not exist."""
    paths = resolve_paths(options)
    try:
        settings = read_json(paths.claude_settings_path)
    except FileNotFoundError:
        return {}
    return settings if isinstance(settings, dict) else {}


# ---------------------------------------------------------------------------
# Backups
# ---------------------------------------------------------------------------


def backup_timestamp(now: datetime) -> str:
    """``2024-05-01T12:30:45.123Z`` with ``:`` and ``.`` made file-safe."""
    now = now.astimezone(timezone.utc)
    stamp = now.strftime("%Y-%m-%dT%H:%M:%S")
    stamp = f"{stamp}.{now.microsecond // 1000:03d}Z"
    return stamp.replace(":", "-").replace(".", "-")


def _backup_entries(backup_dir: Path) -> List[os.DirEntry]:
    try:
        with os.scandir(backup_dir) as it:
            return [
                entry
                for entry in it
                if entry.is_file() and entry.name.startswith(BACKUP_PREFIX)
            ]
    except FileNotFoundError:
        return []


def _to_record(entry: os.DirEntry) -> BackupRecord:
    stat = entry.stat()
    return BackupRecord(
        name=entry.name,
        mtime=stat.st_mtime_ns / 1_000_000,
        size=stat.st_size,
    )


def _sorted_records(backup_dir: Path) -> List[BackupRecord]:
    records = [_to_record(entry) for entry in _backup_entries(backup_dir)]
    return sorted(records, key=lambda r: (r.mtime, r.name), reverse=True)


def prune_backups(backup_dir: Path, keep: int = BACKUP_RETENTION) -> None:
    """Delete all but the *keep* most recent backups."""
    for record in _sorted_records(backup_dir)[keep:]:
        (backup_dir / record.name).unlink()
        logger.info("Pruned settings backup %s", record.name)


def _free_backup_path(backup_dir: Path, now: datetime) -> Path:
    path = backup_dir / f"{BACKUP_PREFIX}{backup_timestamp(now)}.json"
    while path.exists():
        now += timedelta(milliseconds=1)
        path = backup_dir / f"{BACKUP_PREFIX}{backup_timestamp(now)}.json"
    return path


def backup_claude_settings(
    options: Optional[PathsOptions] = None,
) -> Optional[Path]:
    """Copy settings.json into the backup directory, then prune.

    Returns the backup path, or ``None`` when there is nothing to back up.
    """
    paths = resolve_paths(options)
    if not paths.claude_settings_path.is_file():
        return None

    ensure_dir(paths.backup_dir)
    target = _free_backup_path(paths.backup_dir, datetime.now(timezone.utc))
    shutil.copyfile(paths.claude_settings_path, target)
    ensure_owner_only(target)
    logger.info("Backed up %s to %s", paths.claude_settings_path, target)

    prune_backups(paths.backup_dir)
    return target


def list_backups(
    options: Optional[PathsOptions] = None,
) -> List[BackupRecord]:
    """Return backups newest first."""
    return _sorted_records(resolve_paths(options).backup_dir)


def restore_backup(name: str, options: Optional[PathsOptions] = None) -> None:
    """Overwrite settings.json with the backup called *name*.

    The live file is backed up first. Names that do not match the backup
    pattern, or that resolve outside the backup directory, are rejected
    before anything is written.
    """
    if not name or not BACKUP_NAME_PATTERN.fullmatch(name):
        raise InvalidBackupNameError("Invalid backup name.")

    paths = resolve_paths(options)
    backup_dir = paths.backup_dir.resolve()
    source = (backup_dir / name).resolve()
    if source.parent != backup_dir:
        raise InvalidBackupPathError("Invalid backup path.")
    if not source.is_file():
        raise BackupNotFoundError(f"Backup '{name}' not found.")

    # Read before backing up: pruning may delete the source.
    content = source.read_bytes()

    backup_claude_settings(options)
    write_bytes(paths.claude_settings_path, content)
    logger.info("Restored %s from backup %s", paths.claude_settings_path, name)


# ---------------------------------------------------------------------------
# Apply
# ---------------------------------------------------------------------------


def _merge_env(env: Dict[str, Any], profile: ProviderProfile) -> None:
    if is_passthrough(profile):
        for key in (
            ENV_BASE_URL,
            ENV_AUTH_TOKEN,
            ENV_MODEL,
            ENV_DISABLE_NONESSENTIAL_TRAFFIC,
        ):
            env.pop(key, None)
    else:
        env[ENV_BASE_URL] = profile.base_url or ""
        env[ENV_AUTH_TOKEN] = profile.auth_token or ""
        model = (profile.model or "").strip()
        if model:
            env[ENV_MODEL] = model
        else:
            env.pop(ENV_MODEL, None)
        env[ENV_DISABLE_NONESSENTIAL_TRAFFIC] = "1"
    env[ENV_API_TIMEOUT_MS] = API_TIMEOUT_MS_VALUE


def apply_provider(
    profile: ProviderProfile,
    options: Optional[PathsOptions] = None,
) -> Dict[str, Any]:
    """Write *profile*'s credentials into settings.json.

    The existing file is backed up before it is overwritten; if the backup
    fails nothing is written. Returns the new settings document.
    """
    paths = resolve_paths(options)
    settings = read_claude_settings(options)
    raw_env = settings.get("env")
    env = dict(raw_env) if isinstance(raw_env, dict) else {}

    _merge_env(env, profile)
    next_settings = {**settings, "env": env}

    backup_claude_settings(options)
    write_json(paths.claude_settings_path, next_settings)
    logger.info(
        "Applied provider '%s' to %s",
        profile.name,
        paths.claude_settings_path,
    )
    return next_settings
