# -*- coding: utf-8 -*-
"""Claude Code settings.json writer with rotating backups."""

from .models import BackupRecord
from .claude_settings import (
    BACKUP_NAME_PATTERN,
    apply_provider,
    backup_claude_settings,
    list_backups,
    prune_backups,
    read_claude_settings,
    restore_backup,
)

__all__ = [
    "BackupRecord",
    "BACKUP_NAME_PATTERN",
    "apply_provider",
    "backup_claude_settings",
    "list_backups",
    "prune_backups",
    "read_claude_settings",
    "restore_backup",
]
