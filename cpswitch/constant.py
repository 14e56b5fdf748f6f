# -*- coding: utf-8 -*-
import os

# ---------------------------------------------------------------------------
# Path overrides (explicit options > these env vars > computed defaults).
# See ``cpswitch.config.paths.resolve_paths``.
# ---------------------------------------------------------------------------
CONFIG_PATH_ENV = "CPS_CONFIG_PATH"
CONFIG_DIR_ENV = "CPS_CONFIG_DIR"
BACKUP_DIR_ENV = "CPS_BACKUP_DIR"
CLAUDE_SETTINGS_PATH_ENV = "CPS_CLAUDE_SETTINGS_PATH"
CLAUDE_DIR_ENV = "CPS_CLAUDE_DIR"

APP_DIR_NAME = "claude-provider-switch"
CONFIG_FILE = "config.json"
BACKUP_DIR_NAME = "backups"
CLAUDE_DIR_NAME = ".claude"
CLAUDE_SETTINGS_FILE = "settings.json"

CONFIG_VERSION = 1

# Env key for app log level (used by CLI and the ``serve`` command).
LOG_LEVEL_ENV = "CPS_LOG_LEVEL"

DEFAULT_HOST = os.environ.get("CPS_HOST", "127.0.0.1")
DEFAULT_PORT = int(os.environ.get("CPS_PORT", "8787"))

# ---------------------------------------------------------------------------
# Claude settings env keys written on apply
# ---------------------------------------------------------------------------
ENV_BASE_URL = "ANTHROPIC_BASE_URL"
ENV_AUTH_TOKEN = "ANTHROPIC_AUTH_TOKEN"
ENV_MODEL = "ANTHROPIC_MODEL"
ENV_DISABLE_NONESSENTIAL_TRAFFIC = "CLAUDE_CODE_DISABLE_NONESSENTIAL_TRAFFIC"
ENV_API_TIMEOUT_MS = "API_TIMEOUT_MS"
API_TIMEOUT_MS_VALUE = "3000000"

# Backups of settings.json kept after each apply / restore.
BACKUP_PREFIX = "settings.backup-"
BACKUP_RETENTION = 3

# Replacement for any non-empty auth token leaving the process.
AUTH_TOKEN_MASK = "***"
