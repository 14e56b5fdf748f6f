# -*- coding: utf-8 -*-
"""Error types raised by the registry, the settings writer and the file store.

Adapters (CLI / HTTP) translate these into exit codes or status codes;
the core never swallows them.
"""


class ProviderSwitchError(Exception):
    """Base class for claude-provider-switch errors."""


class ValidationError(ProviderSwitchError, ValueError):
    """Raised when a provider field is missing or malformed."""


class InvalidIdError(ValidationError):
    """Raised when a user supplied provider id is not a valid slug."""


class DuplicateNameError(ProviderSwitchError):
    """Raised when a provider with the same normalized name exists."""


class DuplicateIdError(ProviderSwitchError):
    """Raised when a user supplied provider id is already taken."""


class ProviderNotFoundError(ProviderSwitchError, LookupError):
    """Raised when an id or name does not resolve to a provider."""


class ReadOnlyProviderError(ProviderSwitchError):
    """Raised when attempting to remove or rename a built-in preset."""


class MissingCredentialsError(ProviderSwitchError):
    """Raised when applying a provider without base URL or auth token."""


class InvalidBackupNameError(ProviderSwitchError, ValueError):
    """Raised when a backup name does not match the backup file pattern."""


class InvalidBackupPathError(ProviderSwitchError, ValueError):
    """Raised when a backup path resolves outside the backup directory."""


class BackupNotFoundError(ProviderSwitchError, LookupError):
    pass


class JsonParseError(ProviderSwitchError, ValueError):
    """Raised when a JSON document on disk cannot be parsed."""

    def __init__(self, path, message: str) -> None:
        super().__init__(f"Failed to parse {path}: {message}")
        self.path = path
