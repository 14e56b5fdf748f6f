# -*- coding: utf-8 -*-
"""Path resolution and JSON file storage."""

from .fs import (
    ensure_dir,
    ensure_owner_only,
    read_json,
    write_bytes,
    write_json,
)
from .paths import PathsOptions, ResolvedPaths, resolve_paths

__all__ = [
    # paths
    "PathsOptions",
    "ResolvedPaths",
    "resolve_paths",
    # fs
    "ensure_dir",
    "ensure_owner_only",
    "read_json",
    "write_bytes",
    "write_json",
]
