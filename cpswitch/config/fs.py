# -*- coding: utf-8 -*-
"""JSON file helpers with owner-only permissions."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from ..errors import JsonParseError

logger = logging.getLogger(__name__)

FILE_MODE = 0o600
DIR_MODE = 0o700


def ensure_owner_only(path: Path, mode: int = FILE_MODE) -> None:
    """Best-effort ``chmod``; unsupported file systems are ignored."""
    try:
        os.chmod(path, mode)
    except OSError as exc:
        logger.debug("Could not tighten permissions on %s: %s", path, exc)


def ensure_dir(path: Path) -> None:
    """Create *path* (and parents) with owner-only mode if missing."""
    path = Path(path)
    if path.is_dir():
        return
    path.mkdir(parents=True, exist_ok=True, mode=DIR_MODE)
    ensure_owner_only(path, DIR_MODE)


def read_json(path: Path) -> Any:
    """Parse the JSON document at *path*.

    ``FileNotFoundError`` propagates so callers can fall back to a
    default; malformed content raises :class:`JsonParseError`.
    """
    path = Path(path)
    with open(path, "r", encoding="utf-8") as fh:
        raw = fh.read()
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise JsonParseError(path, str(exc)) from exc


def write_bytes(path: Path, content: bytes) -> None:
    """Replace *path* with *content* atomically.

    The bytes go to a sibling temp file (mode 0600) which then replaces
    *path*, so readers never see a half-written file.
    """
    path = Path(path)
    ensure_dir(path.parent)

    tmp = path.with_name(f".{path.name}.tmp")
    fd = os.open(tmp, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, FILE_MODE)
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(content)
        os.replace(tmp, path)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise
    ensure_owner_only(path)


def write_json(path: Path, value: Any) -> None:
    """Write *value* as 2-space indented JSON with a trailing newline."""
    content = json.dumps(value, indent=2, ensure_ascii=False) + "\n"
    write_bytes(path, content.encode("utf-8"))
