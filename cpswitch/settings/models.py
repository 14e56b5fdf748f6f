# -*- coding: utf-8 -*-
from __future__ import annotations

from pydantic import BaseModel, Field


class BackupRecord(BaseModel):
    """A timestamped copy of settings.json in the backup directory."""

    name: str
    mtime: float = Field(..., description="Modification time (epoch ms)")
    size: int = Field(..., description="Size in bytes")
