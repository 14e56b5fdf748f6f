# -*- coding: utf-8 -*-
"""API routes for Claude settings backups."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Body, Depends
from pydantic import BaseModel, Field

from ...config.paths import PathsOptions
from ...settings import BackupRecord, list_backups, restore_backup
from .deps import get_paths_options

router = APIRouter(prefix="/api/backups", tags=["backups"])


class RestoreRequest(BaseModel):
    name: str = Field(..., description="Backup file name")


class BackupsResponse(BaseModel):
    backups: List[BackupRecord]


class RestoreResponse(BaseModel):
    restored: bool


@router.get(
    "",
    response_model=BackupsResponse,
    summary="List settings backups",
    description="Return backups of settings.json, newest first.",
)
async def list_all_backups(
    options: PathsOptions = Depends(get_paths_options),
) -> BackupsResponse:
    return BackupsResponse(backups=list_backups(options))


@router.post(
    "/restore",
    response_model=RestoreResponse,
    summary="Restore a settings backup",
    description="The live settings.json is backed up before it is "
    "overwritten.",
)
async def restore_settings_backup(
    body: RestoreRequest = Body(..., description="Backup to restore"),
    options: PathsOptions = Depends(get_paths_options),
) -> RestoreResponse:
    restore_backup(body.name, options)
    return RestoreResponse(restored=True)
