# -*- coding: utf-8 -*-
"""API routes for provider profiles and the current provider."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Path
from pydantic import BaseModel, Field

from ...config.paths import PathsOptions
from ...errors import ValidationError
from ...providers import (
    ProviderProfile,
    ProviderUpdate,
    create_provider,
    delete_provider,
    edit_provider,
    ensure_registry,
    find_by_id,
    sanitize_provider,
    sanitize_providers,
)
from ...switch import use_provider
from .deps import get_paths_options

router = APIRouter(prefix="/api", tags=["providers"])


# ---------------------------------------------------------------------------
# Request / response schemas
# ---------------------------------------------------------------------------


class CurrentRequest(BaseModel):
    """Request body for switching the current provider."""

    id: Optional[str] = Field(default=None, description="Provider id")
    name: Optional[str] = Field(
        default=None,
        description="Provider name (used when id is absent)",
    )


class ProvidersResponse(BaseModel):
    providers: List[Dict[str, Any]]
    current: Optional[str] = None


class CurrentResponse(BaseModel):
    current: Optional[str] = None
    provider: Optional[Dict[str, Any]] = None


# ---------------------------------------------------------------------------
# Endpoints: provider CRUD
# ---------------------------------------------------------------------------


@router.get(
    "/providers",
    response_model=ProvidersResponse,
    summary="List all providers",
    description="Return all providers with auth tokens masked.",
)
async def list_all_providers(
    options: PathsOptions = Depends(get_paths_options),
) -> ProvidersResponse:
    doc = ensure_registry(options)
    return ProvidersResponse(
        providers=sanitize_providers(doc.providers),
        current=doc.current,
    )


@router.post(
    "/providers",
    response_model=ProvidersResponse,
    status_code=201,
    summary="Add a provider",
)
async def add_new_provider(
    body: ProviderProfile = Body(..., description="Provider to add"),
    options: PathsOptions = Depends(get_paths_options),
) -> ProvidersResponse:
    doc = create_provider(body, options)
    return ProvidersResponse(
        providers=sanitize_providers(doc.providers),
        current=doc.current,
    )


@router.put(
    "/providers/{reference}",
    response_model=ProvidersResponse,
    summary="Update a provider",
    description="Blank fields keep their stored value; a blank authToken "
    "never clears the saved token.",
)
async def update_existing_provider(
    reference: str = Path(..., description="Provider id or name"),
    body: ProviderUpdate = Body(..., description="Fields to change"),
    options: PathsOptions = Depends(get_paths_options),
) -> ProvidersResponse:
    doc = edit_provider(reference, body, options)
    return ProvidersResponse(
        providers=sanitize_providers(doc.providers),
        current=doc.current,
    )


@router.delete(
    "/providers/{reference}",
    response_model=ProvidersResponse,
    summary="Remove a provider",
)
async def remove_existing_provider(
    reference: str = Path(..., description="Provider id or name"),
    options: PathsOptions = Depends(get_paths_options),
) -> ProvidersResponse:
    doc = delete_provider(reference, options)
    return ProvidersResponse(
        providers=sanitize_providers(doc.providers),
        current=doc.current,
    )


# ---------------------------------------------------------------------------
# Endpoints: current provider
# ---------------------------------------------------------------------------


@router.get(
    "/current",
    response_model=CurrentResponse,
    summary="Get the current provider",
)
async def get_current(
    options: PathsOptions = Depends(get_paths_options),
) -> CurrentResponse:
    doc = ensure_registry(options)
    provider = find_by_id(doc, doc.current) if doc.current else None
    return CurrentResponse(
        current=doc.current,
        provider=sanitize_provider(provider) if provider else None,
    )


@router.post(
    "/current",
    response_model=CurrentResponse,
    summary="Switch provider",
    description="Set the current provider and apply it to Claude settings.",
)
async def switch_provider(
    body: CurrentRequest = Body(..., description="Provider to activate"),
    options: PathsOptions = Depends(get_paths_options),
) -> CurrentResponse:
    reference = body.id or body.name
    if not reference:
        raise ValidationError("Provider id is required.")

    provider = use_provider(reference, options)
    return CurrentResponse(
        current=provider.id,
        provider=sanitize_provider(provider),
    )
