# -*- coding: utf-8 -*-
"""Reading and writing the provider registry (config.json)."""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from ..config.fs import read_json, write_json
from ..config.paths import PathsOptions, resolve_paths
from ..constant import AUTH_TOKEN_MASK
from ..errors import JsonParseError, ProviderNotFoundError
from .models import ProviderProfile, ProviderUpdate, RegistryDocument
from .registry import (
    add_provider,
    create_default_document,
    find_by_id,
    find_by_reference,
    normalize_document,
    remove_provider,
    update_provider,
)

logger = logging.getLogger(__name__)

# Optional string fields as they appear in config.json.
_STRING_FIELDS = (
    "id",
    "baseUrl",
    "authToken",
    "model",
    "website",
    "description",
)

# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _clean_entry(item: Mapping) -> dict:
    """Drop mistyped optional fields so one bad value cannot sink the file.

    A non-string ``id`` becomes ``None`` and is regenerated on normalize.
    """
    entry = dict(item)
    for key in _STRING_FIELDS:
        if key in entry and not isinstance(entry[key], str):
            entry[key] = None
    entry["preset"] = entry.get("preset") is True
    return entry


def _parse_document(raw: Any, path) -> RegistryDocument:
    """Build a document from raw JSON, skipping unusable provider entries."""
    if not isinstance(raw, dict):
        raise JsonParseError(path, "expected a JSON object")

    providers: List[ProviderProfile] = []
    raw_providers = raw.get("providers")
    if isinstance(raw_providers, list):
        for item in raw_providers:
            if not isinstance(item, dict):
                continue
            if not isinstance(item.get("name"), str):
                continue
            try:
                profile = ProviderProfile.model_validate(_clean_entry(item))
            except PydanticValidationError as exc:
                raise JsonParseError(path, str(exc)) from exc
            providers.append(profile)

    current = raw.get("current")
    return RegistryDocument(
        current=current if isinstance(current, str) else None,
        providers=providers,
    )


def _resolve(doc: RegistryDocument, reference: str) -> ProviderProfile:
    provider = find_by_reference(doc, reference)
    if provider is None:
        raise ProviderNotFoundError(f"Provider '{reference}' not found.")
    return provider


# ---------------------------------------------------------------------------
# Load / Save
# ---------------------------------------------------------------------------


def ensure_registry(
    options: Optional[PathsOptions] = None,
) -> RegistryDocument:
    """Load config.json, creating it with the built-in presets if absent.

    A file that needed repair (duplicate names, bad ids, dangling
    ``current``) is rewritten in normalized form.
    """
    path = resolve_paths(options).config_path
    try:
        raw = read_json(path)
    except FileNotFoundError:
        doc = create_default_document()
        save_registry(doc, options)
        logger.info("Created provider registry at %s", path)
        return doc

    doc = normalize_document(_parse_document(raw, path))
    if doc.to_json() != raw:
        save_registry(doc, options)
        logger.info("Normalized provider registry at %s", path)
    return doc


def save_registry(
    doc: RegistryDocument,
    options: Optional[PathsOptions] = None,
) -> None:
    """Normalize *doc* and write it to config.json (mode 0600)."""
    path = resolve_paths(options).config_path
    write_json(path, normalize_document(doc).to_json())


# ---------------------------------------------------------------------------
# Mutators (load → modify → save → return full state)
# ---------------------------------------------------------------------------


def create_provider(
    profile: ProviderProfile,
    options: Optional[PathsOptions] = None,
) -> RegistryDocument:
    doc = add_provider(ensure_registry(options), profile)
    save_registry(doc, options)
    return doc


def edit_provider(
    reference: str,
    changes: Union[ProviderUpdate, Mapping],
    options: Optional[PathsOptions] = None,
) -> RegistryDocument:
    """Partially update the provider *reference* (id or name)."""
    doc = ensure_registry(options)
    target = _resolve(doc, reference)
    doc = update_provider(doc, target.id, changes)
    save_registry(doc, options)
    return doc


def delete_provider(
    reference: str,
    options: Optional[PathsOptions] = None,
) -> RegistryDocument:
    doc = ensure_registry(options)
    target = _resolve(doc, reference)
    doc = remove_provider(doc, target.id)
    save_registry(doc, options)
    return doc


def get_current_provider(
    options: Optional[PathsOptions] = None,
) -> Optional[ProviderProfile]:
    """Return the current provider, or ``None`` when none is selected."""
    doc = ensure_registry(options)
    if not doc.current:
        return None
    return find_by_id(doc, doc.current)


# ---------------------------------------------------------------------------
# Utilities
# ---------------------------------------------------------------------------


def mask_auth_token(auth_token: Optional[str]) -> str:
    """Replace any non-empty token with a fixed mask."""
    return AUTH_TOKEN_MASK if auth_token else ""


def sanitize_provider(provider: ProviderProfile) -> dict:
    """JSON view of *provider* safe to show outside the process."""
    data = provider.to_json()
    data["authToken"] = mask_auth_token(provider.auth_token)
    return data


def sanitize_providers(providers: Iterable[ProviderProfile]) -> List[dict]:
    return [sanitize_provider(p) for p in providers]
