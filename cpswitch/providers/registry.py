# -*- coding: utf-8 -*-
"""Pure transformations over a :class:`RegistryDocument`.

Every mutator takes the current document and returns a new one (the input
is never modified) or raises one of the errors in :mod:`cpswitch.errors`.
Persistence is handled by :mod:`cpswitch.providers.store`.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Mapping, Optional, Union

from pydantic import AnyHttpUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from ..constant import CONFIG_VERSION
from ..errors import (
    DuplicateIdError,
    DuplicateNameError,
    InvalidIdError,
    MissingCredentialsError,
    ProviderNotFoundError,
    ReadOnlyProviderError,
    ValidationError,
)
from .models import ProviderProfile, ProviderUpdate, RegistryDocument
from .presets import PASSTHROUGH_PRESET_ID, default_presets, is_passthrough

ID_PATTERN = re.compile(r"^[a-z0-9](?:[a-z0-9-]*[a-z0-9])?$")
MAX_ID_LENGTH = 24
FALLBACK_ID = "provider"

_NON_SLUG = re.compile(r"[^a-z0-9]+")
_HTTP_URL = TypeAdapter(AnyHttpUrl)

# ---------------------------------------------------------------------------
# Names and ids
# ---------------------------------------------------------------------------


def normalize_name(name: Optional[str]) -> str:
    """Comparison key (and stored form) of a provider name."""
    return (name or "").strip().lower()


def is_valid_id(value: Optional[str]) -> bool:
    return (
        bool(value)
        and len(value) <= MAX_ID_LENGTH
        and ID_PATTERN.match(value) is not None
    )


def slugify(name: str) -> str:
    """Derive an id candidate from *name*.

    ``"Team Prod Provider"`` → ``"team-prod-provider"``; names without
    any ascii letter or digit fall back to ``"provider"``.
    """
    slug = _NON_SLUG.sub("-", normalize_name(name)).strip("-")
    slug = slug[:MAX_ID_LENGTH].rstrip("-")
    return slug or FALLBACK_ID


def unique_id(base: str, taken: Iterable[str]) -> str:
    """Return *base* or ``base-2``, ``base-3``… whichever is free."""
    taken = set(taken)
    if base not in taken:
        return base
    n = 2
    while True:
        suffix = f"-{n}"
        stem = base[: MAX_ID_LENGTH - len(suffix)].rstrip("-")
        candidate = f"{stem}{suffix}"
        if candidate not in taken:
            return candidate
        n += 1


# ---------------------------------------------------------------------------
# Document level
# ---------------------------------------------------------------------------


def create_default_document() -> RegistryDocument:
    """Registry used on first run: built-in presets, Anthropic current."""
    return RegistryDocument(
        version=CONFIG_VERSION,
        current=PASSTHROUGH_PRESET_ID,
        providers=default_presets(),
    )


def _resolve_current(
    current: Optional[str],
    providers: List[ProviderProfile],
) -> Optional[str]:
    if not current:
        return None
    for p in providers:
        if p.id == current:
            return current
    # Older config files stored the provider name in ``current``.
    key = normalize_name(current)
    for p in providers:
        if p.name == key:
            return p.id
    return None


def normalize_document(doc: RegistryDocument) -> RegistryDocument:
    """Repair *doc* so every registry invariant holds.

    Names are normalized and deduplicated (first occurrence wins), missing,
    malformed or duplicate ids are regenerated from the name, and
    ``current`` is coerced to an existing id or ``None``.
    """
    seen_names: set[str] = set()
    kept: List[ProviderProfile] = []
    for provider in doc.providers:
        name = normalize_name(provider.name)
        if not name or name in seen_names:
            continue
        seen_names.add(name)
        kept.append(
            provider.model_copy(
                update={"name": name, "preset": bool(provider.preset)},
            ),
        )

    # Valid ids are reserved first so a derived id never steals one.
    taken: set[str] = set()
    needs_id: List[int] = []
    for index, provider in enumerate(kept):
        if is_valid_id(provider.id) and provider.id not in taken:
            taken.add(provider.id)
        else:
            needs_id.append(index)
    for index in needs_id:
        provider = kept[index]
        new_id = unique_id(slugify(provider.name), taken)
        taken.add(new_id)
        kept[index] = provider.model_copy(update={"id": new_id})

    return RegistryDocument(
        version=CONFIG_VERSION,
        current=_resolve_current(doc.current, kept),
        providers=kept,
    )


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------


def find_by_name(
    doc: RegistryDocument,
    name: str,
) -> Optional[ProviderProfile]:
    key = normalize_name(name)
    for provider in doc.providers:
        if provider.name == key:
            return provider
    return None


def find_by_id(
    doc: RegistryDocument,
    provider_id: str,
) -> Optional[ProviderProfile]:
    provider_id = (provider_id or "").strip()
    for provider in doc.providers:
        if provider.id == provider_id:
            return provider
    return None


def find_by_reference(
    doc: RegistryDocument,
    reference: str,
) -> Optional[ProviderProfile]:
    """Resolve *reference* as an id first, then as a name."""
    return find_by_id(doc, reference) or find_by_name(doc, reference)


def _require(doc: RegistryDocument, provider_id: str) -> ProviderProfile:
    provider = find_by_id(doc, provider_id)
    if provider is None:
        raise ProviderNotFoundError(f"Provider '{provider_id}' not found.")
    return provider


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def _blank(value: Optional[str]) -> bool:
    return not value or not value.strip()


def _check_url(value: str, label: str) -> None:
    try:
        _HTTP_URL.validate_python(value)
    except PydanticValidationError as exc:
        raise ValidationError(f"{label} must be a valid URL.") from exc


def validate_profile(profile: ProviderProfile) -> None:
    """Raise :class:`ValidationError` unless *profile* may be stored."""
    if _blank(profile.name):
        raise ValidationError("Provider name is required.")
    if _blank(profile.base_url):
        raise ValidationError("Base URL is required.")
    if _blank(profile.auth_token):
        raise ValidationError("Auth token is required.")
    _check_url(profile.base_url, "Base URL")
    if not _blank(profile.website):
        _check_url(profile.website, "Website")


def assert_applyable(profile: ProviderProfile) -> None:
    """Raise :class:`MissingCredentialsError` if *profile* can't be applied.

    The pass-through Anthropic preset is always applyable.
    """
    if is_passthrough(profile):
        return
    if _blank(profile.base_url):
        raise MissingCredentialsError(
            "Base URL is required to apply provider.",
        )
    if _blank(profile.auth_token):
        raise MissingCredentialsError(
            "Auth token is required to apply provider.",
        )


def _clean(value: Optional[str]) -> Optional[str]:
    return value.strip() if isinstance(value, str) else value


# ---------------------------------------------------------------------------
# Mutators
# ---------------------------------------------------------------------------


def add_provider(
    doc: RegistryDocument,
    profile: ProviderProfile,
) -> RegistryDocument:
    """Append a user provider; the id is validated or derived from the name."""
    name = normalize_name(profile.name)
    if find_by_name(doc, name) is not None:
        raise DuplicateNameError(f"Provider '{name}' already exists.")

    candidate = ProviderProfile(
        name=name,
        base_url=_clean(profile.base_url),
        auth_token=_clean(profile.auth_token),
        model=_clean(profile.model),
        website=_clean(profile.website),
        description=profile.description,
        preset=False,
    )
    validate_profile(candidate)

    taken = {p.id for p in doc.providers if p.id}
    requested = _clean(profile.id)
    if requested:
        if not is_valid_id(requested):
            raise InvalidIdError(
                f"Provider id '{requested}' is invalid: use lowercase "
                f"letters, digits and hyphens (max {MAX_ID_LENGTH}).",
            )
        if requested in taken:
            raise DuplicateIdError(
                f"Provider id '{requested}' already exists.",
            )
        provider_id = requested
    else:
        provider_id = unique_id(slugify(name), taken)

    candidate = candidate.model_copy(update={"id": provider_id})
    return doc.model_copy(update={"providers": [*doc.providers, candidate]})


_MERGE_FIELDS = ("base_url", "auth_token", "model", "website", "description")


def update_provider(
    doc: RegistryDocument,
    provider_id: str,
    changes: Union[ProviderUpdate, Mapping],
) -> RegistryDocument:
    """Merge non-blank fields of *changes* into the provider.

    Blank values keep the stored value, so an empty ``authToken`` never
    wipes a saved secret. The id is never changed.
    """
    if not isinstance(changes, ProviderUpdate):
        changes = ProviderUpdate.model_validate(changes)

    target = _require(doc, provider_id)
    if is_passthrough(target):
        raise ReadOnlyProviderError(f"Provider '{target.name}' is read-only.")

    update: dict = {}
    for field in _MERGE_FIELDS:
        value = getattr(changes, field)
        if not _blank(value):
            update[field] = _clean(value)

    if not _blank(changes.name):
        new_name = normalize_name(changes.name)
        if new_name != target.name:
            if target.preset:
                raise ReadOnlyProviderError(
                    f"Preset provider '{target.name}' cannot be renamed.",
                )
            if find_by_name(doc, new_name) is not None:
                raise DuplicateNameError(
                    f"Provider '{new_name}' already exists.",
                )
            update["name"] = new_name

    merged = target.model_copy(update=update)
    validate_profile(merged)

    providers = [
        merged if p.id == target.id else p for p in doc.providers
    ]
    return doc.model_copy(update={"providers": providers})


def remove_provider(
    doc: RegistryDocument,
    provider_id: str,
) -> RegistryDocument:
    """Drop a user provider; clears ``current`` if it pointed at it."""
    target = _require(doc, provider_id)
    if target.preset:
        raise ReadOnlyProviderError(
            f"Preset provider '{target.name}' cannot be removed.",
        )
    providers = [p for p in doc.providers if p.id != target.id]
    current = None if doc.current == target.id else doc.current
    return doc.model_copy(
        update={"providers": providers, "current": current},
    )


def set_current(doc: RegistryDocument, reference: str) -> RegistryDocument:
    provider = find_by_reference(doc, reference)
    if provider is None:
        raise ProviderNotFoundError(f"Provider '{reference}' not found.")
    return doc.model_copy(update={"current": provider.id})
