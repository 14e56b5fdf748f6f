# -*- coding: utf-8 -*-
"""Provider models, presets, registry and persistent store."""

from .models import (
    ProviderProfile,
    ProviderUpdate,
    RegistryDocument,
)
from .presets import (
    DEFAULT_PRESETS,
    PASSTHROUGH_PRESET_ID,
    is_passthrough,
)
from .registry import (
    add_provider,
    assert_applyable,
    create_default_document,
    find_by_id,
    find_by_name,
    find_by_reference,
    normalize_document,
    normalize_name,
    remove_provider,
    set_current,
    update_provider,
)
from .store import (
    create_provider,
    delete_provider,
    edit_provider,
    ensure_registry,
    get_current_provider,
    mask_auth_token,
    sanitize_provider,
    sanitize_providers,
    save_registry,
)

__all__ = [
    # models
    "ProviderProfile",
    "ProviderUpdate",
    "RegistryDocument",
    # presets
    "DEFAULT_PRESETS",
    "PASSTHROUGH_PRESET_ID",
    "is_passthrough",
    # registry
    "add_provider",
    "assert_applyable",
    "create_default_document",
    "find_by_id",
    "find_by_name",
    "find_by_reference",
    "normalize_document",
    "normalize_name",
    "remove_provider",
    "set_current",
    "update_provider",
    # store
    "create_provider",
    "delete_provider",
    "edit_provider",
    "ensure_registry",
    "get_current_provider",
    "mask_auth_token",
    "sanitize_provider",
    "sanitize_providers",
    "save_registry",
]
