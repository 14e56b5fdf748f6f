# -*- coding: utf-8 -*-
"""Switch the active provider: persist the choice, then apply it."""

from __future__ import annotations

from typing import Optional

from .config.paths import PathsOptions
from .providers.models import ProviderProfile
from .providers.registry import assert_applyable, find_by_id, set_current
from .providers.store import ensure_registry, save_registry
from .settings.claude_settings import apply_provider


def use_provider(
    reference: str,
    options: Optional[PathsOptions] = None,
) -> ProviderProfile:
    """Make *reference* (id or name) current and write it to settings.json.

    Credentials are checked before anything is persisted. Returns the
    applied provider.
    """
    doc = set_current(ensure_registry(options), reference)
    provider = find_by_id(doc, doc.current)
    assert_applyable(provider)
    save_registry(doc, options)
    apply_provider(provider, options)
    return provider
