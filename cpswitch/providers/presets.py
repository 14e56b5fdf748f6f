# -*- coding: utf-8 -*-
"""Built-in provider presets shipped with a fresh registry."""

from __future__ import annotations

from typing import List

from .models import ProviderProfile

# Applying this preset removes the provider keys from settings.json so
# Claude Code falls back to its own login; it needs no credentials.
PASSTHROUGH_PRESET_ID = "anthropic"

# ---------------------------------------------------------------------------
# Provider presets
# ---------------------------------------------------------------------------

PRESET_ANTHROPIC = ProviderProfile(
    id=PASSTHROUGH_PRESET_ID,
    name="anthropic",
    base_url="https://api.anthropic.com",
    auth_token="",
    model="",
    preset=True,
    description="Official Anthropic API",
    website="https://www.anthropic.com",
)

PRESET_ZHIPU = ProviderProfile(
    id="zhipu",
    name="智谱coding plan",
    base_url="https://open.bigmodel.cn/api/anthropic",
    auth_token="",
    model="",
    preset=True,
    description="Zhipu AI (GLM) compatible endpoint",
    website="https://open.bigmodel.cn",
)

PRESET_VOLC = ProviderProfile(
    id="volc",
    name="火山方舟coding plan",
    base_url="https://ark.cn-beijing.volces.com/api/coding",
    auth_token="",
    model="ark-code-latest",
    preset=True,
    description="Volcengine Ark coding plan, Anthropic compatible endpoint",
    website="https://www.volcengine.com",
)

PRESET_CUSTOM = ProviderProfile(
    id="custom",
    name="custom",
    base_url="",
    auth_token="",
    model="",
    preset=True,
    description="Custom endpoint",
    website="",
)

DEFAULT_PRESETS: List[ProviderProfile] = [
    PRESET_ANTHROPIC,
    PRESET_ZHIPU,
    PRESET_VOLC,
    PRESET_CUSTOM,
]


def default_presets() -> List[ProviderProfile]:
    """Return fresh copies of the built-in presets."""
    return [p.model_copy() for p in DEFAULT_PRESETS]


def is_passthrough(profile: ProviderProfile) -> bool:
    """Whether *profile* is the credential-exempt Anthropic preset."""
    return profile.preset and profile.id == PASSTHROUGH_PRESET_ID
