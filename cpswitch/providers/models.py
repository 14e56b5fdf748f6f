# -*- coding: utf-8 -*-
"""Pydantic data models for provider profiles and the registry file."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from ..constant import CONFIG_VERSION


class ProviderProfile(BaseModel):
    """One saved endpoint + credential + model configuration.

    Serialized with camelCase aliases (``baseUrl``, ``authToken``) to keep
    the on-disk shape of config.json.
    """

    model_config = {
        "populate_by_name": True,
        "protected_namespaces": (),
    }

    id: Optional[str] = Field(
        default=None,
        description="Stable slug, unique within the registry",
    )
    name: str = Field(..., description="Provider name (stored normalized)")
    base_url: Optional[str] = Field(default=None, alias="baseUrl")
    auth_token: Optional[str] = Field(default=None, alias="authToken")
    model: Optional[str] = Field(
        default=None,
        description="Model passed as ANTHROPIC_MODEL",
    )
    website: Optional[str] = None
    description: Optional[str] = None
    preset: bool = Field(
        default=False,
        description="Built-in entry that cannot be removed or renamed",
    )

    def to_json(self) -> dict:
        """Dump with aliases, omitting unset optional fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


class ProviderUpdate(BaseModel):
    """Partial update; ``None`` or blank values keep the stored value."""

    model_config = {
        "populate_by_name": True,
        "protected_namespaces": (),
    }

    name: Optional[str] = None
    base_url: Optional[str] = Field(default=None, alias="baseUrl")
    auth_token: Optional[str] = Field(default=None, alias="authToken")
    model: Optional[str] = None
    website: Optional[str] = None
    description: Optional[str] = None


class RegistryDocument(BaseModel):
    """Top-level structure of config.json."""

    version: int = CONFIG_VERSION
    current: Optional[str] = Field(
        default=None,
        description="Id of the active provider",
    )
    providers: List[ProviderProfile] = Field(default_factory=list)

    def to_json(self) -> dict:
        return {
            "version": self.version,
            "current": self.current,
            "providers": [p.to_json() for p in self.providers],
        }
