"""Tests for switching the active provider end to end."""

import json

import pytest

from cpswitch.errors import MissingCredentialsError, ProviderNotFoundError
from cpswitch.providers import (
    ProviderProfile,
    create_provider,
    ensure_registry,
)
from cpswitch.switch import use_provider


def _read(path):
    return json.loads(path.read_text(encoding="utf-8"))


@pytest.fixture
def with_local(paths_options):
    create_provider(
        ProviderProfile(
            name="local",
            base_url="https://example.com",
            auth_token="token",
            model="test-model",
        ),
        paths_options,
    )
    return paths_options


def test_use_provider_persists_current_and_applies(with_local, settings_path):
    provider = use_provider("local", with_local)

    assert provider.id == "local"
    assert ensure_registry(with_local).current == "local"
    env = _read(settings_path)["env"]
    assert env["ANTHROPIC_BASE_URL"] == "https://example.com"
    assert env["ANTHROPIC_AUTH_TOKEN"] == "token"
    assert env["ANTHROPIC_MODEL"] == "test-model"


def test_use_provider_without_credentials_writes_nothing(
    paths_options,
    settings_path,
):
    with pytest.raises(MissingCredentialsError):
        use_provider("custom", paths_options)

    assert ensure_registry(paths_options).current == "anthropic"
    assert not settings_path.exists()


def test_use_unknown_provider(paths_options):
    with pytest.raises(ProviderNotFoundError):
        use_provider("ghost", paths_options)
