"""Tests for the pure provider registry transformations."""

import pytest

from cpswitch.errors import (
    DuplicateIdError,
    DuplicateNameError,
    InvalidIdError,
    MissingCredentialsError,
    ProviderNotFoundError,
    ReadOnlyProviderError,
    ValidationError,
)
from cpswitch.providers import (
    ProviderProfile,
    ProviderUpdate,
    RegistryDocument,
    add_provider,
    assert_applyable,
    create_default_document,
    find_by_id,
    find_by_name,
    find_by_reference,
    normalize_document,
    remove_provider,
    set_current,
    update_provider,
)
from cpswitch.providers.registry import (
    ID_PATTERN,
    MAX_ID_LENGTH,
    is_valid_id,
    slugify,
    unique_id,
)


def _local(**overrides) -> ProviderProfile:
    fields = {
        "name": "Local",
        "base_url": "https://example.com",
        "auth_token": "token",
    }
    fields.update(overrides)
    return ProviderProfile(**fields)


def _assert_invariants(doc: RegistryDocument) -> None:
    ids = [p.id for p in doc.providers]
    assert len(ids) == len(set(ids))
    for provider_id in ids:
        assert ID_PATTERN.match(provider_id)
        assert len(provider_id) <= MAX_ID_LENGTH
    assert doc.current is None or doc.current in ids


# ---------------------------------------------------------------------------
# ids
# ---------------------------------------------------------------------------


def test_slugify_derives_id_from_name():
    assert slugify("Team Prod Provider") == "team-prod-provider"
    assert slugify("  --My__Relay!! ") == "my-relay"
    assert slugify("智谱coding plan") == "coding-plan"
    assert slugify("火山方舟") == "provider"


def test_slugify_truncates_to_max_length():
    slug = slugify("an extremely long provider name that keeps going")
    assert len(slug) <= MAX_ID_LENGTH
    assert not slug.endswith("-")


def test_unique_id_suffixes_and_stays_within_length():
    assert unique_id("relay", []) == "relay"
    assert unique_id("relay", {"relay"}) == "relay-2"
    assert unique_id("relay", {"relay", "relay-2"}) == "relay-3"
    long_base = "a" * MAX_ID_LENGTH
    assert unique_id(long_base, {long_base}) == "a" * 22 + "-2"


@pytest.mark.parametrize(
    "value,valid",
    [
        ("team-prod", True),
        ("a1", True),
        ("Team", False),
        ("team_prod", False),
        ("-team", False),
        ("team-", False),
        ("", False),
        (None, False),
        ("a" * 25, False),
    ],
)
def test_is_valid_id(value, valid):
    assert is_valid_id(value) is valid


# ---------------------------------------------------------------------------
# normalize
# ---------------------------------------------------------------------------


def test_default_document_has_presets_and_anthropic_current():
    doc = create_default_document()
    assert doc.version == 1
    assert doc.current == "anthropic"
    assert [p.id for p in doc.providers] == [
        "anthropic",
        "zhipu",
        "volc",
        "custom",
    ]
    assert all(p.preset for p in doc.providers)
    _assert_invariants(doc)


def test_normalize_dedupes_names_and_repairs_ids():
    doc = RegistryDocument(
        current="Third",
        providers=[
            ProviderProfile(name="  My Provider "),
            ProviderProfile(name="my provider", base_url="https://dup"),
            ProviderProfile(id="bad id!", name="Other"),
            ProviderProfile(id="other", name="Third"),
            ProviderProfile(name="   "),
        ],
    )
    normalized = normalize_document(doc)

    assert [p.name for p in normalized.providers] == [
        "my provider",
        "other",
        "third",
    ]
    assert normalized.providers[0].base_url is None
    assert [p.id for p in normalized.providers] == [
        "my-provider",
        "other-2",
        "other",
    ]
    # legacy name-valued current is migrated to the provider id
    assert normalized.current == "other"
    _assert_invariants(normalized)


def test_normalize_suffixes_duplicate_ids():
    doc = RegistryDocument(
        providers=[
            ProviderProfile(id="relay", name="a"),
            ProviderProfile(id="relay", name="b"),
        ],
    )
    normalized = normalize_document(doc)
    assert [p.id for p in normalized.providers] == ["relay", "b"]
    _assert_invariants(normalized)


def test_normalize_clears_dangling_current():
    doc = RegistryDocument(
        current="ghost",
        providers=[ProviderProfile(id="relay", name="relay")],
    )
    assert normalize_document(doc).current is None


def test_normalize_is_idempotent():
    doc = normalize_document(
        RegistryDocument(
            current="b",
            providers=[
                ProviderProfile(name="A"),
                ProviderProfile(name="B", id="b"),
            ],
        ),
    )
    assert normalize_document(doc) == doc


def test_normalize_does_not_mutate_input():
    provider = ProviderProfile(name="  Mixed Case ")
    doc = RegistryDocument(providers=[provider])
    normalize_document(doc)
    assert provider.name == "  Mixed Case "
    assert provider.id is None


# ---------------------------------------------------------------------------
# lookups
# ---------------------------------------------------------------------------


def test_find_by_reference_prefers_id_over_name():
    doc = RegistryDocument(
        providers=[
            ProviderProfile(id="alpha", name="beta"),
            ProviderProfile(id="beta", name="gamma"),
        ],
    )
    assert find_by_reference(doc, "beta").id == "beta"
    assert find_by_reference(doc, "GAMMA").id == "beta"
    assert find_by_reference(doc, "missing") is None
    assert find_by_name(doc, " Beta ").id == "alpha"
    assert find_by_id(doc, "alpha").name == "beta"


# ---------------------------------------------------------------------------
# add
# ---------------------------------------------------------------------------


def test_add_derives_id_and_is_findable():
    doc = create_default_document()
    updated = add_provider(doc, _local(name="Team Prod Provider"))

    added = find_by_name(updated, "team prod provider")
    assert added is not None
    assert added.id == "team-prod-provider"
    assert added.preset is False
    assert find_by_id(updated, "team-prod-provider") == added
    assert len(doc.providers) == 4
    _assert_invariants(updated)


def test_add_with_explicit_id():
    doc = add_provider(create_default_document(), _local(id="team-prod"))
    assert find_by_id(doc, "team-prod").name == "local"


def test_add_derived_id_avoids_collision_with_preset():
    doc = add_provider(create_default_document(), _local(name="Zhipu"))
    added = find_by_name(doc, "zhipu")
    assert added.id == "zhipu-2"
    assert find_by_id(doc, "zhipu").preset is True
    _assert_invariants(doc)


def test_add_duplicate_name_is_rejected():
    doc = add_provider(create_default_document(), _local())
    with pytest.raises(DuplicateNameError):
        add_provider(doc, _local(name="  LOCAL "))


def test_add_duplicate_id_is_rejected():
    doc = add_provider(create_default_document(), _local(id="team-prod"))
    with pytest.raises(DuplicateIdError, match="already exists"):
        add_provider(doc, _local(name="Other", id="team-prod"))


@pytest.mark.parametrize("bad_id", ["Team", "team prod", "a" * 25, "-x"])
def test_add_invalid_id_is_rejected(bad_id):
    with pytest.raises(InvalidIdError):
        add_provider(create_default_document(), _local(id=bad_id))


@pytest.mark.parametrize(
    "overrides",
    [
        {"name": "  "},
        {"base_url": ""},
        {"auth_token": "   "},
        {"base_url": "not a url"},
        {"base_url": "ftp://example.com"},
        {"website": "example"},
    ],
)
def test_add_validation_errors(overrides):
    with pytest.raises(ValidationError):
        add_provider(create_default_document(), _local(**overrides))


def test_add_ignores_preset_flag_from_caller():
    doc = add_provider(create_default_document(), _local(preset=True))
    assert find_by_name(doc, "local").preset is False


# ---------------------------------------------------------------------------
# update
# ---------------------------------------------------------------------------


@pytest.fixture
def doc_with_local():
    return add_provider(
        create_default_document(),
        _local(id="local", model="model-a"),
    )


def test_update_blank_token_keeps_previous(doc_with_local):
    for blank in ("", "   ", None):
        updated = update_provider(
            doc_with_local,
            "local",
            {"authToken": blank, "model": "model-b"},
        )
        provider = find_by_id(updated, "local")
        assert provider.auth_token == "token"
        assert provider.model == "model-b"


def test_update_non_blank_token_replaces(doc_with_local):
    updated = update_provider(
        doc_with_local,
        "local",
        ProviderUpdate(auth_token="new-token"),
    )
    assert find_by_id(updated, "local").auth_token == "new-token"
    assert find_by_id(doc_with_local, "local").auth_token == "token"


def test_update_blank_fields_keep_existing(doc_with_local):
    updated = update_provider(
        doc_with_local,
        "local",
        {"baseUrl": "", "model": "", "name": ""},
    )
    assert find_by_id(updated, "local") == find_by_id(doc_with_local, "local")


def test_update_rename_keeps_id(doc_with_local):
    updated = update_provider(doc_with_local, "local", {"name": "Renamed"})
    provider = find_by_id(updated, "local")
    assert provider.name == "renamed"
    assert find_by_name(updated, "local") is None


def test_update_rename_to_existing_name_is_rejected(doc_with_local):
    with pytest.raises(DuplicateNameError):
        update_provider(doc_with_local, "local", {"name": "custom"})


def test_update_revalidates_merged_profile(doc_with_local):
    with pytest.raises(ValidationError):
        update_provider(doc_with_local, "local", {"baseUrl": "nope"})


def test_update_unknown_provider(doc_with_local):
    with pytest.raises(ProviderNotFoundError):
        update_provider(doc_with_local, "ghost", {"model": "x"})


def test_update_passthrough_preset_is_read_only(doc_with_local):
    with pytest.raises(ReadOnlyProviderError):
        update_provider(doc_with_local, "anthropic", {"model": "x"})


def test_update_other_preset_accepts_credentials(doc_with_local):
    updated = update_provider(doc_with_local, "zhipu", {"authToken": "tok"})
    provider = find_by_id(updated, "zhipu")
    assert provider.auth_token == "tok"
    assert provider.preset is True


def test_update_preset_cannot_be_renamed(doc_with_local):
    with pytest.raises(ReadOnlyProviderError):
        update_provider(
            doc_with_local,
            "zhipu",
            {"authToken": "tok", "name": "glm"},
        )


# ---------------------------------------------------------------------------
# remove / set_current
# ---------------------------------------------------------------------------


def test_remove_current_resets_current(doc_with_local):
    doc = set_current(doc_with_local, "local")
    removed = remove_provider(doc, "local")
    assert removed.current is None
    assert find_by_id(removed, "local") is None
    assert find_by_id(doc, "local") is not None


def test_remove_other_keeps_current(doc_with_local):
    removed = remove_provider(doc_with_local, "local")
    assert removed.current == "anthropic"


def test_remove_preset_is_read_only(doc_with_local):
    with pytest.raises(ReadOnlyProviderError):
        remove_provider(doc_with_local, "custom")


def test_remove_unknown_provider(doc_with_local):
    with pytest.raises(ProviderNotFoundError):
        remove_provider(doc_with_local, "ghost")


def test_set_current_resolves_id_or_name(doc_with_local):
    assert set_current(doc_with_local, "local").current == "local"
    assert set_current(doc_with_local, "智谱Coding Plan").current == "zhipu"
    with pytest.raises(ProviderNotFoundError):
        set_current(doc_with_local, "ghost")


# ---------------------------------------------------------------------------
# assert_applyable
# ---------------------------------------------------------------------------


def test_passthrough_preset_needs_no_credentials():
    doc = create_default_document()
    assert_applyable(find_by_id(doc, "anthropic"))


def test_missing_credentials_are_rejected():
    doc = create_default_document()
    with pytest.raises(MissingCredentialsError):
        assert_applyable(find_by_id(doc, "custom"))
    with pytest.raises(MissingCredentialsError):
        assert_applyable(find_by_id(doc, "volc"))
    with pytest.raises(MissingCredentialsError):
        assert_applyable(ProviderProfile(name="x", auth_token="t"))


def test_anthropic_name_alone_is_not_passthrough():
    impostor = ProviderProfile(id="anthropic", name="anthropic", preset=False)
    with pytest.raises(MissingCredentialsError):
        assert_applyable(impostor)


def test_profile_with_credentials_is_applyable(doc_with_local):
    assert_applyable(find_by_id(doc_with_local, "local"))
