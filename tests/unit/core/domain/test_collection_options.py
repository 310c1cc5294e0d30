"""Tests for collection options, capability descriptors and enums."""

import pytest

from resource_collection.core.domain.capabilities import Supports, supports_of
from resource_collection.core.domain.config_schema import CollectionOptions, load_options
from resource_collection.core.domain.enums import LifecycleOperation, ResourceState
from resource_collection.core.domain.errors import ConfigError


class TestLoadOptions:
    def test_defaults(self) -> None:
        options = load_options(None)
        assert options.opened is False
        assert options.name == "collection"

    def test_mapping_is_validated(self) -> None:
        options = load_options({"opened": True, "name": "storage"})
        assert options == CollectionOptions(opened=True, name="storage")

    def test_model_passes_through(self) -> None:
        options = CollectionOptions(opened=True)
        assert load_options(options) is options

    def test_unknown_key_rejected(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_options({"openend": True})
        assert exc_info.value.details["errors"][0]["type"] == "extra_forbidden"

    def test_empty_name_rejected(self) -> None:
        with pytest.raises(ConfigError):
            load_options({"name": ""})


class TestSupports:
    def test_default_is_callbacks(self) -> None:
        assert Supports() == Supports(callbacks=True, awaitables=False)
        assert not Supports().awaitables_only

    def test_awaitables_only(self) -> None:
        assert Supports(callbacks=False, awaitables=True).awaitables_only
        assert not Supports(callbacks=True, awaitables=True).awaitables_only

    def test_missing_descriptor_means_callbacks(self) -> None:
        assert supports_of(object()) == Supports(callbacks=True, awaitables=False)

    def test_foreign_descriptor_ignored(self) -> None:
        class Member:
            supports = {"promises": True, "callbacks": False}

        assert supports_of(Member()) == Supports()

    def test_declared_descriptor_used(self) -> None:
        class Member:
            supports = Supports(callbacks=False, awaitables=True)

        assert supports_of(Member()).awaitables_only


class TestEnums:
    def test_state_flags(self) -> None:
        assert LifecycleOperation.OPEN.state_flag == "opened"
        assert LifecycleOperation.CLOSE.state_flag == "closed"

    def test_state_values(self) -> None:
        assert ResourceState.DESTROYING == "destroying"
        assert [state.value for state in ResourceState] == [
            "unopened",
            "opening",
            "opened",
            "closing",
            "closed",
            "destroying",
        ]
