"""Tests for the tri-state configuration value and provider models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from netbox_provider.models import (
    UNKNOWN,
    ClusterType,
    ConfigValue,
    ProviderModel,
    ValueState,
)


class TestConfigValue:
    def test_known(self) -> None:
        value = ConfigValue.known("https://nb.example.com")
        assert value.is_known
        assert not value.is_null
        assert not value.is_unknown
        assert value.value == "https://nb.example.com"

    def test_known_none_is_null(self) -> None:
        assert ConfigValue.known(None) == ConfigValue.null()

    def test_known_false_stays_known(self) -> None:
        value = ConfigValue.known(False)
        assert value.is_known
        assert value.value is False

    def test_unknown_is_not_null(self) -> None:
        value = ConfigValue.unknown()
        assert value.state is ValueState.UNKNOWN
        assert value.is_unknown
        assert not value.is_null

    def test_repr(self) -> None:
        assert repr(ConfigValue.known("x")) == "ConfigValue.known('x')"
        assert repr(ConfigValue.unknown()) == "ConfigValue.unknown()"
        assert repr(ConfigValue.null()) == "ConfigValue.null()"


class TestProviderModel:
    def test_defaults_are_null(self) -> None:
        model = ProviderModel()
        assert model.server_url.is_null
        assert model.api_token.is_null
        assert model.strip_trailing_slashes_from_url.is_null

    def test_from_mapping(self) -> None:
        model = ProviderModel.from_mapping(
            {
                "server_url": "https://nb.example.com",
                "api_token": UNKNOWN,
                "ignored": "value",
            }
        )
        assert model.server_url == ConfigValue.known("https://nb.example.com")
        assert model.api_token.is_unknown
        assert model.strip_trailing_slashes_from_url.is_null

    def test_from_mapping_passes_config_values_through(self) -> None:
        model = ProviderModel.from_mapping({"strip_trailing_slashes_from_url": ConfigValue.known(False)})
        assert model.strip_trailing_slashes_from_url.value is False

    @pytest.mark.parametrize("raw", ["false", "true", 0, 1])
    def test_from_mapping_rejects_non_bool_strip_flag(self, raw) -> None:
        with pytest.raises(TypeError, match="must be a bool"):
            ProviderModel.from_mapping({"strip_trailing_slashes_from_url": raw})

    def test_strip_flag_bool_values_accepted(self) -> None:
        model = ProviderModel.from_mapping({"strip_trailing_slashes_from_url": False})
        assert model.strip_trailing_slashes_from_url == ConfigValue.known(False)


class TestClusterType:
    def test_extra_fields_ignored(self) -> None:
        ct = ClusterType.model_validate(
            {"id": 1, "name": "KVM", "slug": "kvm", "url": "https://nb/api/...", "cluster_count": 3}
        )
        assert ct.id == 1
        assert ct.slug == "kvm"
        assert ct.description is None

    def test_missing_required_field(self) -> None:
        with pytest.raises(ValidationError):
            ClusterType.model_validate({"id": 1, "name": "KVM"})
