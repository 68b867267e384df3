"""Tests for the provider entry point: metadata, schema, configure, registries."""

from __future__ import annotations

import pytest

from netbox_provider.client import NetboxClient
from netbox_provider.config import ENV_API_TOKEN, ENV_SERVER_URL
from netbox_provider.diagnostics import FailureKind
from netbox_provider.exceptions import RegistryError
from netbox_provider.handlers import ClusterTypeDataSource
from netbox_provider.models import ConfigValue, ProviderModel
from netbox_provider.provider import (
    PROVIDER_TYPE_NAME,
    ConfigureRequest,
    NetboxProvider,
    new,
)


def _request(server_url="https://nb.example.com", api_token="t", strip=None, env=None):
    return ConfigureRequest(
        config=ProviderModel(
            server_url=ConfigValue.known(server_url),
            api_token=ConfigValue.known(api_token),
            strip_trailing_slashes_from_url=ConfigValue.known(strip),
        ),
        env=env if env is not None else {},
    )


class TestMetadataAndSchema:
    def test_metadata(self) -> None:
        meta = NetboxProvider(version="1.2.3").metadata()
        assert meta.type_name == PROVIDER_TYPE_NAME == "netbox"
        assert meta.version == "1.2.3"

    def test_new_returns_factory(self) -> None:
        factory = new("test")
        provider = factory()
        assert isinstance(provider, NetboxProvider)
        assert provider.version == "test"
        assert factory() is not provider

    def test_schema_attributes(self) -> None:
        attrs = NetboxProvider().schema().attributes
        assert set(attrs) == {"server_url", "api_token", "strip_trailing_slashes_from_url"}
        assert attrs["server_url"].required
        assert attrs["api_token"].optional and attrs["api_token"].sensitive
        assert attrs["strip_trailing_slashes_from_url"].type == "bool"
        assert ENV_SERVER_URL in attrs["server_url"].description


class TestConfigure:
    def test_success_publishes_same_client(self) -> None:
        provider = NetboxProvider()
        response = provider.configure(_request())

        assert not response.diagnostics.has_error()
        assert isinstance(response.data_source_data, NetboxClient)
        assert response.data_source_data is response.resource_data
        assert provider.client is response.data_source_data
        provider.close()

    def test_advisory_surfaced_on_success(self) -> None:
        provider = NetboxProvider()
        response = provider.configure(_request(server_url="https://nb.example.com///"))

        assert response.data_source_data.server_url == "https://nb.example.com"
        (advisory,) = response.diagnostics
        assert advisory.kind is FailureKind.TRAILING_SLASHES_STRIPPED
        provider.close()

    def test_env_fallbacks(self) -> None:
        request = ConfigureRequest(
            env={ENV_SERVER_URL: "https://env.example.com", ENV_API_TOKEN: "env"}
        )
        response = NetboxProvider().configure(request)
        assert response.data_source_data.server_url == "https://env.example.com"

    def test_unknown_values_stop_before_client(self) -> None:
        request = ConfigureRequest(
            config=ProviderModel(server_url=ConfigValue.unknown(), api_token=ConfigValue.unknown()),
            env={},
        )
        response = NetboxProvider().configure(request)
        assert len(response.diagnostics.errors) == 2
        assert response.data_source_data is None
        assert response.resource_data is None

    def test_missing_token_does_not_construct_client(self, monkeypatch) -> None:
        def _boom(*args, **kwargs):
            raise AssertionError("client must not be constructed")

        monkeypatch.setattr("netbox_provider.provider.bootstrap_client", _boom)
        response = NetboxProvider().configure(_request(api_token=None))

        assert [d.kind for d in response.diagnostics.errors] == [FailureKind.MISSING]
        assert response.data_source_data is None

    def test_construction_error_reported_once_with_verbatim_message(self) -> None:
        response = NetboxProvider().configure(_request(server_url="ftp://nb.example.com"))

        (diag,) = response.diagnostics.errors
        assert diag.kind is FailureKind.CONSTRUCTION
        assert diag.summary == "Unable to Create NetBox API Client"
        assert "NetBox Client Error: unsupported scheme 'ftp'" in diag.detail
        assert response.data_source_data is None

    def test_slashes_only_url_fails_at_construction(self) -> None:
        response = NetboxProvider().configure(_request(server_url="///"))
        kinds = [d.kind for d in response.diagnostics]
        assert kinds == [FailureKind.TRAILING_SLASHES_STRIPPED, FailureKind.CONSTRUCTION]

    def test_reconfigure_replaces_client(self) -> None:
        provider = NetboxProvider()
        first = provider.configure(_request()).data_source_data
        second = provider.configure(_request(server_url="https://other.example.com")).data_source_data
        assert provider.client is second
        assert first is not second
        provider.close()
        assert provider.client is None

    def test_handler_keeps_working_after_reconfigure(self, make_transport, recorder, netbox_list) -> None:
        provider = NetboxProvider(
            transport=make_transport(netbox_list([{"id": 1, "name": "kvm", "slug": "kvm"}]))
        )
        provider.configure(_request())
        ds = provider.new_data_source("netbox_cluster_type")
        provider.configure(_request(server_url="https://other.example.com"))

        response = ds.read({"name": "kvm"})

        assert not response.diagnostics.has_error()
        assert response.state == {"id": 1, "name": "kvm", "slug": "kvm"}
        assert recorder[0].url.host == "nb.example.com"
        provider.close()


class TestRegistries:
    def test_factories(self) -> None:
        provider = NetboxProvider()
        assert provider.data_sources() == [ClusterTypeDataSource]
        assert provider.resources() == []
        assert provider.data_source_names() == ["netbox_cluster_type"]

    def test_new_data_source_receives_client(self, make_transport, netbox_list) -> None:
        provider = NetboxProvider(
            transport=make_transport(netbox_list([{"id": 3, "name": "VMware", "slug": "vmware"}]))
        )
        provider.configure(_request())

        ds = provider.new_data_source("netbox_cluster_type")
        assert ds.client is provider.client
        assert ds.read({"name": "VMware"}).state == {"id": 3, "name": "VMware", "slug": "vmware"}
        provider.close()

    def test_new_data_source_before_configure_is_unconfigured(self) -> None:
        ds = NetboxProvider().new_data_source("netbox_cluster_type")
        assert ds.client is None

    def test_unknown_data_source(self) -> None:
        with pytest.raises(RegistryError):
            NetboxProvider().new_data_source("netbox_device")
