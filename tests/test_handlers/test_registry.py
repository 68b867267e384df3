"""Tests for the handler registry."""

from __future__ import annotations

from typing import Any, Mapping

import pytest

from netbox_provider.diagnostics import Diagnostics
from netbox_provider.exceptions import RegistryError
from netbox_provider.handlers import (
    DATA_SOURCE_FACTORIES,
    RESOURCE_FACTORIES,
    ClusterTypeDataSource,
    DataSource,
    HandlerRegistry,
    ReadResponse,
    Resource,
    SchemaAttribute,
)


class SiteDataSource(DataSource):
    type_name_suffix = "site"

    def schema(self) -> dict[str, SchemaAttribute]:
        return {"name": SchemaAttribute(type="string", required=True)}

    def read(self, config: Mapping[str, Any]) -> ReadResponse:
        return ReadResponse(state=dict(config))


class DuplicateClusterType(SiteDataSource):
    type_name_suffix = "cluster_type"


class TagResource(Resource):
    type_name_suffix = "tag"

    def schema(self) -> dict[str, SchemaAttribute]:
        return {}

    def create(self, plan: Mapping[str, Any]) -> ReadResponse:
        return ReadResponse(state=dict(plan))

    def read(self, state: Mapping[str, Any]) -> ReadResponse:
        return ReadResponse(state=dict(state))

    def update(self, state: Mapping[str, Any], plan: Mapping[str, Any]) -> ReadResponse:
        return ReadResponse(state={**state, **plan})

    def delete(self, state: Mapping[str, Any]) -> Diagnostics:
        return Diagnostics()


class TestBuiltinCatalog:
    def test_one_data_source_and_no_resources(self) -> None:
        assert DATA_SOURCE_FACTORIES == [ClusterTypeDataSource]
        assert RESOURCE_FACTORIES == []


class TestHandlerRegistry:
    def test_register_and_create(self) -> None:
        registry: HandlerRegistry[DataSource] = HandlerRegistry("netbox", DATA_SOURCE_FACTORIES)
        assert registry.names() == ["netbox_cluster_type"]
        assert "netbox_cluster_type" in registry
        assert isinstance(registry.create("netbox_cluster_type"), ClusterTypeDataSource)

    def test_registration_order_is_kept(self) -> None:
        registry: HandlerRegistry[DataSource] = HandlerRegistry(
            "netbox", [SiteDataSource, ClusterTypeDataSource]
        )
        assert registry.names() == ["netbox_site", "netbox_cluster_type"]
        assert registry.factories() == [SiteDataSource, ClusterTypeDataSource]
        assert len(registry) == 2

    def test_duplicate_type_name_rejected(self) -> None:
        registry: HandlerRegistry[DataSource] = HandlerRegistry("netbox", DATA_SOURCE_FACTORIES)
        with pytest.raises(RegistryError, match="already registered"):
            registry.register(DuplicateClusterType)

    def test_unknown_type_name(self) -> None:
        registry: HandlerRegistry[DataSource] = HandlerRegistry("netbox")
        with pytest.raises(RegistryError, match="available: none"):
            registry.get("netbox_site")

    def test_each_create_returns_a_fresh_instance(self) -> None:
        registry: HandlerRegistry[DataSource] = HandlerRegistry("netbox", [SiteDataSource])
        assert registry.create("netbox_site") is not registry.create("netbox_site")

    def test_resources(self) -> None:
        registry: HandlerRegistry[Resource] = HandlerRegistry("netbox", [TagResource])
        resource = registry.create("netbox_tag")
        assert resource.create({"name": "prod"}).state == {"name": "prod"}
        assert not resource.delete({"name": "prod"})
