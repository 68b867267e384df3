"""Data source ``netbox_cluster_type``: look up a cluster type by name."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from pydantic import ValidationError

from netbox_provider.diagnostics import FailureKind
from netbox_provider.exceptions import NetboxProviderError
from netbox_provider.handlers.base import DataSource, ReadResponse, SchemaAttribute
from netbox_provider.models import ClusterType

logger = logging.getLogger(__name__)

CLUSTER_TYPES_PATH = "/api/virtualization/cluster-types/"


class ClusterTypeDataSource(DataSource):
    """Read a single NetBox cluster type, matched exactly by ``name``."""

    type_name_suffix = "cluster_type"

    def schema(self) -> dict[str, SchemaAttribute]:
        return {
            "name": SchemaAttribute(
                type="string", required=True, description="Name of the cluster type."
            ),
            "id": SchemaAttribute(type="int", computed=True),
            "slug": SchemaAttribute(type="string", computed=True),
        }

    def read(self, config: Mapping[str, Any]) -> ReadResponse:
        response = ReadResponse()
        diags = response.diagnostics

        client = self._require_client(diags)
        if client is None:
            return response

        name = config.get("name")
        if not name:
            diags.add_attribute_error(
                "name",
                "Missing cluster type name",
                "The `name` attribute is required to look up a cluster type.",
                kind=FailureKind.MISSING,
            )
            return response

        try:
            results = client.list_objects(CLUSTER_TYPES_PATH, name=name)
        except NetboxProviderError as exc:
            diags.add_error(
                "Unable to read cluster types",
                f"NetBox returned an error while looking up cluster type {name!r}: {exc}",
                kind=FailureKind.API,
            )
            return response

        if not results:
            diags.add_error(
                "No cluster type found",
                f"No cluster type with name {name!r} exists in NetBox.",
                kind=FailureKind.NOT_FOUND,
            )
            return response
        if len(results) > 1:
            diags.add_error(
                "More than one cluster type found",
                f"{len(results)} cluster types match name {name!r}; expected exactly one.",
                kind=FailureKind.AMBIGUOUS,
            )
            return response

        try:
            cluster_type = ClusterType.model_validate(results[0])
        except ValidationError as exc:
            diags.add_error(
                "Unexpected cluster type payload",
                f"NetBox returned a cluster type that could not be parsed: {exc}",
                kind=FailureKind.API,
            )
            return response
        logger.debug("Read cluster type %s (id=%d)", cluster_type.name, cluster_type.id)
        response.state = {
            "id": cluster_type.id,
            "name": cluster_type.name,
            "slug": cluster_type.slug,
        }
        return response
