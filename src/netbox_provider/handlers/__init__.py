"""Data source and resource handlers.

Re-exports the handler base classes, the registry, and the built-in
factory lists for convenient access::

    from netbox_provider.handlers import DataSource, HandlerRegistry
"""

from netbox_provider.handlers.base import DataSource, ReadResponse, Resource, SchemaAttribute
from netbox_provider.handlers.cluster_type import ClusterTypeDataSource
from netbox_provider.handlers.registry import (
    DATA_SOURCE_FACTORIES,
    RESOURCE_FACTORIES,
    HandlerRegistry,
)

__all__ = [
    "ClusterTypeDataSource",
    "DATA_SOURCE_FACTORIES",
    "DataSource",
    "HandlerRegistry",
    "RESOURCE_FACTORIES",
    "ReadResponse",
    "Resource",
    "SchemaAttribute",
]
