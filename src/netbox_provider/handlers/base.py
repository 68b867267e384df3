"""Abstract base classes for data sources and resources.

Every handler the provider exposes subclasses :class:`DataSource` or
:class:`Resource` and is registered as a zero-argument factory (usually the
class itself). The host drives the lifecycle:

1. Instantiation -- the registry calls the no-arg factory.
2. :meth:`configure` -- called with the shared
   :class:`~netbox_provider.client.NetboxClient`, or with ``None`` when
   the provider has not been configured yet.
3. Operations -- :meth:`DataSource.read`, or the CRUD methods on
   :class:`Resource`, called zero or more times.

Operations never raise to the host; they return diagnostics.

Example:
    Minimal data source::

        class SiteDataSource(DataSource):
            type_name_suffix = "site"

            def schema(self):
                return {"name": SchemaAttribute(type="string", required=True)}

            def read(self, config):
                ...
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Mapping, Optional

from pydantic import BaseModel, Field

from netbox_provider.diagnostics import Diagnostics, FailureKind

if TYPE_CHECKING:
    from netbox_provider.client import NetboxClient


class SchemaAttribute(BaseModel):
    """Declaration of a single attribute in a provider or handler schema."""

    type: str = Field(description="Attribute type: string, bool, int")
    description: str = ""
    required: bool = False
    optional: bool = False
    computed: bool = False
    sensitive: bool = False


@dataclass
class ReadResponse:
    """Result of a read: the state to record, plus diagnostics.

    ``state`` is ``None`` whenever ``diagnostics`` holds an error.
    """

    state: Optional[dict[str, Any]] = None
    diagnostics: Diagnostics = field(default_factory=Diagnostics)


class _Handler(ABC):
    """Behaviour shared by data sources and resources."""

    type_name_suffix: str = ""
    """Suffix appended to the provider type name, e.g. ``cluster_type``."""

    def __init__(self) -> None:
        self._client: Optional[NetboxClient] = None

    def metadata(self, provider_type_name: str) -> str:
        """Return the full type name, e.g. ``netbox_cluster_type``."""
        return f"{provider_type_name}_{self.type_name_suffix}"

    @abstractmethod
    def schema(self) -> dict[str, SchemaAttribute]:
        """Return the handler's attribute schema."""
        ...

    def configure(self, provider_data: Optional[NetboxClient]) -> None:
        """Receive the shared client published by the provider.

        ``None`` means the provider is not configured yet and leaves the
        handler unconfigured.
        """
        if provider_data is None:
            return
        self._client = provider_data

    @property
    def client(self) -> Optional[NetboxClient]:
        return self._client

    def _require_client(self, diagnostics: Diagnostics) -> Optional[NetboxClient]:
        if self._client is None:
            diagnostics.add_error(
                "Unconfigured NetBox client",
                "Expected a configured NetBox API client. Configure the provider "
                "before reading or changing objects.",
                kind=FailureKind.UNCONFIGURED,
            )
        return self._client


class DataSource(_Handler):
    """Base class for read-only lookups of NetBox objects."""

    @abstractmethod
    def read(self, config: Mapping[str, Any]) -> ReadResponse:
        """Look up the object described by *config* and return its state."""
        ...


class Resource(_Handler):
    """Base class for NetBox objects whose lifecycle the host manages."""

    @abstractmethod
    def create(self, plan: Mapping[str, Any]) -> ReadResponse:
        ...

    @abstractmethod
    def read(self, state: Mapping[str, Any]) -> ReadResponse:
        ...

    @abstractmethod
    def update(self, state: Mapping[str, Any], plan: Mapping[str, Any]) -> ReadResponse:
        ...

    @abstractmethod
    def delete(self, state: Mapping[str, Any]) -> Diagnostics:
        ...
