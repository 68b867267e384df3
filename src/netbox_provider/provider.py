"""Provider entry point: metadata, schema, configure, and handler registries.

:class:`NetboxProvider` is what the host talks to. It declares the
provider-level configuration schema, resolves configuration and builds the
shared NetBox client during :meth:`NetboxProvider.configure`, and exposes
the data source and resource factory lists.

Configure never raises. Resolver failures, advisories, and client
construction failures all come back as diagnostics on the
:class:`ConfigureResponse`; on success the same client is published as both
``data_source_data`` and ``resource_data``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Mapping, Optional

import httpx
from pydantic import BaseModel

from netbox_provider.client import DEFAULT_TIMEOUT, NetboxClient, bootstrap_client
from netbox_provider.config import (
    ENV_API_TOKEN,
    ENV_SERVER_URL,
    ENV_STRIP_TRAILING_SLASHES,
    resolve_config,
)
from netbox_provider.diagnostics import Diagnostics, FailureKind
from netbox_provider.exceptions import ClientConstructionError
from netbox_provider.handlers import (
    DATA_SOURCE_FACTORIES,
    RESOURCE_FACTORIES,
    DataSource,
    HandlerRegistry,
    Resource,
    SchemaAttribute,
)
from netbox_provider.models import ProviderModel

logger = logging.getLogger(__name__)

PROVIDER_TYPE_NAME = "netbox"


class ProviderMetadata(BaseModel):
    type_name: str
    version: str


class ProviderSchema(BaseModel):
    """Provider-level configuration schema."""

    attributes: dict[str, SchemaAttribute]


@dataclass
class ConfigureRequest:
    """Input to :meth:`NetboxProvider.configure`.

    Attributes:
        config: Tri-state provider configuration from the host.
        env: Environment lookup for fallbacks; ``None`` means
            ``os.environ``.
    """

    config: ProviderModel = field(default_factory=ProviderModel)
    env: Optional[Mapping[str, str]] = None


@dataclass
class ConfigureResponse:
    diagnostics: Diagnostics = field(default_factory=Diagnostics)
    data_source_data: Optional[NetboxClient] = None
    resource_data: Optional[NetboxClient] = None


class NetboxProvider:
    """The NetBox provider.

    Args:
        version: Provider version. ``"dev"`` for local builds, ``"test"``
            under test.
        timeout: Request timeout handed to the client.
        transport: Optional httpx transport handed to the client; tests use
            it to inject :class:`httpx.MockTransport`.
    """

    def __init__(
        self,
        version: str = "dev",
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.version = version
        self._timeout = timeout
        self._transport = transport
        self._client: Optional[NetboxClient] = None
        self._issued: list[NetboxClient] = []
        self._data_sources: HandlerRegistry[DataSource] = HandlerRegistry(
            PROVIDER_TYPE_NAME, DATA_SOURCE_FACTORIES
        )
        self._resources: HandlerRegistry[Resource] = HandlerRegistry(
            PROVIDER_TYPE_NAME, RESOURCE_FACTORIES
        )

    def metadata(self) -> ProviderMetadata:
        return ProviderMetadata(type_name=PROVIDER_TYPE_NAME, version=self.version)

    def schema(self) -> ProviderSchema:
        return ProviderSchema(
            attributes={
                "server_url": SchemaAttribute(
                    type="string",
                    required=True,
                    description=(
                        "Location of the NetBox server including scheme (http or https) "
                        f"and optional port. Can be set via the `{ENV_SERVER_URL}` "
                        "environment variable."
                    ),
                ),
                "api_token": SchemaAttribute(
                    type="string",
                    optional=True,
                    sensitive=True,
                    description=(
                        "NetBox API authentication token. Can be set via the "
                        f"`{ENV_API_TOKEN}` environment variable."
                    ),
                ),
                "strip_trailing_slashes_from_url": SchemaAttribute(
                    type="bool",
                    optional=True,
                    description=(
                        "If true, strip trailing slashes from the `server_url` parameter "
                        "and print a warning when doing so. Can be set via the "
                        f"`{ENV_STRIP_TRAILING_SLASHES}` environment variable. "
                        "Defaults to `true`."
                    ),
                ),
            }
        )

    def configure(self, request: ConfigureRequest) -> ConfigureResponse:
        """Resolve configuration and build the shared NetBox client."""
        response = ConfigureResponse()

        resolution = resolve_config(request.config, request.env)
        response.diagnostics.extend(resolution.diagnostics)
        if resolution.config is None:
            return response

        try:
            client = bootstrap_client(
                resolution.config, timeout=self._timeout, transport=self._transport
            )
        except ClientConstructionError as exc:
            response.diagnostics.add_error(
                "Unable to Create NetBox API Client",
                "An unexpected error occurred when creating the NetBox API client. "
                "If the error is not clear, please contact the provider developers.\n\n"
                f"NetBox Client Error: {exc.cause_message}",
                kind=FailureKind.CONSTRUCTION,
            )
            return response

        # Handlers built from an earlier configure keep their client until close().
        self._issued.append(client)
        self._client = client
        response.data_source_data = client
        response.resource_data = client
        logger.info("Configured NetBox provider for %s", client.server_url)
        return response

    @property
    def client(self) -> Optional[NetboxClient]:
        """The client published by the last successful :meth:`configure`."""
        return self._client

    def data_sources(self) -> list[Callable[[], DataSource]]:
        return self._data_sources.factories()

    def resources(self) -> list[Callable[[], Resource]]:
        return self._resources.factories()

    def data_source_names(self) -> list[str]:
        return self._data_sources.names()

    def new_data_source(self, type_name: str) -> DataSource:
        """Instantiate a registered data source and hand it the shared client.

        Raises:
            RegistryError: If *type_name* is not registered.
        """
        data_source = self._data_sources.create(type_name)
        data_source.configure(self._client)
        return data_source

    def close(self) -> None:
        """Close every client this provider has published."""
        for client in self._issued:
            client.close()
        self._issued.clear()
        self._client = None


def new(version: str) -> Callable[[], NetboxProvider]:
    """Return a zero-argument factory producing providers of *version*."""

    def factory() -> NetboxProvider:
        return NetboxProvider(version=version)

    return factory
