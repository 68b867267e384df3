"""Handler registry -- the factory lists the provider exposes to the host.

:class:`HandlerRegistry` keeps zero-argument factories in registration
order, keyed by the full type name each handler reports through
:meth:`~netbox_provider.handlers.base.DataSource.metadata`. Registering
the same type name twice is an error, as is asking for a type that was
never registered.

The module-level :data:`DATA_SOURCE_FACTORIES` and
:data:`RESOURCE_FACTORIES` lists are the provider's built-in catalog.
"""

from __future__ import annotations

import logging
from typing import Callable, Generic, Iterable, TypeVar

from netbox_provider.exceptions import RegistryError
from netbox_provider.handlers.base import DataSource, Resource
from netbox_provider.handlers.cluster_type import ClusterTypeDataSource

logger = logging.getLogger(__name__)

H = TypeVar("H", DataSource, Resource)

DATA_SOURCE_FACTORIES: list[Callable[[], DataSource]] = [
    ClusterTypeDataSource,
]
"""Data sources implemented by the provider."""

RESOURCE_FACTORIES: list[Callable[[], Resource]] = []
"""Resources implemented by the provider."""


class HandlerRegistry(Generic[H]):
    """Ordered registry of handler factories keyed by full type name.

    Example::

        registry = HandlerRegistry("netbox", DATA_SOURCE_FACTORIES)
        ds = registry.create("netbox_cluster_type")
    """

    def __init__(self, provider_type_name: str, factories: Iterable[Callable[[], H]] = ()) -> None:
        self._provider_type_name = provider_type_name
        self._factories: dict[str, Callable[[], H]] = {}
        for factory in factories:
            self.register(factory)

    def register(self, factory: Callable[[], H]) -> str:
        """Register *factory* and return the type name it was filed under.

        Raises:
            RegistryError: If a handler with the same type name is already
                registered.
        """
        name = factory().metadata(self._provider_type_name)
        if name in self._factories:
            raise RegistryError(f"Handler type '{name}' is already registered")
        self._factories[name] = factory
        logger.debug("Registered handler '%s'", name)
        return name

    def get(self, name: str) -> Callable[[], H]:
        """Return the factory registered under *name*.

        Raises:
            RegistryError: If nothing is registered under *name*.
        """
        try:
            return self._factories[name]
        except KeyError:
            available = ", ".join(self._factories) or "none"
            raise RegistryError(
                f"Handler type '{name}' is not registered (available: {available})"
            ) from None

    def create(self, name: str) -> H:
        """Instantiate the handler registered under *name*."""
        return self.get(name)()

    def names(self) -> list[str]:
        return list(self._factories)

    def factories(self) -> list[Callable[[], H]]:
        return list(self._factories.values())

    def __contains__(self, name: object) -> bool:
        return name in self._factories

    def __len__(self) -> int:
        return len(self._factories)
