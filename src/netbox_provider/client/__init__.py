"""NetBox API client module.

Provides :class:`NetboxClient`, a thin synchronous wrapper around
:class:`httpx.Client` with token auth and error mapping, and
:func:`bootstrap_client`, which builds the shared client from a resolved
provider configuration.

Example::

    from netbox_provider.client import bootstrap_client

    client = bootstrap_client(resolved_config)
    client.list_objects("/api/virtualization/cluster-types/", name="kvm")
"""

from netbox_provider.client.sync_client import DEFAULT_TIMEOUT, NetboxClient, bootstrap_client

__all__ = ["DEFAULT_TIMEOUT", "NetboxClient", "bootstrap_client"]
