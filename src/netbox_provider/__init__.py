"""netbox-provider -- manage NetBox objects from declarative configuration.

This package implements the provider side of an infrastructure-as-code
plugin for NetBox. The host tool hands the provider its top-level
configuration; the provider resolves it against environment fallbacks,
builds a NetBox API client, and publishes that client to every data source
and resource handler it registers.

Typical flow::

    provider = NetboxProvider(version="1.0.0")
    response = provider.configure(ConfigureRequest(config=model))
    if not response.diagnostics.has_error():
        ds = provider.new_data_source("netbox_cluster_type")

Modules:
    provider: Provider entry point (metadata, schema, configure, registries).
    config: Configuration resolution with environment-variable fallbacks.
    client: NetBox API client handle and its bootstrapper.
    handlers: Data-source/resource base classes, registry, and handlers.
    models: Pydantic models and the tri-state configuration value.
    diagnostics: Field-scoped errors and warnings returned to the host.
    exceptions: Exception hierarchy with exit-code mapping.
    app: Typer command-line surface.
"""

__version__ = "0.1.0"
