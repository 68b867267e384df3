"""Numeric process exit codes used by the ``netbox-provider`` command.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~netbox_provider.exceptions.NetboxProviderError`
subclass. Wrapper scripts can inspect the exit code to tell a bad
configuration apart from an unreachable NetBox without parsing stderr.

Example::

    $ netbox-provider validate
    $ echo $?
    7   # EXIT_CONFIG_ERROR -- server_url or api_token missing
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_AUTH_FAILURE = 3
"""NetBox rejected the API token (HTTP 401/403)."""

EXIT_NOT_FOUND = 4
"""The requested object was not found (HTTP 404 or an empty lookup)."""

EXIT_SERVER_ERROR = 5
"""NetBox returned an error response."""

EXIT_CONNECTION_ERROR = 6
"""A network-level error occurred (timeout, DNS failure, connection refused)."""

EXIT_CONFIG_ERROR = 7
"""Provider configuration could not be resolved."""

EXIT_CLIENT_ERROR = 8
"""The NetBox API client could not be constructed."""

EXIT_REGISTRY_ERROR = 10
"""A data source or resource type is unknown or registered twice."""
