"""Exception hierarchy for netbox-provider.

All exceptions inherit from :class:`NetboxProviderError`, which carries an
``exit_code`` attribute mapped to a constant from
:mod:`netbox_provider.exit_codes`. Inside the provider these exceptions are
turned into :class:`~netbox_provider.diagnostics.Diagnostic` entries; only
the command-line entry point :func:`netbox_provider.app.main` lets them
reach the process boundary.

Subclass hierarchy::

    NetboxProviderError        (exit 1)
    +-- InvalidUsageError      (exit 2)
    +-- AuthError              (exit 3)
    +-- NotFoundError          (exit 4)
    +-- ServerError            (exit 5)
    +-- ConnectionError_       (exit 6)
    +-- ConfigError            (exit 7)
    +-- ClientConstructionError (exit 8)
    +-- RegistryError          (exit 10)
"""

from netbox_provider.exit_codes import (
    EXIT_AUTH_FAILURE,
    EXIT_CLIENT_ERROR,
    EXIT_CONFIG_ERROR,
    EXIT_CONNECTION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_NOT_FOUND,
    EXIT_REGISTRY_ERROR,
    EXIT_SERVER_ERROR,
)


class NetboxProviderError(Exception):
    """Base exception for all netbox-provider errors.

    Args:
        message: Human-readable error description.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(NetboxProviderError):
    """Raised for invalid CLI arguments."""

    exit_code = EXIT_INVALID_USAGE


class AuthError(NetboxProviderError):
    """Raised when NetBox rejects the API token (HTTP 401/403)."""

    exit_code = EXIT_AUTH_FAILURE


class NotFoundError(NetboxProviderError):
    """Raised when NetBox returns HTTP 404."""

    exit_code = EXIT_NOT_FOUND


class ServerError(NetboxProviderError):
    """Raised when NetBox returns any other error status."""

    exit_code = EXIT_SERVER_ERROR

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ConnectionError_(NetboxProviderError):
    """Raised on network-level failures (timeout, DNS resolution, connection refused).

    Named with a trailing underscore to avoid shadowing the built-in
    ``ConnectionError``.
    """

    exit_code = EXIT_CONNECTION_ERROR


class ConfigError(NetboxProviderError):
    """Raised when provider configuration cannot be resolved.

    Carries the error diagnostics produced by ``configure`` so the CLI can
    print each one. A client construction failure overrides the exit code
    with ``EXIT_CLIENT_ERROR``.
    """

    exit_code = EXIT_CONFIG_ERROR

    def __init__(self, message: str, diagnostics=None, exit_code: int | None = None):
        super().__init__(message, exit_code)
        self.diagnostics = diagnostics


class ClientConstructionError(NetboxProviderError):
    """Raised when the NetBox API client cannot be constructed.

    The underlying failure message is kept verbatim in ``cause_message``.
    """

    exit_code = EXIT_CLIENT_ERROR

    def __init__(self, cause_message: str):
        super().__init__(f"NetBox Client Error: {cause_message}")
        self.cause_message = cause_message


class RegistryError(NetboxProviderError):
    """Raised when a handler type is registered twice or is not registered."""

    exit_code = EXIT_REGISTRY_ERROR
