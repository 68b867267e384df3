"""Synchronous NetBox API client handle and its bootstrapper.

:class:`NetboxClient` wraps :class:`httpx.Client` bound to the NetBox
server URL and token. Construction only validates the URL and sets up the
transport; no request is sent until a handler asks for data. A single
instance is shared read-only by every data source and resource for the
lifetime of a provider session.

:func:`bootstrap_client` is the only place that builds a client from a
:class:`~netbox_provider.models.ResolvedConfig`. It turns any construction
failure into :class:`~netbox_provider.exceptions.ClientConstructionError`
with the underlying message preserved verbatim.

Retries and pagination are deliberately absent: list calls return the
first page only.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from netbox_provider import __version__
from netbox_provider.exceptions import (
    AuthError,
    ClientConstructionError,
    ConnectionError_,
    NotFoundError,
    ServerError,
)
from netbox_provider.models import ResolvedConfig

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0
"""Request timeout in seconds."""

_ALLOWED_SCHEMES = ("http", "https")


class NetboxClient:
    """Handle to the NetBox REST API.

    Args:
        server_url: NetBox base URL including scheme, e.g.
            ``https://netbox.example.com``.
        api_token: NetBox API token, sent as ``Authorization: Token <token>``.
        timeout: Request timeout in seconds.
        transport: Optional httpx transport, used by tests to inject
            :class:`httpx.MockTransport`.

    Raises:
        ValueError: If *server_url* is not an absolute ``http``/``https``
            URL with a host.

    Example::

        with NetboxClient("https://netbox.example.com", token) as client:
            types = client.list_objects("/api/virtualization/cluster-types/")
    """

    def __init__(
        self,
        server_url: str,
        api_token: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        if not server_url:
            raise ValueError("server URL is empty")
        try:
            url = httpx.URL(server_url)
        except httpx.InvalidURL as exc:
            raise ValueError(f"invalid server URL {server_url!r}: {exc}") from exc
        if url.scheme not in _ALLOWED_SCHEMES:
            raise ValueError(
                f"unsupported scheme {url.scheme!r} in server URL {server_url!r}, "
                "expected http or https"
            )
        if not url.host:
            raise ValueError(f"server URL {server_url!r} has no host")

        self._server_url = server_url
        self._timeout = timeout
        self._client = httpx.Client(
            base_url=server_url,
            headers={
                "Authorization": f"Token {api_token}",
                "Accept": "application/json",
                "User-Agent": f"netbox-provider/{__version__}",
            },
            timeout=timeout,
            follow_redirects=True,
            transport=transport,
        )

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> NetboxClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def __repr__(self) -> str:
        return f"NetboxClient(server_url={self._server_url!r})"

    @property
    def server_url(self) -> str:
        return self._server_url

    @property
    def timeout(self) -> float:
        return self._timeout

    # ------------------------------------------------------------------ #
    # Requests
    # ------------------------------------------------------------------ #

    def get(self, path: str, params: Optional[dict[str, Any]] = None) -> httpx.Response:
        """Send a GET request and map error statuses to exceptions.

        Args:
            path: URL path appended to the server URL.
            params: Query parameters.

        Returns:
            The :class:`httpx.Response`.

        Raises:
            AuthError: On 401 / 403.
            NotFoundError: On 404.
            ServerError: On any other status >= 400.
            ConnectionError_: On network, timeout, protocol or redirect errors.
        """
        logger.debug("GET %s params=%s", path, params)
        try:
            response = self._client.get(path, params=params)
        except (httpx.TransportError, httpx.TooManyRedirects) as exc:
            raise ConnectionError_(f"Connection to {self._server_url} failed: {exc}") from exc
        self._map_response_error(response)
        return response

    def get_json(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        """Send a GET request and return the decoded JSON body."""
        response = self.get(path, params=params)
        try:
            return response.json()
        except ValueError as exc:
            raise ServerError(
                f"Invalid JSON in response to GET {path}: {exc}", response.status_code
            ) from exc

    def list_objects(self, path: str, **filters: Any) -> list[dict[str, Any]]:
        """Return the ``results`` of a NetBox list endpoint (first page only).

        Args:
            path: List endpoint, e.g. ``/api/virtualization/cluster-types/``.
            **filters: Query filters such as ``name="kvm"``. ``None`` values
                are dropped.
        """
        params = {k: v for k, v in filters.items() if v is not None}
        body = self.get_json(path, params=params)
        if not isinstance(body, dict) or not isinstance(body.get("results"), list):
            raise ServerError(f"Unexpected list response from {path}")
        return body["results"]

    def status(self) -> dict[str, Any]:
        """Return the payload of ``GET /api/status/``.

        Never called during bootstrap; exposed for callers that want to
        check connectivity or the NetBox version explicitly.
        """
        body = self.get_json("/api/status/")
        if not isinstance(body, dict):
            raise ServerError("Unexpected status response")
        return body

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _map_response_error(self, response: httpx.Response) -> None:
        """Raise a typed exception for error HTTP status codes."""
        status = response.status_code
        if status < 400:
            return

        try:
            detail = response.json()
            if isinstance(detail, dict):
                msg = detail.get("detail") or detail.get("error") or detail.get("message") or ""
            else:
                msg = str(detail)
        except ValueError:
            msg = response.text[:200] if response.text else ""

        prefix = f"HTTP {status}"
        full_msg = f"{prefix}: {msg}" if msg else prefix

        if status in (401, 403):
            raise AuthError(full_msg)
        if status == 404:
            raise NotFoundError(full_msg)
        raise ServerError(full_msg, status)


def bootstrap_client(
    config: ResolvedConfig,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    transport: Optional[httpx.BaseTransport] = None,
) -> NetboxClient:
    """Construct the shared :class:`NetboxClient` for a resolved configuration.

    Args:
        config: Output of :func:`~netbox_provider.config.resolve_config`.
        timeout: Request timeout in seconds.
        transport: Optional httpx transport override.

    Returns:
        A ready-to-use client bound to ``config.server_url``.

    Raises:
        ClientConstructionError: If the client cannot be built. The
            underlying message is available verbatim as ``cause_message``.
    """
    try:
        client = NetboxClient(
            config.server_url,
            config.api_token.get_secret_value(),
            timeout=timeout,
            transport=transport,
        )
    except Exception as exc:
        logger.warning("Unable to create NetBox API client: %s", exc)
        raise ClientConstructionError(str(exc)) from exc
    logger.debug("Created NetBox API client for %s", config.server_url)
    return client
