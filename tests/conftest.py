"""Shared test fixtures for netbox-provider.

Provides an isolated environment (no NETBOX_* variables leak in from the
developer's shell), quiet output management, NetBox-shaped mock transports,
and a Typer CLI runner.
"""

from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

from netbox_provider.models import ResolvedConfig
from netbox_provider.output import OutputFormat, OutputManager, reset_output, set_output

ENV_VARS = (
    "NETBOX_SERVER_URL",
    "NETBOX_API_TOKEN",
    "NETBOX_STRIP_TRAILING_SLASHES_FROM_URL",
)


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    CliRunner swaps sys.stdout/sys.stderr during a test; a manager created
    inside it would keep stale stream references.
    """
    yield
    reset_output()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove every NETBOX_* fallback variable from the process environment."""
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    return monkeypatch


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def resolved_config() -> ResolvedConfig:
    return ResolvedConfig(server_url="https://nb.example.com", api_token="0123456789abcdef")


# ---------------------------------------------------------------------------
# HTTP fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def netbox_list() -> Callable[[list[dict[str, Any]]], dict[str, Any]]:
    """Wrap results in a NetBox list envelope."""

    def _wrap(results: list[dict[str, Any]]) -> dict[str, Any]:
        return {"count": len(results), "next": None, "previous": None, "results": results}

    return _wrap


@pytest.fixture
def recorder() -> list[httpx.Request]:
    """Collects every request a mock transport receives."""
    return []


@pytest.fixture
def make_transport(recorder: list[httpx.Request]) -> Callable[..., httpx.MockTransport]:
    """Build an :class:`httpx.MockTransport` answering with a fixed JSON body."""

    def _make(body: Any = None, status_code: int = 200) -> httpx.MockTransport:
        def handler(request: httpx.Request) -> httpx.Response:
            recorder.append(request)
            return httpx.Response(
                status_code,
                headers={"content-type": "application/json"},
                content=json.dumps(body if body is not None else {}).encode(),
            )

        return httpx.MockTransport(handler)

    return _make


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True, no_color=True)
    set_output(output)
    yield output
    reset_output()


@pytest.fixture
def cli_runner():
    from typer.testing import CliRunner

    return CliRunner()
