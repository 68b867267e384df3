"""Typer application and CLI entry point for netbox-provider.

The ``netbox-provider`` command runs the provider outside the host so that
its configuration can be checked from a shell or CI job:

* ``validate`` -- resolve configuration from flags and the environment,
  build the client, and print every diagnostic.
* ``schema`` -- print the provider configuration schema.
* ``env`` -- show which environment fallbacks are set.
* ``data-sources`` -- list registered data source type names.
* ``read`` -- configure the provider and read one data source.

:func:`main` is the console-script entry point declared in
``pyproject.toml``.
"""

from __future__ import annotations

import logging
import signal
import sys
from typing import Any, Optional

import typer

from netbox_provider import __version__
from netbox_provider.config import describe_env_fallbacks
from netbox_provider.diagnostics import Diagnostics, FailureKind
from netbox_provider.exceptions import (
    ConfigError,
    InvalidUsageError,
    NetboxProviderError,
)
from netbox_provider.exit_codes import (
    EXIT_CLIENT_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_NOT_FOUND,
)
from netbox_provider.models import ConfigValue, ProviderModel
from netbox_provider.output import (
    OutputFormat,
    OutputManager,
    debug,
    error,
    format_response,
    print_diagnostics,
    print_table,
    set_output,
    success,
)
from netbox_provider.provider import ConfigureRequest, NetboxProvider, new

app = typer.Typer(
    name="netbox-provider",
    help="Validate and exercise the NetBox provider configuration.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

_make_provider = new(__version__)

_SERVER_URL_OPTION = typer.Option(
    None, "--server-url", help="NetBox server URL (overrides NETBOX_SERVER_URL)."
)
_API_TOKEN_OPTION = typer.Option(
    None, "--api-token", help="NetBox API token (overrides NETBOX_API_TOKEN)."
)
_STRIP_OPTION = typer.Option(
    None,
    "--strip-trailing-slashes/--no-strip-trailing-slashes",
    help="Strip trailing slashes from the server URL (default: on).",
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"netbox-provider {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-essential output."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output."),
) -> None:
    """Initialise output and logging before every sub-command."""
    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose))
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _build_model(
    server_url: Optional[str],
    api_token: Optional[str],
    strip: Optional[bool],
) -> ProviderModel:
    return ProviderModel(
        server_url=ConfigValue.known(server_url),
        api_token=ConfigValue.known(api_token),
        strip_trailing_slashes_from_url=ConfigValue.known(strip),
    )


def _configured_provider(
    server_url: Optional[str],
    api_token: Optional[str],
    strip: Optional[bool],
) -> NetboxProvider:
    """Configure a provider from CLI flags and the process environment.

    Advisories are printed; errors are raised.

    Raises:
        ConfigError: If configuration cannot be resolved or the client
            cannot be built. The diagnostics are attached.
    """
    provider = _make_provider()
    response = provider.configure(
        ConfigureRequest(config=_build_model(server_url, api_token, strip))
    )
    if response.diagnostics.has_error():
        exit_code = None
        if response.diagnostics.of_kind(FailureKind.CONSTRUCTION):
            exit_code = EXIT_CLIENT_ERROR
        raise ConfigError(
            "Provider configuration is invalid",
            diagnostics=response.diagnostics,
            exit_code=exit_code,
        )
    print_diagnostics(response.diagnostics)
    return provider


def _fail(exc: NetboxProviderError) -> typer.Exit:
    diagnostics = getattr(exc, "diagnostics", None)
    if isinstance(diagnostics, Diagnostics):
        print_diagnostics(diagnostics)
    error(str(exc))
    return typer.Exit(code=exc.exit_code)


def _parse_attributes(pairs: list[str]) -> dict[str, Any]:
    attributes: dict[str, Any] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise InvalidUsageError(f"Expected key=value, got: {pair!r}")
        attributes[key] = value
    return attributes


@app.command("validate")
def validate_command(
    server_url: Optional[str] = _SERVER_URL_OPTION,
    api_token: Optional[str] = _API_TOKEN_OPTION,
    strip: Optional[bool] = _STRIP_OPTION,
) -> None:
    """Resolve the provider configuration and build the NetBox client.

    Example::

        NETBOX_API_TOKEN=... netbox-provider validate --server-url https://netbox.local/
    """
    try:
        provider = _configured_provider(server_url, api_token, strip)
    except NetboxProviderError as exc:
        raise _fail(exc) from None

    client = provider.client
    if client is None:
        raise _fail(ConfigError("Provider configuration did not produce a NetBox client"))
    format_response(
        {
            "server_url": client.server_url,
            "api_token": "(sensitive)",
            "timeout": client.timeout,
        }
    )
    provider.close()
    success("Provider configuration is valid.")


@app.command("schema")
def schema_command() -> None:
    """Print the provider configuration schema."""
    provider = _make_provider()
    meta = provider.metadata()
    debug(f"Provider {meta.type_name} v{meta.version}")
    rows = [
        [
            name,
            attr.type,
            "required" if attr.required else "optional",
            "yes" if attr.sensitive else "no",
            attr.description,
        ]
        for name, attr in provider.schema().attributes.items()
    ]
    print_table(
        ["attribute", "type", "presence", "sensitive", "description"],
        rows,
        title=f"{meta.type_name} provider schema",
    )


@app.command("env")
def env_command() -> None:
    """Show the environment variables consulted as configuration fallbacks."""
    rows = [[r["attribute"], r["variable"], r["value"]] for r in describe_env_fallbacks()]
    print_table(["attribute", "variable", "value"], rows, title="Environment fallbacks")


@app.command("data-sources")
def data_sources_command() -> None:
    """List the data source types the provider registers."""
    provider = _make_provider()
    print_table(["type"], [[name] for name in provider.data_source_names()])


@app.command("read")
def read_command(
    type_name: str = typer.Argument(help="Data source type, e.g. netbox_cluster_type."),
    attributes: Optional[list[str]] = typer.Option(
        None, "--attr", "-a", help="Data source attribute as key=value (repeatable)."
    ),
    server_url: Optional[str] = _SERVER_URL_OPTION,
    api_token: Optional[str] = _API_TOKEN_OPTION,
    strip: Optional[bool] = _STRIP_OPTION,
) -> None:
    """Configure the provider and read a single data source.

    Example::

        netbox-provider read netbox_cluster_type -a name=kvm
    """
    try:
        config = _parse_attributes(attributes or [])
        provider = _configured_provider(server_url, api_token, strip)
    except NetboxProviderError as exc:
        raise _fail(exc) from None

    try:
        data_source = provider.new_data_source(type_name)
        result = data_source.read(config)
    except NetboxProviderError as exc:
        raise _fail(exc) from None
    finally:
        provider.close()

    print_diagnostics(result.diagnostics)
    if result.diagnostics.has_error():
        code = EXIT_GENERIC_FAILURE
        if result.diagnostics.of_kind(FailureKind.NOT_FOUND):
            code = EXIT_NOT_FOUND
        raise typer.Exit(code=code)
    format_response(result.state)


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def main() -> None:
    """CLI entry point invoked by the ``netbox-provider`` console script.

    :class:`~netbox_provider.exceptions.NetboxProviderError` instances that
    escape a command exit with the error's ``exit_code``; anything else
    exits with :data:`~netbox_provider.exit_codes.EXIT_GENERIC_FAILURE`.
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except NetboxProviderError as exc:
        error(str(exc))
        sys.exit(exc.exit_code)
    except Exception as exc:
        logging.getLogger(__name__).debug("Unhandled exception", exc_info=True)
        error(f"Unexpected error: {exc}")
        sys.exit(EXIT_GENERIC_FAILURE)
