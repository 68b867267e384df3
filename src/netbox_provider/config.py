"""Provider configuration resolution with environment-variable fallbacks.

:func:`resolve_config` turns the tri-state
:class:`~netbox_provider.models.ProviderModel` handed over by the host into
a frozen :class:`~netbox_provider.models.ResolvedConfig`, or into a list of
error diagnostics when that is not possible.

Precedence (high to low), per attribute:
    1. Explicit value in the provider configuration
    2. Environment variable (``NETBOX_SERVER_URL``, ``NETBOX_API_TOKEN``,
       ``NETBOX_STRIP_TRAILING_SLASHES_FROM_URL``)
    3. Default (only ``strip_trailing_slashes_from_url``, which defaults to
       ``True``)

Unknown values are reported before anything else and stop resolution:
defaulting or overriding a value the host has not computed yet would bake
in the wrong answer. All other failures are accumulated and reported
together.

The environment is read through an injectable mapping so resolution can be
exercised without touching ``os.environ``.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from netbox_provider.diagnostics import Diagnostics, FailureKind
from netbox_provider.models import ProviderModel, ResolvedConfig

logger = logging.getLogger(__name__)

ENV_SERVER_URL = "NETBOX_SERVER_URL"
ENV_API_TOKEN = "NETBOX_API_TOKEN"
ENV_STRIP_TRAILING_SLASHES = "NETBOX_STRIP_TRAILING_SLASHES_FROM_URL"

ENV_FALLBACKS: dict[str, str] = {
    "server_url": ENV_SERVER_URL,
    "api_token": ENV_API_TOKEN,
    "strip_trailing_slashes_from_url": ENV_STRIP_TRAILING_SLASHES,
}
"""Attribute name to the environment variable consulted when it is null."""

_LABELS: dict[str, str] = {
    "server_url": "NetBox Server URL",
    "api_token": "NetBox API Token",
    "strip_trailing_slashes_from_url": "NetBox trailing slash stripping flag",
}

STRIPPED_SUMMARY = "Stripped trailing slashes from the `server_url` parameter"
STRIPPED_DETAIL = (
    "Trailing slashes in the `server_url` parameter lead to problems in most setups, "
    "so all trailing slashes were stripped. Use the `strip_trailing_slashes_from_url` "
    "parameter to disable this feature or remove all trailing slashes in the "
    "`server_url` to disable this warning."
)


@dataclass
class ConfigResolution:
    """Outcome of :func:`resolve_config`.

    ``config`` is ``None`` whenever ``diagnostics`` holds an error. On
    success ``diagnostics`` may still carry advisories (warnings) that the
    caller must surface.
    """

    config: Optional[ResolvedConfig] = None
    diagnostics: Diagnostics = field(default_factory=Diagnostics)

    @property
    def ok(self) -> bool:
        return self.config is not None and not self.diagnostics.has_error()


def _unknown_detail(attribute: str) -> str:
    label = _LABELS[attribute]
    return (
        f"The provider cannot create the NetBox API client as there is an unknown "
        f"configuration value for the {label}. Either target apply the source of the "
        f"value first, set the value statically in the configuration, or use the "
        f"{ENV_FALLBACKS[attribute]} environment variable."
    )


def _missing_detail(attribute: str) -> str:
    label = _LABELS[attribute]
    return (
        f"The provider cannot create the NetBox API client as there is a missing "
        f"or empty value for the {label}. Set the `{attribute}` value in the "
        f"configuration or use the {ENV_FALLBACKS[attribute]} environment variable. "
        f"If either is already set, ensure the value is not empty."
    )


def strip_trailing_slashes(url: str) -> tuple[str, bool]:
    """Remove every trailing ``/`` from *url*.

    Idempotent: a URL without trailing slashes is returned unchanged.

    Returns:
        A tuple of ``(stripped_url, whether_anything_was_removed)``.
    """
    stripped = url.rstrip("/")
    return stripped, stripped != url


def resolve_config(
    model: ProviderModel,
    env: Optional[Mapping[str, str]] = None,
) -> ConfigResolution:
    """Resolve *model* against environment fallbacks and defaults.

    Args:
        model: Provider configuration as received from the host.
        env: Environment lookup. Defaults to ``os.environ``. Not consulted
            at all when any value is unknown.

    Returns:
        A :class:`ConfigResolution`. On failure ``config`` is ``None`` and
        ``diagnostics`` lists every ``UNKNOWN`` (or, failing that, every
        ``MISSING``) error. On success ``diagnostics`` holds zero or more
        advisories.
    """
    result = ConfigResolution()
    diags = result.diagnostics

    # 1. Unknown values short-circuit before any environment lookup.
    for attribute in ("server_url", "api_token", "strip_trailing_slashes_from_url"):
        if getattr(model, attribute).is_unknown:
            diags.add_attribute_error(
                attribute,
                f"Unknown {_LABELS[attribute]}",
                _unknown_detail(attribute),
                kind=FailureKind.UNKNOWN,
            )
    if diags.has_error():
        logger.debug("Configuration has %d unknown value(s), not resolving", len(diags))
        return result

    if env is None:
        env = os.environ

    # 2. server_url and api_token: explicit > env.
    server_url = env.get(ENV_SERVER_URL, "")
    if model.server_url.is_known:
        server_url = str(model.server_url.value)
    if not server_url:
        diags.add_attribute_error(
            "server_url",
            f"Missing {_LABELS['server_url']}",
            _missing_detail("server_url"),
            kind=FailureKind.MISSING,
        )

    api_token = env.get(ENV_API_TOKEN, "")
    if model.api_token.is_known:
        api_token = str(model.api_token.value)
    if not api_token:
        diags.add_attribute_error(
            "api_token",
            f"Missing {_LABELS['api_token']}",
            _missing_detail("api_token"),
            kind=FailureKind.MISSING,
        )

    # 3. Stripping flag: explicit > env ("false" only) > default True.
    strip = True
    if env.get(ENV_STRIP_TRAILING_SLASHES) == "false":
        strip = False
    if model.strip_trailing_slashes_from_url.is_known:
        strip = model.strip_trailing_slashes_from_url.value

    if diags.has_error():
        return result

    if strip:
        server_url, trimmed = strip_trailing_slashes(server_url)
        if trimmed:
            logger.info("Stripped trailing slashes from server_url")
            diags.add_attribute_warning(
                "strip_trailing_slashes_from_url",
                STRIPPED_SUMMARY,
                STRIPPED_DETAIL,
                kind=FailureKind.TRAILING_SLASHES_STRIPPED,
            )

    result.config = ResolvedConfig(
        server_url=server_url,
        api_token=api_token,
        strip_trailing_slashes_from_url=strip,
    )
    logger.debug("Resolved provider configuration for %s", server_url)
    return result


def describe_env_fallbacks(env: Optional[Mapping[str, str]] = None) -> list[dict[str, str]]:
    """Describe each environment fallback and whether it is currently set.

    The token's value is never included; only whether it is set.
    """
    if env is None:
        env = os.environ
    rows: list[dict[str, str]] = []
    for attribute, var in ENV_FALLBACKS.items():
        value = env.get(var)
        if value is None:
            shown = "(unset)"
        elif attribute == "api_token":
            shown = "(set)"
        else:
            shown = value
        rows.append({"attribute": attribute, "variable": var, "value": shown})
    return rows
