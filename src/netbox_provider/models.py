"""Data shapes shared across netbox-provider.

Two groups of models live here:

**Configuration input** -- what the host hands to
:meth:`~netbox_provider.provider.NetboxProvider.configure`:
    :class:`ValueState`, :class:`ConfigValue`, and :class:`ProviderModel`.
    Every field is tri-state (known, null, unknown) so that a value the
    host has not computed yet can never be mistaken for an absent one.

**Resolved and remote models** -- pydantic v2 models:
    :class:`ResolvedConfig` (frozen, produced by
    :func:`~netbox_provider.config.resolve_config`) and
    :class:`ClusterType` (a NetBox object read by the cluster type data
    source).
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, SecretStr


# --- Tri-state configuration values ---


class ValueState(str, enum.Enum):
    """State of a single configuration value supplied by the host."""

    KNOWN = "known"
    NULL = "null"
    UNKNOWN = "unknown"


UNKNOWN = object()
"""Sentinel accepted by :meth:`ProviderModel.from_mapping` for unknown values."""


@dataclass(frozen=True)
class ConfigValue:
    """A configuration value that is known, explicitly null, or not yet known.

    Use the constructors rather than building instances directly::

        ConfigValue.known("https://netbox.example.com")
        ConfigValue.null()
        ConfigValue.unknown()
    """

    state: ValueState = ValueState.NULL
    value: Any = None

    @classmethod
    def known(cls, value: Any) -> ConfigValue:
        if value is None:
            return cls.null()
        return cls(ValueState.KNOWN, value)

    @classmethod
    def null(cls) -> ConfigValue:
        return cls(ValueState.NULL)

    @classmethod
    def unknown(cls) -> ConfigValue:
        return cls(ValueState.UNKNOWN)

    @property
    def is_known(self) -> bool:
        return self.state is ValueState.KNOWN

    @property
    def is_null(self) -> bool:
        return self.state is ValueState.NULL

    @property
    def is_unknown(self) -> bool:
        return self.state is ValueState.UNKNOWN

    def __repr__(self) -> str:
        if self.is_known:
            return f"ConfigValue.known({self.value!r})"
        return f"ConfigValue.{self.state.value}()"


@dataclass(frozen=True)
class ProviderModel:
    """Provider configuration as received from the host.

    Maps one-to-one onto the attributes declared by
    :meth:`~netbox_provider.provider.NetboxProvider.schema`. Unset
    attributes are null.
    """

    server_url: ConfigValue = field(default_factory=ConfigValue.null)
    api_token: ConfigValue = field(default_factory=ConfigValue.null)
    strip_trailing_slashes_from_url: ConfigValue = field(default_factory=ConfigValue.null)

    def __post_init__(self) -> None:
        strip = self.strip_trailing_slashes_from_url
        if strip.is_known and not isinstance(strip.value, bool):
            raise TypeError(
                "strip_trailing_slashes_from_url must be a bool, "
                f"got {type(strip.value).__name__}: {strip.value!r}"
            )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ProviderModel:
        """Build a model from a plain mapping of attribute name to value.

        Missing keys and ``None`` become null; the :data:`UNKNOWN` sentinel
        becomes unknown. Keys outside the schema are ignored.

        Raises:
            TypeError: If ``strip_trailing_slashes_from_url`` is known but
                not a bool.
        """
        values: dict[str, ConfigValue] = {}
        for name in ("server_url", "api_token", "strip_trailing_slashes_from_url"):
            raw = data.get(name)
            if raw is UNKNOWN:
                values[name] = ConfigValue.unknown()
            elif isinstance(raw, ConfigValue):
                values[name] = raw
            else:
                values[name] = ConfigValue.known(raw)
        return cls(**values)


# --- Resolved configuration ---


class ResolvedConfig(BaseModel):
    """Fully resolved provider configuration.

    Created once per configure cycle by
    :func:`~netbox_provider.config.resolve_config` and immutable afterwards.
    When stripping is enabled ``server_url`` carries no trailing ``/``.
    The token is a :class:`~pydantic.SecretStr` so it never shows up in a
    repr or a log line.
    """

    model_config = ConfigDict(frozen=True)

    server_url: str = Field(description="NetBox base URL including scheme")
    api_token: SecretStr = Field(description="NetBox API token")
    strip_trailing_slashes_from_url: bool = Field(
        default=True, description="Whether trailing slashes were stripped from server_url"
    )


# --- NetBox objects ---


class ClusterType(BaseModel):
    """A NetBox ``virtualization.ClusterType`` object as returned by the API."""

    model_config = ConfigDict(extra="ignore")

    id: int
    name: str
    slug: str
    description: Optional[str] = None
