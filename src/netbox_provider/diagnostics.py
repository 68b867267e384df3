"""Field-scoped errors and warnings returned to the host.

Nothing inside the provider boundary raises to the host. Instead every
operation appends :class:`Diagnostic` entries to a :class:`Diagnostics`
collection and the host decides how to present them. A validation failure
is an error diagnostic scoped to an attribute; an advisory is a warning.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional


class Severity(str, enum.Enum):
    ERROR = "error"
    WARNING = "warning"


class FailureKind(str, enum.Enum):
    """Machine-readable category attached to each diagnostic."""

    UNKNOWN = "unknown"
    MISSING = "missing"
    CONSTRUCTION = "construction"
    TRAILING_SLASHES_STRIPPED = "trailing_slashes_stripped"
    NOT_FOUND = "not_found"
    AMBIGUOUS = "ambiguous"
    API = "api"
    UNCONFIGURED = "unconfigured"


@dataclass(frozen=True)
class Diagnostic:
    """A single error or warning.

    Attributes:
        severity: Whether the diagnostic blocks the operation.
        summary: One-line headline.
        detail: Longer explanation, including how to fix the problem.
        attribute: Name of the configuration attribute the diagnostic is
            scoped to, or ``None`` for provider-wide diagnostics.
        kind: Category used by callers and tests to branch on.
    """

    severity: Severity
    summary: str
    detail: str = ""
    attribute: Optional[str] = None
    kind: Optional[FailureKind] = None

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    def to_dict(self) -> dict[str, Optional[str]]:
        return {
            "severity": self.severity.value,
            "summary": self.summary,
            "detail": self.detail,
            "attribute": self.attribute,
            "kind": self.kind.value if self.kind else None,
        }


class Diagnostics:
    """Ordered collection of :class:`Diagnostic` entries."""

    def __init__(self, items: Iterable[Diagnostic] = ()) -> None:
        self._items: list[Diagnostic] = list(items)

    def append(self, diagnostic: Diagnostic) -> None:
        self._items.append(diagnostic)

    def extend(self, other: Iterable[Diagnostic]) -> None:
        self._items.extend(other)

    def add_error(self, summary: str, detail: str = "", kind: Optional[FailureKind] = None) -> None:
        self.append(Diagnostic(Severity.ERROR, summary, detail, None, kind))

    def add_warning(self, summary: str, detail: str = "", kind: Optional[FailureKind] = None) -> None:
        self.append(Diagnostic(Severity.WARNING, summary, detail, None, kind))

    def add_attribute_error(
        self, attribute: str, summary: str, detail: str = "", kind: Optional[FailureKind] = None
    ) -> None:
        self.append(Diagnostic(Severity.ERROR, summary, detail, attribute, kind))

    def add_attribute_warning(
        self, attribute: str, summary: str, detail: str = "", kind: Optional[FailureKind] = None
    ) -> None:
        self.append(Diagnostic(Severity.WARNING, summary, detail, attribute, kind))

    def has_error(self) -> bool:
        return any(d.is_error for d in self._items)

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self._items if d.is_error]

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self._items if not d.is_error]

    def of_kind(self, kind: FailureKind) -> list[Diagnostic]:
        return [d for d in self._items if d.kind is kind]

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __repr__(self) -> str:
        return f"Diagnostics({self._items!r})"
