# src/catalog/errors.py
"""
Domain errors for the catalog exporter.

Every error here is fatal: the exporter either writes one complete document
or none at all. Callers (the CLI) catch ExportError at the top level, log it,
and exit non-zero.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class ExportError(RuntimeError):
    """
    Base error raised while walking host registries.

    - code: short machine-friendly tag ("unknown_property_kind", ...)
    - details: structured context for the diagnostic message
    """

    code: str
    details: Dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, details={self.details!r})"


class HostAccessError(ExportError):
    """A field, attribute or registry key could not be read from the host."""


class UnknownPropertyKindError(ExportError):
    """A block-state property is neither boolean, enum nor integer."""


class HostBootstrapError(ExportError):
    """The host runtime could not be loaded."""


_MISSING = object()


def read_attribute(obj: Any, name: str, default: Any = _MISSING) -> Any:
    """
    getattr() that reports failures as HostAccessError.

    With a default, a missing attribute returns the default instead; any
    other exception raised by a host property still surfaces as an error.
    """
    try:
        return getattr(obj, name)
    except AttributeError as exc:
        if default is not _MISSING:
            return default
        raise HostAccessError(
            code="missing_attribute",
            details={"owner": _describe(obj), "attribute": name},
        ) from exc
    except Exception as exc:
        raise HostAccessError(
            code="attribute_read_failed",
            details={"owner": _describe(obj), "attribute": name, "error": repr(exc)},
        ) from exc


def _describe(obj: Optional[Any]) -> str:
    if isinstance(obj, type):
        return obj.__qualname__
    return type(obj).__qualname__
