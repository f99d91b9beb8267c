"""Shared helper functions used across the engine and its callers.

Small, dependency-free conversions for values that arrive from layer
configuration and application state: loose boolean flags, map-source
paths (``"source/layer"``), state-snapshot comparison and URL query
strings.
"""

from __future__ import annotations

from collections.abc import Mapping
from urllib.parse import quote

# Characters left unescaped by JavaScript's encodeURIComponent
_URI_COMPONENT_SAFE = "-_.!~*'()"

_TRUE_TOKENS = frozenset({"true", "1", "on"})

_PATH_SEPARATOR = "/"


def parse_boolean(value: object, default: bool = False) -> bool:
    """Interpret a loosely-typed configuration flag.

    Args:
        value: Any value; strings are compared case-insensitively.
        default: Returned when *value* is ``None``.

    Returns:
        ``True`` for ``True``, ``"true"``, ``"1"``, ``"on"``
        (any case, surrounding whitespace ignored); ``False`` otherwise.
    """
    if value is None:
        return default
    return str(value).strip().lower() in _TRUE_TOKENS


def objects_differ(a: Mapping[str, object], b: Mapping[str, object], *, deep: bool = False) -> bool:
    """Return whether two mappings differ.

    Key sets must match exactly. Values are compared with ``==``; nested
    mappings are compared recursively only when *deep* is set, otherwise
    two nested mappings are treated as equal when they are equal by ``==``.
    """
    if a.keys() != b.keys():
        return True
    for key, a_value in a.items():
        b_value = b[key]
        if deep and isinstance(a_value, Mapping) and isinstance(b_value, Mapping):
            if objects_differ(a_value, b_value, deep=True):
                return True
        elif a_value != b_value:
            return True
    return False


def get_map_source_name(path: str | None) -> str:
    """Return the map-source component of a ``"source/layer"`` path."""
    if path is None:
        return ""
    return path.split(_PATH_SEPARATOR, 1)[0]


def get_layer_name(path: str | None) -> str:
    """Return the layer component of a ``"source/layer"`` path.

    Layer names may themselves contain ``/``; everything after the first
    separator is returned unchanged.
    """
    if path is None:
        return ""
    parts = path.split(_PATH_SEPARATOR, 1)
    return parts[1] if len(parts) > 1 else ""


def format_url_parameters(params: Mapping[str, object]) -> str:
    """Join *params* into an ``&``-separated query string.

    Values are percent-encoded the way ``encodeURIComponent`` does it;
    keys are emitted as given. Insertion order is preserved.
    """
    return "&".join(f"{key}={quote(str(value), safe=_URI_COMPONENT_SAFE)}" for key, value in params.items())
