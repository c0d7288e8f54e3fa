"""
Dotted attribute path resolution.

Paths such as ``author.profile.name`` are walked segment by segment against a
record. Each segment is first read as an attribute and then, if that yields
nothing, looked up as a key. Mappings are only read by key. A dot escaped as ``\\.`` is part of the segment
name rather than a separator.
"""

import logging
import re
from collections.abc import Mapping, Sequence
from typing import Any, List, Optional

logger = logging.getLogger(__name__)

_SEPARATOR = re.compile(r"(?<!\\)\.")
_ESCAPED_SEPARATOR = "\\."


def split_path(path: str) -> List[str]:
    """
    Split a dotted path on unescaped separators.

    Args:
        path: Column path, e.g. ``"created.at"`` or ``"settings\\.v2.flag"``

    Returns:
        List[str]: Unescaped segment names

    Example:
        >>> split_path("a\\\\.b.c")
        ['a.b', 'c']
    """
    return [segment.replace(_ESCAPED_SEPARATOR, ".") for segment in _SEPARATOR.split(str(path))]


def escape_segment(name: str) -> str:
    """Escape separators in a key so it resolves as one path segment."""
    return str(name).replace(".", _ESCAPED_SEPARATOR)


def _read_attribute(value: Any, name: str) -> Any:
    try:
        member = getattr(value, name, None)
        # Methods are called, classes are not
        if callable(member) and not isinstance(member, type):
            return member()
        return member
    except Exception as e:
        logger.debug("Could not read %r from %s: %s", name, type(value).__name__, e)
        return None


def _read_key(value: Any, key: str) -> Any:
    try:
        if isinstance(value, Sequence) and not isinstance(value, str) and key.isdigit():
            return value[int(key)]
        return value[key]
    except (KeyError, IndexError, TypeError, ValueError):
        return None


def resolve_path(record: Any, path: str) -> Optional[Any]:
    """
    Resolve a dotted path against a record.

    Resolution stops at the first missing intermediate value and returns
    None; unknown paths never raise.

    Args:
        record: Object, mapping or sequence to read from
        path: Dotted column path

    Returns:
        The resolved leaf value, or None when any segment is missing
    """
    value = record
    for segment in split_path(path):
        if value is None:
            return None
        # Mappings are read by key only, never through methods such as items
        if isinstance(value, Mapping):
            value = _read_key(value, segment)
            continue
        resolved = _read_attribute(value, segment)
        if resolved is None:
            resolved = _read_key(value, segment)
        value = resolved
    return value
