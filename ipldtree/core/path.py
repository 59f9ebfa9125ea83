"""Path resolution for ipldtree.

Paths use unix notation, splitting on "/". A backslash makes the next
character literal, so keys containing "/" (or starting with a character
that callers treat as special, such as "@") stay addressable::

    get_path(doc, "bar2/\\\\@foo")   # key "@foo" under "bar2"
    get_path(doc, "a\\\\/b/c")       # key "a/b", then "c"

Empty segments are dropped: "a//b" resolves like "a/b". Links met along
the way are not special-cased; "/" is an ordinary key, so a marker-keyed
map nested inside another is reachable through such a collapsed path.
"""

import logging
import re
from typing import Any, List, Sequence, Union

from .node import ValueKind, value_kind

logger = logging.getLogger(__name__)

PATH_SEPARATOR = "/"
PATH_ESCAPE = "\\"

Segment = Union[str, int]
Path = Union[str, Sequence[Segment]]

_INDEX_RE = re.compile(r"[0-9]+")


class _Missing:
    """Sentinel for "no value at this path"."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()


def split_path(path: Path) -> List[Segment]:
    """Split a path into segments.

    Args:
        path: Escaped path string, or an already-split segment sequence

    Returns:
        List of segments with escapes removed and empty segments dropped
    """
    if not isinstance(path, str):
        return list(path)

    segments: List[Segment] = []
    current: List[str] = []
    chars = iter(path)
    for char in chars:
        if char == PATH_ESCAPE:
            # A trailing lone escape is kept as-is
            current.append(next(chars, PATH_ESCAPE))
        elif char == PATH_SEPARATOR:
            if current:
                segments.append("".join(current))
                current = []
        else:
            current.append(char)
    if current:
        segments.append("".join(current))
    return segments


def escape_segment(segment: Segment) -> str:
    """Escape a key so it survives split_path as a single segment."""
    text = str(segment)
    text = text.replace(PATH_ESCAPE, PATH_ESCAPE + PATH_ESCAPE)
    return text.replace(PATH_SEPARATOR, PATH_ESCAPE + PATH_SEPARATOR)


def join_path(segments: Sequence[Segment]) -> str:
    """Join segments into an escaped path string."""
    return PATH_SEPARATOR.join(escape_segment(s) for s in segments)


def _parse_index(segment: Segment) -> Union[int, None]:
    if isinstance(segment, bool):
        return None
    if isinstance(segment, int):
        return segment if segment >= 0 else None
    if isinstance(segment, str) and _INDEX_RE.fullmatch(segment):
        return int(segment)
    return None


def get_path(node: Any, path: Path, default: Any = None) -> Any:
    """Resolve a path against a node.

    Maps are indexed by key, arrays by non-negative integer. A missing
    key, a bad or out-of-range index, or segments left over at a scalar
    all resolve to default; nothing here raises for a miss.

    Args:
        node: Root value to resolve against
        path: Escaped path string or segment sequence
        default: Returned when nothing is found (MISSING tells a stored
            None apart from a miss)

    Returns:
        The value at path, or default
    """
    current = node
    for segment in split_path(path):
        kind = value_kind(current)
        if kind is ValueKind.MAP:
            key = segment if isinstance(segment, str) else str(segment)
            if key not in current:
                return default
            current = current[key]
        elif kind is ValueKind.ARRAY:
            index = _parse_index(segment)
            if index is None or index >= len(current):
                return default
            current = current[index]
        else:
            logger.debug("path %r continues past a %s value", path, kind.value)
            return default
    return current
