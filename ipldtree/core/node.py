"""Node and Link model for ipldtree.

A Node is a parsed document: a map from string keys to values, where a
value is a Node, a sequence of values, or a scalar. A map of the exact
shape ``{"/": "<multihash>"}`` is a merkle-link::

    "myfield": {"/": "QmZku7P7KeeHAnwMr6c4HveYfMzmtVinNXzibkiNbfDbPo"}

The object holding "/" must consist only of that field. To associate
properties with a link, nest the link inside a larger structure::

    {
      "foo": {"unixType": "dir", "link": {"/": <multihash>}},
      "bar": {"unixType": "file", "link": {"/": <multihash>}}
    }

Decoders usually hand back plain dicts; every function here accepts any
Mapping wherever a Node is expected.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple

from ..multihash import Multihash, from_b58_string
from ..errors import DecodeError

# Key marking a merkle-link
LINK_KEY = "/"


class ValueKind(Enum):
    """Closed set of value shapes a document may hold.

    Every Python value maps to exactly one kind through value_kind(), so
    traversal code dispatches on the kind instead of probing types.
    """
    MAP = "map"
    ARRAY = "array"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"
    BYTES = "bytes"
    OPAQUE = "opaque"       # Any other scalar a decoder produced

    @property
    def is_container(self) -> bool:
        """True for kinds that hold child values."""
        return self in (ValueKind.MAP, ValueKind.ARRAY)


def value_kind(value: Any) -> ValueKind:
    """Classify a value into its ValueKind."""
    if isinstance(value, Mapping):
        return ValueKind.MAP
    if isinstance(value, (list, tuple)):
        return ValueKind.ARRAY
    if isinstance(value, str):
        return ValueKind.STRING
    # bool is a subclass of int
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if value is None:
        return ValueKind.NULL
    if isinstance(value, (bytes, bytearray, memoryview)):
        return ValueKind.BYTES
    return ValueKind.OPAQUE


class Node(dict):
    """A document node: a dict with path, link and stream helpers."""

    def get_path(self, path, default=None):
        """Retrieve a nested value using slash path notation.

        See ipldtree.core.path.get_path.
        """
        from .path import get_path
        return get_path(self, path, default)

    def links(self, config=None) -> Dict[str, 'Link']:
        """Return every merkle-link in the document, keyed by path.

        The entire document is walked once.
        """
        from .collector import links
        return links(self, config)

    def walk(self, visit: Callable, config=None):
        """Walk every map in the document. See ipldtree.core.traverser.walk."""
        from .traverser import walk
        return walk(self, visit, config)

    def read(self, callback: Callable, config=None):
        """Stream the document as tokens. See ipldtree.core.reader.read."""
        from .reader import read
        return read(self, callback, config)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({dict.__repr__(self)})"


class Link(Node):
    """A merkle-link to another block: ``{"/": <multihash>}``."""

    def link_string(self) -> str:
        """Return the string stored under "/" (empty if absent)."""
        return link_string(self)

    def decode_hash(self) -> Multihash:
        """Decode the multihash this link points at.

        Raises:
            DecodeError: If the link holds no hash or an invalid one
        """
        return link_hash(self)

    def equal(self, other: Mapping) -> bool:
        """Deep, order-independent comparison with another link."""
        return links_equal(self, other)


def is_link(value: Any) -> bool:
    """Check whether a value is a merkle-link.

    A link is a map with exactly one key, "/", whose value is a string.
    Maps with extra keys, or whose "/" holds anything but a string, are
    not links, though they may contain links further down.
    """
    if value_kind(value) is not ValueKind.MAP:
        return False
    if len(value) != 1:
        return False
    return isinstance(value.get(LINK_KEY), str)


def link_cast(value: Any) -> Tuple[Optional[Link], bool]:
    """Copy a link-shaped value into a new Link.

    Returns:
        (link, True) if value is a link, otherwise (None, False)
    """
    if not is_link(value):
        return None, False
    return Link(value), True


def link_string(link: Mapping) -> str:
    """Return the string under "/", or "" if absent or not a string."""
    target = link.get(LINK_KEY)
    if isinstance(target, str):
        return target
    return ""


def link_hash(link: Mapping) -> Multihash:
    """Decode a link's target as a base58 multihash.

    Raises:
        DecodeError: If the link holds no hash or an invalid one
    """
    target = link_string(link)
    if not target:
        raise DecodeError("no hash in link")
    return from_b58_string(target)


def links_equal(first: Any, second: Any) -> bool:
    """Compare two values for deep equality.

    Key sets must match and values must be identical recursively, with
    kinds compared strictly (True is not 1, 1 is not 1.0). Uses an
    explicit work list, so deep structures are safe to compare.
    """
    pending = [(first, second)]
    while pending:
        a, b = pending.pop()
        kind = value_kind(a)
        if kind is not value_kind(b):
            return False
        if kind is ValueKind.MAP:
            if a.keys() != b.keys():
                return False
            pending.extend((a[k], b[k]) for k in a)
        elif kind is ValueKind.ARRAY:
            if len(a) != len(b):
                return False
            pending.extend(zip(a, b))
        elif type(a) is not type(b) or a != b:
            return False
    return True
