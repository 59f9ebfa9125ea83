"""DocumentAdapter for ipldtree.

The adapter holds the navigation logic for document values: which
values have children, and in what order those children are visited.
Traversers and the stream reader share it, so key ordering is decided
in one place.
"""

from typing import Any, Iterator, List, Tuple, Union

from .node import ValueKind, value_kind

Segment = Union[str, int]


class DocumentAdapter:
    """Navigates document values.

    Map children are (key, value) pairs; array children are
    (index, value) pairs. With sort_keys, map keys come out in sorted
    order. Python orders str by code point, which is the same as
    byte-wise order of their UTF-8 encodings, so the order is
    independent of how the map was built.
    """

    def __init__(self, sort_keys: bool = True):
        """Initialize adapter.

        Args:
            sort_keys: Emit map children in sorted key order
        """
        self.sort_keys = sort_keys

    def kind(self, value: Any) -> ValueKind:
        """Return the ValueKind of a value."""
        return value_kind(value)

    def is_leaf(self, value: Any) -> bool:
        """Check if a value cannot have children."""
        return not value_kind(value).is_container

    def get_children(self, value: Any) -> List[Tuple[Segment, Any]]:
        """Get the (segment, child) pairs of a container.

        The pairs are materialized, so the caller may keep iterating
        while the document is modified.

        Args:
            value: The parent value

        Returns:
            List of (segment, child) pairs; empty for scalars
        """
        kind = value_kind(value)
        if kind is ValueKind.MAP:
            keys = sorted(value) if self.sort_keys else list(value)
            return [(key, value[key]) for key in keys]
        if kind is ValueKind.ARRAY:
            return list(enumerate(value))
        return []

    def iter_children(self, value: Any) -> Iterator[Tuple[Segment, Any]]:
        """Iterate over the (segment, child) pairs of a container."""
        return iter(self.get_children(value))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(sort_keys={self.sort_keys!r})"
