"""Exception hierarchy for ipldtree.

Path misses are not errors: resolvers return a default instead.
Everything raised by the library derives from IpldTreeError.
"""

from typing import Optional, Sequence, Union

Segment = Union[str, int]


class IpldTreeError(Exception):
    """Base class for all ipldtree errors."""
    pass


class DecodeError(IpldTreeError, ValueError):
    """Raised when a link's content identifier cannot be decoded."""
    pass


class ConfigurationError(IpldTreeError, ValueError):
    """Raised when a TraversalConfig fails validation."""
    pass


class InvalidControlError(IpldTreeError, TypeError):
    """Raised when a read callback returns something that is not a ReadControl."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(
            f"read callback must return a ReadControl or None, got {value!r}"
        )


class DepthLimitExceeded(IpldTreeError):
    """Raised (or handed to a walk visitor) when nesting exceeds max_depth."""

    def __init__(self, path: Union[str, Sequence[Segment]], max_depth: Optional[int]):
        self.path = path
        self.max_depth = max_depth
        super().__init__(f"nesting deeper than {max_depth} at {path!r}")
