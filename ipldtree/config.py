"""Configuration system for ipldtree.

Documents may come from untrusted input, so every traversal can be
given a depth bound. The defaults traverse without a bound; the
traversal engines use explicit stacks and never recurse.
"""

from dataclasses import dataclass, field
from typing import List, Optional

# Bound used by TraversalConfig.untrusted()
DEFAULT_UNTRUSTED_DEPTH = 256


@dataclass
class DepthConfig:
    """Configuration for depth limits.

    Depth counts containers: the root value is at depth 0, its direct
    children at depth 1.
    """

    max_depth: Optional[int] = None  # None = unlimited

    def should_explore(self, depth: int) -> bool:
        """Check if a container at this depth may be entered.

        Args:
            depth: Depth of the container

        Returns:
            True if the container is within the configured bound
        """
        if self.max_depth is None:
            return True
        return depth <= self.max_depth


@dataclass
class TraversalConfig:
    """Complete configuration for walking and reading documents."""

    depth: DepthConfig = field(default_factory=DepthConfig)

    # Map keys in sorted order. The stream reader always sorts; this only
    # affects walk order.
    sort_keys: bool = True

    @classmethod
    def untrusted(cls, max_depth: int = DEFAULT_UNTRUSTED_DEPTH) -> 'TraversalConfig':
        """Create config for documents decoded from untrusted input.

        Args:
            max_depth: Deepest container nesting to accept

        Returns:
            TraversalConfig with a depth bound
        """
        return cls(depth=DepthConfig(max_depth=max_depth))

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        max_depth = self.depth.max_depth
        if max_depth is not None:
            if isinstance(max_depth, bool) or not isinstance(max_depth, int):
                errors.append("max_depth must be an integer or None")
            elif max_depth < 0:
                errors.append("max_depth cannot be negative")

        if not isinstance(self.sort_keys, bool):
            errors.append("sort_keys must be a boolean")

        return errors
