"""Whole-document walking for ipldtree.

The walker visits every map (Node) reachable from a root, parent before
children, through both maps and arrays. It drives an explicit stack
rather than recursing, so document nesting cannot exhaust the Python
call stack.
"""

import logging
from typing import Any, Callable, List, Optional, Tuple

from .adapter import DocumentAdapter, Segment
from .node import ValueKind
from ..config import TraversalConfig
from ..errors import ConfigurationError, DepthLimitExceeded

logger = logging.getLogger(__name__)

# visit(root, current, path, error) -> None to continue, anything else to stop
WalkFunc = Callable[[Any, Any, str, Optional[Exception]], Any]


def _child_path(path: str, segment: Segment) -> str:
    if not path:
        return str(segment)
    return f"{path}/{segment}"


class NodeWalker:
    """Depth-first, pre-order walker over the maps of a document.

    Paths handed to the visitor are the raw keys from the root joined
    with "/" (array indices as decimal strings). They are not escaped:
    a key "\\@foo" shows up verbatim.
    """

    def __init__(self,
                 adapter: Optional[DocumentAdapter] = None,
                 config: Optional[TraversalConfig] = None):
        """Initialize walker.

        Args:
            adapter: DocumentAdapter for navigating values
            config: Traversal configuration (depth bound, key order)

        Raises:
            ConfigurationError: If config is invalid
        """
        self.config = config or TraversalConfig()
        config_errors = self.config.validate()
        if config_errors:
            raise ConfigurationError(
                f"Invalid configuration: {'; '.join(config_errors)}"
            )
        self.adapter = adapter or DocumentAdapter(sort_keys=self.config.sort_keys)

    def walk(self, root: Any, visit: WalkFunc) -> Any:
        """Walk root, calling visit for every map.

        visit(root, current, path, error) is called with error None for
        normal visits. A container nested deeper than the configured
        max_depth is handed over once with a DepthLimitExceeded error and
        is not descended into.

        If visit returns anything other than None the walk stops at once
        and that value is returned. Exceptions raised by visit propagate.

        Args:
            root: Document root
            visit: Visitor function

        Returns:
            The first non-None visitor result, or None if the walk completed
        """
        depth_config = self.config.depth
        stack: List[Tuple[Any, str, int]] = [(root, "", 0)]
        visited = 0

        logger.debug("walk started (max_depth=%s)", depth_config.max_depth)

        while stack:
            value, path, depth = stack.pop()
            kind = self.adapter.kind(value)

            if not depth_config.should_explore(depth):
                logger.warning("walk depth limit %s hit at %r",
                               depth_config.max_depth, path)
                error = DepthLimitExceeded(path, depth_config.max_depth)
                result = visit(root, value, path, error)
                if result is not None:
                    return result
                continue

            if kind is ValueKind.MAP:
                visited += 1
                result = visit(root, value, path, None)
                if result is not None:
                    logger.debug("walk stopped by visitor at %r", path)
                    return result

            # Push in reverse so the first child is popped first
            children = self.adapter.get_children(value)
            for segment, child in reversed(children):
                if self.adapter.is_leaf(child):
                    continue
                stack.append((child, _child_path(path, segment), depth + 1))

        logger.debug("walk finished, %d maps visited", visited)
        return None


def walk(node: Any, visit: WalkFunc, config: Optional[TraversalConfig] = None) -> Any:
    """Walk every map in node. See NodeWalker.walk."""
    return NodeWalker(config=config).walk(node, visit)
