"""Link collection for ipldtree.

LinkCollector walks a document and flattens every merkle-link into a
mapping keyed by path. For example::

    {
        "foo": {"quux": {"/": "Qmaaaa..."}},
        "bar": {"baz": {"/": "Qmbbbb..."}},
    }

produces::

    {
        "foo/quux": {"/": "Qmaaaa..."},
        "bar/baz": {"/": "Qmbbbb..."},
    }
"""

import logging
from typing import Any, Dict, Optional

from .node import Link, link_cast
from .traverser import NodeWalker
from ..config import TraversalConfig

logger = logging.getLogger(__name__)


class LinkCollector:
    """Collects the links of a document into a path -> Link mapping.

    Paths are raw keys joined with "/"; no unescaping is applied, so a
    key containing a backslash appears in the path exactly as stored.
    A link body holds a single string, so the walk never has anything
    to descend into below a link.
    """

    def __init__(self, walker: Optional[NodeWalker] = None):
        """Initialize collector.

        Args:
            walker: NodeWalker used to visit the document
        """
        self.walker = walker or NodeWalker()
        self.links: Dict[str, Link] = {}

    def visit(self, root: Any, current: Any, path: str,
              error: Optional[Exception]) -> Optional[Exception]:
        """Walk visitor: record current if it is a link, bail on errors."""
        if error is not None:
            return error

        link, ok = link_cast(current)
        if ok:
            self.links[path] = link
        return None

    def collect(self, node: Any) -> Dict[str, Link]:
        """Walk node and return its links.

        Raises:
            DepthLimitExceeded: If the document nests deeper than allowed
        """
        self.links = {}
        error = self.walker.walk(node, self.visit)
        if error is not None:
            raise error
        logger.debug("collected %d links", len(self.links))
        return self.links


def links(node: Any, config: Optional[TraversalConfig] = None) -> Dict[str, Link]:
    """Return all links in node, flattened by path."""
    return LinkCollector(NodeWalker(config=config)).collect(node)
