"""High-level API for ipldtree.

This module provides simple, functional interfaces for the common
operations on a decoded document. They wrap the object-oriented core
(NodeWalker, LinkCollector, StreamReader) and accept the usual config
options as keyword arguments.
"""

from typing import Any, Callable, Dict, Iterator, List, Optional, Set

from .config import DepthConfig, TraversalConfig
from .core.collector import LinkCollector
from .core.node import Link, link_string
from .core.path import Path, get_path
from .core.reader import ReadFunc, ReadState, StreamReader, Token
from .core.traverser import NodeWalker, WalkFunc


def resolve(node: Any, path: Path, default: Any = None) -> Any:
    """Resolve a slash path against node.

    Example:
        >>> resolve({"a": {"b": "x"}}, "a/b")
        'x'
        >>> resolve({"a": {"b": "x"}}, "a/c") is None
        True
    """
    return get_path(node, path, default)


def walk_document(node: Any, visit: WalkFunc, config: Optional[TraversalConfig] = None,
                  **kwargs) -> Any:
    """Walk every map in node, parent first.

    Args:
        node: Document root
        visit: Called as visit(root, current, path, error)
        config: Traversal configuration
        **kwargs: Config options (max_depth, sort_keys)

    Returns:
        The first non-None visitor result, or None
    """
    config = _build_config(config, **kwargs)
    return NodeWalker(config=config).walk(node, visit)


def extract_links(node: Any, config: Optional[TraversalConfig] = None,
                  **kwargs) -> Dict[str, Link]:
    """Return every link in node, keyed by raw slash path.

    Example:
        >>> extract_links({"a": {"/": "Qm1"}})
        {'a': Link({'/': 'Qm1'})}
    """
    config = _build_config(config, **kwargs)
    return LinkCollector(NodeWalker(config=config)).collect(node)


def link_targets(node: Any, config: Optional[TraversalConfig] = None,
                 **kwargs) -> Set[str]:
    """Return the distinct content identifiers node links to.

    Useful for reference counting, where the same block linked from
    several paths counts once.
    """
    return {link_string(link) for link in extract_links(node, config, **kwargs).values()}


def find_links(node: Any, predicate: Callable[[str, Link], bool],
               config: Optional[TraversalConfig] = None, **kwargs) -> Iterator[str]:
    """Iterate over the paths of links for which predicate(path, link) is true.

    Paths come out in sorted order. The document is walked before this
    returns, so configuration and depth errors are raised by the call
    itself rather than on first iteration.
    """
    found = extract_links(node, config, **kwargs)
    return iter([path for path in sorted(found) if predicate(path, found[path])])


def read_document(node: Any, callback: ReadFunc, config: Optional[TraversalConfig] = None,
                  **kwargs) -> ReadState:
    """Stream node's tokens to callback.

    Args:
        node: Document root
        callback: Called as callback(path, kind, payload); returns a
            ReadControl or None
        config: Traversal configuration
        **kwargs: Config options (max_depth)

    Returns:
        ReadState.COMPLETED or ReadState.ABORTED
    """
    config = _build_config(config, **kwargs)
    return StreamReader(config).read(node, callback)


def collect_tokens(node: Any, config: Optional[TraversalConfig] = None,
                   **kwargs) -> List[Token]:
    """Return the full token sequence of node."""
    config = _build_config(config, **kwargs)
    return list(StreamReader(config).iter_tokens(node))


# Helper functions

def _build_config(config: Optional[TraversalConfig] = None, **kwargs) -> TraversalConfig:
    """Build a TraversalConfig from keyword arguments.

    Args:
        config: Base config (copied, never modified)
        **kwargs: max_depth, sort_keys

    Returns:
        TraversalConfig instance

    Raises:
        TypeError: On unknown options
    """
    if config is None:
        config = TraversalConfig()
    if not kwargs:
        return config

    max_depth = kwargs.pop('max_depth', config.depth.max_depth)
    sort_keys = kwargs.pop('sort_keys', config.sort_keys)
    if kwargs:
        raise TypeError(f"Unknown options: {', '.join(sorted(kwargs))}")

    return TraversalConfig(
        depth=DepthConfig(max_depth=max_depth),
        sort_keys=sort_keys,
    )
