"""Core components of ipldtree.

This package contains the document model and the three traversals built
on it: path resolution, link collection and token streaming.
"""

from .node import (
    LINK_KEY,
    ValueKind,
    value_kind,
    Node,
    Link,
    is_link,
    link_cast,
    link_string,
    link_hash,
    links_equal,
)
from .adapter import DocumentAdapter
from .path import (
    PATH_SEPARATOR,
    PATH_ESCAPE,
    MISSING,
    split_path,
    escape_segment,
    join_path,
    get_path,
)
from .traverser import NodeWalker, walk
from .collector import LinkCollector, links
from .reader import (
    TokenKind,
    ReadControl,
    ReadState,
    Token,
    StreamReader,
    read,
    iter_tokens,
)

__all__ = [
    # Model
    'LINK_KEY',
    'ValueKind',
    'value_kind',
    'Node',
    'Link',
    'is_link',
    'link_cast',
    'link_string',
    'link_hash',
    'links_equal',
    'DocumentAdapter',
    # Paths
    'PATH_SEPARATOR',
    'PATH_ESCAPE',
    'MISSING',
    'split_path',
    'escape_segment',
    'join_path',
    'get_path',
    # Traversal
    'NodeWalker',
    'walk',
    'LinkCollector',
    'links',
    'TokenKind',
    'ReadControl',
    'ReadState',
    'Token',
    'StreamReader',
    'read',
    'iter_tokens',
]
