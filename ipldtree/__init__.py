"""ipldtree - content-addressed document trees.

ipldtree models a decoded JSON/CBOR-like document whose maps of the form
``{"/": "<multihash>"}`` are merkle-links to other blocks, and provides
the traversals built on that model:

    from ipldtree import Node, get_path, links, read

    doc = Node({"a": {"b": "x"}, "file": {"/": "Qm..."}})
    get_path(doc, "a/b")        # 'x'
    links(doc)                  # {'file': Link({'/': 'Qm...'})}
    read(doc, callback)         # stream tokens to an encoder

Links are recognized and indexed, never fetched.
"""

__version__ = "0.1.0"

# Model
from .core.node import (
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
from .core.adapter import DocumentAdapter
from .multihash import Multihash

# Traversals
from .core.path import MISSING, split_path, join_path, escape_segment, get_path
from .core.traverser import NodeWalker, walk
from .core.collector import LinkCollector, links
from .core.reader import (
    TokenKind,
    ReadControl,
    ReadState,
    Token,
    StreamReader,
    read,
    iter_tokens,
)

# Configuration and errors
from .config import DepthConfig, TraversalConfig, DEFAULT_UNTRUSTED_DEPTH
from .errors import (
    IpldTreeError,
    DecodeError,
    ConfigurationError,
    InvalidControlError,
    DepthLimitExceeded,
)

# High-level API
from .api import (
    resolve,
    walk_document,
    extract_links,
    link_targets,
    find_links,
    read_document,
    collect_tokens,
)

__all__ = [
    "__version__",
    # Model
    "LINK_KEY",
    "ValueKind",
    "value_kind",
    "Node",
    "Link",
    "is_link",
    "link_cast",
    "link_string",
    "link_hash",
    "links_equal",
    "DocumentAdapter",
    "Multihash",
    # Traversals
    "MISSING",
    "split_path",
    "join_path",
    "escape_segment",
    "get_path",
    "NodeWalker",
    "walk",
    "LinkCollector",
    "links",
    "TokenKind",
    "ReadControl",
    "ReadState",
    "Token",
    "StreamReader",
    "read",
    "iter_tokens",
    # Config
    "DepthConfig",
    "TraversalConfig",
    "DEFAULT_UNTRUSTED_DEPTH",
    # Errors
    "IpldTreeError",
    "DecodeError",
    "ConfigurationError",
    "InvalidControlError",
    "DepthLimitExceeded",
    # API
    "resolve",
    "walk_document",
    "extract_links",
    "link_targets",
    "find_links",
    "read_document",
    "collect_tokens",
]
