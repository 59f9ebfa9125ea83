"""Token stream reading for ipldtree.

The stream reader turns a document into an ordered sequence of tokens
for an encoder to consume::

    {"a": 1, "b": [true]}

reads as::

    ()          START_MAP
    ()          KEY          "a"
    ("a",)      VALUE        1
    ()          KEY          "b"
    ("b",)      START_ARRAY
    ("b",)      INDEX        0
    ("b", 0)    VALUE        True
    ("b",)      END_ARRAY
    ()          END_MAP

Map keys are always emitted in sorted order, so the same logical
document reads (and therefore encodes) identically every time. The
consumer steers the traversal by returning a ReadControl from its
callback. Errors travel separately as exceptions.
"""

import logging
from enum import Enum
from typing import Any, Callable, Generator, Iterator, List, NamedTuple, Optional, Tuple

from .adapter import DocumentAdapter, Segment
from .node import ValueKind
from ..config import TraversalConfig
from ..errors import ConfigurationError, DepthLimitExceeded, InvalidControlError

logger = logging.getLogger(__name__)


class TokenKind(Enum):
    """Kinds of token emitted by the stream reader."""
    START_MAP = "start_map"
    KEY = "key"
    END_MAP = "end_map"
    START_ARRAY = "start_array"
    INDEX = "index"
    END_ARRAY = "end_array"
    VALUE = "value"


class ReadControl(Enum):
    """What a read callback wants to happen next.

    SKIP on a KEY or INDEX token skips the associated value. On a
    START_MAP or START_ARRAY token it skips the children; the matching
    END token is still emitted. On any other token it acts as CONTINUE.
    """
    CONTINUE = "continue"
    SKIP = "skip"
    ABORT = "abort"


class ReadState(Enum):
    """How a read finished. Both states are successful outcomes."""
    COMPLETED = "completed"
    ABORTED = "aborted"


class Token(NamedTuple):
    """One event of the stream."""
    path: Tuple[Segment, ...]
    kind: TokenKind
    payload: Any = None


# callback(path, kind, payload) -> ReadControl or None
ReadFunc = Callable[[Tuple[Segment, ...], TokenKind, Any], Optional[ReadControl]]

_CONTAINER_TOKENS = {
    ValueKind.MAP: (TokenKind.START_MAP, TokenKind.KEY, TokenKind.END_MAP),
    ValueKind.ARRAY: (TokenKind.START_ARRAY, TokenKind.INDEX, TokenKind.END_ARRAY),
}


class _Frame:
    """An open container: start token emitted, end token pending."""

    __slots__ = ("path", "entry_kind", "end_kind", "entries")

    def __init__(self, path, entry_kind, end_kind, entries):
        self.path = path
        self.entry_kind = entry_kind
        self.end_kind = end_kind
        self.entries = entries


def _as_control(value: Any) -> ReadControl:
    if value is None:
        return ReadControl.CONTINUE
    if isinstance(value, ReadControl):
        return value
    raise InvalidControlError(value)


class StreamReader:
    """Depth-first, pre-order token reader.

    The engine is a generator that yields Tokens and receives the
    consumer's ReadControl through send(). Open containers live on an
    explicit frame stack, so nesting depth is bounded only by
    DepthConfig.max_depth, never by the interpreter's recursion limit.
    """

    def __init__(self, config: Optional[TraversalConfig] = None):
        """Initialize reader.

        Args:
            config: Traversal configuration (depth bound)

        Raises:
            ConfigurationError: If config is invalid
        """
        self.config = config or TraversalConfig()
        config_errors = self.config.validate()
        if config_errors:
            raise ConfigurationError(
                f"Invalid configuration: {'; '.join(config_errors)}"
            )
        # Key order is part of the output contract and not configurable
        self.adapter = DocumentAdapter(sort_keys=True)

    def read(self, root: Any, callback: ReadFunc) -> ReadState:
        """Read root, passing every token to callback.

        Args:
            root: Document root
            callback: Called as callback(path, kind, payload)

        Returns:
            ReadState.COMPLETED, or ReadState.ABORTED if the callback
            returned ABORT. A SKIP or ABORT on the very first token is
            still a successful read.

        Raises:
            InvalidControlError: If callback returns a non-ReadControl
            DepthLimitExceeded: If root nests deeper than max_depth
        """
        tokens = self._tokens(root)
        logger.debug("read started (max_depth=%s)", self.config.depth.max_depth)
        try:
            token = next(tokens, None)
            while token is not None:
                control = _as_control(callback(token.path, token.kind, token.payload))
                if control is ReadControl.ABORT:
                    logger.debug("read aborted at %r (%s)", token.path, token.kind.value)
                    return ReadState.ABORTED
                try:
                    token = tokens.send(control)
                except StopIteration:
                    token = None
        finally:
            tokens.close()

        logger.debug("read completed")
        return ReadState.COMPLETED

    def iter_tokens(self, root: Any) -> Iterator[Token]:
        """Yield every token of root, without consumer control."""
        return self._tokens(root)

    def _tokens(self, root: Any) -> Generator[Token, Optional[ReadControl], None]:
        stack: List[_Frame] = []
        yield from self._enter(root, (), stack)

        while stack:
            frame = stack[-1]
            entry = next(frame.entries, None)
            if entry is None:
                stack.pop()
                yield Token(frame.path, frame.end_kind)
                continue

            segment, child = entry
            control = yield Token(frame.path, frame.entry_kind, segment)
            if control is ReadControl.SKIP:
                continue
            # Tuples are immutable: each branch gets its own path
            yield from self._enter(child, frame.path + (segment,), stack)

    def _enter(self, value: Any, path: Tuple[Segment, ...], stack: List[_Frame]):
        kind = self.adapter.kind(value)
        if not kind.is_container:
            yield Token(path, TokenKind.VALUE, value)
            return

        depth = len(stack)
        if not self.config.depth.should_explore(depth):
            logger.warning("read depth limit %s hit at %r",
                           self.config.depth.max_depth, path)
            raise DepthLimitExceeded(path, self.config.depth.max_depth)

        start_kind, entry_kind, end_kind = _CONTAINER_TOKENS[kind]
        control = yield Token(path, start_kind)
        if control is ReadControl.SKIP:
            entries = iter(())
        else:
            # Children are snapshotted once the container is announced
            entries = self.adapter.iter_children(value)
        stack.append(_Frame(path, entry_kind, end_kind, entries))


def read(node: Any, callback: ReadFunc, config: Optional[TraversalConfig] = None) -> ReadState:
    """Stream node to callback. See StreamReader.read."""
    return StreamReader(config).read(node, callback)


def iter_tokens(node: Any, config: Optional[TraversalConfig] = None) -> Iterator[Token]:
    """Iterate over the tokens of node. See StreamReader.iter_tokens."""
    return StreamReader(config).iter_tokens(node)
