"""Test fixtures for ipldtree consumers.

These fixtures give encoders and other stream consumers a stable way to
observe and steer a read in their own test suites.
"""

from typing import Any, Dict, List, Optional, Tuple

from ..core.reader import ReadControl, Token, TokenKind


class TokenRecorder:
    """Read callback that records tokens and replays scripted controls.

    Example:
        recorder = TokenRecorder()
        recorder.on(TokenKind.START_ARRAY, ReadControl.SKIP)
        read(doc, recorder)

        assert recorder.kinds()[-1] is TokenKind.END_MAP
    """

    def __init__(self):
        self.tokens: List[Token] = []
        self._by_kind: Dict[TokenKind, ReadControl] = {}
        # Payloads may be unhashable scalars, so these are matched linearly
        self._by_token: List[Tuple[Token, ReadControl]] = []
        self._at_call: Dict[int, ReadControl] = {}

    def on(self, kind: TokenKind, control: ReadControl,
           path: Optional[Tuple[Any, ...]] = None, payload: Any = None) -> 'TokenRecorder':
        """Return control for matching tokens.

        Without path, every token of the given kind matches. With path,
        only the token with that exact path and payload matches.

        Returns:
            self, so calls can be chained
        """
        if path is None:
            self._by_kind[kind] = control
        else:
            self._by_token.append((Token(tuple(path), kind, payload), control))
        return self

    def at_call(self, index: int, control: ReadControl) -> 'TokenRecorder':
        """Return control on the index-th callback invocation (0-based)."""
        self._at_call[index] = control
        return self

    def __call__(self, path, kind: TokenKind, payload: Any) -> ReadControl:
        index = len(self.tokens)
        self.tokens.append(Token(tuple(path), kind, payload))

        if index in self._at_call:
            return self._at_call[index]
        token = self.tokens[-1]
        for expected, control in self._by_token:
            if expected == token:
                return control
        return self._by_kind.get(kind, ReadControl.CONTINUE)

    def kinds(self) -> List[TokenKind]:
        """Token kinds in emission order."""
        return [token.kind for token in self.tokens]

    def payloads(self, kind: TokenKind) -> List[Any]:
        """Payloads of all recorded tokens of one kind."""
        return [token.payload for token in self.tokens if token.kind is kind]

    def reset(self) -> None:
        """Forget recorded tokens; scripted controls are kept."""
        self.tokens = []
