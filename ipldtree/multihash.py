"""Multihash decoding for link content identifiers.

A multihash is self-describing: ``<varint code><varint length><digest>``.
Links carry it as a base58 (bitcoin alphabet) string, e.g.
``QmZku7P7KeeHAnwMr6c4HveYfMzmtVinNXzibkiNbfDbPo`` is a sha2-256 digest.

The framing and the table of hash function codes come from the
``multiformats`` package; this module only converts its results and
errors into ipldtree's types.
"""

import re
from typing import NamedTuple, Union

import base58
from multiformats import multihash as _multihash

from .errors import DecodeError

# base58btc alphabet: no 0, O, I or l
_B58_RE = re.compile(r"[1-9A-HJ-NP-Za-km-z]+")


class Multihash(NamedTuple):
    """A decoded multihash."""
    code: int
    name: str
    length: int
    digest: bytes


def decode(data: Union[bytes, bytearray]) -> Multihash:
    """Decode binary multihash bytes.

    Args:
        data: Raw multihash bytes

    Returns:
        The decoded Multihash

    Raises:
        DecodeError: If the code is not a registered multihash or the
        framing is malformed
    """
    data = bytes(data)
    try:
        hash_fn = _multihash.from_digest(data)
        digest = bytes(_multihash.unwrap(data))
    except (ValueError, KeyError, TypeError, EOFError) as e:
        raise DecodeError(f"invalid multihash: {e}") from e
    return Multihash(code=hash_fn.code, name=hash_fn.name,
                     length=len(digest), digest=digest)


def from_b58_string(value: str) -> Multihash:
    """Decode a base58-encoded multihash string.

    Raises:
        DecodeError: If value is empty, not valid base58, or not a multihash
    """
    if not value:
        raise DecodeError("empty multihash string")
    # b58decode tolerates surrounding whitespace; an identifier may not
    if not _B58_RE.fullmatch(value):
        raise DecodeError(f"invalid base58 multihash {value!r}")
    try:
        raw = base58.b58decode(value)
    except ValueError as e:
        raise DecodeError(f"invalid base58 multihash {value!r}: {e}") from e
    return decode(raw)
