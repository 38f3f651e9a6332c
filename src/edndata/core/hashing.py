"""Hash accumulators for erased values.

Python types hash themselves to a single integer. Erased payloads instead feed
that integer into an accumulator supplied by the caller, so hashing goes
through whatever accumulator the surrounding value model uses. Any object with
hashlib's `update(bytes)` / `digest()` shape works as the accumulator.
"""

from __future__ import annotations

import hashlib
from typing import Protocol, runtime_checkable

_HASH_WIDTH = 8


@runtime_checkable
class Hasher(Protocol):
    """Accumulator that erased values write their hash contribution into."""

    def update(self, data: bytes, /) -> None: ...

    def digest(self) -> bytes: ...


class HasherAdapter:
    """Writes native hash contributions into an external accumulator."""

    __slots__ = ("_state",)

    def __init__(self, state: Hasher) -> None:
        self._state = state

    def write(self, data: bytes) -> None:
        self._state.update(data)

    def write_int(self, value: int) -> None:
        """Write a native `hash()` result as fixed-width little-endian bytes."""
        self._state.update(value.to_bytes(_HASH_WIDTH, "little", signed=True))

    def write_value(self, value: object) -> None:
        self.write_int(hash(value))

    def finish(self) -> int:
        """Fold the accumulator's digest into a signed integer."""
        return int.from_bytes(self._state.digest()[:_HASH_WIDTH], "little", signed=True)


def default_hasher() -> Hasher:
    """Accumulator used by `hash(datum)`."""
    return hashlib.blake2b(digest_size=_HASH_WIDTH)
