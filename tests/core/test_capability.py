"""Tests for the capability interface, its automatic adapter and hash routing."""

import hashlib
from typing import Any

import pytest

from edndata import Datum, Erased, ErasedData, ErasedTypeMismatch, Hasher, Ordering, TypeTag
from edndata.core import HasherAdapter, default_hasher, get_registry


class RecordingSink:
    """Accumulator that remembers every write."""

    def __init__(self) -> None:
        self.writes: list[bytes] = []

    def update(self, data: bytes, /) -> None:
        self.writes.append(data)

    def digest(self) -> bytes:
        return b"".join(self.writes).ljust(8, b"\0")


class Version:
    """Hand-written payload with the six capabilities and no dataclass help."""

    def __init__(self, major: int, minor: int) -> None:
        self.major = major
        self.minor = minor

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return (self.major, self.minor) == (other.major, other.minor)

    def __lt__(self, other: "Version") -> bool:
        return (self.major, self.minor) < (other.major, other.minor)

    def __hash__(self) -> int:
        return hash((self.major, self.minor))

    def __repr__(self) -> str:
        return f"Version({self.major}, {self.minor})"

    def __str__(self) -> str:
        return f"v{self.major}.{self.minor}"


class CaseInsensitiveText:
    """Direct ErasedData implementation: equality and order ignore case."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._tag = get_registry().register(str)

    @property
    def type_tag(self) -> TypeTag:
        return self._tag

    @property
    def payload_type(self) -> type:
        return str

    @property
    def payload(self) -> Any:
        return self._text

    def clone_erased(self) -> ErasedData:
        return CaseInsensitiveText(self._text)

    def equals_erased(self, other: ErasedData) -> bool:
        return self._text.casefold() == str(other.payload).casefold()

    def partial_order_erased(self, other: ErasedData) -> Ordering | None:
        return self.total_order_erased(other)

    def total_order_erased(self, other: ErasedData) -> Ordering:
        return Ordering.of(self._text.casefold(), str(other.payload).casefold())

    def hash_erased(self, sink: Hasher) -> None:
        HasherAdapter(sink).write_value(self._text.casefold())

    def debug_format(self) -> str:
        return repr(self._text)

    def display_format(self) -> str:
        return self._text


def test_any_qualifying_type_is_adapted_without_glue() -> None:
    """Erased forwards every operation to the payload's own methods."""
    old, new = Erased(Version(1, 2)), Erased(Version(1, 10))

    assert isinstance(old, ErasedData)
    assert old.equals_erased(Erased(Version(1, 2)))
    assert not old.equals_erased(new)
    assert old.total_order_erased(new) is Ordering.LESS
    assert new.partial_order_erased(old) is Ordering.GREATER
    assert old.debug_format() == "Version(1, 2)"
    assert old.display_format() == "v1.2"
    assert old.payload_type is Version


def test_clone_erased_is_independent() -> None:
    original = Erased(Version(3, 0))

    cloned = original.clone_erased()

    assert cloned.equals_erased(original)
    assert cloned.payload is not original.payload
    assert cloned.type_tag == original.type_tag


def test_equals_erased_across_types_is_false() -> None:
    assert not Erased(Version(1, 0)).equals_erased(Erased((1, 0)))


def test_total_order_erased_asserts_identity() -> None:
    with pytest.raises(ErasedTypeMismatch):
        Erased(Version(1, 0)).total_order_erased(Erased("1.0"))


def test_hash_routes_through_external_accumulator() -> None:
    """The payload's native hash is written into the caller's accumulator."""
    sink = RecordingSink()

    Datum(Version(2, 1)).hash_into(sink)

    assert sink.writes == [hash((2, 1)).to_bytes(8, "little", signed=True)]


def test_hashlib_objects_are_accumulators() -> None:
    sink = hashlib.sha256()
    assert isinstance(sink, Hasher)
    assert isinstance(default_hasher(), Hasher)

    Datum("abc").hash_into(sink)

    assert sink.digest() != hashlib.sha256().digest()


def test_hasher_adapter_finish_folds_digest() -> None:
    adapter = HasherAdapter(RecordingSink())
    adapter.write(b"\x01")

    assert adapter.finish() == 1


def test_hand_written_erased_data_is_adopted() -> None:
    """Datum accepts an ErasedData implementation as-is."""
    upper, lower = Datum(CaseInsensitiveText("EDN")), Datum(CaseInsensitiveText("edn"))

    assert upper == lower
    assert hash(upper) == hash(lower)
    assert upper.cmp(Datum(CaseInsensitiveText("zzz"))) is Ordering.LESS
    assert str(upper) == "EDN"
    assert upper.downcast(str).unwrap() == "EDN"
