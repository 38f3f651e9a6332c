"""Datum: owning handle to a value of erased concrete type.

Usage:
    datum = Datum(Person("John", 34))
    datum == datum.clone()               # True, the clone is a deep copy
    datum == Datum(42)                   # False, different concrete types
    person = datum.downcast(Person).unwrap()

Equality across concrete types is simply False. Ordering across concrete types
raises ErasedTypeMismatch: callers only order datums of one type.
"""

from __future__ import annotations

from typing import Any

from edndata.core.capability import Erased, ErasedData
from edndata.core.hashing import Hasher, HasherAdapter, default_hasher
from edndata.core.models import Downcast, Err, Ok, Ordering, TypeTag
from edndata.core.registry import get_registry


class Datum:
    """Pointer to a dynamically-typed value, stored in the `Data` EDN kind."""

    __slots__ = ("_data",)

    def __init__(self, value: Any) -> None:
        self._data: ErasedData = value if isinstance(value, ErasedData) else Erased(value)

    @classmethod
    def new(cls, value: Any) -> Datum:
        """Wrap any value with the erasure capabilities.

        Raises:
            CapabilityError: If the value's type lacks a capability.
        """
        return cls(value)

    @classmethod
    def _adopt(cls, data: ErasedData) -> Datum:
        datum = cls.__new__(cls)
        datum._data = data
        return datum

    @property
    def type_tag(self) -> TypeTag:
        """Identity tag of the payload's concrete type."""
        return self._data.type_tag

    def is_type(self, cls: type) -> bool:
        """Check whether the payload's concrete type is exactly `cls`."""
        return get_registry().get_tag(cls) == self._data.type_tag

    def clone(self) -> Datum:
        """Return an independent datum holding a deep copy of the payload."""
        return self._adopt(self._data.clone_erased())

    def __copy__(self) -> Datum:
        return self.clone()

    def __deepcopy__(self, memo: dict[int, Any]) -> Datum:
        return self.clone()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Datum):
            return NotImplemented
        lhs, rhs = self._data, other._data
        return lhs.type_tag == rhs.type_tag and lhs.equals_erased(rhs)

    def cmp(self, other: Datum) -> Ordering:
        """Total order against a datum of the same concrete type.

        Raises:
            ErasedTypeMismatch: If the concrete types differ.
        """
        return self._data.total_order_erased(other._data)

    def partial_cmp(self, other: Datum) -> Ordering | None:
        """Partial order; None when the values are incomparable or of different types."""
        return self._data.partial_order_erased(other._data)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Datum):
            return NotImplemented
        return self.cmp(other) is Ordering.LESS

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Datum):
            return NotImplemented
        return self.cmp(other) is not Ordering.GREATER

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Datum):
            return NotImplemented
        return self.cmp(other) is Ordering.GREATER

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Datum):
            return NotImplemented
        return self.cmp(other) is not Ordering.LESS

    def hash_into(self, sink: Hasher) -> None:
        """Feed the payload's hash contribution into an external accumulator."""
        self._data.hash_erased(sink)

    def __hash__(self) -> int:
        sink = default_hasher()
        self.hash_into(sink)
        return HasherAdapter(sink).finish()

    def peek[T](self, cls: type[T]) -> T | None:
        """Borrow the payload as `cls`; a shorthand for downcast that yields None on mismatch.

        Returns:
            The payload if its concrete type is exactly `cls`, None otherwise.
        """
        if not self.is_type(cls):
            return None
        return self._data.payload  # type: ignore[no-any-return]

    def downcast[T](self, cls: type[T]) -> Downcast[T]:
        """Recover the payload as its expected concrete type `cls`.

        The datum stays usable either way, so a Data value inside a Set or Map
        keeps hashing and comparing after its payload was recovered. On mismatch
        the same datum comes back inside Err.

        Args:
            cls: Expected concrete type, matched exactly (subclasses do not match).

        Returns:
            Ok(value) on match, Err(datum) otherwise.
        """
        if get_registry().get_tag(cls) != self._data.type_tag:
            return Err(self, cls)
        return Ok(self._data.payload)

    def __repr__(self) -> str:
        return f"Datum({self._data.debug_format()})"

    def __str__(self) -> str:
        return self._data.display_format()
