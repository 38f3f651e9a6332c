"""Capability interface for erased values and its automatic adapter.

ErasedData is the only view Datum has of a payload. Erased[T] implements it for
any type with debug and display text, deep copy, equality, a native ordering
and hashing, so authors of such types write no glue:

    Erased(Person("John", 34))
"""

from __future__ import annotations

import copy
from typing import Any, Protocol, Self, runtime_checkable

from edndata.core.errors import ErasedTypeMismatch
from edndata.core.hashing import Hasher, HasherAdapter
from edndata.core.models import Ordering, TypeTag
from edndata.core.registry import get_registry

_MISMATCH = object()


@runtime_checkable
class ErasedData(Protocol):
    """Operations an erased payload exposes without revealing its concrete type.

    Methods taking `other` accept another ErasedData of unknown type. Identity
    checks before equality belong to the caller; total ordering asserts
    identity itself.
    """

    @property
    def type_tag(self) -> TypeTag: ...

    @property
    def payload_type(self) -> type: ...

    @property
    def payload(self) -> Any: ...

    def clone_erased(self) -> ErasedData: ...

    def equals_erased(self, other: ErasedData) -> bool: ...

    def partial_order_erased(self, other: ErasedData) -> Ordering | None: ...

    def total_order_erased(self, other: ErasedData) -> Ordering: ...

    def hash_erased(self, sink: Hasher) -> None: ...

    def debug_format(self) -> str: ...

    def display_format(self) -> str: ...


class Erased[T]:
    """Adapter that satisfies ErasedData by forwarding to T's own capabilities."""

    __slots__ = ("_value", "_tag")

    def __init__(self, value: T) -> None:
        self._tag = get_registry().register(type(value))
        self._value = value

    @classmethod
    def _from_parts(cls, value: T, tag: TypeTag) -> Self:
        erased = cls.__new__(cls)
        erased._value = value
        erased._tag = tag
        return erased

    @property
    def type_tag(self) -> TypeTag:
        return self._tag

    @property
    def payload_type(self) -> type[T]:
        return type(self._value)

    @property
    def payload(self) -> T:
        return self._value

    def _same_payload(self, other: ErasedData) -> Any:
        if other.type_tag != self._tag:
            return _MISMATCH
        return other.payload

    def clone_erased(self) -> Erased[T]:
        return self._from_parts(copy.deepcopy(self._value), self._tag)

    def equals_erased(self, other: ErasedData) -> bool:
        rhs = self._same_payload(other)
        return rhs is not _MISMATCH and bool(self._value == rhs)

    def partial_order_erased(self, other: ErasedData) -> Ordering | None:
        rhs = self._same_payload(other)
        if rhs is _MISMATCH:
            return None
        return Ordering.partial(self._value, rhs)

    def total_order_erased(self, other: ErasedData) -> Ordering:
        rhs = self._same_payload(other)
        if rhs is _MISMATCH:
            raise ErasedTypeMismatch(
                f"Expected same lhs & rhs erased types, got {self._tag} and {other.type_tag}"
            )
        return Ordering.of(self._value, rhs)

    def hash_erased(self, sink: Hasher) -> None:
        HasherAdapter(sink).write_value(self._value)

    def debug_format(self) -> str:
        return repr(self._value)

    def display_format(self) -> str:
        return str(self._value)

    def __repr__(self) -> str:
        return f"Erased({self._value!r})"
