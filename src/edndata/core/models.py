"""Erasure models: orderings, type tags and downcast results.

Usage:
    match datum.downcast(Person):
        case Ok(value=person):
            print(person.name)
        case Err(datum=original):
            fallback(original)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Literal, NoReturn

from edndata.core.errors import DowncastError, ErasedTypeMismatch

if TYPE_CHECKING:
    from edndata.core.datum import Datum


class Ordering(Enum):
    """Result of comparing two values of the same concrete type."""

    LESS = -1
    EQUAL = 0
    GREATER = 1

    def reverse(self) -> Ordering:
        """Swap LESS and GREATER, keep EQUAL."""
        return Ordering(-self.value)

    @classmethod
    def of(cls, lhs: object, rhs: object) -> Ordering:
        """Total order of two values using their native `<` and `==`.

        Args:
            lhs: Left operand.
            rhs: Right operand, same concrete type as lhs.

        Returns:
            LESS, EQUAL or GREATER.

        Raises:
            ErasedTypeMismatch: If the values are incomparable (e.g. disjoint frozensets).
        """
        ordering = cls.partial(lhs, rhs)
        if ordering is None:
            raise ErasedTypeMismatch(f"Expected totally ordered values, got {lhs!r} and {rhs!r}")
        return ordering

    @classmethod
    def partial(cls, lhs: object, rhs: object) -> Ordering | None:
        """Partial order of two values; None when neither is below nor equal to the other."""
        if lhs < rhs:  # type: ignore[operator]
            return cls.LESS
        if rhs < lhs:  # type: ignore[operator]
            return cls.GREATER
        if lhs == rhs:
            return cls.EQUAL
        return None


@dataclass(slots=True, frozen=True)
class TypeTag:
    """Runtime identity of an erased payload's concrete type."""

    type_id: int
    type_name: str

    def __str__(self) -> str:
        return self.type_name


@dataclass(slots=True, frozen=True)
class Ok[T]:
    """Successful downcast carrying the recovered concrete value."""

    value: T

    def is_ok(self) -> Literal[True]:
        return True

    def unwrap(self) -> T:
        """Return the recovered value."""
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value


@dataclass(slots=True, frozen=True)
class Err:
    """Failed downcast carrying the original, still-erased datum."""

    datum: Datum
    expected: type

    def is_ok(self) -> Literal[False]:
        return False

    def unwrap(self) -> NoReturn:
        """Raise DowncastError; the datum travels with the exception."""
        raise DowncastError(self.datum, self.expected)

    def unwrap_or[T](self, default: T) -> T:
        return default


type Downcast[T] = Ok[T] | Err
"""Outcome of `Datum.downcast(cls)`; branch on it with `match` or `is_ok()`."""
