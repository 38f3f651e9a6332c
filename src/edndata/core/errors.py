"""Error taxonomy for erased values.

Recoverable failures derive from EdnDataError. Cross-type total ordering is an
internal invariant violation and derives from AssertionError instead, so that
handlers catching EdnDataError never swallow it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from edndata.core.datum import Datum


class EdnDataError(Exception):
    """Base class for recoverable edndata errors."""


class CapabilityError(EdnDataError, TypeError):
    """Raised when a type lacks one of the capabilities required for erasure."""

    def __init__(self, cls: type, missing: list[str]) -> None:
        self.cls = cls
        self.missing = missing
        super().__init__(
            f"{cls.__module__}.{cls.__qualname__} cannot be erased: "
            f"missing {', '.join(missing)}"
        )


class DowncastError(EdnDataError, TypeError):
    """Raised by Err.unwrap() when a downcast did not match.

    The still-erased datum is kept on the exception so nothing is lost.
    """

    def __init__(self, datum: Datum, expected: type) -> None:
        self.datum = datum
        self.expected = expected
        super().__init__(
            f"Cannot downcast {datum.type_tag.type_name} to "
            f"{expected.__module__}.{expected.__qualname__}"
        )


class ErasedTypeMismatch(AssertionError):
    """Total ordering was requested where none exists.

    Raised for payloads of different concrete types, and for same-type values
    with no order between them. Callers must only order datums known to share a
    type. Reaching this is a bug in the caller, never a data error.
    """
