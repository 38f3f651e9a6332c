"""Type tag registry and the optional @datatype decorator.

Erasing a value never requires registration: the registry issues a tag the
first time a type is seen. The decorator exists to validate a class at
definition time instead of at first use.

Usage:
    @datatype
    @dataclass(frozen=True, order=True)
    class Person:
        name: str
        age: int
"""

from __future__ import annotations

from collections.abc import Callable
from typing import overload

from edndata.core.errors import CapabilityError
from edndata.core.models import TypeTag


def missing_capabilities(cls: type) -> list[str]:
    """List the erasure capabilities a type does not provide.

    Debug and display text come from `object` for every class; the remaining
    capabilities must be real: value equality, a native ordering, hashing and
    deep copy.

    Args:
        cls: Class to inspect.

    Returns:
        Names of missing capabilities, empty when the type qualifies.
    """
    missing: list[str] = []
    if getattr(cls, "__eq__", None) is object.__eq__:
        missing.append("equality (__eq__)")
    if getattr(cls, "__lt__", None) is object.__lt__:
        missing.append("ordering (__lt__)")
    if getattr(cls, "__hash__", None) is None:
        missing.append("hashing (__hash__)")
    if getattr(cls, "__deepcopy__", object) is None:
        missing.append("cloning (__deepcopy__)")
    return missing


class DataTypeRegistry:
    """Process-local registry mapping erasable types to type tags.

    Tag IDs are the identity of the class object, which the registry keeps
    alive, so two payloads share a tag exactly when they share a concrete type.
    Classes that merely share a qualified name (local classes built by a
    factory, a reloaded module) get distinct tags.
    """

    def __init__(self) -> None:
        """Initialize empty registry."""
        self._by_type: dict[type, TypeTag] = {}
        self._by_type_id: dict[int, type] = {}

    def register(self, cls: type) -> TypeTag:
        """Register a type and return its tag.

        Args:
            cls: Class to register.

        Returns:
            The type tag, reused on repeated registration.

        Raises:
            CapabilityError: If the type lacks an erasure capability.
        """
        if cls in self._by_type:
            return self._by_type[cls]

        missing = missing_capabilities(cls)
        if missing:
            raise CapabilityError(cls, missing)

        type_id = id(cls)
        tag = TypeTag(type_id=type_id, type_name=f"{cls.__module__}.{cls.__qualname__}")
        self._by_type[cls] = tag
        self._by_type_id[type_id] = cls
        return tag

    def get_tag(self, cls: type) -> TypeTag | None:
        """Get the tag of a registered type, None if never registered."""
        return self._by_type.get(cls)

    def get_type(self, type_id: int) -> type | None:
        """Get a registered type by its tag ID, None if unknown."""
        return self._by_type_id.get(type_id)

    def is_registered(self, cls: type) -> bool:
        return cls in self._by_type


# Module-level registry instance
_registry = DataTypeRegistry()


def get_registry() -> DataTypeRegistry:
    """Access the global type registry.

    Returns:
        The process-local DataTypeRegistry instance.
    """
    return _registry


@overload
def datatype(cls: type) -> type: ...


@overload
def datatype(cls: None = None) -> Callable[[type], type]: ...


def datatype(cls: type | None = None) -> type | Callable[[type], type]:
    """Validate and register a class as an erasable data type.

    Supports both `@datatype` and `@datatype()`. Apply it after @dataclass so
    the generated comparison methods are visible.

    Raises:
        CapabilityError: If the class lacks an erasure capability.
    """

    def decorator(c: type) -> type:
        c.__datatype_tag__ = _registry.register(c)  # type: ignore[attr-defined]
        return c

    if cls is None:
        return decorator
    return decorator(cls)
