"""Reader: EDN text to values, with user-registered tag readers.

A tag reader receives the raw syntax node that follows its tag and returns an
Edn value. Custom types come back as `Data(Datum(...))`:

    reader = Reader()

    def read_person(node: Node) -> Edn:
        name, age = node.value
        return Data(Datum(Person(name.value, age.value)))

    reader.add_reader("person", read_person)
    value = reader.read_string("#person [John 34]")
"""

from __future__ import annotations

import uuid
import warnings
from collections.abc import Callable
from datetime import datetime

from edndata.config import ReaderSettings
from edndata.core.datum import Datum
from edndata.core.errors import ErasedTypeMismatch
from edndata.edn.errors import ErrorCode, ParseError, ReaderError, line_column
from edndata.edn.models import (
    EDN_TYPES,
    Bool,
    Char,
    Data,
    Edn,
    Float,
    Int,
    Keyword,
    List,
    Map,
    Nil,
    Set,
    Str,
    Symbol,
    Tagged,
    Vector,
)
from edndata.edn.parse import Node, NodeKind, parse

type TagReader = Callable[[Node], Edn]

_SCALARS: dict[NodeKind, type] = {
    NodeKind.BOOL: Bool,
    NodeKind.INT: Int,
    NodeKind.FLOAT: Float,
    NodeKind.STRING: Str,
    NodeKind.CHAR: Char,
    NodeKind.SYMBOL: Symbol,
    NodeKind.KEYWORD: Keyword,
}


def _expect_string(node: Node, tag: str) -> str:
    if node.kind is not NodeKind.STRING:
        raise TypeError(f"#{tag} expects a string, got {node.kind.name.lower()}")
    return str(node.value)


def read_inst(node: Node) -> Edn:
    """#inst "1985-04-12T23:20:50.52Z" to a Datum holding a datetime."""
    return Data(Datum(datetime.fromisoformat(_expect_string(node, "inst"))))


def read_uuid(node: Node) -> Edn:
    """#uuid "f81d4fae-7dec-11d0-a765-00a0c91e6bf6" to a Datum holding a UUID."""
    return Data(Datum(uuid.UUID(_expect_string(node, "uuid"))))


BUILTIN_READERS: dict[str, TagReader] = {
    "inst": read_inst,
    "uuid": read_uuid,
}


class Reader:
    """Converts EDN text to Edn values, dispatching tagged literals to callbacks."""

    def __init__(self, settings: ReaderSettings | None = None) -> None:
        self._settings = settings if settings is not None else ReaderSettings()
        self._readers: dict[str, TagReader] = {}
        if self._settings.builtin_tags:
            self._readers.update(BUILTIN_READERS)

    @property
    def settings(self) -> ReaderSettings:
        return self._settings

    def add_reader(self, tag: str, callback: TagReader) -> None:
        """Register the callback for `#tag`, replacing any previous one.

        Args:
            tag: Tag name without the leading `#`.
            callback: Receives the node following the tag, returns an Edn value.
        """
        if tag in self._readers:
            warnings.warn(
                f"add_reader() replaced the existing reader for #{tag}.",
                stacklevel=2,
            )
        self._readers[tag] = callback

    def remove_reader(self, tag: str) -> TagReader | None:
        """Unregister a tag; its literals read as Tagged afterwards."""
        return self._readers.pop(tag, None)

    def has_reader(self, tag: str) -> bool:
        return tag in self._readers

    def read_string(self, source: str) -> Edn:
        """Parse one EDN form and convert it to a value.

        Raises:
            ParseError: If the text is malformed or holds duplicate keys.
            ReaderError: If a tag reader fails or returns a non-Edn value.
        """
        node = parse(source, max_depth=self._settings.max_depth)
        return _Converter(self._readers, source).convert_root(node)

    def read_node(self, node: Node) -> Edn:
        """Convert an already parsed node; for tag readers handling nested tags."""
        return _Converter(self._readers, None).convert_root(node)


class _Converter:
    def __init__(self, readers: dict[str, TagReader], source: str | None) -> None:
        self.readers = readers
        self.source = source

    def error(self, code: ErrorCode, node: Node) -> ParseError:
        if self.source is None:
            return ParseError(code, node.span)
        line, column = line_column(self.source, node.span.start)
        return ParseError(code, node.span, line, column)

    def convert_root(self, node: Node) -> Edn:
        try:
            return self.convert(node)
        except RecursionError:
            raise self.error(ErrorCode.NESTING_TOO_DEEP, node) from None

    def convert(self, node: Node) -> Edn:
        kind = node.kind
        if kind is NodeKind.NIL:
            return Nil()
        if kind in _SCALARS:
            return _SCALARS[kind](node.value)  # type: ignore[no-any-return]
        if kind is NodeKind.LIST:
            return List(tuple(self.convert(child) for child in node.value))
        if kind is NodeKind.VECTOR:
            return Vector(tuple(self.convert(child) for child in node.value))
        if kind is NodeKind.MAP:
            return self.convert_map(node)
        if kind is NodeKind.SET:
            return self.convert_set(node)
        return self.convert_tagged(node)

    def convert_map(self, node: Node) -> Map:
        entries: dict[Edn, Edn] = {}
        for key_node, value_node in node.value:
            key = self.convert(key_node)
            if key in entries:
                raise self.error(ErrorCode.DUPLICATE_KEY, key_node)
            entries[key] = self.convert(value_node)
        return Map(tuple(entries.items()))

    def convert_set(self, node: Node) -> Set:
        items: dict[Edn, None] = {}
        for child in node.value:
            item = self.convert(child)
            if item in items:
                raise self.error(ErrorCode.DUPLICATE_SET_ITEM, child)
            items[item] = None
        return Set(tuple(items))

    def convert_tagged(self, node: Node) -> Edn:
        tag, inner = node.value
        callback = self.readers.get(tag)
        if callback is None:
            return Tagged(tag, self.convert(inner))
        try:
            value = callback(inner)
        except (ParseError, ReaderError, ErasedTypeMismatch):
            raise
        except Exception as e:
            raise ReaderError(tag, str(e)) from e
        if not isinstance(value, EDN_TYPES):
            raise ReaderError(tag, f"reader returned {type(value).__name__}, not an Edn value")
        return value


def read_string(source: str, settings: ReaderSettings | None = None) -> Edn:
    """Read EDN text with a fresh Reader that has only the built-in tags."""
    return Reader(settings).read_string(source)
