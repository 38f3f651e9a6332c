"""EDN syntax, value model and reader.

The reader is the boundary where custom types enter the value model: a tag
reader wraps its result in Data(Datum(...)).
"""

from edndata.edn.errors import ErrorCode, ParseError, ReaderError, Span
from edndata.edn.models import (
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
from edndata.edn.reader import BUILTIN_READERS, Reader, TagReader, read_string

__all__ = [
    # Syntax
    "parse",
    "Node",
    "NodeKind",
    "Span",
    # Values
    "Edn",
    "Nil",
    "Bool",
    "Int",
    "Float",
    "Str",
    "Char",
    "Symbol",
    "Keyword",
    "List",
    "Vector",
    "Map",
    "Set",
    "Tagged",
    "Data",
    # Reader
    "Reader",
    "TagReader",
    "BUILTIN_READERS",
    "read_string",
    # Errors
    "ErrorCode",
    "ParseError",
    "ReaderError",
]
