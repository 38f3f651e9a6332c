"""edndata: type-erased custom values for an EDN value model.

Usage:
    from dataclasses import dataclass
    from edndata import Data, Datum, Reader

    @dataclass(frozen=True, order=True)
    class Person:
        name: str
        age: int

    reader = Reader()
    reader.add_reader(
        "person",
        lambda node: Data(Datum(Person(node.value[0].value, node.value[1].value))),
    )
    value = reader.read_string("#person [John 34]")
    person = value.datum.downcast(Person).unwrap()
"""

__version__ = "0.1.0"

# Core primitives
from edndata.core import (
    CapabilityError,
    Datum,
    DowncastError,
    EdnDataError,
    Erased,
    ErasedData,
    ErasedTypeMismatch,
    Err,
    Hasher,
    Ok,
    Ordering,
    TypeTag,
    datatype,
)

# EDN
from edndata.edn import (
    Data,
    Edn,
    Node,
    NodeKind,
    ParseError,
    Reader,
    ReaderError,
    parse,
    read_string,
)

__all__ = [
    # Version
    "__version__",
    # Core
    "Datum",
    "ErasedData",
    "Erased",
    "Ordering",
    "TypeTag",
    "Ok",
    "Err",
    "Hasher",
    "datatype",
    # Errors
    "EdnDataError",
    "CapabilityError",
    "DowncastError",
    "ErasedTypeMismatch",
    # EDN
    "Reader",
    "read_string",
    "parse",
    "Node",
    "NodeKind",
    "Edn",
    "Data",
    "ParseError",
    "ReaderError",
]
