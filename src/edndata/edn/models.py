"""EDN value model.

Every value is immutable, hashable and compares by value, so values can be map
keys and set members. Custom types enter the model through `Data`, which holds
a Datum and inherits its equality and hashing.

`str(value)` renders EDN text.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from edndata.core.datum import Datum

_CHAR_NAMES = {
    "\n": "newline",
    " ": "space",
    "\t": "tab",
    "\r": "return",
    "\b": "backspace",
    "\f": "formfeed",
}
_STRING_ESCAPES = str.maketrans({'"': '\\"', "\\": "\\\\", "\n": "\\n", "\t": "\\t", "\r": "\\r"})


@dataclass(frozen=True, slots=True)
class Nil:
    def __str__(self) -> str:
        return "nil"


@dataclass(frozen=True, slots=True)
class Bool:
    value: bool

    def __str__(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True, slots=True)
class Int:
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, slots=True)
class Float:
    value: float

    def __str__(self) -> str:
        if math.isnan(self.value):
            return "##NaN"
        if math.isinf(self.value):
            return "##Inf" if self.value > 0 else "##-Inf"
        return repr(self.value)


@dataclass(frozen=True, slots=True)
class Str:
    value: str

    def __str__(self) -> str:
        return f'"{self.value.translate(_STRING_ESCAPES)}"'


@dataclass(frozen=True, slots=True)
class Char:
    value: str

    def __str__(self) -> str:
        return "\\" + _CHAR_NAMES.get(self.value, self.value)


@dataclass(frozen=True, slots=True)
class Symbol:
    """Symbol, optionally namespaced as `ns/name`."""

    name: str

    @property
    def namespace(self) -> str | None:
        ns, sep, _ = self.name.rpartition("/")
        return ns if sep and ns else None

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class Keyword:
    """Keyword, stored without its leading colon."""

    name: str

    @property
    def namespace(self) -> str | None:
        ns, sep, _ = self.name.rpartition("/")
        return ns if sep and ns else None

    def __str__(self) -> str:
        return f":{self.name}"


@dataclass(frozen=True, slots=True)
class List:
    items: tuple[Edn, ...] = ()

    def __len__(self) -> int:
        return len(self.items)

    def __str__(self) -> str:
        return "(" + " ".join(map(str, self.items)) + ")"


@dataclass(frozen=True, slots=True)
class Vector:
    items: tuple[Edn, ...] = ()

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index: int) -> Edn:
        return self.items[index]

    def __str__(self) -> str:
        return "[" + " ".join(map(str, self.items)) + "]"


@dataclass(frozen=True, slots=True, eq=False)
class Map:
    """Map with unique keys; equality ignores entry order, rendering keeps it."""

    entries: tuple[tuple[Edn, Edn], ...] = ()

    def __len__(self) -> int:
        return len(self.entries)

    def get(self, key: Edn, default: Edn | None = None) -> Edn | None:
        for k, v in self.entries:
            if k == key:
                return v
        return default

    def as_dict(self) -> dict[Edn, Edn]:
        return dict(self.entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Map):
            return NotImplemented
        return self.as_dict() == other.as_dict()

    def __hash__(self) -> int:
        return hash(frozenset(self.entries))

    def __str__(self) -> str:
        return "{" + ", ".join(f"{k} {v}" for k, v in self.entries) + "}"


@dataclass(frozen=True, slots=True, eq=False)
class Set:
    """Set with unique members; equality ignores order, rendering keeps it."""

    items: tuple[Edn, ...] = ()

    def __len__(self) -> int:
        return len(self.items)

    def __contains__(self, item: object) -> bool:
        return item in frozenset(self.items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Set):
            return NotImplemented
        return frozenset(self.items) == frozenset(other.items)

    def __hash__(self) -> int:
        return hash(frozenset(self.items))

    def __str__(self) -> str:
        return "#{" + " ".join(map(str, self.items)) + "}"


@dataclass(frozen=True, slots=True)
class Tagged:
    """Tagged literal with no registered reader."""

    tag: str
    value: Edn

    def __str__(self) -> str:
        return f"#{self.tag} {self.value}"


@dataclass(frozen=True, slots=True)
class Data:
    """Opaque custom value produced by a tag reader."""

    datum: Datum

    def __str__(self) -> str:
        return str(self.datum)


type Edn = (
    Nil | Bool | Int | Float | Str | Char | Symbol | Keyword | List | Vector | Map | Set | Tagged | Data
)

EDN_TYPES: tuple[type, ...] = (
    Nil,
    Bool,
    Int,
    Float,
    Str,
    Char,
    Symbol,
    Keyword,
    List,
    Vector,
    Map,
    Set,
    Tagged,
    Data,
)
