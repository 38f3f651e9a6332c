"""Read a custom Person type out of EDN text and recover it by downcast.

Run with: python examples/person.py
"""

from dataclasses import dataclass

from edndata import Data, Datum, Reader
from edndata.edn import Node, NodeKind


@dataclass(frozen=True, order=True)
class Person:
    name: str
    age: int

    def __str__(self) -> str:
        return f"Person({self.name}, {self.age})"


def read_person(node: Node) -> Data:
    # Expect a vector of two elements - a symbol (name) and an integer (age)
    if node.kind is NodeKind.VECTOR and len(node.value) == 2:
        name, age = node.value
        if name.kind is NodeKind.SYMBOL and age.kind is NodeKind.INT:
            # dataclass(frozen=True, order=True) supplies every capability Datum needs
            return Data(Datum(Person(name=name.value, age=age.value)))
    raise ValueError(f"#person expects [name age], got {node.kind.name.lower()}")


def main() -> None:
    reader = Reader()
    reader.add_reader("person", read_person)

    value = reader.read_string(" #person [John 34] ")
    if not isinstance(value, Data):
        raise SystemExit(f"unexpected value: {value}")

    person = value.datum.downcast(Person).unwrap()
    assert person.name == "John"
    assert person.age == 34
    print(person)


if __name__ == "__main__":
    main()
