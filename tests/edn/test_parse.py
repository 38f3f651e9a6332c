"""Tests for EDN parsing into syntax nodes."""

import math

import pytest

from edndata.edn import ErrorCode, NodeKind, ParseError, parse
from edndata.edn.parse import DEFAULT_MAX_DEPTH


@pytest.mark.parametrize(
    ("source", "kind", "value"),
    [
        ("nil", NodeKind.NIL, None),
        ("true", NodeKind.BOOL, True),
        ("false", NodeKind.BOOL, False),
        ("42", NodeKind.INT, 42),
        ("-7", NodeKind.INT, -7),
        ("+3", NodeKind.INT, 3),
        ("12N", NodeKind.INT, 12),
        ("1.5", NodeKind.FLOAT, 1.5),
        ("1e3", NodeKind.FLOAT, 1000.0),
        ("-2.5E-1", NodeKind.FLOAT, -0.25),
        ("3.0M", NodeKind.FLOAT, 3.0),
        ('"hi"', NodeKind.STRING, "hi"),
        (r'"a\nb\t\"c\"\\"', NodeKind.STRING, 'a\nb\t"c"\\'),
        (r'"\u00e9"', NodeKind.STRING, "\u00e9"),
        ("\\a", NodeKind.CHAR, "a"),
        ("\\newline", NodeKind.CHAR, "\n"),
        ("\\space", NodeKind.CHAR, " "),
        ("\\u0041", NodeKind.CHAR, "A"),
        ("\\(", NodeKind.CHAR, "("),
        ("foo", NodeKind.SYMBOL, "foo"),
        ("my.ns/foo", NodeKind.SYMBOL, "my.ns/foo"),
        ("-", NodeKind.SYMBOL, "-"),
        ("/", NodeKind.SYMBOL, "/"),
        (":kw", NodeKind.KEYWORD, "kw"),
        (":ns/kw", NodeKind.KEYWORD, "ns/kw"),
    ],
)
def test_scalars(source, kind, value) -> None:
    node = parse(source)
    assert node.kind is kind
    assert node.value == value


def test_symbolic_floats() -> None:
    assert parse("##Inf").value == math.inf
    assert parse("##-Inf").value == -math.inf
    assert math.isnan(parse("##NaN").value)


def test_collections() -> None:
    node = parse("[1 (2 3) {:a #{4}}]")

    assert node.kind is NodeKind.VECTOR
    one, inner_list, mapping = node.value
    assert one.value == 1
    assert inner_list.kind is NodeKind.LIST
    assert [child.value for child in inner_list.value] == [2, 3]
    assert mapping.kind is NodeKind.MAP
    ((key, value),) = mapping.value
    assert key.value == "a"
    assert value.kind is NodeKind.SET


def test_whitespace_commas_comments_and_discard() -> None:
    node = parse("""
        ; leading comment
        [1, 2 #_ 3 #_ [ignored nested] 4] ; trailing
    """)

    assert [child.value for child in node.value] == [1, 2, 4]


def test_tagged_literal_keeps_inner_node() -> None:
    """Tagged nodes are unresolved so readers receive the raw inner form."""
    node = parse("#person [John 34]")

    assert node.kind is NodeKind.TAGGED
    tag, inner = node.value
    assert tag == "person"
    assert inner.kind is NodeKind.VECTOR
    assert [child.kind for child in inner.value] == [NodeKind.SYMBOL, NodeKind.INT]


def test_spans_cover_source_text() -> None:
    source = '  [1 "two"]'
    node = parse(source)

    assert source[node.span.start : node.span.end] == '[1 "two"]'
    second = node.value[1]
    assert source[second.span.start : second.span.end] == '"two"'


def test_empty_document_is_nil() -> None:
    assert parse("").kind is NodeKind.NIL
    assert parse("  ; only a comment\n #_ 1").kind is NodeKind.NIL


@pytest.mark.parametrize(
    ("source", "code"),
    [
        ("[1 2", ErrorCode.UNEXPECTED_EOF),
        ('"open', ErrorCode.UNEXPECTED_EOF),
        ("#", ErrorCode.UNEXPECTED_EOF),
        ("]", ErrorCode.UNMATCHED_DELIMITER),
        ("(1]", ErrorCode.UNMATCHED_DELIMITER),
        ("01", ErrorCode.INVALID_NUMBER),
        ("1.2.3", ErrorCode.INVALID_NUMBER),
        ("5abc", ErrorCode.INVALID_NUMBER),
        ("##Foo", ErrorCode.INVALID_NUMBER),
        (r'"\q"', ErrorCode.INVALID_ESCAPE),
        (r'"\u12"', ErrorCode.INVALID_ESCAPE),
        ("\\bogus", ErrorCode.INVALID_CHAR),
        (":", ErrorCode.INVALID_KEYWORD),
        ("::double", ErrorCode.INVALID_KEYWORD),
        ("foo/", ErrorCode.INVALID_SYMBOL),
        ("#1 2", ErrorCode.INVALID_TAG),
        ("{:a}", ErrorCode.ODD_MAP_ENTRIES),
        ("1 2", ErrorCode.TRAILING_INPUT),
    ],
)
def test_malformed_input(source, code) -> None:
    with pytest.raises(ParseError) as excinfo:
        parse(source)
    assert excinfo.value.code is code


def test_error_reports_line_and_column() -> None:
    with pytest.raises(ParseError, match="line 2, column 5") as excinfo:
        parse("[1\n   ]]")
    assert excinfo.value.line == 2
    assert excinfo.value.column == 5


def test_nesting_limit() -> None:
    assert parse("[[[1]]]", max_depth=3).kind is NodeKind.VECTOR

    with pytest.raises(ParseError) as excinfo:
        parse("[[[[1]]]]", max_depth=3)
    assert excinfo.value.code is ErrorCode.NESTING_TOO_DEEP


def test_default_nesting_limit_is_reachable() -> None:
    """CRITICAL: The default limit is hit before the interpreter stack runs out.

    Why: A RecursionError would escape the ParseError contract.
    """
    depth = DEFAULT_MAX_DEPTH
    node = parse("[" * depth + "]" * depth)
    for _ in range(depth - 1):
        (node,) = node.value
    assert node.value == ()

    with pytest.raises(ParseError) as excinfo:
        parse("[" * (depth + 1) + "]" * (depth + 1))
    assert excinfo.value.code is ErrorCode.NESTING_TOO_DEEP


def test_nesting_beyond_the_stack_is_a_parse_error() -> None:
    """A limit set above what the stack holds still reports NESTING_TOO_DEEP."""
    with pytest.raises(ParseError) as excinfo:
        parse("[" * 5000 + "]" * 5000, max_depth=100_000)
    assert excinfo.value.code is ErrorCode.NESTING_TOO_DEEP


def test_stacked_discards() -> None:
    assert parse("#_ #_ 1 2 3").value == 3
    assert [child.value for child in parse("[#_ #_ a b c]").value] == ["c"]


def test_long_discard_chain() -> None:
    """Discards are consumed iteratively, however many are stacked."""
    source = "#_ " * 3000 + " ".join(["0"] * 3000) + " 1"

    assert parse(source).value == 1

    with pytest.raises(ParseError) as excinfo:
        parse("#_ " * 3000 + "1")
    assert excinfo.value.code is ErrorCode.UNEXPECTED_EOF
