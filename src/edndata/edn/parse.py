"""EDN text to a generic syntax tree.

The tree keeps every form as a Node with its source span. Tagged literals are
left unresolved (NodeKind.TAGGED) so a Reader can hand the inner node to a
user callback.

Usage:
    node = parse("#person [John 34]")
    node.kind            # NodeKind.TAGGED
    tag, inner = node.value
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any

from edndata.edn.errors import ErrorCode, ParseError, Span, line_column

_WHITESPACE = frozenset(" \t\n\r\f\v,")
_DELIMITERS = _WHITESPACE | frozenset('()[]{}";')
_CLOSER_FOR = {"(": ")", "[": "]", "{": "}"}

_INT_RE = re.compile(r"[+-]?(?:0|[1-9][0-9]*)N?")
_FLOAT_RE = re.compile(r"[+-]?(?:0|[1-9][0-9]*)(?:\.[0-9]*)?(?:[eE][+-]?[0-9]+)?M?")

_STRING_ESCAPES = {
    '"': '"',
    "\\": "\\",
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
}

_NAMED_CHARS = {
    "newline": "\n",
    "space": " ",
    "tab": "\t",
    "return": "\r",
    "backspace": "\b",
    "formfeed": "\f",
}

_SYMBOLIC_FLOATS = {"Inf": math.inf, "-Inf": -math.inf, "NaN": math.nan}

# Each nesting level costs about four interpreter frames between parsing and
# conversion, so this stays well inside the default recursion limit.
DEFAULT_MAX_DEPTH = 256


class NodeKind(Enum):
    """Syntactic kind of a parsed form."""

    NIL = auto()
    BOOL = auto()
    INT = auto()
    FLOAT = auto()
    STRING = auto()
    CHAR = auto()
    SYMBOL = auto()
    KEYWORD = auto()
    LIST = auto()
    VECTOR = auto()
    MAP = auto()
    SET = auto()
    TAGGED = auto()


@dataclass(frozen=True, slots=True)
class Node:
    """One parsed form.

    `value` depends on `kind`:
        scalars: the Python value (None, bool, int, float, str)
        SYMBOL, KEYWORD: the name, without the leading colon for keywords
        LIST, VECTOR, SET: tuple of child nodes
        MAP: tuple of (key, value) node pairs
        TAGGED: (tag, inner node)
    """

    kind: NodeKind
    value: Any
    span: Span


class _Parser:
    def __init__(self, source: str, max_depth: int) -> None:
        self.source = source
        self.pos = 0
        self.max_depth = max_depth

    def error(self, code: ErrorCode, start: int, end: int | None = None) -> ParseError:
        line, column = line_column(self.source, start)
        return ParseError(code, Span(start, start + 1 if end is None else end), line, column)

    def at_end(self) -> bool:
        return self.pos >= len(self.source)

    def peek(self) -> str:
        return self.source[self.pos]

    def skip_ignorable(self, depth: int) -> None:
        """Skip whitespace, commas, comments and #_ discarded forms.

        Discards stack without recursion: `#_ #_ a b c` drops a and b.
        """
        src = self.source
        pending = 0
        while self.pos < len(src):
            ch = src[self.pos]
            if ch in _WHITESPACE:
                self.pos += 1
            elif ch == ";":
                newline = src.find("\n", self.pos)
                self.pos = len(src) if newline == -1 else newline + 1
            elif src.startswith("#_", self.pos):
                self.pos += 2
                pending += 1
            elif pending:
                self.parse_form(depth)
                pending -= 1
            else:
                return
        if pending:
            raise self.error(ErrorCode.UNEXPECTED_EOF, self.pos)

    def read_token(self) -> str:
        start = self.pos
        src = self.source
        while self.pos < len(src) and src[self.pos] not in _DELIMITERS:
            self.pos += 1
        return src[start : self.pos]

    def parse_form(self, depth: int) -> Node:
        if self.at_end():
            raise self.error(ErrorCode.UNEXPECTED_EOF, self.pos)
        ch = self.peek()
        start = self.pos

        if ch in _CLOSER_FOR:
            self.pos += 1
            kind = {"(": NodeKind.LIST, "[": NodeKind.VECTOR, "{": NodeKind.MAP}[ch]
            return self.parse_collection(kind, _CLOSER_FOR[ch], start, depth + 1)
        if ch in ")]}":
            raise self.error(ErrorCode.UNMATCHED_DELIMITER, start)
        if ch == '"':
            return self.parse_string()
        if ch == "\\":
            return self.parse_char()
        if ch == "#":
            return self.parse_dispatch(depth)
        if ch == ":":
            return self.parse_keyword()
        return self.parse_atom()

    def parse_collection(self, kind: NodeKind, closer: str, start: int, depth: int) -> Node:
        if depth > self.max_depth:
            raise self.error(ErrorCode.NESTING_TOO_DEEP, start)
        items: list[Node] = []
        while True:
            self.skip_ignorable(depth)
            if self.at_end():
                raise self.error(ErrorCode.UNEXPECTED_EOF, start, self.pos)
            if self.peek() == closer:
                self.pos += 1
                break
            items.append(self.parse_form(depth))

        span = Span(start, self.pos)
        if kind is NodeKind.MAP:
            if len(items) % 2:
                raise self.error(ErrorCode.ODD_MAP_ENTRIES, start, self.pos)
            pairs = tuple(zip(items[::2], items[1::2], strict=True))
            return Node(kind, pairs, span)
        return Node(kind, tuple(items), span)

    def parse_dispatch(self, depth: int) -> Node:
        start = self.pos
        self.pos += 1
        if self.at_end():
            raise self.error(ErrorCode.UNEXPECTED_EOF, start)
        ch = self.peek()
        if ch == "{":
            self.pos += 1
            return self.parse_collection(NodeKind.SET, "}", start, depth + 1)
        if ch == "#":
            self.pos += 1
            symbolic = self.read_token()
            if symbolic not in _SYMBOLIC_FLOATS:
                raise self.error(ErrorCode.INVALID_NUMBER, start, self.pos)
            return Node(NodeKind.FLOAT, _SYMBOLIC_FLOATS[symbolic], Span(start, self.pos))

        tag = self.read_token()
        if not tag or not tag[0].isalpha():
            raise self.error(ErrorCode.INVALID_TAG, start, self.pos)
        if depth + 1 > self.max_depth:
            raise self.error(ErrorCode.NESTING_TOO_DEEP, start)
        self.skip_ignorable(depth + 1)
        inner = self.parse_form(depth + 1)
        return Node(NodeKind.TAGGED, (tag, inner), Span(start, self.pos))

    def parse_string(self) -> Node:
        start = self.pos
        self.pos += 1
        src = self.source
        chunks: list[str] = []
        while True:
            if self.at_end():
                raise self.error(ErrorCode.UNEXPECTED_EOF, start, self.pos)
            ch = src[self.pos]
            if ch == '"':
                self.pos += 1
                break
            if ch != "\\":
                chunks.append(ch)
                self.pos += 1
                continue
            if self.pos + 1 >= len(src):
                raise self.error(ErrorCode.UNEXPECTED_EOF, start, self.pos)
            esc = src[self.pos + 1]
            if esc == "u":
                digits = src[self.pos + 2 : self.pos + 6]
                if len(digits) != 4 or not _is_hex(digits):
                    raise self.error(ErrorCode.INVALID_ESCAPE, self.pos, self.pos + 2)
                chunks.append(chr(int(digits, 16)))
                self.pos += 6
            elif esc in _STRING_ESCAPES:
                chunks.append(_STRING_ESCAPES[esc])
                self.pos += 2
            else:
                raise self.error(ErrorCode.INVALID_ESCAPE, self.pos, self.pos + 2)
        return Node(NodeKind.STRING, "".join(chunks), Span(start, self.pos))

    def parse_char(self) -> Node:
        start = self.pos
        self.pos += 1
        if self.at_end():
            raise self.error(ErrorCode.UNEXPECTED_EOF, start)
        # The first character is taken even when it is a delimiter: \( and \space both work.
        self.pos += 1
        name = self.source[start + 1 : self.pos] + self.read_token()
        span = Span(start, self.pos)
        if len(name) == 1:
            return Node(NodeKind.CHAR, name, span)
        if name in _NAMED_CHARS:
            return Node(NodeKind.CHAR, _NAMED_CHARS[name], span)
        if name[0] == "u" and len(name) == 5 and _is_hex(name[1:]):
            return Node(NodeKind.CHAR, chr(int(name[1:], 16)), span)
        raise self.error(ErrorCode.INVALID_CHAR, start, self.pos)

    def parse_keyword(self) -> Node:
        start = self.pos
        self.pos += 1
        name = self.read_token()
        if not name or name.startswith(":") or name.endswith("/"):
            raise self.error(ErrorCode.INVALID_KEYWORD, start, self.pos)
        return Node(NodeKind.KEYWORD, name, Span(start, self.pos))

    def parse_atom(self) -> Node:
        start = self.pos
        token = self.read_token()
        span = Span(start, self.pos)
        if not token:
            raise self.error(ErrorCode.INVALID_SYMBOL, start)

        first = token[0]
        if first.isdigit() or (first in "+-" and len(token) > 1 and token[1].isdigit()):
            return self.parse_number(token, span)

        if token == "nil":
            return Node(NodeKind.NIL, None, span)
        if token == "true":
            return Node(NodeKind.BOOL, True, span)
        if token == "false":
            return Node(NodeKind.BOOL, False, span)
        if token.endswith("/") and token != "/":
            raise self.error(ErrorCode.INVALID_SYMBOL, start, self.pos)
        return Node(NodeKind.SYMBOL, token, span)

    def parse_number(self, token: str, span: Span) -> Node:
        if _INT_RE.fullmatch(token):
            return Node(NodeKind.INT, int(token.rstrip("N")), span)
        if _FLOAT_RE.fullmatch(token):
            return Node(NodeKind.FLOAT, float(token.rstrip("M")), span)
        raise self.error(ErrorCode.INVALID_NUMBER, span.start, span.end)


def _is_hex(text: str) -> bool:
    return all(c in "0123456789abcdefABCDEF" for c in text)


def parse(source: str, max_depth: int = DEFAULT_MAX_DEPTH) -> Node:
    """Parse exactly one EDN form.

    An empty document (only whitespace, comments and discards) parses to nil.

    Args:
        source: EDN text.
        max_depth: Deepest collection or tag nesting accepted. Nesting that
            exhausts the interpreter stack first is reported the same way.

    Returns:
        The root node.

    Raises:
        ParseError: If the text is malformed or holds more than one form.
    """
    parser = _Parser(source, max_depth)
    try:
        parser.skip_ignorable(0)
        if parser.at_end():
            return Node(NodeKind.NIL, None, Span(0, 0))
        node = parser.parse_form(0)
        parser.skip_ignorable(0)
    except RecursionError:
        raise parser.error(ErrorCode.NESTING_TOO_DEEP, parser.pos) from None
    if not parser.at_end():
        raise parser.error(ErrorCode.TRAILING_INPUT, parser.pos)
    return node
