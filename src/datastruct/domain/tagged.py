"""Tagged-text codec — ``<tag>:<payload>:`` notation for DValue.

Tags::

    s  String    escaped text
    n  Number    decimal text (``1``, ``2.5``, ``1e+100``, ``inf``, ``nan``)
    t  Boolean   ``true`` | ``false``
    b  Binary    standard padded base64
    l  List      child units back-to-back, closed by ``:``
    u  Tuple     child units back-to-back, closed by ``:``
    d  Dict      (``s``-tagged key, value) pairs, closed by ``:``

Examples::

    s:hello:            String("hello")
    l:n:1:t:true::      List([Number(1), Boolean(True)])
    d:s:a:n:1::         Dict({"a": Number(1)})

Scalar payloads escape ``\\`` as ``\\\\`` and ``:`` as ``\\:``, so a literal
colon never ends a payload early.

INVARIANT: ``parse(serialize(v)) == v`` for every value without NaN.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from typing import TypeVar

from datastruct.domain.binary import ByteBuffer
from datastruct.domain.errors import (
    DecodeError,
    DuplicateKeyError,
    MalformedSeparator,
    MalformedTag,
    NestingTooDeepError,
    TrailingDataError,
    UnexpectedEndOfInput,
    ValueConversionError,
)
from datastruct.domain.values import (
    MAX_DEPTH,
    Binary,
    Boolean,
    Dict,
    DValue,
    List,
    Number,
    String,
    Tuple,
    format_number,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

SEPARATOR = ":"
ESCAPE = "\\"

TAG_STRING = "s"
TAG_NUMBER = "n"
TAG_BOOLEAN = "t"
TAG_BINARY = "b"
TAG_LIST = "l"
TAG_TUPLE = "u"
TAG_DICT = "d"

SCALAR_TAGS = frozenset({TAG_STRING, TAG_NUMBER, TAG_BOOLEAN, TAG_BINARY})
COMPOUND_TAGS = frozenset({TAG_LIST, TAG_TUPLE, TAG_DICT})
TAGS = SCALAR_TAGS | COMPOUND_TAGS

_NUMBER_PATTERN = re.compile(
    r"[+-]?(?:(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?|inf|nan)",
    re.ASCII,
)


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------


def escape_payload(text: str) -> str:
    """Escape backslashes and colons for use inside a scalar payload."""
    return text.replace(ESCAPE, ESCAPE * 2).replace(SEPARATOR, ESCAPE + SEPARATOR)


def _unit(tag: str, payload: str) -> str:
    return f"{tag}{SEPARATOR}{payload}{SEPARATOR}"


def serialize(value: DValue) -> str:
    """Render *value* in tagged-text notation.

    Walks the tree with an explicit stack, so nesting depth is not bounded
    by the interpreter's recursion limit.
    """
    if not isinstance(value, DValue):
        msg = f"Cannot serialize {type(value).__name__}"
        raise TypeError(msg)
    parts: list[str] = []
    # Pending work, popped from the end: DValues to render or literal text.
    pending: list[DValue | str] = [value]
    while pending:
        item = pending.pop()
        match item:
            case str():
                parts.append(item)
            case String(value=text):
                parts.append(_unit(TAG_STRING, escape_payload(text)))
            case Number(value=num):
                parts.append(_unit(TAG_NUMBER, format_number(num)))
            case Boolean(value=flag):
                parts.append(_unit(TAG_BOOLEAN, "true" if flag else "false"))
            case Binary(value=buf):
                parts.append(_unit(TAG_BINARY, buf.to_b64()))
            case List(items=items) | Tuple(items=items):
                parts.append((TAG_LIST if isinstance(item, List) else TAG_TUPLE) + SEPARATOR)
                pending.append(SEPARATOR)
                pending.extend(reversed(items))
            case Dict(entries=entries):
                parts.append(TAG_DICT + SEPARATOR)
                pending.append(SEPARATOR)
                for key, child in reversed(list(entries.items())):
                    pending.append(child)
                    pending.append(_unit(TAG_STRING, escape_payload(key)))
            case _:
                msg = f"Cannot serialize {type(item).__name__}"
                raise TypeError(msg)
    return "".join(parts)


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


class TaggedParser:
    """Cursor-based recursive-descent parser over a tagged-text string.

    Each call to :meth:`parse_value` consumes exactly one unit, starting at
    the cursor and ending just past the unit's trailing colon. No
    backtracking: the tag character alone decides how to continue.
    Compounds may nest at most ``MAX_DEPTH`` levels.
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0
        self.depth = 0

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self) -> str | None:
        if self.at_end():
            return None
        return self.text[self.pos]

    def parse(self) -> DValue:
        """Parse exactly one top-level value; reject leftover input."""
        value = self.parse_value()
        if not self.at_end():
            msg = f"Unexpected data after value: {self.text[self.pos : self.pos + 16]!r}"
            raise TrailingDataError(msg, position=self.pos)
        return value

    def parse_value(self) -> DValue:
        start = self.pos
        tag = self._read_tag()
        self._expect_separator()
        match tag:
            case "s":
                return String(self._read_payload())
            case "n":
                return Number(self._convert_number())
            case "t":
                return Boolean(self._convert_boolean())
            case "b":
                return Binary(self._convert_binary())
            case "l":
                return List(self._nested(start, self._read_children))
            case "u":
                return Tuple(self._nested(start, self._read_children))
            case _:  # "d"; _read_tag only returns known tags
                return Dict(self._nested(start, self._read_entries))

    def _nested(self, start: int, read: Callable[[], T]) -> T:
        """Run *read* one compound level deeper, enforcing ``MAX_DEPTH``."""
        if self.depth >= MAX_DEPTH:
            raise NestingTooDeepError(MAX_DEPTH, position=start)
        self.depth += 1
        try:
            return read()
        finally:
            self.depth -= 1

    # --- Framing --------------------------------------------------------

    def _read_tag(self) -> str:
        ch = self.peek()
        if ch is None:
            raise UnexpectedEndOfInput("Expected a tag", position=self.pos)
        if ch not in TAGS:
            raise MalformedTag(f"Unknown tag {ch!r}", position=self.pos)
        self.pos += 1
        return ch

    def _expect_separator(self) -> None:
        ch = self.peek()
        if ch is None:
            raise UnexpectedEndOfInput("Expected ':'", position=self.pos)
        if ch != SEPARATOR:
            raise MalformedSeparator(f"Expected ':' but found {ch!r}", position=self.pos)
        self.pos += 1

    def _read_payload(self) -> str:
        """Read and unescape scalar text up to the next unescaped colon.

        Consumes the terminating colon.
        """
        chars: list[str] = []
        text = self.text
        while True:
            if self.at_end():
                raise UnexpectedEndOfInput("Unterminated payload", position=self.pos)
            ch = text[self.pos]
            if ch == SEPARATOR:
                self.pos += 1
                return "".join(chars)
            if ch == ESCAPE:
                if self.pos + 1 >= len(text):
                    raise UnexpectedEndOfInput("Dangling escape", position=self.pos + 1)
                nxt = text[self.pos + 1]
                if nxt not in (ESCAPE, SEPARATOR):
                    raise ValueConversionError(
                        f"Invalid escape sequence {ch + nxt!r}", position=self.pos
                    )
                chars.append(nxt)
                self.pos += 2
                continue
            chars.append(ch)
            self.pos += 1

    def _read_children(self) -> list[DValue]:
        children: list[DValue] = []
        while True:
            ch = self.peek()
            if ch is None:
                raise UnexpectedEndOfInput("Unterminated compound", position=self.pos)
            if ch == SEPARATOR:
                self.pos += 1
                return children
            children.append(self.parse_value())

    def _read_entries(self) -> dict[str, DValue]:
        entries: dict[str, DValue] = {}
        while True:
            ch = self.peek()
            if ch is None:
                raise UnexpectedEndOfInput("Unterminated dict", position=self.pos)
            if ch == SEPARATOR:
                self.pos += 1
                return entries
            key_pos = self.pos
            if ch != TAG_STRING:
                if ch in TAGS:
                    raise MalformedTag(f"Dict key must be 's'-tagged, got {ch!r}", position=key_pos)
                raise MalformedTag(f"Unknown tag {ch!r}", position=key_pos)
            self.pos += 1
            self._expect_separator()
            key = self._read_payload()
            if key in entries:
                raise DuplicateKeyError(key, position=key_pos)
            entries[key] = self.parse_value()

    # --- Scalar conversion ---------------------------------------------

    def _convert_number(self) -> float:
        start = self.pos
        raw = self._read_payload()
        if not _NUMBER_PATTERN.fullmatch(raw):
            raise ValueConversionError(f"Not a number: {raw!r}", position=start)
        return float(raw)

    def _convert_boolean(self) -> bool:
        start = self.pos
        raw = self._read_payload()
        if raw == "true":
            return True
        if raw == "false":
            return False
        raise ValueConversionError(f"Not a boolean: {raw!r}", position=start)

    def _convert_binary(self) -> ByteBuffer:
        start = self.pos
        raw = self._read_payload()
        try:
            return ByteBuffer.from_b64(raw)
        except DecodeError as exc:
            raise ValueConversionError(f"Invalid base64 payload: {raw!r}", position=start) from exc


def parse(text: str) -> DValue:
    """Parse one tagged-text value.

    Raises:
        ParseError: One of its subclasses, carrying the failing offset.
    """
    value = TaggedParser(text).parse()
    logger.debug("Parsed %s from %d chars", value.datatype(), len(text))
    return value
