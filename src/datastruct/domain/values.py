"""DValue — the closed, recursive dynamic value model.

Seven variants, one frozen dataclass each:

  String, Number, Boolean, Binary, List, Tuple, Dict

INVARIANT: Values are immutable after construction. Compound variants copy
their children (List/Tuple into a tuple, Dict into a private dict), so a
tree is always finite and acyclic.

Size convention (``size()``):
  String  -> UTF-8 byte length
  Number  -> 8
  Boolean -> 1
  Binary  -> byte length
  List / Tuple -> sum of children, no per-element overhead
  Dict    -> sum of (UTF-8 key length + value size)
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from datastruct.domain.binary import ByteBuffer

NUMBER_SIZE = 8
BOOLEAN_SIZE = 1

# Largest magnitude at which every integral double is exactly representable.
EXACT_INT_LIMIT = 2.0**53

# Deepest compound nesting accepted from tagged text or JSON.
MAX_DEPTH = 200


def format_number(value: float) -> str:
    """Render a double as decimal text.

    Integral values inside the exact-integer range drop the fractional part
    (``1.0`` -> ``"1"``); everything else uses the shortest round-trip repr. Negative zero keeps
    its sign as ``"-0"``.
    """
    if math.isnan(value):
        return "nan"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value == 0 and math.copysign(1.0, value) < 0:
        return "-0"
    if value.is_integer() and abs(value) < EXACT_INT_LIMIT:
        return str(int(value))
    return repr(value)


class DValue:
    """Base class for every dynamic value variant."""

    __slots__ = ()

    # --- Entry points -------------------------------------------------

    @classmethod
    def parse(cls, text: str) -> DValue:
        """Parse tagged text such as ``"b:SGVsbG8gV29ybGQ=:"`` into a value."""
        from datastruct.domain.tagged import parse

        return parse(text)

    @classmethod
    def from_json(cls, text: str) -> DValue:
        """Build a value from JSON text."""
        from datastruct.domain.projection import from_json

        return from_json(text)

    def serialize(self) -> str:
        """Render the value in tagged-text notation."""
        from datastruct.domain.tagged import serialize

        return serialize(self)

    def to_json(self, *, indent: int | None = None, ensure_ascii: bool = False) -> str:
        """Project the value to JSON text."""
        from datastruct.domain.projection import to_json

        return to_json(self, indent=indent, ensure_ascii=ensure_ascii)

    # --- Accounting ---------------------------------------------------

    def size(self) -> int:
        raise NotImplementedError

    def weight(self) -> float:
        """Numeric weight: a number's value, or the sum over a compound.

        Variants without a numeric meaning weigh ``math.inf``; compounds
        skip such children when summing.
        """
        return math.inf

    def sort_key(self) -> float:
        """Key for ``sorted(values, key=DValue.sort_key)``."""
        return self.weight()

    def datatype(self) -> str:
        """Name of the variant (``"String"``, ``"Number"``, ...)."""
        return type(self).__name__

    # --- Accessors ----------------------------------------------------

    def as_string(self) -> str | None:
        return None

    def as_number(self) -> float | None:
        return None

    def as_bool(self) -> bool | None:
        return None

    def as_binary(self) -> ByteBuffer | None:
        return None

    def as_list(self) -> list[DValue] | None:
        return None

    def as_tuple(self) -> tuple[DValue, ...] | None:
        return None

    def as_dict(self) -> dict[str, DValue] | None:
        return None


def _utf8_len(text: str) -> int:
    # Lone surrogates count as three bytes instead of failing.
    return len(text.encode("utf-8", "surrogatepass"))


def _sum_weights(children: Iterable[DValue]) -> float:
    total = 0.0
    for child in children:
        w = child.weight()
        if not math.isinf(w):
            total += w
    return total


@dataclass(frozen=True)
class String(DValue):
    """Unicode text."""

    value: str

    def size(self) -> int:
        return _utf8_len(self.value)

    def as_string(self) -> str | None:
        return self.value

    def __str__(self) -> str:
        return f'"{self.value}"'


@dataclass(frozen=True)
class Number(DValue):
    """IEEE-754 double. Integers are coerced on construction."""

    value: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", float(self.value))

    def size(self) -> int:
        return NUMBER_SIZE

    def weight(self) -> float:
        return self.value

    def as_number(self) -> float | None:
        return self.value

    def __str__(self) -> str:
        return format_number(self.value)


@dataclass(frozen=True)
class Boolean(DValue):
    value: bool

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", bool(self.value))

    def size(self) -> int:
        return BOOLEAN_SIZE

    def as_bool(self) -> bool | None:
        return self.value

    def __str__(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True)
class Binary(DValue):
    """Raw bytes held in a :class:`ByteBuffer`. Plain bytes are wrapped."""

    value: ByteBuffer

    def __post_init__(self) -> None:
        if not isinstance(self.value, ByteBuffer):
            object.__setattr__(self, "value", ByteBuffer(self.value))

    def size(self) -> int:
        return self.value.size()

    def as_binary(self) -> ByteBuffer | None:
        return self.value

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class List(DValue):
    """Ordered, homogeneous-in-spirit collection."""

    items: tuple[DValue, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))

    def size(self) -> int:
        return sum(item.size() for item in self.items)

    def weight(self) -> float:
        return _sum_weights(self.items)

    def as_list(self) -> list[DValue] | None:
        return list(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __str__(self) -> str:
        return "[" + ",".join(str(item) for item in self.items) + "]"


@dataclass(frozen=True)
class Tuple(DValue):
    """Fixed positional record. Same wire shape as List, different tag."""

    items: tuple[DValue, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))

    def size(self) -> int:
        return sum(item.size() for item in self.items)

    def weight(self) -> float:
        return _sum_weights(self.items)

    def as_tuple(self) -> tuple[DValue, ...] | None:
        return self.items

    def __len__(self) -> int:
        return len(self.items)

    def __str__(self) -> str:
        return "(" + ", ".join(str(item) for item in self.items) + ")"


@dataclass(frozen=True)
class Dict(DValue):
    """String-keyed mapping. Iteration follows insertion order."""

    entries: Mapping[str, DValue]

    def __init__(self, entries: Mapping[str, DValue] | None = None) -> None:
        object.__setattr__(self, "entries", dict(entries or {}))

    def size(self) -> int:
        return sum(_utf8_len(key) + value.size() for key, value in self.entries.items())

    def weight(self) -> float:
        return _sum_weights(self.entries.values())

    def as_dict(self) -> dict[str, DValue] | None:
        return dict(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __getitem__(self, key: str) -> DValue:
        return self.entries[key]

    def __hash__(self) -> int:
        return hash(frozenset(self.entries.items()))

    def __str__(self) -> str:
        body = ",".join(f'"{key}":{value}' for key, value in self.entries.items())
        return "{" + body + "}"


def coerce(value: Any) -> DValue:
    """Convert plain Python data into a DValue tree.

    ``bool`` -> Boolean, ``int``/``float`` -> Number, ``str`` -> String,
    ``bytes``-like -> Binary, ``list`` -> List, ``tuple`` -> Tuple,
    mapping -> Dict. Existing DValues pass through unchanged.
    """
    if isinstance(value, DValue):
        return value
    if isinstance(value, bool):
        return Boolean(value)
    if isinstance(value, int | float):
        return Number(value)
    if isinstance(value, str):
        return String(value)
    if isinstance(value, bytes | bytearray | memoryview | ByteBuffer):
        return Binary(value if isinstance(value, ByteBuffer) else ByteBuffer(value))
    if isinstance(value, list):
        return List(tuple(coerce(v) for v in value))
    if isinstance(value, tuple):
        return Tuple(tuple(coerce(v) for v in value))
    if isinstance(value, Mapping):
        return Dict({str(k): coerce(v) for k, v in value.items()})
    msg = f"Cannot convert {type(value).__name__} to DValue"
    raise TypeError(msg)
