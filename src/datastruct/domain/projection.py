"""JSON projection of DValue trees, and the reverse mapping.

Projection rules:
  String -> string          Number -> number (``1.0`` renders as ``1``)
  Boolean -> true/false     List, Tuple -> array
  Dict -> object            Binary -> base64 string

Binary and a String holding the same base64 text project identically;
the JSON form does not carry the variant.
"""

from __future__ import annotations

import json
import math
from typing import Any

from datastruct.domain.errors import (
    DuplicateKeyError,
    NestingTooDeepError,
    ProjectionError,
    ValueConversionError,
)
from datastruct.domain.values import (
    Binary,
    Boolean,
    EXACT_INT_LIMIT,
    MAX_DEPTH,
    Dict,
    DValue,
    List,
    Number,
    String,
    Tuple,
)


def _project_number(value: float) -> int | float:
    if not math.isfinite(value):
        msg = f"Number {value!r} has no JSON representation"
        raise ProjectionError(msg)
    if value.is_integer() and abs(value) < EXACT_INT_LIMIT:
        return int(value)
    return value


def to_jsonable(value: DValue) -> Any:
    """Map *value* onto plain ``json``-serializable Python data."""
    match value:
        case String(value=text):
            return text
        case Boolean(value=flag):
            return flag
        case Number(value=num):
            return _project_number(num)
        case Binary(value=buf):
            return buf.to_b64()
        case List(items=items) | Tuple(items=items):
            return [to_jsonable(item) for item in items]
        case Dict(entries=entries):
            return {key: to_jsonable(item) for key, item in entries.items()}
        case _:
            msg = f"Cannot project {type(value).__name__}"
            raise TypeError(msg)


def to_json(value: DValue, *, indent: int | None = None, ensure_ascii: bool = False) -> str:
    """Render *value* as standard JSON text.

    Compact separators unless *indent* is given. Object keys keep the
    Dict's insertion order.

    Raises:
        ProjectionError: The tree contains a NaN or infinite Number, or nests
            too deeply to encode.
    """
    separators = (",", ":") if indent is None else (",", ": ")
    try:
        return json.dumps(
            to_jsonable(value),
            indent=indent,
            separators=separators,
            ensure_ascii=ensure_ascii,
            allow_nan=False,
        )
    except RecursionError as exc:
        msg = "Value nests too deeply to encode as JSON"
        raise ProjectionError(msg) from exc


# ---------------------------------------------------------------------------
# JSON -> DValue
# ---------------------------------------------------------------------------


def _reject_constant(name: str) -> Any:
    msg = f"Non-standard JSON constant {name}"
    raise ValueConversionError(msg)


def _unique_pairs(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for key, item in pairs:
        if key in result:
            raise DuplicateKeyError(key)
        result[key] = item
    return result


def from_jsonable(data: Any) -> DValue:
    """Map decoded JSON data onto a DValue tree.

    Raises:
        ValueConversionError: ``null`` or a non-JSON Python type was found.
        NestingTooDeepError: Arrays and objects nest deeper than ``MAX_DEPTH``.
    """
    return _from_data(data, 0)


def _from_data(data: Any, depth: int) -> DValue:
    if isinstance(data, bool):
        return Boolean(data)
    if isinstance(data, int | float):
        try:
            return Number(data)
        except OverflowError as exc:
            msg = "JSON integer is too large for a double"
            raise ValueConversionError(msg) from exc
    if isinstance(data, str):
        return String(data)
    if isinstance(data, list | dict) and depth >= MAX_DEPTH:
        raise NestingTooDeepError(MAX_DEPTH)
    if isinstance(data, list):
        return List(tuple(_from_data(item, depth + 1) for item in data))
    if isinstance(data, dict):
        return Dict({key: _from_data(item, depth + 1) for key, item in data.items()})
    if data is None:
        msg = "JSON null has no DValue counterpart"
        raise ValueConversionError(msg)
    msg = f"Unsupported JSON value of type {type(data).__name__}"
    raise ValueConversionError(msg)


def from_json(text: str) -> DValue:
    """Parse JSON text into a DValue.

    Arrays become List (never Tuple). Duplicate object keys are rejected.

    Raises:
        ValueConversionError: Invalid JSON, ``null``, or NaN/Infinity literals.
        DuplicateKeyError: An object repeats a key.
        NestingTooDeepError: Arrays and objects nest deeper than ``MAX_DEPTH``.
    """
    try:
        data = json.loads(
            text,
            object_pairs_hook=_unique_pairs,
            parse_constant=_reject_constant,
        )
    except json.JSONDecodeError as exc:
        msg = f"Invalid JSON: {exc.msg}"
        raise ValueConversionError(msg, position=exc.pos) from exc
    except RecursionError as exc:
        raise NestingTooDeepError(MAX_DEPTH) from exc
    return from_jsonable(data)
