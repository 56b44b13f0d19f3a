"""datastruct — dynamic values with a tagged-text codec and JSON projection."""

from __future__ import annotations

from datastruct.domain.binary import ByteBuffer
from datastruct.domain.errors import (
    DataStructError,
    DecodeError,
    DuplicateKeyError,
    IoError,
    MalformedSeparator,
    MalformedTag,
    NestingTooDeepError,
    ParseError,
    ProjectionError,
    TrailingDataError,
    UnexpectedEndOfInput,
    ValueConversionError,
)
from datastruct.domain.projection import from_json, to_json
from datastruct.domain.tagged import parse, serialize
from datastruct.domain.values import (
    Binary,
    Boolean,
    Dict,
    DValue,
    List,
    Number,
    String,
    Tuple,
)

__version__ = "0.1.0"

__all__ = [
    "Binary",
    "Boolean",
    "ByteBuffer",
    "DValue",
    "DataStructError",
    "DecodeError",
    "Dict",
    "DuplicateKeyError",
    "IoError",
    "List",
    "MalformedSeparator",
    "MalformedTag",
    "NestingTooDeepError",
    "Number",
    "ParseError",
    "ProjectionError",
    "String",
    "TrailingDataError",
    "Tuple",
    "UnexpectedEndOfInput",
    "ValueConversionError",
    "__version__",
    "from_json",
    "parse",
    "serialize",
    "to_json",
]
