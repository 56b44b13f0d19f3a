"""Typed failures raised by the domain layer.

INVARIANT: Malformed input is always reported as one of these exceptions.
Nothing in the domain layer falls back to an empty or default value.

Each class carries a stable ``code`` that the service layer copies into
:class:`~datastruct.services.result.ServiceError`.
"""

from __future__ import annotations

from typing import Any


class DataStructError(Exception):
    """Base class for every error raised by datastruct."""

    code = "DATASTRUCT_ERROR"

    def detail(self) -> dict[str, Any]:
        """Structured context for the service layer."""
        return {}


class IoError(DataStructError):
    """A file could not be read (missing, unreadable, not a regular file)."""

    code = "IO_ERROR"

    def __init__(self, message: str, *, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path

    def detail(self) -> dict[str, Any]:
        return {"path": self.path} if self.path is not None else {}


class DecodeError(DataStructError):
    """Text is not valid standard-alphabet, padded base64."""

    code = "DECODE_ERROR"


class ProjectionError(DataStructError):
    """A value has no representation in standard JSON (e.g. NaN)."""

    code = "PROJECTION_ERROR"


class ParseError(DataStructError):
    """Base for tagged-text parse failures.

    Attributes:
        position: Zero-based cursor offset where the fault was detected,
            or None when the input has no meaningful offset.
    """

    code = "PARSE_ERROR"

    def __init__(self, message: str, *, position: int | None = None) -> None:
        if position is not None:
            message = f"{message} (at offset {position})"
        super().__init__(message)
        self.position = position

    def detail(self) -> dict[str, Any]:
        return {"position": self.position} if self.position is not None else {}


class MalformedTag(ParseError):
    """Unknown tag character, or a dict key that is not ``s``-tagged."""

    code = "MALFORMED_TAG"


class MalformedSeparator(ParseError):
    """A ``:`` was required but another character was found."""

    code = "MALFORMED_SEPARATOR"


class ValueConversionError(ParseError):
    """A scalar payload does not convert to its tagged type."""

    code = "VALUE_CONVERSION_ERROR"


class DuplicateKeyError(ParseError):
    """A dict payload repeats a key."""

    code = "DUPLICATE_KEY"

    def __init__(self, key: str, *, position: int | None = None) -> None:
        super().__init__(f"Duplicate dict key {key!r}", position=position)
        self.key = key

    def detail(self) -> dict[str, Any]:
        return {**super().detail(), "key": self.key}


class UnexpectedEndOfInput(ParseError):
    """Input ran out before a required tag, separator, or terminator."""

    code = "UNEXPECTED_END_OF_INPUT"


class TrailingDataError(ParseError):
    """Characters remain after a complete top-level value."""

    code = "TRAILING_DATA"


class NestingTooDeepError(ParseError):
    """Compound values nest more levels than the parser allows."""

    code = "NESTING_TOO_DEEP"

    def __init__(self, limit: int, *, position: int | None = None) -> None:
        super().__init__(f"Nesting exceeds {limit} levels", position=position)
        self.limit = limit

    def detail(self) -> dict[str, Any]:
        return {**super().detail(), "limit": self.limit}
