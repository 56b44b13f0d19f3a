"""ByteBuffer — an owned, fixed-length byte sequence.

Constructible from raw bytes, from a file read fully into memory, or from
standard-alphabet padded base64 text.
"""

from __future__ import annotations

import base64
import binascii
import logging
from pathlib import Path

from datastruct.domain.errors import DecodeError, IoError

logger = logging.getLogger(__name__)


class ByteBuffer:
    """Immutable wrapper around a byte sequence.

    The buffer copies its input, so later changes to a ``bytearray`` passed
    in never leak into the buffer.
    """

    __slots__ = ("_data",)

    def __init__(self, data: bytes | bytearray | memoryview = b"") -> None:
        self._data = bytes(data)

    @classmethod
    def from_file(cls, path: str | Path) -> ByteBuffer:
        """Read the whole file at *path* into a new buffer.

        Raises:
            IoError: The path is missing, unreadable, or not a regular file.
        """
        p = Path(path)
        if p.exists() and not p.is_file():
            msg = f"Not a regular file: {p}"
            raise IoError(msg, path=str(p))
        try:
            data = p.read_bytes()
        except OSError as exc:
            msg = f"Cannot read {p}: {exc.strerror or exc}"
            raise IoError(msg, path=str(p)) from exc
        logger.debug("Read %d bytes from %s", len(data), p)
        return cls(data)

    @classmethod
    def from_b64(cls, text: str) -> ByteBuffer:
        """Decode standard base64 *text* into a new buffer.

        Raises:
            DecodeError: Invalid alphabet, bad padding, or non-ASCII input.
        """
        try:
            data = base64.b64decode(text, validate=True)
        except (binascii.Error, ValueError) as exc:
            msg = f"Failed to decode base64 string: {exc}"
            raise DecodeError(msg) from exc
        return cls(data)

    def to_b64(self) -> str:
        """Return the standard padded base64 encoding of the buffer."""
        return base64.b64encode(self._data).decode("ascii")

    def size(self) -> int:
        """Length of the buffer in bytes."""
        return len(self._data)

    def read(self) -> bytes:
        """Return the buffer contents."""
        return self._data

    def __len__(self) -> int:
        return len(self._data)

    def __bytes__(self) -> bytes:
        return self._data

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ByteBuffer):
            return NotImplemented
        return self._data == other._data

    def __hash__(self) -> int:
        return hash(self._data)

    def __repr__(self) -> str:
        return f"ByteBuffer({self._data!r})"

    def __str__(self) -> str:
        return f"binary!({self.to_b64()})"
