"""CodecService — tagged-text, JSON, and binary-file operations.

Every method takes raw input text (or a path), runs the domain codec, and
returns a ServiceResult. Domain errors become ``ok=False`` results whose
error code is the exception's ``code`` (``MALFORMED_TAG``, ``IO_ERROR``, ...).
"""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Any

from datastruct.domain.binary import ByteBuffer
from datastruct.domain.errors import DataStructError, IoError
from datastruct.domain.projection import from_json, to_json
from datastruct.domain.tagged import parse, serialize
from datastruct.domain.values import Binary, Dict, DValue, List, Tuple
from datastruct.services.base import BaseService
from datastruct.services.result import ServiceError, ServiceResult

logger = logging.getLogger(__name__)


def outline(value: DValue, *, key: str | None = None) -> dict[str, Any]:
    """Describe *value* as a nested, JSON-safe tree for rendering.

    Each node has ``type`` and ``size``; scalars add ``value`` (display
    text), compounds add ``children``. Dict children carry their ``key``.
    """
    node: dict[str, Any] = {"type": value.datatype(), "size": value.size()}
    if key is not None:
        node["key"] = key
    match value:
        case List(items=items) | Tuple(items=items):
            node["children"] = [outline(item) for item in items]
        case Dict(entries=entries):
            node["children"] = [outline(item, key=k) for k, item in entries.items()]
        case Binary(value=buf):
            node["value"] = buf.to_b64()
        case _:
            node["value"] = str(value)
    return node


class CodecService(BaseService):
    """Parse, convert, and inspect DValues on behalf of the CLI."""

    def _prepare(self, text: str) -> str:
        if self._settings.input.strip_whitespace:
            return text.strip()
        return text

    def _render_json(self, value: DValue) -> str:
        out = self._settings.output
        return to_json(value, indent=out.indent, ensure_ascii=out.ensure_ascii)

    def inspect(self, text: str) -> ServiceResult:
        """Parse tagged text and report type, size, weight, and structure."""
        op = "inspect"
        try:
            value = parse(self._prepare(text))
        except DataStructError as exc:
            return self._failure(op, exc)

        weight = value.weight()
        warnings: list[str] = []
        data: dict[str, Any] = {
            "datatype": value.datatype(),
            "size": value.size(),
            "weight": None if math.isinf(weight) or math.isnan(weight) else weight,
            "display": str(value),
            "tagged": serialize(value),
            "tree": outline(value),
        }
        try:
            data["json"] = self._render_json(value)
        except DataStructError as exc:
            warnings.append(f"No JSON projection: {exc}")
        logger.debug("Inspected %s (size=%d)", data["datatype"], data["size"])
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings)

    def to_json(self, text: str) -> ServiceResult:
        """Convert tagged text to JSON text."""
        op = "to_json"
        try:
            value = parse(self._prepare(text))
            rendered = self._render_json(value)
        except DataStructError as exc:
            return self._failure(op, exc)
        return ServiceResult(
            ok=True,
            op=op,
            data={"datatype": value.datatype(), "output": rendered},
        )

    def from_json(self, text: str) -> ServiceResult:
        """Convert JSON text to tagged text."""
        op = "from_json"
        try:
            value = from_json(text)
        except DataStructError as exc:
            return self._failure(op, exc)
        return ServiceResult(
            ok=True,
            op=op,
            data={"datatype": value.datatype(), "output": serialize(value)},
        )

    def encode_file(self, path: Path) -> ServiceResult:
        """Read a file into a Binary value and emit its tagged text."""
        op = "encode_file"
        try:
            buf = ByteBuffer.from_file(path)
        except DataStructError as exc:
            return self._failure(op, exc)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "path": str(path),
                "size": buf.size(),
                "output": serialize(Binary(buf)),
            },
        )

    def decode_binary(self, text: str, output: Path) -> ServiceResult:
        """Parse a ``b``-tagged value and write its bytes to *output*."""
        op = "decode_binary"
        try:
            value = parse(self._prepare(text))
        except DataStructError as exc:
            return self._failure(op, exc)

        buf = value.as_binary()
        if buf is None:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code="NOT_BINARY",
                    message=f"Expected a Binary value, got {value.datatype()}",
                    detail={"datatype": value.datatype()},
                ),
            )

        try:
            output.write_bytes(buf.read())
        except OSError as exc:
            err = IoError(f"Cannot write {output}: {exc.strerror or exc}", path=str(output))
            return self._failure(op, err)
        logger.debug("Wrote %d bytes to %s", buf.size(), output)
        return ServiceResult(
            ok=True,
            op=op,
            data={"path": str(output), "size": buf.size()},
        )
