"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, datastruct.toml only contains
overrides. An empty or missing file is valid.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- datastruct.toml sections ---


class OutputConfig(BaseModel):
    """[output] section — JSON rendering of values."""

    model_config = {"frozen": True}

    indent: int | None = Field(default=None, ge=0)
    ensure_ascii: bool = False


class InputConfig(BaseModel):
    """[input] section."""

    model_config = {"frozen": True}

    encoding: str = "utf-8"
    strip_whitespace: bool = True

