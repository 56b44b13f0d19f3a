"""Commands: convert between tagged text and JSON."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from datastruct.commands._base import DsCommand, input_options

if TYPE_CHECKING:
    from datastruct.commands._context import AppContext


@click.command(
    "to-json",
    cls=DsCommand,
    examples="""\
  datastruct to-json 'd:s:a:n:1:s:b:l:t:true:::'
  datastruct to-json --file value.txt > value.json""",
)
@input_options
@click.pass_obj
def to_json(app: AppContext, text: str | None, file_path: str | None) -> None:
    """Project a tagged-text value to JSON."""
    app.emit(app.codec.to_json(app.read_input(text, file_path)))


@click.command(
    "from-json",
    cls=DsCommand,
    examples="""\
  datastruct from-json '{"a": 1, "b": [true]}'
  datastruct from-json --file value.json""",
)
@input_options
@click.pass_obj
def from_json(app: AppContext, text: str | None, file_path: str | None) -> None:
    """Convert JSON to tagged text (arrays become lists)."""
    app.emit(app.codec.from_json(app.read_input(text, file_path)))
