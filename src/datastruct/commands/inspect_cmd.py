"""Command: parse tagged text and show its type, size, and structure."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from datastruct.commands._base import DsCommand, input_options

if TYPE_CHECKING:
    from datastruct.commands._context import AppContext


@click.command(
    "inspect",
    cls=DsCommand,
    examples="""\
  datastruct inspect 's:hello:'
  datastruct inspect 'l:n:1:t:true::'
  datastruct inspect --file value.txt
  echo 'd:s:a:n:1::' | datastruct inspect -""",
)
@input_options
@click.pass_obj
def inspect_cmd(app: AppContext, text: str | None, file_path: str | None) -> None:
    """Parse a tagged-text value and describe it."""
    app.emit(app.codec.inspect(app.read_input(text, file_path)))
