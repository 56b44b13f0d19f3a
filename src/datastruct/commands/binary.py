"""Commands: move raw files in and out of ``b``-tagged values."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from datastruct.commands._base import DsCommand, input_options

if TYPE_CHECKING:
    from datastruct.commands._context import AppContext


@click.command(
    "encode-file",
    cls=DsCommand,
    examples="""\
  datastruct encode-file image.png
  datastruct --json encode-file archive.tar""",
)
@click.argument("path", type=click.Path(path_type=Path))
@click.pass_obj
def encode_file(app: AppContext, path: Path) -> None:
    """Read PATH and print it as a Binary tagged-text value."""
    app.emit(app.codec.encode_file(path))


@click.command(
    "decode-binary",
    cls=DsCommand,
    examples="""\
  datastruct decode-binary 'b:SGVsbG8gV29ybGQ=:' --output hello.txt
  datastruct decode-binary --file image.tagged -o image.png""",
)
@input_options
@click.option(
    "-o",
    "--output",
    "output_path",
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="File to write the decoded bytes to.",
)
@click.pass_obj
def decode_binary(
    app: AppContext,
    text: str | None,
    file_path: str | None,
    output_path: Path,
) -> None:
    """Write the bytes of a Binary tagged-text value to a file."""
    app.emit(app.codec.decode_binary(app.read_input(text, file_path), output_path))
