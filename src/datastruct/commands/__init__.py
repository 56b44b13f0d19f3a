"""Subcommand modules for datastruct.

Provides register_commands() which uses deferred imports to keep
``datastruct --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from datastruct.commands.binary import decode_binary, encode_file
    from datastruct.commands.convert import from_json, to_json
    from datastruct.commands.inspect_cmd import inspect_cmd

    cli.add_command(inspect_cmd)
    cli.add_command(to_json)
    cli.add_command(from_json)
    cli.add_command(encode_file)
    cli.add_command(decode_binary)
