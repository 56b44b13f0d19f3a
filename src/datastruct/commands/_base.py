"""Custom Click base classes with --examples support.

Provides DsCommand, which accepts an ``examples`` parameter.
When ``--examples`` is passed, the command prints usage examples and exits.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, ParamSpec, TypeVar

import click


def _add_examples_option(cmd: click.Command, examples: str) -> None:
    """Attach an eager ``--examples`` flag to a Click command."""

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples.",
        )
    )


class DsCommand(click.Command):
    """Click Command subclass that supports an ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


P = ParamSpec("P")
R = TypeVar("R")


def input_options(func: Callable[P, R]) -> Callable[P, R]:
    """Apply the shared ``TEXT`` argument and ``--file`` option."""
    func = click.option(
        "-f",
        "--file",
        "file_path",
        type=click.Path(dir_okay=False, path_type=str),
        default=None,
        help="Read input from a file instead of TEXT.",
    )(func)
    func = click.argument("text", required=False)(func)
    return func
