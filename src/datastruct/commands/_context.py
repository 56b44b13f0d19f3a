"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides input reading and centralized result
emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from datastruct.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from datastruct.config.settings import DataStructSettings
    from datastruct.services.codec import CodecService
    from datastruct.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``.  The codec service is
    created lazily so ``--help`` and ``--version`` stay cheap.
    """

    def __init__(self, settings: DataStructSettings) -> None:
        self.settings = settings
        self._codec: CodecService | None = None

        from datastruct.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def codec(self) -> CodecService:
        """The codec service (created lazily on first access)."""
        if self._codec is None:
            from datastruct.services.codec import CodecService

            self._codec = CodecService(self.settings)
        return self._codec

    def read_input(self, text: str | None, file_path: str | None) -> str:
        """Resolve command input from TEXT, ``--file``, or stdin (``-``).

        Raises:
            click.UsageError: Neither or both sources were given.
            click.ClickException: The file cannot be read or decoded.
        """
        if text is not None and file_path is not None:
            raise click.UsageError("Pass either TEXT or --file, not both.")
        if file_path is not None:
            encoding = self.settings.input.encoding
            try:
                return Path(file_path).read_text(encoding=encoding)
            except (OSError, UnicodeDecodeError) as exc:
                msg = f"Cannot read {file_path}: {exc}"
                raise click.ClickException(msg) from exc
        if text is None:
            raise click.UsageError("Missing input: pass TEXT, '-' for stdin, or --file.")
        if text == "-":
            return click.get_text_stream("stdin").read()
        return text

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
