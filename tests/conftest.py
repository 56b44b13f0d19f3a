"""Shared pytest fixtures and test helpers for datastruct tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from datastruct.config.settings import DataStructSettings
from datastruct.services.codec import CodecService


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run from an empty temp directory with no config env overrides.

    Keeps a ``datastruct.toml`` higher up the real filesystem (or a
    ``DATASTRUCT_*`` variable in the developer's shell) out of the test.
    """
    monkeypatch.delenv("DATASTRUCT_CONFIG", raising=False)
    monkeypatch.delenv("DATASTRUCT_OUTPUT__INDENT", raising=False)
    monkeypatch.delenv("DATASTRUCT_INPUT__STRIP_WHITESPACE", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def settings(tmp_path: Path, _isolated_cwd: None) -> DataStructSettings:
    """Default settings resolved from an empty directory."""
    return DataStructSettings.from_cli(start=tmp_path)


@pytest.fixture
def codec(settings: DataStructSettings) -> CodecService:
    """CodecService over default settings."""
    return CodecService(settings)
