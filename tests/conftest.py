"""Shared pytest fixtures for the typedecl test suite."""

from __future__ import annotations

import pytest
from click.testing import CliRunner


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def config_dir(tmp_path):
    """A directory holding a typedecl.toml with colors off."""
    (tmp_path / "typedecl.toml").write_text(
        "[tokenizer]\nmax_length = 40\n"
        "[output]\ncolor = false\nindent = 4\n"
    )
    return tmp_path
