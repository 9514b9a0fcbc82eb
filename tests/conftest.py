# tests/conftest.py

"""Shared pytest fixtures for all marketpush tests."""

from collections.abc import Generator
from pathlib import Path
from unittest.mock import patch

import pytest

from marketpush.config.settings import Settings


@pytest.fixture(autouse=True)
def isolated_results_dir(tmp_path: Path) -> Generator[Path, None, None]:
    """Redirect export reports to a per-test temporary directory."""
    results_dir = tmp_path / "results"
    with patch.object(Settings, "RESULTS_DIR", results_dir):
        yield results_dir
