"""Shared fixtures for JustDad tests."""

import tempfile
from pathlib import Path

import pytest

from justdad.db.store import JournalStore


@pytest.fixture
def temp_store():
    """Create a temporary journal store for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield JournalStore(Path(tmpdir) / "test.db")
