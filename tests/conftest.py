# ABOUTME: Shared pytest fixtures for Readdit tests.
# ABOUTME: Provides a URL-pattern fake HTTP client and a preferences file location.

from pathlib import Path

import pytest

from tests.fixtures.fakes import FakeHttpClient


@pytest.fixture
def fake_client() -> FakeHttpClient:
    """An HTTP client with no canned responses; every request returns {}."""
    return FakeHttpClient()


@pytest.fixture
def prefs_path(tmp_path: Path) -> Path:
    """A preferences file path inside the test's temporary directory."""
    return tmp_path / "readdit" / "prefs.json"
