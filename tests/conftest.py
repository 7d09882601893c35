"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from drivefs.config import Settings
from drivefs.context import AppContext
from drivefs.filesystem import LocalFileSystem
from drivefs.remote import RemoteFileSystem
from drivefs.stores.memory import MemoryStore


@pytest.fixture
def temp_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Override home directory for testing."""
    monkeypatch.setattr(Path, "home", lambda: tmp_path)
    return tmp_path


# ============================================================================
# Backend Fixtures
# ============================================================================


@pytest.fixture
def memory_store() -> MemoryStore:
    """Create an empty in-memory store with a small page size.

    A page size of 2 forces multi-page listings in most scenarios.
    """
    return MemoryStore(page_size=2)


@pytest.fixture
def remote_fs(memory_store: MemoryStore) -> RemoteFileSystem:
    """Create a remote filesystem over the in-memory store."""
    return RemoteFileSystem(memory_store)


@pytest.fixture
def local_fs(tmp_path: Path) -> LocalFileSystem:
    """Create a local filesystem rooted at a temporary directory."""
    root = tmp_path / "root"
    root.mkdir()
    return LocalFileSystem(base_dir=root)


@pytest.fixture(params=["local", "remote"])
def any_fs(request: pytest.FixtureRequest, tmp_path: Path) -> LocalFileSystem | RemoteFileSystem:
    """Run a test against both backends.

    Local paths are given relative to a temporary base directory; remote
    paths are interpreted from the store root. Tests use relative paths so
    the same strings work for both.
    """
    if request.param == "local":
        root = tmp_path / "root"
        root.mkdir()
        return LocalFileSystem(base_dir=root)
    return RemoteFileSystem(MemoryStore(page_size=2))


# ============================================================================
# App Context Fixtures
# ============================================================================


@pytest.fixture
def memory_context(remote_fs: RemoteFileSystem) -> AppContext:
    """Create an AppContext backed by the in-memory store."""
    return AppContext(settings=Settings(backend="memory"), filesystem=remote_fs)


@pytest.fixture
def sample_text() -> str:
    """Sample multi-line text content with non-ASCII characters."""
    return "first line\nsecond line\nÜnïcödé ✓\n"
