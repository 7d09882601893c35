"""Blocking facade and text helpers over the async FileSystem API."""

from __future__ import annotations

import asyncio
from collections.abc import Coroutine
from typing import Any, TypeVar

from drivefs.protocols import FileSystem

__all__ = ["SyncFileSystem", "create_file_text", "read_file_text"]

T = TypeVar("T")

ENCODING = "utf-8"


async def create_file_text(fs: FileSystem, path: str, content: str) -> None:
    """Create or replace a file with UTF-8 encoded text."""
    await fs.create_file(path, content.encode(ENCODING))


async def read_file_text(fs: FileSystem, path: str) -> str:
    """Read a file and decode it as UTF-8."""
    data = await fs.read_file(path)
    return data.decode(ENCODING)


class SyncFileSystem:
    """Runs each FileSystem coroutine to completion on a fresh event loop.

    Intended for scripts and the CLI. Must not be used from inside a running
    event loop; await the wrapped filesystem directly there.
    """

    def __init__(self, fs: FileSystem) -> None:
        """Initialize the facade.

        Args:
            fs: Async filesystem to wrap.
        """
        self.fs = fs

    def _run(self, coro: Coroutine[Any, Any, T]) -> T:
        return asyncio.run(coro)

    def get_full_path(self, path: str) -> str:
        return self.fs.get_full_path(path)

    def combine(self, *parts: str) -> str:
        return self.fs.combine(*parts)

    def exists(self, path: str) -> bool:
        return self._run(self.fs.exists(path))

    def delete(self, path: str) -> None:
        self._run(self.fs.delete(path))

    def copy(self, src: str, dst: str) -> None:
        self._run(self.fs.copy(src, dst))

    def move(self, src: str, dst: str) -> None:
        self._run(self.fs.move(src, dst))

    def rename(self, src: str, new_name: str) -> None:
        self._run(self.fs.rename(src, new_name))

    def create_directory(self, path: str) -> None:
        self._run(self.fs.create_directory(path))

    def copy_all_files(self, src: str, dst: str) -> None:
        self._run(self.fs.copy_all_files(src, dst))

    def create_file(self, path: str, content: bytes) -> None:
        self._run(self.fs.create_file(path, content))

    def read_file(self, path: str) -> bytes:
        return self._run(self.fs.read_file(path))

    def create_file_text(self, path: str, content: str) -> None:
        self._run(create_file_text(self.fs, path, content))

    def read_file_text(self, path: str) -> str:
        return self._run(read_file_text(self.fs, path))
