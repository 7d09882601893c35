"""Local filesystem backend.

This module provides the FileSystem implementation for the local disk. The
LocalFileSystem wraps standard library Path, os and shutil operations and
runs them in worker threads so that callers can await them like the remote
backend.
"""

from __future__ import annotations

import asyncio
import logging
import os
import shutil
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from drivefs import paths
from drivefs.cancellation import CancelToken, check_cancelled
from drivefs.errors import (
    ConflictError,
    FileSystemError,
    InvalidArgumentError,
    InvalidOperationError,
    NotFoundError,
)

logger = logging.getLogger(__name__)

__all__ = ["LocalFileSystem"]


@contextmanager
def _translate_os_errors(path: Path) -> Iterator[None]:
    """Re-raise OSError subclasses as the package's error kinds."""
    try:
        yield
    except FileSystemError:
        raise
    except FileNotFoundError as e:
        raise NotFoundError(f"'{path}' was not found: {e}") from e
    except (FileExistsError, IsADirectoryError, NotADirectoryError) as e:
        raise ConflictError(f"'{path}' conflicts with an existing entry: {e}") from e
    except OSError as e:
        raise FileSystemError(f"Filesystem operation on '{path}' failed: {e}") from e


class LocalFileSystem:
    """Production local-disk implementation.

    Wraps standard library Path and shutil operations.
    Satisfies the FileSystem protocol structurally.
    """

    def __init__(self, base_dir: Path | None = None) -> None:
        """Initialize the filesystem.

        Args:
            base_dir: Directory relative paths are resolved against, and which
                cannot be deleted. Defaults to the working directory.
        """
        self.base_dir = base_dir

    def get_full_path(self, path: str) -> str:
        if path is None:
            raise InvalidArgumentError("Path cannot be None.")
        if self.base_dir is not None:
            path = os.path.join(self.base_dir, path)
        return os.path.abspath(path)

    def combine(self, *parts: str) -> str:
        return os.path.join(*parts)

    async def exists(self, path: str, cancel_token: CancelToken | None = None) -> bool:
        check_cancelled(cancel_token)
        target = Path(self.get_full_path(path))
        return await asyncio.to_thread(target.exists)

    async def delete(self, path: str, cancel_token: CancelToken | None = None) -> None:
        check_cancelled(cancel_token)
        target = Path(self.get_full_path(path))
        if self._is_protected(target):
            raise InvalidOperationError(f"Cannot delete root directory '{target}'.")
        await asyncio.to_thread(self._delete_sync, target)

    async def copy(self, src: str, dst: str, cancel_token: CancelToken | None = None) -> None:
        check_cancelled(cancel_token)
        source = Path(self.get_full_path(src))
        target = Path(self.get_full_path(dst))
        await asyncio.to_thread(
            self._transfer_sync, source, target, paths.is_directory_hint(dst), False, cancel_token
        )

    async def move(self, src: str, dst: str, cancel_token: CancelToken | None = None) -> None:
        check_cancelled(cancel_token)
        source = Path(self.get_full_path(src))
        target = Path(self.get_full_path(dst))
        await asyncio.to_thread(
            self._transfer_sync, source, target, paths.is_directory_hint(dst), True, cancel_token
        )

    async def rename(
        self, src: str, new_name: str, cancel_token: CancelToken | None = None
    ) -> None:
        check_cancelled(cancel_token)
        if new_name is None or not new_name.strip():
            raise InvalidArgumentError("New name cannot be empty.")
        if any(sep in new_name for sep in paths.SEPARATORS):
            raise InvalidArgumentError("New name cannot contain path separators.")

        source = Path(self.get_full_path(src))
        await asyncio.to_thread(self._rename_sync, source, new_name)

    async def create_directory(self, path: str, cancel_token: CancelToken | None = None) -> None:
        check_cancelled(cancel_token)
        target = Path(self.get_full_path(path))

        def _mkdir() -> None:
            with _translate_os_errors(target):
                target.mkdir(parents=True, exist_ok=True)

        await asyncio.to_thread(_mkdir)

    async def copy_all_files(
        self, src: str, dst: str, cancel_token: CancelToken | None = None
    ) -> None:
        check_cancelled(cancel_token)
        source = Path(self.get_full_path(src))
        target = Path(self.get_full_path(dst))
        await asyncio.to_thread(self._copy_all_files_sync, source, target, cancel_token)

    async def create_file(
        self, path: str, content: bytes, cancel_token: CancelToken | None = None
    ) -> None:
        check_cancelled(cancel_token)
        if content is None:
            raise InvalidArgumentError("Content cannot be None.")
        target = Path(self.get_full_path(path))

        def _write() -> None:
            with _translate_os_errors(target):
                if target.is_dir():
                    raise ConflictError(
                        f"Cannot create file '{target}' because a directory already exists at this path."
                    )
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_bytes(bytes(content))

        await asyncio.to_thread(_write)

    async def read_file(self, path: str, cancel_token: CancelToken | None = None) -> bytes:
        check_cancelled(cancel_token)
        target = Path(self.get_full_path(path))

        def _read() -> bytes:
            if not target.is_file():
                raise NotFoundError(f"File '{target}' was not found.")
            with _translate_os_errors(target):
                return target.read_bytes()

        return await asyncio.to_thread(_read)

    # ------------------------------------------------------------------
    # Blocking helpers, run in worker threads
    # ------------------------------------------------------------------

    def _is_protected(self, target: Path) -> bool:
        if target.parent == target:
            return True
        return self.base_dir is not None and target == Path(os.path.abspath(self.base_dir))

    def _delete_sync(self, target: Path) -> None:
        with _translate_os_errors(target):
            if target.is_file():
                target.unlink()
            elif target.is_dir():
                shutil.rmtree(target)
            else:
                return
        logger.debug("Deleted '%s'", target)

    def _transfer_sync(
        self,
        source: Path,
        target: Path,
        directory_hint: bool,
        remove_source: bool,
        cancel_token: CancelToken | None,
    ) -> None:
        with _translate_os_errors(source):
            if source.is_file():
                if target.is_dir() or directory_hint:
                    target.mkdir(parents=True, exist_ok=True)
                    target = target / source.name
                self._place_file(source, target, remove_source)
            elif source.is_dir():
                verb = "move" if remove_source else "copy"
                if remove_source and self._is_protected(source):
                    raise InvalidOperationError(f"Cannot move root directory '{source}'.")
                if target == source or source in target.parents:
                    raise InvalidOperationError(
                        f"Cannot {verb} directory '{source}' into itself ('{target}')."
                    )
                if target in source.parents:
                    relative = source.relative_to(target)
                    if (source / relative).is_dir():
                        raise InvalidOperationError(
                            f"Cannot {verb} directory '{source}' into '{target}': "
                            f"its subfolder '{relative.as_posix()}' would be written onto the source."
                        )
                self._transfer_directory(source, target, remove_source, cancel_token)

    def _transfer_directory(
        self,
        source: Path,
        target: Path,
        remove_source: bool,
        cancel_token: CancelToken | None,
    ) -> None:
        if target.is_file():
            raise ConflictError(f"Cannot copy directory to '{target}' because destination is a file.")
        target.mkdir(parents=True, exist_ok=True)

        for entry in sorted(source.iterdir()):
            check_cancelled(cancel_token)
            destination = target / entry.name
            if entry.is_dir():
                self._transfer_directory(entry, destination, remove_source, cancel_token)
            else:
                self._place_file(entry, destination, remove_source)

        if remove_source:
            source.rmdir()

    def _place_file(self, source: Path, target: Path, remove_source: bool) -> None:
        """Copy or move one file, replacing an existing file at the target."""
        if target.is_dir():
            raise ConflictError(f"Cannot overwrite destination '{target}' because it is a directory.")
        if target == source:
            return
        target.parent.mkdir(parents=True, exist_ok=True)
        if remove_source:
            if target.exists():
                target.unlink()
            shutil.move(str(source), str(target))
        else:
            shutil.copyfile(source, target)
        logger.debug("%s '%s' to '%s'", "Moved" if remove_source else "Copied", source, target)

    def _rename_sync(self, source: Path, new_name: str) -> None:
        if not source.exists():
            return
        if self._is_protected(source):
            raise InvalidOperationError(f"Cannot rename root directory '{source}'.")

        target = source.with_name(new_name)
        if target == source:
            return
        if target.exists():
            raise ConflictError(f"Item '{new_name}' already exists in destination directory.")
        with _translate_os_errors(source):
            source.rename(target)

    def _copy_all_files_sync(
        self, source: Path, target: Path, cancel_token: CancelToken | None
    ) -> None:
        if not source.is_dir():
            return

        with _translate_os_errors(source):
            for file_path in sorted(source.rglob("*")):
                check_cancelled(cancel_token)
                if not file_path.is_file():
                    continue
                self._place_file(file_path, target / file_path.relative_to(source), False)
