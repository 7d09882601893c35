"""Cache of canonical directory paths to remote folder identifiers."""

from __future__ import annotations

import logging
import threading

from drivefs import paths

logger = logging.getLogger(__name__)

__all__ = ["DirectoryIndex"]


class DirectoryIndex:
    """Thread-safe mapping from directory path to folder id.

    An entry is only meaningful while the folder is still reachable at that
    path, so structural changes must invalidate the affected entries. The
    root entry is seeded at construction and survives every invalidation.
    """

    def __init__(self, root_id: str) -> None:
        """Initialize the index.

        Args:
            root_id: Identifier of the folder mapped to "/".
        """
        self.root_id = root_id
        self._lock = threading.Lock()
        self._entries: dict[str, str] = {paths.ROOT: root_id}

    def get(self, path: str) -> str | None:
        """Return the cached folder id for a path, or None."""
        key = paths.normalize(path)
        with self._lock:
            return self._entries.get(key)

    def set(self, path: str, folder_id: str) -> None:
        """Record the folder id for a path."""
        key = paths.normalize(path)
        with self._lock:
            self._entries[key] = folder_id

    def invalidate_subtree(self, path: str) -> None:
        """Drop the entry for ``path`` and every entry beneath it."""
        root = paths.normalize(path)
        prefix = root + "/"
        with self._lock:
            stale = [key for key in self._entries if key == root or key.startswith(prefix)]
            for key in stale:
                del self._entries[key]
            self._entries.setdefault(paths.ROOT, self.root_id)
        logger.debug("Invalidated %d cached directories under '%s'", len(stale), root)

    def clear(self) -> None:
        """Drop every entry except the root."""
        with self._lock:
            self._entries.clear()
            self._entries[paths.ROOT] = self.root_id
        logger.debug("Cleared directory cache")

    def snapshot(self) -> dict[str, str]:
        """Return a copy of the current entries."""
        with self._lock:
            return dict(self._entries)

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, str):
            return False
        return self.get(path) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
