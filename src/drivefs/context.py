"""Application context for dependency injection.

This module separates object creation from object use, enabling testability
and reducing coupling in CLI commands.

The filesystem is typed using the FileSystem Protocol rather than a concrete
backend, so commands never know whether they talk to the local disk or to a
remote store.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from drivefs.config import Backend, Settings, load_settings
from drivefs.protocols import FileSystem

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Container for application dependencies.

    Provides a single injection point for the services used by CLI commands.
    For tests, construct AppContext directly with test doubles.
    """

    settings: Settings
    filesystem: FileSystem


def create_filesystem(settings: Settings) -> FileSystem:
    """Build the filesystem backend named in settings.

    Args:
        settings: Loaded settings.

    Returns:
        A FileSystem implementation.

    Raises:
        ValueError: If the drive backend is selected without credentials.
    """
    if settings.backend == "local":
        from drivefs.filesystem import LocalFileSystem

        return LocalFileSystem(base_dir=settings.local_root)

    from drivefs.remote import RemoteFileSystem

    if settings.backend == "memory":
        from drivefs.stores.memory import MemoryStore

        store = MemoryStore(root_id=settings.root_folder_id, page_size=settings.page_size)
        return RemoteFileSystem.create(store, settings)

    if settings.credentials_path is None:
        raise ValueError(
            "The drive backend requires credentials_path (or DRIVEFS_CREDENTIALS_PATH)."
        )

    from drivefs.stores.google_drive import GoogleDriveStore

    store = GoogleDriveStore.from_service_account_file(
        settings.credentials_path.expanduser(),
        use_all_drives_search=settings.use_all_drives_search,
    )
    return RemoteFileSystem.create(store, settings)


def create_context(
    config_path: Path | None = None,
    backend: Backend | None = None,
) -> AppContext:
    """Factory for application dependencies.

    Use this in production code.

    Args:
        config_path: Override settings file location.
        backend: Override the backend named in settings.

    Returns:
        Configured AppContext.
    """
    settings = load_settings(config_path)
    if backend is not None:
        settings = settings.model_copy(update={"backend": backend})

    logger.debug("Using %s backend", settings.backend)
    return AppContext(settings=settings, filesystem=create_filesystem(settings))
