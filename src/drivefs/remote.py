"""Path-based filesystem over a remote node-graph store.

The store only offers parent-scoped name lookup and node-level mutations, so
every path operation here is expressed as a walk through the graph followed by
node edits. Folder identifiers found along the way are cached per path in a
DirectoryIndex, which is invalidated whenever an edit can change what a cached
path refers to.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from drivefs import paths
from drivefs.cancellation import CancelToken, check_cancelled
from drivefs.directory_index import DirectoryIndex
from drivefs.errors import (
    ConflictError,
    InvalidArgumentError,
    InvalidOperationError,
    NotFoundError,
)
from drivefs.protocols import RemoteStore
from drivefs.resolver import NodeResolver
from drivefs.types import FileDestination, RemoteNode

if TYPE_CHECKING:
    from drivefs.config import Settings

logger = logging.getLogger(__name__)

__all__ = ["DEFAULT_ROOT_ID", "RemoteFileSystem"]

DEFAULT_ROOT_ID = "root"


class RemoteFileSystem:
    """FileSystem implementation backed by a RemoteStore.

    Satisfies the FileSystem protocol structurally.
    """

    def __init__(
        self,
        store: RemoteStore,
        root_id: str | None = DEFAULT_ROOT_ID,
        index: DirectoryIndex | None = None,
    ) -> None:
        """Initialize the filesystem.

        Args:
            store: Remote store holding the tree.
            root_id: Folder that acts as "/". Blank values fall back to the
                store's top-level root.
            index: Directory index to use. A fresh one is created if omitted.

        Note:
            Prefer the factory method `create()` when building from settings.
        """
        self.store = store
        self.root_id = root_id if root_id and root_id.strip() else DEFAULT_ROOT_ID
        self.index = index or DirectoryIndex(self.root_id)
        self.resolver = NodeResolver(store, self.root_id, self.index)

    @classmethod
    def create(cls, store: RemoteStore, settings: Settings) -> RemoteFileSystem:
        """Create a filesystem rooted at the folder named in settings.

        Args:
            store: Remote store holding the tree.
            settings: Loaded settings.

        Returns:
            Configured RemoteFileSystem.
        """
        return cls(store, root_id=settings.root_folder_id)

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    def get_full_path(self, path: str) -> str:
        return paths.normalize(path, absolute=True)

    def combine(self, *parts: str) -> str:
        return paths.combine(*parts)

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    async def exists(self, path: str, cancel_token: CancelToken | None = None) -> bool:
        check_cancelled(cancel_token)
        node = await self.resolver.resolve(self.get_full_path(path), cancel_token)
        return node is not None

    async def delete(self, path: str, cancel_token: CancelToken | None = None) -> None:
        check_cancelled(cancel_token)
        full_path = self.get_full_path(path)
        node = await self.resolver.resolve(full_path, cancel_token)
        if node is None:
            return
        if node.id == self.root_id:
            raise InvalidOperationError("Cannot delete the root folder.")

        await self.store.delete_node(node.id)
        logger.debug("Deleted '%s' (%s)", full_path, node.id)
        if node.is_folder:
            self.index.invalidate_subtree(full_path)

    async def copy(self, src: str, dst: str, cancel_token: CancelToken | None = None) -> None:
        check_cancelled(cancel_token)
        src_path = self.get_full_path(src)
        source = await self.resolver.resolve(src_path, cancel_token)
        if source is None:
            return

        if source.is_folder:
            await self._reject_overlapping_target(src_path, dst, "copy", cancel_token)
            folder_id = await self._resolve_directory_destination(dst, cancel_token)
            await self._copy_directory_contents(source.id, folder_id, cancel_token)
            return

        destination = await self._resolve_file_destination(source.name, dst, cancel_token)
        existing = destination.existing
        if existing is not None and existing.id == source.id:
            return
        if existing is not None:
            await self._remove_file_target(existing, f"Cannot copy file '{source.name}' to '{dst}'")

        await self._copy_file_by_id(
            source.id, destination.name, destination.parent_id, cancel_token, replace=False
        )

    async def move(self, src: str, dst: str, cancel_token: CancelToken | None = None) -> None:
        check_cancelled(cancel_token)
        src_path = self.get_full_path(src)
        source = await self.resolver.resolve(src_path, cancel_token)
        if source is None:
            return

        if source.is_folder:
            if source.id == self.root_id:
                raise InvalidOperationError("Cannot move the root folder.")
            await self._reject_overlapping_target(src_path, dst, "move", cancel_token)
            folder_id = await self._resolve_directory_destination(dst, cancel_token)
            await self._copy_directory_contents(source.id, folder_id, cancel_token)
            await self.store.delete_node(source.id)
            self.index.clear()
            logger.debug("Moved folder '%s' to '%s'", src_path, dst)
            return

        destination = await self._resolve_file_destination(source.name, dst, cancel_token)
        existing = destination.existing
        if existing is not None:
            if existing.id == source.id:
                return
            await self._remove_file_target(existing, f"Cannot move file '{source.name}' to '{dst}'")

        await self.store.update_node(
            source.id,
            name=destination.name,
            add_parent=destination.parent_id,
            remove_parents=source.parents,
        )
        logger.debug("Moved file '%s' to '%s'", src_path, dst)

    async def rename(
        self, src: str, new_name: str, cancel_token: CancelToken | None = None
    ) -> None:
        check_cancelled(cancel_token)
        if new_name is None or not new_name.strip():
            raise InvalidArgumentError("New name cannot be empty.")
        if any(sep in new_name for sep in paths.SEPARATORS):
            raise InvalidArgumentError("New name cannot contain path separators.")

        src_path = self.get_full_path(src)
        source = await self.resolver.resolve(src_path, cancel_token)
        if source is None:
            return
        if source.id == self.root_id:
            raise InvalidOperationError("Cannot rename the root folder.")

        parent_id = source.parent_id or self.root_id
        sibling = await self.resolver.find_child(parent_id, new_name, cancel_token)
        if sibling is not None and sibling.id != source.id:
            raise ConflictError(f"Item '{new_name}' already exists in destination directory.")

        await self.store.update_node(source.id, name=new_name)
        logger.debug("Renamed '%s' to '%s'", src_path, new_name)
        if source.is_folder:
            self.index.clear()

    async def create_directory(self, path: str, cancel_token: CancelToken | None = None) -> None:
        check_cancelled(cancel_token)
        await self.resolver.ensure_directory(self.get_full_path(path), cancel_token)

    async def copy_all_files(
        self, src: str, dst: str, cancel_token: CancelToken | None = None
    ) -> None:
        check_cancelled(cancel_token)
        source = await self.resolver.resolve(self.get_full_path(src), cancel_token)
        if source is None or not source.is_folder:
            return

        await self._copy_all_files_recursive(source.id, self.get_full_path(dst), "", cancel_token)

    async def create_file(
        self, path: str, content: bytes, cancel_token: CancelToken | None = None
    ) -> None:
        check_cancelled(cancel_token)
        if content is None:
            raise InvalidArgumentError("Content cannot be None.")

        full_path = self.get_full_path(path)
        name = paths.file_name(full_path)
        parent_id = await self.resolver.ensure_directory(paths.parent_path(full_path), cancel_token)

        existing = await self.resolver.find_child(parent_id, name, cancel_token)
        if existing is not None:
            await self._remove_file_target(existing, f"Cannot create file '{full_path}'")

        node = await self.store.create_file(parent_id, name, bytes(content))
        logger.debug("Uploaded '%s' (%s, %d bytes)", full_path, node.id, len(content))

    async def read_file(self, path: str, cancel_token: CancelToken | None = None) -> bytes:
        check_cancelled(cancel_token)
        full_path = self.get_full_path(path)
        node = await self.resolver.resolve(full_path, cancel_token)
        if node is None or node.is_folder:
            raise NotFoundError(f"File '{full_path}' was not found.")

        return await self.store.download_content(node.id)

    # ------------------------------------------------------------------
    # Tree walks
    # ------------------------------------------------------------------

    async def _copy_all_files_recursive(
        self,
        source_folder_id: str,
        destination_root: str,
        relative_path: str,
        cancel_token: CancelToken | None,
    ) -> None:
        """Copy files under a folder, creating destination folders lazily."""
        children = await self.resolver.list_children(source_folder_id, cancel_token)
        for child in children:
            check_cancelled(cancel_token)

            if child.is_folder:
                nested = paths.combine(relative_path, child.name) if relative_path else child.name
                await self._copy_all_files_recursive(
                    child.id, destination_root, nested, cancel_token
                )
                continue

            target_dir = (
                paths.combine(destination_root, relative_path) if relative_path else destination_root
            )
            parent_id = await self.resolver.ensure_directory(target_dir, cancel_token)
            await self._copy_file_by_id(child.id, child.name, parent_id, cancel_token)

    async def _copy_directory_contents(
        self,
        source_folder_id: str,
        destination_folder_id: str,
        cancel_token: CancelToken | None,
    ) -> None:
        """Mirror the children of one folder into another, recursively."""
        children = await self.resolver.list_children(source_folder_id, cancel_token)
        for child in children:
            check_cancelled(cancel_token)

            if not child.is_folder:
                await self._copy_file_by_id(child.id, child.name, destination_folder_id, cancel_token)
                continue

            target = await self.resolver.find_child(destination_folder_id, child.name, cancel_token)
            if target is None:
                target = await self.store.create_folder(destination_folder_id, child.name)
            elif not target.is_folder:
                raise ConflictError(
                    f"Cannot copy directory '{child.name}' because destination "
                    "contains a file with the same name."
                )
            await self._copy_directory_contents(child.id, target.id, cancel_token)

    async def _copy_file_by_id(
        self,
        source_id: str,
        name: str,
        parent_id: str,
        cancel_token: CancelToken | None,
        replace: bool = True,
    ) -> RemoteNode:
        """Copy a file node under a folder, replacing a same-named file."""
        if replace:
            existing = await self.resolver.find_child(parent_id, name, cancel_token)
            if existing is not None:
                await self._remove_file_target(
                    existing, f"Cannot overwrite destination '{name}'"
                )

        node = await self.store.copy_node(source_id, parent_id, name)
        logger.debug("Copied %s to '%s' under %s", source_id, name, parent_id)
        return node

    # ------------------------------------------------------------------
    # Destination resolution
    # ------------------------------------------------------------------

    async def _resolve_file_destination(
        self,
        source_name: str,
        destination: str,
        cancel_token: CancelToken | None,
    ) -> FileDestination:
        """Map a destination path to a concrete (parent, name, existing) target.

        An existing folder receives the file under its source name. An
        existing file is the target itself. Otherwise a trailing separator
        marks the destination as a directory to create; without one the last
        segment is the new file name.
        """
        full_path = self.get_full_path(destination)
        node = await self.resolver.resolve(full_path, cancel_token)
        if node is not None and not node.is_folder:
            return FileDestination(node.parent_id or self.root_id, node.name, node)

        if node is not None:
            parent_id, name = node.id, source_name
        elif paths.is_directory_hint(destination):
            parent_id = await self.resolver.ensure_directory(full_path, cancel_token)
            name = source_name
        else:
            name = paths.file_name(full_path)
            parent_id = await self.resolver.ensure_directory(
                paths.parent_path(full_path), cancel_token
            )

        existing = await self.resolver.find_child(parent_id, name, cancel_token)
        return FileDestination(parent_id, name, existing)

    async def _resolve_directory_destination(
        self, destination: str, cancel_token: CancelToken | None
    ) -> str:
        """Return the folder id a directory copy writes into, creating it if needed."""
        full_path = self.get_full_path(destination)
        node = await self.resolver.resolve(full_path, cancel_token)
        if node is None:
            return await self.resolver.ensure_directory(full_path, cancel_token)
        if not node.is_folder:
            raise ConflictError(
                f"Cannot copy directory to '{destination}' because destination is a file."
            )
        return node.id

    async def _remove_file_target(self, existing: RemoteNode, message: str) -> None:
        """Delete a file that is about to be replaced; folders are never replaced."""
        if existing.is_folder:
            raise ConflictError(f"{message}: destination is a directory.")
        await self.store.delete_node(existing.id)

    async def _reject_overlapping_target(
        self,
        src_path: str,
        dst: str,
        verb: str,
        cancel_token: CancelToken | None,
    ) -> None:
        """Refuse a directory copy whose mirror would write inside its own source.

        A destination at or below the source always overlaps. A destination
        above the source overlaps when the source contains a folder at the
        source's own path relative to the destination, since mirroring that
        folder lands back on the source.
        """
        dst_path = self.get_full_path(dst)
        if paths.is_within(dst_path, src_path):
            raise InvalidOperationError(
                f"Cannot {verb} directory '{src_path}' into itself ('{dst_path}')."
            )
        if not paths.is_within(src_path, dst_path):
            return

        relative = src_path[len(dst_path):].lstrip("/")
        mirrored = await self.resolver.resolve(paths.join(src_path, relative), cancel_token)
        if mirrored is not None and mirrored.is_folder:
            raise InvalidOperationError(
                f"Cannot {verb} directory '{src_path}' into '{dst_path}': "
                f"its subfolder '{relative}' would be written onto the source."
            )
