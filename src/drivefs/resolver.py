"""Resolution of canonical paths to nodes in a remote store."""

from __future__ import annotations

import logging

from drivefs import paths
from drivefs.cancellation import CancelToken, check_cancelled
from drivefs.directory_index import DirectoryIndex
from drivefs.errors import ConflictError
from drivefs.protocols import RemoteStore
from drivefs.types import NodeKind, RemoteNode

logger = logging.getLogger(__name__)

__all__ = ["NodeResolver"]


class NodeResolver:
    """Walks path segments through a remote node graph.

    Every folder discovered along the way is recorded in the directory index
    so that later walks over the same ancestors skip the store entirely.
    """

    def __init__(self, store: RemoteStore, root_id: str, index: DirectoryIndex) -> None:
        """Initialize the resolver.

        Args:
            store: Remote store to query.
            root_id: Identifier of the folder mapped to "/".
            index: Directory index shared with the owning filesystem.
        """
        self.store = store
        self.root_id = root_id
        self.index = index

    def root_node(self) -> RemoteNode:
        """Return a synthetic folder node for the root."""
        return RemoteNode(id=self.root_id, name="", kind=NodeKind.FOLDER)

    async def resolve(
        self, path: str, cancel_token: CancelToken | None = None
    ) -> RemoteNode | None:
        """Find the node at a canonical path.

        Args:
            path: Canonical absolute path.
            cancel_token: Optional cancellation signal.

        Returns:
            The node at the final segment, or None if any segment is missing
            or an intermediate segment is a file.
        """
        segments = paths.split_segments(path)
        if not segments:
            return self.root_node()

        parent_id = self.root_id
        current: RemoteNode | None = None
        current_path = paths.ROOT
        last = len(segments) - 1

        for i, segment in enumerate(segments):
            check_cancelled(cancel_token)
            current_path = paths.join(current_path, segment)

            cached_id = self.index.get(current_path)
            if cached_id is not None:
                cached_parent = self.index.get(paths.parent_path(current_path)) or self.root_id
                current = RemoteNode(
                    id=cached_id,
                    name=segment,
                    kind=NodeKind.FOLDER,
                    parents=(cached_parent,),
                )
                parent_id = cached_id
                continue

            found = await self.find_child(parent_id, segment, cancel_token)
            if found is None:
                logger.debug("Path '%s' not found at segment '%s'", path, segment)
                return None
            if i < last and not found.is_folder:
                logger.debug("Path '%s' descends through file '%s'", path, current_path)
                return None

            if found.is_folder:
                self.index.set(current_path, found.id)
            current = found
            parent_id = found.id

        return current

    async def ensure_directory(
        self, path: str, cancel_token: CancelToken | None = None
    ) -> str:
        """Return the folder id for a path, creating missing folders.

        Args:
            path: Canonical absolute directory path.
            cancel_token: Optional cancellation signal.

        Returns:
            Identifier of the folder at path.

        Raises:
            ConflictError: If a segment of the path is an existing file.
        """
        cached_id = self.index.get(path)
        if cached_id is not None:
            return cached_id

        parent_id = self.root_id
        current_path = paths.ROOT

        for segment in paths.split_segments(path):
            check_cancelled(cancel_token)
            current_path = paths.join(current_path, segment)

            cached_id = self.index.get(current_path)
            if cached_id is not None:
                parent_id = cached_id
                continue

            existing = await self.find_child(parent_id, segment, cancel_token)
            if existing is None:
                existing = await self.store.create_folder(parent_id, segment)
                logger.debug("Created folder '%s' (%s)", current_path, existing.id)
            elif not existing.is_folder:
                raise ConflictError(
                    f"Cannot create directory '{path}' because '{segment}' already exists as file."
                )

            parent_id = existing.id
            self.index.set(current_path, parent_id)

        return parent_id

    async def list_children(
        self, parent_id: str, cancel_token: CancelToken | None = None
    ) -> list[RemoteNode]:
        """List every child of a folder, following continuation pages.

        Args:
            parent_id: Folder to list.
            cancel_token: Optional cancellation signal.

        Returns:
            Children from all pages, in store order.
        """
        children: list[RemoteNode] = []
        page_token: str | None = None

        while True:
            check_cancelled(cancel_token)
            page = await self.store.list_children(parent_id, page_token=page_token)
            children.extend(page.nodes)
            page_token = page.next_page_token
            if not page_token:
                return children

    async def find_child(
        self, parent_id: str, name: str, cancel_token: CancelToken | None = None
    ) -> RemoteNode | None:
        """Look up a child by exact name under one parent.

        Args:
            parent_id: Folder to search.
            name: Exact child name.
            cancel_token: Optional cancellation signal.

        Returns:
            First matching child, or None.
        """
        page_token: str | None = None

        while True:
            check_cancelled(cancel_token)
            page = await self.store.list_children(parent_id, name=name, page_token=page_token)
            if page.nodes:
                return page.nodes[0]
            page_token = page.next_page_token
            if not page_token:
                return None
