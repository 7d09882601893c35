"""Protocol definitions for core abstractions.

This module defines the two seams of the package:
- FileSystem: the path-based API every backend offers
- RemoteStore: the node-graph primitives a cloud store must provide

All concrete implementations satisfy these protocols structurally (duck typing).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from drivefs.cancellation import CancelToken
    from drivefs.types import NodePage, RemoteNode


@runtime_checkable
class FileSystem(Protocol):
    """Protocol for hierarchical path-to-content storage.

    Implementations are backed by the local disk or by a remote store.
    Operations on a missing source are no-ops unless documented otherwise.
    """

    def get_full_path(self, path: str) -> str:
        """Return the backend's canonical form of a path.

        Args:
            path: Raw path.

        Returns:
            Canonical absolute path.
        """
        ...

    def combine(self, *parts: str) -> str:
        """Join path fragments using the backend's rules.

        Args:
            *parts: Path fragments; an absolute fragment resets the result.

        Returns:
            Combined path.
        """
        ...

    async def exists(self, path: str, cancel_token: CancelToken | None = None) -> bool:
        """Check if a file or directory exists.

        Args:
            path: Path to check.
            cancel_token: Optional cancellation signal.

        Returns:
            True if the path resolves, False otherwise.
        """
        ...

    async def delete(self, path: str, cancel_token: CancelToken | None = None) -> None:
        """Delete a file or a directory tree.

        Args:
            path: Path to delete.
            cancel_token: Optional cancellation signal.

        Raises:
            InvalidOperationError: If the path is the backend's root.
        """
        ...

    async def copy(self, src: str, dst: str, cancel_token: CancelToken | None = None) -> None:
        """Copy a file or directory tree.

        Args:
            src: Source path.
            dst: Destination path. A trailing separator marks a directory.
            cancel_token: Optional cancellation signal.

        Raises:
            ConflictError: If the destination has an incompatible kind.
        """
        ...

    async def move(self, src: str, dst: str, cancel_token: CancelToken | None = None) -> None:
        """Move a file or directory tree.

        Args:
            src: Source path.
            dst: Destination path. A trailing separator marks a directory.
            cancel_token: Optional cancellation signal.

        Raises:
            ConflictError: If the destination has an incompatible kind.
        """
        ...

    async def rename(
        self, src: str, new_name: str, cancel_token: CancelToken | None = None
    ) -> None:
        """Rename a node in place.

        Args:
            src: Path of the node to rename.
            new_name: New name, without separators.
            cancel_token: Optional cancellation signal.

        Raises:
            InvalidArgumentError: If new_name is blank or contains separators.
            ConflictError: If a sibling already has new_name.
        """
        ...

    async def create_directory(self, path: str, cancel_token: CancelToken | None = None) -> None:
        """Create a directory and any missing parents.

        Args:
            path: Directory path.
            cancel_token: Optional cancellation signal.

        Raises:
            ConflictError: If a path segment is an existing file.
        """
        ...

    async def copy_all_files(
        self, src: str, dst: str, cancel_token: CancelToken | None = None
    ) -> None:
        """Overlay every file under src onto the same relative place under dst.

        Args:
            src: Source directory.
            dst: Destination directory.
            cancel_token: Optional cancellation signal.
        """
        ...

    async def create_file(
        self, path: str, content: bytes, cancel_token: CancelToken | None = None
    ) -> None:
        """Create or replace a file, creating parent directories.

        Args:
            path: File path.
            content: File content.
            cancel_token: Optional cancellation signal.

        Raises:
            InvalidArgumentError: If content is None.
            ConflictError: If a directory exists at the path.
        """
        ...

    async def read_file(self, path: str, cancel_token: CancelToken | None = None) -> bytes:
        """Read the full content of a file.

        Args:
            path: File path.
            cancel_token: Optional cancellation signal.

        Returns:
            File content.

        Raises:
            NotFoundError: If the path is missing or is a directory.
        """
        ...


@runtime_checkable
class RemoteStore(Protocol):
    """Protocol for a cloud object store organised as a node graph.

    The store knows nothing about paths. Every call is a network round-trip
    and failures surface as TransportError.
    """

    async def list_children(
        self,
        parent_id: str,
        name: str | None = None,
        page_token: str | None = None,
    ) -> NodePage:
        """List one page of non-trashed children of a folder.

        Args:
            parent_id: Folder to list.
            name: Only return children with exactly this name.
            page_token: Continuation token from a previous page.

        Returns:
            NodePage with the children and the next page token.
        """
        ...

    async def create_folder(self, parent_id: str, name: str) -> RemoteNode:
        """Create a folder node.

        Args:
            parent_id: Parent folder.
            name: Folder name.

        Returns:
            The created node.
        """
        ...

    async def create_file(self, parent_id: str, name: str, content: bytes) -> RemoteNode:
        """Upload a new file node.

        Args:
            parent_id: Parent folder.
            name: File name.
            content: File content.

        Returns:
            The created node.
        """
        ...

    async def delete_node(self, node_id: str) -> None:
        """Delete a node and, for folders, all of its descendants.

        Args:
            node_id: Node to delete.
        """
        ...

    async def copy_node(self, source_id: str, parent_id: str, name: str) -> RemoteNode:
        """Copy a file node server-side.

        Args:
            source_id: File to copy.
            parent_id: Folder receiving the copy.
            name: Name of the copy.

        Returns:
            The created copy.
        """
        ...

    async def update_node(
        self,
        node_id: str,
        name: str | None = None,
        add_parent: str | None = None,
        remove_parents: tuple[str, ...] = (),
    ) -> None:
        """Rename and/or re-parent a node.

        Args:
            node_id: Node to update.
            name: New name, or None to keep it.
            add_parent: Parent to add, or None.
            remove_parents: Parents to remove.
        """
        ...

    async def download_content(self, node_id: str) -> bytes:
        """Download the full content of a file node.

        Args:
            node_id: File to download.

        Returns:
            File content.
        """
        ...
