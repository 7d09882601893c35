"""In-memory remote store.

Models a cloud store's node graph in a dict: nodes have identifiers, names
and parent links but no paths. Useful for dry runs and for exercising the
remote filesystem without network access.
"""

from __future__ import annotations

import itertools
import logging
from collections import Counter
from dataclasses import dataclass, field

from drivefs.errors import TransportError
from drivefs.types import NodeKind, NodePage, RemoteNode

logger = logging.getLogger(__name__)

__all__ = ["MemoryStore"]

DEFAULT_PAGE_SIZE = 100


@dataclass
class _StoredNode:
    id: str
    name: str
    kind: NodeKind
    parents: list[str] = field(default_factory=list)
    content: bytes = b""

    def to_node(self) -> RemoteNode:
        return RemoteNode(id=self.id, name=self.name, kind=self.kind, parents=tuple(self.parents))


class MemoryStore:
    """RemoteStore kept entirely in process memory.

    Satisfies the RemoteStore protocol structurally. Every request is counted
    per method in ``calls`` so callers can assert on round-trips.
    """

    def __init__(self, root_id: str = "root", page_size: int = DEFAULT_PAGE_SIZE) -> None:
        """Initialize the store with an empty root folder.

        Args:
            root_id: Identifier of the top-level folder.
            page_size: Maximum children returned per listing page.
        """
        if page_size < 1:
            raise ValueError("page_size must be positive")
        self.root_id = root_id
        self.page_size = page_size
        self.calls: Counter[str] = Counter()
        self._ids = itertools.count(1)
        self._nodes: dict[str, _StoredNode] = {
            root_id: _StoredNode(id=root_id, name="", kind=NodeKind.FOLDER)
        }

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    async def list_children(
        self,
        parent_id: str,
        name: str | None = None,
        page_token: str | None = None,
    ) -> NodePage:
        self.calls["list_children"] += 1
        self._get_folder(parent_id)

        matches = [
            node.to_node()
            for node in self._nodes.values()
            if parent_id in node.parents and (name is None or node.name == name)
        ]
        offset = int(page_token) if page_token else 0
        end = offset + self.page_size
        next_token = str(end) if end < len(matches) else None
        return NodePage(nodes=matches[offset:end], next_page_token=next_token)

    async def create_folder(self, parent_id: str, name: str) -> RemoteNode:
        self.calls["create_folder"] += 1
        self._get_folder(parent_id)
        return self._add(name, NodeKind.FOLDER, parent_id).to_node()

    async def create_file(self, parent_id: str, name: str, content: bytes) -> RemoteNode:
        self.calls["create_file"] += 1
        self._get_folder(parent_id)
        return self._add(name, NodeKind.FILE, parent_id, bytes(content)).to_node()

    async def delete_node(self, node_id: str) -> None:
        self.calls["delete_node"] += 1
        self._get(node_id)
        self._delete_recursive(node_id)

    async def copy_node(self, source_id: str, parent_id: str, name: str) -> RemoteNode:
        self.calls["copy_node"] += 1
        source = self._get(source_id)
        if source.kind is not NodeKind.FILE:
            raise TransportError(f"Node {source_id} is a folder and cannot be copied.")
        self._get_folder(parent_id)
        return self._add(name, NodeKind.FILE, parent_id, source.content).to_node()

    async def update_node(
        self,
        node_id: str,
        name: str | None = None,
        add_parent: str | None = None,
        remove_parents: tuple[str, ...] = (),
    ) -> None:
        self.calls["update_node"] += 1
        node = self._get(node_id)
        if add_parent is not None:
            self._get_folder(add_parent)

        if name is not None:
            node.name = name
        parents = [p for p in node.parents if p not in remove_parents]
        if add_parent is not None and add_parent not in parents:
            parents.append(add_parent)
        node.parents = parents

    async def download_content(self, node_id: str) -> bytes:
        self.calls["download_content"] += 1
        node = self._get(node_id)
        if node.kind is not NodeKind.FILE:
            raise TransportError(f"Node {node_id} is a folder and has no content.")
        return node.content

    def _add(
        self, name: str, kind: NodeKind, parent_id: str, content: bytes = b""
    ) -> _StoredNode:
        node_id = f"node-{next(self._ids)}"
        node = _StoredNode(id=node_id, name=name, kind=kind, parents=[parent_id], content=content)
        self._nodes[node_id] = node
        logger.debug("Stored %s '%s' as %s under %s", kind.value, name, node_id, parent_id)
        return node

    def _delete_recursive(self, node_id: str) -> None:
        self._nodes.pop(node_id, None)
        for child in [n for n in self._nodes.values() if node_id in n.parents]:
            child.parents.remove(node_id)
            if not child.parents:
                self._delete_recursive(child.id)

    def _get(self, node_id: str) -> _StoredNode:
        node = self._nodes.get(node_id)
        if node is None:
            raise TransportError(f"File not found: {node_id}")
        return node

    def _get_folder(self, node_id: str) -> _StoredNode:
        node = self._get(node_id)
        if node.kind is not NodeKind.FOLDER:
            raise TransportError(f"Node {node_id} is not a folder.")
        return node
