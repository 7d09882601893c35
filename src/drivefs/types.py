"""Shared data types for drivefs."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

__all__ = ["FileDestination", "NodeKind", "NodePage", "RemoteNode"]


class NodeKind(str, Enum):
    """Kind of a remote node."""

    FOLDER = "folder"
    FILE = "file"


@dataclass(frozen=True)
class RemoteNode:
    """One object in a remote store's parent/child graph.

    Attributes:
        id: Store-assigned identifier, stable for the node's lifetime.
        name: Name of the node under its parent(s).
        kind: Folder or file.
        parents: Identifiers of the node's parents. Stores may allow several;
            the first one is used when a single parent is needed.
    """

    id: str
    name: str
    kind: NodeKind
    parents: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.id:
            raise ValueError("id cannot be empty")

    @property
    def is_folder(self) -> bool:
        return self.kind is NodeKind.FOLDER

    @property
    def parent_id(self) -> str | None:
        return self.parents[0] if self.parents else None


@dataclass
class NodePage:
    """One page of a child listing.

    Attributes:
        nodes: Children returned in this page.
        next_page_token: Continuation token, None once the listing is complete.
    """

    nodes: list[RemoteNode] = field(default_factory=list)
    next_page_token: str | None = None


@dataclass(frozen=True)
class FileDestination:
    """Concrete target of a file copy or move.

    Attributes:
        parent_id: Folder that will hold the file.
        name: Name the file will have.
        existing: Node already occupying that name, if known.
    """

    parent_id: str
    name: str
    existing: RemoteNode | None = None
