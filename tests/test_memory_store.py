"""Tests for the in-memory remote store."""

from __future__ import annotations

import pytest

from drivefs.errors import TransportError
from drivefs.protocols import RemoteStore
from drivefs.stores.memory import MemoryStore


class TestMemoryStore:
    """Tests for MemoryStore."""

    def test_satisfies_protocol(self, memory_store: MemoryStore) -> None:
        """Test the store is a structural RemoteStore."""
        assert isinstance(memory_store, RemoteStore)

    def test_invalid_page_size(self) -> None:
        """Test a non-positive page size is rejected."""
        with pytest.raises(ValueError):
            MemoryStore(page_size=0)

    def test_starts_with_root(self) -> None:
        """Test a new store holds only its root folder."""
        store = MemoryStore(root_id="top")

        assert len(store) == 1
        assert "top" in store

    @pytest.mark.asyncio
    async def test_paging(self, memory_store: MemoryStore) -> None:
        """Test listings are split into pages with continuation tokens."""
        for name in ("a", "b", "c"):
            await memory_store.create_file("root", name, b"")

        first = await memory_store.list_children("root")
        second = await memory_store.list_children("root", page_token=first.next_page_token)

        assert [n.name for n in first.nodes] == ["a", "b"]
        assert [n.name for n in second.nodes] == ["c"]
        assert second.next_page_token is None

    @pytest.mark.asyncio
    async def test_name_filter(self, memory_store: MemoryStore) -> None:
        """Test a name filter returns only exact matches."""
        await memory_store.create_file("root", "keep", b"")
        await memory_store.create_file("root", "keeper", b"")

        page = await memory_store.list_children("root", name="keep")

        assert [n.name for n in page.nodes] == ["keep"]

    @pytest.mark.asyncio
    async def test_delete_is_recursive(self, memory_store: MemoryStore) -> None:
        """Test deleting a folder removes its descendants."""
        folder = await memory_store.create_folder("root", "f")
        sub = await memory_store.create_folder(folder.id, "s")
        leaf = await memory_store.create_file(sub.id, "x", b"")

        await memory_store.delete_node(folder.id)

        assert sub.id not in memory_store
        assert leaf.id not in memory_store
        assert len(memory_store) == 1

    @pytest.mark.asyncio
    async def test_copy_node(self, memory_store: MemoryStore) -> None:
        """Test a copy gets a new id and the source content."""
        source = await memory_store.create_file("root", "a", b"data")
        folder = await memory_store.create_folder("root", "f")

        copy = await memory_store.copy_node(source.id, folder.id, "b")

        assert copy.id != source.id
        assert copy.parents == (folder.id,)
        assert await memory_store.download_content(copy.id) == b"data"

    @pytest.mark.asyncio
    async def test_copy_folder_rejected(self, memory_store: MemoryStore) -> None:
        """Test folders cannot be copied server-side."""
        folder = await memory_store.create_folder("root", "f")

        with pytest.raises(TransportError):
            await memory_store.copy_node(folder.id, "root", "g")

    @pytest.mark.asyncio
    async def test_update_node_reparents(self, memory_store: MemoryStore) -> None:
        """Test update renames and swaps parents."""
        node = await memory_store.create_file("root", "a", b"")
        folder = await memory_store.create_folder("root", "f")

        await memory_store.update_node(
            node.id, name="b", add_parent=folder.id, remove_parents=("root",)
        )

        page = await memory_store.list_children(folder.id)
        assert [(n.name, n.parents) for n in page.nodes] == [("b", (folder.id,))]

    @pytest.mark.asyncio
    async def test_unknown_node(self, memory_store: MemoryStore) -> None:
        """Test unknown ids raise TransportError."""
        with pytest.raises(TransportError):
            await memory_store.download_content("missing")

    @pytest.mark.asyncio
    async def test_parent_must_be_folder(self, memory_store: MemoryStore) -> None:
        """Test a file cannot be used as a parent."""
        file = await memory_store.create_file("root", "a", b"")

        with pytest.raises(TransportError):
            await memory_store.create_file(file.id, "child", b"")

    @pytest.mark.asyncio
    async def test_calls_counted(self, memory_store: MemoryStore) -> None:
        """Test each request is counted by method."""
        await memory_store.create_folder("root", "f")
        await memory_store.list_children("root")
        await memory_store.list_children("root")

        assert memory_store.calls["create_folder"] == 1
        assert memory_store.calls["list_children"] == 2
