"""
Tests for portastore.adapters.memory.

This module tests the in-memory sandbox adapter directly:
- Tree bookkeeping (roots, parents, recursive delete)
- Stream write-back and read-only enforcement
"""

import io

import pytest

from portastore.adapters.memory import MemoryStorageAdapter
from portastore.data_models import ExistenceCheckResult, FileAccess
from portastore.exceptions import AlreadyExistsError, NotFoundError, StorageIOError


@pytest.fixture
def adapter() -> MemoryStorageAdapter:
    return MemoryStorageAdapter(roots=["/box"], separator="/")


class TestMemoryTree:
    """Tests for folder and file bookkeeping."""

    @pytest.mark.asyncio
    async def test_roots_and_ancestors_exist(self, adapter):
        """Test that configured roots and their ancestors exist."""
        assert await adapter.check_exists("/box") is ExistenceCheckResult.FOLDER_EXISTS
        assert await adapter.check_exists("/") is ExistenceCheckResult.FOLDER_EXISTS
        assert await adapter.check_exists("/other") is ExistenceCheckResult.NOT_FOUND

    @pytest.mark.asyncio
    async def test_paths_are_normalized(self, adapter):
        """Test that trailing and doubled separators resolve to the same entry."""
        await adapter.create_empty("/box/f.txt")

        assert await adapter.exists("/box//f.txt")
        assert await adapter.check_exists("/box/") is ExistenceCheckResult.FOLDER_EXISTS

    @pytest.mark.asyncio
    async def test_parent_required(self, adapter):
        """Test that entries need an existing parent folder."""
        with pytest.raises(NotFoundError):
            await adapter.create_empty("/box/missing/f.txt")
        with pytest.raises(NotFoundError):
            await adapter.create_directory("/box/missing/d")

    @pytest.mark.asyncio
    async def test_exclusive_create(self, adapter):
        """Test exclusive creation of files and folders."""
        await adapter.create_empty("/box/f.txt")
        await adapter.create_directory("/box/d")

        with pytest.raises(AlreadyExistsError):
            await adapter.create_empty("/box/f.txt")
        with pytest.raises(AlreadyExistsError):
            await adapter.create_directory("/box/f.txt")
        with pytest.raises(StorageIOError):
            await adapter.create_empty("/box/d", truncate=True)

    @pytest.mark.asyncio
    async def test_recursive_delete(self, adapter):
        """Test that deleting a folder removes its whole subtree only."""
        await adapter.create_directory("/box/d")
        await adapter.create_directory("/box/d/e")
        await adapter.create_empty("/box/d/e/f.txt")
        await adapter.create_directory("/box/dd")

        await adapter.delete("/box/d")

        assert await adapter.list_children("/box") == ["dd"]
        assert not await adapter.exists("/box/d/e/f.txt")

    @pytest.mark.asyncio
    async def test_ensure_directory_creates_ancestors(self, adapter):
        """Test that ensure_directory adds a folder chain and tolerates existing folders."""
        adapter.ensure_directory("/box/a/b")
        adapter.ensure_directory("/box/a/b")

        assert await adapter.check_exists("/box/a") is ExistenceCheckResult.FOLDER_EXISTS
        assert await adapter.check_exists("/box/a/b") is ExistenceCheckResult.FOLDER_EXISTS

    @pytest.mark.asyncio
    async def test_ensure_directory_blocked_by_file(self, adapter):
        """Test that a file on the folder chain is an I/O failure."""
        await adapter.create_empty("/box/f.txt")

        with pytest.raises(StorageIOError):
            adapter.ensure_directory("/box/f.txt/sub")
        assert not await adapter.exists("/box/f.txt/sub")

    @pytest.mark.asyncio
    async def test_read_folder_as_file(self, adapter):
        """Test that folders cannot be read as files."""
        with pytest.raises(StorageIOError):
            await adapter.read_bytes("/box")


class TestMemoryStreams:
    """Tests for in-memory streams."""

    @pytest.mark.asyncio
    async def test_write_back_on_close(self, adapter):
        """Test that stream writes are committed when the stream closes."""
        await adapter.create_empty("/box/f.txt")

        stream = await adapter.open_stream("/box/f.txt", FileAccess.READ_AND_WRITE)
        stream.write(b"hello")
        stream.close()

        assert await adapter.read_bytes("/box/f.txt") == b"hello"

    @pytest.mark.asyncio
    async def test_read_only_stream(self, adapter):
        """Test that read streams reject writes and truncation."""
        await adapter.create_empty("/box/f.txt")

        with await adapter.open_stream("/box/f.txt", FileAccess.READ) as stream:
            assert not stream.writable()
            assert stream.readable()
            assert stream.seekable()
            with pytest.raises(io.UnsupportedOperation):
                stream.write(b"x")
            with pytest.raises(io.UnsupportedOperation):
                stream.truncate(0)

    @pytest.mark.asyncio
    async def test_stream_does_not_resurrect_deleted_file(self, adapter):
        """Test that closing a stream after delete leaves the file gone."""
        await adapter.create_empty("/box/f.txt")
        stream = await adapter.open_stream("/box/f.txt", FileAccess.READ_AND_WRITE)

        await adapter.delete("/box/f.txt")
        stream.write(b"late")
        stream.close()

        assert not await adapter.exists("/box/f.txt")

    @pytest.mark.asyncio
    async def test_move_onto_folder_fails(self, adapter):
        """Test that a file cannot replace a folder."""
        await adapter.create_empty("/box/f.txt")
        await adapter.create_directory("/box/d")

        with pytest.raises(StorageIOError):
            await adapter.move("/box/f.txt", "/box/d", replace=True)
