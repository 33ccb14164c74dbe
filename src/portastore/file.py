"""
File handles.

A FileHandle is a lightweight reference to a file path plus the adapter that
can act on it. It caches nothing: every operation goes back to the adapter, so
a handle whose file was deleted fails with NotFoundError instead of silently
succeeding.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, AsyncIterator, BinaryIO, Optional, Union

import chardet

from .collision import CollisionAction, CollisionPolicy, CollisionResolver
from .config import StorageSettings
from .data_models import ExistenceCheckResult, FileAccess
from .exceptions import AlreadyExistsError, NotFoundError, StorageIOError
from .paths import PortablePath, combine

if TYPE_CHECKING:
    from .adapters.base import StorageAdapter

logger = logging.getLogger(__name__)


class FileHandle:
    """
    A file at a resolved path.

    Example:
        >>> file = await folder.create_file("notes.txt", CollisionPolicy.OPEN_IF_EXISTS)
        >>> await file.write_all_text("hello")
        >>> async with file.opened(FileAccess.READ) as stream:
        ...     data = stream.read()
    """

    def __init__(
        self,
        adapter: "StorageAdapter",
        path: Union[str, PortablePath],
        settings: Optional[StorageSettings] = None,
    ):
        """
        Args:
            adapter: Storage adapter performing the I/O
            path: Absolute path of the file
            settings: Settings in effect (defaults used if None)
        """
        self.adapter = adapter
        self.settings = settings or StorageSettings()
        if not isinstance(path, PortablePath):
            path = PortablePath.parse(path, adapter.separator)
        self._path = path

    @property
    def path(self) -> str:
        return str(self._path)

    @property
    def name(self) -> str:
        return self._path.name

    def __repr__(self) -> str:
        return f"FileHandle(path={self.path!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FileHandle):
            return NotImplemented
        return self.adapter is other.adapter and self.path == other.path

    def __hash__(self) -> int:
        return hash((id(self.adapter), self.path))

    async def _require_file(self) -> None:
        kind = await self.adapter.check_exists(self.path)
        if kind is ExistenceCheckResult.FOLDER_EXISTS:
            raise StorageIOError("Path refers to a folder, not a file", path=self.path)
        if kind is ExistenceCheckResult.NOT_FOUND:
            raise NotFoundError("File does not exist (was it deleted?)", path=self.path)

    # ========== Streams ==========

    async def open(self, access: Union[str, FileAccess] = FileAccess.READ) -> BinaryIO:
        """
        Open a binary stream on the file.

        The stream is seekable and readable; it is writable only for
        FileAccess.READ_AND_WRITE. The caller owns it: use it in a `with`
        block, or use `opened()` instead.

        Raises:
            NotFoundError: If the file no longer exists
        """
        access = FileAccess(access)
        await self._require_file()
        return await self.adapter.open_stream(self.path, access)

    @asynccontextmanager
    async def opened(self, access: Union[str, FileAccess] = FileAccess.READ) -> AsyncIterator[BinaryIO]:
        """Open the file for the duration of an `async with` block."""
        stream = await self.open(access)
        try:
            yield stream
        finally:
            stream.close()

    # ========== Whole-file text ==========

    async def read_all_text(self, encoding: Optional[str] = None) -> str:
        """
        Read the whole file as text.

        Args:
            encoding: Overrides the configured encoding

        Returns:
            The decoded content
        """
        encoding = encoding or self.settings.encoding
        await self._require_file()
        data = await self.adapter.read_bytes(self.path)

        try:
            return data.decode(encoding)
        except UnicodeDecodeError as e:
            detected = chardet.detect(data).get("encoding") or "latin-1"
            logger.warning(
                f"Could not decode {self.path} as {encoding} ({e.reason}); "
                f"falling back to detected encoding {detected}"
            )
            try:
                return data.decode(detected)
            except (UnicodeDecodeError, LookupError) as fallback_error:
                raise StorageIOError(
                    f"Cannot decode file content as {encoding} or {detected}",
                    path=self.path,
                ) from fallback_error

    async def write_all_text(self, text: str, encoding: Optional[str] = None) -> None:
        """
        Replace the file's content with `text`.

        Existing content is truncated first, never appended to.
        """
        encoding = encoding or self.settings.encoding
        await self._require_file()
        await self.adapter.write_bytes(self.path, text.encode(encoding))

    # ========== Lifecycle ==========

    async def delete(self) -> None:
        """
        Delete the file.

        Raises:
            NotFoundError: If the file was already deleted
        """
        await self._require_file()
        await self.adapter.delete(self.path)
        logger.debug(f"Deleted file {self.path}")

    async def rename(
        self,
        new_name: str,
        policy: Union[str, CollisionPolicy] = CollisionPolicy.FAIL_IF_EXISTS,
    ) -> None:
        """
        Rename the file within its folder.

        Args:
            new_name: New entry name
            policy: How to handle an existing entry named new_name
                    (OPEN_IF_EXISTS is not meaningful here and is rejected)
        """
        parent = self._path.parent
        if parent is None:
            raise StorageIOError("Cannot rename a path without a parent folder", path=self.path)
        await self._move_into(str(parent), new_name, policy)

    async def move(
        self,
        new_path: str,
        policy: Union[str, CollisionPolicy] = CollisionPolicy.REPLACE_EXISTING,
    ) -> None:
        """
        Move the file to another full path.

        Args:
            new_path: Destination path, including the file name
            policy: How to handle an existing entry at the destination
        """
        destination = PortablePath.parse(new_path, self.adapter.separator)
        if destination.parent is None:
            raise StorageIOError("Destination has no parent folder", path=new_path)
        await self._move_into(str(destination.parent), destination.name, policy)

    async def _move_into(
        self,
        folder: str,
        name: str,
        policy: Union[str, CollisionPolicy],
    ) -> None:
        policy = CollisionPolicy(policy)
        if policy is CollisionPolicy.OPEN_IF_EXISTS:
            raise ValueError("open_if_exists is not a valid policy for rename or move")

        target = PortablePath.parse(folder, self.adapter.separator).join(name)
        if str(target) == self.path:
            return

        await self._require_file()
        resolver = CollisionResolver(self.settings.max_unique_name_attempts)
        resolution = await resolver.resolve(folder, name, policy, self._entry_exists)

        if resolution.action is CollisionAction.FAIL:
            raise AlreadyExistsError(
                f"Cannot move to '{name}': an entry with that name already exists",
                path=str(target),
            )

        destination = combine(folder, resolution.final_name, separator=self.adapter.separator)
        await self.adapter.move(
            self.path,
            destination,
            replace=resolution.action is CollisionAction.TRUNCATE,
        )
        logger.debug(f"Moved file {self.path} -> {destination}")
        self._path = PortablePath.parse(destination, self.adapter.separator)

    async def _entry_exists(self, parent: str, name: str) -> bool:
        return await self.adapter.exists(combine(parent, name, separator=self.adapter.separator))
