"""
Folder handles.

FolderHandle is the entry point for creating, looking up and enumerating
entries. Creation goes through CollisionResolver, which decides the final name
and action; the handle then carries that action out through its adapter.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional, Union

from .collision import CollisionAction, CollisionPolicy, CollisionResolver, Resolution
from .config import StorageSettings
from .data_models import ExistenceCheckResult
from .exceptions import AlreadyExistsError, NotFoundError, StorageIOError
from .file import FileHandle
from .paths import PortablePath, combine, validate_segment

if TYPE_CHECKING:
    from .adapters.base import StorageAdapter

logger = logging.getLogger(__name__)


class FolderHandle:
    """
    A folder at a resolved path.

    Handles keep no references to parents or children; each call recomputes
    the child path and asks the adapter again, so results always reflect the
    storage at call time.

    Example:
        >>> docs = await root.create_folder("docs", CollisionPolicy.OPEN_IF_EXISTS)
        >>> report = await docs.create_file("report.txt", CollisionPolicy.GENERATE_UNIQUE_NAME)
        >>> report.name
        'report (2).txt'
    """

    def __init__(
        self,
        adapter: "StorageAdapter",
        path: Union[str, PortablePath],
        settings: Optional[StorageSettings] = None,
        can_delete: bool = True,
    ):
        """
        Args:
            adapter: Storage adapter performing the I/O
            path: Absolute path of the folder
            settings: Settings in effect (defaults used if None)
            can_delete: False for storage roots, which must not be deleted
        """
        self.adapter = adapter
        self.settings = settings or StorageSettings()
        self.can_delete = can_delete
        if not isinstance(path, PortablePath):
            path = PortablePath.parse(path, adapter.separator)
        self._path = path
        self._resolver = CollisionResolver(self.settings.max_unique_name_attempts)

    @property
    def path(self) -> str:
        return str(self._path)

    @property
    def name(self) -> str:
        return self._path.name

    def __repr__(self) -> str:
        return f"FolderHandle(path={self.path!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FolderHandle):
            return NotImplemented
        return self.adapter is other.adapter and self.path == other.path

    def __hash__(self) -> int:
        return hash((id(self.adapter), self.path))

    def _child_path(self, name: str) -> str:
        return combine(self.path, name, separator=self.adapter.separator)

    def _file(self, name: str) -> FileHandle:
        return FileHandle(self.adapter, self._child_path(name), self.settings)

    def _folder(self, name: str) -> "FolderHandle":
        return FolderHandle(self.adapter, self._child_path(name), self.settings)

    async def _child_exists(self, parent: str, name: str) -> bool:
        return await self.adapter.exists(combine(parent, name, separator=self.adapter.separator))

    async def _require_folder(self) -> None:
        if await self.adapter.check_exists(self.path) is not ExistenceCheckResult.FOLDER_EXISTS:
            raise NotFoundError("Folder does not exist (was it deleted?)", path=self.path)

    async def _resolve(self, name: str, policy: Union[str, CollisionPolicy]) -> Resolution:
        validate_segment(name, self.adapter.separator)
        policy = CollisionPolicy(policy)
        await self._require_folder()

        resolution = await self._resolver.resolve(self.path, name, policy, self._child_exists)
        if resolution.action is CollisionAction.FAIL:
            raise AlreadyExistsError(
                f"'{name}' already exists",
                path=self._child_path(name),
            )
        return resolution

    # ========== Creation ==========

    async def create_file(
        self,
        name: str,
        policy: Union[str, CollisionPolicy] = CollisionPolicy.FAIL_IF_EXISTS,
    ) -> FileHandle:
        """
        Create a file in this folder.

        Args:
            name: Requested file name
            policy: How to handle an existing entry with the same name

        Returns:
            FileHandle for the resolved name

        Raises:
            AlreadyExistsError: Under FAIL_IF_EXISTS when the name is taken
            StorageIOError: If the adapter fails, or the existing entry is a folder
            NotFoundError: If this folder no longer exists
        """
        resolution = await self._resolve(name, policy)
        path = self._child_path(resolution.final_name)

        if resolution.action is CollisionAction.CREATE_NEW:
            await self.adapter.create_empty(path)
        else:
            if await self.adapter.check_exists(path) is ExistenceCheckResult.FOLDER_EXISTS:
                raise StorageIOError("A folder with this name already exists", path=path)
            if resolution.action is CollisionAction.TRUNCATE:
                await self.adapter.create_empty(path, truncate=True)

        logger.debug(f"create_file {path}: {resolution.action.value}")
        return self._file(resolution.final_name)

    async def create_folder(
        self,
        name: str,
        policy: Union[str, CollisionPolicy] = CollisionPolicy.FAIL_IF_EXISTS,
    ) -> "FolderHandle":
        """
        Create a subfolder, with the same collision semantics as create_file.

        REPLACE_EXISTING deletes the existing folder and everything in it,
        then recreates it empty.
        """
        resolution = await self._resolve(name, policy)
        path = self._child_path(resolution.final_name)

        if resolution.action is CollisionAction.CREATE_NEW:
            await self.adapter.create_directory(path)
        else:
            if await self.adapter.check_exists(path) is ExistenceCheckResult.FILE_EXISTS:
                raise StorageIOError("A file with this name already exists", path=path)
            if resolution.action is CollisionAction.TRUNCATE:
                await self.adapter.delete(path)
                await self.adapter.create_directory(path)

        logger.debug(f"create_folder {path}: {resolution.action.value}")
        return self._folder(resolution.final_name)

    # ========== Lookup ==========

    async def get_file(self, name: str) -> FileHandle:
        """
        Get an existing file in this folder.

        Raises:
            NotFoundError: If no file with this name exists
        """
        path = self._child_path(name)
        if await self.adapter.check_exists(path) is not ExistenceCheckResult.FILE_EXISTS:
            raise NotFoundError(f"File '{name}' not found", path=path)
        return self._file(name)

    async def get_folder(self, name: str) -> "FolderHandle":
        """
        Get an existing subfolder.

        Raises:
            NotFoundError: If no folder with this name exists
        """
        path = self._child_path(name)
        if await self.adapter.check_exists(path) is not ExistenceCheckResult.FOLDER_EXISTS:
            raise NotFoundError(f"Folder '{name}' not found", path=path)
        return self._folder(name)

    async def check_exists(self, name: str) -> ExistenceCheckResult:
        """Report whether a file, a folder or nothing exists under `name`."""
        return await self.adapter.check_exists(self._child_path(name))

    async def get_files(self) -> List[FileHandle]:
        """Snapshot of the files currently in this folder, sorted by name."""
        await self._require_folder()
        names = await self.adapter.list_children(self.path, ExistenceCheckResult.FILE_EXISTS)
        return [self._file(name) for name in names]

    async def get_folders(self) -> List["FolderHandle"]:
        """Snapshot of the subfolders currently in this folder, sorted by name."""
        await self._require_folder()
        names = await self.adapter.list_children(self.path, ExistenceCheckResult.FOLDER_EXISTS)
        return [self._folder(name) for name in names]

    # ========== Lifecycle ==========

    async def delete(self) -> None:
        """
        Delete this folder and all of its contents.

        Raises:
            NotFoundError: If the folder was already deleted
            StorageIOError: If this folder is a storage root
        """
        if not self.can_delete:
            raise StorageIOError("Storage root folders cannot be deleted", path=self.path)
        await self._require_folder()
        await self.adapter.delete(self.path)
        logger.debug(f"Deleted folder {self.path}")
