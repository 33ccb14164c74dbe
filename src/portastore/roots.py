"""
Storage roots.

A StorageRoot owns one adapter and hands out the named root folders
(app-local and roaming) that every other handle is derived from.

Example:
    >>> root = StorageRoot(StorageSettings(app_name="notes"))
    >>> folder = root.app_local_storage
    >>> file = await folder.create_file("todo.txt", CollisionPolicy.OPEN_IF_EXISTS)
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Tuple

import platformdirs

from .adapters.base import StorageAdapter
from .adapters.local import LocalStorageAdapter
from .adapters.memory import MemoryStorageAdapter
from .config import StorageSettings
from .data_models import ExistenceCheckResult
from .exceptions import NotFoundError, StorageIOError
from .file import FileHandle
from .folder import FolderHandle
from .paths import PortablePath, combine

logger = logging.getLogger(__name__)

SANDBOX_LOCAL_ROOT = "sandbox-local"
SANDBOX_ROAMING_ROOT = "sandbox-roaming"


class StorageRoot:
    """
    Named entry points into storage.

    Root directories are created (if missing) when the StorageRoot is built, so
    the folders it returns always point at a stable, existing base path.
    """

    def __init__(
        self,
        settings: Optional[StorageSettings] = None,
        adapter: Optional[StorageAdapter] = None,
        local_path: Optional[str] = None,
        roaming_path: Optional[str] = None,
    ):
        """
        Initialize the storage root.

        Args:
            settings: Storage settings (defaults used if None)
            adapter: Storage adapter (host filesystem if None)
            local_path: Base path of the app-local root, overriding settings
            roaming_path: Base path of the roaming root, overriding settings
        """
        self.settings = settings or StorageSettings()
        self.adapter = adapter or LocalStorageAdapter()

        self.local_path = local_path or self._configured_path(self.settings.local_root)
        self.roaming_path = roaming_path or self._configured_path(self.settings.roaming_root)
        if self.local_path is None or self.roaming_path is None:
            platform_local, platform_roaming = self._platform_paths()
            self.local_path = self.local_path or platform_local
            self.roaming_path = self.roaming_path or platform_roaming

        if self._same_path(self.local_path, self.roaming_path):
            raise StorageIOError(
                "App-local and roaming storage resolve to the same folder",
                path=self.local_path,
                suggestion="Configure distinct local_root and roaming_root",
            )

        for base in (self.local_path, self.roaming_path):
            self.adapter.ensure_directory(base)

        logger.info(
            f"StorageRoot initialized (local={self.local_path}, roaming={self.roaming_path})",
            extra={"storage_root": self.settings.app_name},
        )

    @staticmethod
    def _configured_path(configured: Optional[Path]) -> Optional[str]:
        if configured is None:
            return None
        return str(Path(configured).expanduser().resolve())

    def _platform_paths(self) -> Tuple[str, str]:
        """
        Per-user platform folders for the app-local and roaming roots.

        Roaming data lives in the user config folder, which Windows roams and
        XDG keeps apart from the data folder. Where the platform maps both to
        one folder (macOS), the roots become its Local and Roaming subfolders.
        """
        app_name, app_author = self.settings.app_name, self.settings.app_author
        local = platformdirs.user_data_dir(app_name, app_author, roaming=False)
        roaming = platformdirs.user_config_dir(app_name, app_author, roaming=True)
        if os.path.normcase(os.path.normpath(local)) == os.path.normcase(os.path.normpath(roaming)):
            return os.path.join(local, "Local"), os.path.join(local, "Roaming")
        return local, roaming

    def _same_path(self, first: str, second: str) -> bool:
        separator = self.adapter.separator
        return str(PortablePath.parse(first, separator)) == str(PortablePath.parse(second, separator))

    @classmethod
    def isolated(cls, settings: Optional[StorageSettings] = None) -> "StorageRoot":
        """
        Create a sandbox root backed by a fresh in-memory adapter.

        Nothing is written to the host filesystem; separate sandboxes never
        see each other's entries.
        """
        separator = os.sep
        local_path = combine(separator, SANDBOX_LOCAL_ROOT, separator=separator)
        roaming_path = combine(separator, SANDBOX_ROAMING_ROOT, separator=separator)
        adapter = MemoryStorageAdapter(roots=[local_path, roaming_path], separator=separator)
        return cls(
            settings=settings,
            adapter=adapter,
            local_path=local_path,
            roaming_path=roaming_path,
        )

    @property
    def app_local_storage(self) -> FolderHandle:
        """Root folder for data stored on this machine only."""
        return FolderHandle(self.adapter, self.local_path, self.settings, can_delete=False)

    @property
    def roaming_storage(self) -> FolderHandle:
        """Root folder for data that follows the user between machines."""
        return FolderHandle(self.adapter, self.roaming_path, self.settings, can_delete=False)

    async def get_file_from_path(self, path: str) -> FileHandle:
        """
        Get a handle for an existing file at an arbitrary path.

        Raises:
            NotFoundError: If no file exists at the path
        """
        if await self.adapter.check_exists(path) is not ExistenceCheckResult.FILE_EXISTS:
            raise NotFoundError("File not found", path=path)
        return FileHandle(self.adapter, path, self.settings)

    async def get_folder_from_path(self, path: str) -> FolderHandle:
        """
        Get a handle for an existing folder at an arbitrary path.

        Raises:
            NotFoundError: If no folder exists at the path
        """
        if await self.adapter.check_exists(path) is not ExistenceCheckResult.FOLDER_EXISTS:
            raise NotFoundError("Folder not found", path=path)
        can_delete = not any(
            self._same_path(path, root) for root in (self.local_path, self.roaming_path)
        )
        return FolderHandle(self.adapter, path, self.settings, can_delete=can_delete)
