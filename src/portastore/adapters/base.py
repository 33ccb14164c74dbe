"""
Abstract base class for storage adapters.

An adapter is the thin binding between portastore handles and an actual
storage medium. Handles only ever talk to storage through this interface, so
every backend (host filesystem, in-memory sandbox) behaves the same way to
callers.
"""

import os
from abc import ABC, abstractmethod
from typing import BinaryIO, List, Optional

from ..data_models import ExistenceCheckResult, FileAccess


class StorageAdapter(ABC):
    """
    Abstract base class for storage backends.

    All paths are full path strings built with `separator`. Implementations
    must report failures with the portastore exception types: NotFoundError
    for missing entries, AlreadyExistsError for exclusive-create conflicts and
    StorageIOError for everything else.
    """

    separator: str = os.sep

    @abstractmethod
    def ensure_directory(self, path: str) -> None:
        """
        Make sure a folder and all of its ancestors exist.

        Called synchronously while a StorageRoot is being built, so that root
        folders exist before any handle is handed out. Existing folders are
        left untouched; StorageIOError if the path cannot be a folder.
        """
        pass

    @abstractmethod
    async def check_exists(self, path: str) -> ExistenceCheckResult:
        """
        Report whether a file, a folder or nothing exists at a path.

        Args:
            path: Full path to check

        Returns:
            ExistenceCheckResult for the path
        """
        pass

    async def exists(self, path: str) -> bool:
        """Check if any entry exists at the path."""
        return await self.check_exists(path) is not ExistenceCheckResult.NOT_FOUND

    @abstractmethod
    async def create_empty(self, path: str, truncate: bool = False) -> None:
        """
        Create an empty file.

        Args:
            path: Full path of the file
            truncate: If False, fail with AlreadyExistsError when the path is
                      taken. If True, an existing file is emptied instead.
        """
        pass

    @abstractmethod
    async def create_directory(self, path: str) -> None:
        """Create a folder, failing with AlreadyExistsError if the path is taken."""
        pass

    @abstractmethod
    async def open_stream(self, path: str, access: FileAccess) -> BinaryIO:
        """
        Open a binary stream on an existing file.

        The stream is always readable and seekable, and writable only for
        FileAccess.READ_AND_WRITE. The caller owns the stream and must close it.
        """
        pass

    @abstractmethod
    async def read_bytes(self, path: str) -> bytes:
        """Read the whole content of an existing file."""
        pass

    @abstractmethod
    async def write_bytes(self, path: str, data: bytes) -> None:
        """Replace the whole content of an existing file."""
        pass

    @abstractmethod
    async def delete(self, path: str) -> None:
        """Delete a file, or a folder with all its contents. NotFoundError if absent."""
        pass

    @abstractmethod
    async def list_children(
        self, path: str, kind: Optional[ExistenceCheckResult] = None
    ) -> List[str]:
        """
        List the names of a folder's direct children, sorted.

        Args:
            path: Full path of the folder
            kind: Only return files (FILE_EXISTS) or folders (FOLDER_EXISTS)
        """
        pass

    @abstractmethod
    async def move(self, source: str, destination: str, replace: bool = False) -> None:
        """
        Move a file to a new path.

        Args:
            source: Full path of the existing file
            destination: Full path to move it to
            replace: Overwrite an existing file at the destination
        """
        pass
