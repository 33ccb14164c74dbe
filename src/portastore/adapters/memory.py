"""In-memory storage adapter.

Backs isolated sandbox roots: nothing touches the host filesystem, and each
adapter instance is its own independent tree.
"""

import io
import logging
import os
from typing import BinaryIO, Dict, List, Optional, Set

from ..data_models import ExistenceCheckResult, FileAccess
from ..exceptions import AlreadyExistsError, NotFoundError, StorageIOError
from ..paths import PortablePath
from .base import StorageAdapter

logger = logging.getLogger(__name__)


class _MemoryStream(io.BytesIO):
    """BytesIO over a copy of a file's content that writes back on flush/close."""

    def __init__(self, adapter: "MemoryStorageAdapter", path: str, content: bytes, writable: bool):
        super().__init__(content)
        self._adapter = adapter
        self._path = path
        self._writable = writable

    def writable(self) -> bool:
        return self._writable

    def _check_writable(self) -> None:
        if not self._writable:
            raise io.UnsupportedOperation("stream was opened read-only")

    def write(self, b) -> int:
        self._check_writable()
        return super().write(b)

    def writelines(self, lines) -> None:
        self._check_writable()
        super().writelines(lines)

    def truncate(self, size: Optional[int] = None) -> int:
        self._check_writable()
        return super().truncate(size)

    def flush(self) -> None:
        super().flush()
        if self._writable and not self.closed:
            self._adapter._commit(self._path, self.getvalue())

    def close(self) -> None:
        if not self.closed:
            self.flush()
        super().close()


class MemoryStorageAdapter(StorageAdapter):
    """
    Storage adapter keeping files and folders in process memory.

    The tree starts with the given root folders; every other folder must be
    created through the adapter before anything can be placed inside it.
    """

    def __init__(self, roots: Optional[List[str]] = None, separator: str = os.sep):
        """
        Args:
            roots: Folder paths that exist from the start (default: the bare anchor)
            separator: Separator used by paths handed to this adapter
        """
        self.separator = separator
        self._files: Dict[str, bytes] = {}
        self._folders: Set[str] = set()
        for root in roots or [separator]:
            self._add_folder_tree(root)

    def _normalize(self, path: str) -> str:
        return str(PortablePath.parse(path, self.separator))

    def _parent_of(self, path: str) -> Optional[str]:
        parent = PortablePath.parse(path, self.separator).parent
        return str(parent) if parent is not None else None

    def _add_folder_tree(self, path: str) -> None:
        current: Optional[PortablePath] = PortablePath.parse(path, self.separator)
        while current is not None:
            self._folders.add(str(current))
            current = current.parent

    def _require_parent(self, path: str) -> None:
        parent = self._parent_of(path)
        if parent is not None and parent not in self._folders:
            raise NotFoundError("Parent folder does not exist", path=parent)

    def _commit(self, path: str, content: bytes) -> None:
        # A stream outliving its file does not resurrect it
        if path in self._files:
            self._files[path] = content

    async def check_exists(self, path: str) -> ExistenceCheckResult:
        path = self._normalize(path)
        if path in self._folders:
            return ExistenceCheckResult.FOLDER_EXISTS
        if path in self._files:
            return ExistenceCheckResult.FILE_EXISTS
        return ExistenceCheckResult.NOT_FOUND

    async def create_empty(self, path: str, truncate: bool = False) -> None:
        path = self._normalize(path)
        self._require_parent(path)
        if path in self._folders:
            if truncate:
                raise StorageIOError("Cannot truncate a folder", path=path)
            raise AlreadyExistsError("A folder already exists at this path", path=path)
        if path in self._files and not truncate:
            raise AlreadyExistsError("A file already exists at this path", path=path)
        self._files[path] = b""

    def ensure_directory(self, path: str) -> None:
        current: Optional[PortablePath] = PortablePath.parse(path, self.separator)
        while current is not None:
            if str(current) in self._files:
                raise StorageIOError("A file is in the way of this folder", path=str(current))
            current = current.parent
        self._add_folder_tree(path)

    async def create_directory(self, path: str) -> None:
        path = self._normalize(path)
        self._require_parent(path)
        if path in self._folders or path in self._files:
            raise AlreadyExistsError("An entry already exists at this path", path=path)
        self._folders.add(path)

    def _require_file(self, path: str) -> str:
        path = self._normalize(path)
        if path in self._folders:
            raise StorageIOError("Path is a folder, not a file", path=path)
        if path not in self._files:
            raise NotFoundError("No such file", path=path)
        return path

    async def open_stream(self, path: str, access: FileAccess) -> BinaryIO:
        path = self._require_file(path)
        writable = FileAccess(access) is FileAccess.READ_AND_WRITE
        return _MemoryStream(self, path, self._files[path], writable)

    async def read_bytes(self, path: str) -> bytes:
        return self._files[self._require_file(path)]

    async def write_bytes(self, path: str, data: bytes) -> None:
        self._files[self._require_file(path)] = bytes(data)

    async def delete(self, path: str) -> None:
        path = self._normalize(path)
        if path in self._files:
            del self._files[path]
            return
        if path not in self._folders:
            raise NotFoundError("No such file or folder", path=path)

        prefix = path.rstrip(self.separator) + self.separator
        self._folders = {f for f in self._folders if f != path and not f.startswith(prefix)}
        self._files = {k: v for k, v in self._files.items() if not k.startswith(prefix)}

    async def list_children(
        self, path: str, kind: Optional[ExistenceCheckResult] = None
    ) -> List[str]:
        path = self._normalize(path)
        if path not in self._folders:
            raise NotFoundError("No such folder", path=path)

        names = []
        if kind is not ExistenceCheckResult.FOLDER_EXISTS:
            names.extend(self._direct_children(path, self._files))
        if kind is not ExistenceCheckResult.FILE_EXISTS:
            names.extend(self._direct_children(path, self._folders))
        return sorted(names)

    def _direct_children(self, folder: str, entries) -> List[str]:
        return [
            PortablePath.parse(entry, self.separator).name
            for entry in entries
            if entry != folder and self._parent_of(entry) == folder
        ]

    async def move(self, source: str, destination: str, replace: bool = False) -> None:
        source = self._require_file(source)
        destination = self._normalize(destination)
        self._require_parent(destination)
        if destination in self._folders:
            raise StorageIOError("Destination is a folder", path=destination)
        if destination in self._files and not replace:
            raise AlreadyExistsError("A file already exists at the destination", path=destination)
        self._files[destination] = self._files.pop(source)
