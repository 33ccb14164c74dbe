"""Host filesystem adapter.

Blocking OS calls run in worker threads via asyncio.to_thread so the event loop
stays responsive during disk I/O.
"""

import asyncio
import logging
import os
import shutil
from contextlib import contextmanager
from typing import BinaryIO, Iterator, List, Optional

from ..data_models import ExistenceCheckResult, FileAccess
from ..exceptions import AlreadyExistsError, NotFoundError, StorageIOError
from .base import StorageAdapter

logger = logging.getLogger(__name__)

_OPEN_MODES = {
    FileAccess.READ: "rb",
    FileAccess.READ_AND_WRITE: "r+b",
}


@contextmanager
def _translate_errors(operation: str, path: str) -> Iterator[None]:
    """Re-raise OSError subclasses as portastore exceptions."""
    try:
        yield
    except FileNotFoundError as e:
        raise NotFoundError(f"{operation} failed: no such file or folder", path=path) from e
    except FileExistsError as e:
        raise AlreadyExistsError(f"{operation} failed: entry already exists", path=path) from e
    except OSError as e:
        raise StorageIOError(
            f"{operation} failed: {e.strerror or e}",
            path=path,
            context={"errno": e.errno},
        ) from e


class LocalStorageAdapter(StorageAdapter):
    """Storage adapter backed by the host operating system's filesystem."""

    separator = os.sep

    async def check_exists(self, path: str) -> ExistenceCheckResult:
        return await asyncio.to_thread(self._check_exists_sync, path)

    @staticmethod
    def _check_exists_sync(path: str) -> ExistenceCheckResult:
        if os.path.isdir(path):
            return ExistenceCheckResult.FOLDER_EXISTS
        if os.path.isfile(path):
            return ExistenceCheckResult.FILE_EXISTS
        return ExistenceCheckResult.NOT_FOUND

    async def create_empty(self, path: str, truncate: bool = False) -> None:
        logger.debug(f"create_empty {path} (truncate={truncate})")
        await asyncio.to_thread(self._create_empty_sync, path, truncate)

    @staticmethod
    def _create_empty_sync(path: str, truncate: bool) -> None:
        with _translate_errors("create file", path):
            if truncate and os.path.isdir(path):
                raise IsADirectoryError(21, "Is a directory", path)
            # 'x' gives an atomic exclusive create
            with open(path, "wb" if truncate else "xb"):
                pass

    def ensure_directory(self, path: str) -> None:
        with _translate_errors("create root folder", path):
            os.makedirs(path, exist_ok=True)

    async def create_directory(self, path: str) -> None:
        logger.debug(f"create_directory {path}")
        with _translate_errors("create folder", path):
            await asyncio.to_thread(os.mkdir, path)

    async def open_stream(self, path: str, access: FileAccess) -> BinaryIO:
        mode = _OPEN_MODES[FileAccess(access)]
        logger.debug(f"open_stream {path} ({mode})")
        with _translate_errors("open", path):
            return await asyncio.to_thread(open, path, mode)

    async def read_bytes(self, path: str) -> bytes:
        return await asyncio.to_thread(self._read_bytes_sync, path)

    @staticmethod
    def _read_bytes_sync(path: str) -> bytes:
        with _translate_errors("read", path):
            with open(path, "rb") as f:
                return f.read()

    async def write_bytes(self, path: str, data: bytes) -> None:
        await asyncio.to_thread(self._write_bytes_sync, path, data)

    @staticmethod
    def _write_bytes_sync(path: str, data: bytes) -> None:
        with _translate_errors("write", path):
            # r+b refuses to recreate a file that was deleted underneath the handle
            with open(path, "r+b") as f:
                f.write(data)
                f.truncate()

    async def delete(self, path: str) -> None:
        logger.debug(f"delete {path}")
        await asyncio.to_thread(self._delete_sync, path)

    @staticmethod
    def _delete_sync(path: str) -> None:
        with _translate_errors("delete", path):
            if os.path.isdir(path) and not os.path.islink(path):
                shutil.rmtree(path)
            else:
                os.remove(path)

    async def list_children(
        self, path: str, kind: Optional[ExistenceCheckResult] = None
    ) -> List[str]:
        return await asyncio.to_thread(self._list_children_sync, path, kind)

    @staticmethod
    def _list_children_sync(path: str, kind: Optional[ExistenceCheckResult]) -> List[str]:
        with _translate_errors("list", path):
            with os.scandir(path) as entries:
                names = []
                for entry in entries:
                    if kind is ExistenceCheckResult.FILE_EXISTS and not entry.is_file():
                        continue
                    if kind is ExistenceCheckResult.FOLDER_EXISTS and not entry.is_dir():
                        continue
                    names.append(entry.name)
        return sorted(names)

    async def move(self, source: str, destination: str, replace: bool = False) -> None:
        logger.debug(f"move {source} -> {destination} (replace={replace})")
        await asyncio.to_thread(self._move_sync, source, destination, replace)

    @staticmethod
    def _move_sync(source: str, destination: str, replace: bool) -> None:
        with _translate_errors("move", source):
            if not os.path.exists(source):
                raise FileNotFoundError(2, "No such file or directory", source)
        with _translate_errors("move", destination):
            if os.path.lexists(destination):
                if not replace:
                    raise FileExistsError(17, "File exists", destination)
                if os.path.isdir(destination):
                    raise IsADirectoryError(21, "Is a directory", destination)
            os.replace(source, destination)
