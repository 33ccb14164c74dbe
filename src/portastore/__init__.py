"""
portastore - Portable Storage

Uniform, awaitable folder and file operations over app-local, roaming and
isolated in-memory storage, with deterministic name-collision handling.

License: Apache-2.0
"""

__version__ = "0.1.0"

# Errors
from .exceptions import (
    StorageError,
    InvalidSegmentError,
    StorageIOError,
    NotFoundError,
    AlreadyExistsError,
    TooManyCollisionsError,
)

# Paths and collision handling
from .paths import PortablePath, combine, split_extension, validate_segment
from .collision import (
    CollisionAction,
    CollisionPolicy,
    CollisionResolver,
    Resolution,
    unique_name_candidates,
)
from .data_models import ExistenceCheckResult, FileAccess

# Configuration and logging
from .config import StorageSettings
from .utils import init_storage_logging

# Adapters, handles and roots
from .adapters import LocalStorageAdapter, MemoryStorageAdapter, StorageAdapter
from .file import FileHandle
from .folder import FolderHandle
from .roots import StorageRoot

__all__ = [
    # Version
    "__version__",
    # Errors
    "StorageError",
    "InvalidSegmentError",
    "StorageIOError",
    "NotFoundError",
    "AlreadyExistsError",
    "TooManyCollisionsError",
    # Paths
    "PortablePath",
    "combine",
    "split_extension",
    "validate_segment",
    # Collisions
    "CollisionAction",
    "CollisionPolicy",
    "CollisionResolver",
    "Resolution",
    "unique_name_candidates",
    # Models
    "ExistenceCheckResult",
    "FileAccess",
    # Configuration
    "StorageSettings",
    "init_storage_logging",
    # Adapters
    "StorageAdapter",
    "LocalStorageAdapter",
    "MemoryStorageAdapter",
    # Handles
    "FileHandle",
    "FolderHandle",
    "StorageRoot",
]
