"""Storage adapters: the bindings handles use to reach actual storage.

Example:
    >>> from portastore.adapters import MemoryStorageAdapter
    >>> adapter = MemoryStorageAdapter(roots=["/sandbox"], separator="/")
"""

from .base import StorageAdapter
from .local import LocalStorageAdapter
from .memory import MemoryStorageAdapter

__all__ = ["StorageAdapter", "LocalStorageAdapter", "MemoryStorageAdapter"]
