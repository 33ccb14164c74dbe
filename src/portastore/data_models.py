"""
Data models shared by storage adapters and handles.
"""

from enum import Enum


class FileAccess(str, Enum):
    """Access mode for opening a file stream."""
    READ = "read"  # Readable and seekable
    READ_AND_WRITE = "read_and_write"  # Readable, writable and seekable


class ExistenceCheckResult(str, Enum):
    """What, if anything, exists at a path."""
    NOT_FOUND = "not_found"
    FILE_EXISTS = "file_exists"
    FOLDER_EXISTS = "folder_exists"
