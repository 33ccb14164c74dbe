"""
Shared fixtures for portastore tests.

`root` is parametrized so every behavioral test runs once against the host
filesystem (under pytest's tmp_path) and once against an in-memory sandbox.
"""

import pytest

from portastore import StorageRoot, StorageSettings
from portastore.config import LOCAL_ROOT_ENV_VAR, ROAMING_ROOT_ENV_VAR


@pytest.fixture(autouse=True)
def clear_root_env(monkeypatch):
    """Keep developer environment variables from leaking into settings."""
    monkeypatch.delenv(LOCAL_ROOT_ENV_VAR, raising=False)
    monkeypatch.delenv(ROAMING_ROOT_ENV_VAR, raising=False)


@pytest.fixture
def local_root(tmp_path) -> StorageRoot:
    """StorageRoot on the host filesystem, rooted in a temporary directory."""
    return StorageRoot(StorageSettings.create_for_directory(tmp_path))


@pytest.fixture
def memory_root() -> StorageRoot:
    """StorageRoot backed by an isolated in-memory adapter."""
    return StorageRoot.isolated()


@pytest.fixture(params=["local", "memory"])
def root(request) -> StorageRoot:
    """StorageRoot for each available backend."""
    return request.getfixturevalue(f"{request.param}_root")


@pytest.fixture
def folder(root):
    """The app-local root folder of the current backend."""
    return root.app_local_storage
