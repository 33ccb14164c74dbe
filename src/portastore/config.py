"""
Configuration for portastore.

This module defines the settings model controlling where storage roots live,
how text is encoded and how many numbered names unique-name generation may try.
"""

from __future__ import annotations

import codecs
import logging
import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

logger = logging.getLogger(__name__)

# Environment variables consulted when a root is not set explicitly
LOCAL_ROOT_ENV_VAR = "PORTASTORE_LOCAL_ROOT"
ROAMING_ROOT_ENV_VAR = "PORTASTORE_ROAMING_ROOT"


class StorageSettings(BaseModel):
    """
    Pydantic schema for storage configuration.

    Root directories resolve in this order: explicit field, environment
    variable, then the platform's per-user data directory (see StorageRoot).
    """

    app_name: str = Field(
        "portastore", min_length=1, description="Application name used for platform data directories"
    )
    app_author: Optional[str] = Field(
        None, description="Application author (used by platformdirs on Windows)"
    )
    local_root: Optional[Path] = Field(
        None, description="Base directory of the app-local storage root"
    )
    roaming_root: Optional[Path] = Field(
        None, description="Base directory of the roaming storage root"
    )
    encoding: str = Field(
        "utf-8", description="Text encoding for read_all_text/write_all_text"
    )
    max_unique_name_attempts: Optional[int] = Field(
        None,
        ge=1,
        description="Cap on 'name (n)' candidates checked by generate_unique_name (None = unbounded)",
    )

    model_config = ConfigDict(validate_assignment=True)

    @field_validator("encoding")
    @classmethod
    def _check_encoding(cls, v: str) -> str:
        """Ensures the encoding is known to the codecs registry."""
        try:
            codecs.lookup(v)
        except LookupError as e:
            raise ValueError(f"Unknown text encoding: '{v}'") from e
        return v

    @model_validator(mode="after")
    def _read_roots_from_env(self) -> "StorageSettings":
        """Reads root directories from environment variables when not provided."""
        for field_name, env_var in (
            ("local_root", LOCAL_ROOT_ENV_VAR),
            ("roaming_root", ROAMING_ROOT_ENV_VAR),
        ):
            if getattr(self, field_name) is not None:
                continue
            env_value = os.getenv(env_var)
            if env_value:
                # object.__setattr__ avoids re-running validation on assignment
                object.__setattr__(self, field_name, Path(env_value).expanduser())
                logger.debug(f"Read {field_name} from env var '{env_var}': {env_value}")
        return self

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "StorageSettings":
        """
        Load settings from a YAML file.

        Args:
            path: Path to a YAML mapping of setting names to values

        Returns:
            Validated StorageSettings

        Raises:
            ValueError: If the file does not contain a mapping
        """
        with open(path, "r", encoding="utf-8") as f:
            data: Any = yaml.safe_load(f)

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError(f"Settings file must contain a mapping, got {type(data).__name__}: {path}")

        return cls(**data)

    @classmethod
    def create_for_directory(cls, base_directory: Union[str, Path], **kwargs) -> "StorageSettings":
        """
        Create settings with both roots placed under one directory.

        Useful for tests and portable installs.
        """
        base = Path(base_directory)
        return cls(local_root=base / "local", roaming_root=base / "roaming", **kwargs)

    def __repr__(self) -> str:
        return (
            f"StorageSettings(app_name={self.app_name!r}, "
            f"local_root={self.local_root}, roaming_root={self.roaming_root}, "
            f"encoding={self.encoding!r})"
        )
