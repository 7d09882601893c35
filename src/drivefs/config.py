"""Settings for drivefs backends."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

# Default settings location
CONFIG_DIR = Path.home() / ".drivefs"
CONFIG_FILE = CONFIG_DIR / "config.yaml"

ENV_PREFIX = "DRIVEFS_"
ENV_FIELDS = {
    "BACKEND": "backend",
    "ROOT_FOLDER_ID": "root_folder_id",
    "USE_ALL_DRIVES": "use_all_drives_search",
    "CREDENTIALS_PATH": "credentials_path",
    "LOCAL_ROOT": "local_root",
}

Backend = Literal["local", "drive", "memory"]


class SettingsError(Exception):
    """Settings file or environment could not be parsed."""

    pass


class Settings(BaseModel):
    """Backend selection and remote store options."""

    model_config = ConfigDict(populate_by_name=True)

    backend: Backend = "local"
    root_folder_id: str = Field(default="root", alias="rootFolderId")
    use_all_drives_search: bool = Field(default=False, alias="useAllDrivesSearch")
    credentials_path: Path | None = Field(default=None, alias="credentialsPath")
    local_root: Path | None = Field(default=None, alias="localRoot")
    page_size: int = Field(default=100, alias="pageSize", ge=1)

    @classmethod
    def from_file(cls, path: Path) -> Settings:
        """Load settings from a YAML file.

        Args:
            path: Path to the YAML file.

        Returns:
            Parsed Settings.

        Raises:
            FileNotFoundError: If file doesn't exist.
            SettingsError: If the YAML or its values are invalid.
        """
        if not path.exists():
            raise FileNotFoundError(f"Settings file not found: {path}")

        try:
            data = yaml.safe_load(path.read_text()) or {}
        except yaml.YAMLError as e:
            raise SettingsError(f"Invalid YAML in {path}: {e}") from e
        if not isinstance(data, dict):
            raise SettingsError(f"Settings file {path} must contain a mapping")
        return cls._validate(data)

    @classmethod
    def _validate(cls, data: dict[str, Any]) -> Settings:
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise SettingsError(str(e)) from e


def env_overrides(environ: dict[str, str] | None = None) -> dict[str, str]:
    """Collect DRIVEFS_* variables keyed by settings field name."""
    environ = os.environ if environ is None else environ
    overrides = {}
    for suffix, field_name in ENV_FIELDS.items():
        value = environ.get(ENV_PREFIX + suffix)
        if value:
            overrides[field_name] = value
    return overrides


def load_settings(
    path: Path | None = None,
    environ: dict[str, str] | None = None,
) -> Settings:
    """Load settings from a YAML file and apply environment overrides.

    A missing file at the default location yields default settings; a
    missing file that was requested explicitly is an error.

    Args:
        path: Settings file. Defaults to ~/.drivefs/config.yaml.
        environ: Environment mapping. Defaults to os.environ.

    Returns:
        Merged Settings.

    Raises:
        FileNotFoundError: If an explicit path does not exist.
        SettingsError: If the file or an override is invalid.
    """
    config_path = path or CONFIG_FILE
    if config_path.exists():
        settings = Settings.from_file(config_path)
    elif path is not None:
        raise FileNotFoundError(f"Settings file not found: {path}")
    else:
        settings = Settings()

    overrides = env_overrides(environ)
    if not overrides:
        return settings

    logger.debug("Applying environment overrides: %s", ", ".join(sorted(overrides)))
    merged = settings.model_dump()
    merged.update(overrides)
    return Settings._validate(merged)
