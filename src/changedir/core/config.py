"""Application configuration management.

Handles loading and validating configuration from multiple sources:
    - TOML/JSON config files
    - Environment variables (CHANGEDIR_* prefix)
    - Default values

Key components:
    - AppConfig: Main configuration model
    - load_config(): Safe config loading with fallback
    - ConfigLoadResult: Metadata about config source
"""

from __future__ import annotations

import json
import os
import tomllib
from collections.abc import Mapping
from contextlib import nullcontext
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal
from unittest.mock import patch

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from changedir.core.result import ConfigurationError

CONFIG_ENV_VAR = "CHANGEDIR_CONFIG"


class ConfigError(RuntimeError):
    """Raised when a config file cannot be parsed."""


def home_dir() -> Path:
    """Return the user's home directory or raise ConfigurationError."""
    try:
        return Path.home()
    except (RuntimeError, KeyError) as exc:
        raise ConfigurationError("Could not find home directory") from exc


# -----------------------------------------------------------------------------
# Sub-configuration Models
# -----------------------------------------------------------------------------


class StorageConfig(BaseModel):
    """Locations of the persisted bookmark, history and target files."""

    data_dir: Path = Field(
        default_factory=lambda: home_dir() / ".local",
        description="Directory holding the bookmark, history and target files.",
    )
    bookmark_file: str = Field(default="changeDirectory", description="Bookmark file name.")
    history_file: str = Field(
        default="changeDirectoryHistory", description="History file name."
    )
    target_file: str = Field(
        default="changeDirectoryTarget",
        description="Side-channel file receiving the chosen directory in 'file' mode.",
    )

    @field_validator("data_dir", mode="after")
    @classmethod
    def expand_data_dir(cls, v: Path) -> Path:
        return v.expanduser()

    @property
    def bookmark_path(self) -> Path:
        return self.data_dir / self.bookmark_file

    @property
    def history_path(self) -> Path:
        return self.data_dir / self.history_file

    @property
    def target_path(self) -> Path:
        return self.data_dir / self.target_file


class OutputConfig(BaseModel):
    """How results reach the invoking shell and how chatty logging is."""

    mode: Literal["print", "file"] = Field(
        default="print",
        description="'print' writes the target to stdout; 'file' writes it to the target file.",
    )
    log_level: str = Field(default="WARNING", description="Log level for changedir output.")


@dataclass
class ConfigLoadResult:
    path: Path
    file_loaded: bool
    env_overrides: set[str]
    error: str | None = None


class AppConfig(BaseSettings):
    """Application-wide configuration with nested sub-configs."""

    model_config = SettingsConfigDict(
        env_prefix="CHANGEDIR_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    storage: StorageConfig = Field(default_factory=StorageConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[
        PydanticBaseSettingsSource,
        PydanticBaseSettingsSource,
        PydanticBaseSettingsSource,
        PydanticBaseSettingsSource,
    ]:
        # Ensure environment variables override config file entries.
        return (env_settings, init_settings, dotenv_settings, file_secret_settings)


def _resolve_config_path(env_vars: Mapping[str, str]) -> Path:
    candidate = env_vars.get(CONFIG_ENV_VAR) or (home_dir() / ".changedirrc")
    return Path(candidate).expanduser()


def _read_config_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}

    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read {path}: {exc}") from exc

    suffix = path.suffix.lower()
    parser = json.loads if suffix == ".json" else tomllib.loads

    try:
        data = parser(raw)
    except (json.JSONDecodeError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Syntax error in {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Config root in {path} must be a mapping.")

    return data


def _detect_env_overrides(env_vars: Mapping[str, str]) -> set[str]:
    """Detect which fields are overridden by environment variables.

    For nested models, detects vars like CHANGEDIR_OUTPUT__MODE.
    """
    prefix = AppConfig.model_config.get("env_prefix", "")
    delimiter = AppConfig.model_config.get("env_nested_delimiter", "__")
    overrides: set[str] = set()

    nested_models: dict[str, type[BaseModel]] = {
        "storage": StorageConfig,
        "output": OutputConfig,
    }

    for group_name, model_cls in nested_models.items():
        for field in model_cls.model_fields:
            env_key = f"{prefix}{group_name}{delimiter}{field}".upper()
            if env_key in env_vars:
                overrides.add(f"{group_name}.{field}")

    return overrides


def load_config(env: Mapping[str, str] | None = None) -> tuple[AppConfig, ConfigLoadResult]:
    """
    Load configuration with Safe Mode fallback.
    If the file is invalid, returns default config + error message.

    Raises:
        ConfigurationError: If the home directory cannot be determined.
    """
    env_vars: Mapping[str, str] = os.environ if env is None else {**os.environ, **env}
    resolved_path = _resolve_config_path(env_vars)
    env_overrides = _detect_env_overrides(env_vars)

    error: str | None = None
    file_loaded = False
    file_data: dict[str, Any] = {}

    try:
        file_data = _read_config_file(resolved_path)
        file_loaded = resolved_path.exists()
    except ConfigError as exc:
        error = str(exc)

    context_manager = (
        patch.dict(os.environ, env_vars, clear=False) if env is not None else nullcontext()
    )

    try:
        with context_manager:
            config = AppConfig(**file_data)
    except ValidationError as exc:
        error = f"{error}; {exc}" if error else str(exc)
        # Defaults only; the environment may be what failed validation.
        config = AppConfig.model_construct(storage=StorageConfig(), output=OutputConfig())

    load_result = ConfigLoadResult(
        path=resolved_path,
        file_loaded=file_loaded,
        env_overrides=env_overrides,
        error=error,
    )

    return config, load_result
