"""User configuration and settings.

This module provides the configuration model and I/O functions for
cleanx. Configuration is stored in ~/.config/cleanx/config.toml:

    [scan]
    min_size_bytes = 1048576
    max_depth = 3
    excluded_paths = ["~/Projects/keep-me"]
    follow_symlinks = false

    [clean]
    dry_run_by_default = false
    log_history = true
    confirm_before_clean = true
"""

import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated, Any

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from cleanx.core.paths import CleanxError, get_config_path
from cleanx.models.scan_config import DEFAULT_MAX_DEPTH, DEFAULT_MIN_SIZE_BYTES, ScanConfig


class ScanSettings(BaseModel):
    """Default scan parameters.

    Attributes:
        min_size_bytes: Entries smaller than this are not reported.
        max_depth: Traversal depth limit for traversal-based scanners.
        excluded_paths: Paths never reported (~ is expanded).
        follow_symlinks: Whether traversal follows symbolic links.
    """

    model_config = ConfigDict(extra="forbid")

    min_size_bytes: Annotated[
        int,
        Field(ge=0, description="Minimum entry size in bytes"),
    ] = DEFAULT_MIN_SIZE_BYTES
    max_depth: Annotated[
        int,
        Field(ge=0, le=64, description="Maximum traversal depth (0-64)"),
    ] = DEFAULT_MAX_DEPTH
    excluded_paths: Annotated[
        list[str],
        Field(default_factory=list, description="Path prefixes excluded from scanning"),
    ]
    follow_symlinks: Annotated[
        bool,
        Field(description="Follow symbolic links while scanning"),
    ] = False

    @field_validator("excluded_paths")
    @classmethod
    def validate_excluded_paths(cls, v: list[str]) -> list[str]:
        """Reject blank entries and drop duplicates, keeping order."""
        cleaned: list[str] = []
        for path in v:
            stripped = path.strip()
            if not stripped:
                msg = "excluded_paths cannot contain empty entries"
                raise ValueError(msg)
            if stripped not in cleaned:
                cleaned.append(stripped)
        return cleaned

    def to_scan_config(self) -> ScanConfig:
        """Build the immutable ScanConfig passed to scanners."""
        return ScanConfig.create(
            min_size_bytes=self.min_size_bytes,
            max_depth=self.max_depth,
            excluded_paths=[os.path.expanduser(p) for p in self.excluded_paths],
            follow_symlinks=self.follow_symlinks,
        )


class CleanSettings(BaseModel):
    """Deletion behavior defaults.

    Attributes:
        dry_run_by_default: Simulate unless explicitly told otherwise.
        log_history: Record deletions in the journal.
        confirm_before_clean: Ask before deleting.
    """

    model_config = ConfigDict(extra="forbid")

    dry_run_by_default: bool = False
    log_history: bool = True
    confirm_before_clean: bool = True


class CleanxConfig(BaseModel):
    """Root configuration object."""

    model_config = ConfigDict(extra="forbid")

    scan: ScanSettings = Field(default_factory=ScanSettings)
    clean: CleanSettings = Field(default_factory=CleanSettings)


class ConfigError(CleanxError):
    """Base exception for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when the config file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


class ConfigValidationError(ConfigError):
    """Raised when config content is invalid."""


def load_config(path: Path | None = None) -> CleanxConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated CleanxConfig object.

    Raises:
        ConfigNotFoundError: If the config file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigValidationError: If the content doesn't match the schema.
        ConfigError: If the file cannot be read.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        raise ConfigNotFoundError(f"Config not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return CleanxConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid config content: {e}") from e


def load_config_or_default(path: Path | None = None) -> CleanxConfig:
    """Load configuration, falling back to defaults if the file is missing.

    Parse and validation errors still propagate.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Loaded or default CleanxConfig.
    """
    try:
        return load_config(path)
    except ConfigNotFoundError:
        return CleanxConfig()


def save_config(config: CleanxConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The CleanxConfig object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = _config_to_dict(config)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        # os.replace() is atomic on POSIX
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def add_excluded_path(config: CleanxConfig, path: str) -> CleanxConfig:
    """Return a copy of the config with one more excluded path.

    Args:
        config: Current configuration.
        path: Path to exclude from future scans.

    Returns:
        New CleanxConfig (the input is not modified).
    """
    excluded = list(config.scan.excluded_paths)
    if path not in excluded:
        excluded.append(path)
    scan = config.scan.model_copy(update={"excluded_paths": excluded})
    return config.model_copy(update={"scan": scan})


def _config_to_dict(config: CleanxConfig) -> dict[str, Any]:
    """Convert CleanxConfig to a dictionary for TOML serialization."""
    return {
        "scan": {
            "min_size_bytes": config.scan.min_size_bytes,
            "max_depth": config.scan.max_depth,
            "excluded_paths": list(config.scan.excluded_paths),
            "follow_symlinks": config.scan.follow_symlinks,
        },
        "clean": {
            "dry_run_by_default": config.clean.dry_run_by_default,
            "log_history": config.clean.log_history,
            "confirm_before_clean": config.clean.confirm_before_clean,
        },
    }
