"""XDG-compliant path management for cleanx.

This module provides standardized paths following the XDG Base Directory
Specification for configuration and state storage, plus the home directory
lookup every scanner depends on.

XDG defaults:
- Config: ~/.config/cleanx/
- State: ~/.local/state/cleanx/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "cleanx"


class CleanxError(Exception):
    """Base exception for cleanx errors."""


class HomeDirectoryError(CleanxError):
    """Raised when no usable home directory exists.

    This is the one fatal configuration error: without a home directory
    none of the scan locations can be resolved.
    """


def get_home_dir() -> Path:
    """Get the current user's home directory.

    Returns:
        Path to the home directory.

    Raises:
        HomeDirectoryError: If the home directory cannot be determined
            or is not a readable directory.
    """
    try:
        home = Path.home()
    except (KeyError, RuntimeError) as e:
        msg = f"Cannot determine home directory: {e}"
        raise HomeDirectoryError(msg) from e

    if not home.is_dir():
        msg = f"Home directory does not exist: {home}"
        raise HomeDirectoryError(msg)
    if not os.access(home, os.R_OK | os.X_OK):
        msg = f"Home directory is not readable: {home}"
        raise HomeDirectoryError(msg)
    return home


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/cleanx/ (or XDG_CONFIG_HOME/cleanx/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_state_dir() -> Path:
    """Get the state directory path.

    State data includes the deletion journal, which must persist
    between runs but is not configuration.

    Returns:
        Path to ~/.local/state/cleanx/ (or XDG_STATE_HOME/cleanx/).
    """
    return _get_xdg_dir("XDG_STATE_HOME", ".local/state")


def get_config_path() -> Path:
    """Get the default config file path.

    Returns:
        Path to ~/.config/cleanx/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_history_path() -> Path:
    """Get the deletion journal path.

    Returns:
        Path to ~/.local/state/cleanx/history.jsonl.
    """
    return get_state_dir() / "history.jsonl"


def _ensure_dir(path: Path, name: str) -> Path:
    """Create directory if it doesn't exist.

    Args:
        path: Directory path to create.
        name: Human-readable name for error messages.

    Returns:
        The created/existing directory path.

    Raises:
        RuntimeError: If directory cannot be created.
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        msg = f"Cannot create {name} directory {path}: Permission denied"
        raise RuntimeError(msg) from e
    except OSError as e:
        msg = f"Cannot create {name} directory {path}: {e}"
        raise RuntimeError(msg) from e
    return path


def ensure_config_dir() -> Path:
    """Create the configuration directory if it doesn't exist.

    Returns:
        Path to the configuration directory.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    return _ensure_dir(get_config_dir(), "config")


def ensure_state_dir() -> Path:
    """Create the state directory if it doesn't exist.

    Returns:
        Path to the state directory.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    return _ensure_dir(get_state_dir(), "state")
