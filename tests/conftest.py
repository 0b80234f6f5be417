"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules. Every test
runs with XDG_CONFIG_HOME and XDG_STATE_HOME pointed at a temporary
directory, and most tests operate on a fake home directory.
"""

import plistlib
from collections.abc import Callable
from pathlib import Path

import pytest
from cleanx.core.engine import CleanEngine
from cleanx.safety.policy import SafetyPolicy
from cleanx.safety.processes import StaticProcessProbe


@pytest.fixture(autouse=True)
def xdg_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Redirect config and state directories into tmp_path."""
    base = tmp_path / "xdg"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(base / "config"))
    monkeypatch.setenv("XDG_STATE_HOME", str(base / "state"))
    return base


@pytest.fixture
def home(tmp_path: Path) -> Path:
    """An empty fake home directory."""
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def probe() -> StaticProcessProbe:
    """A process probe reporting nothing running."""
    return StaticProcessProbe()


@pytest.fixture
def policy(home: Path, probe: StaticProcessProbe) -> SafetyPolicy:
    """Safety policy for the fake home."""
    return SafetyPolicy(home, probe=probe)


@pytest.fixture
def make_file() -> Callable[..., Path]:
    """Factory writing a file of a given size, creating parent folders."""

    def _make(path: Path, size: int = 0, content: bytes | None = None) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content if content is not None else b"x" * size)
        return path

    return _make


@pytest.fixture
def make_app() -> Callable[..., Path]:
    """Factory creating a minimal '.app' bundle with an Info.plist."""

    def _make(
        app_dir: Path,
        name: str,
        bundle_id: str | None = None,
        version: str | None = "1.0",
        payload_size: int = 0,
    ) -> Path:
        bundle = app_dir / f"{name}.app"
        contents = bundle / "Contents"
        contents.mkdir(parents=True)
        manifest: dict[str, str] = {"CFBundleName": name}
        if bundle_id is not None:
            manifest["CFBundleIdentifier"] = bundle_id
        if version is not None:
            manifest["CFBundleShortVersionString"] = version
        with (contents / "Info.plist").open("wb") as f:
            plistlib.dump(manifest, f)
        if payload_size:
            macos = contents / "MacOS"
            macos.mkdir()
            (macos / name).write_bytes(b"\0" * payload_size)
        return bundle

    return _make


@pytest.fixture
def app_dir(home: Path) -> Path:
    """Application folder used instead of /Applications."""
    path = home / "Applications"
    path.mkdir()
    return path


@pytest.fixture
def system_library(tmp_path: Path) -> Path:
    """Stand-in for /Library."""
    path = tmp_path / "system-library"
    path.mkdir()
    return path


@pytest.fixture
def state_dir(tmp_path: Path) -> Path:
    """Directory holding the engine's history.jsonl."""
    return tmp_path / "state"


@pytest.fixture
def engine(
    home: Path,
    state_dir: Path,
    probe: StaticProcessProbe,
    app_dir: Path,
    system_library: Path,
) -> CleanEngine:
    """Engine wired entirely to temporary directories."""
    return CleanEngine.create(
        home=home,
        state_dir=state_dir,
        probe=probe,
        app_dirs=[app_dir],
        system_library=system_library,
    )
