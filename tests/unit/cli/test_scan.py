"""Unit tests for scan command."""

import json
from collections.abc import Callable
from pathlib import Path
from unittest.mock import patch

from cleanx.cli.commands.scan import build_scan_config
from cleanx.cli.main import app
from cleanx.core.engine import CleanEngine
from cleanx.core.paths import get_config_path
from cleanx.models.entry import entry_id
from cleanx.models.scan_config import ScanConfig
from typer.testing import CliRunner

runner = CliRunner()


class TestBuildScanConfig:
    """Tests for build_scan_config."""

    def test_overrides(self) -> None:
        """Command-line values replace configured ones."""
        base = ScanConfig(min_size_bytes=5, max_depth=2, excluded_paths=("/x",))

        config = build_scan_config(base, 0, 7)

        assert (config.min_size_bytes, config.max_depth) == (0, 7)
        assert config.excluded_paths == ("/x",)

    def test_no_overrides(self) -> None:
        """Without overrides the configured values are kept."""
        base = ScanConfig(min_size_bytes=5, max_depth=2)
        assert build_scan_config(base, None, None) == base


class TestScanCommand:
    """Tests for cleanx scan."""

    def test_scan_help(self) -> None:
        """Scan command shows help."""
        result = runner.invoke(app, ["scan", "--help"])
        assert result.exit_code == 0
        assert "--category" in result.stdout
        assert "--format" in result.stdout

    def test_nothing_found(
        self, cli_engine: CleanEngine, write_config: Callable[..., object]
    ) -> None:
        """An empty home reports nothing to clean."""
        write_config()

        result = runner.invoke(app, ["scan"])

        assert result.exit_code == 0
        assert "Nothing to clean up" in result.stdout

    def test_table_output(
        self,
        cli_engine: CleanEngine,
        write_config: Callable[..., object],
        home: Path,
        make_file: Callable[..., Path],
    ) -> None:
        """Found entries are shown with a total line."""
        write_config()
        make_file(home / ".Trash" / "old.zip", 2048)

        result = runner.invoke(app, ["scan", "--category", "trash"])

        assert result.exit_code == 0
        assert "Reclaimable Space" in result.stdout
        assert "Total: 1 entries, 2.0 KB reclaimable" in result.stdout

    def test_limit(
        self,
        cli_engine: CleanEngine,
        write_config: Callable[..., object],
        home: Path,
        make_file: Callable[..., Path],
    ) -> None:
        """--limit caps the table but not the total."""
        write_config()
        make_file(home / ".cache" / "one" / "f", 100)
        make_file(home / ".cache" / "two" / "f", 100)

        result = runner.invoke(app, ["scan", "-c", "system", "-n", "1"])

        assert result.exit_code == 0
        assert "Showing 1 of 2 entries" in result.stdout
        assert "Total: 2 entries" in result.stdout

    def test_json_output(
        self,
        cli_engine: CleanEngine,
        write_config: Callable[..., object],
        home: Path,
        make_file: Callable[..., Path],
    ) -> None:
        """--format json prints the scan report."""
        write_config()
        make_file(home / ".Trash" / "old.zip", 2048)

        result = runner.invoke(app, ["scan", "--category", "trash", "--format", "json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["total_bytes"] == 2048
        [report] = data["reports"]
        assert report["scanner_id"] == "trash"
        assert report["entries"][0]["id"] == entry_id(home / ".Trash")
        assert report["entries"][0]["safety"] == "caution"

    def test_min_size_override(
        self,
        cli_engine: CleanEngine,
        write_config: Callable[..., object],
        home: Path,
        make_file: Callable[..., Path],
    ) -> None:
        """--min-size takes precedence over the config file."""
        write_config(min_size_bytes=0)
        make_file(home / ".Trash" / "old.zip", 2048)

        result = runner.invoke(app, ["scan", "-c", "trash", "--min-size", "4096"])

        assert result.exit_code == 0
        assert "Nothing to clean up" in result.stdout

    def test_scanner_failure_warns(
        self, cli_engine: CleanEngine, write_config: Callable[..., object], home: Path
    ) -> None:
        """A failing scanner is reported and the scan still completes."""
        write_config()
        (home / ".Trash").mkdir()

        with patch(
            "cleanx.scanners.trash.TrashScanner.scan",
            side_effect=RuntimeError("disk on fire"),
        ):
            result = runner.invoke(app, ["scan", "-c", "trash"])

        assert result.exit_code == 0
        assert "Scanner 'trash' failed: disk on fire" in (result.stdout + result.stderr)

    def test_invalid_config(self, cli_engine: CleanEngine) -> None:
        """A broken config file stops the command with a hint."""
        path = get_config_path()
        path.parent.mkdir(parents=True)
        path.write_text("[scan\n")

        result = runner.invoke(app, ["scan"])

        assert result.exit_code == 1
        assert "Invalid TOML" in (result.stdout + result.stderr)

    def test_invalid_category(self) -> None:
        """Unknown categories are rejected by option parsing."""
        result = runner.invoke(app, ["scan", "--category", "bogus"])
        assert result.exit_code == 2
