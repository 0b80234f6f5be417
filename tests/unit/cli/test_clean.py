"""Unit tests for clean command."""

import json
from collections.abc import Callable
from pathlib import Path

import pytest
from cleanx.cli.commands.clean import select_entries
from cleanx.cli.main import app
from cleanx.core.engine import CleanEngine
from cleanx.models.entry import DiscoveredEntry, ScannerCategory, entry_id
from typer.testing import CliRunner

runner = CliRunner()


def _entry(path: str, scanner_id: str) -> DiscoveredEntry:
    return DiscoveredEntry(
        id=entry_id(path),
        name=path,
        path=path,
        scanner_id=scanner_id,
        category=ScannerCategory.SYSTEM,
        size_bytes=1,
    )


@pytest.fixture
def trash(home: Path, make_file: Callable[..., Path]) -> Path:
    """A trash folder holding 2 KB."""
    make_file(home / ".Trash" / "old.zip", 2048)
    return home / ".Trash"


class TestSelectEntries:
    """Tests for select_entries."""

    def test_by_scanner_and_id_keeps_order(self) -> None:
        """Both selectors combine, in scan order, without duplicates."""
        entries = [_entry("/a", "s1"), _entry("/b", "s2"), _entry("/c", "s1")]

        selected = select_entries(entries, ["s1"], [entry_id("/b"), entry_id("/a")])

        assert [e.path for e in selected] == ["/a", "/b", "/c"]

    def test_nothing_matches(self) -> None:
        """Unknown selectors select nothing."""
        assert select_entries([_entry("/a", "s1")], ["s9"], ["nope"]) == []


class TestCleanCommand:
    """Tests for cleanx clean."""

    def test_requires_selection(self) -> None:
        """Without --scanner or --id nothing happens."""
        result = runner.invoke(app, ["clean"])
        assert result.exit_code == 1
        assert "Nothing selected" in (result.stdout + result.stderr)

    def test_unknown_scanner(
        self, cli_engine: CleanEngine, write_config: Callable[..., object]
    ) -> None:
        """Unknown scanner IDs are rejected."""
        write_config()

        result = runner.invoke(app, ["clean", "--scanner", "bogus"])

        assert result.exit_code == 1
        assert "Unknown scanner(s): bogus" in (result.stdout + result.stderr)

    def test_dry_run(
        self, cli_engine: CleanEngine, write_config: Callable[..., object], trash: Path
    ) -> None:
        """--dry-run previews without deleting or journaling."""
        write_config()

        result = runner.invoke(app, ["clean", "--scanner", "trash", "--dry-run"])

        assert result.exit_code == 0
        assert "Selected Entries (Dry Run)" in result.stdout
        assert "Dry run: would remove 1 item(s), freeing 2.0 KB." in result.stdout
        assert trash.exists()
        assert cli_engine.history() == ()

    def test_dry_run_from_config(
        self, cli_engine: CleanEngine, write_config: Callable[..., object], trash: Path
    ) -> None:
        """dry_run_by_default makes a plain clean a preview."""
        write_config(dry_run_by_default=True)

        result = runner.invoke(app, ["clean", "-s", "trash", "--yes"])

        assert result.exit_code == 0
        assert "Dry run" in result.stdout
        assert trash.exists()

    def test_yes_deletes_and_records(
        self, cli_engine: CleanEngine, write_config: Callable[..., object], trash: Path
    ) -> None:
        """--yes deletes without prompting and records the deletion."""
        write_config()

        result = runner.invoke(app, ["clean", "-s", "trash", "-y"])

        assert result.exit_code == 0
        assert "Removed 1 item(s), freed 2.0 KB." in result.stdout
        assert not trash.exists()
        assert [e.path for e in cli_engine.history()] == [str(trash)]

    def test_confirm_declined(
        self, cli_engine: CleanEngine, write_config: Callable[..., object], trash: Path
    ) -> None:
        """Answering no leaves everything in place."""
        write_config()

        result = runner.invoke(app, ["clean", "-s", "trash"], input="n\n")

        assert result.exit_code == 0
        assert "Delete 1 item(s) (2.0 KB)?" in result.stdout
        assert "Aborted" in result.stdout
        assert trash.exists()

    def test_confirm_accepted(
        self, cli_engine: CleanEngine, write_config: Callable[..., object], trash: Path
    ) -> None:
        """Answering yes deletes."""
        write_config()

        result = runner.invoke(app, ["clean", "-s", "trash"], input="y\n")

        assert result.exit_code == 0
        assert not trash.exists()

    def test_no_confirm_from_config(
        self, cli_engine: CleanEngine, write_config: Callable[..., object], trash: Path
    ) -> None:
        """confirm_before_clean = false skips the prompt."""
        write_config(confirm_before_clean=False)

        result = runner.invoke(app, ["clean", "-s", "trash"])

        assert result.exit_code == 0
        assert not trash.exists()

    def test_by_id(
        self, cli_engine: CleanEngine, write_config: Callable[..., object], trash: Path
    ) -> None:
        """Single entries are selected by the ID shown in scan output."""
        write_config()

        result = runner.invoke(app, ["clean", "--id", entry_id(trash), "--yes"])

        assert result.exit_code == 0
        assert not trash.exists()

    def test_unknown_id(
        self, cli_engine: CleanEngine, write_config: Callable[..., object], trash: Path
    ) -> None:
        """IDs missing from the current scan are reported."""
        write_config()

        result = runner.invoke(app, ["clean", "--id", "0000000000000000", "--yes"])

        assert result.exit_code == 0
        assert "Entry '0000000000000000' not found" in (result.stdout + result.stderr)
        assert "Nothing to clean" in result.stdout
        assert trash.exists()

    def test_json_output(
        self, cli_engine: CleanEngine, write_config: Callable[..., object], trash: Path
    ) -> None:
        """--format json prints only the execution result."""
        write_config()

        result = runner.invoke(app, ["clean", "-s", "trash", "-y", "--format", "json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["succeeded"] == 1
        assert data["bytes_freed"] == 2048
        assert data["deleted_paths"] == [str(trash)]
        assert data["status"] == "success"

    def test_all_skipped(
        self,
        cli_engine: CleanEngine,
        write_config: Callable[..., object],
        home: Path,
        make_file: Callable[..., Path],
    ) -> None:
        """When every target is refused nothing is attempted."""
        write_config()
        make_file(home / ".config" / "google-chrome" / "Default" / "Login Data", 100)

        result = runner.invoke(app, ["clean", "-s", "privacy", "-y"])

        assert result.exit_code == 0
        assert "Nothing can be deleted" in result.stdout
        assert (home / ".config" / "google-chrome" / "Default" / "Login Data").exists()
