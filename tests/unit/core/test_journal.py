"""Unit tests for HistoryJournal."""

from pathlib import Path

import pytest
from cleanx.core.journal import HistoryJournal
from cleanx.core.paths import get_history_path
from cleanx.models.journal import JournalAction, JournalEntry, create_delete_entry


def _entry(path: str, size: int | None = 10) -> JournalEntry:
    return JournalEntry(
        timestamp="2026-01-01T00:00:00+00:00",
        action=JournalAction.DELETE,
        path=path,
        size_bytes=size,
    )


@pytest.fixture
def journal(tmp_path: Path) -> HistoryJournal:
    """Journal in a not-yet-existing folder."""
    return HistoryJournal(tmp_path / "state" / "history.jsonl")


class TestAppend:
    """Tests for HistoryJournal.append."""

    def test_creates_file_and_preserves_order(self, journal: HistoryJournal) -> None:
        """Entries are read back in write order."""
        for name in ("/a", "/b", "/c"):
            journal.append(_entry(name))

        assert journal.path.exists()
        assert [e.path for e in journal.read_all()] == ["/a", "/b", "/c"]

    def test_one_line_per_entry(self, journal: HistoryJournal) -> None:
        """Each entry is exactly one newline-terminated line."""
        journal.append(_entry("/a"))
        journal.append(_entry("/b", size=None))

        lines = journal.path.read_text().splitlines(keepends=True)

        assert len(lines) == 2
        assert all(line.endswith("\n") for line in lines)
        assert "size_bytes" not in lines[1]

    def test_default_location(self) -> None:
        """Without a path the XDG state journal is used and created."""
        journal = HistoryJournal()
        journal.append(create_delete_entry("/x", 1))

        assert journal.path == get_history_path()
        assert journal.path.exists()


class TestCrashRecovery:
    """Tests for torn and corrupt lines."""

    def test_torn_final_line_skipped(
        self, journal: HistoryJournal, caplog: pytest.LogCaptureFixture
    ) -> None:
        """An unterminated last line leaves earlier entries readable."""
        journal.append(_entry("/a"))
        with journal.path.open("ab") as f:
            f.write(b'{"timestamp":"2026-01-01T00:00:00+00:00","act')

        assert [e.path for e in journal.read_all()] == ["/a"]
        assert "unterminated" in caplog.text

    def test_append_after_torn_line_starts_fresh(self, journal: HistoryJournal) -> None:
        """The next append is not glued onto the torn fragment."""
        journal.append(_entry("/a"))
        with journal.path.open("ab") as f:
            f.write(b'{"timestamp":')

        journal.append(_entry("/b"))

        assert [e.path for e in journal.read_all()] == ["/a", "/b"]

    def test_corrupt_lines_skipped(
        self, journal: HistoryJournal, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Invalid JSON and invalid records are skipped with a warning."""
        journal.append(_entry("/a"))
        with journal.path.open("ab") as f:
            f.write(b"not json\n")
            f.write(b'{"timestamp":"t","action":"EXPLODE","path":"/x"}\n')
            f.write(b"[1, 2]\n")
            f.write(b"\n")
        journal.append(_entry("/b"))

        assert [e.path for e in journal.read_all()] == ["/a", "/b"]
        assert caplog.text.count("Skipping corrupt journal line") == 3


class TestReadAll:
    """Tests for HistoryJournal.read_all."""

    def test_missing_file(self, journal: HistoryJournal) -> None:
        """A journal that was never written is empty."""
        assert journal.read_all() == ()

    @pytest.mark.parametrize(
        ("limit", "expected"),
        [
            (None, ["/0", "/1", "/2", "/3", "/4"]),
            (2, ["/3", "/4"]),
            (10, ["/0", "/1", "/2", "/3", "/4"]),
            (0, []),
        ],
    )
    def test_limit(
        self, journal: HistoryJournal, limit: int | None, expected: list[str]
    ) -> None:
        """limit keeps the most recent entries, oldest first."""
        for i in range(5):
            journal.append(_entry(f"/{i}"))

        assert [e.path for e in journal.read_all(limit)] == expected

    def test_negative_limit(self, journal: HistoryJournal) -> None:
        """A negative limit is rejected."""
        with pytest.raises(ValueError, match="negative"):
            journal.read_all(-1)
