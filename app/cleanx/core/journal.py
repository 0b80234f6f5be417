"""Append-only deletion journal.

This module provides the HistoryJournal class for persisting and reading
deletion records in a JSONL file.
"""

import json
import logging
import os
import threading
from pathlib import Path

from cleanx.core.paths import ensure_state_dir, get_history_path
from cleanx.models.journal import JournalEntry

logger = logging.getLogger(__name__)


class HistoryJournal:
    """Manages the deletion history in a JSONL file.

    Storage location: ~/.local/state/cleanx/history.jsonl

    Each line is one complete JSON object. Every append is a single
    write followed by fsync, so a crash can at worst leave one torn
    final line; readers skip such a line and the next append starts on
    a fresh line. There is no API to edit or remove entries.

    Args:
        path: Optional override for the journal file.
    """

    def __init__(self, path: Path | None = None) -> None:
        self._path = path if path is not None else get_history_path()
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        """Path to the journal file."""
        return self._path

    def append(self, entry: JournalEntry) -> None:
        """Durably append one entry.

        Creates the file and parent directories if they don't exist.

        Args:
            entry: The journal entry to record.

        Raises:
            RuntimeError: If the state directory cannot be created.
            OSError: If the file cannot be written.
        """
        if self._path == get_history_path():
            ensure_state_dir()
        else:
            self._path.parent.mkdir(parents=True, exist_ok=True)

        line = entry.to_json_line().encode("utf-8") + b"\n"

        with self._lock, self._path.open(mode="a+b") as f:
            f.seek(0, os.SEEK_END)
            if f.tell() > 0:
                f.seek(-1, os.SEEK_END)
                if f.read(1) != b"\n":
                    # isolate a torn previous write on its own line
                    line = b"\n" + line
            f.write(line)
            f.flush()
            os.fsync(f.fileno())

    def read_all(self, limit: int | None = None) -> tuple[JournalEntry, ...]:
        """Read journal entries in write order.

        Corrupt lines and an unterminated final line are skipped with a
        warning.

        Args:
            limit: Keep only the most recent `limit` entries.
                  If None, returns all entries.

        Returns:
            Entries oldest first. Empty if the file doesn't exist.
        """
        if limit is not None and limit < 0:
            msg = f"limit cannot be negative, got {limit}"
            raise ValueError(msg)

        try:
            data = self._path.read_bytes()
        except FileNotFoundError:
            return ()

        lines = data.split(b"\n")
        # text after the final newline was never completed
        tail = lines.pop()
        if tail.strip():
            logger.warning("Skipping unterminated journal line %d", len(lines) + 1)

        entries: list[JournalEntry] = []
        for line_num, raw in enumerate(lines, start=1):
            if not raw.strip():
                continue
            try:
                entries.append(JournalEntry.from_json_line(raw.decode("utf-8")))
            except (UnicodeDecodeError, json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping corrupt journal line %d: %s", line_num, str(e))
                continue

        if limit is not None:
            return tuple(entries[-limit:]) if limit else ()
        return tuple(entries)
