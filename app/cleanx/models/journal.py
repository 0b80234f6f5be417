"""Journal entry model for the deletion history.

Each successful deletion is recorded as one JSON line so the history
survives crashes between entries.
"""

import json
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import Any


class JournalAction(str, Enum):
    """Type of action recorded in the journal.

    Attributes:
        DELETE: A filesystem path was removed.
    """

    DELETE = "DELETE"


@dataclass(frozen=True, slots=True)
class JournalEntry:
    """Record of one completed deletion.

    Attributes:
        timestamp: When the deletion happened (ISO 8601 with timezone).
        action: Type of action (always DELETE today).
        path: Absolute path that was removed.
        size_bytes: Size of the removed path, if known.
    """

    timestamp: str
    action: JournalAction
    path: str
    size_bytes: int | None = None

    def __post_init__(self) -> None:
        """Validate entry data after initialization."""
        if not self.timestamp:
            msg = "Timestamp cannot be empty"
            raise ValueError(msg)
        if not self.path:
            msg = "Path cannot be empty"
            raise ValueError(msg)
        if self.size_bytes is not None and self.size_bytes < 0:
            msg = f"Size cannot be negative, got {self.size_bytes}"
            raise ValueError(msg)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON storage.

        Returns:
            Dictionary representation of the journal entry.
        """
        result: dict[str, Any] = {
            "timestamp": self.timestamp,
            "action": self.action.value,
            "path": self.path,
        }
        if self.size_bytes is not None:
            result["size_bytes"] = self.size_bytes
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "JournalEntry":
        """Deserialize from dictionary.

        Args:
            data: Dictionary containing entry data.

        Returns:
            JournalEntry instance.

        Raises:
            KeyError: If required fields are missing.
            ValueError: If the action or size is invalid.
        """
        size = data.get("size_bytes")
        return cls(
            timestamp=data["timestamp"],
            action=JournalAction(data["action"]),
            path=data["path"],
            size_bytes=int(size) if size is not None else None,
        )

    def to_json_line(self) -> str:
        """Serialize to JSON line for JSONL storage.

        Returns:
            Single JSON line (no trailing newline).
        """
        return json.dumps(self.to_dict(), separators=(",", ":"))

    @classmethod
    def from_json_line(cls, line: str) -> "JournalEntry":
        """Deserialize from JSON line.

        Raises:
            json.JSONDecodeError: If line is not valid JSON.
            KeyError: If required fields are missing.
            ValueError: If data is invalid.
        """
        data = json.loads(line.strip())
        if not isinstance(data, dict):
            msg = "Journal line is not a JSON object"
            raise ValueError(msg)
        return cls.from_dict(data)


def create_delete_entry(path: str, size_bytes: int | None = None) -> JournalEntry:
    """Factory function to create a DELETE entry stamped with the current time.

    Args:
        path: Absolute path that was removed.
        size_bytes: Size of the removed path, if known.

    Returns:
        New JournalEntry.
    """
    return JournalEntry(
        timestamp=datetime.now(UTC).isoformat(),
        action=JournalAction.DELETE,
        path=path,
        size_bytes=size_bytes,
    )
