"""Unit tests for Rich formatting helpers."""

from cleanx.models.entry import DiscoveredEntry, SafetyTier, ScannerCategory, entry_id
from cleanx.utils.formatting import create_entry_table, format_entry_row, format_tier


class TestFormatting:
    """Tests for table and row formatting."""

    def test_entry_table_columns(self) -> None:
        """The entry table has the expected columns."""
        table = create_entry_table()
        assert [c.header for c in table.columns] == [
            "ID",
            "Scanner",
            "Name",
            "Size",
            "Safety",
            "Path",
        ]

    def test_format_tier_uses_theme_style(self) -> None:
        """Each tier is wrapped in its theme style."""
        assert "tier_protected" in format_tier(SafetyTier.PROTECTED)
        assert "protected" in format_tier(SafetyTier.PROTECTED)

    def test_format_entry_row(self) -> None:
        """Rows show the id, scanner, name, size, tier and path."""
        entry = DiscoveredEntry(
            id=entry_id("/x/cache"),
            name="cache",
            path="/x/cache",
            scanner_id="system_caches",
            category=ScannerCategory.SYSTEM,
            size_bytes=2048,
        )
        row = format_entry_row(entry)
        assert row[0] == entry.id
        assert row[1] == "system_caches"
        assert row[3] == "2.0 KB"
        assert row[5] == "/x/cache"
