"""Unit tests for LargeOldFilesScanner."""

import os
import time
from collections.abc import Callable
from pathlib import Path

from cleanx.models.entry import SafetyTier
from cleanx.models.scan_config import ScanConfig
from cleanx.safety.policy import SafetyPolicy
from cleanx.scanners.large_files import LargeOldFilesScanner

KB = 1024


def _age(path: Path, days: int) -> Path:
    """Set both access and modification time to `days` ago."""
    then = time.time() - days * 86400
    os.utime(path, (then, then))
    return path


class TestLargeOldFilesScanner:
    """Tests for LargeOldFilesScanner."""

    def test_reports_old_large_files(
        self, home: Path, policy: SafetyPolicy, make_file: Callable[..., Path]
    ) -> None:
        """Files over the floor and unused for a month are CAUTION entries."""
        old = _age(make_file(home / "Documents" / "old.iso", 4 * KB), 60)
        _age(make_file(home / "Documents" / "tiny.txt", 10), 60)
        make_file(home / "Documents" / "fresh.iso", 4 * KB)

        entries = LargeOldFilesScanner(home, policy).scan(ScanConfig(min_size_bytes=KB))

        assert [e.path for e in entries] == [str(old)]
        assert entries[0].safety is SafetyTier.CAUTION

    def test_older_timestamp_decides_age(
        self, home: Path, policy: SafetyPolicy, make_file: Callable[..., Path]
    ) -> None:
        """The older of access and modification time is the last use."""
        path = make_file(home / "Downloads" / "movie.mkv", 4 * KB)
        then = time.time() - 90 * 86400
        os.utime(path, (time.time(), then))

        entries = LargeOldFilesScanner(home, policy).scan(ScanConfig(min_size_bytes=KB))

        assert [e.path for e in entries] == [str(path)]

    def test_zero_floor_uses_default(
        self, home: Path, policy: SafetyPolicy, make_file: Callable[..., Path]
    ) -> None:
        """With no size floor configured, 100 MiB applies."""
        _age(make_file(home / "Documents" / "old.iso", 4 * KB), 60)
        entries = LargeOldFilesScanner(home, policy).scan(ScanConfig(min_size_bytes=0))
        assert entries == []

    def test_skips_managed_and_hidden_folders(
        self, home: Path, policy: SafetyPolicy, make_file: Callable[..., Path]
    ) -> None:
        """Library, media folders and hidden folders are not searched."""
        for rel in ("Library/old.bin", "Music/old.mp3", ".secret/old.bin"):
            _age(make_file(home / rel, 4 * KB), 60)

        entries = LargeOldFilesScanner(home, policy).scan(ScanConfig(min_size_bytes=KB))

        assert entries == []

    def test_custom_age(
        self, home: Path, policy: SafetyPolicy, make_file: Callable[..., Path]
    ) -> None:
        """The minimum age is configurable."""
        _age(make_file(home / "notes.pdf", 4 * KB), 10)
        config = ScanConfig(min_size_bytes=KB)

        assert LargeOldFilesScanner(home, policy).scan(config) == []
        assert len(LargeOldFilesScanner(home, policy, min_age_days=7).scan(config)) == 1
