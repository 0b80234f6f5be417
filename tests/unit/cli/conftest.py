"""Fixtures for CLI command tests."""

from collections.abc import Callable, Iterator
from unittest.mock import patch

import pytest
from cleanx.core.config import CleanSettings, CleanxConfig, ScanSettings, save_config
from cleanx.core.engine import CleanEngine


@pytest.fixture
def cli_engine(engine: CleanEngine) -> Iterator[CleanEngine]:
    """Make every command use the temporary engine."""
    with patch("cleanx.cli.common.CleanEngine.create", return_value=engine):
        yield engine


@pytest.fixture
def write_config() -> Callable[..., CleanxConfig]:
    """Factory saving a config file; scans report every size unless told otherwise."""

    def _write(min_size_bytes: int = 0, **clean: bool) -> CleanxConfig:
        config = CleanxConfig(
            scan=ScanSettings(min_size_bytes=min_size_bytes),
            clean=CleanSettings(**clean),
        )
        save_config(config)
        return config

    return _write
