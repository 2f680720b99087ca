"""
Root Pytest Fixtures.

Shared fixtures available to all test types.

Every test runs with HASS_API_URL and HASS_API_TOKEN unset, from an empty
working directory (so no stray .env is read), with cached settings cleared.
"""

from collections.abc import Generator

import pytest

from hass_cli.core.config import get_settings
from hass_cli.core.logging import setup_logging


@pytest.fixture(autouse=True)
def _isolated_environment(
    monkeypatch: pytest.MonkeyPatch, tmp_path,
) -> Generator[None, None, None]:
    """Start each test without connection settings or cached config."""
    monkeypatch.delenv("HASS_API_URL", raising=False)
    monkeypatch.delenv("HASS_API_TOKEN", raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def _quiet_logging() -> None:
    """Configure structlog without handlers so no test writes logs to stdout."""
    setup_logging(enable_console=False, enable_file_logging=False)

