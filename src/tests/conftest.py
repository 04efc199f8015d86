"""Pytest configuration and shared fixtures."""

import os
from typing import Any

import pytest

# Set test environment before importing settings
os.environ["ENV"] = "development"
os.environ["LOG_LEVEL"] = "DEBUG"
os.environ["LOG_FORMAT"] = "text"


@pytest.fixture
def sample_row_data() -> dict[str, Any]:
    """Sample flattened realm row for testing."""
    return {
        "cluster_id": "1084",
        "realm_name": "Tarren Mill",
        "status_type": "UP",
        "status_name": "Up",
        "population_type": "FULL",
        "population_name": "Full",
        "has_queue": True,
        "realm_type": "Normal",
    }


@pytest.fixture
def clean_settings_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove API settings that may leak in from the developer's shell."""
    for name in ("BNET_ACCESS_TOKEN", "BNET_REQUEST_DELAY_MS", "BNET_TIMEOUT_SECONDS"):
        monkeypatch.delenv(name, raising=False)


# =============================================================================
# Markers
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line(
        "markers", "integration: Integration tests (require external services)"
    )
    config.addinivalue_line("markers", "slow: Slow tests")
