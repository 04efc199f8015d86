"""Test fixtures for the Realm Status service."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from realm_factories import make_cluster

from shared.config import RegionConfig


@pytest.fixture
def eu_config() -> RegionConfig:
    return RegionConfig(
        base_url="https://eu.api.blizzard.com",
        namespace="dynamic-eu",
        locale="en_GB",
    )


@pytest.fixture
def us_config() -> RegionConfig:
    return RegionConfig(
        base_url="https://us.api.blizzard.com",
        namespace="dynamic-us",
        locale="en_US",
    )


@pytest.fixture
def index_payload() -> dict[str, Any]:
    return {
        "connected_realms": [
            {"href": "https://eu.api.blizzard.com/data/wow/connected-realm/1084?namespace=dynamic-eu"},
            {"href": "https://eu.api.blizzard.com/data/wow/connected-realm/1305?namespace=dynamic-eu"},
        ]
    }


@pytest.fixture
def mock_battlenet():
    """Mock BattleNetClient with two healthy connected realms.

    Cluster 1084 has 2 realms, cluster 1305 has 3.
    """
    clusters = {
        "1084": make_cluster("1084", ["Tarren Mill", "Dentarg"], population_type="FULL", has_queue=True),
        "1305": make_cluster(
            "1305",
            ["Kazzak", "Ravencrest", "Argent Dawn"],
            status_type="DOWN",
            population_type="HIGH",
        ),
    }

    async def get_connected_realm(cluster_id, config, credential):
        return clusters[cluster_id]

    client = MagicMock()
    client.resolve_cluster_ids = AsyncMock(return_value=["1084", "1305"])
    client.get_connected_realm = AsyncMock(side_effect=get_connected_realm)
    client.close = AsyncMock()
    return client
