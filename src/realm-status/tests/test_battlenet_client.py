"""Tests for the game-data API client."""

from unittest.mock import AsyncMock, patch

import httpx
import pytest
from app.clients.battlenet import (
    AuthError,
    BattleNetClient,
    EmptyIndexError,
    MalformedPayloadError,
    TransportError,
    extract_cluster_id,
    extract_cluster_ids,
    parse_connected_realm,
)
from realm_factories import make_detail_payload, make_response

from shared.models import PopulationType, StatusType


@pytest.fixture
def battlenet_client():
    return BattleNetClient(timeout=5.0)


def patch_http(client: BattleNetClient, **get_kwargs):
    """Patch the underlying httpx client; returns (patcher, mock_http)."""
    mock_http = AsyncMock()
    mock_http.get = AsyncMock(**get_kwargs)
    return patch.object(client, "_get_client", AsyncMock(return_value=mock_http)), mock_http


class TestAuthentication:
    def test_bearer_auth_headers(self, battlenet_client):
        headers = battlenet_client._get_auth_headers("secret-token")

        assert headers == {"Authorization": "Bearer secret-token"}

    @pytest.mark.parametrize("credential", [None, ""])
    def test_missing_credential_raises(self, battlenet_client, credential):
        with pytest.raises(AuthError):
            battlenet_client._get_auth_headers(credential)

    async def test_missing_credential_makes_no_request(self, battlenet_client, eu_config):
        patcher, mock_http = patch_http(battlenet_client)

        with patcher, pytest.raises(AuthError):
            await battlenet_client.get_connected_realm_index(eu_config, None)

        mock_http.get.assert_not_called()


class TestClusterIdExtraction:
    @pytest.mark.parametrize(
        ("href", "expected"),
        [
            ("https://eu.api.blizzard.com/data/wow/connected-realm/1084?namespace=dynamic-eu", "1084"),
            ("https://eu.api.blizzard.com/data/wow/connected-realm/1305", "1305"),
            ("1403?namespace=dynamic-eu&locale=en_GB", "1403"),
            ("https://eu.api.blizzard.com/data/wow/connected-realm/", None),
            ("https://eu.api.blizzard.com/data/wow/connected-realm/?namespace=dynamic-eu", None),
            ("https://eu.api.blizzard.com/data/wow/connected-realm/1084\x01?namespace=dynamic-eu", None),
            ("https://eu.api.blizzard.com/data/wow/connected-realm/10 84", None),
            ("", None),
            (None, None),
            (42, None),
        ],
    )
    def test_extract_cluster_id(self, href, expected):
        assert extract_cluster_id(href) == expected

    def test_malformed_links_are_dropped(self):
        hrefs = [
            "https://x/data/wow/connected-realm/1?namespace=a",
            None,
            "https://x/data/wow/connected-realm/",
            "https://x/data/wow/connected-realm/2",
        ]

        assert extract_cluster_ids(hrefs) == ["1", "2"]


class TestConnectedRealmIndex:
    async def test_index_success(self, battlenet_client, eu_config, index_payload):
        patcher, mock_http = patch_http(
            battlenet_client, return_value=make_response(json_data=index_payload)
        )

        with patcher:
            hrefs = await battlenet_client.get_connected_realm_index(eu_config, "token")

        assert len(hrefs) == 2
        assert hrefs[0].endswith("/connected-realm/1084?namespace=dynamic-eu")

        mock_http.get.assert_awaited_once_with(
            "https://eu.api.blizzard.com/data/wow/connected-realm/index",
            headers={"Authorization": "Bearer token"},
            params={"namespace": "dynamic-eu", "locale": "en_GB"},
        )

    async def test_resolve_cluster_ids(self, battlenet_client, eu_config, index_payload):
        patcher, _ = patch_http(battlenet_client, return_value=make_response(json_data=index_payload))

        with patcher:
            cluster_ids = await battlenet_client.resolve_cluster_ids(eu_config, "token")

        assert cluster_ids == ["1084", "1305"]

    async def test_index_http_error(self, battlenet_client, eu_config):
        patcher, _ = patch_http(
            battlenet_client,
            return_value=make_response(503, reason_phrase="Service Unavailable"),
        )

        with patcher, pytest.raises(TransportError) as exc_info:
            await battlenet_client.get_connected_realm_index(eu_config, "token")

        assert exc_info.value.status == 503
        assert exc_info.value.status_text == "Service Unavailable"
        assert "503 - Service Unavailable" in str(exc_info.value)

    async def test_index_connection_error(self, battlenet_client, eu_config):
        patcher, _ = patch_http(
            battlenet_client, side_effect=httpx.ConnectError("Connection refused")
        )

        with patcher, pytest.raises(TransportError) as exc_info:
            await battlenet_client.get_connected_realm_index(eu_config, "token")

        assert exc_info.value.status is None
        assert "Connection refused" in str(exc_info.value)

    async def test_invalid_url_is_transport_error(self, battlenet_client, eu_config):
        patcher, _ = patch_http(
            battlenet_client,
            side_effect=httpx.InvalidURL("Invalid non-printable ASCII character in URL"),
        )

        with patcher, pytest.raises(TransportError) as exc_info:
            await battlenet_client.get_connected_realm("1084\x01", eu_config, "token")

        assert exc_info.value.status is None
        assert "non-printable" in str(exc_info.value)

    @pytest.mark.parametrize(
        "payload",
        [{"connected_realms": []}, {}, {"connected_realms": None}],
    )
    async def test_empty_index(self, battlenet_client, eu_config, payload):
        patcher, _ = patch_http(battlenet_client, return_value=make_response(json_data=payload))

        with patcher, pytest.raises(EmptyIndexError, match="No connected realms found"):
            await battlenet_client.get_connected_realm_index(eu_config, "token")

    async def test_index_with_only_malformed_links_is_empty(self, battlenet_client, eu_config):
        payload = {"connected_realms": [{"href": None}, {"link": "x"}, "garbage"]}
        patcher, _ = patch_http(battlenet_client, return_value=make_response(json_data=payload))

        with patcher, pytest.raises(EmptyIndexError):
            await battlenet_client.resolve_cluster_ids(eu_config, "token")


class TestConnectedRealmDetail:
    async def test_detail_success(self, battlenet_client, eu_config):
        payload = make_detail_payload(
            [("Tarren Mill", "Normal"), ("Dentarg", "Normal")],
            population_type="FULL",
            has_queue=True,
        )
        patcher, mock_http = patch_http(battlenet_client, return_value=make_response(json_data=payload))

        with patcher:
            cluster = await battlenet_client.get_connected_realm("1084", eu_config, "token")

        assert cluster.id == "1084"
        assert cluster.status_type == StatusType.UP
        assert cluster.population_type == PopulationType.FULL
        assert cluster.has_queue is True
        assert [m.name for m in cluster.members] == ["Tarren Mill", "Dentarg"]
        assert mock_http.get.await_args.args[0] == (
            "https://eu.api.blizzard.com/data/wow/connected-realm/1084"
        )

    async def test_detail_not_found(self, battlenet_client, eu_config):
        patcher, _ = patch_http(
            battlenet_client, return_value=make_response(404, reason_phrase="Not Found")
        )

        with patcher, pytest.raises(TransportError) as exc_info:
            await battlenet_client.get_connected_realm("9999", eu_config, "token")

        assert exc_info.value.status == 404

    async def test_detail_invalid_json(self, battlenet_client, eu_config):
        response = make_response()
        response.json.side_effect = ValueError("Expecting value")
        patcher, _ = patch_http(battlenet_client, return_value=response)

        with patcher, pytest.raises(MalformedPayloadError):
            await battlenet_client.get_connected_realm("1084", eu_config, "token")


class TestDetailParsing:
    def test_parse_defaults(self):
        payload = {
            "status": {"type": "DOWN"},
            "population": {"type": "LOW"},
            "realms": [{"name": "Silvermoon"}],
        }

        cluster = parse_connected_realm("3391", payload)

        assert cluster.status_name == "Down"
        assert cluster.population_name == "Low"
        assert cluster.has_queue is False
        assert cluster.members[0].type_name == ""

    def test_parse_localized_name_map(self):
        payload = make_detail_payload([("Kazzak", "Normal")])
        payload["status"]["name"] = {"en_GB": "Up"}

        cluster = parse_connected_realm("1305", payload)

        assert cluster.status_name == "Up"

    def test_unknown_population_type_is_kept(self):
        payload = make_detail_payload([("Kazzak", "Normal")], population_type="LOCKED")

        cluster = parse_connected_realm("1305", payload)

        assert cluster.population_type == "LOCKED"
        assert not isinstance(cluster.population_type, PopulationType)

    def test_empty_realm_list_is_valid(self):
        payload = make_detail_payload([])

        cluster = parse_connected_realm("1305", payload)

        assert cluster.members == ()

    @pytest.mark.parametrize("missing", ["status", "population", "realms"])
    def test_missing_required_field(self, missing):
        payload = make_detail_payload([("Kazzak", "Normal")])
        del payload[missing]

        with pytest.raises(MalformedPayloadError, match="1305"):
            parse_connected_realm("1305", payload)

    def test_missing_status_type(self):
        payload = make_detail_payload([("Kazzak", "Normal")])
        payload["status"] = {"name": "Up"}

        with pytest.raises(MalformedPayloadError):
            parse_connected_realm("1305", payload)

    def test_unknown_status_type(self):
        payload = make_detail_payload([("Kazzak", "Normal")], status_type="MAINTENANCE")

        with pytest.raises(MalformedPayloadError):
            parse_connected_realm("1305", payload)

    def test_realm_without_name(self):
        payload = make_detail_payload([("Kazzak", "Normal")])
        payload["realms"].append({"type": {"name": "Normal"}})

        with pytest.raises(MalformedPayloadError):
            parse_connected_realm("1305", payload)

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [(True, True), (False, False), ("true", True), ("false", False), (None, False)],
    )
    def test_has_queue_is_parsed_not_truthiness(self, raw, expected):
        payload = make_detail_payload([("Kazzak", "Normal")])
        payload["has_queue"] = raw

        cluster = parse_connected_realm("1305", payload)

        assert cluster.has_queue is expected

    def test_has_queue_garbage_is_malformed(self):
        payload = make_detail_payload([("Kazzak", "Normal")])
        payload["has_queue"] = "sometimes"

        with pytest.raises(MalformedPayloadError):
            parse_connected_realm("1305", payload)
