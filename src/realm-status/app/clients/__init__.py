"""Clients for the realm status service."""

from .battlenet import (
    AuthError,
    BattleNetClient,
    EmptyIndexError,
    MalformedPayloadError,
    RealmStatusError,
    TransportError,
    extract_cluster_id,
    extract_cluster_ids,
    parse_connected_realm,
)

__all__ = [
    "AuthError",
    "BattleNetClient",
    "EmptyIndexError",
    "MalformedPayloadError",
    "RealmStatusError",
    "TransportError",
    "extract_cluster_id",
    "extract_cluster_ids",
    "parse_connected_realm",
]
