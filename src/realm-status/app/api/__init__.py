"""API endpoints for the realm status service."""

from . import health, realms

__all__ = ["health", "realms"]
