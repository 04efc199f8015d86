"""Realm Status service: connected realm status per region."""
