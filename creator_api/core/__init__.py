"""
Core utilities shared across the Creator Intelligence API.

This package hosts configuration helpers (env vars, storage paths, timeouts)
and logging setup. Routers and services read settings from here instead of
touching os.environ directly.
"""
