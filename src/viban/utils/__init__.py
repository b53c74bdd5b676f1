"""Shared utilities."""

from .datetime import ensure_utc, from_iso, next_timestamp, now_utc, to_iso

__all__ = [
    "ensure_utc",
    "from_iso",
    "next_timestamp",
    "now_utc",
    "to_iso",
]
