"""
Data fetchers for the upstream JSON documents.

- fetch_snapshot() - metrics snapshot, raises SnapshotFetchError on failure
- fetch_peg_history() - peg history, empty list on failure
"""

from .snapshot import (
    SnapshotFetchError,
    fetch_snapshot,
    fetch_peg_history,
    load_json,
    resolve_location,
)

__all__ = [
    "SnapshotFetchError",
    "fetch_snapshot",
    "fetch_peg_history",
    "load_json",
    "resolve_location",
]
