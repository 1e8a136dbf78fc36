"""
Snapshot Fetcher - loads the metrics snapshot and peg history documents.

Sources are resolved against DATA_CONFIG["base_url"], which may be an
http(s) URL or a local directory.
"""

import os
import json
from typing import Any, List, Optional

import requests

from ..config.settings import DATA_CONFIG
from ..models import MetricsSnapshot, PegHistoryPoint, parse_peg_history


class SnapshotFetchError(Exception):
    """The metrics snapshot could not be fetched or parsed."""

    def __init__(self, location: str, cause: Exception):
        self.location = location
        self.cause = cause
        super().__init__(f"Failed to load {location}: {cause}")


def is_remote(base_url: str) -> bool:
    return base_url.startswith(("http://", "https://"))


def resolve_location(base_url: str, path: str) -> str:
    if is_remote(base_url):
        return f"{base_url.rstrip('/')}/{path.lstrip('/')}"
    return os.path.join(base_url, path)


def load_json(location: str, timeout: Optional[float] = None) -> Any:
    """
    Load a JSON document from a URL or a file path.

    Raises:
        requests.RequestException: Transport error or non-success status
        OSError: File missing or unreadable
        ValueError: Body is not valid JSON
    """
    if is_remote(location):
        response = requests.get(location, timeout=timeout)
        response.raise_for_status()
        return response.json()
    with open(location, "r") as f:
        return json.load(f)


def fetch_snapshot(
    base_url: Optional[str] = None,
    timeout: Optional[float] = None,
) -> MetricsSnapshot:
    """
    Fetch and parse the metrics snapshot.

    Raises:
        SnapshotFetchError: On any transport, status or parse failure
    """
    base_url = base_url or DATA_CONFIG["base_url"]
    location = resolve_location(base_url, DATA_CONFIG["metrics_path"])
    if timeout is None:
        timeout = DATA_CONFIG["request_timeout"]

    try:
        data = load_json(location, timeout=timeout)
    except (requests.RequestException, OSError, ValueError) as e:
        raise SnapshotFetchError(location, e) from e

    if not isinstance(data, dict):
        raise SnapshotFetchError(location, ValueError("snapshot is not a JSON object"))

    return MetricsSnapshot.from_dict(data)


def fetch_peg_history(
    base_url: Optional[str] = None,
    timeout: Optional[float] = None,
) -> List[PegHistoryPoint]:
    """Fetch peg history. Any failure yields an empty history."""
    base_url = base_url or DATA_CONFIG["base_url"]
    location = resolve_location(base_url, DATA_CONFIG["history_path"])
    if timeout is None:
        timeout = DATA_CONFIG["request_timeout"]

    try:
        data = load_json(location, timeout=timeout)
    except (requests.RequestException, OSError, ValueError) as e:
        print(f"  Warning: peg history unavailable ({e})")
        return []

    return parse_peg_history(data)
