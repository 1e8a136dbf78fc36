"""
Pytest configuration and fixtures for the thBILL Risk Dashboard.

This file contains shared fixtures used across all test modules.
Fixtures follow the pattern: factory functions returning fresh dicts.
"""

import pytest
import json
import sys
from pathlib import Path
from typing import Dict, Any, List
from unittest.mock import MagicMock, patch

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from thbill_dashboard.models import MetricsSnapshot, parse_peg_history


# =============================================================================
# PATH FIXTURES
# =============================================================================

@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def sample_data_dir(project_root: Path) -> Path:
    """Directory laid out like the published data site (contains data/)."""
    return project_root / "sample_data"


# =============================================================================
# SNAPSHOT FIXTURES
# =============================================================================

@pytest.fixture
def sample_metrics(sample_data_dir: Path) -> Dict[str, Any]:
    """Raw sample metrics document."""
    with open(sample_data_dir / "data" / "thbill_metrics.json", "r") as f:
        return json.load(f)


@pytest.fixture
def sample_history_raw(sample_data_dir: Path) -> List[Dict[str, Any]]:
    with open(sample_data_dir / "data" / "peg_history.json", "r") as f:
        return json.load(f)


@pytest.fixture
def sample_snapshot(sample_metrics) -> MetricsSnapshot:
    return MetricsSnapshot.from_dict(sample_metrics)


@pytest.fixture
def sample_history(sample_history_raw):
    return parse_peg_history(sample_history_raw)


@pytest.fixture
def pool_factory():
    """
    Factory fixture for raw pool dicts.

    Usage:
        def test_something(pool_factory):
            pool = pool_factory(tvl_usd=10_000, depth_2pct_buy=None)
    """
    def _create_pool(**overrides) -> Dict[str, Any]:
        base = {
            "market": "Test Pool",
            "pair": "0xfdd22ce6d1f66bc0ec89b20bf16ccb6670f55a5a/0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48",
            "chain": "ethereum",
            "tvl_usd": 100_000,
            "volume_24h": 10_000,
            "spread": 0.1,
            "depth_2pct_buy": 20_000,
            "depth_2pct_sell": 30_000,
        }
        base.update(overrides)
        return base

    return _create_pool


@pytest.fixture
def backing_factory():
    """Factory fixture for raw backing dicts (minimal shape by default)."""
    def _create_backing(**overrides) -> Dict[str, Any]:
        base = {
            "thbill_supply": 1000,
            "ultra_total": 950,
            "treasury_usdc": 30,
        }
        base.update(overrides)
        return base

    return _create_backing


# =============================================================================
# MOCK FIXTURES FOR HTTP
# =============================================================================

@pytest.fixture
def mock_requests_get(sample_metrics, sample_history_raw):
    """
    Mock requests.get serving the sample documents by URL suffix.

    Usage:
        def test_fetch(mock_requests_get):
            snapshot = fetch_snapshot("https://example.org")
    """
    def _respond(url, timeout=None):
        response = MagicMock()
        response.status_code = 200
        response.raise_for_status.return_value = None
        if url.endswith("thbill_metrics.json"):
            response.json.return_value = sample_metrics
        else:
            response.json.return_value = sample_history_raw
        return response

    with patch("thbill_dashboard.fetchers.snapshot.requests.get", side_effect=_respond) as mock_get:
        yield mock_get


class RecordingPresenter:
    """Presenter double that records every call."""

    def __init__(self):
        self.renders = []
        self.errors = []

    def render(self, derived, sequence):
        self.renders.append((sequence, derived))

    def render_error(self, message, sequence):
        self.errors.append((sequence, message))


@pytest.fixture
def presenter() -> RecordingPresenter:
    return RecordingPresenter()
