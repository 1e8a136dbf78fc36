"""
thBILL Risk Dashboard.

Read-only risk monitoring for the thBILL tokenized money-market asset:
- Collateral backing breakdown and treasury coverage
- Redemption flow and peg deviation
- Secondary-market liquidity and DeFi market usage
- Composite 1-5 star peg & liquidity rating

Quick Start:
    from thbill_dashboard import fetch_snapshot, fetch_peg_history, derive_dashboard

    snapshot = fetch_snapshot("https://example.org/thbill")
    derived = derive_dashboard(snapshot, fetch_peg_history("https://example.org/thbill"))
    print(derived["rating"]["stars_display"], derived["rating"]["message"])
"""

__version__ = "1.0.0"

from .models import MetricsSnapshot, PegHistoryPoint, parse_peg_history

from .core import (
    build_backing_rows,
    build_treasury_rows,
    build_liquidity_table,
    categorize_markets,
    parse_pendle_metadata,
    calculate_liquidity_rating,
    derive_dashboard,
)

from .fetchers import SnapshotFetchError, fetch_snapshot, fetch_peg_history

from .refresh import run_refresh_cycle, run_forever, LatestOnlyPresenter

__all__ = [
    # Version
    "__version__",
    # Models
    "MetricsSnapshot",
    "PegHistoryPoint",
    "parse_peg_history",
    # Derivation
    "build_backing_rows",
    "build_treasury_rows",
    "build_liquidity_table",
    "categorize_markets",
    "parse_pendle_metadata",
    "calculate_liquidity_rating",
    "derive_dashboard",
    # Fetchers
    "SnapshotFetchError",
    "fetch_snapshot",
    "fetch_peg_history",
    # Refresh
    "run_refresh_cycle",
    "run_forever",
    "LatestOnlyPresenter",
]
