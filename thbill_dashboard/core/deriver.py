"""
Metrics Deriver - one pass from fetched documents to dashboard data.

Output is plain dicts/lists (no presentation types) so any presenter can
consume it.
"""

from typing import Dict, Any, List, Optional

from ..formatting import format_date, parse_timestamp
from ..models import MetricsSnapshot, PegHistoryPoint
from .backing import (
    build_backing_rows,
    build_treasury_rows,
    summarize_backing_ratio,
    summarize_redemption_flow,
    summarize_tvl,
    compare_theo_reported,
)
from .defi_markets import categorize_markets
from .liquidity import build_liquidity_table, filter_pools
from .peg import build_peg_status, build_peg_chart_series, summarize_peg_history
from .rating import calculate_liquidity_rating


def derive_dashboard(
    snapshot: MetricsSnapshot,
    history: Optional[List[PegHistoryPoint]] = None,
) -> Dict[str, Any]:
    """
    Derive every dashboard section from a snapshot and peg history.

    Args:
        snapshot: Parsed metrics snapshot
        history: Peg history (empty when the history fetch failed)

    Returns:
        Dict keyed by dashboard section. Sections whose source data is
        absent are None (or empty lists) rather than errors.
    """
    history = history or []
    timestamp = parse_timestamp(snapshot.timestamp)

    liquidity = None
    surviving_pools = []
    volume_24h = None
    if snapshot.secondary_liquidity is not None:
        pools = snapshot.secondary_liquidity.pools
        liquidity = build_liquidity_table(pools)
        surviving_pools = filter_pools(pools)
        volume_24h = liquidity["total_volume_24h"]

    return {
        "timestamp": timestamp,
        "last_updated": format_date(snapshot.timestamp),
        "tvl": summarize_tvl(snapshot.tvl),
        "backing_ratio": summarize_backing_ratio(snapshot.backing),
        "redemption_flow": summarize_redemption_flow(snapshot.redemption_flow),
        "backing_rows": build_backing_rows(snapshot.backing),
        "treasury_rows": build_treasury_rows(snapshot.backing),
        "theo_cross_check": compare_theo_reported(snapshot.theo_reported, snapshot.backing),
        "peg": build_peg_status(snapshot.peg),
        "peg_history": build_peg_chart_series(history),
        "peg_history_summary": summarize_peg_history(history),
        "liquidity": liquidity,
        "defi_markets": categorize_markets(
            snapshot.defi_markets,
            as_of=timestamp.date() if timestamp else None,
        ),
        "rating": calculate_liquidity_rating(history, surviving_pools, volume_24h),
    }
