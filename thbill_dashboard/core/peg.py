"""
Peg status and peg-history statistics.

History samples with |premium/discount| above PEG_HISTORY_MAX_ABS_PCT are
known bad data and never reach statistics, scoring or the chart.
"""

from typing import Dict, Any, List, Optional

import numpy as np

from ..formatting import format_compact_usd, parse_timestamp
from ..lookups import CHAIN_NAMES
from ..models import Peg, PegHistoryPoint
from ..thresholds import PEG_HISTORY_MAX_ABS_PCT, PEG_DEVIATION_BANDS


def filter_peg_history(points: List[PegHistoryPoint]) -> List[PegHistoryPoint]:
    """Drop null samples and artifacts (|pct| > 5)."""
    return [
        p for p in points
        if p.premium_discount_pct is not None
        and abs(p.premium_discount_pct) <= PEG_HISTORY_MAX_ABS_PCT
    ]


def mean_abs_deviation(points: List[PegHistoryPoint]) -> Optional[float]:
    """Mean |premium/discount| over valid samples, None if there are none."""
    valid = filter_peg_history(points)
    if not valid:
        return None
    values = np.array([p.premium_discount_pct for p in valid])
    return float(np.mean(np.abs(values)))


def summarize_peg_history(points: List[PegHistoryPoint]) -> Dict[str, Any]:
    """
    Count, range and mean |deviation| of the valid samples.

    latest_pct is the chronologically last sample with a parseable
    timestamp, matching the end of the chart series.
    """
    valid = filter_peg_history(points)
    if not valid:
        return {
            "count": 0,
            "excluded": len(points),
            "mean_abs_pct": None,
            "min_pct": None,
            "max_pct": None,
            "latest_pct": None,
        }
    values = np.array([p.premium_discount_pct for p in valid])
    series = build_peg_chart_series(valid)
    return {
        "count": len(valid),
        "excluded": len(points) - len(valid),
        "mean_abs_pct": float(np.mean(np.abs(values))),
        "min_pct": float(np.min(values)),
        "max_pct": float(np.max(values)),
        "latest_pct": series[-1]["premium_discount_pct"] if series else None,
    }


def build_peg_chart_series(points: List[PegHistoryPoint]) -> List[Dict[str, Any]]:
    """Chart-ready samples (UTC datetimes), artifacts and bad timestamps removed."""
    series = []
    for point in filter_peg_history(points):
        timestamp = parse_timestamp(point.timestamp)
        if timestamp is None:
            continue
        series.append({"timestamp": timestamp, "premium_discount_pct": point.premium_discount_pct})
    series.sort(key=lambda s: s["timestamp"])
    return series


def classify_peg_deviation(pct: Optional[float]) -> str:
    """Band an absolute premium/discount: tight / moderate / wide."""
    if pct is None:
        return "unavailable"
    deviation = abs(pct)
    if deviation <= PEG_DEVIATION_BANDS["tight"]:
        return "tight"
    if deviation <= PEG_DEVIATION_BANDS["moderate"]:
        return "moderate"
    return "wide"


def chain_deviation_pct(price: Optional[float], nav: Optional[float]) -> Optional[float]:
    if not price or not nav:
        return None
    return ((price - nav) / nav) * 100


def build_peg_status(peg: Optional[Peg]) -> Optional[Dict[str, Any]]:
    """
    NAV, VWAP and premium/discount with per-chain price rows.

    Returns None when the snapshot has no peg section.
    """
    if peg is None:
        return None

    chain_rows = []
    for chain, prices in peg.per_chain_prices.items():
        deviation = chain_deviation_pct(prices.vwap, peg.nav_per_share)
        chain_rows.append({
            "chain": CHAIN_NAMES.get(chain.lower(), chain),
            "price": prices.vwap,
            "volume_24h": prices.volume_24h,
            "volume_display": format_compact_usd(prices.volume_24h),
            "deviation_pct": deviation,
            "deviation_band": classify_peg_deviation(deviation),
        })

    return {
        "nav_per_share": peg.nav_per_share,
        "vwap": peg.vwap,
        "premium_discount_pct": peg.premium_discount_pct,
        "premium_discount_band": classify_peg_deviation(peg.premium_discount_pct),
        "chains": chain_rows,
    }
