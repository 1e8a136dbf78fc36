"""
Peg & Liquidity Rating.

Reduces three signals to a 1-5 star rating:
- Peg: mean absolute premium/discount over valid history
- Depth: summed 2% depth across pools
- Volume: total 24h secondary volume

Each axis falls back to DEFAULT_AXIS_SCORE when its input is missing, so
the rating is always defined.
"""

import math
from typing import Dict, Any, List, Optional, Tuple

from ..formatting import format_stars
from ..models import PegHistoryPoint, Pool
from ..thresholds import (
    DEFAULT_AXIS_SCORE,
    PEG_SCORE_THRESHOLDS,
    PEG_SCORE_FLOOR,
    DEPTH_SCORE_THRESHOLDS,
    DEPTH_SCORE_FLOOR,
    VOLUME_SCORE_THRESHOLDS,
    VOLUME_SCORE_FLOOR,
    STRONG_AXIS_SCORE,
    SIGNIFICANT_PEG_SCORE,
    RATING_MESSAGES,
)
from .liquidity import total_depth
from .peg import mean_abs_deviation

# Tie-break order when several axes share the minimum score
AXIS_PRIORITY = ["peg", "depth", "volume"]


# =============================================================================
# LADDERS
# =============================================================================

def score_below(value: float, thresholds: list, floor: int) -> Tuple[int, str]:
    """First threshold whose bound is strictly greater than value."""
    for t in thresholds:
        if value < t["bound"]:
            return (t["score"], t["justification"])
    return (floor, f"Value {value:,.2f} beyond the last threshold")


def score_above(value: float, thresholds: list, floor: int) -> Tuple[int, str]:
    """First threshold whose bound is strictly lower than value."""
    for t in thresholds:
        if value > t["bound"]:
            return (t["score"], t["justification"])
    return (floor, f"Value {value:,.0f} below the last threshold")


# =============================================================================
# AXIS SCORES
# =============================================================================

def calculate_peg_score(history: List[PegHistoryPoint]) -> Dict[str, Any]:
    """Score peg tightness from history, artifacts excluded."""
    avg = mean_abs_deviation(history)
    if avg is None:
        return {
            "score": DEFAULT_AXIS_SCORE,
            "value": None,
            "is_default": True,
            "justification": "No valid peg history - neutral score",
        }
    score, justification = score_below(avg, PEG_SCORE_THRESHOLDS, PEG_SCORE_FLOOR)
    return {
        "score": score,
        "value": avg,
        "is_default": False,
        "justification": f"Mean |premium/discount| {avg:.3f}%. {justification}",
    }


def calculate_depth_score(pools: Optional[List[Pool]]) -> Dict[str, Any]:
    """Score summed 2% depth; pools without depth data are ignored."""
    depth = total_depth(pools or [])
    if depth is None:
        return {
            "score": DEFAULT_AXIS_SCORE,
            "value": None,
            "is_default": True,
            "justification": "No depth data - neutral score",
        }
    score, justification = score_above(depth, DEPTH_SCORE_THRESHOLDS, DEPTH_SCORE_FLOOR)
    return {
        "score": score,
        "value": depth,
        "is_default": False,
        "justification": f"2% depth ${depth:,.0f}. {justification}",
    }


def calculate_volume_score(volume_24h: Optional[float]) -> Dict[str, Any]:
    if volume_24h is None:
        return {
            "score": DEFAULT_AXIS_SCORE,
            "value": None,
            "is_default": True,
            "justification": "No volume data - neutral score",
        }
    score, justification = score_above(volume_24h, VOLUME_SCORE_THRESHOLDS, VOLUME_SCORE_FLOOR)
    return {
        "score": score,
        "value": volume_24h,
        "is_default": False,
        "justification": f"24h volume ${volume_24h:,.0f}. {justification}",
    }


# =============================================================================
# COMPOSITE
# =============================================================================

def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def weakest_axis(scores: Dict[str, int]) -> str:
    """Axis with the lowest score; ties resolved by AXIS_PRIORITY."""
    lowest = min(scores[axis] for axis in AXIS_PRIORITY)
    for axis in AXIS_PRIORITY:
        if scores[axis] == lowest:
            return axis
    return AXIS_PRIORITY[0]


def rating_message(scores: Dict[str, int], all_default: bool = False) -> Tuple[Optional[str], str]:
    """
    Pick the weakest-link explanation.

    Returns:
        Tuple of (weakest axis or None when strong, message)
    """
    if all_default:
        return (None, RATING_MESSAGES["insufficient_data"])
    if min(scores.values()) >= STRONG_AXIS_SCORE:
        return (None, RATING_MESSAGES["strong"])

    axis = weakest_axis(scores)
    if axis == "peg":
        key = "peg_significant" if scores["peg"] <= SIGNIFICANT_PEG_SCORE else "peg_minor"
        return (axis, RATING_MESSAGES[key])
    return (axis, RATING_MESSAGES[axis])


def calculate_liquidity_rating(
    history: Optional[List[PegHistoryPoint]] = None,
    pools: Optional[List[Pool]] = None,
    volume_24h: Optional[float] = None,
) -> Dict[str, Any]:
    """
    Calculate the composite peg & liquidity star rating.

    Args:
        history: Peg history samples (artifacts are excluded internally)
        pools: Pools that passed the TVL floor
        volume_24h: Total 24h volume over those pools, None if unknown

    Returns:
        Dict with stars, star glyphs, per-axis breakdown, weakest axis and
        message. Never raises on missing inputs.
    """
    breakdown = {
        "peg": calculate_peg_score(history or []),
        "depth": calculate_depth_score(pools),
        "volume": calculate_volume_score(volume_24h),
    }
    scores = {axis: breakdown[axis]["score"] for axis in AXIS_PRIORITY}
    mean_score = sum(scores.values()) / len(scores)
    stars = round_half_up(mean_score)

    all_default = all(breakdown[axis]["is_default"] for axis in AXIS_PRIORITY)
    axis, message = rating_message(scores, all_default)

    return {
        "stars": stars,
        "stars_display": format_stars(stars),
        "mean_score": round(mean_score, 2),
        "scores": scores,
        "breakdown": breakdown,
        "weakest_axis": axis,
        "message": message,
    }
