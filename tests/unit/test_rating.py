"""
Unit tests for the peg & liquidity rating.

Tests per-axis ladders, the composite star count and the weakest-link
message selection, including fully missing inputs.
"""

import pytest
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from thbill_dashboard.core.rating import (
    calculate_peg_score,
    calculate_depth_score,
    calculate_volume_score,
    calculate_liquidity_rating,
    rating_message,
    round_half_up,
    weakest_axis,
)
from thbill_dashboard.models import PegHistoryPoint, Pool
from thbill_dashboard.thresholds import RATING_MESSAGES


def history(*values):
    return [PegHistoryPoint(timestamp=f"2026-10-{i + 1:02d}T00:00:00", premium_discount_pct=v)
            for i, v in enumerate(values)]


def depth_pools(total):
    return [Pool(tvl_usd=100_000, depth_2pct_buy=total, depth_2pct_sell=total)]


class TestPegScore:
    """Tests for the peg axis."""

    @pytest.mark.unit
    @pytest.mark.scoring
    @pytest.mark.parametrize("avg,expected", [
        (0.0, 5),
        (0.149, 5),
        (0.15, 4),
        (0.29, 4),
        (0.30, 3),
        (0.40, 3),
        (0.50, 2),
        (0.99, 2),
        (1.00, 1),
        (4.9, 1),
    ])
    def test_thresholds(self, avg, expected):
        assert calculate_peg_score(history(avg, -avg))["score"] == expected

    @pytest.mark.unit
    @pytest.mark.scoring
    def test_artifacts_excluded(self):
        result = calculate_peg_score(history(10.6, 0.2, -6))
        assert result["value"] == pytest.approx(0.2)
        assert result["score"] == 4

    @pytest.mark.unit
    @pytest.mark.scoring
    @pytest.mark.parametrize("points", [[], history(10.6, -6), history(None)])
    def test_default_without_valid_history(self, points):
        result = calculate_peg_score(points)
        assert result["score"] == 3
        assert result["is_default"] is True


class TestDepthAndVolumeScores:
    """Tests for the depth and volume axes."""

    @pytest.mark.unit
    @pytest.mark.scoring
    @pytest.mark.parametrize("depth,expected", [
        (2_000_001, 5),
        (2_000_000, 4),
        (1_500_000, 4),
        (1_000_000, 3),
        (500_001, 3),
        (500_000, 2),
        (100_001, 2),
        (100_000, 1),
        (0, 1),
    ])
    def test_depth_thresholds(self, depth, expected):
        assert calculate_depth_score(depth_pools(depth))["score"] == expected

    @pytest.mark.unit
    @pytest.mark.scoring
    @pytest.mark.parametrize("pools", [None, [], [Pool(tvl_usd=10_000)]])
    def test_depth_default(self, pools):
        result = calculate_depth_score(pools)
        assert result["score"] == 3
        assert result["is_default"] is True

    @pytest.mark.unit
    @pytest.mark.scoring
    @pytest.mark.parametrize("volume,expected", [
        (5_000_001, 5),
        (5_000_000, 4),
        (1_000_001, 4),
        (1_000_000, 3),
        (500_001, 3),
        (200_000, 2),
        (100_000, 1),
        (0, 1),
    ])
    def test_volume_thresholds(self, volume, expected):
        assert calculate_volume_score(volume)["score"] == expected

    @pytest.mark.unit
    @pytest.mark.scoring
    def test_volume_default(self):
        assert calculate_volume_score(None)["score"] == 3


class TestCompositeRating:
    """Tests for the composite star rating."""

    @pytest.mark.unit
    @pytest.mark.scoring
    @pytest.mark.smoke
    def test_three_star_example(self):
        """Peg 0.40 -> 3, depth 1.5M -> 4, volume 200K -> 2 => 3 stars, volume weakest."""
        rating = calculate_liquidity_rating(history(0.40, -0.40), depth_pools(1_500_000), 200_000)

        assert rating["scores"] == {"peg": 3, "depth": 4, "volume": 2}
        assert rating["stars"] == 3
        assert rating["stars_display"] == "★★★☆☆"
        assert rating["weakest_axis"] == "volume"
        assert rating["message"] == "Low trading volume"

    @pytest.mark.unit
    @pytest.mark.scoring
    def test_all_inputs_missing(self):
        rating = calculate_liquidity_rating(None, None, None)
        assert rating["stars"] == 3
        assert rating["scores"] == {"peg": 3, "depth": 3, "volume": 3}
        assert rating["message"] == RATING_MESSAGES["insufficient_data"]

    @pytest.mark.unit
    @pytest.mark.scoring
    def test_strong_when_every_axis_at_least_four(self):
        rating = calculate_liquidity_rating(history(0.1), depth_pools(3_000_000), 1_500_000)
        assert rating["scores"] == {"peg": 5, "depth": 5, "volume": 4}
        assert rating["stars"] == 5
        assert rating["weakest_axis"] is None
        assert rating["message"] == RATING_MESSAGES["strong"]

    @pytest.mark.unit
    @pytest.mark.scoring
    def test_deterministic(self):
        args = (history(0.2, 0.3), depth_pools(600_000), 750_000)
        assert calculate_liquidity_rating(*args) == calculate_liquidity_rating(*args)

    @pytest.mark.unit
    @pytest.mark.scoring
    @pytest.mark.parametrize("value,expected", [(2.5, 3), (3.49, 3), (3.5, 4), (4.333, 4), (1.0, 1)])
    def test_round_half_up(self, value, expected):
        assert round_half_up(value) == expected


class TestRatingMessage:
    """Tests for weakest-link explanation."""

    @pytest.mark.unit
    @pytest.mark.scoring
    def test_tie_prefers_peg_then_depth(self):
        assert weakest_axis({"peg": 2, "depth": 2, "volume": 2}) == "peg"
        assert weakest_axis({"peg": 4, "depth": 2, "volume": 2}) == "depth"

    @pytest.mark.unit
    @pytest.mark.scoring
    @pytest.mark.parametrize("peg,expected", [
        (1, "peg_significant"),
        (2, "peg_significant"),
        (3, "peg_minor"),
    ])
    def test_peg_severity(self, peg, expected):
        axis, message = rating_message({"peg": peg, "depth": 4, "volume": 5})
        assert axis == "peg"
        assert message == RATING_MESSAGES[expected]

    @pytest.mark.unit
    @pytest.mark.scoring
    def test_depth_message(self):
        axis, message = rating_message({"peg": 5, "depth": 2, "volume": 4})
        assert axis == "depth"
        assert message == RATING_MESSAGES["depth"]

    @pytest.mark.unit
    @pytest.mark.scoring
    def test_partial_defaults_still_name_weakest_axis(self):
        """Only peg data missing: depth and volume still drive the message."""
        rating = calculate_liquidity_rating([], depth_pools(50_000), 5_000)
        assert rating["scores"] == {"peg": 3, "depth": 1, "volume": 1}
        assert rating["stars"] == 2
        assert rating["weakest_axis"] == "depth"
