"""
Unit tests for thresholds and lookup tables.

Validates that score ladders are ordered and complete, and that the fixed
lookup tables are normalized the way the derivations expect.
"""

import pytest
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from thbill_dashboard.thresholds import (
    PEG_SCORE_THRESHOLDS,
    DEPTH_SCORE_THRESHOLDS,
    VOLUME_SCORE_THRESHOLDS,
    RATING_MESSAGES,
    DEFAULT_AXIS_SCORE,
    MIN_POOL_TVL_USD,
)
from thbill_dashboard.lookups import (
    TOKEN_SYMBOLS,
    MONTH_ABBREVIATIONS,
    CATEGORY_LABELS,
    PROTOCOL_CATEGORIES,
)


class TestScoreLadders:
    """Tests for rating ladder structure."""

    @pytest.mark.unit
    @pytest.mark.scoring
    def test_peg_ladder_ascending_bounds_descending_scores(self):
        bounds = [t["bound"] for t in PEG_SCORE_THRESHOLDS]
        scores = [t["score"] for t in PEG_SCORE_THRESHOLDS]
        assert bounds == sorted(bounds)
        assert scores == [5, 4, 3, 2]

    @pytest.mark.unit
    @pytest.mark.scoring
    @pytest.mark.parametrize("ladder", [DEPTH_SCORE_THRESHOLDS, VOLUME_SCORE_THRESHOLDS])
    def test_above_ladders_descending(self, ladder):
        bounds = [t["bound"] for t in ladder]
        assert bounds == sorted(bounds, reverse=True)
        assert [t["score"] for t in ladder] == [5, 4, 3, 2]

    @pytest.mark.unit
    @pytest.mark.scoring
    def test_every_threshold_has_justification(self):
        for ladder in (PEG_SCORE_THRESHOLDS, DEPTH_SCORE_THRESHOLDS, VOLUME_SCORE_THRESHOLDS):
            for t in ladder:
                assert t["justification"]

    @pytest.mark.unit
    @pytest.mark.scoring
    def test_messages_cover_every_axis(self):
        for key in ("strong", "peg_significant", "peg_minor", "depth", "volume"):
            assert key in RATING_MESSAGES
        assert RATING_MESSAGES["volume"] == "Low trading volume"

    @pytest.mark.unit
    @pytest.mark.scoring
    def test_constants(self):
        assert DEFAULT_AXIS_SCORE == 3
        assert MIN_POOL_TVL_USD == 5_000


class TestLookups:
    """Tests for fixed lookup tables."""

    @pytest.mark.unit
    def test_token_addresses_lower_case(self):
        for address in TOKEN_SYMBOLS:
            assert address == address.lower()
            assert len(address) == 42

    @pytest.mark.unit
    def test_months_complete(self):
        assert sorted(MONTH_ABBREVIATIONS.values()) == list(range(1, 13))

    @pytest.mark.unit
    def test_every_category_has_label(self):
        for category in set(PROTOCOL_CATEGORIES.values()):
            assert category in CATEGORY_LABELS
