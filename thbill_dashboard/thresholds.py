"""
Risk Scoring Thresholds and Justifications.

Fixed constants used by the thBILL dashboard derivations:
- Pool inclusion floor for the secondary-liquidity section
- Peg / depth / volume score ladders for the 1-5 star rating
- Status bands for backing ratio and peg deviation

Each score ladder entry includes:
- bound: The numeric threshold
- score: The score assigned when the metric clears this bound
- justification: Why this threshold was chosen
"""

# =============================================================================
# LIQUIDITY SECTION
# =============================================================================

# Pools below this TVL are dust and excluded from the table and every aggregate
MIN_POOL_TVL_USD = 5_000

# Money market / DEX tables show at most this many rows (Pendle is uncapped)
DEFI_TABLE_MAX_ROWS = 10

# =============================================================================
# PEG HISTORY
# =============================================================================

# Samples with |premium/discount| above this are instrumentation artifacts
PEG_HISTORY_MAX_ABS_PCT = 5.0

# =============================================================================
# RATING LADDERS
# =============================================================================

# Applied when an axis has no usable input
DEFAULT_AXIS_SCORE = 3

# Strictly-below ladder: first entry whose bound is greater than the value wins
PEG_SCORE_THRESHOLDS = [
    {
        "bound": 0.15,
        "score": 5,
        "justification": "Average deviation under 15bps - trades as a cash equivalent",
    },
    {
        "bound": 0.30,
        "score": 4,
        "justification": "Average deviation under 30bps - tight peg with occasional drift",
    },
    {
        "bound": 0.50,
        "score": 3,
        "justification": "Average deviation under 50bps - acceptable for a yield-bearing token",
    },
    {
        "bound": 1.00,
        "score": 2,
        "justification": "Average deviation under 1% - arbitrage is not closing the gap",
    },
]
PEG_SCORE_FLOOR = 1

# Strictly-above ladder: first entry whose bound is lower than the value wins
DEPTH_SCORE_THRESHOLDS = [
    {
        "bound": 2_000_000,
        "score": 5,
        "justification": "Over $2M within 2% - institutional-size exits absorbed",
    },
    {
        "bound": 1_000_000,
        "score": 4,
        "justification": "Over $1M within 2% - large holders can exit in a few clips",
    },
    {
        "bound": 500_000,
        "score": 3,
        "justification": "Over $500K within 2% - adequate for retail and mid-size flow",
    },
    {
        "bound": 100_000,
        "score": 2,
        "justification": "Over $100K within 2% - thin, sizeable sells move the price",
    },
]
DEPTH_SCORE_FLOOR = 1

VOLUME_SCORE_THRESHOLDS = [
    {
        "bound": 5_000_000,
        "score": 5,
        "justification": "Over $5M daily volume - active two-way market",
    },
    {
        "bound": 1_000_000,
        "score": 4,
        "justification": "Over $1M daily volume - healthy turnover",
    },
    {
        "bound": 500_000,
        "score": 3,
        "justification": "Over $500K daily volume - moderate activity",
    },
    {
        "bound": 100_000,
        "score": 2,
        "justification": "Over $100K daily volume - light trading",
    },
]
VOLUME_SCORE_FLOOR = 1

# Composite rating at or above this on every axis is reported as strong
STRONG_AXIS_SCORE = 4

# Peg axis at or below this reads as a significant deviation
SIGNIFICANT_PEG_SCORE = 2

RATING_MESSAGES = {
    "strong": "Strong peg stability and secondary liquidity",
    "peg_significant": "Significant peg deviation",
    "peg_minor": "Minor peg deviation",
    "depth": "Thin market depth",
    "volume": "Low trading volume",
    "insufficient_data": "Insufficient data to assess peg and liquidity",
}

# =============================================================================
# STATUS BANDS
# =============================================================================

BACKING_RATIO_BANDS = {
    "healthy": 0.95,
    "warning": 0.80,
}

# Absolute premium/discount in percent
PEG_DEVIATION_BANDS = {
    "tight": 0.1,
    "moderate": 0.5,
}

# Tolerance (token units) for treating wrapped vault balance and supply as equal
WRAPPED_COLLATERAL_TOLERANCE = 0.01

# Implied vs reported cash gap (USD) that is worth flagging
CASH_DISCREPANCY_FLAG_USD = 1_000_000
