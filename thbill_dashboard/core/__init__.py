"""Core derivation and scoring components."""

from .backing import (
    build_backing_rows,
    build_treasury_rows,
    classify_backing_ratio,
    summarize_backing_ratio,
    summarize_redemption_flow,
    summarize_tvl,
    compare_theo_reported,
)

from .liquidity import (
    filter_pools,
    sort_pools,
    pool_depth_estimate,
    format_depth,
    resolve_token_symbol,
    format_pair_name,
    chain_display_name,
    build_liquidity_table,
)

from .defi_markets import categorize_markets, parse_pendle_metadata

from .peg import (
    filter_peg_history,
    summarize_peg_history,
    classify_peg_deviation,
    build_peg_status,
)

from .rating import calculate_liquidity_rating

from .deriver import derive_dashboard

__all__ = [
    # Backing
    "build_backing_rows",
    "build_treasury_rows",
    "classify_backing_ratio",
    "summarize_backing_ratio",
    "summarize_redemption_flow",
    "summarize_tvl",
    "compare_theo_reported",
    # Liquidity
    "filter_pools",
    "sort_pools",
    "pool_depth_estimate",
    "format_depth",
    "resolve_token_symbol",
    "format_pair_name",
    "chain_display_name",
    "build_liquidity_table",
    # DeFi markets
    "categorize_markets",
    "parse_pendle_metadata",
    # Peg
    "filter_peg_history",
    "summarize_peg_history",
    "classify_peg_deviation",
    "build_peg_status",
    # Rating
    "calculate_liquidity_rating",
    # Deriver
    "derive_dashboard",
]
