"""
Liquidity Aggregator - secondary-market pools.

Filters dust pools, totals TVL / volume / depth over the survivors, sorts
by TVL and resolves on-chain addresses to readable symbols.
"""

from typing import Dict, Any, List, Optional

from ..formatting import format_currency, DASH
from ..lookups import TOKEN_SYMBOLS, CHAIN_NAMES, ADDRESS_PREFIX_LENGTH
from ..models import Pool
from ..thresholds import MIN_POOL_TVL_USD


# =============================================================================
# FILTER / SORT
# =============================================================================

def filter_pools(pools: List[Pool]) -> List[Pool]:
    """Keep pools with TVL at or above the floor. Missing TVL counts as zero."""
    return [p for p in pools if (p.tvl_usd or 0) >= MIN_POOL_TVL_USD]


def sort_pools(pools: List[Pool]) -> List[Pool]:
    """Descending TVL; equal TVLs keep their input order."""
    return sorted(pools, key=lambda p: p.tvl_usd or 0, reverse=True)


# =============================================================================
# DEPTH
# =============================================================================

def pool_depth_estimate(buy: Optional[float], sell: Optional[float]) -> Optional[float]:
    """Mean of buy/sell 2% depth, whichever side exists, or None."""
    if buy is not None and sell is not None:
        return (buy + sell) / 2
    if buy is not None:
        return buy
    return sell


def format_depth(buy: Optional[float], sell: Optional[float]) -> str:
    return format_currency(pool_depth_estimate(buy, sell), 0)


def depth_tooltip(buy: Optional[float], sell: Optional[float]) -> str:
    if buy is None or sell is None:
        return ""
    return f"Buy: {format_currency(buy, 0)} / Sell: {format_currency(sell, 0)}"


def total_depth(pools: List[Pool]) -> Optional[float]:
    """Sum of per-pool depth estimates; None when no pool reports depth."""
    estimates = [
        pool_depth_estimate(p.depth_2pct_buy, p.depth_2pct_sell)
        for p in pools
    ]
    estimates = [e for e in estimates if e is not None]
    if not estimates:
        return None
    return sum(estimates)


# =============================================================================
# NAME RESOLUTION
# =============================================================================

def resolve_token_symbol(address: str) -> str:
    """Known symbol for an address, or its first characters abbreviated."""
    address = address.strip()
    symbol = TOKEN_SYMBOLS.get(address.lower())
    if symbol:
        return symbol
    return address[:ADDRESS_PREFIX_LENGTH] + "..."


def format_pair_name(pair: Optional[str]) -> str:
    """Convert '0xABC.../0xDEF...' into 'thBILL/USDC'."""
    if not pair:
        return DASH
    return "/".join(resolve_token_symbol(addr) for addr in pair.split("/"))


def chain_display_name(chain: Optional[str]) -> str:
    if not chain:
        return DASH
    return CHAIN_NAMES.get(chain, chain)


# =============================================================================
# TABLE
# =============================================================================

def build_pool_row(pool: Pool) -> Dict[str, Any]:
    buy = pool.depth_2pct_buy
    sell = pool.depth_2pct_sell
    return {
        "chain": pool.chain,
        "chain_display": chain_display_name(pool.chain),
        "market": pool.market or DASH,
        "pair": pool.pair,
        "pair_display": format_pair_name(pool.pair),
        "tvl_usd": pool.tvl_usd,
        "volume_24h": pool.volume_24h,
        "spread": pool.spread,
        "depth_2pct_buy": buy,
        "depth_2pct_sell": sell,
        "depth_estimate": pool_depth_estimate(buy, sell),
        "depth_display": format_depth(buy, sell),
        "depth_tooltip": depth_tooltip(buy, sell),
    }


def build_liquidity_table(pools: List[Pool]) -> Dict[str, Any]:
    """
    Filter, aggregate and sort the pool list.

    Args:
        pools: Raw pools from the snapshot

    Returns:
        Dict with display rows (sorted by TVL) and aggregates computed over
        the surviving pools only.
    """
    surviving = filter_pools(pools)
    return {
        "pools": [build_pool_row(p) for p in sort_pools(surviving)],
        "total_tvl": sum(p.tvl_usd or 0 for p in surviving),
        "total_volume_24h": sum(p.volume_24h or 0 for p in surviving),
        "pool_count": len(surviving),
        "total_depth": total_depth(surviving),
    }
