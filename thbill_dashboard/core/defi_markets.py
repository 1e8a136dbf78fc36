"""
DeFi Market Categorizer.

Splits yield positions into money markets, DEX pools and Pendle markets.
Pendle rows additionally get a position type and maturity parsed from the
free-text pool metadata (e.g. "For buying PT-thBILL-26MAR2026").
"""

import re
from datetime import date
from typing import Dict, Any, List, Optional

from ..lookups import (
    PROTOCOL_CATEGORIES,
    MONTH_ABBREVIATIONS,
    PENDLE_POSITION_PATTERNS,
    PENDLE_POSITION_LABELS,
    CATEGORY_MONEY_MARKET,
    CATEGORY_DEX,
    CATEGORY_PENDLE,
    CHAIN_NAMES,
)
from ..models import DefiMarket
from ..thresholds import DEFI_TABLE_MAX_ROWS

MATURITY_PATTERN = re.compile(r"(?<!\d)(\d{1,2})([A-Za-z]{3})(\d{4})(?!\d)")
POSITION_PATTERNS = [
    (position_type, [re.compile(p, re.IGNORECASE) for p in patterns])
    for position_type, patterns in PENDLE_POSITION_PATTERNS
]


def categorize_protocol(protocol: Optional[str]) -> str:
    """Category for a protocol id; unknown protocols are money markets."""
    if not protocol:
        return CATEGORY_MONEY_MARKET
    return PROTOCOL_CATEGORIES.get(protocol.lower(), CATEGORY_MONEY_MARKET)


def parse_position_type(pool_meta: Optional[str]) -> Optional[str]:
    if not pool_meta:
        return None
    for position_type, patterns in POSITION_PATTERNS:
        if any(p.search(pool_meta) for p in patterns):
            return position_type
    return None


def parse_maturity(pool_meta: Optional[str]) -> Optional[date]:
    """Extract a DDMMMYYYY maturity date. Invalid dates yield None."""
    if not pool_meta:
        return None
    match = MATURITY_PATTERN.search(pool_meta)
    if not match:
        return None
    day, month_abbr, year = match.groups()
    month = MONTH_ABBREVIATIONS.get(month_abbr.upper())
    if month is None:
        return None
    try:
        return date(int(year), month, int(day))
    except ValueError:
        return None


def parse_pendle_metadata(pool_meta: Optional[str]) -> Dict[str, Any]:
    """
    Derive position type and maturity from Pendle pool metadata.

    Either field is None ("unavailable") when it cannot be parsed.
    """
    position_type = parse_position_type(pool_meta)
    return {
        "position_type": position_type,
        "position_label": PENDLE_POSITION_LABELS.get(position_type),
        "maturity": parse_maturity(pool_meta),
    }


def build_market_row(market: DefiMarket, as_of: Optional[date] = None) -> Dict[str, Any]:
    row = {
        "protocol": market.protocol,
        "chain": market.chain,
        "chain_display": CHAIN_NAMES.get((market.chain or "").lower(), market.chain),
        "pool": market.pool,
        "tvl_usd": market.tvl_usd,
        "apy": market.apy,
        "category": categorize_protocol(market.protocol),
    }
    if row["category"] == CATEGORY_PENDLE:
        row.update(parse_pendle_metadata(market.pool_meta))
        maturity = row["maturity"]
        if maturity is not None and as_of is not None:
            row["days_to_maturity"] = (maturity - as_of).days
            row["is_expired"] = maturity < as_of
        else:
            row["days_to_maturity"] = None
            row["is_expired"] = None
    return row


def categorize_markets(
    markets: Optional[List[DefiMarket]],
    as_of: Optional[date] = None,
) -> Dict[str, List[Dict[str, Any]]]:
    """
    Split markets into category lists sorted by TVL descending.

    Args:
        markets: Yield positions from the snapshot (None treated as empty)
        as_of: Reference date for Pendle days-to-maturity

    Returns:
        Dict keyed by category; money market and DEX lists are capped at
        DEFI_TABLE_MAX_ROWS, Pendle is not.
    """
    categories = {
        CATEGORY_MONEY_MARKET: [],
        CATEGORY_DEX: [],
        CATEGORY_PENDLE: [],
    }
    for market in markets or []:
        row = build_market_row(market, as_of)
        categories[row["category"]].append(row)

    for category, rows in categories.items():
        rows.sort(key=lambda r: r["tvl_usd"] or 0, reverse=True)
        if category != CATEGORY_PENDLE:
            del rows[DEFI_TABLE_MAX_ROWS:]

    return categories
