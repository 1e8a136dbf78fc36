"""
Fixed lookup tables for display names and market categorization.

Keys are normalized: token addresses lower-cased, chain and protocol ids as
they appear in the snapshot.
"""

# Token address -> symbol (lower-cased addresses)
TOKEN_SYMBOLS = {
    # thBILL
    "0xfdd22ce6d1f66bc0ec89b20bf16ccb6670f55a5a": "thBILL",
    "0x5fa487bca6158c64046b2813623e20755091da0b": "thBILL",
    # HyperEVM
    "0xb8ce59fc3717ada4c02eadf9682a9e934f625ebb": "USDT0",
    "0x5555555555555555555555555555555555555555": "WHYPE",
    "0xfd739d4e423301ce9385c1fb8850539d657c296d": "kHYPE",
    "0x111111a1a0667d36bd57c0a9f569b98057111111": "USDH",
    "0xb88339cb7199b77e23db6e890353e22632ba630f": "USDC",
    # Arbitrum / Ethereum
    "0xaf88d065e77c8cc2239327c5edb3a432268e5831": "USDC",
    "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48": "USDC",
}

# Characters kept when abbreviating an unknown address
ADDRESS_PREFIX_LENGTH = 8

CHAIN_NAMES = {
    "hyperevm": "HyperEVM",
    "arbitrum": "Arbitrum",
    "ethereum": "Ethereum",
    "base": "Base",
    "solana": "Solana",
}

# Chains tracked for treasury coverage, in display order
TREASURY_CHAINS = ["ethereum", "arbitrum", "solana"]

CATEGORY_MONEY_MARKET = "money_market"
CATEGORY_DEX = "dex"
CATEGORY_PENDLE = "pendle"

CATEGORY_LABELS = {
    CATEGORY_MONEY_MARKET: "Money Markets",
    CATEGORY_DEX: "DEX Pools",
    CATEGORY_PENDLE: "Pendle",
}

# Protocol id -> category. Anything missing is treated as a money market.
PROTOCOL_CATEGORIES = {
    "aave-v3": CATEGORY_MONEY_MARKET,
    "morpho-blue": CATEGORY_MONEY_MARKET,
    "morpho-v1": CATEGORY_MONEY_MARKET,
    "euler-v2": CATEGORY_MONEY_MARKET,
    "hyperlend-pooled": CATEGORY_MONEY_MARKET,
    "hypurrfi": CATEGORY_MONEY_MARKET,
    "felix-vanilla": CATEGORY_MONEY_MARKET,
    "uniswap-v3": CATEGORY_DEX,
    "uniswap-v4": CATEGORY_DEX,
    "curve-dex": CATEGORY_DEX,
    "project-x": CATEGORY_DEX,
    "hyperswap-v3": CATEGORY_DEX,
    "kittenswap-finance": CATEGORY_DEX,
    "camelot-v3": CATEGORY_DEX,
    "pendle": CATEGORY_PENDLE,
}

MONTH_ABBREVIATIONS = {
    "JAN": 1,
    "FEB": 2,
    "MAR": 3,
    "APR": 4,
    "MAY": 5,
    "JUN": 6,
    "JUL": 7,
    "AUG": 8,
    "SEP": 9,
    "OCT": 10,
    "NOV": 11,
    "DEC": 12,
}

# Case-insensitive whole-word regexes for Pendle pool metadata, checked in
# order. LP comes first: LP metadata may name its PT leg.
PENDLE_POSITION_PATTERNS = [
    ("liquidity", [r"\blp\b", r"\bliquidity\b"]),
    ("fixed_yield", [r"\bpt\b", r"\bprincipal token\b", r"\bfixed\b"]),
]

PENDLE_POSITION_LABELS = {
    "fixed_yield": "Fixed Yield (PT)",
    "liquidity": "Liquidity (LP)",
}
