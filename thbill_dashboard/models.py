"""
Snapshot Data Models.

Typed views over the two JSON documents the dashboard consumes:
- MetricsSnapshot (data/thbill_metrics.json)
- PegHistoryPoint list (data/peg_history.json)

Every upstream field may be missing or null. Optional attributes are None
in that case; `from_dict` constructors never raise on a partial document.
"""

import math
from dataclasses import dataclass, field
from typing import Dict, Any, List, Optional


# =============================================================================
# COERCION HELPERS
# =============================================================================

def to_float(value: Any) -> Optional[float]:
    """Coerce a JSON number (or numeric string) to float, None if unusable."""
    if value is None or isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(result) or math.isinf(result):
        return None
    return result


def to_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


# =============================================================================
# SNAPSHOT SECTIONS
# =============================================================================

@dataclass(frozen=True)
class TVL:
    """Total value locked with per-chain breakdown."""
    total: Optional[float] = None
    by_chain: Dict[str, Optional[float]] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TVL":
        data = _as_dict(data)
        return cls(
            total=to_float(data.get("total")),
            by_chain={
                str(chain): to_float(amount)
                for chain, amount in _as_dict(data.get("by_chain")).items()
            },
        )


@dataclass(frozen=True)
class TreasuryPosition:
    """Treasury stablecoin deployed into a DeFi protocol."""
    protocol: Optional[str] = None
    token: Optional[str] = None
    amount_usd: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TreasuryPosition":
        data = _as_dict(data)
        return cls(
            protocol=to_str(data.get("protocol")),
            token=to_str(data.get("token")),
            amount_usd=to_float(data.get("amount_usd", data.get("amount"))),
        )


@dataclass(frozen=True)
class Backing:
    """Collateral composition backing the thBILL supply."""
    thbill_supply: Optional[float] = None
    # ULTRA (money market fund shares) held as collateral
    ultra_ethereum: Optional[float] = None
    ultra_arbitrum: Optional[float] = None
    ultra_solana: Optional[float] = None
    ultra_total: Optional[float] = None
    # tULTRA wrapper
    tultra_vault_balance: Optional[float] = None
    tultra_supply: Optional[float] = None
    implied_cash: Optional[float] = None
    # Treasury stablecoin
    treasury_usdc: Optional[float] = None
    treasury_defi_positions: List[TreasuryPosition] = field(default_factory=list)
    # Treasury-held ULTRA per chain
    treasury_ultra_ethereum: Optional[float] = None
    treasury_ultra_arbitrum: Optional[float] = None
    treasury_ultra_solana: Optional[float] = None
    treasury_ultra_total: Optional[float] = None
    treasury_notes: Dict[str, str] = field(default_factory=dict)
    # Precomputed ratios (1.0 = 100%)
    backing_ratio_ultra_only: Optional[float] = None
    backing_ratio_with_usdc: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Backing":
        data = _as_dict(data)
        return cls(
            thbill_supply=to_float(data.get("thbill_supply")),
            ultra_ethereum=to_float(data.get("ultra_ethereum")),
            ultra_arbitrum=to_float(data.get("ultra_arbitrum")),
            ultra_solana=to_float(data.get("ultra_solana")),
            ultra_total=to_float(data.get("ultra_total")),
            tultra_vault_balance=to_float(data.get("tultra_vault_balance")),
            tultra_supply=to_float(data.get("tultra_supply")),
            implied_cash=to_float(data.get("implied_cash")),
            treasury_usdc=to_float(data.get("treasury_usdc")),
            treasury_defi_positions=[
                TreasuryPosition.from_dict(p)
                for p in _as_list(data.get("treasury_defi_positions"))
            ],
            treasury_ultra_ethereum=to_float(data.get("treasury_ultra_ethereum")),
            treasury_ultra_arbitrum=to_float(data.get("treasury_ultra_arbitrum")),
            treasury_ultra_solana=to_float(data.get("treasury_ultra_solana")),
            treasury_ultra_total=to_float(data.get("treasury_ultra_total")),
            treasury_notes={
                str(chain).lower(): str(note)
                for chain, note in _as_dict(data.get("treasury_notes")).items()
                if note
            },
            backing_ratio_ultra_only=to_float(data.get("backing_ratio_ultra_only")),
            backing_ratio_with_usdc=to_float(data.get("backing_ratio_with_usdc")),
        )

    def collateral_on(self, chain: str) -> Optional[float]:
        return getattr(self, f"ultra_{chain}", None)

    def treasury_on(self, chain: str) -> Optional[float]:
        return getattr(self, f"treasury_ultra_{chain}", None)


@dataclass(frozen=True)
class RedemptionFlow:
    """Net mint/redeem flow over the trailing 24h."""
    net_flow_24h: Optional[float] = None
    net_flow_percentage: Optional[float] = None
    note: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RedemptionFlow":
        data = _as_dict(data)
        return cls(
            net_flow_24h=to_float(data.get("net_flow_24h")),
            net_flow_percentage=to_float(data.get("net_flow_percentage")),
            note=to_str(data.get("note")),
        )


@dataclass(frozen=True)
class ChainPrice:
    vwap: Optional[float] = None
    volume_24h: Optional[float] = None


@dataclass(frozen=True)
class Peg:
    """NAV, market price and per-chain prices."""
    nav_per_share: Optional[float] = None
    vwap: Optional[float] = None
    premium_discount_pct: Optional[float] = None
    per_chain_prices: Dict[str, ChainPrice] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Peg":
        data = _as_dict(data)
        per_chain = {}
        for chain, values in _as_dict(data.get("per_chain_prices")).items():
            values = _as_dict(values)
            per_chain[str(chain)] = ChainPrice(
                vwap=to_float(values.get("vwap", values.get("price"))),
                volume_24h=to_float(values.get("volume_24h")),
            )
        return cls(
            nav_per_share=to_float(data.get("nav_per_share")),
            vwap=to_float(data.get("vwap")),
            premium_discount_pct=to_float(data.get("premium_discount_pct")),
            per_chain_prices=per_chain,
        )


@dataclass(frozen=True)
class Pool:
    """Secondary-market trading pool."""
    market: Optional[str] = None
    pair: Optional[str] = None
    chain: Optional[str] = None
    tvl_usd: Optional[float] = None
    volume_24h: Optional[float] = None
    spread: Optional[float] = None
    depth_2pct_buy: Optional[float] = None
    depth_2pct_sell: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Pool":
        data = _as_dict(data)
        return cls(
            market=to_str(data.get("market")),
            pair=to_str(data.get("pair")),
            chain=to_str(data.get("chain")),
            tvl_usd=to_float(data.get("tvl_usd")),
            volume_24h=to_float(data.get("volume_24h")),
            spread=to_float(data.get("spread")),
            depth_2pct_buy=to_float(data.get("depth_2pct_buy")),
            depth_2pct_sell=to_float(data.get("depth_2pct_sell")),
        )


@dataclass(frozen=True)
class SecondaryLiquidity:
    pools: List[Pool] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SecondaryLiquidity":
        data = _as_dict(data)
        return cls(pools=[Pool.from_dict(p) for p in _as_list(data.get("pools"))])


@dataclass(frozen=True)
class DefiMarket:
    """Yield position where thBILL is supplied or paired."""
    protocol: Optional[str] = None
    chain: Optional[str] = None
    pool: Optional[str] = None
    tvl_usd: Optional[float] = None
    apy: Optional[float] = None
    pool_meta: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DefiMarket":
        data = _as_dict(data)
        return cls(
            protocol=to_str(data.get("protocol")),
            chain=to_str(data.get("chain")),
            pool=to_str(data.get("pool")),
            tvl_usd=to_float(data.get("tvl_usd")),
            apy=to_float(data.get("apy")),
            pool_meta=to_str(data.get("pool_meta", data.get("poolMeta"))),
        )


@dataclass(frozen=True)
class TheoReported:
    """Issuer-reported reserve composition used as a cross-check."""
    money_market_pct: Optional[float] = None
    money_market_usd: Optional[float] = None
    cash_pct: Optional[float] = None
    cash_usd: Optional[float] = None
    source: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TheoReported":
        data = _as_dict(data)
        return cls(
            money_market_pct=to_float(data.get("money_market_pct")),
            money_market_usd=to_float(data.get("money_market_usd")),
            cash_pct=to_float(data.get("cash_pct")),
            cash_usd=to_float(data.get("cash_usd")),
            source=to_str(data.get("source")),
        )


# =============================================================================
# ROOT DOCUMENTS
# =============================================================================

@dataclass(frozen=True)
class MetricsSnapshot:
    """
    Root metrics document for one refresh cycle.

    Sections absent from the document are None so callers can tell
    "section missing" apart from "section present but empty".
    """
    timestamp: Optional[str] = None
    tvl: Optional[TVL] = None
    backing: Optional[Backing] = None
    redemption_flow: Optional[RedemptionFlow] = None
    peg: Optional[Peg] = None
    secondary_liquidity: Optional[SecondaryLiquidity] = None
    defi_markets: Optional[List[DefiMarket]] = None
    theo_reported: Optional[TheoReported] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MetricsSnapshot":
        data = _as_dict(data)

        def section(key, parser):
            value = data.get(key)
            return parser(value) if isinstance(value, dict) else None

        markets = data.get("defi_markets")
        return cls(
            timestamp=to_str(data.get("timestamp")),
            tvl=section("tvl_usd", TVL.from_dict),
            backing=section("backing", Backing.from_dict),
            redemption_flow=section("redemption_flow", RedemptionFlow.from_dict),
            peg=section("peg", Peg.from_dict),
            secondary_liquidity=section("secondary_liquidity", SecondaryLiquidity.from_dict),
            defi_markets=(
                [DefiMarket.from_dict(m) for m in markets]
                if isinstance(markets, list) else None
            ),
            theo_reported=section("theo_reported", TheoReported.from_dict),
        )


@dataclass(frozen=True)
class PegHistoryPoint:
    """One historical premium/discount sample."""
    timestamp: Optional[str] = None
    premium_discount_pct: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PegHistoryPoint":
        data = _as_dict(data)
        return cls(
            timestamp=to_str(data.get("timestamp")),
            premium_discount_pct=to_float(data.get("premium_discount_pct")),
        )


def parse_peg_history(data: Any) -> List[PegHistoryPoint]:
    """Parse the history document; anything but a list is an empty history."""
    return [PegHistoryPoint.from_dict(item) for item in _as_list(data) if isinstance(item, dict)]
