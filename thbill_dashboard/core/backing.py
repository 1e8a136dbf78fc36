"""
Backing & Treasury Calculator.

Turns the snapshot's `backing` section into:
- An itemized backing table (supply anchor, wrapped collateral, ULTRA,
  treasury USDC split into DeFi-deployed and spot, total backing)
- A per-chain treasury coverage table
- Ratio, redemption flow, TVL and issuer cross-check summaries

Percentages are relative to thBILL supply. A zero or missing supply is
replaced by 1 so no percentage becomes NaN or infinite.
"""

from typing import Dict, Any, List, Optional, Tuple

from ..lookups import TREASURY_CHAINS, CHAIN_NAMES
from ..models import Backing, RedemptionFlow, TVL, TheoReported
from ..thresholds import (
    BACKING_RATIO_BANDS,
    WRAPPED_COLLATERAL_TOLERANCE,
    CASH_DISCREPANCY_FLAG_USD,
)


# =============================================================================
# HELPERS
# =============================================================================

def _pct_of(amount: Optional[float], supply: float) -> Optional[float]:
    if amount is None:
        return None
    return (amount / supply) * 100


def _row(
    label: str,
    amount: Optional[float],
    pct: Optional[float],
    note: Optional[str] = None,
    is_supply: bool = False,
    is_total: bool = False,
    is_gap: bool = False,
    is_currency: bool = False,
    is_reference: bool = False,
) -> Dict[str, Any]:
    return {
        "label": label,
        "amount": amount,
        "pct": pct,
        "note": note,
        "is_supply": is_supply,
        "is_total": is_total,
        "is_gap": is_gap,
        "is_currency": is_currency,
        "is_reference": is_reference,
    }


def percentage_base(backing: Backing) -> float:
    """Supply used as denominator; falls back to 1 when zero or missing."""
    return backing.thbill_supply or 1


def group_defi_positions(backing: Backing) -> List[Tuple[str, str, float]]:
    """
    Sum treasury DeFi positions per (protocol, token), first-seen order.

    Missing amounts count as zero.
    """
    grouped: Dict[Tuple[str, str], float] = {}
    for position in backing.treasury_defi_positions:
        key = (position.protocol or "Unknown", position.token or "USDC")
        grouped[key] = grouped.get(key, 0.0) + (position.amount_usd or 0.0)
    return [(protocol, token, amount) for (protocol, token), amount in grouped.items()]


# =============================================================================
# BACKING TABLE
# =============================================================================

def build_backing_rows(backing: Optional[Backing]) -> List[Dict[str, Any]]:
    """
    Build the itemized backing breakdown.

    Args:
        backing: Parsed backing section, or None when the snapshot lacks it

    Returns:
        Ordered list of row dicts (label, amount, pct, note and display
        hints). Rows that are neither supply, total nor reference are the
        itemized backing and sum to at most the backing total. Empty when
        backing is None.
    """
    if backing is None:
        return []

    supply = percentage_base(backing)
    rows = [_row("thBILL Supply", backing.thbill_supply, 100.0, is_supply=True)]

    # 1. Wrapped collateral (tULTRA). Reference rows: the same ULTRA is
    # counted once, in the collateral row below.
    if backing.tultra_supply is not None:
        vault = backing.tultra_vault_balance
        if vault is not None and abs(vault - backing.tultra_supply) <= WRAPPED_COLLATERAL_TOLERANCE:
            rows.append(_row(
                "tULTRA",
                backing.tultra_supply,
                _pct_of(backing.tultra_supply, supply),
                note="100% in vault",
                is_reference=True,
            ))
        else:
            # Vault balance and wrapper supply disagree - audit gap
            rows.append(_row(
                "tULTRA in Vault",
                vault,
                _pct_of(vault, supply),
                is_gap=True,
                is_reference=True,
            ))
            rows.append(_row(
                "tULTRA Supply",
                backing.tultra_supply,
                _pct_of(backing.tultra_supply, supply),
                is_gap=True,
                is_reference=True,
            ))

    # 2. Collateral
    rows.append(_row(
        "ULTRA Total",
        backing.ultra_total,
        _pct_of(backing.ultra_total, supply),
        note="Money market fund",
    ))

    # 3. Treasury USDC deployed in DeFi
    positions = group_defi_positions(backing)
    defi_total = 0.0
    for protocol, token, amount in positions:
        defi_total += amount
        rows.append(_row(
            f"{token} ({protocol})",
            amount,
            _pct_of(amount, supply),
            note="DeFi-deployed",
            is_currency=True,
        ))

    # 4. Treasury USDC remaining spot
    if positions:
        spot = (backing.treasury_usdc or 0.0) - defi_total
        if spot > 0:
            rows.append(_row(
                "Treasury USDC (spot)",
                spot,
                _pct_of(spot, supply),
                is_currency=True,
            ))
    else:
        rows.append(_row(
            "Treasury USDC",
            backing.treasury_usdc,
            _pct_of(backing.treasury_usdc, supply),
            is_currency=True,
        ))

    # 5. Total backing
    total = (backing.ultra_total or 0.0) + (backing.treasury_usdc or 0.0)
    rows.append(_row(
        "Total Backing",
        total,
        _pct_of(total, supply),
        is_total=True,
    ))

    return rows


# =============================================================================
# TREASURY COVERAGE
# =============================================================================

def coverage_pct(treasury: Optional[float], collateral: Optional[float]) -> Optional[float]:
    """Treasury balance as a percentage of collateral, None when undefined."""
    if treasury is None or not collateral:
        return None
    return (treasury / collateral) * 100


def build_treasury_rows(backing: Optional[Backing]) -> List[Dict[str, Any]]:
    """
    Build treasury coverage rows: one per tracked chain plus a Total row.

    Coverage is None whenever the treasury figure or the chain's collateral
    is missing/zero; the row then carries the upstream note if one exists.
    """
    if backing is None:
        return []

    rows = []
    for chain in TREASURY_CHAINS + ["total"]:
        treasury = backing.treasury_on(chain)
        collateral = backing.collateral_on(chain)
        rows.append({
            "chain": CHAIN_NAMES.get(chain, chain.title()),
            "treasury": treasury,
            "supply": collateral,
            "coverage_pct": coverage_pct(treasury, collateral),
            "note": backing.treasury_notes.get(chain),
            "is_total": chain == "total",
        })
    return rows


# =============================================================================
# SUMMARIES
# =============================================================================

def classify_backing_ratio(ratio: Optional[float]) -> str:
    """Map a backing ratio (1.0 = 100%) to healthy / warning / critical."""
    if ratio is None:
        return "unavailable"
    if ratio >= BACKING_RATIO_BANDS["healthy"]:
        return "healthy"
    if ratio >= BACKING_RATIO_BANDS["warning"]:
        return "warning"
    return "critical"


def summarize_backing_ratio(backing: Optional[Backing]) -> Dict[str, Any]:
    ratio = backing.backing_ratio_ultra_only if backing else None
    with_usdc = backing.backing_ratio_with_usdc if backing else None
    return {
        "ratio_pct": ratio * 100 if ratio is not None else None,
        "ratio_with_usdc_pct": with_usdc * 100 if with_usdc is not None else None,
        "status": classify_backing_ratio(ratio),
    }


def summarize_redemption_flow(flow: Optional[RedemptionFlow]) -> Optional[Dict[str, Any]]:
    """
    Describe the 24h net flow.

    A null net flow means upstream could not compute it yet; the summary is
    then 'pending' and carries the upstream note.
    """
    if flow is None:
        return None
    if flow.net_flow_24h is None:
        return {
            "status": "pending",
            "net_flow": None,
            "net_flow_pct": None,
            "direction": None,
            "note": flow.note or "",
        }
    net = flow.net_flow_24h
    return {
        "status": "computed",
        "net_flow": net,
        "net_flow_pct": flow.net_flow_percentage or 0.0,
        "direction": "inflow" if net >= 0 else "outflow",
        "note": flow.note or "",
    }


def summarize_tvl(tvl: Optional[TVL]) -> Optional[Dict[str, Any]]:
    if tvl is None:
        return None
    return {
        "total": tvl.total,
        "by_chain": [
            {"chain": CHAIN_NAMES.get(chain.lower(), chain), "tvl_usd": amount}
            for chain, amount in tvl.by_chain.items()
        ],
    }


def compare_theo_reported(
    theo: Optional[TheoReported],
    backing: Optional[Backing],
) -> Optional[Dict[str, Any]]:
    """
    Cross-check issuer-reported composition against on-chain collateral.

    Returns None when the feed is absent or carries no cash share.
    """
    if theo is None or not theo.cash_pct:
        return None

    on_chain_ratio = backing.backing_ratio_ultra_only if backing else None
    on_chain_pct = on_chain_ratio * 100 if on_chain_ratio is not None else 0.0
    discrepancy_pct = None
    if theo.money_market_pct is not None:
        discrepancy_pct = theo.money_market_pct - on_chain_pct

    implied_cash = backing.implied_cash if backing else None
    cash_gap = None
    if implied_cash is not None and theo.cash_usd is not None:
        cash_gap = theo.cash_usd - implied_cash

    return {
        "money_market_pct": theo.money_market_pct,
        "money_market_usd": theo.money_market_usd,
        "cash_pct": theo.cash_pct,
        "cash_usd": theo.cash_usd,
        "source": theo.source,
        "on_chain_pct": on_chain_pct,
        "discrepancy_pct": discrepancy_pct,
        "implied_cash": implied_cash,
        "cash_discrepancy_usd": cash_gap,
        "cash_discrepancy_flagged": cash_gap is not None and abs(cash_gap) > CASH_DISCREPANCY_FLAG_USD,
    }
