"""
thBILL Risk Dashboard - Streamlit Application.

Read-only dashboard featuring:
- TVL, backing ratio and 24h redemption flow
- Itemized backing and treasury coverage tables
- Peg status, per-chain prices and premium/discount history chart
- Secondary liquidity pools and DeFi market usage
- Composite peg & liquidity star rating

Run with: streamlit run streamlit_app.py
"""

import streamlit as st
import pandas as pd
import plotly.graph_objects as go

from thbill_dashboard.config.settings import REFRESH_CONFIG
from thbill_dashboard.formatting import (
    DASH,
    format_number,
    format_currency,
    format_percent,
    format_signed_percent,
)
from thbill_dashboard.lookups import (
    CATEGORY_LABELS,
    CATEGORY_MONEY_MARKET,
    CATEGORY_DEX,
    CATEGORY_PENDLE,
)
from thbill_dashboard.refresh import LatestOnlyPresenter, run_refresh_cycle

# =============================================================================
# PAGE CONFIG
# =============================================================================

st.set_page_config(
    page_title="thBILL Risk Dashboard",
    page_icon="🛡️",
    layout="wide",
)

STATUS_COLORS = {
    "healthy": "#22c55e",
    "tight": "#22c55e",
    "warning": "#eab308",
    "moderate": "#eab308",
    "critical": "#ef4444",
    "wide": "#ef4444",
    "unavailable": "#6b7280",
}


# =============================================================================
# SESSION STATE / PRESENTER
# =============================================================================

class StreamlitPresenter:
    """Stores the latest derived data in session state for rendering."""

    def render(self, derived, sequence):
        st.session_state.derived = derived
        st.session_state.last_updated = derived.get("last_updated", DASH)
        st.session_state.sequence = sequence

    def render_error(self, message, sequence):
        # Other sections keep their last successful values
        st.session_state.last_updated = message
        st.session_state.sequence = sequence


def init_session_state():
    """Initialize session state variables."""
    defaults = {
        "derived": None,
        "last_updated": DASH,
        "sequence": 0,
        "presenter": LatestOnlyPresenter(StreamlitPresenter()),
    }
    for key, value in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = value


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def colored(text: str, status: str) -> str:
    color = STATUS_COLORS.get(status, STATUS_COLORS["unavailable"])
    return f"<span style='color:{color}; font-weight:600'>{text}</span>"


def show_table(rows: list, empty_message: str):
    if not rows:
        st.caption(empty_message)
        return
    st.dataframe(pd.DataFrame(rows), use_container_width=True, hide_index=True)


# =============================================================================
# SECTIONS
# =============================================================================

def render_overview(derived: dict):
    col1, col2, col3, col4 = st.columns(4)

    tvl = derived.get("tvl")
    with col1:
        st.metric("Total Value Locked", format_currency(tvl["total"]) if tvl else DASH)
        if tvl:
            st.caption(" | ".join(
                f"{c['chain']}: {format_currency(c['tvl_usd'])}" for c in tvl["by_chain"]
            ))

    ratio = derived["backing_ratio"]
    with col2:
        st.markdown("**Backing Ratio (ULTRA only)**")
        st.markdown(colored(format_percent(ratio["ratio_pct"]), ratio["status"]), unsafe_allow_html=True)
        if ratio["ratio_with_usdc_pct"] is not None:
            st.caption(f"Incl. treasury USDC: {format_percent(ratio['ratio_with_usdc_pct'])}")

    flow = derived.get("redemption_flow")
    with col3:
        if flow is None:
            st.metric("24h Net Flow", DASH)
        elif flow["status"] == "pending":
            st.metric("24h Net Flow", "Calculating...")
            st.caption(flow["note"])
        else:
            st.metric(
                "24h Net Flow",
                f"{flow['net_flow']:+,.0f} thBILL",
                delta=format_signed_percent(flow["net_flow_pct"]),
            )

    rating = derived["rating"]
    with col4:
        st.metric("Peg & Liquidity Rating", rating["stars_display"])
        st.caption(rating["message"])


def render_backing(derived: dict):
    st.subheader("Backing Breakdown")
    rows = []
    for row in derived["backing_rows"]:
        amount = format_currency(row["amount"], 2) if row["is_currency"] else format_number(row["amount"], 2)
        label = row["label"]
        if row["is_gap"]:
            label = f"⚠️ {label}"
        elif row["is_reference"]:
            label = f"↳ {label}"
        rows.append({
            "Asset": label,
            "Amount": amount,
            "% of Supply": format_percent(row["pct"]),
            "Note": row["note"] or "",
        })
    show_table(rows, "Backing data unavailable")

    st.subheader("Treasury Coverage")
    rows = [
        {
            "Chain": row["chain"],
            "Treasury ULTRA": format_number(row["treasury"], 2) if row["treasury"] is not None else (row["note"] or DASH),
            "ULTRA Supply": format_number(row["supply"], 2),
            "Coverage": format_percent(row["coverage_pct"], 1),
        }
        for row in derived["treasury_rows"]
    ]
    show_table(rows, "Treasury data unavailable")


def render_theo(derived: dict):
    st.subheader("Issuer-Reported Composition")
    theo = derived.get("theo_cross_check")
    if theo is None:
        st.caption("Theo dashboard data unavailable")
        return

    col1, col2 = st.columns(2)
    with col1:
        st.metric("Money Market", format_percent(theo["money_market_pct"]))
        st.caption(format_currency(theo["money_market_usd"]))
    with col2:
        st.metric("Cash (Off-chain)", format_percent(theo["cash_pct"]))
        st.caption(format_currency(theo["cash_usd"]))

    st.caption(
        f"On-chain verified: {format_percent(theo['on_chain_pct'])} | "
        f"Reported: {format_percent(theo['money_market_pct'])} | "
        f"Discrepancy: {format_signed_percent(theo['discrepancy_pct'], 2)}"
    )
    if theo["cash_discrepancy_usd"] is not None:
        status = "warning" if theo["cash_discrepancy_flagged"] else "healthy"
        st.markdown(
            f"Implied cash {format_currency(theo['implied_cash'], 2)} vs reported "
            f"{format_currency(theo['cash_usd'], 2)}: "
            + colored(format_currency(theo["cash_discrepancy_usd"], 2), status),
            unsafe_allow_html=True,
        )
    st.caption(f"Source: {theo['source'] or DASH}")


def render_peg(derived: dict):
    st.subheader("Peg Status")
    peg = derived.get("peg")
    if peg is None:
        st.caption("Peg data unavailable")
    else:
        col1, col2, col3 = st.columns(3)
        with col1:
            st.metric("NAV / Share", f"${peg['nav_per_share']:.6f}" if peg["nav_per_share"] else DASH)
        with col2:
            st.metric("VWAP", f"${peg['vwap']:.6f}" if peg["vwap"] else DASH)
        with col3:
            st.markdown("**Premium / Discount**")
            st.markdown(
                colored(format_signed_percent(peg["premium_discount_pct"]), peg["premium_discount_band"]),
                unsafe_allow_html=True,
            )
        show_table([
            {
                "Chain": row["chain"],
                "Price": f"${row['price']:.4f}" if row["price"] is not None else DASH,
                "24h Volume": row["volume_display"],
                "vs NAV": format_signed_percent(row["deviation_pct"]),
            }
            for row in peg["chains"]
        ], "No chain prices available")

    series = derived["peg_history"]
    if series:
        fig = go.Figure()
        fig.add_trace(go.Scatter(
            x=[s["timestamp"] for s in series],
            y=[s["premium_discount_pct"] for s in series],
            mode="lines",
            name="Premium / Discount %",
            line=dict(color="#60a5fa"),
        ))
        fig.add_hline(y=0, line_dash="dot", line_color="#6b7280")
        fig.update_layout(
            height=320,
            margin=dict(l=20, r=20, t=30, b=20),
            yaxis_title="Premium / Discount (%)",
        )
        st.plotly_chart(fig, use_container_width=True)
    else:
        st.caption("No peg history available")

    summary = derived["peg_history_summary"]
    if summary["count"]:
        cols = st.columns(5)
        cols[0].metric("Samples", summary["count"], help=f"{summary['excluded']} excluded as bad data")
        cols[1].metric("Mean |Dev|", format_percent(summary["mean_abs_pct"], 3))
        cols[2].metric("Min", format_signed_percent(summary["min_pct"], 2))
        cols[3].metric("Max", format_signed_percent(summary["max_pct"], 2))
        cols[4].metric("Latest", format_signed_percent(summary["latest_pct"], 2))

    rating = derived["rating"]
    with st.expander(f"Rating breakdown {rating['stars_display']}"):
        st.dataframe(pd.DataFrame([
            {"Axis": axis.title(), "Score": info["score"], "Detail": info["justification"]}
            for axis, info in rating["breakdown"].items()
        ]), use_container_width=True, hide_index=True)


def render_liquidity(derived: dict):
    st.subheader("Secondary Liquidity")
    liquidity = derived.get("liquidity")
    if liquidity is None:
        st.caption("Liquidity data unavailable")
        return

    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("24h DEX Volume", format_currency(liquidity["total_volume_24h"]))
    with col2:
        st.metric("DEX TVL", format_currency(liquidity["total_tvl"]))
    with col3:
        st.metric("Pools", liquidity["pool_count"])

    show_table([
        {
            "Chain": row["chain_display"],
            "Market": row["market"],
            "Pair": row["pair_display"],
            "TVL": format_currency(row["tvl_usd"]),
            "2% Depth": row["depth_display"],
            "Depth Detail": row["depth_tooltip"],
            "24h Volume": format_currency(row["volume_24h"]),
            "Spread": format_percent(row["spread"]) if row["spread"] else DASH,
        }
        for row in liquidity["pools"]
    ], "No pools found")


def render_defi(derived: dict):
    st.subheader("DeFi Markets")
    markets = derived["defi_markets"]
    tabs = st.tabs([CATEGORY_LABELS[c] for c in (CATEGORY_MONEY_MARKET, CATEGORY_DEX, CATEGORY_PENDLE)])

    for tab, category in zip(tabs[:2], (CATEGORY_MONEY_MARKET, CATEGORY_DEX)):
        with tab:
            show_table([
                {
                    "Protocol": (m["protocol"] or DASH).title(),
                    "Chain": m["chain_display"] or DASH,
                    "Pool": m["pool"] or DASH,
                    "TVL": format_currency(m["tvl_usd"]),
                    "APY": format_percent(m["apy"]) if m["apy"] else DASH,
                }
                for m in markets[category]
            ], "No markets found")

    with tabs[2]:
        show_table([
            {
                "Pool": m["pool"] or DASH,
                "Type": m["position_label"] or DASH,
                "Maturity": m["maturity"].strftime("%d %b %Y") if m["maturity"] else DASH,
                "Days Left": m["days_to_maturity"] if m["days_to_maturity"] is not None else DASH,
                "TVL": format_currency(m["tvl_usd"]),
                "APY": format_percent(m["apy"]) if m["apy"] else DASH,
            }
            for m in markets[CATEGORY_PENDLE]
        ], "No Pendle markets found")


# =============================================================================
# MAIN APP
# =============================================================================

@st.fragment(run_every=REFRESH_CONFIG["interval_minutes"] * 60)
def dashboard():
    run_refresh_cycle(st.session_state.presenter)

    st.caption(f"Last updated: {st.session_state.last_updated}")

    derived = st.session_state.derived
    if derived is None:
        st.info("Waiting for the first metrics snapshot...")
        return

    render_overview(derived)
    st.divider()

    left, right = st.columns(2)
    with left:
        render_backing(derived)
    with right:
        render_theo(derived)
        render_peg(derived)

    st.divider()
    render_liquidity(derived)
    render_defi(derived)


def main():
    init_session_state()
    st.title("🛡️ thBILL Risk Dashboard")
    dashboard()


if __name__ == "__main__":
    main()
