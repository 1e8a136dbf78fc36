"""
thBILL Risk Dashboard - terminal runner.

Runs the refresh loop without Streamlit and prints a short summary of each
cycle.

Usage:
    python -m thbill_dashboard --base-url https://example.org/thbill
    python -m thbill_dashboard --base-url sample_data --once
"""

import argparse
from typing import Any, Dict, List, Optional

from .config.settings import DATA_CONFIG, REFRESH_CONFIG
from .formatting import format_compact_usd, format_percent, format_signed_percent
from .refresh import run_forever


class ConsolePresenter:
    """Presenter that prints one summary block per cycle."""

    def render(self, derived: Dict[str, Any], sequence: int):
        ratio = derived["backing_ratio"]
        peg = derived["peg"]
        liquidity = derived["liquidity"]
        rating = derived["rating"]

        print(f"=== thBILL cycle {sequence} ({derived['last_updated']}) ===")
        print(f"  Backing ratio:  {format_percent(ratio['ratio_pct'])} "
              f"[{ratio['status']}]")
        if peg is not None:
            print(f"  Premium/disc.:  {format_signed_percent(peg['premium_discount_pct'])}")
        if liquidity is not None:
            print(f"  Pools:          {liquidity['pool_count']} "
                  f"(TVL {format_compact_usd(liquidity['total_tvl'])})")
        print(f"  Rating:         {rating['stars_display']} {rating['message']}")

    def render_error(self, message: str, sequence: int):
        print(f"=== thBILL cycle {sequence}: {message} ===")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="thBILL Risk Dashboard - terminal runner")
    parser.add_argument("--base-url", "-u", type=str, default=None,
                        help=f"Data location (default: {DATA_CONFIG['base_url']})")
    parser.add_argument("--interval", "-i", type=float, default=None,
                        help=f"Minutes between cycles (default: {REFRESH_CONFIG['interval_minutes']})")
    parser.add_argument("--once", action="store_true", help="Run a single cycle and exit")

    args = parser.parse_args(argv)

    cycles = run_forever(
        ConsolePresenter(),
        base_url=args.base_url,
        interval_minutes=args.interval,
        max_cycles=1 if args.once else None,
    )
    print(f"Stopped after {cycles} cycle(s).")
    return 0


if __name__ == "__main__":
    main()
