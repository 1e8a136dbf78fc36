"""
Refresh Driver - fetch, derive, present on a fixed schedule.

Per cycle:
1. Fetch snapshot (failure aborts the cycle; presenter shows an error state)
2. Fetch peg history (failure degrades to an empty history)
3. Derive all dashboard sections
4. Hand the result to the presenter

A presenter is any object with:
- render(derived: dict, sequence: int)
- render_error(message: str, sequence: int)
"""

import itertools
import signal
import time
from datetime import datetime, timezone
from typing import Dict, Any, Optional

from .config.settings import REFRESH_CONFIG
from .core.deriver import derive_dashboard
from .fetchers.snapshot import SnapshotFetchError, fetch_snapshot, fetch_peg_history

ERROR_MESSAGE = "Error loading data"

_sequence = itertools.count(1)


def next_sequence() -> int:
    return next(_sequence)


class LatestOnlyPresenter:
    """
    Presenter wrapper that ignores renders from cycles older than the newest
    one already shown, so a slow cycle cannot overwrite a newer one.
    """

    def __init__(self, presenter):
        self.presenter = presenter
        self.last_sequence = 0

    def _accept(self, sequence: int) -> bool:
        if sequence < self.last_sequence:
            return False
        self.last_sequence = sequence
        return True

    def render(self, derived: Dict[str, Any], sequence: int) -> bool:
        if not self._accept(sequence):
            return False
        self.presenter.render(derived, sequence)
        return True

    def render_error(self, message: str, sequence: int) -> bool:
        if not self._accept(sequence):
            return False
        self.presenter.render_error(message, sequence)
        return True


def run_refresh_cycle(
    presenter,
    base_url: Optional[str] = None,
    sequence: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Run one fetch → derive → present cycle.

    Args:
        presenter: Object implementing render / render_error
        base_url: Override for DATA_CONFIG["base_url"]
        sequence: Cycle number; allocated when omitted

    Returns:
        Dict with cycle status for logging / tests
    """
    if sequence is None:
        sequence = next_sequence()

    result = {
        "sequence": sequence,
        "started_at": datetime.now(timezone.utc).isoformat(),
        "status": "error",
        "history_points": 0,
        "error": None,
    }

    try:
        snapshot = fetch_snapshot(base_url)
    except SnapshotFetchError as e:
        print(f"Failed to fetch metrics: {e}")
        result["error"] = str(e)
        presenter.render_error(ERROR_MESSAGE, sequence)
        return result

    history = fetch_peg_history(base_url)
    result["history_points"] = len(history)

    derived = derive_dashboard(snapshot, history)
    presenter.render(derived, sequence)

    result["status"] = "success"
    return result


def run_forever(
    presenter,
    base_url: Optional[str] = None,
    interval_minutes: Optional[float] = None,
    max_cycles: Optional[int] = None,
) -> int:
    """
    Run a cycle immediately, then every interval until interrupted.

    Returns:
        Number of cycles run
    """
    interval_seconds = (interval_minutes or REFRESH_CONFIG["interval_minutes"]) * 60
    presenter = LatestOnlyPresenter(presenter)

    run = True

    def handle_signal(signum, frame):
        nonlocal run
        run = False
        print("Shutdown signal received.")

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    cycles = 0
    while run:
        start = time.time()
        result = run_refresh_cycle(presenter, base_url)
        cycles += 1
        print(f"[cycle {result['sequence']}] {result['status']} "
              f"({result['history_points']} history points)")

        if max_cycles is not None and cycles >= max_cycles:
            break

        sleep_for = max(0.0, interval_seconds - (time.time() - start))
        if sleep_for > 0:
            time.sleep(sleep_for)

    return cycles
