"""
Dashboard configuration.

Data source location and refresh cadence.
"""

import os


def _optional_float(name: str):
    value = os.getenv(name)
    if value is None or value == "":
        return None
    return float(value)


# Where the upstream job publishes its JSON documents. Either an http(s)
# base URL or a local directory.
DATA_CONFIG = {
    "base_url": os.getenv("THBILL_DATA_BASE_URL", "."),
    "metrics_path": "data/thbill_metrics.json",
    "history_path": "data/peg_history.json",
    # None = wait indefinitely, same as a browser fetch
    "request_timeout": _optional_float("THBILL_REQUEST_TIMEOUT"),
}

REFRESH_CONFIG = {
    "interval_minutes": 5,
}
