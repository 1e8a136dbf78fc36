"""
Integration tests for the terminal runner (python -m thbill_dashboard).
"""

import pytest
import sys
from pathlib import Path
from unittest.mock import patch

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from thbill_dashboard.__main__ import ConsolePresenter, main


class TestConsoleRunner:

    @pytest.mark.integration
    @pytest.mark.smoke
    def test_single_cycle_prints_summary(self, sample_data_dir, capsys):
        with patch("thbill_dashboard.refresh.signal.signal"):
            exit_code = main(["--base-url", str(sample_data_dir), "--once"])

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "=== thBILL cycle" in out
        assert "Thin market depth" in out
        assert "Pools:          2" in out
        assert "Stopped after 1 cycle(s)." in out

    @pytest.mark.integration
    def test_snapshot_failure_prints_error(self, tmp_path, capsys):
        with patch("thbill_dashboard.refresh.signal.signal"):
            exit_code = main(["--base-url", str(tmp_path), "--once"])

        assert exit_code == 0
        assert "Error loading data" in capsys.readouterr().out

    @pytest.mark.integration
    def test_interval_is_passed_to_loop(self, sample_data_dir):
        with patch("thbill_dashboard.__main__.run_forever", return_value=1) as mock_loop:
            main(["--base-url", str(sample_data_dir), "--interval", "0.5", "--once"])

        kwargs = mock_loop.call_args.kwargs
        assert kwargs["interval_minutes"] == 0.5
        assert kwargs["max_cycles"] == 1
        assert isinstance(mock_loop.call_args.args[0], ConsolePresenter)
