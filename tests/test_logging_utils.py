"""
Tests for run logging helpers.
"""

import logging
import time

from helix_diff.utils.logging_utils import (
    format_command, log_run_summary, log_worker_info, setup_logging,
)


class TestSetupLogging:
    """Tests for setup_logging()."""

    def test_routes_messages(self, tmp_path):
        collector = setup_logging(tmp_path / "logs" / "compare.log")
        logging.getLogger("helix_diff.test").info("chromosome 3 trimmed")
        logging.getLogger("helix_diff.test").warning("chromosome 9 failed")

        main_log = (tmp_path / "logs" / "compare.log").read_text()
        error_log = (tmp_path / "logs" / "comparison_error.log").read_text()
        assert "chromosome 3 trimmed" in main_log
        assert "chromosome 9 failed" in main_log
        assert "chromosome 3 trimmed" not in error_log
        assert "chromosome 9 failed" in error_log
        assert collector.messages == ["chromosome 9 failed"]

    def test_second_run_starts_clean(self, tmp_path):
        first = setup_logging(tmp_path / "one.log")
        logging.getLogger().warning("from the first run")
        second = setup_logging(tmp_path / "two.log")
        logging.getLogger().warning("from the second run")

        assert first.messages == ["from the first run"]
        assert second.messages == ["from the second run"]


class TestFormatCommand:
    """Tests for format_command()."""

    def test_one_option_per_line(self):
        argv = ["/usr/bin/helix-diff", "compare", "--a", "a.fa", "--threads", "4", "--verbose"]
        assert format_command(argv) == "helix-diff compare\n  --a a.fa\n  --threads 4\n  --verbose"

    def test_program_only(self):
        assert format_command(["helix-diff"]) == "helix-diff"


class TestRunSummary:
    """Tests for the worker warning and the closing summary."""

    def test_idle_threads_warned(self, tmp_path):
        collector = setup_logging(tmp_path / "run.log")
        log_worker_info(threads=30, chromosomes=23)
        assert any("7 of 30 threads will stay idle" in m for m in collector.messages)

    def test_no_warning_within_chromosome_count(self, tmp_path):
        collector = setup_logging(tmp_path / "run.log")
        log_worker_info(threads=1, chromosomes=23)
        assert collector.messages == []

    def test_summary_replays_warnings(self, tmp_path):
        collector = setup_logging(tmp_path / "run.log")
        logging.getLogger().warning("chromosome 22 skipped")
        log_run_summary("helix-diff compare", time.time(), {"Differences": "12"}, collector)

        text = (tmp_path / "run.log").read_text()
        assert "Differences:" in text
        assert "1 warning(s) and error(s):" in text
        assert "  - chromosome 22 skipped" in text
        assert collector.messages == ["chromosome 22 skipped"]
