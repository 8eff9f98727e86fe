"""Tests for parse run logging."""

import json

from dnatraits.models.ingestion import IngestionResult
from dnatraits.models.traits import TraitSummary
from dnatraits.models.variant import Dialect
from dnatraits.utils.logging_config import ParseRunLogger, get_logger, reset_logger


class TestParseRunLogger:
    """Tests for ParseRunLogger."""

    def test_writes_jsonl(self, tmp_path):
        """Test structured events in the dated log file."""
        run_logger = ParseRunLogger(log_dir=tmp_path)
        run_id = run_logger.log_parse_started("genome.txt", "stream")
        run_logger.log_parse_completed(
            run_id,
            IngestionResult(
                success=False,
                source=Dialect.UNKNOWN,
                filename="genome.txt",
                total_lines=3,
                invalid_lines=3,
                warnings=["High number of invalid lines (3/3)."],
            ),
        )
        run_logger.log_trait_summary(run_id, TraitSummary())
        run_logger.close()

        assert run_logger.log_file.name.startswith("parse_runs_")
        entries = [json.loads(line) for line in run_logger.log_file.read_text().splitlines()]

        assert run_id.startswith("genome.txt_")
        assert [e["event_type"] for e in entries] == ["parse_started", "parse_completed", "trait_summary"]
        assert entries[1]["output"]["source"] == "Unknown"
        assert entries[1]["output"]["warnings"] == ["High number of invalid lines (3/3)."]
        assert entries[2]["output"]["total"] == 0

    def test_failure_entry(self, tmp_path):
        """Test the parse_failed event."""
        run_logger = ParseRunLogger(log_dir=tmp_path)
        run_id = run_logger.log_parse_started("", "buffer")
        run_logger.log_parse_failed(run_id, "", ValueError("DNA file is empty or invalid"))
        run_logger.close()

        entries = [json.loads(line) for line in run_logger.log_file.read_text().splitlines()]
        assert run_id.startswith("stream_")
        assert entries[1]["error"] == {"type": "ValueError", "message": "DNA file is empty or invalid"}

    def test_console_only(self, tmp_path):
        """Test that file logging can be disabled."""
        run_logger = ParseRunLogger(log_dir=tmp_path, enable_file_logging=False)
        run_logger.log_parse_started("genome.txt", "buffer")

        assert run_logger.log_file is None
        assert list(tmp_path.iterdir()) == []


class TestGlobalLogger:
    """Tests for get_logger and reset_logger."""

    def test_singleton(self, tmp_path):
        """Test that the global logger is reused until reset."""
        first = get_logger(log_dir=tmp_path)
        assert get_logger() is first

        reset_logger()
        assert get_logger(enable_file_logging=False) is not first
