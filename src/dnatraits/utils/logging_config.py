"""Logging configuration for DNATraits parse runs.

Provides structured logging of file ingestion and trait analysis runs: a
console line per event and, optionally, a dated JSONL file for later review.
"""

import json
import logging
from datetime import datetime
from pathlib import Path

from dnatraits.models.ingestion import IngestionResult
from dnatraits.models.traits import TraitSummary


class ParseRunLogger:
    """Logger for parse runs with structured output."""

    def __init__(self, log_dir: Path | None = None, enable_file_logging: bool = True):
        """Initialize the parse run logger.

        Args:
            log_dir: Directory for log files. Defaults to ./logs
            enable_file_logging: Whether to write logs to files
        """
        self.logger = logging.getLogger("dnatraits.runs")
        self.logger.setLevel(logging.INFO)

        # Remove existing handlers to avoid duplicates
        self.logger.handlers.clear()

        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.INFO)
        console_formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        console_handler.setFormatter(console_formatter)
        self.logger.addHandler(console_handler)

        self.file_handler = None
        if enable_file_logging:
            if log_dir is None:
                log_dir = Path("./logs")
            log_dir.mkdir(parents=True, exist_ok=True)

            timestamp = datetime.now().strftime("%Y%m%d")
            log_file = log_dir / f"parse_runs_{timestamp}.jsonl"

            # JSON records are written straight to the stream; the handler
            # itself only passes DEBUG records
            self.file_handler = logging.FileHandler(log_file)
            self.file_handler.setLevel(logging.DEBUG)
            self.file_handler.setFormatter(logging.Formatter('%(message)s'))
            self.file_handler.addFilter(lambda record: record.levelno == logging.DEBUG)
            self.logger.addHandler(self.file_handler)

            self.log_file = log_file
            self.logger.info(f"Parse run logging enabled: {log_file}")
        else:
            self.log_file = None

    def _write_entry(self, log_entry: dict) -> None:
        if self.file_handler:
            self.file_handler.stream.write(json.dumps(log_entry) + '\n')
            self.file_handler.flush()

    def close(self) -> None:
        """Detach and close the file handler."""
        if self.file_handler:
            self.logger.removeHandler(self.file_handler)
            self.file_handler.close()
            self.file_handler = None

    def log_parse_started(self, filename: str, mode: str) -> str:
        """Log the start of a parse.

        Returns:
            Run ID for tracking
        """
        run_id = f"{filename or 'stream'}_{datetime.now().strftime('%Y%m%d_%H%M%S_%f')}"

        self._write_entry({
            "timestamp": datetime.now().isoformat(),
            "event_type": "parse_started",
            "run_id": run_id,
            "input": {
                "filename": filename,
                "mode": mode,
            },
        })

        self.logger.info(f"Parse started: {filename or '<stream>'} ({mode})")
        return run_id

    def log_parse_completed(self, run_id: str, result: IngestionResult) -> None:
        """Log the counters of a finished parse."""
        self._write_entry({
            "timestamp": datetime.now().isoformat(),
            "event_type": "parse_completed",
            "run_id": run_id,
            "output": {
                "success": result.success,
                "source": result.source.value,
                "total_lines": result.total_lines,
                "valid_variants": result.valid_variants,
                "invalid_lines": result.invalid_lines,
                "skipped_lines": result.skipped_lines,
                "errors": result.errors,
                "warnings": result.warnings,
                "processing_time_ms": result.processing_time_ms,
            },
        })

        self.logger.info(
            f"Parse completed: {result.filename or '<stream>'} → {result.source.value} "
            f"({result.valid_variants}/{result.total_lines} valid, "
            f"{result.invalid_lines} invalid, {result.processing_time_ms} ms)"
        )
        for warning in result.warnings:
            self.logger.warning(warning)

    def log_parse_failed(self, run_id: str, filename: str, error: Exception) -> None:
        """Log a fatal ingestion error."""
        self._write_entry({
            "timestamp": datetime.now().isoformat(),
            "event_type": "parse_failed",
            "run_id": run_id,
            "input": {
                "filename": filename,
            },
            "error": {
                "type": type(error).__name__,
                "message": str(error),
            },
        })

        self.logger.error(f"Parse failed: {filename or '<stream>'} - {error}")

    def log_trait_summary(self, run_id: str, summary: TraitSummary) -> None:
        """Log the risk and category counts of a trait analysis."""
        self._write_entry({
            "timestamp": datetime.now().isoformat(),
            "event_type": "trait_summary",
            "run_id": run_id,
            "output": {
                "total": summary.total,
                "by_risk": summary.by_risk,
                "by_category": summary.by_category,
                "high_priority": [match.rsid for match in summary.high_priority],
            },
        })

        self.logger.info(
            f"Traits: {summary.total} matched, "
            f"{len(summary.high_priority)} high priority"
        )


# Global logger instance
_global_logger: ParseRunLogger | None = None


def get_logger(log_dir: Path | None = None, enable_file_logging: bool = True) -> ParseRunLogger:
    """Get or create the global parse run logger."""
    global _global_logger

    if _global_logger is None:
        _global_logger = ParseRunLogger(log_dir=log_dir, enable_file_logging=enable_file_logging)

    return _global_logger


def reset_logger() -> None:
    """Reset the global logger (mainly for testing)."""
    global _global_logger
    if _global_logger is not None:
        _global_logger.close()
    _global_logger = None
