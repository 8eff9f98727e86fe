"""Core analysis engine combining ingestion and trait matching.

ARCHITECTURE:
    raw bytes / line stream → parse_buffer | parse_stream → IngestionResult → match_traits → summarize_matches → GenotypeReport

Key Design:
- Reference table injected at construction (bundled table by default)
- Typed ingestion errors propagate to the caller unchanged
- Stateless between calls; the reference table is only read
- Optional structured run logging (console + JSONL)
"""

from pathlib import Path

from dnatraits.matching import match_traits, summarize_matches
from dnatraits.models.ingestion import IngestionResult
from dnatraits.models.report import GenotypeReport
from dnatraits.models.traits import ReferenceTable
from dnatraits.parsing import parse_buffer, parse_stream
from dnatraits.parsing.errors import IngestionError
from dnatraits.parsing.ingest import LineSource, ProgressCallback
from dnatraits.reference import load_reference_table
from dnatraits.utils.logging_config import get_logger


class GenotypeEngine:
    """
    Engine for genotype file analysis.

    Parses a raw data export, matches it against the reference table and
    summarizes the findings. The same engine can serve any number of files.
    """

    def __init__(
        self,
        reference: ReferenceTable | None = None,
        enable_logging: bool = True,
        log_dir: Path | None = None,
    ):
        self.reference = reference if reference is not None else load_reference_table()
        self.enable_logging = enable_logging
        self.run_logger = get_logger(log_dir=log_dir) if enable_logging else None

    def _build_report(self, result: IngestionResult, run_id: str | None) -> GenotypeReport:
        matches = match_traits(result.variants, self.reference)
        summary = summarize_matches(matches)

        if self.run_logger and run_id:
            self.run_logger.log_parse_completed(run_id, result)
            self.run_logger.log_trait_summary(run_id, summary)

        return GenotypeReport(ingestion=result, matches=matches, summary=summary)

    def analyze_buffer(self, buffer: bytes, filename: str = "") -> GenotypeReport:
        """Parse an in-memory file and match its traits.

        Raises:
            EmptyInputError: If the buffer is empty
            MalformedInputError: If the buffer has fewer than 2 lines
        """
        run_id = self.run_logger.log_parse_started(filename, "buffer") if self.run_logger else None

        try:
            result = parse_buffer(buffer, filename)
        except IngestionError as e:
            if self.run_logger and run_id:
                self.run_logger.log_parse_failed(run_id, filename, e)
            raise

        return self._build_report(result, run_id)

    async def analyze_stream(
        self,
        source: LineSource,
        filename: str = "",
        on_progress: ProgressCallback | None = None,
    ) -> GenotypeReport:
        """Parse a line stream and match its traits.

        The 'await' keyword yields control while lines are read, so other
        tasks keep running during a large upload.

        Raises:
            EmptyInputError: If no source is supplied
            StreamReadError: If the source fails mid-read
        """
        run_id = self.run_logger.log_parse_started(filename, "stream") if self.run_logger else None

        try:
            result = await parse_stream(source, filename, on_progress)
        except IngestionError as e:
            if self.run_logger and run_id:
                self.run_logger.log_parse_failed(run_id, filename, e)
            raise

        return self._build_report(result, run_id)
