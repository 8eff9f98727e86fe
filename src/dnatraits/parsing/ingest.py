"""Genotype file ingestion: whole-buffer and streaming entry points.

ARCHITECTURE:
    bytes / line stream → detect_dialect (first 20 lines) → parse_line per line → IngestionResult

Key Design:
- One pure per-line function (parse_line) shared by both entry points
- Dialect selected once per parse and threaded through every line
- Blank, comment and header lines are skipped, never counted invalid
- Per-line exceptions are caught and folded into a bounded error list
- Empty, malformed and unreadable input raise typed IngestionErrors
- parse_stream yields to the event loop periodically and keeps only the
  current line, the 20-line dialect sample and the growing result in memory
"""

import asyncio
import logging
import time
from typing import AsyncIterable, AsyncIterator, Callable, Iterable

from dnatraits.constants import (
    BUFFER_BATCH_SIZE,
    DIALECT_SAMPLE_SIZE,
    INVALID_LINE_WARNING_RATIO,
    MAX_LINE_ERRORS,
    PROGRESS_INTERVAL,
    STREAM_YIELD_INTERVAL,
)
from dnatraits.models.ingestion import IngestionResult
from dnatraits.models.variant import Dialect, ParsedVariant
from dnatraits.parsing.dialect import detect_dialect
from dnatraits.parsing.errors import EmptyInputError, MalformedInputError, StreamReadError
from dnatraits.parsing.line_parser import is_skippable_line, parse_line

logger = logging.getLogger(__name__)

LineSource = AsyncIterable[bytes | str] | Iterable[bytes | str]
ProgressCallback = Callable[[int], None]


class _IngestionTally:
    """Accumulates variants and counters for a single parse call."""

    def __init__(self, batch_size: int | None = None):
        self.batch_size = batch_size or BUFFER_BATCH_SIZE
        self.variants: list[ParsedVariant] = []
        self._batch: list[ParsedVariant] = []
        self.total_lines = 0
        self.invalid_lines = 0
        self.skipped_lines = 0
        self.errors: list[str] = []

    @property
    def valid_count(self) -> int:
        return len(self.variants) + len(self._batch)

    def consume(self, line_number: int, line: str, dialect: Dialect) -> None:
        self.total_lines += 1

        try:
            variant = parse_line(line, dialect)
        except Exception as e:
            self.invalid_lines += 1
            if len(self.errors) < MAX_LINE_ERRORS:
                self.errors.append(f"Line {line_number}: {str(e) or type(e).__name__}")
            logger.debug(f"Line {line_number} raised {type(e).__name__}: {e}")
            return

        if variant is not None:
            self._batch.append(variant)
            if len(self._batch) >= self.batch_size:
                self._flush()
                logger.debug(f"Processed {len(self.variants)} variants...")
        elif is_skippable_line(line):
            self.skipped_lines += 1
        else:
            self.invalid_lines += 1

    def _flush(self) -> None:
        self.variants.extend(self._batch)
        self._batch = []

    def build(self, dialect: Dialect, filename: str, started: float) -> IngestionResult:
        self._flush()

        warnings: list[str] = []
        if self.invalid_lines > self.total_lines * INVALID_LINE_WARNING_RATIO:
            warnings.append(
                f"High number of invalid lines ({self.invalid_lines}/{self.total_lines}). "
                f"File may be corrupted or in an unexpected format."
            )
            logger.warning(
                f"{filename or '<stream>'}: {self.invalid_lines}/{self.total_lines} lines invalid"
            )

        processing_time_ms = int((time.perf_counter() - started) * 1000)

        logger.info(
            f"Parsing complete: source={dialect.value} total_lines={self.total_lines} "
            f"valid_variants={len(self.variants)} invalid_lines={self.invalid_lines} "
            f"processing_time_ms={processing_time_ms}"
        )

        return IngestionResult(
            success=len(self.variants) > 0,
            source=dialect,
            filename=filename,
            variants=self.variants,
            total_lines=self.total_lines,
            valid_variants=len(self.variants),
            invalid_lines=self.invalid_lines,
            skipped_lines=self.skipped_lines,
            errors=self.errors,
            warnings=warnings,
            processing_time_ms=processing_time_ms,
        )


def _decode_buffer(buffer: bytes | bytearray | str) -> str:
    if isinstance(buffer, str):
        return buffer.removeprefix("\ufeff")
    # utf-8-sig drops a leading byte order mark
    return bytes(buffer).decode("utf-8-sig", errors="replace")


def _decode_line(raw: bytes | str) -> str:
    if isinstance(raw, (bytes, bytearray)):
        raw = bytes(raw).decode("utf-8", errors="replace")
    return raw.rstrip("\r\n").removeprefix("\ufeff")


async def _iter_lines(source: LineSource) -> AsyncIterator[str]:
    """Iterate decoded lines from an async or plain iterable source."""
    if hasattr(source, "__aiter__"):
        async for raw in source:
            yield _decode_line(raw)
    else:
        for raw in source:
            yield _decode_line(raw)


def parse_buffer(buffer: bytes | bytearray | str, filename: str = "") -> IngestionResult:
    """Parse a complete genotype file held in memory.

    Args:
        buffer: Raw file contents (UTF-8)
        filename: Upload name, used for diagnostics only

    Returns:
        IngestionResult with every valid variant

    Raises:
        EmptyInputError: If the buffer is empty or None
        MalformedInputError: If the file has fewer than 2 lines
    """
    if not buffer:
        raise EmptyInputError("DNA file is empty or invalid")

    started = time.perf_counter()
    logger.info(f"Parsing DNA file: {filename or '<buffer>'} ({len(buffer)} bytes)")

    lines = _decode_buffer(buffer).split("\n")
    if len(lines) < 2:
        raise MalformedInputError("DNA file appears to be empty or malformed")

    dialect = detect_dialect(lines[:DIALECT_SAMPLE_SIZE])
    logger.info(f"Detected format: {dialect.value}")

    tally = _IngestionTally()
    for line_number, line in enumerate(lines, start=1):
        tally.consume(line_number, line, dialect)

    return tally.build(dialect, filename, started)


async def parse_stream(
    line_source: LineSource,
    filename: str = "",
    on_progress: ProgressCallback | None = None,
) -> IngestionResult:
    """Parse a genotype file incrementally from a line-oriented source.

    The first 20 lines are held back until the dialect is known, then run
    through the same per-line path as every later line. If the dialect is
    still Unknown when line 21 arrives, detection is retried once over the
    same 20 lines, so both entry points agree on the dialect.

    Args:
        line_source: Async or plain iterable of lines (bytes or str), e.g. an
            asyncio.StreamReader or a file opened in binary mode
        filename: Upload name, used for diagnostics only
        on_progress: Called with the running valid-variant count every
            50,000 input lines

    Returns:
        IngestionResult with the same shape and rules as parse_buffer

    Raises:
        EmptyInputError: If no source is supplied
        StreamReadError: If the source fails while being read, including an
            asyncio.StreamReader line longer than the reader's limit
    """
    if line_source is None:
        raise EmptyInputError("No DNA file stream supplied")

    started = time.perf_counter()
    logger.info(f"Stream parsing DNA file: {filename or '<stream>'}")

    tally = _IngestionTally()
    sample: list[str] = []
    dialect: Dialect | None = None
    line_number = 0

    lines = _iter_lines(line_source)
    while True:
        try:
            line = await anext(lines)
        except StopAsyncIteration:
            break
        except (OSError, EOFError, UnicodeError, ValueError) as e:
            # ValueError: asyncio.StreamReader line longer than its limit
            logger.error(f"Stream read failed for {filename or '<stream>'} at line {line_number + 1}: {e}")
            raise StreamReadError(f"Failed to read DNA file: {e}") from e

        line_number += 1

        if dialect is None:
            sample.append(line)
            if line_number == DIALECT_SAMPLE_SIZE:
                dialect = detect_dialect(sample)
                logger.info(f"Stream parsing - detected format: {dialect.value}")
                for sampled_number, sampled_line in enumerate(sample, start=1):
                    tally.consume(sampled_number, sampled_line, dialect)
        else:
            if line_number == DIALECT_SAMPLE_SIZE + 1:
                # Retried once on the same sample, never on later lines
                if dialect is Dialect.UNKNOWN:
                    dialect = detect_dialect(sample)
                    logger.info(f"Stream parsing - re-detected format: {dialect.value}")
                sample = []
            tally.consume(line_number, line, dialect)

        if on_progress is not None and line_number % PROGRESS_INTERVAL == 0:
            on_progress(tally.valid_count)

        if line_number % STREAM_YIELD_INTERVAL == 0:
            await asyncio.sleep(0)

    if dialect is None:
        # Shorter than the sample window
        dialect = detect_dialect(sample)
        logger.info(f"Stream parsing - detected format: {dialect.value}")
        for sampled_number, sampled_line in enumerate(sample, start=1):
            tally.consume(sampled_number, sampled_line, dialect)

    return tally.build(dialect, filename, started)
