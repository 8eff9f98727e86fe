"""Genotype file parsing."""

from dnatraits.parsing.dialect import detect_dialect
from dnatraits.parsing.errors import (
    EmptyInputError,
    IngestionError,
    MalformedInputError,
    StreamReadError,
)
from dnatraits.parsing.ingest import parse_buffer, parse_stream
from dnatraits.parsing.line_parser import is_skippable_line, parse_line

__all__ = [
    "detect_dialect",
    "parse_line",
    "is_skippable_line",
    "parse_buffer",
    "parse_stream",
    "IngestionError",
    "EmptyInputError",
    "MalformedInputError",
    "StreamReadError",
]
