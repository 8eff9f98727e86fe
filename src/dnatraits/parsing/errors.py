"""Typed failures raised by genotype file ingestion."""


class IngestionError(ValueError):
    """Base class for fatal ingestion failures."""

    pass


class EmptyInputError(IngestionError):
    """The supplied buffer or stream is empty or missing."""

    pass


class MalformedInputError(IngestionError):
    """The input holds fewer than two lines."""

    pass


class StreamReadError(IngestionError):
    """The line source failed mid-read; no partial result is returned."""

    pass
