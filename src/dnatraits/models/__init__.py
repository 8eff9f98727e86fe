"""Data models for DNATraits."""

from dnatraits.models.ingestion import IngestionResult
from dnatraits.models.report import GenotypeReport
from dnatraits.models.traits import (
    GenotypeAnnotation,
    ReferenceEntry,
    ReferenceTable,
    RiskLevel,
    TraitMatch,
    TraitSummary,
)
from dnatraits.models.variant import Dialect, ParsedVariant, VariantStatistics

__all__ = [
    "Dialect",
    "ParsedVariant",
    "VariantStatistics",
    "IngestionResult",
    "RiskLevel",
    "GenotypeAnnotation",
    "ReferenceEntry",
    "ReferenceTable",
    "TraitMatch",
    "TraitSummary",
    "GenotypeReport",
]
