"""Genotype file dialects and parsed variant models."""

from enum import Enum
from typing import Callable

from pydantic import BaseModel, ConfigDict, Field

from dnatraits.constants import COMMA_OR_TAB, NO_CALL_GENOTYPES


def _split_tabs(line: str) -> list[str]:
    return [part.strip() for part in line.split("\t")]


def _split_commas_or_tabs(line: str) -> list[str]:
    return [part.strip() for part in COMMA_OR_TAB.split(line)]


class Dialect(str, Enum):
    """Vendor conventions for consumer genotype exports.

    23andMe: '#'-prefixed metadata block, tab-delimited, one combined genotype column
    AncestryDNA: bare header row, comma or tab delimited, two single-allele columns
    Unknown: no usable signal; parsed as tab-delimited
    """

    TWENTY_THREE_AND_ME = "23andMe"
    ANCESTRY_DNA = "AncestryDNA"
    UNKNOWN = "Unknown"

    @property
    def tokenizer(self) -> Callable[[str], list[str]]:
        """Column splitter for this dialect (tokens are stripped)."""
        if self is Dialect.ANCESTRY_DNA:
            return _split_commas_or_tabs
        return _split_tabs

    @property
    def splits_alleles(self) -> bool:
        """Whether the two alleles arrive in separate columns."""
        return self is Dialect.ANCESTRY_DNA


class ParsedVariant(BaseModel):
    """A validated genotype call from a raw data export."""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "rsid": "rs429358",
                "chromosome": "19",
                "position": 45411941,
                "genotype": "CC",
                "confidence": 1.0,
            }
        },
    )

    rsid: str = Field(..., description="Lower-cased rs or vendor-internal (i) identifier")
    chromosome: str = Field(..., description="1-22, X, Y or MT")
    position: int = Field(..., ge=1, description="1-based coordinate on the chromosome")
    genotype: str = Field(..., description="Upper-cased 1-2 letter call or no-call sentinel")
    confidence: float = Field(..., ge=0.0, le=1.0, description="Parse-quality heuristic (0-1)")

    @property
    def is_no_call(self) -> bool:
        """True for '--' and '??' sentinels."""
        return self.genotype in NO_CALL_GENOTYPES

    @property
    def is_reference_snp(self) -> bool:
        """True for dbSNP ids, False for vendor-internal ids."""
        return self.rsid.startswith("rs")


class VariantStatistics(BaseModel):
    """Distribution summary over a set of parsed variants."""

    total_variants: int = 0
    chromosome_distribution: dict[str, int] = Field(default_factory=dict)
    genotype_distribution: dict[str, int] = Field(default_factory=dict)
    no_calls: int = 0
    average_confidence: float = 0.0
