"""Reference annotation and trait match models.

The reference table is read-only data supplied by the host application. It is
passed explicitly to the matcher so tests can use synthetic tables.
"""

from enum import Enum
from typing import Iterable, Iterator

from pydantic import BaseModel, ConfigDict, Field, field_validator

from dnatraits.constants import HIGH_PRIORITY_RISK_LEVELS, RISK_LEVEL_ORDER


class RiskLevel(str, Enum):
    """Ordinal significance of a trait match.

    HIGH: clinically urgent finding
    MODERATE: elevated risk worth follow-up
    LOW: typical population risk
    PROTECTIVE: genotype associated with reduced risk
    UNKNOWN: not classified
    """

    HIGH = "HIGH"
    MODERATE = "MODERATE"
    LOW = "LOW"
    PROTECTIVE = "PROTECTIVE"
    UNKNOWN = "UNKNOWN"

    @property
    def rank(self) -> int:
        """Sort rank, HIGH first."""
        return RISK_LEVEL_ORDER[self.value]


class GenotypeAnnotation(BaseModel):
    """Health annotation for one observed genotype of a reference SNP."""

    model_config = ConfigDict(frozen=True)

    risk_level: RiskLevel = RiskLevel.UNKNOWN
    description: str = ""
    recommendations: str = ""
    citations: int = Field(0, ge=0, description="Number of supporting publications")

    @field_validator("risk_level", mode="before")
    @classmethod
    def normalize_risk_level(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v


class ReferenceEntry(BaseModel):
    """Curated trait definition for a single SNP."""

    model_config = ConfigDict(frozen=True)

    rsid: str = Field(..., description="Reference SNP id (e.g., rs429358)")
    gene: str = Field(..., description="Gene symbol (e.g., APOE)")
    trait_name: str = Field(..., description="Trait label (e.g., APOE E4 Variant)")
    category: str = Field(..., description="Category tag (e.g., disease_risk)")
    genotypes: dict[str, GenotypeAnnotation] = Field(default_factory=dict)

    @field_validator("rsid")
    @classmethod
    def normalize_rsid(cls, v: str) -> str:
        v = v.strip().lower()
        if not v:
            raise ValueError("rsid must not be empty")
        return v

    @field_validator("genotypes")
    @classmethod
    def normalize_genotype_keys(
        cls, v: dict[str, GenotypeAnnotation]
    ) -> dict[str, GenotypeAnnotation]:
        return {key.strip().upper(): annotation for key, annotation in v.items()}

    def annotation_for(self, genotype: str) -> GenotypeAnnotation | None:
        """Look up the annotation for an observed (normalized) genotype."""
        return self.genotypes.get(genotype)


class ReferenceTable:
    """Immutable, ordered collection of reference entries keyed by rsid.

    Iteration follows the order entries were supplied in. A repeated rsid
    replaces the earlier definition but keeps its original position.
    """

    def __init__(self, entries: Iterable[ReferenceEntry] = ()):
        index: dict[str, ReferenceEntry] = {}
        for entry in entries:
            index[entry.rsid] = entry
        self._index = index
        self._entries = tuple(index.values())

    @classmethod
    def from_mapping(cls, data: dict[str, dict]) -> "ReferenceTable":
        """Build a table from ``{rsid: {gene, trait_name, category, genotypes}}``."""
        return cls(ReferenceEntry(rsid=rsid, **fields) for rsid, fields in data.items())

    @property
    def entries(self) -> tuple[ReferenceEntry, ...]:
        return self._entries

    def get(self, rsid: str) -> ReferenceEntry | None:
        return self._index.get(rsid.strip().lower())

    def known_rsids(self) -> list[str]:
        """All rsids covered by the table, in table order."""
        return [entry.rsid for entry in self._entries]

    def is_known(self, rsid: str) -> bool:
        return rsid.strip().lower() in self._index

    def __iter__(self) -> Iterator[ReferenceEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, rsid: object) -> bool:
        return isinstance(rsid, str) and self.is_known(rsid)

    def __repr__(self) -> str:
        return f"ReferenceTable({len(self._entries)} entries)"


class TraitMatch(BaseModel):
    """A reference trait triggered by an observed genotype."""

    model_config = ConfigDict(frozen=True)

    trait_name: str
    gene: str
    category: str
    rsid: str
    genotype: str
    risk_level: RiskLevel
    description: str
    recommendations: str
    confidence: float = Field(..., ge=0.0, le=1.0, description="Inherited from the parsed variant")
    citation_count: int = 0

    @property
    def sort_key(self) -> tuple[int, str]:
        """Risk rank first, category as the tiebreak."""
        return (self.risk_level.rank, self.category)

    @property
    def is_high_priority(self) -> bool:
        return self.risk_level.value in HIGH_PRIORITY_RISK_LEVELS


class TraitSummary(BaseModel):
    """Aggregate counts over a list of trait matches."""

    total: int = 0
    by_risk: dict[str, int] = Field(
        default_factory=lambda: {level.value: 0 for level in RiskLevel}
    )
    by_category: dict[str, int] = Field(default_factory=dict)
    high_priority: list[TraitMatch] = Field(default_factory=list)
