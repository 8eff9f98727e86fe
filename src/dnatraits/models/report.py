"""Combined ingestion and trait analysis report."""

from pydantic import BaseModel, Field

from dnatraits.models.ingestion import IngestionResult
from dnatraits.models.traits import TraitMatch, TraitSummary


class GenotypeReport(BaseModel):
    """Parsed file, matched traits and their summary."""

    ingestion: IngestionResult
    matches: list[TraitMatch] = Field(default_factory=list)
    summary: TraitSummary = Field(default_factory=TraitSummary)

    def to_report(self) -> str:
        """Simple report output."""
        report = self.ingestion.to_report()
        report += f"\nTraits matched: {self.summary.total}\n"

        risk_counts = [f"{level}: {count}" for level, count in self.summary.by_risk.items()]
        report += f"By risk: {' | '.join(risk_counts)}\n"

        if self.summary.by_category:
            category_counts = [
                f"{category}: {count}"
                for category, count in sorted(self.summary.by_category.items())
            ]
            report += f"By category: {' | '.join(category_counts)}\n"

        for match in self.matches:
            report += (
                f"\n[{match.risk_level.value}] {match.trait_name} "
                f"({match.gene} {match.rsid} {match.genotype})\n"
            )
            report += f"  {match.description}\n"
            if match.recommendations:
                report += f"  Recommendations: {match.recommendations}\n"

        return report
