"""Ingestion result model."""

from pydantic import BaseModel, ConfigDict, Field

from dnatraits.models.variant import Dialect, ParsedVariant


class IngestionResult(BaseModel):
    """Outcome of parsing one genotype file.

    Built once per parse call and never mutated afterwards. Lines that were
    expected to hold data but failed validation are counted in
    ``invalid_lines``; blank, comment and header lines only count towards
    ``skipped_lines``.
    """

    model_config = ConfigDict(frozen=True)

    success: bool = Field(..., description="True when at least one valid variant was produced")
    source: Dialect = Field(..., description="Detected vendor dialect")
    filename: str = Field("", description="Name the file was uploaded under")
    variants: list[ParsedVariant] = Field(default_factory=list)
    total_lines: int = 0
    valid_variants: int = 0
    invalid_lines: int = 0
    skipped_lines: int = 0
    errors: list[str] = Field(default_factory=list, description="Per-line failures (first 10)")
    warnings: list[str] = Field(default_factory=list)
    processing_time_ms: int = 0

    def to_report(self) -> str:
        """Simple report output."""
        report = f"\nFile: {self.filename or '<stream>'} | Source: {self.source.value}\n"
        report += (
            f"Lines: {self.total_lines} | Valid variants: {self.valid_variants} | "
            f"Invalid lines: {self.invalid_lines} | Skipped: {self.skipped_lines}\n"
        )
        report += f"Processing time: {self.processing_time_ms} ms\n"

        if self.warnings:
            report += "\nWarnings:\n"
            for warning in self.warnings:
                report += f"  - {warning}\n"

        if self.errors:
            report += "\nErrors:\n"
            for error in self.errors:
                report += f"  - {error}\n"

        return report
