"""Tests for data models."""

import pytest
from pydantic import ValidationError

from dnatraits.models.ingestion import IngestionResult
from dnatraits.models.report import GenotypeReport
from dnatraits.models.traits import GenotypeAnnotation, RiskLevel, TraitMatch, TraitSummary
from dnatraits.models.variant import Dialect, ParsedVariant


class TestParsedVariant:
    """Tests for ParsedVariant model."""

    def test_creation(self, make_variant):
        """Test creating a parsed variant."""
        variant = make_variant()
        assert variant.rsid == "rs429358"
        assert variant.is_reference_snp
        assert not variant.is_no_call

    def test_no_call_and_internal_id(self, make_variant):
        """Test the no-call and internal id flags."""
        variant = make_variant("i7001234", "--", confidence=0.8)
        assert variant.is_no_call
        assert not variant.is_reference_snp

    def test_frozen(self, make_variant):
        """Test that parsed variants cannot be modified."""
        variant = make_variant()
        with pytest.raises(ValidationError):
            variant.genotype = "TT"

    def test_position_must_be_positive(self, make_variant):
        """Test position validation."""
        with pytest.raises(ValidationError):
            make_variant(position=0)

    def test_confidence_range(self, make_variant):
        """Test confidence bounds."""
        with pytest.raises(ValidationError):
            make_variant(confidence=1.5)


class TestDialect:
    """Tests for Dialect enum."""

    def test_values(self):
        assert Dialect.TWENTY_THREE_AND_ME.value == "23andMe"
        assert Dialect.ANCESTRY_DNA.value == "AncestryDNA"
        assert Dialect.UNKNOWN.value == "Unknown"
        assert Dialect("AncestryDNA") is Dialect.ANCESTRY_DNA


class TestTraitModels:
    """Tests for RiskLevel, GenotypeAnnotation and TraitMatch."""

    def test_risk_rank_order(self):
        """Test that HIGH sorts first and UNKNOWN last."""
        ordered = sorted(RiskLevel, key=lambda level: level.rank)
        assert ordered == [
            RiskLevel.HIGH,
            RiskLevel.MODERATE,
            RiskLevel.LOW,
            RiskLevel.PROTECTIVE,
            RiskLevel.UNKNOWN,
        ]

    def test_annotation_normalizes_risk(self):
        """Test case-insensitive risk levels in reference data."""
        annotation = GenotypeAnnotation(risk_level="protective", description="x")
        assert annotation.risk_level == RiskLevel.PROTECTIVE
        assert annotation.citations == 0

    def test_annotation_rejects_unknown_risk(self):
        with pytest.raises(ValidationError):
            GenotypeAnnotation(risk_level="SEVERE")

    def test_trait_match_priority(self):
        """Test sort key and high-priority flag."""
        match = TraitMatch(
            trait_name="Factor V Leiden",
            gene="F5",
            category="disease_risk",
            rsid="rs6025",
            genotype="AG",
            risk_level=RiskLevel.MODERATE,
            description="Heterozygous.",
            recommendations="",
            confidence=1.0,
        )
        assert match.sort_key == (1, "disease_risk")
        assert match.is_high_priority

    def test_summary_defaults(self):
        """Test that an empty summary lists every risk level."""
        summary = TraitSummary()
        assert summary.by_risk == {"HIGH": 0, "MODERATE": 0, "LOW": 0, "PROTECTIVE": 0, "UNKNOWN": 0}


class TestIngestionResult:
    """Tests for IngestionResult model."""

    def test_to_report(self, make_variant):
        """Test report formatting."""
        result = IngestionResult(
            success=True,
            source=Dialect.TWENTY_THREE_AND_ME,
            filename="genome.txt",
            variants=[make_variant()],
            total_lines=10,
            valid_variants=1,
            invalid_lines=2,
            skipped_lines=7,
            warnings=["High number of invalid lines (2/10)."],
            errors=["Line 4: boom"],
        )
        report = result.to_report()

        assert "File: genome.txt | Source: 23andMe" in report
        assert "Valid variants: 1" in report
        assert "Invalid lines: 2" in report
        assert "High number of invalid lines" in report
        assert "Line 4: boom" in report

    def test_json_dump(self):
        """Test that the dialect serializes as its display name."""
        result = IngestionResult(success=False, source=Dialect.ANCESTRY_DNA)
        assert result.model_dump(mode="json")["source"] == "AncestryDNA"

    def test_genotype_report(self):
        """Test the combined report with no matches."""
        report = GenotypeReport(ingestion=IngestionResult(success=False, source=Dialect.UNKNOWN))

        text = report.to_report()
        assert "Source: Unknown" in text
        assert "Traits matched: 0" in text
        assert "HIGH: 0" in text
