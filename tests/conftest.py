"""Pytest configuration and fixtures."""

import pytest


TWENTY_THREE_AND_ME_TEXT = (
    "# This data file generated by 23andMe at: Mon Jan 01 00:00:00 2024\n"
    "#\n"
    "# rsid\tchromosome\tposition\tgenotype\n"
    "rs429358\t19\t45411941\tCC\n"
    "rs7412\t19\t45412079\tCT\n"
    "rs6025\t1\t169519049\tAG\n"
    "i7001234\t2\t123456\tAA\n"
    "rs1801133\t1\t11856378\t--\n"
)

ANCESTRY_TEXT = (
    "rsid,chromosome,position,allele1,allele2\n"
    "rs6025,1,169519049,A,A\n"
    "rs4244285,10,94781859,G,A\n"
    "rs671,12,111803962,G,G\n"
)


@pytest.fixture(autouse=True)
def reset_run_logger():
    """Drop the global run logger between tests."""
    from dnatraits.utils.logging_config import reset_logger

    reset_logger()
    yield
    reset_logger()


@pytest.fixture
def twenty_three_and_me_bytes():
    """Small 23andMe export."""
    return TWENTY_THREE_AND_ME_TEXT.encode("utf-8")


@pytest.fixture
def ancestry_bytes():
    """Small AncestryDNA export."""
    return ANCESTRY_TEXT.encode("utf-8")


@pytest.fixture
def sample_reference():
    """Synthetic reference table."""
    from dnatraits.models.traits import ReferenceTable

    return ReferenceTable.from_mapping({
        "rs429358": {
            "gene": "APOE",
            "trait_name": "APOE E4 Variant",
            "category": "disease_risk",
            "genotypes": {
                "CC": {
                    "risk_level": "HIGH",
                    "description": "APOE E4/E4 genotype.",
                    "recommendations": "Annual cognitive assessments.",
                    "citations": 15,
                },
                "CT": {
                    "risk_level": "MODERATE",
                    "description": "APOE E3/E4 genotype.",
                    "recommendations": "Lipid panel.",
                    "citations": 15,
                },
            },
        },
        "rs7412": {
            "gene": "APOE",
            "trait_name": "APOE E2 Variant",
            "category": "disease_risk",
            "genotypes": {
                "TT": {"risk_level": "PROTECTIVE", "description": "E2/E2.", "recommendations": "", "citations": 12},
                "CT": {"risk_level": "LOW", "description": "One E2 copy.", "recommendations": "", "citations": 10},
            },
        },
        "rs6025": {
            "gene": "F5",
            "trait_name": "Factor V Leiden",
            "category": "disease_risk",
            "genotypes": {
                "AA": {"risk_level": "HIGH", "description": "Homozygous.", "recommendations": "Hematology consult.", "citations": 25},
                "AG": {"risk_level": "MODERATE", "description": "Heterozygous.", "recommendations": "Inform surgeons.", "citations": 20},
            },
        },
        "rs4244285": {
            "gene": "CYP2C19",
            "trait_name": "CYP2C19*2",
            "category": "drug_response",
            "genotypes": {
                "AA": {"risk_level": "HIGH", "description": "Poor metabolizer.", "recommendations": "", "citations": 30},
                "AG": {"risk_level": "MODERATE", "description": "Intermediate metabolizer.", "recommendations": "", "citations": 25},
            },
        },
    })


@pytest.fixture
def make_variant():
    """Factory for ParsedVariant records."""
    from dnatraits.models.variant import ParsedVariant

    def _make(rsid="rs429358", genotype="CC", chromosome="19", position=45411941, confidence=1.0):
        return ParsedVariant(
            rsid=rsid,
            chromosome=chromosome,
            position=position,
            genotype=genotype,
            confidence=confidence,
        )

    return _make
