"""Trait matching against a SNP reference table.

ARCHITECTURE:
    ParsedVariant list → index by rsid → reference lookup → genotype lookup → risk-sorted TraitMatch list

Key Design:
- Reference table is passed in, never read from module state
- Iteration follows the reference table's order, not the variant order
- Repeated rsids in the input: the last call wins
- Genotypes missing from a reference entry are skipped and logged at DEBUG
- Sort: risk rank (HIGH < MODERATE < LOW < PROTECTIVE < UNKNOWN), then category
"""

import logging
from typing import Iterable

from dnatraits.models.traits import ReferenceTable, RiskLevel, TraitMatch, TraitSummary
from dnatraits.models.variant import ParsedVariant

logger = logging.getLogger(__name__)


def index_variants(variants: Iterable[ParsedVariant]) -> dict[str, ParsedVariant]:
    """Map lower-cased rsid to variant; later duplicates overwrite earlier ones."""
    index: dict[str, ParsedVariant] = {}
    for variant in variants:
        key = variant.rsid.lower()
        if key in index:
            logger.debug(f"Duplicate call for {key}; keeping the later genotype {variant.genotype}")
        index[key] = variant
    return index


def match_traits(
    variants: Iterable[ParsedVariant], reference: ReferenceTable
) -> list[TraitMatch]:
    """Match parsed variants against a reference table.

    Args:
        variants: Validated variants from ingestion
        reference: Read-only SNP reference table

    Returns:
        TraitMatch list, most urgent first
    """
    variant_index = index_variants(variants)
    matches: list[TraitMatch] = []

    for entry in reference:
        variant = variant_index.get(entry.rsid)
        if variant is None:
            continue

        annotation = entry.annotation_for(variant.genotype)
        if annotation is None:
            logger.debug(f"Unknown genotype {variant.genotype} for {entry.rsid} ({entry.gene})")
            continue

        matches.append(
            TraitMatch(
                trait_name=entry.trait_name,
                gene=entry.gene,
                category=entry.category,
                rsid=variant.rsid,
                genotype=variant.genotype,
                risk_level=annotation.risk_level,
                description=annotation.description,
                recommendations=annotation.recommendations,
                confidence=variant.confidence,
                citation_count=annotation.citations,
            )
        )

    matches.sort(key=lambda match: match.sort_key)

    logger.info(f"Trait analysis complete: {len(matches)} traits identified")
    return matches


def summarize_matches(matches: Iterable[TraitMatch]) -> TraitSummary:
    """Count matches per risk level and category and collect high-priority ones.

    All five risk levels are always present in ``by_risk``. ``high_priority``
    keeps HIGH and MODERATE matches in input order.
    """
    matches = list(matches)
    by_risk = {level.value: 0 for level in RiskLevel}
    by_category: dict[str, int] = {}

    for match in matches:
        by_risk[match.risk_level.value] += 1
        by_category[match.category] = by_category.get(match.category, 0) + 1

    return TraitSummary(
        total=len(matches),
        by_risk=by_risk,
        by_category=by_category,
        high_priority=[match for match in matches if match.is_high_priority],
    )
