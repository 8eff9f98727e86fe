"""Helpers for inspecting and exporting parsed variants."""

import csv
import io
from typing import Iterable

from dnatraits.constants import MITOCHONDRIAL_ALIASES
from dnatraits.models.variant import ParsedVariant, VariantStatistics


def analyze_variants(variants: Iterable[ParsedVariant]) -> VariantStatistics:
    """Chromosome and genotype distributions plus mean confidence."""
    chromosome_distribution: dict[str, int] = {}
    genotype_distribution: dict[str, int] = {}
    no_calls = 0
    total_confidence = 0.0
    total = 0

    for variant in variants:
        total += 1
        chromosome_distribution[variant.chromosome] = chromosome_distribution.get(variant.chromosome, 0) + 1
        genotype_distribution[variant.genotype] = genotype_distribution.get(variant.genotype, 0) + 1
        total_confidence += variant.confidence
        if variant.is_no_call:
            no_calls += 1

    return VariantStatistics(
        total_variants=total,
        chromosome_distribution=chromosome_distribution,
        genotype_distribution=genotype_distribution,
        no_calls=no_calls,
        average_confidence=round(total_confidence / total, 4) if total else 0.0,
    )


def filter_by_chromosome(variants: Iterable[ParsedVariant], chromosome: str) -> list[ParsedVariant]:
    target = chromosome.strip().upper()
    target = MITOCHONDRIAL_ALIASES.get(target, target)
    return [variant for variant in variants if variant.chromosome == target]


def search_by_rsid(variants: Iterable[ParsedVariant], query: str) -> list[ParsedVariant]:
    """Variants whose id contains the query (case-insensitive)."""
    term = query.strip().lower()
    return [variant for variant in variants if term in variant.rsid]


def find_duplicate_rsids(variants: Iterable[ParsedVariant]) -> dict[str, int]:
    """Ids reported more than once, with their occurrence counts.

    Matching keeps the last call for a repeated id; this surfaces how often
    that happens in a file.
    """
    counts: dict[str, int] = {}
    for variant in variants:
        counts[variant.rsid] = counts.get(variant.rsid, 0) + 1
    return {rsid: count for rsid, count in counts.items() if count > 1}


def export_variants_csv(variants: Iterable[ParsedVariant]) -> str:
    """Render variants as CSV with a header row."""
    output = io.StringIO()
    writer = csv.writer(output, lineterminator="\n")
    writer.writerow(["rsid", "chromosome", "position", "genotype", "confidence"])
    for variant in variants:
        writer.writerow([
            variant.rsid,
            variant.chromosome,
            variant.position,
            variant.genotype,
            f"{variant.confidence:.3f}",
        ])
    return output.getvalue()
