"""Utility functions."""

from dnatraits.utils.variant_stats import (
    analyze_variants,
    export_variants_csv,
    filter_by_chromosome,
    find_duplicate_rsids,
    search_by_rsid,
)

__all__ = [
    'analyze_variants',
    'export_variants_csv',
    'filter_by_chromosome',
    'find_duplicate_rsids',
    'search_by_rsid',
]
