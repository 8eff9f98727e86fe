"""Trait matching."""

from dnatraits.matching.matcher import index_variants, match_traits, summarize_matches

__all__ = ["index_variants", "match_traits", "summarize_matches"]
