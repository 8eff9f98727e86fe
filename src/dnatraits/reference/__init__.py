"""SNP reference data."""

from dnatraits.reference.loader import DEFAULT_REFERENCE_PATH, load_reference_table

__all__ = ["DEFAULT_REFERENCE_PATH", "load_reference_table"]
