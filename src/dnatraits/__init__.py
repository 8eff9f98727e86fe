"""DNATraits - consumer genotype parsing and health trait matching."""

__version__ = "0.1.0"
