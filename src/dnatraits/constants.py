"""Centralized constants and patterns for DNATraits.

This module consolidates the fixed vocabularies and tunables used across the
codebase:
- Chromosome and genotype vocabularies
- Line-level patterns (comments, headers, identifiers)
- Ingestion thresholds and batching sizes
- Risk level ordering used for sorting trait matches

Centralizing these keeps the parser and matcher in agreement.
"""

import re

# =============================================================================
# CHROMOSOMES
# =============================================================================
# Consumer arrays report autosomes, sex chromosomes and mitochondrial calls.
# A bare "M" is accepted on input and normalized to "MT".

VALID_CHROMOSOMES: frozenset[str] = frozenset(
    [str(n) for n in range(1, 23)] + ["X", "Y", "MT"]
)

MITOCHONDRIAL_ALIASES: dict[str, str] = {
    "M": "MT",
}


# =============================================================================
# LINE PATTERNS
# =============================================================================

COMMENT_PREFIX = "#"

# Column header rows, e.g. "rsid,chromosome,position,allele1,allele2"
HEADER_PATTERN = re.compile(r'^(rsid|snp)', re.IGNORECASE)

# Vendor reference SNP ids (rs123) and vendor-internal ids (i7001234)
RSID_PATTERN = re.compile(r'^rs\d+$', re.IGNORECASE)
INTERNAL_ID_PATTERN = re.compile(r'^i\d+$', re.IGNORECASE)

POSITION_PATTERN = re.compile(r'^\d+$')

# One or two calls from A/T/C/G plus D/I (deletion/insertion) and "-"
GENOTYPE_PATTERN = re.compile(r'^[ATCGDI-]{1,2}$')
NO_CALL_GENOTYPES: frozenset[str] = frozenset(["--", "??"])

# Two standard nucleotides, used for confidence scoring
STANDARD_DIPLOID_PATTERN = re.compile(r'^[ATCG]{2}$')

# AncestryDNA files carry either commas or tabs between columns
COMMA_OR_TAB = re.compile(r'[,\t]')


# =============================================================================
# INGESTION TUNABLES
# =============================================================================

DIALECT_SAMPLE_SIZE = 20          # Leading lines inspected for dialect detection
MAX_LINE_ERRORS = 10              # Per-line exception messages kept in a result
INVALID_LINE_WARNING_RATIO = 0.1  # Warn when invalid lines exceed this share
BUFFER_BATCH_SIZE = 10_000        # Variants accumulated per batch in parse_buffer
PROGRESS_INTERVAL = 50_000        # Input lines between stream progress callbacks
STREAM_YIELD_INTERVAL = 1_000     # Input lines between event loop yields

# Confidence heuristic
BASE_CONFIDENCE = 0.8
RSID_CONFIDENCE_BONUS = 0.1
DIPLOID_CONFIDENCE_BONUS = 0.1
MAX_CONFIDENCE = 1.0


# =============================================================================
# RISK LEVELS
# =============================================================================
# Most clinically urgent findings sort first.

RISK_LEVEL_ORDER: dict[str, int] = {
    "HIGH": 0,
    "MODERATE": 1,
    "LOW": 2,
    "PROTECTIVE": 3,
    "UNKNOWN": 4,
}

HIGH_PRIORITY_RISK_LEVELS: frozenset[str] = frozenset(["HIGH", "MODERATE"])


# =============================================================================
# REFERENCE DATA
# =============================================================================

REFERENCE_ENV_VAR = "DNATRAITS_REFERENCE"
LOG_DIR_ENV_VAR = "DNATRAITS_LOG_DIR"
