"""Line-level validation and normalization of genotype calls.

Shared by the buffered and streaming ingestion paths. A line either yields a
fully valid ParsedVariant or None; nothing partially valid is ever returned.

Column layouts:
- 23andMe: rsid, chromosome, position, genotype
- AncestryDNA: rsid, chromosome, position, allele1, allele2
"""

import logging

from dnatraits.constants import (
    BASE_CONFIDENCE,
    COMMENT_PREFIX,
    DIPLOID_CONFIDENCE_BONUS,
    GENOTYPE_PATTERN,
    HEADER_PATTERN,
    INTERNAL_ID_PATTERN,
    MAX_CONFIDENCE,
    MITOCHONDRIAL_ALIASES,
    NO_CALL_GENOTYPES,
    POSITION_PATTERN,
    RSID_CONFIDENCE_BONUS,
    RSID_PATTERN,
    STANDARD_DIPLOID_PATTERN,
    VALID_CHROMOSOMES,
)
from dnatraits.models.variant import Dialect, ParsedVariant

logger = logging.getLogger(__name__)


def is_skippable_line(line: str) -> bool:
    """Blank, comment and header lines hold no data and are never counted invalid."""
    return (
        not line.strip()
        or line.startswith(COMMENT_PREFIX)
        or HEADER_PATTERN.match(line) is not None
    )


def is_valid_rsid(rsid: str) -> bool:
    return bool(RSID_PATTERN.match(rsid) or INTERNAL_ID_PATTERN.match(rsid))


def normalize_chromosome(chromosome: str) -> str | None:
    """Upper-case a chromosome label and map 'M' to 'MT'.

    Returns None if the label is not one of 1-22, X, Y, MT.
    """
    normalized = chromosome.strip().upper()
    normalized = MITOCHONDRIAL_ALIASES.get(normalized, normalized)
    if normalized not in VALID_CHROMOSOMES:
        return None
    return normalized


def parse_position(position: str) -> int | None:
    """Parse a base-10 coordinate; None unless it is an integer >= 1.

    Only plain digits are accepted: a sign, trailing text ('12abc') or
    exponent notation makes the position invalid.
    """
    position = position.strip()
    if not POSITION_PATTERN.match(position):
        return None
    value = int(position)
    return value if value >= 1 else None


def normalize_genotype(genotype: str) -> str | None:
    """Upper-case a genotype call; None if it is not a recognized call or no-call."""
    normalized = genotype.strip().upper()
    if normalized in NO_CALL_GENOTYPES or GENOTYPE_PATTERN.match(normalized):
        return normalized
    return None


def score_confidence(rsid: str, genotype: str) -> float:
    """Parse-quality heuristic in [0.8, 1.0].

    +0.1 for a dbSNP 'rs' id (as written in the file), +0.1 for a call of two
    standard nucleotides.
    """
    confidence = BASE_CONFIDENCE
    if rsid.startswith("rs"):
        confidence += RSID_CONFIDENCE_BONUS
    if STANDARD_DIPLOID_PATTERN.match(genotype):
        confidence += DIPLOID_CONFIDENCE_BONUS
    return round(min(confidence, MAX_CONFIDENCE), 2)


def parse_line(line: str, dialect: Dialect) -> ParsedVariant | None:
    """Parse one line of a raw genotype export.

    Args:
        line: Raw text line (trailing newline optional)
        dialect: Dialect selected for the whole file

    Returns:
        ParsedVariant, or None for skippable lines and lines failing validation
    """
    if is_skippable_line(line):
        return None

    tokens = dialect.tokenizer(line)

    if dialect.splits_alleles and len(tokens) >= 5:
        rsid, chromosome, position = tokens[0], tokens[1], tokens[2]
        genotype = tokens[3].upper() + tokens[4].upper()
    elif len(tokens) >= 4:
        rsid, chromosome, position, genotype = tokens[0], tokens[1], tokens[2], tokens[3]
    else:
        logger.debug(f"Rejected line: expected at least 4 columns, got {len(tokens)}")
        return None

    if not is_valid_rsid(rsid):
        logger.debug(f"Rejected line: invalid id {rsid!r}")
        return None

    normalized_chromosome = normalize_chromosome(chromosome)
    if normalized_chromosome is None:
        logger.debug(f"Rejected {rsid}: invalid chromosome {chromosome!r}")
        return None

    parsed_position = parse_position(position)
    if parsed_position is None:
        logger.debug(f"Rejected {rsid}: invalid position {position!r}")
        return None

    normalized_genotype = normalize_genotype(genotype)
    if normalized_genotype is None:
        logger.debug(f"Rejected {rsid}: invalid genotype {genotype!r}")
        return None

    return ParsedVariant(
        rsid=rsid.lower(),
        chromosome=normalized_chromosome,
        position=parsed_position,
        genotype=normalized_genotype,
        confidence=score_confidence(rsid, normalized_genotype),
    )
