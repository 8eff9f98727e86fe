"""Vendor dialect detection for consumer genotype exports.

A heuristic over the leading lines of a file. It only needs enough signal to
pick a delimiter; line validation does the real gatekeeping.
"""

from typing import Sequence

from dnatraits.constants import COMMENT_PREFIX, HEADER_PATTERN
from dnatraits.models.variant import Dialect


def detect_dialect(sample_lines: Sequence[str]) -> Dialect:
    """Detect the vendor dialect from a sample of leading lines.

    Rules, in priority order:
    1. Any '#' line and any tab -> 23andMe
    2. Any comma, or a bare rsid/snp header with no '#' lines -> AncestryDNA
    3. Any tab -> 23andMe
    4. Otherwise -> Unknown

    Args:
        sample_lines: First lines of the file (typically 20)

    Returns:
        Detected Dialect

    Examples:
        >>> detect_dialect(["# rsid\\tchromosome\\tposition\\tgenotype"])
        <Dialect.TWENTY_THREE_AND_ME: '23andMe'>
        >>> detect_dialect(["rsid,chromosome,position,allele1,allele2"])
        <Dialect.ANCESTRY_DNA: 'AncestryDNA'>
    """
    has_comments = any(line.startswith(COMMENT_PREFIX) for line in sample_lines)
    has_tabs = any("\t" in line for line in sample_lines)

    if has_comments and has_tabs:
        return Dialect.TWENTY_THREE_AND_ME

    has_commas = any("," in line for line in sample_lines)
    has_header = any(HEADER_PATTERN.match(line) for line in sample_lines)

    if has_commas or (has_header and not has_comments):
        return Dialect.ANCESTRY_DNA

    # Comma-only files were already claimed above
    if has_tabs:
        return Dialect.TWENTY_THREE_AND_ME

    return Dialect.UNKNOWN
