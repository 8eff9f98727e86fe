"""Reference table loading.

The default table ships with the package as JSON. Every call builds a fresh
ReferenceTable; nothing is cached at module level.
"""

import json
import logging
from pathlib import Path

from dnatraits.models.traits import ReferenceEntry, ReferenceTable

logger = logging.getLogger(__name__)

DEFAULT_REFERENCE_PATH = Path(__file__).resolve().parent.parent / "data" / "snp_reference.json"


def load_reference_table(path: str | Path | None = None) -> ReferenceTable:
    """Load a SNP reference table from a JSON file.

    Accepts either ``{"entries": [...]}`` or a bare list of entries, each with
    rsid, gene, trait_name, category and a genotypes mapping.

    Args:
        path: JSON file to load. Defaults to the bundled table.

    Returns:
        ReferenceTable in file order

    Raises:
        FileNotFoundError: If file does not exist
        ValueError: If JSON is invalid or has the wrong top-level shape
    """
    path = Path(path) if path is not None else DEFAULT_REFERENCE_PATH

    if not path.exists():
        raise FileNotFoundError(f"Reference table not found: {path}")

    logger.info(f"Loading reference table from {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in reference table: {str(e)}")

    # Handle both list and dict with "entries" key
    if isinstance(data, dict) and "entries" in data:
        entries_data = data["entries"]
    elif isinstance(data, list):
        entries_data = data
    else:
        raise ValueError("Invalid reference table format")

    if not isinstance(entries_data, list):
        raise ValueError("Invalid reference table format: 'entries' must be a list")

    entries = []
    skipped = 0
    for idx, entry_data in enumerate(entries_data):
        try:
            entries.append(ReferenceEntry(**entry_data))
        except Exception as e:
            skipped += 1
            rsid = entry_data.get("rsid", "?") if isinstance(entry_data, dict) else "?"
            logger.warning(f"Skipping reference entry {idx} ({rsid}): {e}")

    if skipped:
        logger.warning(f"Skipped {skipped} invalid entries out of {len(entries_data)}")

    table = ReferenceTable(entries)
    logger.info(f"Loaded {len(table)} reference SNPs")
    return table
