"""JSON level catalog: one list of level records per file."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List

from ..base import PathLike

logger = logging.getLogger(__name__)


def read_catalog(path: PathLike) -> Dict[str, Dict[str, Any]]:
    """Load a catalog keyed by level id.

    Raises ``FileNotFoundError`` for a missing file and ``ValueError`` when the
    payload is not a list of records that each carry an id.
    """

    catalog_path = Path(path)
    if not catalog_path.exists():
        raise FileNotFoundError(f"Level catalog not found: {catalog_path}")
    entries = json.loads(catalog_path.read_text(encoding="utf-8"))
    if not isinstance(entries, list):
        raise ValueError(f"{catalog_path}: expected a list of level records")
    levels: Dict[str, Dict[str, Any]] = {}
    for position, entry in enumerate(entries):
        if not isinstance(entry, dict) or not entry.get("id"):
            raise ValueError(f"{catalog_path}: record {position} has no level id")
        levels[str(entry["id"])] = entry
    return levels


def write_catalog(path: PathLike, entries: Iterable[Dict[str, Any]], *, append: bool = True) -> int:
    """Write level records, after any already in the file when ``append`` is set.

    Returns the number of records in the file afterwards.
    """

    catalog_path = Path(path)
    catalog_path.parent.mkdir(parents=True, exist_ok=True)
    kept: List[Dict[str, Any]] = []
    if append and catalog_path.exists():
        kept = list(read_catalog(catalog_path).values())
    added = list(entries)
    catalog_path.write_text(json.dumps(kept + added, indent=2), encoding="utf-8")
    logger.info("Added %d levels to %s (%d total)", len(added), catalog_path, len(kept) + len(added))
    return len(kept) + len(added)


__all__ = ["read_catalog", "write_catalog"]
