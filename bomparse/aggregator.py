"""
Aggregation of normalized BOM entries.

Entries sharing an identity key (canonical manufacturer + part number) are
merged in arrival order: occurrence counts are summed and reference
designators are unioned. The final ranking is a stable sort, so entries that
tie on both sort keys keep the order in which they were first seen.
"""

import logging
from typing import Dict, Iterable, Iterator, List, Optional

from .entry import BomEntry

logger = logging.getLogger(__name__)


class BomAggregator:
    """Deduplicates BOM entries for a single run."""

    def __init__(self):
        # dict keeps insertion order, which the tie-break relies on
        self._entries: Dict[str, BomEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[BomEntry]:
        return iter(self._entries.values())

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def get(self, key: str) -> Optional[BomEntry]:
        return self._entries.get(key)

    def ingest(self, entry: BomEntry) -> None:
        """Fold an entry into the aggregate.

        A new identity key stores the entry as-is; a known key merges the
        entry into the existing one.
        """
        key = entry.key
        existing = self._entries.get(key)
        if existing is None:
            self._entries[key] = entry
            logger.info(f"Entry created: '{key}'")
            return

        existing.merge(entry)
        logger.debug(
            f"Entry merged: '{key}' → {existing.occurrence_count} occurrences, "
            f"{len(existing.reference_designators)} designators"
        )

    def finalize(self, limit: Optional[int] = None) -> List[BomEntry]:
        """Rank the aggregated entries.

        Args:
            limit: Maximum number of entries to return (None for all)

        Returns:
            Entries ordered by occurrence count, then designator count, both
            descending.

        Raises:
            ValueError: If limit is negative
        """
        if limit is not None and limit < 0:
            raise ValueError(f"limit must be a non-negative integer, got {limit}")

        ranked = sorted(
            self._entries.values(),
            key=lambda e: (-e.occurrence_count, -len(e.reference_designators)),
        )
        if limit is not None:
            ranked = ranked[:limit]
        return ranked


def aggregate(entries: Iterable[BomEntry], limit: Optional[int] = None) -> List[BomEntry]:
    """Ingest every entry in order and return the ranked result."""
    aggregator = BomAggregator()
    for entry in entries:
        aggregator.ingest(entry)
    return aggregator.finalize(limit)
