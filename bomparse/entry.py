"""Canonical BOM entry value type."""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List

from .schema import IDENTITY_SEPARATOR


def identity_key(manufacturer: str, part_number: str) -> str:
    """Build the deduplication key from canonical manufacturer and part number."""
    return f"{manufacturer}{IDENTITY_SEPARATOR}{part_number}"


@dataclass(eq=False, slots=True)
class BomEntry:
    """
    A normalized BOM entry.

    Two entries describe the same entity when their canonical manufacturer
    and part number are equal (see `key`). Only `occurrence_count` and
    `reference_designators` change after construction, and only through
    `merge()` / `add_designators()`.

    `reference_designators` behaves as an insertion-ordered set: values are
    unique, kept in order of first appearance, and compared as a set.
    """
    part_number: str
    manufacturer: str
    reference_designators: List[str] = field(default_factory=list)
    occurrence_count: int = 1

    def __post_init__(self):
        if self.occurrence_count < 1:
            raise ValueError(
                f"occurrence_count must be >= 1, got {self.occurrence_count}"
            )
        designators = self.reference_designators
        self.reference_designators = []
        self.add_designators(designators)

    @property
    def key(self) -> str:
        return identity_key(self.manufacturer, self.part_number)

    def add_designators(self, designators: Iterable[str]) -> None:
        """Union designators into this entry, keeping first-appearance order."""
        for designator in designators:
            if designator not in self.reference_designators:
                self.reference_designators.append(designator)

    def merge(self, other: "BomEntry") -> None:
        """Fold another occurrence of the same entity into this one.

        Raises:
            ValueError: If the other entry has a different identity key
        """
        if other.key != self.key:
            raise ValueError(
                f"Cannot merge '{other.key}' into '{self.key}': identity keys differ"
            )
        self.occurrence_count += other.occurrence_count
        self.add_designators(other.reference_designators)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "MPN": self.part_number,
            "Manufacturer": self.manufacturer,
            "ReferenceDesignators": list(self.reference_designators),
            "NumOccurrences": self.occurrence_count,
        }

    def __eq__(self, other):
        if not isinstance(other, BomEntry):
            return NotImplemented
        return (
            self.part_number == other.part_number
            and self.manufacturer == other.manufacturer
            and set(self.reference_designators) == set(other.reference_designators)
            and self.occurrence_count == other.occurrence_count
        )
