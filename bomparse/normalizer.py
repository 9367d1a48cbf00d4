from typing import List
import re
from .entry import BomEntry
from .matcher import RawFields
from .schema import DESIGNATOR_SEPARATOR


_WHITESPACE = re.compile(r'\s+')


class BomNormalizer:
    """Normalizer for canonicalizing raw BOM line fields.

    Removes inconsistent spacing and casing from the part number,
    manufacturer and reference designators so that the same component
    always produces the same entry.
    """

    def normalize_part_number(self, raw: str) -> str:
        """Normalize a manufacturer part number.

        Every whitespace character is removed (not collapsed) and the result
        is uppercased: "tsr - 10 02" -> "TSR-1002".
        """
        return _WHITESPACE.sub('', raw).upper()

    def normalize_manufacturer(self, raw: str) -> str:
        """Normalize a manufacturer name to title case.

        " panaSonic  electric " -> "Panasonic Electric"
        """
        return ' '.join(word.capitalize() for word in raw.lower().split())

    def normalize_reference_designators(self, raw: str) -> List[str]:
        """Normalize a comma-separated reference designator list.

        Whitespace is removed entirely, designators are uppercased and
        duplicates collapse onto their first appearance. A whitespace-only
        slot stays as an empty designator.

        Args:
            raw: Reference designator list (e.g., "Z1, z 3,Z 8")

        Returns:
            List of unique designators in order of first appearance
            (e.g., ["Z1", "Z3", "Z8"])
        """
        compact = _WHITESPACE.sub('', raw).upper()
        return list(dict.fromkeys(compact.split(DESIGNATOR_SEPARATOR)))

    def normalize(self, raw_part_number: str, raw_manufacturer: str,
                  raw_reference_designators: str) -> BomEntry:
        """Build a canonical entry from raw field values.

        Returns:
            BomEntry with occurrence_count of 1
        """
        return BomEntry(
            part_number=self.normalize_part_number(raw_part_number),
            manufacturer=self.normalize_manufacturer(raw_manufacturer),
            reference_designators=self.normalize_reference_designators(raw_reference_designators),
            occurrence_count=1,
        )

    def normalize_fields(self, fields: RawFields) -> BomEntry:
        """Build a canonical entry from the fields returned by the matcher."""
        return self.normalize(
            fields.part_number,
            fields.manufacturer,
            fields.reference_designators,
        )
