"""BOM line schema: field names, output headers and layout field patterns."""

from typing import Dict, List

# Semantic fields extracted from every BOM line, in canonical order
FIELD_NAMES = [
    "part_number",
    "manufacturer",
    "reference_designators",
]

# Output headers used when rendering entries (JSON keys, CSV/Excel columns)
OUTPUT_HEADERS = [
    "MPN",
    "Manufacturer",
    "ReferenceDesignators",
    "NumOccurrences",
]

# Separator between manufacturer and part number in the identity key
IDENTITY_SEPARATOR = ":"

# Separator between individual reference designators in a raw line
DESIGNATOR_SEPARATOR = ","

# Named capture groups for each field. Matching is case-insensitive.
FIELD_PATTERNS: Dict[str, str] = {
    "part_number": r"(?P<part_number>[A-Z0-9\- ]+)",
    "manufacturer": r"(?P<manufacturer>[A-Za-z0-9 ]+)",
    "reference_designators": (
        r"(?P<reference_designators>[A-Za-z0-9 ]+(?:,[A-Za-z0-9 ]+)*)"
    ),
}

# Layout templates in evaluation order. The first layout that matches the
# whole line wins.
LAYOUT_TEMPLATES: List[Dict[str, str]] = [
    {
        "name": "colon",
        "description": "<part number>:<manufacturer>:<reference designators>",
        "template": "{part_number}:{manufacturer}:{reference_designators}",
    },
    {
        "name": "double_hyphen",
        "description": "<manufacturer> -- <part number>:<reference designators>",
        "template": r"{manufacturer}-\s*-{part_number}:{reference_designators}",
    },
    {
        "name": "semicolon",
        "description": "<reference designators>;<part number>;<manufacturer>",
        "template": "{reference_designators};{part_number};{manufacturer}",
    },
]
