"""
Format matcher for free-text BOM lines.

A BOM line uses one of a fixed set of layouts. Each layout is a descriptor
holding an anchored, case-insensitive pattern with one named group per field.
Layouts are evaluated in the order of `LAYOUTS` and the first one that matches
the whole line wins.
"""

import logging
import re
from dataclasses import dataclass
from typing import NamedTuple, Optional, Tuple, Union

from .schema import FIELD_PATTERNS, LAYOUT_TEMPLATES

logger = logging.getLogger(__name__)


class BomParseError(ValueError):
    """Base class for errors raised while parsing BOM lines."""


class FormatMismatchError(BomParseError):
    """A line matched a layout other than the one it was expected to use."""

    def __init__(self, line: str, expected: str, actual: str):
        self.line = line
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Parsed successfully, but not the expected format! "
            f"(expected '{expected}', got '{actual}' for {line!r})"
        )


class RawFields(NamedTuple):
    """Raw, un-normalized field values extracted from a line."""
    part_number: str
    manufacturer: str
    reference_designators: str


@dataclass(frozen=True)
class Layout:
    """Descriptor of one textual BOM line layout."""
    name: str
    description: str
    pattern: re.Pattern

    def extract(self, line: str) -> Optional[RawFields]:
        """Extract raw fields if the whole line matches this layout."""
        match = self.pattern.fullmatch(line)
        if match is None:
            return None
        return RawFields(
            part_number=match.group("part_number"),
            manufacturer=match.group("manufacturer"),
            reference_designators=match.group("reference_designators"),
        )


def _compile_layout(template) -> Layout:
    return Layout(
        name=template["name"],
        description=template["description"],
        pattern=re.compile(template["template"].format(**FIELD_PATTERNS), re.IGNORECASE),
    )


# Evaluation order is part of the contract: first match wins.
LAYOUTS: Tuple[Layout, ...] = tuple(_compile_layout(t) for t in LAYOUT_TEMPLATES)


class FormatMatcher:
    """Recognizes which layout a BOM line uses and extracts its raw fields."""

    def __init__(self, layouts: Tuple[Layout, ...] = LAYOUTS):
        self.layouts = tuple(layouts)

    def resolve_layout(self, layout: Union[int, str]) -> Layout:
        """Look up a layout by index into the layout list or by name.

        Raises:
            ValueError: If no such layout exists
        """
        if isinstance(layout, bool):
            raise ValueError(f"Unknown layout: {layout!r}")
        if isinstance(layout, int):
            if 0 <= layout < len(self.layouts):
                return self.layouts[layout]
        else:
            for candidate in self.layouts:
                if candidate.name == layout:
                    return candidate
        raise ValueError(f"Unknown layout: {layout!r}")

    def detect(self, line: str) -> Optional[Tuple[Layout, RawFields]]:
        """Return the first layout matching the line along with its fields."""
        if not isinstance(line, str):
            raise TypeError("`line` must be a valid string!")

        for layout in self.layouts:
            fields = layout.extract(line)
            if fields is not None:
                return layout, fields
        return None

    def match(self, line: str, layout: Optional[Union[int, str]] = None) -> Optional[RawFields]:
        """Match a line against the known layouts.

        Args:
            line: A single BOM line without its trailing newline
            layout: Expected layout (index or name). Only used by verification
                tooling; normal parsing leaves it unset.

        Returns:
            Raw fields from the first matching layout, or None if no layout
            matches the line.

        Raises:
            TypeError: If line is not a string
            ValueError: If the expected layout does not exist
            FormatMismatchError: If the line matched a different layout than
                the expected one
        """
        expected = self.resolve_layout(layout) if layout is not None else None

        detected = self.detect(line)
        if detected is None:
            logger.debug(f"No layout matches {line!r}")
            return None

        matched, fields = detected
        if expected is not None and matched is not expected:
            raise FormatMismatchError(line, expected.name, matched.name)

        logger.debug(f"Layout '{matched.name}' matches {line!r}")
        return fields
