from .aggregator import BomAggregator
from .entry import BomEntry
from .matcher import FormatMatcher
from .normalizer import BomNormalizer
from .schema import DESIGNATOR_SEPARATOR, OUTPUT_HEADERS
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Dict, Any, Optional, Union
from pathlib import Path
import csv
import json
import logging
import openpyxl

logger = logging.getLogger(__name__)

_default_matcher = FormatMatcher()
_default_normalizer = BomNormalizer()


def parse_line(text: str, layout: Optional[Union[int, str]] = None) -> Optional[BomEntry]:
    """Parse a single BOM line into a normalized entry.

    Args:
        text: The line, without its trailing newline
        layout: Expected layout index or name (verification only)

    Returns:
        BomEntry, or None if the line matches no known layout
    """
    fields = _default_matcher.match(text, layout)
    if fields is None:
        return None
    return _default_normalizer.normalize_fields(fields)


MAX_INDENT = 10


def dump_json(data: Any, indent: Optional[int] = 2) -> str:
    """Serialize to JSON.

    An indent of 0 or less gives compact single-line output; indents wider
    than MAX_INDENT are clamped to it.
    """
    if indent is None or indent <= 0:
        return json.dumps(data, separators=(',', ':'), ensure_ascii=False)
    return json.dumps(data, indent=min(indent, MAX_INDENT), ensure_ascii=False)


@dataclass
class ParseResult:
    """Outcome of parsing a sequence of BOM lines."""
    entries: List[BomEntry]
    unparseable: List[str] = field(default_factory=list)
    line_count: int = 0


class BomParser:
    """Parser for free-text BOM line lists with deduplication and ranking."""

    def __init__(self, matcher: Optional[FormatMatcher] = None,
                 normalizer: Optional[BomNormalizer] = None):
        """Initialize the BOM parser.

        Args:
            matcher: Format matcher to use (default: all known layouts)
            normalizer: Field normalizer to use
        """
        self.adapters = []
        self.matcher = matcher or FormatMatcher()
        self.normalizer = normalizer or BomNormalizer()

    def register_adapter(self, adapter):
        """Register a line source adapter.

        Args:
            adapter: Adapter instance with can_handle() and read() methods
        """
        self.adapters.append(adapter)

    def parse_line(self, line: str, layout: Optional[Union[int, str]] = None) -> Optional[BomEntry]:
        """Match and normalize one line; None if no layout matches."""
        fields = self.matcher.match(line, layout)
        if fields is None:
            return None
        return self.normalizer.normalize_fields(fields)

    def parse_lines(self, lines: Iterable[str], limit: Optional[int] = None,
                    on_unparseable: Optional[Callable[[str], None]] = None) -> ParseResult:
        """Parse, deduplicate and rank a sequence of BOM lines.

        Blank lines are skipped. Lines that match no layout are reported and
        skipped without stopping the run. Each line is fully merged before the
        next one is read.

        Args:
            lines: BOM lines without line terminators
            limit: Maximum number of ranked entries to return (None for all)
            on_unparseable: Called with each line that matches no layout, as
                soon as it is seen (default: log a warning)

        Returns:
            ParseResult with ranked entries and the unparseable lines
        """
        aggregator = BomAggregator()
        unparseable = []
        line_count = 0

        for line in lines:
            # None is not skipped; parse_line rejects it with a TypeError
            if isinstance(line, str) and not line.strip():
                continue
            line_count += 1

            entry = self.parse_line(line)
            if entry is None:
                unparseable.append(line)
                if on_unparseable is not None:
                    on_unparseable(line)
                else:
                    logger.warning(f'error parsing "{line}"')
                continue

            aggregator.ingest(entry)

        logger.info(
            f"Parsed {line_count} lines: {len(aggregator)} unique entries, "
            f"{len(unparseable)} unparseable"
        )
        return ParseResult(
            entries=aggregator.finalize(limit),
            unparseable=unparseable,
            line_count=line_count,
        )

    def _find_adapter(self, file_path: str):
        for a in self.adapters:
            if a.can_handle(file_path):
                return a
        raise ValueError(f"No adapter found for {file_path}")

    def read_lines(self, file_path: str) -> Iterable[str]:
        """Read raw lines from a file (or "-" for stdin) via a registered adapter.

        Raises:
            ValueError: If no adapter is found for the file
        """
        return self._find_adapter(file_path).read(file_path)

    def parse(self, file_path: str, limit: Optional[int] = None) -> ParseResult:
        """Parse a BOM line file.

        Args:
            file_path: Path to the file, or "-" for standard input
            limit: Maximum number of ranked entries to return (None for all)

        Raises:
            ValueError: If no adapter is found for the file
        """
        return self.parse_lines(self.read_lines(file_path), limit=limit)

    def to_json(self, entries: List[BomEntry], indent: int = 2) -> str:
        """Render entries as a JSON array."""
        return dump_json([e.to_dict() for e in entries], indent)

    def export(self, entries: List[BomEntry], output_path: str,
               format: Optional[str] = None, indent: int = 2) -> str:
        """Export ranked entries to a file.

        Args:
            entries: Entries to export, in output order
            output_path: Path where the file should be saved
            format: Output format ('csv', 'excel', 'json', or None for auto-detect from extension)
            indent: JSON indentation

        Returns:
            Path to the exported file

        Raises:
            ValueError: If format is not supported
        """
        output_path = Path(output_path)

        # Auto-detect format from extension if not provided
        if format is None:
            suffix = output_path.suffix.lower()
            if suffix in ['.csv', '.tsv']:
                format = 'csv'
            elif suffix in ['.xlsx', '.xls']:
                format = 'excel'
            elif suffix == '.json':
                format = 'json'
            else:
                # Default to JSON if extension is not recognized
                format = 'json'
                output_path = output_path.with_suffix('.json')

        format = format.lower()

        if format == 'csv':
            self._export_csv(entries, output_path)
        elif format == 'excel':
            self._export_excel(entries, output_path)
        elif format == 'json':
            self._export_json(entries, output_path, indent)
        else:
            raise ValueError(f"Unsupported export format: {format}. Supported formats: csv, excel, json")

        logger.info(f"Exported {len(entries)} entries to {output_path}")
        return str(output_path)

    def _flat_rows(self, entries: List[BomEntry]) -> List[Dict[str, Any]]:
        """Entries as rows with the designator list joined into one cell."""
        rows = []
        for entry in entries:
            row = entry.to_dict()
            row["ReferenceDesignators"] = DESIGNATOR_SEPARATOR.join(row["ReferenceDesignators"])
            rows.append(row)
        return rows

    def _export_csv(self, entries: List[BomEntry], output_path: Path) -> None:
        """Export entries to CSV file."""
        with open(output_path, 'w', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(f, fieldnames=OUTPUT_HEADERS)
            writer.writeheader()
            for row in self._flat_rows(entries):
                writer.writerow(row)

    def _export_excel(self, entries: List[BomEntry], output_path: Path) -> None:
        """Export entries to Excel file."""
        wb = openpyxl.Workbook()
        ws = wb.active
        ws.title = "BOM"

        # Write headers
        for col_idx, header in enumerate(OUTPUT_HEADERS, start=1):
            ws.cell(row=1, column=col_idx, value=header)

        # Write data rows
        for row_idx, row_data in enumerate(self._flat_rows(entries), start=2):
            for col_idx, header in enumerate(OUTPUT_HEADERS, start=1):
                ws.cell(row=row_idx, column=col_idx, value=row_data[header])

        wb.save(output_path)

    def _export_json(self, entries: List[BomEntry], output_path: Path, indent: int) -> None:
        """Export entries to JSON file."""
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(self.to_json(entries, indent))
            f.write('\n')
