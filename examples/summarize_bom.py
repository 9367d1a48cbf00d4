#!/usr/bin/env python3
"""Example: Summarize a free-text BOM line file with bomparse.

This script reads a file of BOM lines in any of the supported layouts,
merges duplicate components and writes the ranked summary to a JSON, CSV or
Excel file.
"""

from bomparse import BomParser
from bomparse.adapters.text_adapter import TextAdapter


def summarize_bom(input_file: str, output_file: str, limit: int = None):
    """Summarize a BOM line file.

    Args:
        input_file: Path to input BOM line file
        output_file: Path to output summary (.json, .csv or .xlsx)
        limit: Number of top entries to keep (default: all)
    """
    parser = BomParser()
    parser.register_adapter(TextAdapter())

    result = parser.parse(input_file, limit=limit)
    parser.export(result.entries, output_file)

    print(f"✓ Parsed {result.line_count} lines into {len(result.entries)} entries")
    print(f"✓ Output saved to: {output_file}")

    if result.unparseable:
        print(f"\nUnparseable lines: {len(result.unparseable)}")
        for line in result.unparseable:
            print(f"  - {line}")

    return result.entries


if __name__ == "__main__":
    import sys

    if len(sys.argv) < 3:
        print("Usage: python summarize_bom.py <input_file> <output_file> [limit]")
        print("\nExample:")
        print("  python summarize_bom.py bom.txt summary.xlsx 10")
        sys.exit(1)

    input_file = sys.argv[1]
    output_file = sys.argv[2]
    limit = int(sys.argv[3]) if len(sys.argv) > 3 else None

    summarize_bom(input_file, output_file, limit)
