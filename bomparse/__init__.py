from .entry import BomEntry, identity_key
from .matcher import FormatMatcher, Layout, LAYOUTS, RawFields, BomParseError, FormatMismatchError
from .normalizer import BomNormalizer
from .aggregator import BomAggregator, aggregate
from .parser import BomParser, ParseResult, parse_line
from .schema import FIELD_NAMES, OUTPUT_HEADERS

__all__ = [
    "BomEntry", "identity_key",
    "FormatMatcher", "Layout", "LAYOUTS", "RawFields", "BomParseError", "FormatMismatchError",
    "BomNormalizer", "BomAggregator", "aggregate",
    "BomParser", "ParseResult", "parse_line",
    "FIELD_NAMES", "OUTPUT_HEADERS",
]
