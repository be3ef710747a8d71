"""Ingestion of operator-supplied text and spreadsheet rows."""

from .text_parser import EXAMPLE_FORMAT, parse_operational_text, parse_text

__all__ = [
    "EXAMPLE_FORMAT",
    "parse_operational_text",
    "parse_text",
]
