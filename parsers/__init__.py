"""
File parsers module.

Reads the header rows of uploaded payroll CSV files.
"""

from parsers.csv_header_parser import (
    parse_csv_headers,
    CsvHeaderParseResult,
)

__all__ = [
    "parse_csv_headers",
    "CsvHeaderParseResult",
]
