"""
Payroll CSV header parser.

Payroll exports carry two header rows: the first holds the header
symbols (KY01, KY02, ...), the second the item names (基本給, 残業代, ...).
Data rows follow and are ignored here.
"""

from dataclasses import dataclass, field
from io import BytesIO
from pathlib import Path
from typing import Union
import structlog

import pandas as pd

from exceptions import CsvParseError
from models.csv_mapping import MappingItem

logger = structlog.get_logger(__name__)

# Payroll software exports Shift_JIS more often than UTF-8
ENCODINGS = ("utf-8-sig", "cp932")


@dataclass
class CsvHeaderParseResult:
    """Result of parsing the header rows of a payroll CSV."""
    items: list[MappingItem] = field(default_factory=list)
    column_count: int = 0
    blank_symbol_columns: list[int] = field(default_factory=list)

    @property
    def has_symbols(self) -> bool:
        """True if at least one column has a header symbol."""
        return any(item.header_symbol for item in self.items)

    def to_dict(self) -> dict:
        """Convert to dictionary for API response."""
        return {
            "items": [item.model_dump() for item in self.items],
            "column_count": self.column_count,
            "blank_symbol_columns": self.blank_symbol_columns,
        }


def parse_csv_headers(file: Union[str, Path, bytes, BytesIO]) -> CsvHeaderParseResult:
    """
    Read header symbols and item names from a payroll CSV.

    Args:
        file: File path, raw bytes, or file-like object

    Returns:
        CsvHeaderParseResult with one MappingItem per column

    Raises:
        CsvParseError: If the file cannot be decoded or has no header rows
    """
    logger.info("parsing_csv_headers", file_type=type(file).__name__)

    df = _read_header_rows(file)

    if df.empty or len(df.columns) == 0:
        raise CsvParseError(message="CSV file has no header rows")

    symbols = df.iloc[0].tolist()
    names = df.iloc[1].tolist() if len(df) > 1 else [None] * len(symbols)

    result = CsvHeaderParseResult(column_count=len(symbols))

    for column_index, (symbol, name) in enumerate(zip(symbols, names)):
        symbol_text = _cell_text(symbol)
        name_text = _cell_text(name)

        if not symbol_text:
            result.blank_symbol_columns.append(column_index)

        result.items.append(MappingItem(
            header_symbol=symbol_text,
            item_name=name_text or symbol_text,
            column_index=column_index,
        ))

    logger.info(
        "csv_headers_parsed",
        column_count=result.column_count,
        blank_symbols=len(result.blank_symbol_columns)
    )

    return result


def _read_header_rows(file: Union[str, Path, bytes, BytesIO]) -> pd.DataFrame:
    """Load the first two rows as strings, trying each known encoding."""
    if isinstance(file, (str, Path)):
        raw = Path(file).read_bytes()
    elif isinstance(file, bytes):
        raw = file
    else:
        raw = file.read()

    if not raw or not raw.strip():
        raise CsvParseError(message="CSV file is empty")

    last_error = None
    for encoding in ENCODINGS:
        try:
            return pd.read_csv(
                BytesIO(raw),
                header=None,
                nrows=2,
                dtype=str,
                keep_default_na=False,
                encoding=encoding,
            )
        except UnicodeDecodeError as e:
            last_error = e
            logger.debug("csv_decode_failed", encoding=encoding)
        except (pd.errors.ParserError, pd.errors.EmptyDataError) as e:
            logger.error("csv_read_failed", error=str(e))
            raise CsvParseError(
                message="Failed to read CSV file",
                details={"original_error": str(e)}
            )

    raise CsvParseError(
        message="CSV file encoding not supported",
        details={"tried": list(ENCODINGS), "original_error": str(last_error)}
    )


def _cell_text(value) -> str:
    """Cell value as stripped text; NaN and None become ''."""
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return ""
    return str(value).strip()
