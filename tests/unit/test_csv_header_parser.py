"""
Unit tests for the payroll CSV header parser.
"""

from io import BytesIO
import pytest

from parsers.csv_header_parser import parse_csv_headers, CsvHeaderParseResult
from exceptions import CsvParseError


def create_csv(lines: list[str], encoding: str = "utf-8") -> bytes:
    """Helper to build CSV bytes in memory."""
    return ("\r\n".join(lines) + "\r\n").encode(encoding)


class TestParseCsvHeaders:
    """Tests for parse_csv_headers()"""

    def test_symbols_and_names_by_column(self):
        """Should pair row 1 symbols with row 2 names."""
        content = create_csv([
            "KY00,KY01,KY02",
            "社員番号,基本給,残業代",
            "001,250000,12000",
        ])

        result = parse_csv_headers(content)

        assert result.column_count == 3
        assert [i.header_symbol for i in result.items] == ["KY00", "KY01", "KY02"]
        assert [i.item_name for i in result.items] == ["社員番号", "基本給", "残業代"]
        assert [i.column_index for i in result.items] == [0, 1, 2]

    def test_shift_jis_file(self):
        """Should fall back to cp932 when UTF-8 decoding fails."""
        content = create_csv(["KY01,KY02", "基本給,残業代"], encoding="cp932")

        result = parse_csv_headers(content)

        assert result.items[0].item_name == "基本給"

    def test_utf8_bom(self):
        """BOM should not leak into the first symbol."""
        content = b"\xef\xbb\xbf" + create_csv(["KY01,KY02", "基本給,残業代"])

        result = parse_csv_headers(content)

        assert result.items[0].header_symbol == "KY01"

    def test_blank_symbol_columns_reported(self):
        """Columns without a symbol are kept and listed."""
        content = create_csv(["KY01,,KY03", "基本給,備考,通勤手当"])

        result = parse_csv_headers(content)

        assert result.blank_symbol_columns == [1]
        assert result.items[1].header_symbol == ""
        assert result.items[1].item_name == "備考"
        assert result.has_symbols is True

    def test_single_row_uses_symbol_as_name(self):
        """Without a name row the symbol doubles as the name."""
        result = parse_csv_headers(create_csv(["KY01,KY02"]))

        assert result.items[1].item_name == "KY02"

    def test_values_are_trimmed(self):
        content = create_csv([" KY01 , KY02", " 基本給 ,残業代 "])

        result = parse_csv_headers(content)

        assert result.items[0].header_symbol == "KY01"
        assert result.items[1].item_name == "残業代"

    def test_accepts_file_object(self):
        result = parse_csv_headers(BytesIO(create_csv(["KY01", "基本給"])))

        assert isinstance(result, CsvHeaderParseResult)
        assert len(result.items) == 1

    def test_empty_file_raises(self):
        with pytest.raises(CsvParseError) as exc_info:
            parse_csv_headers(b"")

        assert exc_info.value.code == "CSV_PARSE_ERROR"
        assert exc_info.value.status_code == 422

    def test_whitespace_only_file_raises(self):
        with pytest.raises(CsvParseError):
            parse_csv_headers(b"  \r\n  ")

    def test_to_dict(self):
        result = parse_csv_headers(create_csv(["KY01", "基本給"]))

        data = result.to_dict()

        assert data["column_count"] == 1
        assert data["items"][0] == {
            "header_symbol": "KY01",
            "item_name": "基本給",
            "column_index": 0,
        }
