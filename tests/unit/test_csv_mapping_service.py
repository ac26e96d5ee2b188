"""
Unit tests for CsvMappingService.
"""

import pytest

from services.csv_mapping_service import CsvMappingService
from models.csv_mapping import (
    AssignmentKind,
    MainFieldName,
    MappingConfigurationUpdate,
)
from exceptions import MappingNotFoundError, InvalidMainFieldError, DatabaseError
from tests.factories import MappingConfigFactory, MappingItemFactory


@pytest.fixture
def mapping_row(sample_mapping_items):
    return MappingConfigFactory.create(
        main_fields={
            "employee_code": {"header_symbol": "CODE1", "column_index": 0},
            "total_salary": {"header_symbol": "残業代", "column_index": 3},
            "net_salary": {"header_symbol": None, "column_index": -1},
        },
        **sample_mapping_items
    )


class TestCsvMappingServiceGet:

    def test_get(self, mock_db, mock_supabase, mapping_row):
        mock_supabase.set_table_data("csv_mappings", [mapping_row])
        service = CsvMappingService()

        result = service.get("company-1")

        assert result.company_id == "company-1"
        assert [i.header_symbol for i in result.income_items] == ["KY01", "KY02"]
        assert result.main_fields[MainFieldName.EMPLOYEE_CODE].header_symbol == "CODE1"

    def test_reads_legacy_header_name_key(self, mock_db, mock_supabase):
        mock_supabase.set_table_data("csv_mappings", [MappingConfigFactory.create(
            income_items=[{"header_name": "KY01", "item_name": "基本給", "column_index": 2}],
        )])
        service = CsvMappingService()

        result = service.get("company-1")

        assert result.income_items[0].header_symbol == "KY01"

    def test_damaged_row_still_loads(self, mock_db, mock_supabase, sample_mapping_items):
        """Bad main fields read as unset, unknown keys and bad items are dropped."""
        mock_supabase.set_table_data("csv_mappings", [MappingConfigFactory.create(
            main_fields={
                "total_salary": {"header_symbol": 123, "column_index": 2},
                "net_salary": "KY02",
                "bonus": {"header_symbol": "KY01", "column_index": 2},
                "employee_code": {"header_symbol": "CODE1", "column_index": 0},
            },
            income_items=sample_mapping_items["income_items"] + [
                {"header_symbol": "KY99", "item_name": "壊れた項目", "column_index": -3},
            ],
            item_code_items=sample_mapping_items["item_code_items"],
        )])
        service = CsvMappingService()

        result = service.get("company-1")

        assert set(result.main_fields) == {
            MainFieldName.TOTAL_SALARY,
            MainFieldName.NET_SALARY,
            MainFieldName.EMPLOYEE_CODE,
        }
        assert result.main_fields[MainFieldName.TOTAL_SALARY].header_symbol is None
        assert [i.header_symbol for i in result.income_items] == ["KY01", "KY02"]

    def test_damaged_main_fields_view(self, mock_db, mock_supabase, sample_mapping_items):
        mock_supabase.set_table_data("csv_mappings", [MappingConfigFactory.create(
            main_fields={"total_salary": {"header_symbol": 123, "column_index": 2}},
            **sample_mapping_items
        )])
        service = CsvMappingService()

        view = service.get_main_fields("company-1")
        total = next(f for f in view.fields if f.field == MainFieldName.TOTAL_SALARY)

        assert total.kind == AssignmentKind.UNSET
        assert total.selected_symbol == ""
        assert MainFieldName.TOTAL_SALARY in view.unmapped_fields

    def test_missing(self, mock_db, mock_supabase):
        service = CsvMappingService()

        with pytest.raises(MappingNotFoundError) as exc_info:
            service.get("company-1")

        assert exc_info.value.status_code == 404

    def test_database_error(self, mock_db, mock_supabase):
        mock_supabase.set_table_error("csv_mappings", RuntimeError("boom"))
        service = CsvMappingService()

        with pytest.raises(DatabaseError):
            service.get("company-1")


class TestCsvMappingServiceMainFields:

    def test_view_resolves_legacy_and_symbols(self, mock_db, mock_supabase, mapping_row):
        mock_supabase.set_table_data("csv_mappings", [mapping_row])
        service = CsvMappingService()

        view = service.get_main_fields("company-1")
        by_field = {f.field: f for f in view.fields}

        assert by_field[MainFieldName.EMPLOYEE_CODE].selected_symbol == "CODE1"
        assert by_field[MainFieldName.EMPLOYEE_CODE].kind == AssignmentKind.SYMBOL
        assert by_field[MainFieldName.TOTAL_SALARY].selected_symbol == "KY02"
        assert by_field[MainFieldName.TOTAL_SALARY].kind == AssignmentKind.LEGACY_DISPLAY
        assert by_field[MainFieldName.TOTAL_SALARY].selected_label == "残業代"
        assert MainFieldName.NET_SALARY in view.unmapped_fields
        assert [o.symbol for o in view.options] == ["KY01", "KY02", "KY11", "CODE1", "KY01"]

    def test_update_main_field_persists_symbol(self, mock_db, mock_supabase, mapping_row):
        mock_supabase.set_table_data("csv_mappings", [mapping_row])
        service = CsvMappingService()

        view = service.update_main_field("company-1", "net_salary", "KY11")

        net = next(f for f in view.fields if f.field == MainFieldName.NET_SALARY)
        assert net.selected_symbol == "KY11"
        assert net.selected_label == "健康保険"

        stored = mock_supabase.rows("csv_mappings")
        assert len(stored) == 1
        assert stored[0]["main_fields"]["net_salary"] == {"header_symbol": "KY11", "column_index": 4}

    def test_update_upgrades_legacy_value(self, mock_db, mock_supabase, mapping_row):
        mock_supabase.set_table_data("csv_mappings", [mapping_row])
        service = CsvMappingService()

        service.update_main_field("company-1", MainFieldName.TOTAL_SALARY, "KY02")

        stored = mock_supabase.rows("csv_mappings")[0]
        assert stored["main_fields"]["total_salary"]["header_symbol"] == "KY02"

    def test_update_with_empty_symbol_clears(self, mock_db, mock_supabase, mapping_row):
        mock_supabase.set_table_data("csv_mappings", [mapping_row])
        service = CsvMappingService()

        view = service.update_main_field("company-1", "employee_code", "")

        assert MainFieldName.EMPLOYEE_CODE in view.unmapped_fields
        assert mock_supabase.rows("csv_mappings")[0]["main_fields"]["employee_code"] == {
            "column_index": -1
        }

    def test_update_unknown_field(self, mock_db, mock_supabase, mapping_row):
        mock_supabase.set_table_data("csv_mappings", [mapping_row])
        service = CsvMappingService()

        with pytest.raises(InvalidMainFieldError):
            service.update_main_field("company-1", "bonus", "KY01")

        assert all(call[1] != "upsert" for call in mock_supabase.calls)

    def test_update_without_mapping(self, mock_db, mock_supabase):
        service = CsvMappingService()

        with pytest.raises(MappingNotFoundError):
            service.update_main_field("company-1", "net_salary", "KY01")


class TestCsvMappingServiceSave:

    def test_create(self, mock_db, mock_supabase):
        service = CsvMappingService()
        data = MappingConfigurationUpdate(
            income_items=MappingItemFactory.create_batch(["KY01", "KY02"], start_column=2),
        )

        result = service.save("company-1", data)

        assert result.company_id == "company-1"
        assert result.id is not None
        assert result.income_items[1].column_index == 3
        assert result.created_at is not None

    def test_replace_keeps_id(self, mock_db, mock_supabase, mapping_row):
        mock_supabase.set_table_data("csv_mappings", [mapping_row])
        service = CsvMappingService()

        result = service.save("company-1", MappingConfigurationUpdate(
            ky_items=MappingItemFactory.create_batch(["KY90"]),
        ))

        assert result.id == mapping_row["id"]
        assert result.income_items == []
        assert [i.header_symbol for i in result.ky_items] == ["KY90"]
        assert len(mock_supabase.rows("csv_mappings")) == 1
