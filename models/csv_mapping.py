"""
CSV mapping models.

A mapping configuration ties the columns of an uploaded payroll CSV to
header symbols (KY01, KY02, ...) grouped into five item categories, and
assigns six main fields (employee code, net salary, ...) to those symbols.
"""

from enum import Enum
from typing import Optional

from pydantic import AliasChoices, ConfigDict, Field

from models.base import BaseSchema, TimestampMixin


class ItemCategory(str, Enum):
    """Item categories, in the order their items are concatenated."""
    INCOME = "income_items"
    DEDUCTION = "deduction_items"
    ATTENDANCE = "attendance_items"
    ITEM_CODE = "item_code_items"
    KY = "ky_items"


class MainFieldName(str, Enum):
    """The six logical fields every payroll CSV must provide."""
    IDENTIFICATION_CODE = "identification_code"
    EMPLOYEE_CODE = "employee_code"
    EMPLOYEE_NAME = "employee_name"
    TOTAL_SALARY = "total_salary"
    TOTAL_DEDUCTIONS = "total_deductions"
    NET_SALARY = "net_salary"


MAIN_FIELD_LABELS: dict[MainFieldName, str] = {
    MainFieldName.IDENTIFICATION_CODE: "識別コード",
    MainFieldName.EMPLOYEE_CODE: "従業員コード",
    MainFieldName.EMPLOYEE_NAME: "従業員氏名",
    MainFieldName.TOTAL_SALARY: "支給額",
    MainFieldName.TOTAL_DEDUCTIONS: "控除額",
    MainFieldName.NET_SALARY: "差引支給額",
}

SELECT_PLACEHOLDER = "選択してください"


class AssignmentKind(str, Enum):
    """What a stored main field assignment actually holds."""
    UNSET = "unset"
    SYMBOL = "symbol"
    LEGACY_DISPLAY = "legacy_display"


class MappingItem(BaseSchema):
    """One CSV column: its header symbol, item name and position."""

    model_config = ConfigDict(frozen=True)

    header_symbol: str = Field(
        "",
        validation_alias=AliasChoices("header_symbol", "header_name"),
        description="External header symbol (e.g. KY01)"
    )
    item_name: str = Field("", description="Human-readable item name")
    column_index: int = Field(..., ge=0, description="Column position in the CSV")


class MainFieldAssignment(BaseSchema):
    """
    Stored assignment for a main field.

    Older configurations saved the item name here instead of the symbol,
    so header_symbol may hold a display value; column_index then
    identifies the item.
    """

    header_symbol: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("header_symbol", "header_name"),
        description="Header symbol, or a legacy item name"
    )
    column_index: int = Field(-1, description="Column position, -1 when unknown")


class MappingConfiguration(BaseSchema, TimestampMixin):
    """Full CSV mapping for one company."""

    id: Optional[str] = Field(None, description="Mapping UUID")
    company_id: Optional[str] = Field(None, description="Owning company")
    income_items: list[MappingItem] = Field(default_factory=list)
    deduction_items: list[MappingItem] = Field(default_factory=list)
    attendance_items: list[MappingItem] = Field(default_factory=list)
    item_code_items: list[MappingItem] = Field(default_factory=list)
    ky_items: list[MappingItem] = Field(default_factory=list)
    main_fields: dict[MainFieldName, MainFieldAssignment] = Field(default_factory=dict)


class MappingConfigurationUpdate(BaseSchema):
    """Replace the item lists and main fields of a mapping."""

    income_items: list[MappingItem] = Field(default_factory=list)
    deduction_items: list[MappingItem] = Field(default_factory=list)
    attendance_items: list[MappingItem] = Field(default_factory=list)
    item_code_items: list[MappingItem] = Field(default_factory=list)
    ky_items: list[MappingItem] = Field(default_factory=list)
    main_fields: dict[MainFieldName, MainFieldAssignment] = Field(default_factory=dict)


class MainFieldUpdate(BaseSchema):
    """Selection made for one main field. Empty string clears it."""

    symbol: str = Field("", max_length=100, description="Selected header symbol")


class SymbolOption(BaseSchema):
    """One entry of the symbol selection list."""

    symbol: str
    label: str = Field(..., description="'{symbol} - {item name}'")


class MainFieldView(BaseSchema):
    """Resolved state of a single main field."""

    field: MainFieldName
    label: str
    kind: AssignmentKind
    selected_symbol: str = Field("", description="Resolved symbol, empty if unmapped")
    selected_label: str = Field("", description="Item name of the resolved symbol")


class MainFieldsView(BaseSchema):
    """Everything needed to render the main field selectors."""

    fields: list[MainFieldView]
    options: list[SymbolOption]
    placeholder: str = SELECT_PLACEHOLDER
    unmapped_fields: list[MainFieldName] = Field(default_factory=list)


class CsvHeaderParseResponse(BaseSchema):
    """Items read from the header rows of an uploaded CSV."""

    items: list[MappingItem]
    column_count: int
    blank_symbol_columns: list[int] = Field(default_factory=list)
