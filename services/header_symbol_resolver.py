"""
Header symbol resolution for CSV mapping main fields.

Pure functions over a MappingConfiguration snapshot. Called on every view
and on every selection change, so nothing here touches the database.

Resolution never raises for malformed stored data: unresolved references
degrade to an empty symbol (main field) or to the symbol itself (label).
Whether an unmapped field blocks saving is up to the caller.
"""

from typing import Optional, Union
import structlog
from pydantic import ValidationError as PydanticValidationError

from config import settings
from exceptions import InvalidMainFieldError
from models.csv_mapping import (
    ItemCategory,
    MainFieldName,
    MAIN_FIELD_LABELS,
    AssignmentKind,
    MappingItem,
    MainFieldAssignment,
    MappingConfiguration,
    MainFieldView,
    MainFieldsView,
    SymbolOption,
)

logger = structlog.get_logger(__name__)

AssignmentInput = Union[MainFieldAssignment, dict, None]


# ===================
# ITEM LISTS
# ===================

def combined_items(config: Optional[MappingConfiguration]) -> list[MappingItem]:
    """
    Concatenate the five item lists in category order.

    Order: income, deduction, attendance, item code, KY.
    Duplicates are kept; first match wins in every lookup below.
    """
    if config is None:
        return []

    items: list[MappingItem] = []
    for category in ItemCategory:
        items.extend(getattr(config, category.value, None) or [])
    return items


def build_selectable_symbols(config: Optional[MappingConfiguration]) -> list[str]:
    """
    Symbols offered in every main field selector.

    Non-blank header symbols in category order, trimmed, duplicates kept.
    """
    symbols = []
    for item in combined_items(config):
        symbol = (item.header_symbol or "").strip()
        if symbol:
            symbols.append(symbol)
    return symbols


# ===================
# ASSIGNMENT RESOLUTION
# ===================

def _coerce_assignment(assignment: AssignmentInput) -> Optional[MainFieldAssignment]:
    """Accept raw stored dicts as well as models; unreadable data counts as unset."""
    if assignment is None or isinstance(assignment, MainFieldAssignment):
        return assignment
    if isinstance(assignment, dict):
        try:
            return MainFieldAssignment.model_validate(assignment)
        except PydanticValidationError as e:
            logger.debug("main_field_assignment_unreadable", error=str(e))
            return None
    return None


def coerce_main_fields(raw) -> dict[MainFieldName, MainFieldAssignment]:
    """
    Read stored main field assignments leniently.

    Keys that are not main fields are dropped. Unreadable assignments
    become unset ones, so a damaged row still renders.
    """
    if not isinstance(raw, dict):
        return {}

    main_fields = {}
    for key, value in raw.items():
        try:
            field = MainFieldName(key)
        except ValueError:
            logger.warning("unknown_main_field_dropped", field=str(key))
            continue
        main_fields[field] = _coerce_assignment(value) or MainFieldAssignment()
    return main_fields


def is_canonical_symbol(
    value: Optional[str],
    items: list[MappingItem],
    prefix: Optional[str] = None
) -> bool:
    """
    True when value is a header symbol rather than a display name.

    Symbols carry the configured prefix (KY by default). A value that
    exactly equals a known item's header symbol also counts, so symbols
    from other coding schemes are not mistaken for legacy item names.
    """
    if not value:
        return False

    prefix = prefix or settings.header_symbol_prefix
    if value.startswith(prefix):
        return True

    return any(item.header_symbol == value for item in items)


def classify_assignment(
    assignment: AssignmentInput,
    items: list[MappingItem],
    prefix: Optional[str] = None
) -> AssignmentKind:
    """Tell an unset assignment, a symbol and a legacy display value apart."""
    assignment = _coerce_assignment(assignment)
    if assignment is None:
        return AssignmentKind.UNSET

    value = assignment.header_symbol
    if is_canonical_symbol(value, items, prefix):
        return AssignmentKind.SYMBOL

    # A blank value with a column position still points at an item
    if value or assignment.column_index >= 0:
        return AssignmentKind.LEGACY_DISPLAY

    return AssignmentKind.UNSET


def resolve_assigned_symbol(
    assignment: AssignmentInput,
    items: list[MappingItem],
    prefix: Optional[str] = None
) -> str:
    """
    Header symbol currently assigned to a main field.

    - Unset -> ""
    - Symbol -> returned unchanged, column_index ignored
    - Legacy display value -> symbol of the first item at the stored
      column_index, "" if there is none

    Stored data is never rewritten here; legacy values are upgraded only
    when the user picks a symbol again.
    """
    items = items or []
    kind = classify_assignment(assignment, items, prefix)

    if kind == AssignmentKind.UNSET:
        return ""

    assignment = _coerce_assignment(assignment)

    if kind == AssignmentKind.SYMBOL:
        return assignment.header_symbol

    if assignment.column_index >= 0:
        for item in items:
            if item.column_index == assignment.column_index:
                return item.header_symbol or ""

    return ""


def resolve_display_label(symbol: Optional[str], items: list[MappingItem]) -> Optional[str]:
    """
    Item name for a symbol.

    Empty symbol is returned as is. Unknown symbols fall back to the
    symbol itself so unmapped values stay visible.
    """
    if not symbol:
        return symbol

    for item in items or []:
        if item.header_symbol == symbol:
            return item.item_name
    return symbol


# ===================
# UPDATES
# ===================

def parse_main_field_name(field_name: Union[str, MainFieldName]) -> MainFieldName:
    """
    Convert a field name to MainFieldName.

    Raises:
        InvalidMainFieldError: If the name is not one of the six main fields
    """
    try:
        return MainFieldName(field_name)
    except ValueError:
        raise InvalidMainFieldError(
            str(field_name),
            [name.value for name in MainFieldName]
        )


def update_main_field_mapping(
    config: MappingConfiguration,
    field_name: Union[str, MainFieldName],
    selected_symbol: Optional[str]
) -> MappingConfiguration:
    """
    Return a copy of config with one main field set to the selected symbol.

    The stored column_index is taken from the first item with that symbol,
    -1 if none. An empty selection clears the field. config is not mutated.

    Raises:
        InvalidMainFieldError: If field_name is not a main field
    """
    field = parse_main_field_name(field_name)
    selected = (selected_symbol or "").strip()

    if selected:
        column_index = next(
            (item.column_index for item in combined_items(config) if item.header_symbol == selected),
            -1
        )
        assignment = MainFieldAssignment(header_symbol=selected, column_index=column_index)
    else:
        assignment = MainFieldAssignment()

    main_fields = dict(config.main_fields)
    main_fields[field] = assignment

    logger.debug(
        "main_field_mapping_updated",
        field=field.value,
        symbol=selected,
        column_index=assignment.column_index
    )

    return config.model_copy(update={"main_fields": main_fields})


# ===================
# VIEW
# ===================

def build_main_fields_view(
    config: Optional[MappingConfiguration],
    prefix: Optional[str] = None
) -> MainFieldsView:
    """
    Resolve all six main fields against the shared symbol list.

    Every selector gets the same option list. Fields that resolve to ""
    are reported in unmapped_fields.
    """
    items = combined_items(config)
    symbols = build_selectable_symbols(config)
    stored = config.main_fields if config is not None else {}

    options = [
        SymbolOption(symbol=symbol, label=f"{symbol} - {resolve_display_label(symbol, items)}")
        for symbol in symbols
    ]

    fields = []
    unmapped = []
    for name in MainFieldName:
        assignment = stored.get(name)
        symbol = resolve_assigned_symbol(assignment, items, prefix)
        if not symbol:
            unmapped.append(name)

        fields.append(MainFieldView(
            field=name,
            label=MAIN_FIELD_LABELS[name],
            kind=classify_assignment(assignment, items, prefix),
            selected_symbol=symbol,
            selected_label=resolve_display_label(symbol, items) or "",
        ))

    logger.debug(
        "main_fields_resolved",
        item_count=len(items),
        symbol_count=len(symbols),
        unmapped=[name.value for name in unmapped]
    )

    return MainFieldsView(
        fields=fields,
        options=options,
        unmapped_fields=unmapped,
    )
