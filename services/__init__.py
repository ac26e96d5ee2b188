"""
Business logic services.

Each service handles one domain area.
"""

from services.company_service import CompanyService, get_company_service
from services.department_service import DepartmentService, get_department_service
from services.employment_settings_service import (
    EmploymentSettingsService,
    get_employment_settings_service,
)
from services.contract_service import (
    ContractService,
    get_contract_service,
    get_contract_status,
)
from services.csv_mapping_service import CsvMappingService, get_csv_mapping_service
from services.header_symbol_resolver import (
    build_selectable_symbols,
    resolve_assigned_symbol,
    resolve_display_label,
    update_main_field_mapping,
    build_main_fields_view,
)

__all__ = [
    "CompanyService",
    "get_company_service",
    "DepartmentService",
    "get_department_service",
    "EmploymentSettingsService",
    "get_employment_settings_service",
    "ContractService",
    "get_contract_service",
    "get_contract_status",
    "CsvMappingService",
    "get_csv_mapping_service",
    "build_selectable_symbols",
    "resolve_assigned_symbol",
    "resolve_display_label",
    "update_main_field_mapping",
    "build_main_fields_view",
]
