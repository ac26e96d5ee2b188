"""
Pydantic models for validation and serialization.
"""

from models.base import (
    BaseSchema,
    TimestampMixin,
)
from models.company import (
    CompanyUpdate,
    CompanyResponse,
)
from models.department import (
    DepartmentCreate,
    DepartmentResponse,
    DepartmentListResponse,
)
from models.employment_settings import (
    WorkRegulations,
    Retirement,
    Resignation,
    Holidays,
    EmploymentSettingsUpdate,
    EmploymentSettingsResponse,
)
from models.contract import (
    ContractStatus,
    ContractStatusFilter,
    ContractResponse,
    ContractStatusInfo,
    ContractSummary,
    ContractListResponse,
    ContractDetailResponse,
)
from models.csv_mapping import (
    ItemCategory,
    MainFieldName,
    AssignmentKind,
    MappingItem,
    MainFieldAssignment,
    MappingConfiguration,
    MappingConfigurationUpdate,
    MainFieldUpdate,
    MainFieldsView,
)

__all__ = [
    # Base
    "BaseSchema",
    "TimestampMixin",

    # Company
    "CompanyUpdate",
    "CompanyResponse",

    # Department
    "DepartmentCreate",
    "DepartmentResponse",
    "DepartmentListResponse",

    # Employment settings
    "WorkRegulations",
    "Retirement",
    "Resignation",
    "Holidays",
    "EmploymentSettingsUpdate",
    "EmploymentSettingsResponse",

    # Contract
    "ContractStatus",
    "ContractStatusFilter",
    "ContractResponse",
    "ContractStatusInfo",
    "ContractSummary",
    "ContractListResponse",
    "ContractDetailResponse",

    # CSV mapping
    "ItemCategory",
    "MainFieldName",
    "AssignmentKind",
    "MappingItem",
    "MainFieldAssignment",
    "MappingConfiguration",
    "MappingConfigurationUpdate",
    "MainFieldUpdate",
    "MainFieldsView",
]
