"""
Employment contract schemas.

Contracts are read-only here: listing with status filters and detail view.
"""

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import Field

from models.base import BaseSchema, TimestampMixin
from models.employment_settings import EmploymentSettingsResponse


class ContractStatus(str, Enum):
    """Status derived from the contract end date."""
    PERMANENT = "permanent"
    ACTIVE = "active"
    EXPIRING = "expiring"
    EXPIRED = "expired"


class ContractStatusFilter(str, Enum):
    """Filters offered on the contract list. Permanent contracts only show under ALL."""
    ALL = "all"
    ACTIVE = "active"
    EXPIRING = "expiring"
    EXPIRED = "expired"


class ContractPeriod(BaseSchema):
    type: Optional[str] = Field(None, description="'permanent' or 'fixed-term'")
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    renewal_count: int = Field(0, ge=0)
    max_renewals: Optional[int] = Field(None, ge=0)
    renewal_option: Optional[str] = None


class WorkingTime(BaseSchema):
    pattern: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    break_time: Optional[int] = Field(None, ge=0, description="Break in minutes")
    weekly_hours: Optional[float] = Field(None, ge=0)


class Wage(BaseSchema):
    base_salary: Optional[int] = Field(None, ge=0, description="Monthly base salary (JPY)")
    hourly_wage: Optional[int] = Field(None, ge=0)
    payment_date: Optional[str] = None
    cutoff_date: Optional[str] = None


class Benefits(BaseSchema):
    health_insurance: bool = False
    employment_insurance: bool = False
    pension_insurance: bool = False
    workers_compensation: bool = False


class ExpiryAlert(BaseSchema):
    days: int = Field(..., ge=0)
    enabled: bool = True


class ExpiryManagement(BaseSchema):
    alert_settings: list[ExpiryAlert] = Field(default_factory=list)


class ContractResponse(BaseSchema, TimestampMixin):
    """Contract with all stored fields."""

    id: str = Field(..., description="Contract UUID")
    company_id: str
    employee_id: str = Field(..., description="Employee code")
    employment_type: Optional[str] = None
    workplace: Optional[str] = None
    period: ContractPeriod = Field(default_factory=ContractPeriod)
    working_time: Optional[WorkingTime] = None
    wage: Optional[Wage] = None
    benefits: Optional[Benefits] = None
    expiry_management: Optional[ExpiryManagement] = None


class ContractStatusInfo(BaseSchema):
    status: ContractStatus
    label: str
    days_remaining: Optional[int] = None


class EmployeeSummary(BaseSchema):
    employee_id: str
    name: str


class ContractSummary(BaseSchema):
    """One row of the contract list."""

    id: str
    employee_id: str
    employee_name: str
    employment_type: str
    period_label: str
    status: ContractStatusInfo
    last_updated: Optional[date] = None


class ContractListResponse(BaseSchema):
    """Filtered contracts plus per-status counts over all contracts."""

    data: list[ContractSummary]
    total: int
    filter: ContractStatusFilter
    counts: dict[str, int]


class ContractDetailResponse(BaseSchema):
    """Contract with employee, company defaults and derived labels."""

    contract: ContractResponse
    status: ContractStatusInfo
    employee: Optional[EmployeeSummary] = None
    employment_settings: Optional[EmploymentSettingsResponse] = None
    period_type_label: str
    period_label: str
    renewal_label: Optional[str] = None
    alert_days: list[int] = Field(default_factory=list)
