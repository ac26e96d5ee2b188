"""
Employment settings schemas.

Company-wide defaults printed on employment contracts: work regulations,
retirement age, resignation notice and regular holidays.
"""

from pydantic import Field
from typing import Optional

from models.base import BaseSchema, TimestampMixin


class WorkRegulations(BaseSchema):
    storage_location: str = ""
    confirmation_method: str = "書面の交付"


class Retirement(BaseSchema):
    has_retirement: bool = True
    retirement_age: int = Field(60, ge=0, le=100)
    has_rehire: bool = True
    rehire_max_age: int = Field(65, ge=0, le=100)


class Resignation(BaseSchema):
    notice_period: int = Field(30, ge=0, description="Notice period in days")
    procedure: str = "退職する30日前までに届け出ること"


class Holidays(BaseSchema):
    regular_days: list[str] = Field(default_factory=lambda: ["日曜日"])
    irregular_days: str = "会社カレンダーによる"
    flexible_scheduling: bool = False


class EmploymentSettingsUpdate(BaseSchema):
    """Save employment settings. ceo_name is required."""

    ceo_name: str = Field("", max_length=100, description="Representative director")
    employee_count: int = Field(0, ge=0)
    work_regulations: WorkRegulations = Field(default_factory=WorkRegulations)
    retirement: Retirement = Field(default_factory=Retirement)
    resignation: Resignation = Field(default_factory=Resignation)
    holidays: Holidays = Field(default_factory=Holidays)


class EmploymentSettingsResponse(EmploymentSettingsUpdate, TimestampMixin):
    """Employment settings merged with defaults."""

    company_id: Optional[str] = None
