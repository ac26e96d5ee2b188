"""
Company profile schemas.
"""

from pydantic import Field
from typing import Optional

from models.base import BaseSchema, TimestampMixin


class CompanyUpdate(BaseSchema):
    """
    Save company profile.

    company_number is generated when left blank.
    """

    name: str = Field("", max_length=200, description="Company name")
    address: str = Field("", max_length=500, description="Address")
    phone: str = Field("", max_length=50, description="Phone number")
    tax_id: str = Field("", max_length=50, description="Tax identifier")
    company_number: str = Field("", max_length=20, description="Company number (COMP0001)")


class CompanyResponse(BaseSchema, TimestampMixin):
    """Company profile."""

    id: str = Field(..., description="Company ID")
    name: str = ""
    address: str = ""
    phone: str = ""
    tax_id: str = ""
    company_number: str = ""
    generated_company_number: Optional[str] = Field(
        None,
        description="Set when this save generated a new company number"
    )
