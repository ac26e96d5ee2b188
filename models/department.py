"""
Department schemas.
"""

from pydantic import Field

from models.base import BaseSchema, TimestampMixin


class DepartmentCreate(BaseSchema):
    """Create a department."""

    code: str = Field("", max_length=50, description="Department code (unique per company)")
    name: str = Field("", max_length=200, description="Department name")


class DepartmentResponse(BaseSchema, TimestampMixin):
    """Department with all fields."""

    id: str = Field(..., description="Department UUID")
    company_id: str = Field(..., description="Owning company")
    code: str
    name: str


class DepartmentListResponse(BaseSchema):
    """List of departments."""

    data: list[DepartmentResponse]
    total: int
