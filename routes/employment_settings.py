"""
Employment settings API routes.

Company-wide defaults used when drafting employment contracts.
"""

from fastapi import APIRouter, Header
from fastapi.responses import JSONResponse
import structlog

from models.employment_settings import (
    EmploymentSettingsUpdate,
    EmploymentSettingsResponse,
)
from services.employment_settings_service import get_employment_settings_service
from exceptions import AppError

logger = structlog.get_logger(__name__)

router = APIRouter()


def handle_error(e: Exception) -> JSONResponse:
    """Convert exception to JSON response."""
    if isinstance(e, AppError):
        return JSONResponse(
            status_code=e.status_code,
            content=e.to_dict()
        )
    logger.error("unexpected_error", error=str(e), type=type(e).__name__)
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred"
            }
        }
    )


@router.get("", response_model=EmploymentSettingsResponse)
async def get_employment_settings(company_id: str = Header(..., alias="X-Company-Id")):
    """Get employment settings, defaults filled in."""
    try:
        return get_employment_settings_service().get(company_id)
    except Exception as e:
        return handle_error(e)


@router.put("", response_model=EmploymentSettingsResponse)
async def save_employment_settings(
    data: EmploymentSettingsUpdate,
    company_id: str = Header(..., alias="X-Company-Id")
):
    """
    Save employment settings.

    Raises:
        422: Representative director name missing
    """
    try:
        return get_employment_settings_service().save(company_id, data)
    except Exception as e:
        return handle_error(e)
