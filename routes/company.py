"""
Company profile API routes.

The caller's company comes from the X-Company-Id header, set by the
identity layer in front of this API.
"""

from fastapi import APIRouter, Header
from fastapi.responses import JSONResponse
import structlog

from models.company import CompanyUpdate, CompanyResponse
from services.company_service import get_company_service
from exceptions import AppError

logger = structlog.get_logger(__name__)

router = APIRouter()


# ===================
# EXCEPTION HANDLER
# ===================

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


# ===================
# ROUTES
# ===================

@router.get("", response_model=CompanyResponse)
async def get_company(company_id: str = Header(..., alias="X-Company-Id")):
    """
    Get the caller's company profile.

    Returns an empty profile if none was saved yet.
    """
    try:
        return get_company_service().get(company_id)
    except Exception as e:
        return handle_error(e)


@router.put("", response_model=CompanyResponse)
async def save_company(
    data: CompanyUpdate,
    company_id: str = Header(..., alias="X-Company-Id")
):
    """
    Save the caller's company profile.

    Generates a company number when left blank.

    Raises:
        422: Company name missing
    """
    try:
        return get_company_service().save(company_id, data)
    except Exception as e:
        return handle_error(e)
