"""
Contract API routes.

Read-only list and detail. Status is computed per request from today's date.
"""

from fastapi import APIRouter, Header, Query
from fastapi.responses import JSONResponse
import structlog

from models.contract import (
    ContractStatusFilter,
    ContractListResponse,
    ContractDetailResponse,
)
from services.contract_service import get_contract_service
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

@router.get("", response_model=ContractListResponse)
async def list_contracts(
    status: ContractStatusFilter = Query(ContractStatusFilter.ALL, description="Filter by status"),
    company_id: str = Header(..., alias="X-Company-Id")
):
    """
    List the caller's contracts, newest first.

    counts always covers all contracts, whatever the filter.
    """
    try:
        return get_contract_service().get_all(company_id, status_filter=status)
    except Exception as e:
        return handle_error(e)


@router.get("/{contract_id}", response_model=ContractDetailResponse)
async def get_contract(
    contract_id: str,
    company_id: str = Header(..., alias="X-Company-Id")
):
    """
    Get contract detail.

    Raises:
        403: Contract belongs to another company
        404: Contract not found
    """
    try:
        return get_contract_service().get_detail(company_id, contract_id)
    except Exception as e:
        return handle_error(e)
