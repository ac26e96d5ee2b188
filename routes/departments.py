"""
Department API routes.
"""

from fastapi import APIRouter, Header, Response
from fastapi.responses import JSONResponse
import structlog

from models.department import (
    DepartmentCreate,
    DepartmentResponse,
    DepartmentListResponse,
)
from services.department_service import get_department_service
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

@router.get("", response_model=DepartmentListResponse)
async def list_departments(company_id: str = Header(..., alias="X-Company-Id")):
    """List the caller's departments, ordered by code."""
    try:
        departments = get_department_service().get_all(company_id)
        return DepartmentListResponse(data=departments, total=len(departments))
    except Exception as e:
        return handle_error(e)


@router.post("", response_model=DepartmentResponse, status_code=201)
async def create_department(
    data: DepartmentCreate,
    company_id: str = Header(..., alias="X-Company-Id")
):
    """
    Create a department.

    Raises:
        409: Code already used in this company
        422: Code or name missing
    """
    try:
        return get_department_service().create(company_id, data)
    except Exception as e:
        return handle_error(e)


@router.delete("/{department_id}", status_code=204)
async def delete_department(
    department_id: str,
    company_id: str = Header(..., alias="X-Company-Id")
):
    """
    Delete a department.

    Raises:
        404: Department not found in this company
    """
    try:
        get_department_service().delete(company_id, department_id)
        return Response(status_code=204)
    except Exception as e:
        return handle_error(e)
