"""
CSV mapping API routes.

Mapping configuration, main field selectors and header parsing for
payroll CSV uploads.
"""

from fastapi import APIRouter, Header, UploadFile, File
from fastapi.responses import JSONResponse
import structlog

from models.csv_mapping import (
    MappingConfiguration,
    MappingConfigurationUpdate,
    MainFieldUpdate,
    MainFieldsView,
    CsvHeaderParseResponse,
)
from services.csv_mapping_service import get_csv_mapping_service
from parsers.csv_header_parser import parse_csv_headers
from exceptions import AppError, CsvParseError

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
# CONFIGURATION
# ===================

@router.get("", response_model=MappingConfiguration)
async def get_mapping(company_id: str = Header(..., alias="X-Company-Id")):
    """
    Get the caller's mapping configuration.

    Raises:
        404: No mapping saved yet
    """
    try:
        return get_csv_mapping_service().get(company_id)
    except Exception as e:
        return handle_error(e)


@router.put("", response_model=MappingConfiguration)
async def save_mapping(
    data: MappingConfigurationUpdate,
    company_id: str = Header(..., alias="X-Company-Id")
):
    """Create or replace the caller's mapping configuration."""
    try:
        return get_csv_mapping_service().save(company_id, data)
    except Exception as e:
        return handle_error(e)


# ===================
# MAIN FIELDS
# ===================

@router.get("/main-fields", response_model=MainFieldsView)
async def get_main_fields(company_id: str = Header(..., alias="X-Company-Id")):
    """
    Main field selectors.

    One shared symbol list plus the resolved selection of each field.
    Legacy assignments are resolved for display only.
    """
    try:
        return get_csv_mapping_service().get_main_fields(company_id)
    except Exception as e:
        return handle_error(e)


@router.patch("/main-fields/{field_name}", response_model=MainFieldsView)
async def update_main_field(
    field_name: str,
    data: MainFieldUpdate,
    company_id: str = Header(..., alias="X-Company-Id")
):
    """
    Assign a header symbol to a main field. Empty symbol clears it.

    Raises:
        404: No mapping saved yet
        422: Unknown field name
    """
    try:
        return get_csv_mapping_service().update_main_field(company_id, field_name, data.symbol)
    except Exception as e:
        return handle_error(e)


# ===================
# UPLOAD
# ===================

@router.post("/parse-headers", response_model=CsvHeaderParseResponse)
async def parse_headers(file: UploadFile = File(..., description="Payroll CSV file")):
    """
    Read header symbols and item names from a payroll CSV.

    Nothing is saved; the client places the items into categories.

    Raises:
        422: File unreadable or without header symbols
    """
    try:
        contents = await file.read()
        result = parse_csv_headers(contents)

        if not result.has_symbols:
            raise CsvParseError(
                message="CSV file has no header symbols in the first row",
                details={"filename": file.filename, "column_count": result.column_count}
            )

        logger.info(
            "csv_headers_uploaded",
            filename=file.filename,
            column_count=result.column_count
        )

        return CsvHeaderParseResponse(**result.to_dict())
    except Exception as e:
        return handle_error(e)
