"""
Custom exception classes for the application.

Every error carries a stable code, an HTTP status and a details dict.
"""

from typing import Optional, Any
from datetime import datetime


class AppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions inherit from this.

    Attributes:
        code: Error code (e.g., "CONTRACT_NOT_FOUND")
        message: Human-readable message
        status_code: HTTP status code
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.utcnow().isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class NotFoundError(AppError):
    """Resource not found (404)."""

    def __init__(
        self,
        resource: str,
        identifier: str,
        code: Optional[str] = None
    ):
        super().__init__(
            code=code or f"{resource.upper()}_NOT_FOUND",
            message=f"{resource} not found",
            status_code=404,
            details={"id": identifier}
        )


class ForbiddenError(AppError):
    """Resource belongs to someone else (403)."""

    def __init__(
        self,
        resource: str,
        identifier: str,
        code: Optional[str] = None
    ):
        super().__init__(
            code=code or f"{resource.upper()}_ACCESS_DENIED",
            message=f"No permission to access this {resource.lower()}",
            status_code=403,
            details={"id": identifier}
        )


class ValidationError(AppError):
    """Validation failed (422)."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=422,
            details=details
        )


class ConflictError(AppError):
    """Conflict with existing resource (409)."""

    def __init__(
        self,
        message: str,
        code: str = "CONFLICT",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=409,
            details=details
        )


class DuplicateError(ConflictError):
    """Duplicate resource (409)."""

    def __init__(
        self,
        resource: str,
        field: str,
        value: str
    ):
        super().__init__(
            code=f"{resource.upper()}_{field.upper()}_EXISTS",
            message=f"{resource} with this {field} already exists",
            details={field: value}
        )


class DatabaseError(AppError):
    """Database operation failed (500)."""

    def __init__(
        self,
        operation: str,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code="DATABASE_ERROR",
            message=f"Database {operation} failed: {message}",
            status_code=500,
            details={"operation": operation, **(details or {})}
        )


# ===================
# COMPANY ERRORS
# ===================

class CompanyNameRequiredError(ValidationError):
    """Company name missing on save."""

    def __init__(self):
        super().__init__(
            code="COMPANY_NAME_REQUIRED",
            message="Company name is required"
        )


# ===================
# DEPARTMENT ERRORS
# ===================

class DepartmentNotFoundError(NotFoundError):
    """Department not found."""

    def __init__(self, department_id: str):
        super().__init__(
            resource="Department",
            identifier=department_id,
            code="DEPARTMENT_NOT_FOUND"
        )


class DepartmentCodeExistsError(DuplicateError):
    """Department code already used within the company."""

    def __init__(self, code: str):
        super().__init__(
            resource="Department",
            field="code",
            value=code
        )


class DepartmentFieldsRequiredError(ValidationError):
    """Department code or name missing."""

    def __init__(self, missing: list[str]):
        super().__init__(
            code="DEPARTMENT_FIELDS_REQUIRED",
            message="Department code and name are required",
            details={"missing": missing}
        )


# ===================
# EMPLOYMENT SETTINGS ERRORS
# ===================

class CeoNameRequiredError(ValidationError):
    """Representative director name missing on save."""

    def __init__(self):
        super().__init__(
            code="CEO_NAME_REQUIRED",
            message="Representative director name is required"
        )


# ===================
# CONTRACT ERRORS
# ===================

class ContractNotFoundError(NotFoundError):
    """Contract not found."""

    def __init__(self, contract_id: str):
        super().__init__(
            resource="Contract",
            identifier=contract_id,
            code="CONTRACT_NOT_FOUND"
        )


class ContractAccessDeniedError(ForbiddenError):
    """Contract belongs to another company."""

    def __init__(self, contract_id: str):
        super().__init__(
            resource="Contract",
            identifier=contract_id,
            code="CONTRACT_ACCESS_DENIED"
        )


class InvalidContractFilterError(ValidationError):
    """Unknown contract status filter."""

    def __init__(self, value: str, valid: list[str]):
        super().__init__(
            code="CONTRACT_INVALID_FILTER",
            message=f"Status filter must be one of: {', '.join(valid)}",
            details={"provided": value, "valid": valid}
        )


# ===================
# CSV MAPPING ERRORS
# ===================

class MappingNotFoundError(NotFoundError):
    """CSV mapping configuration not found."""

    def __init__(self, company_id: str):
        super().__init__(
            resource="CSV mapping",
            identifier=company_id,
            code="CSV_MAPPING_NOT_FOUND"
        )


class InvalidMainFieldError(ValidationError):
    """Unknown main field name."""

    def __init__(self, field_name: str, valid: list[str]):
        super().__init__(
            code="CSV_MAPPING_INVALID_FIELD",
            message=f"Unknown main field: {field_name}",
            details={"provided": field_name, "valid": valid}
        )


class CsvParseError(ValidationError):
    """CSV file parsing failed."""

    def __init__(
        self,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code="CSV_PARSE_ERROR",
            message=message,
            details=details
        )
