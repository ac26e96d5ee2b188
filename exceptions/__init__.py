"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    NotFoundError,
    ForbiddenError,
    ValidationError,
    ConflictError,
    DuplicateError,
    DatabaseError,

    # Company
    CompanyNameRequiredError,

    # Departments
    DepartmentNotFoundError,
    DepartmentCodeExistsError,
    DepartmentFieldsRequiredError,

    # Employment settings
    CeoNameRequiredError,

    # Contracts
    ContractNotFoundError,
    ContractAccessDeniedError,
    InvalidContractFilterError,

    # CSV mapping
    MappingNotFoundError,
    InvalidMainFieldError,
    CsvParseError,
)

__all__ = [
    # Base
    "AppError",
    "NotFoundError",
    "ForbiddenError",
    "ValidationError",
    "ConflictError",
    "DuplicateError",
    "DatabaseError",

    # Company
    "CompanyNameRequiredError",

    # Departments
    "DepartmentNotFoundError",
    "DepartmentCodeExistsError",
    "DepartmentFieldsRequiredError",

    # Employment settings
    "CeoNameRequiredError",

    # Contracts
    "ContractNotFoundError",
    "ContractAccessDeniedError",
    "InvalidContractFilterError",

    # CSV mapping
    "MappingNotFoundError",
    "InvalidMainFieldError",
    "CsvParseError",
]
