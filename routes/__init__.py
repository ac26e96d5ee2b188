"""
API route modules.

Each module defines routes for one domain area.
"""

from routes.company import router as company_router
from routes.departments import router as departments_router
from routes.employment_settings import router as employment_settings_router
from routes.contracts import router as contracts_router
from routes.csv_mapping import router as csv_mapping_router

__all__ = [
    "company_router",
    "departments_router",
    "employment_settings_router",
    "contracts_router",
    "csv_mapping_router",
]
