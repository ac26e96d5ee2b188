"""
Employment settings service.

Company-wide contract defaults, one row per company in
`company_employment_settings`. Missing rows and keys fall back to defaults.
"""

from datetime import datetime, timezone
from typing import Optional
import structlog

from config import get_supabase_client
from models.employment_settings import (
    EmploymentSettingsUpdate,
    EmploymentSettingsResponse,
)
from exceptions import DatabaseError, CeoNameRequiredError

logger = structlog.get_logger(__name__)


class EmploymentSettingsService:
    """Read and upsert employment contract defaults."""

    def __init__(self):
        self.db = get_supabase_client()
        self.table = "company_employment_settings"

    def get(self, company_id: str) -> EmploymentSettingsResponse:
        """
        Get employment settings merged with defaults.

        Stored top-level keys replace the defaults; null values are ignored.
        """
        logger.debug("getting_employment_settings", company_id=company_id)

        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("company_id", company_id)
                .execute()
            )
        except Exception as e:
            logger.error("get_employment_settings_failed", company_id=company_id, error=str(e))
            raise DatabaseError("select", str(e))

        if not result.data:
            logger.info("employment_settings_defaults_used", company_id=company_id)
            return EmploymentSettingsResponse(company_id=company_id)

        stored = {key: value for key, value in result.data[0].items() if value is not None}
        stored["company_id"] = company_id
        return EmploymentSettingsResponse(**stored)

    def save(self, company_id: str, data: EmploymentSettingsUpdate) -> EmploymentSettingsResponse:
        """
        Create or update employment settings.

        Raises:
            CeoNameRequiredError: If ceo_name is blank
            DatabaseError: If the write fails
        """
        if not data.ceo_name:
            raise CeoNameRequiredError()

        logger.info("saving_employment_settings", company_id=company_id)

        existing = self.get(company_id)
        now = datetime.now(timezone.utc).isoformat()

        row = {
            **data.model_dump(mode="json"),
            "company_id": company_id,
            "updated_at": now,
            "created_at": existing.created_at.isoformat() if existing.created_at else now,
        }

        try:
            result = (
                self.db.table(self.table)
                .upsert(row, on_conflict="company_id")
                .execute()
            )
        except Exception as e:
            logger.error("save_employment_settings_failed", company_id=company_id, error=str(e))
            raise DatabaseError("upsert", str(e))

        logger.info("employment_settings_saved", company_id=company_id)
        return EmploymentSettingsResponse(**(result.data[0] if result.data else row))


# Singleton instance
_employment_settings_service: Optional[EmploymentSettingsService] = None


def get_employment_settings_service() -> EmploymentSettingsService:
    """Get or create EmploymentSettingsService instance."""
    global _employment_settings_service
    if _employment_settings_service is None:
        _employment_settings_service = EmploymentSettingsService()
    return _employment_settings_service
