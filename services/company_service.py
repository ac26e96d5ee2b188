"""
Company service for profile operations.

One profile row per company in the `companies` table, keyed by company ID.
"""

from datetime import datetime, timezone
from typing import Optional
import re
import structlog

from config import get_supabase_client, settings, DatabaseSession
from models.company import CompanyUpdate, CompanyResponse
from exceptions import DatabaseError, CompanyNameRequiredError

logger = structlog.get_logger(__name__)

COMPANY_NUMBER_DIGITS = 4


class CompanyService:
    """
    Company profile business logic.

    Handles read and upsert of the company profile, including
    company number generation.
    """

    def __init__(self):
        self.db = get_supabase_client()
        self.table = "companies"

    # ===================
    # READ OPERATIONS
    # ===================

    def get(self, company_id: str) -> CompanyResponse:
        """
        Get company profile.

        Returns an empty profile when nothing has been saved yet.

        Args:
            company_id: Company ID

        Returns:
            CompanyResponse
        """
        logger.debug("getting_company", company_id=company_id)

        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("id", company_id)
                .execute()
            )
        except Exception as e:
            logger.error("get_company_failed", company_id=company_id, error=str(e))
            raise DatabaseError("select", str(e))

        if not result.data:
            logger.info("company_not_saved_yet", company_id=company_id)
            return CompanyResponse(id=company_id)

        return self._row_to_response(result.data[0])

    # ===================
    # NUMBERING
    # ===================

    def next_company_number(self, existing: list[Optional[str]]) -> str:
        """
        Next company number after the highest existing one.

        Only numbers in the exact form PREFIX + 4 digits count.

        Args:
            existing: Company numbers already in use

        Returns:
            e.g. "COMP0004" when COMP0003 is the highest, "COMP0001" if none
        """
        prefix = settings.company_number_prefix
        pattern = re.compile(rf"^{re.escape(prefix)}(\d{{{COMPANY_NUMBER_DIGITS}}})$")

        numbers = [
            int(match.group(1))
            for match in (pattern.match(value) for value in existing if value)
            if match
        ]

        next_number = max(numbers) + 1 if numbers else 1
        return f"{prefix}{str(next_number).zfill(COMPANY_NUMBER_DIGITS)}"

    def generate_company_number(self) -> str:
        """
        Generate the next unused company number.

        Raises:
            DatabaseError: If the company scan fails
        """
        try:
            with DatabaseSession("scan_company_numbers", self.db) as client:
                result = client.table(self.table).select("company_number").execute()
        except Exception as e:
            raise DatabaseError("select", str(e))

        number = self.next_company_number(
            [row.get("company_number") for row in result.data or []]
        )
        logger.info("company_number_generated", company_number=number)
        return number

    # ===================
    # WRITE OPERATIONS
    # ===================

    def save(self, company_id: str, data: CompanyUpdate) -> CompanyResponse:
        """
        Create or update company profile.

        Generates a company number when none is given.

        Args:
            company_id: Company ID
            data: Profile fields

        Returns:
            Saved CompanyResponse

        Raises:
            CompanyNameRequiredError: If name is blank
            DatabaseError: If the write fails
        """
        if not data.name:
            raise CompanyNameRequiredError()

        logger.info("saving_company", company_id=company_id)

        existing = self.get(company_id)

        generated = None
        company_number = data.company_number
        if not company_number:
            generated = self.generate_company_number()
            company_number = generated

        now = datetime.now(timezone.utc).isoformat()
        row = {
            "id": company_id,
            **data.model_dump(),
            "company_number": company_number,
            "updated_at": now,
            "created_at": existing.created_at.isoformat() if existing.created_at else now,
        }

        try:
            result = self.db.table(self.table).upsert(row).execute()
        except Exception as e:
            logger.error("save_company_failed", company_id=company_id, error=str(e))
            raise DatabaseError("upsert", str(e))

        logger.info("company_saved", company_id=company_id, company_number=company_number)

        response = self._row_to_response(result.data[0] if result.data else row)
        response.generated_company_number = generated
        return response

    def _row_to_response(self, row: dict) -> CompanyResponse:
        """Convert database row to CompanyResponse."""
        return CompanyResponse(
            id=row["id"],
            name=row.get("name") or "",
            address=row.get("address") or "",
            phone=row.get("phone") or "",
            tax_id=row.get("tax_id") or "",
            company_number=row.get("company_number") or "",
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
        )


# Singleton instance
_company_service: Optional[CompanyService] = None


def get_company_service() -> CompanyService:
    """Get or create CompanyService instance."""
    global _company_service
    if _company_service is None:
        _company_service = CompanyService()
    return _company_service
