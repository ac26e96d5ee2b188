"""
Department service.

Departments belong to one company; codes are unique within it.
"""

from datetime import datetime, timezone
from typing import Optional
import structlog

from config import get_supabase_client
from models.department import DepartmentCreate, DepartmentResponse
from exceptions import (
    DatabaseError,
    DepartmentNotFoundError,
    DepartmentCodeExistsError,
    DepartmentFieldsRequiredError,
)

logger = structlog.get_logger(__name__)


class DepartmentService:
    """
    Department business logic.

    Handles list, create and delete. Departments are not edited in place.
    """

    def __init__(self):
        self.db = get_supabase_client()
        self.table = "departments"

    # ===================
    # READ OPERATIONS
    # ===================

    def get_all(self, company_id: str) -> list[DepartmentResponse]:
        """
        Get all departments of a company, ordered by code.

        Args:
            company_id: Company ID

        Returns:
            List of departments
        """
        logger.info("getting_departments", company_id=company_id)

        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("company_id", company_id)
                .order("code")
                .execute()
            )
        except Exception as e:
            logger.error("get_departments_failed", company_id=company_id, error=str(e))
            raise DatabaseError("select", str(e))

        departments = [DepartmentResponse(**row) for row in result.data]
        logger.info("departments_retrieved", count=len(departments))
        return departments

    # ===================
    # WRITE OPERATIONS
    # ===================

    def create(self, company_id: str, data: DepartmentCreate) -> DepartmentResponse:
        """
        Create a department.

        Args:
            company_id: Company ID
            data: Code and name

        Returns:
            Created DepartmentResponse

        Raises:
            DepartmentFieldsRequiredError: If code or name is blank
            DepartmentCodeExistsError: If code is taken within the company
        """
        missing = [name for name in ("code", "name") if not getattr(data, name)]
        if missing:
            raise DepartmentFieldsRequiredError(missing)

        logger.info("creating_department", company_id=company_id, code=data.code)

        existing = self.get_all(company_id)
        if any(dept.code == data.code for dept in existing):
            raise DepartmentCodeExistsError(data.code)

        row = {
            "company_id": company_id,
            "code": data.code,
            "name": data.name,
            "created_at": datetime.now(timezone.utc).isoformat(),
        }

        try:
            result = self.db.table(self.table).insert(row).execute()
        except Exception as e:
            logger.error("create_department_failed", code=data.code, error=str(e))
            raise DatabaseError("insert", str(e))

        department = DepartmentResponse(**result.data[0])
        logger.info("department_created", department_id=department.id, code=department.code)
        return department

    def delete(self, company_id: str, department_id: str) -> None:
        """
        Delete a department.

        Employees still pointing at it keep the stale reference.

        Raises:
            DepartmentNotFoundError: If missing or owned by another company
        """
        logger.info("deleting_department", company_id=company_id, department_id=department_id)

        try:
            result = (
                self.db.table(self.table)
                .select("id, company_id")
                .eq("id", department_id)
                .execute()
            )
        except Exception as e:
            raise DatabaseError("select", str(e))

        if not result.data or result.data[0].get("company_id") != company_id:
            raise DepartmentNotFoundError(department_id)

        try:
            self.db.table(self.table).delete().eq("id", department_id).execute()
        except Exception as e:
            logger.error("delete_department_failed", department_id=department_id, error=str(e))
            raise DatabaseError("delete", str(e))

        logger.info("department_deleted", department_id=department_id)


# Singleton instance
_department_service: Optional[DepartmentService] = None


def get_department_service() -> DepartmentService:
    """Get or create DepartmentService instance."""
    global _department_service
    if _department_service is None:
        _department_service = DepartmentService()
    return _department_service
