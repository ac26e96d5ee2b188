"""
Contract service for list and detail views.

Contract status is derived from the period end date on every read;
nothing about status is stored.
"""

from datetime import date
from typing import Optional, Union
import structlog

from config import get_supabase_client, settings
from models.contract import (
    ContractStatus,
    ContractStatusFilter,
    ContractPeriod,
    ContractResponse,
    ContractStatusInfo,
    ContractSummary,
    ContractListResponse,
    ContractDetailResponse,
    EmployeeSummary,
)
from services.employment_settings_service import get_employment_settings_service
from exceptions import (
    DatabaseError,
    ContractNotFoundError,
    ContractAccessDeniedError,
    InvalidContractFilterError,
)

logger = structlog.get_logger(__name__)

UNKNOWN_EMPLOYEE = "不明な従業員"
NOT_SET = "未設定"
NO_FIXED_TERM = "期間の定めなし"
FIXED_TERM = "有期雇用"

STATUS_LABELS = {
    ContractStatus.PERMANENT: "無期雇用",
    ContractStatus.ACTIVE: "有効",
    ContractStatus.EXPIRED: "期限切れ",
}


# ===================
# DERIVED VALUES
# ===================

def get_contract_status(
    period: Optional[ContractPeriod],
    today: Optional[date] = None,
    expiring_days: Optional[int] = None
) -> ContractStatusInfo:
    """
    Status of a contract on a given day.

    - No end date -> PERMANENT
    - End date passed -> EXPIRED
    - Ends within expiring_days (inclusive, today counts as 0) -> EXPIRING
    - Otherwise ACTIVE

    Args:
        period: Contract period
        today: Reference date (defaults to today)
        expiring_days: Warning window (defaults to settings.contract_expiring_days)
    """
    if period is None or period.end_date is None:
        return ContractStatusInfo(
            status=ContractStatus.PERMANENT,
            label=STATUS_LABELS[ContractStatus.PERMANENT],
        )

    today = today or date.today()
    if expiring_days is None:
        expiring_days = settings.contract_expiring_days

    days = (period.end_date - today).days

    if days < 0:
        status, label = ContractStatus.EXPIRED, STATUS_LABELS[ContractStatus.EXPIRED]
    elif days <= expiring_days:
        status, label = ContractStatus.EXPIRING, f"{days}日後期限"
    else:
        status, label = ContractStatus.ACTIVE, STATUS_LABELS[ContractStatus.ACTIVE]

    return ContractStatusInfo(status=status, label=label, days_remaining=days)


def format_ja_date(value: date) -> str:
    """2025/4/1 style, as printed on Japanese documents."""
    return f"{value.year}/{value.month}/{value.day}"


def get_period_label(period: Optional[ContractPeriod]) -> str:
    """'期間の定めなし', 'start ～ end', or '未設定'."""
    if period is None:
        return NOT_SET
    if period.type == "permanent":
        return NO_FIXED_TERM
    if period.start_date and period.end_date:
        return f"{format_ja_date(period.start_date)} ～ {format_ja_date(period.end_date)}"
    return NOT_SET


def get_renewal_label(period: Optional[ContractPeriod]) -> Optional[str]:
    """Renewal count for fixed-term contracts, e.g. '1 回 / 3 回まで'."""
    if period is None or period.type != "fixed-term":
        return None
    label = f"{period.renewal_count} 回"
    if period.max_renewals:
        label += f" / {period.max_renewals} 回まで"
    return label


def parse_status_filter(value: Union[str, ContractStatusFilter, None]) -> ContractStatusFilter:
    """
    Convert a filter value, None meaning ALL.

    Raises:
        InvalidContractFilterError: If value is not a known filter
    """
    if value is None:
        return ContractStatusFilter.ALL
    try:
        return ContractStatusFilter(value)
    except ValueError:
        raise InvalidContractFilterError(str(value), [f.value for f in ContractStatusFilter])


class ContractService:
    """
    Contract read operations.

    Joins contracts with employees by employee code.
    """

    def __init__(self):
        self.db = get_supabase_client()
        self.table = "contracts"
        self.employees_table = "employees"

    # ===================
    # LIST
    # ===================

    def get_all(
        self,
        company_id: str,
        status_filter: Union[str, ContractStatusFilter, None] = None,
        today: Optional[date] = None
    ) -> ContractListResponse:
        """
        List contracts of a company, newest first.

        Args:
            company_id: Company ID
            status_filter: all, active, expiring or expired
            today: Reference date for status

        Returns:
            ContractListResponse with counts over all contracts
        """
        selected = parse_status_filter(status_filter)
        logger.info("getting_contracts", company_id=company_id, filter=selected.value)

        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("company_id", company_id)
                .order("created_at", desc=True)
                .execute()
            )
        except Exception as e:
            logger.error("get_contracts_failed", company_id=company_id, error=str(e))
            raise DatabaseError("select", str(e))

        contracts = [self._row_to_response(row) for row in result.data]
        employees = self._get_employee_names(company_id)

        summaries = [self._to_summary(c, employees, today) for c in contracts]

        counts = {f.value: 0 for f in ContractStatusFilter}
        counts[ContractStatus.PERMANENT.value] = 0
        counts[ContractStatusFilter.ALL.value] = len(summaries)
        for summary in summaries:
            counts[summary.status.status.value] += 1

        if selected != ContractStatusFilter.ALL:
            summaries = [s for s in summaries if s.status.status.value == selected.value]

        logger.info("contracts_retrieved", count=len(summaries), total=len(contracts))

        return ContractListResponse(
            data=summaries,
            total=len(summaries),
            filter=selected,
            counts=counts,
        )

    # ===================
    # DETAIL
    # ===================

    def get_by_id(self, company_id: str, contract_id: str) -> ContractResponse:
        """
        Get a contract owned by company_id.

        Raises:
            ContractNotFoundError: If contract doesn't exist
            ContractAccessDeniedError: If it belongs to another company
        """
        logger.debug("getting_contract", contract_id=contract_id)

        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("id", contract_id)
                .execute()
            )
        except Exception as e:
            logger.error("get_contract_failed", contract_id=contract_id, error=str(e))
            raise DatabaseError("select", str(e))

        if not result.data:
            raise ContractNotFoundError(contract_id)

        contract = self._row_to_response(result.data[0])
        if contract.company_id != company_id:
            logger.warning(
                "contract_access_denied",
                contract_id=contract_id,
                company_id=company_id
            )
            raise ContractAccessDeniedError(contract_id)

        return contract

    def get_detail(
        self,
        company_id: str,
        contract_id: str,
        today: Optional[date] = None
    ) -> ContractDetailResponse:
        """
        Contract with employee, company employment settings and labels.

        Raises:
            ContractNotFoundError: If contract doesn't exist
            ContractAccessDeniedError: If it belongs to another company
        """
        contract = self.get_by_id(company_id, contract_id)
        employees = self._get_employee_names(company_id, contract.employee_id)
        employee_name = employees.get(contract.employee_id)

        employment_settings = get_employment_settings_service().get(company_id)

        period = contract.period
        alert_days = []
        if period.type == "fixed-term" and contract.expiry_management:
            alert_days = [
                alert.days
                for alert in contract.expiry_management.alert_settings
                if alert.enabled
            ]

        return ContractDetailResponse(
            contract=contract,
            status=get_contract_status(period, today),
            employee=(
                EmployeeSummary(employee_id=contract.employee_id, name=employee_name)
                if employee_name is not None else None
            ),
            employment_settings=employment_settings,
            period_type_label=NO_FIXED_TERM if period.type == "permanent" else FIXED_TERM,
            period_label=get_period_label(period),
            renewal_label=get_renewal_label(period),
            alert_days=alert_days,
        )

    # ===================
    # HELPERS
    # ===================

    def _get_employee_names(
        self,
        company_id: str,
        employee_id: Optional[str] = None
    ) -> dict[str, str]:
        """Map employee code -> name for a company."""
        try:
            query = (
                self.db.table(self.employees_table)
                .select("employee_id, name")
                .eq("company_id", company_id)
            )
            if employee_id:
                query = query.eq("employee_id", employee_id)
            result = query.execute()
        except Exception as e:
            logger.error("get_employees_failed", company_id=company_id, error=str(e))
            raise DatabaseError("select", str(e))

        return {
            row["employee_id"]: row.get("name") or ""
            for row in result.data
            if row.get("employee_id")
        }

    def _row_to_response(self, row: dict) -> ContractResponse:
        """Convert database row to ContractResponse; null columns take defaults."""
        return ContractResponse(**{key: value for key, value in row.items() if value is not None})

    def _to_summary(
        self,
        contract: ContractResponse,
        employees: dict[str, str],
        today: Optional[date]
    ) -> ContractSummary:
        """Build one list row."""
        last_updated = contract.updated_at or contract.created_at

        return ContractSummary(
            id=contract.id,
            employee_id=contract.employee_id,
            employee_name=employees.get(contract.employee_id, UNKNOWN_EMPLOYEE),
            employment_type=contract.employment_type or NOT_SET,
            period_label=get_period_label(contract.period),
            status=get_contract_status(contract.period, today),
            last_updated=last_updated.date() if last_updated else None,
        )


# Singleton instance
_contract_service: Optional[ContractService] = None


def get_contract_service() -> ContractService:
    """Get or create ContractService instance."""
    global _contract_service
    if _contract_service is None:
        _contract_service = ContractService()
    return _contract_service
