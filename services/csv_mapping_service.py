"""
CSV mapping service.

Loads and saves a company's mapping configuration (table `csv_mappings`,
one row per company) and applies main field selections through the
header symbol resolver.
"""

from datetime import datetime, timezone
from typing import Optional, Union
import structlog
from pydantic import ValidationError as PydanticValidationError

from config import get_supabase_client
from models.csv_mapping import (
    ItemCategory,
    MainFieldName,
    MappingItem,
    MappingConfiguration,
    MappingConfigurationUpdate,
    MainFieldsView,
)
from services.header_symbol_resolver import (
    build_main_fields_view,
    coerce_main_fields,
    update_main_field_mapping,
)
from exceptions import DatabaseError, MappingNotFoundError

logger = structlog.get_logger(__name__)


class CsvMappingService:
    """
    CSV mapping configuration persistence.

    The configuration is always written back as a whole.
    """

    def __init__(self):
        self.db = get_supabase_client()
        self.table = "csv_mappings"

    # ===================
    # READ OPERATIONS
    # ===================

    def get(self, company_id: str) -> MappingConfiguration:
        """
        Get mapping configuration of a company.

        Raises:
            MappingNotFoundError: If the company has no mapping yet
        """
        logger.debug("getting_csv_mapping", company_id=company_id)

        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("company_id", company_id)
                .execute()
            )
        except Exception as e:
            logger.error("get_csv_mapping_failed", company_id=company_id, error=str(e))
            raise DatabaseError("select", str(e))

        if not result.data:
            raise MappingNotFoundError(company_id)

        return self._row_to_config(result.data[0])

    def get_main_fields(self, company_id: str) -> MainFieldsView:
        """Resolved main field selectors for a company's mapping."""
        return build_main_fields_view(self.get(company_id))

    # ===================
    # WRITE OPERATIONS
    # ===================

    def save(self, company_id: str, data: MappingConfigurationUpdate) -> MappingConfiguration:
        """
        Create or replace the mapping configuration.

        Raises:
            DatabaseError: If the write fails
        """
        logger.info("saving_csv_mapping", company_id=company_id)

        try:
            existing = self.get(company_id)
        except MappingNotFoundError:
            existing = None

        config = MappingConfiguration(
            id=existing.id if existing else None,
            company_id=company_id,
            created_at=existing.created_at if existing else None,
            **data.model_dump()
        )
        return self._write(config)

    def update_main_field(
        self,
        company_id: str,
        field_name: Union[str, MainFieldName],
        symbol: Optional[str]
    ) -> MainFieldsView:
        """
        Set one main field to the selected symbol and persist the mapping.

        Raises:
            MappingNotFoundError: If the company has no mapping yet
            InvalidMainFieldError: If field_name is not a main field
        """
        config = self.get(company_id)
        updated = update_main_field_mapping(config, field_name, symbol)

        logger.info(
            "updating_main_field",
            company_id=company_id,
            field=getattr(field_name, "value", field_name),
            symbol=symbol
        )

        saved = self._write(updated)
        return build_main_fields_view(saved)

    def _row_to_config(self, row: dict) -> MappingConfiguration:
        """
        Convert database row to MappingConfiguration.

        Unreadable items are skipped and unreadable main fields read as
        unset, so one bad entry never hides the whole mapping.
        """
        data = {key: value for key, value in row.items() if value is not None}

        for category in ItemCategory:
            items = []
            for raw in data.get(category.value) or []:
                try:
                    items.append(MappingItem.model_validate(raw))
                except PydanticValidationError as e:
                    logger.warning(
                        "mapping_item_skipped",
                        company_id=data.get("company_id"),
                        category=category.value,
                        error=str(e)
                    )
            data[category.value] = items

        data["main_fields"] = coerce_main_fields(data.get("main_fields"))
        return MappingConfiguration(**data)

    def _write(self, config: MappingConfiguration) -> MappingConfiguration:
        """Upsert the whole configuration."""
        now = datetime.now(timezone.utc).isoformat()
        row = config.model_dump(mode="json", exclude_none=True)
        row["updated_at"] = now
        row.setdefault("created_at", now)

        try:
            result = (
                self.db.table(self.table)
                .upsert(row, on_conflict="company_id")
                .execute()
            )
        except Exception as e:
            logger.error("save_csv_mapping_failed", company_id=config.company_id, error=str(e))
            raise DatabaseError("upsert", str(e))

        logger.info("csv_mapping_saved", company_id=config.company_id)
        return MappingConfiguration(**(result.data[0] if result.data else row))


# Singleton instance
_csv_mapping_service: Optional[CsvMappingService] = None


def get_csv_mapping_service() -> CsvMappingService:
    """Get or create CsvMappingService instance."""
    global _csv_mapping_service
    if _csv_mapping_service is None:
        _csv_mapping_service = CsvMappingService()
    return _csv_mapping_service
