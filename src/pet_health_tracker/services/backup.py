"""Backup of daily records to the spreadsheet webhook."""

import logging
from dataclasses import dataclass
from datetime import UTC, date, datetime

from pet_health_tracker.adapters.sheets_webhook_client import SheetsWebhookClient
from pet_health_tracker.domain.catalog import FoodDefinition
from pet_health_tracker.domain.records import NOTE_DELIMITER, DailyRecord
from pet_health_tracker.services.catalog import CatalogService
from pet_health_tracker.services.daily_stats import compute_daily_stats, snack_names
from pet_health_tracker.services.records import RecordRepository

_logger = logging.getLogger(__name__)


@dataclass
class BackupService:
    """Service that exports records and tracks what still needs backing up."""

    repository: RecordRepository
    catalog_service: CatalogService
    client: SheetsWebhookClient | None = None

    def pending(self, start: date, end: date) -> list[DailyRecord]:
        """Records in range that were never backed up or changed since."""
        records = self._in_range(start, end)
        return [record for record in records if record.needs_backup]

    def export_rows(self, start: date, end: date) -> list[dict[str, object]]:
        """Rows sent to the spreadsheet for the range."""
        catalog = self.catalog_service.catalog()
        records = self._in_range(start, end)
        return [build_export_row(record, catalog) for record in records]

    async def upload(self, start: date, end: date) -> int:
        """Upload every record in range and mark them as backed up."""
        if self.client is None:
            raise RuntimeError("Backup webhook is not configured")
        records = self._in_range(start, end)
        if not records:
            raise ValueError("No records to upload in the selected range")
        catalog = self.catalog_service.catalog()
        rows = [build_export_row(record, catalog) for record in records]
        await self.client.post_rows(rows)
        self.repository.mark_backed_up(
            [record.id for record in records], datetime.now(tz=UTC)
        )
        _logger.info(
            "Backed up %s records from %s to %s",
            len(records),
            start.isoformat(),
            end.isoformat(),
        )
        return len(records)

    def _in_range(self, start: date, end: date) -> list[DailyRecord]:
        records = self.repository.list_between(start, end)
        return sorted(records, key=lambda record: record.day)


def snack_info(record: DailyRecord, catalog: dict[str, FoodDefinition]) -> str:
    """Snack share and names, e.g. ``"12.5%, 雞胸肉"``."""
    stats = compute_daily_stats(record, catalog)
    ratio = f"{stats.side_ratio_percent:.1f}" if stats.total_calories > 0 else "0"
    names = NOTE_DELIMITER.join(snack_names(record, catalog))
    return f"{ratio}%, {names}" if names else f"{ratio}%"


def build_export_row(
    record: DailyRecord, catalog: dict[str, FoodDefinition]
) -> dict[str, object]:
    """Flatten a record into a spreadsheet row."""
    stats = compute_daily_stats(record, catalog)
    return {
        "date": record.day.isoformat(),
        "weight": record.weight_kg if record.weight_kg > 0 else "",
        "totalCalories": round(stats.total_calories, 1),
        "snackInfo": snack_info(record, catalog),
        "totalWater": round(stats.total_water, 1),
        "urineSize": record.urine_size,
        "stoolStatus": record.stool_status.label,
        "notes": record.notes or "",
    }
