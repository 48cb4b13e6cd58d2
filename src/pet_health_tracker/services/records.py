"""Daily record services."""

import logging
from dataclasses import dataclass, replace
from datetime import UTC, date, datetime
from typing import Protocol
from uuid import uuid4

from pet_health_tracker.domain.records import (
    BowlIntake,
    DailyRecord,
    DirectIntake,
    EvaporationIntake,
    FoodIntakeEntry,
    WaterIntake,
)
from pet_health_tracker.services.app_settings import AppSettingsService
from pet_health_tracker.services.catalog import CatalogService

_logger = logging.getLogger(__name__)


class RecordRepository(Protocol):
    """Persistence interface for daily records."""

    def list_records(self) -> list[DailyRecord]:
        """Return every record."""

    def get_by_day(self, day: date) -> DailyRecord | None:
        """Return the record for a date, if present."""

    def list_between(self, start: date, end: date) -> list[DailyRecord]:
        """Return records dated from start to end inclusive."""

    def put_record(self, record: DailyRecord) -> DailyRecord:
        """Create or replace a record."""

    def delete_record(self, record_id: str) -> None:
        """Delete a record by id."""

    def mark_backed_up(self, record_ids: list[str], backed_up_at: datetime) -> None:
        """Stamp records with the time of their last backup."""


def new_id() -> str:
    """Return a fresh identifier for records and entries."""
    return str(uuid4())


@dataclass
class RecordService:
    """Service for reading and writing daily records."""

    repository: RecordRepository
    catalog_service: CatalogService
    settings_service: AppSettingsService

    def list_records(self) -> list[DailyRecord]:
        """Return all records in chronological order."""
        return sorted(self.repository.list_records(), key=lambda record: record.day)

    def get_record(self, day: date) -> DailyRecord | None:
        """Return the record for a date."""
        return self.repository.get_by_day(day)

    def save_record(self, record: DailyRecord) -> DailyRecord:
        """Save a record, keeping a single record per date."""
        _validate(record)
        existing = self.repository.get_by_day(record.day)
        if existing is not None and existing.id != record.id:
            record = replace(record, id=existing.id)
        if existing is not None and record.last_backup_at is None:
            record = replace(record, last_backup_at=existing.last_backup_at)
        record = replace(record, last_modified_at=datetime.now(tz=UTC))
        saved = self.repository.put_record(record)
        _logger.info("Saved record for %s", saved.day.isoformat())
        return saved

    def delete_record(self, day: date) -> bool:
        """Delete the record for a date, returning False if none exists."""
        existing = self.repository.get_by_day(day)
        if existing is None:
            return False
        self.repository.delete_record(existing.id)
        _logger.info("Deleted record for %s", day.isoformat())
        return True

    def draft(self, day: date) -> DailyRecord:
        """Return the record to edit for a date.

        Existing records are returned as stored plus a zero evaporation entry
        when they have none. New days are pre-filled with the default food and
        the default evaporation estimate.
        """
        existing = self.repository.get_by_day(day)
        if existing is not None:
            if _has_evaporation(existing.water_intakes):
                return existing
            return replace(
                existing,
                water_intakes=[
                    *existing.water_intakes,
                    EvaporationIntake(id=new_id(), amount_ml=0.0),
                ],
            )

        food_intakes: list[FoodIntakeEntry] = []
        default_food = self.catalog_service.default_food()
        if default_food is not None:
            food_intakes.append(
                FoodIntakeEntry(
                    id=new_id(),
                    food_id=default_food.id,
                    amount_g=default_food.default_amount_g or 0.0,
                )
            )
        settings = self.settings_service.get()
        return DailyRecord(
            id=new_id(),
            day=day,
            food_intakes=food_intakes,
            water_intakes=[
                EvaporationIntake(
                    id=new_id(), amount_ml=settings.default_evaporation_ml
                )
            ],
        )


def _has_evaporation(entries: list[WaterIntake]) -> bool:
    return any(isinstance(entry, EvaporationIntake) for entry in entries)


def _validate(record: DailyRecord) -> None:
    if record.weight_kg < 0:
        raise ValueError("Weight must not be negative")
    if record.urine_count < 0:
        raise ValueError("Urine count must not be negative")
    for intake in record.food_intakes:
        if intake.amount_g < 0:
            raise ValueError("Food amounts must not be negative")
    for entry in record.water_intakes:
        if isinstance(entry, BowlIntake):
            amounts = [entry.original_ml, entry.leftover_ml or 0.0]
        elif isinstance(entry, DirectIntake | EvaporationIntake):
            amounts = [entry.amount_ml]
        else:
            amounts = []
        if any(amount < 0 for amount in amounts):
            raise ValueError("Water amounts must not be negative")
