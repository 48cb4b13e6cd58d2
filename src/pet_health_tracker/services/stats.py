"""Statistics service for the record history."""

from dataclasses import dataclass
from datetime import date, timedelta

from pet_health_tracker.domain.catalog import FoodDefinition
from pet_health_tracker.domain.records import DailyRecord
from pet_health_tracker.domain.settings import (
    FEEDER_MARKER,
    LITTER_MARKER,
    MEDICATION_MARKER,
    AppSettings,
)
from pet_health_tracker.domain.stats import DaySummary, HealthTargets, ReminderStatus
from pet_health_tracker.services.app_settings import AppSettingsService
from pet_health_tracker.services.catalog import CatalogService
from pet_health_tracker.services.daily_stats import (
    category_breakdown,
    compute_daily_stats,
)
from pet_health_tracker.services.health import day_alerts, health_targets, water_goal
from pet_health_tracker.services.history import (
    FALLBACK_WEIGHT_KG,
    NO_EVENT,
    carry_forward_weights,
    days_since_marker,
    latest_weight,
    summarize_reminder,
    urine_ordinal,
)
from pet_health_tracker.services.records import RecordRepository

HISTORY_WINDOW_DAYS = 7


@dataclass
class StatsService:
    """Service combining records, catalog and settings into summaries."""

    repository: RecordRepository
    catalog_service: CatalogService
    settings_service: AppSettingsService

    def get_day(self, day: date) -> DaySummary | None:
        """Return the summary for a single date."""
        summaries = self._summarize(self.repository.list_records())
        return next((summary for summary in summaries if summary.day == day), None)

    def get_history(
        self, end: date, days: int = HISTORY_WINDOW_DAYS
    ) -> list[DaySummary]:
        """Return summaries for the window ending at ``end``, newest first."""
        start = end - timedelta(days=max(days, 1) - 1)
        summaries = self._summarize(self.repository.list_records())
        window = [summary for summary in summaries if start <= summary.day <= end]
        return sorted(window, key=lambda summary: summary.day, reverse=True)

    def get_reminders(self, today: date) -> list[ReminderStatus]:
        """Return litter, medication and feeder cycle summaries."""
        records = self.repository.list_records()
        settings = self.settings_service.get()
        return [
            summarize_reminder(
                records, LITTER_MARKER, settings.litter_interval_days, today
            ),
            summarize_reminder(
                records, MEDICATION_MARKER, settings.medication_interval_days, today
            ),
            summarize_reminder(
                records, FEEDER_MARKER, settings.feeder_interval_days, today
            ),
        ]

    def get_targets(self) -> HealthTargets:
        """Return energy and water targets.

        Uses the latest recorded weight, or the target weight before any
        weighing.
        """
        records = self.repository.list_records()
        settings = self.settings_service.get()
        weight = latest_weight(records, fallback=settings.target_weight_kg)
        return health_targets(settings, weight)

    def _summarize(self, records: list[DailyRecord]) -> list[DaySummary]:
        return summarize_records(
            records, self.catalog_service.catalog(), self.settings_service.get()
        )


def summarize_records(
    records: list[DailyRecord],
    catalog: dict[str, FoodDefinition],
    settings: AppSettings,
) -> list[DaySummary]:
    """Build a summary per record, carrying weights and reminder ages forward."""
    weights = carry_forward_weights(records)
    litter_ages = days_since_marker(records, LITTER_MARKER)
    medication_ages = days_since_marker(records, MEDICATION_MARKER)
    feeder_ages = days_since_marker(records, FEEDER_MARKER)

    summaries = []
    for record in sorted(records, key=lambda item: item.day):
        stats = compute_daily_stats(record, catalog)
        weight = weights.get(record.day, FALLBACK_WEIGHT_KG)
        litter = litter_ages.get(record.day, NO_EVENT)
        medication = medication_ages.get(record.day, NO_EVENT)
        feeder = feeder_ages.get(record.day, NO_EVENT)
        summaries.append(
            DaySummary(
                day=record.day,
                stats=stats,
                breakdown=category_breakdown(record, catalog),
                alerts=day_alerts(
                    record, stats, settings, weight, litter, medication, feeder
                ),
                weight_kg=weight,
                water_goal_ml=water_goal(weight),
                urine_ordinal=urine_ordinal(record.urine_size),
                days_since_litter=litter,
                days_since_medication=medication,
                days_since_feeder=feeder,
            )
        )
    return summaries
