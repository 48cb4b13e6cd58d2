"""Energy, water and alert rules."""

from pet_health_tracker.domain.records import DailyRecord, StoolStatus
from pet_health_tracker.domain.settings import AppSettings
from pet_health_tracker.domain.stats import DailyStats, DayAlerts, HealthTargets
from pet_health_tracker.services.history import is_overdue, urine_ordinal

WATER_MIN_ML_PER_KG = 40
WATER_MAX_ML_PER_KG = 60
SMALL_URINE_ORDINAL = 1.5
HIGH_SIDE_RATIO_PERCENT = 10.0


def energy_requirement(target_weight_kg: float, activity_factor: float) -> float:
    """Daily energy requirement in kcal: ``70 * kg ** 0.75 * factor``."""
    if target_weight_kg <= 0:
        return 0.0
    return target_weight_kg**0.75 * 70 * activity_factor


def water_goal(weight_kg: float) -> float:
    """Minimum daily water in ml for a body weight."""
    return weight_kg * WATER_MIN_ML_PER_KG


def health_targets(settings: AppSettings, latest_weight_kg: float) -> HealthTargets:
    """Targets shown on the settings page."""
    return HealthTargets(
        latest_weight_kg=latest_weight_kg,
        target_weight_kg=settings.target_weight_kg,
        weight_diff_kg=latest_weight_kg - settings.target_weight_kg,
        energy_requirement_kcal=energy_requirement(
            settings.target_weight_kg, settings.activity_factor
        ),
        water_min_ml=latest_weight_kg * WATER_MIN_ML_PER_KG,
        water_max_ml=latest_weight_kg * WATER_MAX_ML_PER_KG,
    )


def day_alerts(  # noqa: PLR0913
    record: DailyRecord,
    stats: DailyStats,
    settings: AppSettings,
    weight_kg: float,
    days_since_litter: int,
    days_since_medication: int,
    days_since_feeder: int,
) -> DayAlerts:
    """Evaluate the warning flags for one record."""
    return DayAlerts(
        low_water=stats.total_water < water_goal(weight_kg),
        small_urine=urine_ordinal(record.urine_size) <= SMALL_URINE_ORDINAL,
        high_side_ratio=stats.side_ratio_percent > HIGH_SIDE_RATIO_PERCENT,
        abnormal_stool=record.stool_status is not StoolStatus.NORMAL,
        litter_overdue=is_overdue(days_since_litter, settings.litter_interval_days),
        medication_overdue=is_overdue(
            days_since_medication, settings.medication_interval_days
        ),
        feeder_overdue=is_overdue(days_since_feeder, settings.feeder_interval_days),
    )
