"""Domain models for derived statistics."""

from dataclasses import dataclass
from datetime import date

from pet_health_tracker.domain.catalog import FoodCategory


@dataclass(frozen=True)
class DailyStats:
    """Nutrition and hydration totals for one day."""

    total_calories: float
    side_calories: float
    food_water: float
    drink_water: float
    total_water: float
    bowl_water: float = 0.0
    direct_water: float = 0.0
    pending_bowls: int = 0

    @property
    def side_ratio_percent(self) -> float:
        """Share of calories coming from snacks, in percent."""
        if self.total_calories <= 0:
            return 0.0
        return self.side_calories / self.total_calories * 100


@dataclass(frozen=True)
class CategoryShare:
    """Per-category slice of a day's food."""

    category: FoodCategory
    grams: float
    calories: float
    percent: float


@dataclass(frozen=True)
class DayAlerts:
    """Warning flags raised for a day."""

    low_water: bool
    small_urine: bool
    high_side_ratio: bool
    abnormal_stool: bool
    litter_overdue: bool
    medication_overdue: bool
    feeder_overdue: bool

    @property
    def any(self) -> bool:
        """Return True when at least one alert is raised."""
        return (
            self.low_water
            or self.small_urine
            or self.high_side_ratio
            or self.abnormal_stool
            or self.litter_overdue
            or self.medication_overdue
            or self.feeder_overdue
        )


@dataclass(frozen=True)
class DaySummary:
    """Everything the history view shows for one record."""

    day: date
    stats: DailyStats
    breakdown: list[CategoryShare]
    alerts: DayAlerts
    weight_kg: float
    water_goal_ml: float
    urine_ordinal: float
    days_since_litter: int
    days_since_medication: int
    days_since_feeder: int


@dataclass(frozen=True)
class ReminderStatus:
    """Cycle summary for one maintenance task."""

    marker: str
    last_date: date | None
    average_cycle_days: float | None
    days_since_last: int
    expected_date: date | None
    is_overdue: bool


@dataclass(frozen=True)
class HealthTargets:
    """Energy and water targets derived from settings and weight."""

    latest_weight_kg: float
    target_weight_kg: float
    weight_diff_kg: float
    energy_requirement_kcal: float
    water_min_ml: float
    water_max_ml: float
