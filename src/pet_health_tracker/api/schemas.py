"""Pydantic request models and response serializers for the HTTP API."""

from datetime import date
from typing import Annotated, Literal

from pydantic import BaseModel, Field

from pet_health_tracker.domain.catalog import FoodDefinition, parse_category
from pet_health_tracker.domain.records import (
    URINE_ANCHORS,
    BowlIntake,
    DailyRecord,
    DirectIntake,
    EvaporationIntake,
    FoodIntakeEntry,
    WaterIntake,
    parse_stool_status,
    serialize_water_intake,
)
from pet_health_tracker.domain.settings import AppSettings
from pet_health_tracker.domain.stats import (
    DailyStats,
    DaySummary,
    HealthTargets,
    ReminderStatus,
)
from pet_health_tracker.services.records import new_id


class FoodPayload(BaseModel):
    """Food definition sent by the client."""

    name: str
    category: str
    calories_per_gram: float = Field(ge=0)
    water_content_percent: float = Field(ge=0, le=100)
    order: int | None = None
    is_default: bool = False
    default_amount_g: float | None = Field(default=None, ge=0)

    def to_domain(self, food_id: str) -> FoodDefinition:
        return FoodDefinition(
            id=food_id,
            name=self.name,
            category=parse_category(self.category),
            calories_per_gram=self.calories_per_gram,
            water_content_percent=self.water_content_percent,
            order=self.order,
            is_default=self.is_default,
            default_amount_g=self.default_amount_g,
        )


class FoodOrderPayload(BaseModel):
    """New display order as a list of food ids."""

    food_ids: list[str]


class FoodIntakePayload(BaseModel):
    id: str | None = None
    food_id: str
    amount_g: float = Field(ge=0)


class BowlIntakePayload(BaseModel):
    kind: Literal["bowl"]
    id: str | None = None
    original_ml: float = Field(ge=0)
    leftover_ml: float | None = Field(default=None, ge=0)
    evaporation_ml: float = Field(default=0.0, ge=0)


class DirectIntakePayload(BaseModel):
    kind: Literal["direct"]
    id: str | None = None
    amount_ml: float = Field(ge=0)


class EvaporationIntakePayload(BaseModel):
    kind: Literal["evaporation"]
    id: str | None = None
    amount_ml: float = Field(ge=0)


WaterIntakePayload = Annotated[
    BowlIntakePayload | DirectIntakePayload | EvaporationIntakePayload,
    Field(discriminator="kind"),
]


def _water_to_domain(payload: WaterIntakePayload) -> WaterIntake:
    entry_id = payload.id or new_id()
    if isinstance(payload, BowlIntakePayload):
        return BowlIntake(
            id=entry_id,
            original_ml=payload.original_ml,
            leftover_ml=payload.leftover_ml,
            evaporation_ml=payload.evaporation_ml,
        )
    if isinstance(payload, EvaporationIntakePayload):
        return EvaporationIntake(id=entry_id, amount_ml=payload.amount_ml)
    return DirectIntake(id=entry_id, amount_ml=payload.amount_ml)


class RecordPayload(BaseModel):
    """Daily record sent by the client."""

    id: str | None = None
    weight_kg: float = Field(default=0.0, ge=0)
    food_intakes: list[FoodIntakePayload] = Field(default_factory=list)
    water_intakes: list[WaterIntakePayload] = Field(default_factory=list)
    urine_size: str = URINE_ANCHORS[2]
    urine_count: int = Field(default=0, ge=0)
    stool_status: str = "normal"
    notes: str = ""

    def to_domain(self, day: date) -> DailyRecord:
        return DailyRecord(
            id=self.id or new_id(),
            day=day,
            weight_kg=self.weight_kg,
            food_intakes=[
                FoodIntakeEntry(
                    id=intake.id or new_id(),
                    food_id=intake.food_id,
                    amount_g=intake.amount_g,
                )
                for intake in self.food_intakes
            ],
            water_intakes=[_water_to_domain(entry) for entry in self.water_intakes],
            urine_size=self.urine_size,
            urine_count=self.urine_count,
            stool_status=parse_stool_status(self.stool_status),
            notes=self.notes,
        )


class SettingsPayload(BaseModel):
    """Settings sent by the client."""

    target_weight_kg: float = Field(gt=0)
    activity_factor: float
    default_evaporation_ml: float = Field(default=0.0, ge=0)
    note_presets: list[str] = Field(default_factory=list)
    litter_interval_days: int | None = None
    medication_interval_days: int | None = None
    feeder_interval_days: int | None = None

    def to_domain(self) -> AppSettings:
        return AppSettings(**self.model_dump())


class BackupRequest(BaseModel):
    """Date range to upload."""

    start: date
    end: date


def serialize_food(food: FoodDefinition) -> dict[str, object]:
    return {
        "id": food.id,
        "name": food.name,
        "category": food.category.value,
        "calories_per_gram": food.calories_per_gram,
        "water_content_percent": food.water_content_percent,
        "order": food.order,
        "is_default": food.is_default,
        "default_amount_g": food.default_amount_g,
    }


def serialize_record(record: DailyRecord) -> dict[str, object]:
    return {
        "id": record.id,
        "date": record.day.isoformat(),
        "weight_kg": record.weight_kg,
        "food_intakes": [
            {"id": intake.id, "food_id": intake.food_id, "amount_g": intake.amount_g}
            for intake in record.food_intakes
        ],
        "water_intakes": [
            serialize_water_intake(entry) for entry in record.water_intakes
        ],
        "urine_size": record.urine_size,
        "urine_count": record.urine_count,
        "stool_status": record.stool_status.value,
        "notes": record.notes,
        "last_modified_at": (
            record.last_modified_at.isoformat() if record.last_modified_at else None
        ),
        "last_backup_at": (
            record.last_backup_at.isoformat() if record.last_backup_at else None
        ),
    }


def serialize_settings(settings: AppSettings) -> dict[str, object]:
    return {
        "target_weight_kg": settings.target_weight_kg,
        "activity_factor": settings.activity_factor,
        "default_evaporation_ml": settings.default_evaporation_ml,
        "note_presets": list(settings.note_presets),
        "litter_interval_days": settings.litter_interval_days,
        "medication_interval_days": settings.medication_interval_days,
        "feeder_interval_days": settings.feeder_interval_days,
    }


def serialize_stats(stats: DailyStats) -> dict[str, object]:
    return {
        "total_calories": stats.total_calories,
        "side_calories": stats.side_calories,
        "side_ratio_percent": stats.side_ratio_percent,
        "food_water": stats.food_water,
        "drink_water": stats.drink_water,
        "bowl_water": stats.bowl_water,
        "direct_water": stats.direct_water,
        "total_water": stats.total_water,
        "pending_bowls": stats.pending_bowls,
    }


def serialize_summary(summary: DaySummary) -> dict[str, object]:
    alerts = summary.alerts
    return {
        "date": summary.day.isoformat(),
        "stats": serialize_stats(summary.stats),
        "breakdown": [
            {
                "category": share.category.value,
                "grams": share.grams,
                "calories": share.calories,
                "percent": share.percent,
            }
            for share in summary.breakdown
        ],
        "alerts": {
            "any": alerts.any,
            "low_water": alerts.low_water,
            "small_urine": alerts.small_urine,
            "high_side_ratio": alerts.high_side_ratio,
            "abnormal_stool": alerts.abnormal_stool,
            "litter_overdue": alerts.litter_overdue,
            "medication_overdue": alerts.medication_overdue,
            "feeder_overdue": alerts.feeder_overdue,
        },
        "weight_kg": summary.weight_kg,
        "water_goal_ml": summary.water_goal_ml,
        "urine_ordinal": summary.urine_ordinal,
        "days_since_litter": summary.days_since_litter,
        "days_since_medication": summary.days_since_medication,
        "days_since_feeder": summary.days_since_feeder,
    }


def serialize_reminder(status: ReminderStatus) -> dict[str, object]:
    return {
        "marker": status.marker,
        "last_date": status.last_date.isoformat() if status.last_date else None,
        "average_cycle_days": status.average_cycle_days,
        "days_since_last": status.days_since_last,
        "expected_date": (
            status.expected_date.isoformat() if status.expected_date else None
        ),
        "is_overdue": status.is_overdue,
    }


def serialize_targets(targets: HealthTargets) -> dict[str, object]:
    return {
        "latest_weight_kg": targets.latest_weight_kg,
        "target_weight_kg": targets.target_weight_kg,
        "weight_diff_kg": targets.weight_diff_kg,
        "energy_requirement_kcal": targets.energy_requirement_kcal,
        "water_min_ml": targets.water_min_ml,
        "water_max_ml": targets.water_max_ml,
    }
