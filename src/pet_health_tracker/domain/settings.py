"""Domain model for application-wide settings."""

from dataclasses import dataclass, field

ACTIVITY_FACTORS: tuple[float, ...] = (0.8, 0.9, 1.0, 1.1, 1.2)

DEFAULT_NOTE_PRESETS: tuple[str, ...] = (
    "換砂",
    "洗飼料機",
    "點藥",
    "就醫",
    "健檢",
    "咳嗽",
    "嘔吐",
    "舔嘴唇",
    "精神差",
    "食慾差",
    "肚子翻攪",
)

LITTER_MARKER = "換砂"
MEDICATION_MARKER = "點藥"
FEEDER_MARKER = "洗飼料機"


@dataclass(frozen=True)
class AppSettings:
    """Singleton configuration edited by the owner."""

    target_weight_kg: float = 5.0
    activity_factor: float = 1.0
    default_evaporation_ml: float = 0.0
    note_presets: list[str] = field(default_factory=lambda: list(DEFAULT_NOTE_PRESETS))
    litter_interval_days: int | None = 14
    medication_interval_days: int | None = 30
    feeder_interval_days: int | None = 30
