"""Domain models for daily health records."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum

NOTE_DELIMITER = "、"

URINE_ANCHORS: tuple[str, ...] = ("1元", "50元", "半拳", "一拳", "巨大")
URINE_RANGE_SEPARATOR = " ~ "


class StoolStatus(Enum):
    """Observed stool condition for a day."""

    NORMAL = "normal"
    NONE = "none"
    GRANULAR = "granular"
    LOOSE = "loose"

    @property
    def label(self) -> str:
        """Return the label shown to the owner and exported to the sheet."""
        return _STOOL_LABELS[self]


_STOOL_LABELS: dict[StoolStatus, str] = {
    StoolStatus.NORMAL: "正常",
    StoolStatus.NONE: "未大便",
    StoolStatus.GRANULAR: "顆粒狀",
    StoolStatus.LOOSE: "稀便",
}


def parse_stool_status(raw: object) -> StoolStatus:
    """Map a stored stool value or label to a status, defaulting to normal."""
    if isinstance(raw, StoolStatus):
        return raw
    value = str(raw or "").strip()
    for status, label in _STOOL_LABELS.items():
        if value in {status.value, label}:
            return status
    return StoolStatus.NORMAL


@dataclass(frozen=True)
class FoodIntakeEntry:
    """A single feeding event."""

    id: str
    food_id: str
    amount_g: float


@dataclass(frozen=True)
class BowlIntake:
    """Water poured into the shared bowl and weighed again later.

    ``leftover_ml`` stays ``None`` until the bowl has been measured.
    """

    id: str
    original_ml: float
    leftover_ml: float | None = None
    evaporation_ml: float = 0.0

    @property
    def is_pending(self) -> bool:
        """Return True while the leftover has not been measured."""
        return self.leftover_ml is None


@dataclass(frozen=True)
class DirectIntake:
    """Water given by hand, syringe or mixed into food."""

    id: str
    amount_ml: float


@dataclass(frozen=True)
class EvaporationIntake:
    """Estimated evaporation deducted from the day's bowl totals."""

    id: str
    amount_ml: float


WaterIntake = BowlIntake | DirectIntake | EvaporationIntake


def parse_water_intake(row: dict[str, object]) -> WaterIntake:
    """Build a water intake from a stored payload.

    Accepts both ``kind``-tagged payloads and the older ``type``/``amount1``/
    ``amount2`` shape.
    """
    kind = str(row.get("kind") or row.get("type") or "direct")
    entry_id = str(row.get("id", ""))
    if kind == "bowl":
        original = row.get("original_ml", row.get("amount1"))
        leftover = row.get("leftover_ml", row.get("amount2"))
        evaporation = row.get("evaporation_ml", row.get("evaporation"))
        return BowlIntake(
            id=entry_id,
            original_ml=float(original or 0.0),
            leftover_ml=float(leftover) if leftover is not None else None,
            evaporation_ml=float(evaporation or 0.0),
        )
    amount = float(row.get("amount_ml", row.get("amount1")) or 0.0)
    if kind == "evaporation":
        return EvaporationIntake(id=entry_id, amount_ml=amount)
    return DirectIntake(id=entry_id, amount_ml=amount)


def serialize_water_intake(entry: WaterIntake) -> dict[str, object]:
    """Return the stored payload for a water intake."""
    if isinstance(entry, BowlIntake):
        return {
            "id": entry.id,
            "kind": "bowl",
            "original_ml": entry.original_ml,
            "leftover_ml": entry.leftover_ml,
            "evaporation_ml": entry.evaporation_ml,
        }
    kind = "evaporation" if isinstance(entry, EvaporationIntake) else "direct"
    return {"id": entry.id, "kind": kind, "amount_ml": entry.amount_ml}


@dataclass(frozen=True)
class DailyRecord:
    """Everything recorded for one calendar date."""

    id: str
    day: date
    weight_kg: float = 0.0
    food_intakes: list[FoodIntakeEntry] = field(default_factory=list)
    water_intakes: list[WaterIntake] = field(default_factory=list)
    urine_size: str = URINE_ANCHORS[2]
    urine_count: int = 0
    stool_status: StoolStatus = StoolStatus.NORMAL
    notes: str = ""
    last_modified_at: datetime | None = None
    last_backup_at: datetime | None = None

    @property
    def note_list(self) -> list[str]:
        """Return the individual notes of the day."""
        return split_notes(self.notes)

    def has_marker(self, marker: str) -> bool:
        """Return True when the notes contain the marker text."""
        return bool(self.notes) and marker in self.notes

    @property
    def needs_backup(self) -> bool:
        """Return True when the record changed since its last backup."""
        if self.last_backup_at is None:
            return True
        if self.last_modified_at is None:
            return False
        return self.last_modified_at > self.last_backup_at


def split_notes(notes: str) -> list[str]:
    """Split a joined notes string, dropping blank entries."""
    if not notes:
        return []
    return [note for note in notes.split(NOTE_DELIMITER) if note.strip()]


def join_notes(notes: list[str]) -> str:
    """Join notes into the stored representation."""
    return NOTE_DELIMITER.join(note for note in notes if note.strip())


def toggle_note(notes: str, note: str) -> str:
    """Add the note when absent, remove it when present."""
    current = split_notes(notes)
    if note in current:
        current = [existing for existing in current if existing != note]
    else:
        current.append(note)
    return join_notes(current)
