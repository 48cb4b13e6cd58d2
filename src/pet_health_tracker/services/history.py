"""Forward-scan aggregations over the record history."""

from collections.abc import Iterable
from datetime import date, timedelta

from pet_health_tracker.domain.records import (
    URINE_ANCHORS,
    URINE_RANGE_SEPARATOR,
    DailyRecord,
)
from pet_health_tracker.domain.stats import ReminderStatus

NO_EVENT = -1
FALLBACK_WEIGHT_KG = 5.0
URINE_FALLBACK_ORDINAL = 2.0
CYCLE_SAMPLE_SIZE = 7


def urine_ordinal(label: str) -> float:
    """Position of a urine size label on the anchor scale.

    ``"<lower> ~ <upper>"`` sits halfway after ``lower``; unknown labels fall
    back to the middle of the scale.
    """
    if label in URINE_ANCHORS:
        return float(URINE_ANCHORS.index(label))
    if label and URINE_RANGE_SEPARATOR in label:
        lower = label.split(URINE_RANGE_SEPARATOR)[0]
        if lower in URINE_ANCHORS:
            return URINE_ANCHORS.index(lower) + 0.5
    return URINE_FALLBACK_ORDINAL


def urine_label(value: float) -> str:
    """Inverse of :func:`urine_ordinal` for values on the half-step grid."""
    if value < 0 or value > len(URINE_ANCHORS) - 1:
        return ""
    lower = int(value)
    if value == lower:
        return URINE_ANCHORS[lower]
    return f"{URINE_ANCHORS[lower]}{URINE_RANGE_SEPARATOR}{URINE_ANCHORS[lower + 1]}"


def sort_by_day(records: Iterable[DailyRecord]) -> list[DailyRecord]:
    """Return records in chronological order."""
    return sorted(records, key=lambda record: record.day)


def days_since_marker(records: Iterable[DailyRecord], marker: str) -> dict[date, int]:
    """Days since the latest marked record on or before each date.

    A marked day maps to 0. Days before the first marked record map to
    ``NO_EVENT``.
    """
    ages: dict[date, int] = {}
    last_marked: date | None = None
    for record in sort_by_day(records):
        if record.has_marker(marker):
            last_marked = record.day
            ages[record.day] = 0
        elif last_marked is not None:
            ages[record.day] = (record.day - last_marked).days
        else:
            ages[record.day] = NO_EVENT
    return ages


def carry_forward_weights(
    records: Iterable[DailyRecord], fallback: float = FALLBACK_WEIGHT_KG
) -> dict[date, float]:
    """Most recent positive weight as of each date."""
    weights: dict[date, float] = {}
    last_known = fallback
    for record in sort_by_day(records):
        if record.weight_kg > 0:
            last_known = record.weight_kg
        weights[record.day] = last_known
    return weights


def latest_weight(
    records: Iterable[DailyRecord], fallback: float = FALLBACK_WEIGHT_KG
) -> float:
    """Most recent positive weight across all records."""
    weights = carry_forward_weights(records, fallback)
    if not weights:
        return fallback
    return weights[max(weights)]


def is_overdue(days_since: int, interval_days: int | None) -> bool:
    """Return True when a reminder interval has been exceeded."""
    if not interval_days or days_since == NO_EVENT:
        return False
    return days_since > interval_days


def summarize_reminder(
    records: Iterable[DailyRecord],
    marker: str,
    interval_days: int | None,
    today: date,
) -> ReminderStatus:
    """Summarize a maintenance cycle as of ``today``.

    The average cycle uses the gaps between the most recent marked records,
    up to ``CYCLE_SAMPLE_SIZE`` of them.
    """
    marked = sorted(
        (record.day for record in records if record.has_marker(marker)),
        reverse=True,
    )
    last_date = marked[0] if marked else None
    recent = marked[:CYCLE_SAMPLE_SIZE]
    cycles = [(newer - older).days for newer, older in zip(recent, recent[1:])]
    average = round(sum(cycles) / len(cycles), 1) if cycles else None

    days_since_last = (today - last_date).days if last_date else 0
    expected_date = (
        last_date + timedelta(days=interval_days)
        if last_date and interval_days
        else None
    )
    return ReminderStatus(
        marker=marker,
        last_date=last_date,
        average_cycle_days=average,
        days_since_last=days_since_last,
        expected_date=expected_date,
        is_overdue=bool(
            last_date and interval_days and days_since_last > interval_days
        ),
    )
