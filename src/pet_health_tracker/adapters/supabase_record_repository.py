"""Supabase repository for daily records."""

from dataclasses import dataclass
from datetime import date, datetime

from supabase import Client

from pet_health_tracker.domain.records import (
    DailyRecord,
    FoodIntakeEntry,
    parse_stool_status,
    parse_water_intake,
    serialize_water_intake,
)
from pet_health_tracker.services.records import RecordRepository


@dataclass
class SupabaseRecordRepository(RecordRepository):
    """Supabase implementation for daily records."""

    client: Client

    def list_records(self) -> list[DailyRecord]:
        """Return every record ordered by date."""
        response = (
            self.client.table("records").select("*").order("date", desc=False).execute()
        )
        return [_parse_record(row) for row in response.data or []]

    def get_by_day(self, day: date) -> DailyRecord | None:
        """Return the record for a date, if present."""
        response = (
            self.client.table("records")
            .select("*")
            .eq("date", day.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_record(response.data[0])

    def list_between(self, start: date, end: date) -> list[DailyRecord]:
        """Return records from start to end inclusive."""
        response = (
            self.client.table("records")
            .select("*")
            .gte("date", start.isoformat())
            .lte("date", end.isoformat())
            .order("date", desc=False)
            .execute()
        )
        return [_parse_record(row) for row in response.data or []]

    def put_record(self, record: DailyRecord) -> DailyRecord:
        """Create or replace a record."""
        response = (
            self.client.table("records").upsert(_serialize_record(record)).execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save daily record")
        return _parse_record(response.data[0])

    def delete_record(self, record_id: str) -> None:
        """Delete a record by id."""
        self.client.table("records").delete().eq("id", record_id).execute()

    def mark_backed_up(self, record_ids: list[str], backed_up_at: datetime) -> None:
        """Stamp records with the backup time."""
        if not record_ids:
            return
        self.client.table("records").update(
            {"last_backup_at": backed_up_at.isoformat()}
        ).in_("id", record_ids).execute()


def _serialize_record(record: DailyRecord) -> dict[str, object]:
    return {
        "id": record.id,
        "date": record.day.isoformat(),
        "weight": record.weight_kg,
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
        "last_modified_at": _format_datetime(record.last_modified_at),
        "last_backup_at": _format_datetime(record.last_backup_at),
    }


def _parse_record(row: dict[str, object]) -> DailyRecord:
    """Parse a record row into a domain model."""
    food_rows = row.get("food_intakes") or []
    water_rows = row.get("water_intakes") or []
    return DailyRecord(
        id=str(row["id"]),
        day=date.fromisoformat(str(row["date"])[:10]),
        weight_kg=float(row.get("weight") or 0.0),
        food_intakes=[
            FoodIntakeEntry(
                id=str(item.get("id", "")),
                food_id=str(item.get("food_id", item.get("foodId", ""))),
                amount_g=float(item.get("amount_g", item.get("amount")) or 0.0),
            )
            for item in food_rows
        ],
        water_intakes=[parse_water_intake(item) for item in water_rows],
        urine_size=str(row.get("urine_size") or ""),
        urine_count=int(row.get("urine_count") or 0),
        stool_status=parse_stool_status(row.get("stool_status")),
        notes=str(row.get("notes") or ""),
        last_modified_at=_parse_datetime(row.get("last_modified_at")),
        last_backup_at=_parse_datetime(row.get("last_backup_at")),
    )


def _format_datetime(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def _parse_datetime(raw: object) -> datetime | None:
    if isinstance(raw, str) and raw:
        return datetime.fromisoformat(raw)
    return None
