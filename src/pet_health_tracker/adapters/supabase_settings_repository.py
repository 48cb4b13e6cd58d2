"""Supabase repository for the settings singleton."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from pet_health_tracker.domain.settings import AppSettings
from pet_health_tracker.services.app_settings import SettingsRepository

SETTINGS_ROW_ID = "global"


@dataclass
class SupabaseSettingsRepository(SettingsRepository):
    """Supabase implementation for app settings."""

    client: Client

    def get_settings(self) -> AppSettings | None:
        """Return the stored settings row, if present."""
        response = (
            self.client.table("settings")
            .select("*")
            .eq("id", SETTINGS_ROW_ID)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_settings(response.data[0])

    def put_settings(self, settings: AppSettings) -> None:
        """Create or replace the settings row."""
        self.client.table("settings").upsert(
            {
                "id": SETTINGS_ROW_ID,
                "target_weight_kg": settings.target_weight_kg,
                "activity_factor": settings.activity_factor,
                "default_evaporation_ml": settings.default_evaporation_ml,
                "note_presets": list(settings.note_presets),
                "litter_interval_days": settings.litter_interval_days,
                "medication_interval_days": settings.medication_interval_days,
                "feeder_interval_days": settings.feeder_interval_days,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            }
        ).execute()


def _optional_int(raw: object) -> int | None:
    return int(raw) if raw is not None else None


def _parse_settings(row: dict[str, object]) -> AppSettings:
    defaults = AppSettings()
    return AppSettings(
        target_weight_kg=float(
            row.get("target_weight_kg") or defaults.target_weight_kg
        ),
        activity_factor=float(row.get("activity_factor") or defaults.activity_factor),
        default_evaporation_ml=float(row.get("default_evaporation_ml") or 0.0),
        note_presets=[str(note) for note in row.get("note_presets") or []],
        litter_interval_days=_optional_int(row.get("litter_interval_days")),
        medication_interval_days=_optional_int(row.get("medication_interval_days")),
        feeder_interval_days=_optional_int(row.get("feeder_interval_days")),
    )
