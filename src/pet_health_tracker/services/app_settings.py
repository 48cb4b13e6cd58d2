"""Application settings service."""

import logging
from dataclasses import dataclass, replace
from typing import Protocol

from pet_health_tracker.domain.settings import (
    ACTIVITY_FACTORS,
    DEFAULT_NOTE_PRESETS,
    AppSettings,
)

_logger = logging.getLogger(__name__)

_FACTOR_TOLERANCE = 1e-9


class SettingsRepository(Protocol):
    """Persistence interface for the settings singleton."""

    def get_settings(self) -> AppSettings | None:
        """Return the stored settings, if any."""

    def put_settings(self, settings: AppSettings) -> None:
        """Store the settings."""


@dataclass
class AppSettingsService:
    """Service for reading and saving settings."""

    repository: SettingsRepository

    def get(self) -> AppSettings:
        """Return settings, creating the defaults on first access."""
        settings = self.repository.get_settings()
        if settings is None:
            settings = AppSettings()
            self.repository.put_settings(settings)
            _logger.info("Created default settings")
            return settings
        if not settings.note_presets:
            settings = replace(settings, note_presets=list(DEFAULT_NOTE_PRESETS))
        return settings

    def save(self, settings: AppSettings) -> AppSettings:
        """Validate and persist settings."""
        if not any(
            abs(settings.activity_factor - factor) < _FACTOR_TOLERANCE
            for factor in ACTIVITY_FACTORS
        ):
            allowed = ", ".join(str(factor) for factor in ACTIVITY_FACTORS)
            raise ValueError(f"Activity factor must be one of {allowed}")
        if settings.target_weight_kg <= 0:
            raise ValueError("Target weight must be positive")
        if settings.default_evaporation_ml < 0:
            raise ValueError("Default evaporation must not be negative")
        for interval in (
            settings.litter_interval_days,
            settings.medication_interval_days,
            settings.feeder_interval_days,
        ):
            if interval is not None and interval < 1:
                raise ValueError("Reminder intervals must be at least one day")
        self.repository.put_settings(settings)
        _logger.info("Saved settings")
        return settings
