"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from pet_health_tracker.adapters.sheets_webhook_client import HttpxSheetsWebhookClient
from pet_health_tracker.adapters.supabase_food_repository import (
    SupabaseFoodRepository,
)
from pet_health_tracker.adapters.supabase_record_repository import (
    SupabaseRecordRepository,
)
from pet_health_tracker.adapters.supabase_settings_repository import (
    SupabaseSettingsRepository,
)
from pet_health_tracker.config import Settings
from pet_health_tracker.services.app_settings import AppSettingsService
from pet_health_tracker.services.backup import BackupService
from pet_health_tracker.services.catalog import CatalogService
from pet_health_tracker.services.records import RecordService
from pet_health_tracker.services.stats import StatsService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    catalog_service: CatalogService
    settings_service: AppSettingsService
    record_service: RecordService
    stats_service: StatsService
    backup_service: BackupService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    food_repository = SupabaseFoodRepository(supabase_client)
    record_repository = SupabaseRecordRepository(supabase_client)
    settings_repository = SupabaseSettingsRepository(supabase_client)

    catalog_service = CatalogService(food_repository)
    settings_service = AppSettingsService(settings_repository)
    record_service = RecordService(
        repository=record_repository,
        catalog_service=catalog_service,
        settings_service=settings_service,
    )
    stats_service = StatsService(
        repository=record_repository,
        catalog_service=catalog_service,
        settings_service=settings_service,
    )
    webhook_client = (
        HttpxSheetsWebhookClient.create(resolved_settings.sheets_webhook_url)
        if resolved_settings.sheets_webhook_url
        else None
    )
    backup_service = BackupService(
        repository=record_repository,
        catalog_service=catalog_service,
        client=webhook_client,
    )

    async def close_resources() -> None:
        if webhook_client is not None:
            await webhook_client.close()

    return AppContainer(
        settings=resolved_settings,
        catalog_service=catalog_service,
        settings_service=settings_service,
        record_service=record_service,
        stats_service=stats_service,
        backup_service=backup_service,
        close_resources=close_resources,
    )
