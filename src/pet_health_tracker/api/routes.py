"""Token-protected JSON API for records, catalog, settings and stats."""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo

import httpx
from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from pet_health_tracker.api.schemas import (
    BackupRequest,
    FoodOrderPayload,
    FoodPayload,
    RecordPayload,
    SettingsPayload,
    serialize_food,
    serialize_record,
    serialize_reminder,
    serialize_settings,
    serialize_summary,
    serialize_targets,
)

if TYPE_CHECKING:
    from pet_health_tracker.containers import AppContainer

logger = logging.getLogger(__name__)


def _get_api_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.api_token


async def require_token(
    x_api_token: str | None = Header(default=None),
    api_token: str = Depends(_get_api_token),
) -> None:
    """Ensure requests include a valid API token."""
    if not x_api_token or x_api_token != api_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


router = APIRouter(prefix="/api", tags=["api"], dependencies=[Depends(require_token)])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


def _today(container: AppContainer) -> date:
    return datetime.now(tz=ZoneInfo(container.settings.timezone)).date()


@router.get("/foods")
async def list_foods(request: Request) -> dict[str, object]:
    """Return the catalog in display order."""
    foods = _container(request).catalog_service.list_foods()
    return {"foods": [serialize_food(food) for food in foods]}


@router.put("/foods/{food_id}")
async def save_food(
    food_id: str, payload: FoodPayload, request: Request
) -> dict[str, object]:
    """Create or update a food definition."""
    saved = _container(request).catalog_service.save_food(payload.to_domain(food_id))
    return serialize_food(saved)


@router.delete("/foods/{food_id}")
async def delete_food(food_id: str, request: Request) -> dict[str, str]:
    """Delete a food definition."""
    if not _container(request).catalog_service.delete_food(food_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return {"status": "deleted"}


@router.post("/foods/order")
async def reorder_foods(
    payload: FoodOrderPayload, request: Request
) -> dict[str, object]:
    """Persist a new display order."""
    foods = _container(request).catalog_service.reorder(payload.food_ids)
    return {"foods": [serialize_food(food) for food in foods]}


@router.get("/records")
async def list_records(request: Request) -> dict[str, object]:
    """Return every record in chronological order."""
    records = _container(request).record_service.list_records()
    return {"records": [serialize_record(record) for record in records]}


@router.get("/records/{day}")
async def get_record(day: date, request: Request) -> dict[str, object]:
    """Return the record for a date."""
    record = _container(request).record_service.get_record(day)
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return serialize_record(record)


@router.get("/records/{day}/draft")
async def get_draft(day: date, request: Request) -> dict[str, object]:
    """Return the pre-filled record to edit for a date."""
    return serialize_record(_container(request).record_service.draft(day))


@router.put("/records/{day}")
async def save_record(
    day: date, payload: RecordPayload, request: Request
) -> dict[str, object]:
    """Save the record for a date."""
    saved = _container(request).record_service.save_record(payload.to_domain(day))
    return serialize_record(saved)


@router.delete("/records/{day}")
async def delete_record(day: date, request: Request) -> dict[str, str]:
    """Delete the record for a date."""
    if not _container(request).record_service.delete_record(day):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return {"status": "deleted"}


@router.get("/settings")
async def get_settings(request: Request) -> dict[str, object]:
    """Return app settings."""
    return serialize_settings(_container(request).settings_service.get())


@router.put("/settings")
async def save_settings(
    payload: SettingsPayload, request: Request
) -> dict[str, object]:
    """Save app settings."""
    saved = _container(request).settings_service.save(payload.to_domain())
    return serialize_settings(saved)


@router.get("/stats/{day}")
async def day_stats(day: date, request: Request) -> dict[str, object]:
    """Return derived statistics and alerts for a date."""
    summary = _container(request).stats_service.get_day(day)
    if summary is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return serialize_summary(summary)


@router.get("/history")
async def history(
    request: Request, end: date | None = None, days: int = 7
) -> dict[str, object]:
    """Return summaries for the days ending at ``end`` (today by default)."""
    container = _container(request)
    summaries = container.stats_service.get_history(end or _today(container), days)
    return {"days": [serialize_summary(summary) for summary in summaries]}


@router.get("/health-targets")
async def health_targets(request: Request) -> dict[str, object]:
    """Return energy and water targets."""
    return serialize_targets(_container(request).stats_service.get_targets())


@router.get("/reminders")
async def reminders(request: Request) -> dict[str, object]:
    """Return litter, medication and feeder reminder status."""
    container = _container(request)
    statuses = container.stats_service.get_reminders(_today(container))
    return {"reminders": [serialize_reminder(entry) for entry in statuses]}


@router.get("/backup/pending")
async def pending_backup(
    request: Request, start: date, end: date
) -> dict[str, object]:
    """Return records in range that still need to be backed up."""
    records = _container(request).backup_service.pending(start, end)
    return {
        "count": len(records),
        "dates": [record.day.isoformat() for record in records],
    }


@router.post("/backup")
async def upload_backup(payload: BackupRequest, request: Request) -> dict[str, object]:
    """Upload records in range to the spreadsheet."""
    backup_service = _container(request).backup_service
    try:
        uploaded = await backup_service.upload(payload.start, payload.end)
    except (httpx.HTTPError, RuntimeError) as exc:
        logger.exception("Backup upload failed")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)
        ) from exc
    return {"status": "ok", "uploaded": uploaded}
