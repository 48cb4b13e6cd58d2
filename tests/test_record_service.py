"""Tests for the record service."""

from dataclasses import replace
from datetime import UTC, date, datetime

import pytest

from pet_health_tracker.domain.records import (
    DailyRecord,
    DirectIntake,
    EvaporationIntake,
    FoodIntakeEntry,
)
from pet_health_tracker.domain.settings import AppSettings
from pet_health_tracker.services.app_settings import AppSettingsService
from pet_health_tracker.services.records import RecordService
from tests.conftest import (
    InMemoryRecordRepository,
    InMemorySettingsRepository,
    make_catalog_service,
)


def _service(
    repository: InMemoryRecordRepository | None = None,
    settings: AppSettings | None = None,
) -> RecordService:
    return RecordService(
        repository=repository or InMemoryRecordRepository(),
        catalog_service=make_catalog_service(),
        settings_service=AppSettingsService(InMemorySettingsRepository(settings)),
    )


def test_save_keeps_one_record_per_day() -> None:
    repository = InMemoryRecordRepository()
    service = _service(repository)
    day = date(2024, 3, 1)

    first = service.save_record(DailyRecord(id="a", day=day, weight_kg=4.9))
    second = service.save_record(DailyRecord(id="b", day=day, weight_kg=5.0))

    assert len(repository.records) == 1
    assert second.id == first.id
    assert service.get_record(day).weight_kg == 5.0


def test_save_sets_modified_time_and_keeps_backup_time() -> None:
    repository = InMemoryRecordRepository()
    backed_up_at = datetime(2024, 3, 2, tzinfo=UTC)
    repository.put_record(
        DailyRecord(id="a", day=date(2024, 3, 1), last_backup_at=backed_up_at)
    )
    service = _service(repository)

    saved = service.save_record(
        DailyRecord(id="a", day=date(2024, 3, 1), notes="換砂")
    )

    assert saved.last_backup_at == backed_up_at
    assert saved.last_modified_at is not None
    assert saved.needs_backup


def test_save_rejects_negative_amounts() -> None:
    service = _service()

    with pytest.raises(ValueError):
        service.save_record(
            DailyRecord(
                id="a",
                day=date(2024, 3, 1),
                food_intakes=[FoodIntakeEntry("i1", "kibble", -5)],
            )
        )
    with pytest.raises(ValueError):
        service.save_record(
            DailyRecord(
                id="a",
                day=date(2024, 3, 1),
                water_intakes=[DirectIntake("w1", amount_ml=-1)],
            )
        )


def test_delete_record() -> None:
    service = _service()
    service.save_record(DailyRecord(id="a", day=date(2024, 3, 1)))

    assert service.delete_record(date(2024, 3, 1))
    assert not service.delete_record(date(2024, 3, 1))
    assert service.list_records() == []


def test_draft_for_new_day_prefills_defaults() -> None:
    service = _service(settings=AppSettings(default_evaporation_ml=12))

    draft = service.draft(date(2024, 3, 5))

    assert [(i.food_id, i.amount_g) for i in draft.food_intakes] == [("kibble", 30)]
    assert len(draft.water_intakes) == 1
    evaporation = draft.water_intakes[0]
    assert isinstance(evaporation, EvaporationIntake)
    assert evaporation.amount_ml == 12
    assert service.get_record(date(2024, 3, 5)) is None


def test_draft_for_existing_day_adds_zero_evaporation() -> None:
    repository = InMemoryRecordRepository()
    existing = DailyRecord(
        id="a",
        day=date(2024, 3, 1),
        water_intakes=[DirectIntake("w1", amount_ml=10)],
    )
    repository.put_record(existing)
    service = _service(repository, settings=AppSettings(default_evaporation_ml=12))

    draft = service.draft(date(2024, 3, 1))

    assert draft.id == "a"
    assert draft.food_intakes == []
    assert isinstance(draft.water_intakes[-1], EvaporationIntake)
    assert draft.water_intakes[-1].amount_ml == 0

    with_evaporation = replace(existing, water_intakes=draft.water_intakes)
    repository.put_record(with_evaporation)
    assert service.draft(date(2024, 3, 1)) == with_evaporation
