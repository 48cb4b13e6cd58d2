"""Tests for the catalog service."""

from dataclasses import replace

import pytest

from pet_health_tracker.domain.catalog import (
    INITIAL_FOODS,
    FoodCategory,
    FoodDefinition,
)
from pet_health_tracker.services.catalog import CatalogService
from tests.conftest import CANNED, KIBBLE, SNACK, InMemoryFoodRepository


def _service(*foods: FoodDefinition) -> CatalogService:
    repository = InMemoryFoodRepository()
    repository.put_foods(list(foods))
    return CatalogService(repository)


def test_empty_catalog_is_seeded() -> None:
    repository = InMemoryFoodRepository()
    service = CatalogService(repository)

    foods = service.list_foods()

    assert [food.id for food in foods] == [food.id for food in INITIAL_FOODS]
    assert len(repository.foods) == len(INITIAL_FOODS)
    assert service.default_food().name == "c/d stress"


def test_list_foods_sorted_by_order() -> None:
    service = _service(replace(SNACK, order=0), replace(KIBBLE, order=2), CANNED)

    assert [food.id for food in service.list_foods()] == ["snack", "canned", "kibble"]


def test_saving_default_clears_previous_default() -> None:
    service = _service(KIBBLE, CANNED)

    service.save_food(replace(CANNED, is_default=True, default_amount_g=85))

    catalog = service.catalog()
    assert catalog["canned"].is_default
    assert not catalog["kibble"].is_default
    assert service.default_food().id == "canned"


def test_new_food_is_placed_first() -> None:
    service = _service(KIBBLE, CANNED)
    new_food = FoodDefinition(
        id="new",
        name="鮪魚燉菜",
        category=FoodCategory.CANNED,
        calories_per_gram=0.805,
        water_content_percent=84,
    )

    saved = service.save_food(new_food)

    assert saved.order == -1
    assert service.list_foods()[0].id == "new"


def test_save_food_rejects_invalid_values() -> None:
    service = _service()

    with pytest.raises(ValueError):
        service.save_food(replace(KIBBLE, water_content_percent=120))
    with pytest.raises(ValueError):
        service.save_food(replace(KIBBLE, name="  "))


def test_delete_and_reorder() -> None:
    service = _service(KIBBLE, CANNED, SNACK)

    assert service.delete_food("canned")
    assert not service.delete_food("canned")

    reordered = service.reorder(["snack", "kibble"])

    assert [food.id for food in reordered] == ["snack", "kibble"]
