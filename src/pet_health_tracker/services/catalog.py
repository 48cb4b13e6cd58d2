"""Services for managing the food catalog."""

import logging
from dataclasses import dataclass, replace
from typing import Protocol

from pet_health_tracker.domain.catalog import INITIAL_FOODS, FoodDefinition

_logger = logging.getLogger(__name__)


class FoodRepository(Protocol):
    """Persistence interface for the food catalog."""

    def list_foods(self) -> list[FoodDefinition]:
        """Return every food definition."""

    def get_food(self, food_id: str) -> FoodDefinition | None:
        """Return a food definition by id, if present."""

    def put_food(self, food: FoodDefinition) -> FoodDefinition:
        """Create or replace a food definition."""

    def put_foods(self, foods: list[FoodDefinition]) -> None:
        """Create or replace several food definitions at once."""

    def delete_food(self, food_id: str) -> None:
        """Delete a food definition."""

    def update_orders(self, orders: dict[str, int]) -> None:
        """Update the display order of foods by id."""


@dataclass
class CatalogService:
    """Application service for catalog operations."""

    repository: FoodRepository

    def list_foods(self) -> list[FoodDefinition]:
        """Return foods in display order, seeding an empty catalog."""
        foods = self.repository.list_foods()
        if not foods:
            foods = list(INITIAL_FOODS)
            self.repository.put_foods(foods)
            _logger.info("Seeded empty food catalog with %s foods", len(foods))
        return _sorted(foods)

    def catalog(self) -> dict[str, FoodDefinition]:
        """Return the catalog keyed by food id."""
        return {food.id: food for food in self.list_foods()}

    def default_food(self) -> FoodDefinition | None:
        """Return the food pre-filled on new days, if any."""
        return next((food for food in self.list_foods() if food.is_default), None)

    def save_food(self, food: FoodDefinition) -> FoodDefinition:
        """Create or update a food.

        Marking a food as default clears the flag on the previous default. A
        new food without an order is placed before every existing food.
        """
        _validate(food)
        foods = self.repository.list_foods()
        if food.is_default:
            for other in foods:
                if other.is_default and other.id != food.id:
                    self.repository.put_food(replace(other, is_default=False))
        is_new = all(other.id != food.id for other in foods)
        if is_new and food.order is None:
            lowest = min((other.order or 0 for other in foods), default=0)
            food = replace(food, order=min(lowest, 0) - 1)
        saved = self.repository.put_food(food)
        _logger.info("Saved food %s (%s)", saved.id, saved.name)
        return saved

    def delete_food(self, food_id: str) -> bool:
        """Delete a food; records that reference it keep the dangling id."""
        if self.repository.get_food(food_id) is None:
            return False
        self.repository.delete_food(food_id)
        _logger.info("Deleted food %s", food_id)
        return True

    def reorder(self, food_ids: list[str]) -> list[FoodDefinition]:
        """Persist a new display order given as a list of ids."""
        self.repository.update_orders(
            {food_id: index for index, food_id in enumerate(food_ids)}
        )
        return self.list_foods()


def _sorted(foods: list[FoodDefinition]) -> list[FoodDefinition]:
    return sorted(foods, key=lambda food: food.order or 0)


def _validate(food: FoodDefinition) -> None:
    if not food.name.strip():
        raise ValueError("Food name must not be empty")
    if food.calories_per_gram < 0:
        raise ValueError("Calories per gram must not be negative")
    if not 0 <= food.water_content_percent <= 100:  # noqa: PLR2004
        raise ValueError("Water content must be between 0 and 100 percent")
    if food.default_amount_g is not None and food.default_amount_g < 0:
        raise ValueError("Default amount must not be negative")
