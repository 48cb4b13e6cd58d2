"""Supabase implementation for the food catalog."""

from dataclasses import dataclass

from supabase import Client

from pet_health_tracker.domain.catalog import FoodDefinition, parse_category
from pet_health_tracker.services.catalog import FoodRepository


@dataclass
class SupabaseFoodRepository(FoodRepository):
    """Supabase-backed repository for food definitions."""

    client: Client

    def list_foods(self) -> list[FoodDefinition]:
        """Return every food definition."""
        response = self.client.table("foods").select("*").execute()
        return [_parse_food(row) for row in response.data or []]

    def get_food(self, food_id: str) -> FoodDefinition | None:
        """Return a food definition by id, if present."""
        response = (
            self.client.table("foods").select("*").eq("id", food_id).limit(1).execute()
        )
        if not response.data:
            return None
        return _parse_food(response.data[0])

    def put_food(self, food: FoodDefinition) -> FoodDefinition:
        """Create or replace a food definition."""
        response = self.client.table("foods").upsert(_serialize_food(food)).execute()
        if not response.data:
            raise RuntimeError("Failed to save food definition")
        return _parse_food(response.data[0])

    def put_foods(self, foods: list[FoodDefinition]) -> None:
        """Create or replace several food definitions in one request."""
        self.client.table("foods").upsert(
            [_serialize_food(food) for food in foods]
        ).execute()

    def delete_food(self, food_id: str) -> None:
        """Delete a food definition."""
        self.client.table("foods").delete().eq("id", food_id).execute()

    def update_orders(self, orders: dict[str, int]) -> None:
        """Update display order for each food id."""
        for food_id, order in orders.items():
            self.client.table("foods").update({"order": order}).eq(
                "id", food_id
            ).execute()


def _serialize_food(food: FoodDefinition) -> dict[str, object]:
    return {
        "id": food.id,
        "name": food.name,
        "category": food.category.value,
        "calories_per_gram": food.calories_per_gram,
        "water_content_percent": food.water_content_percent,
        "order": food.order,
        "is_default": food.is_default,
        "default_amount_g": food.default_amount_g,
    }


def _parse_food(row: dict[str, object]) -> FoodDefinition:
    """Parse a food row, normalizing legacy categories."""
    order_raw = row.get("order")
    default_amount_raw = row.get("default_amount_g")
    return FoodDefinition(
        id=str(row["id"]),
        name=str(row.get("name", "")),
        category=parse_category(row.get("category")),
        calories_per_gram=float(row.get("calories_per_gram") or 0.0),
        water_content_percent=float(row.get("water_content_percent") or 0.0),
        order=int(order_raw) if order_raw is not None else None,
        is_default=bool(row.get("is_default", False)),
        default_amount_g=(
            float(default_amount_raw) if default_amount_raw is not None else None
        ),
    )
