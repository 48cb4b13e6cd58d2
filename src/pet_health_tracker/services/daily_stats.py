"""Daily nutrition and hydration aggregation."""

from collections.abc import Iterable, Mapping

from pet_health_tracker.domain.catalog import FoodCategory, FoodDefinition
from pet_health_tracker.domain.records import (
    BowlIntake,
    DailyRecord,
    DirectIntake,
    EvaporationIntake,
)
from pet_health_tracker.domain.stats import CategoryShare, DailyStats

Catalog = Mapping[str, FoodDefinition] | Iterable[FoodDefinition]

BREAKDOWN_ROWS = (FoodCategory.KIBBLE, FoodCategory.CANNED, FoodCategory.SNACK)


def index_catalog(catalog: Catalog) -> Mapping[str, FoodDefinition]:
    """Return the catalog keyed by food id."""
    if isinstance(catalog, Mapping):
        return catalog
    return {food.id: food for food in catalog}


def bowl_consumed(entry: BowlIntake) -> float:
    """Net water drunk from a measured bowl, never below zero."""
    if entry.leftover_ml is None:
        return 0.0
    return max(0.0, entry.original_ml - entry.leftover_ml - entry.evaporation_ml)


def compute_daily_stats(record: DailyRecord, catalog: Catalog) -> DailyStats:
    """Aggregate calories and water for a record.

    Intakes that reference a food missing from the catalog contribute
    nothing. Pending bowls are counted but add no water. Evaporation entries
    are deducted from the bowl total, so ``drink_water`` and ``total_water``
    can end up negative.
    """
    foods = index_catalog(catalog)
    total_calories = 0.0
    side_calories = 0.0
    food_water = 0.0
    for intake in record.food_intakes:
        food = foods.get(intake.food_id)
        if food is None:
            continue
        calories = intake.amount_g * food.calories_per_gram
        total_calories += calories
        if food.is_snack:
            side_calories += calories
        food_water += intake.amount_g * food.water_content_percent / 100

    bowl_water = 0.0
    direct_water = 0.0
    pending_bowls = 0
    for entry in record.water_intakes:
        if isinstance(entry, BowlIntake):
            if entry.is_pending:
                pending_bowls += 1
            else:
                bowl_water += bowl_consumed(entry)
        elif isinstance(entry, DirectIntake):
            direct_water += entry.amount_ml
        elif isinstance(entry, EvaporationIntake):
            bowl_water -= entry.amount_ml

    drink_water = bowl_water + direct_water
    return DailyStats(
        total_calories=total_calories,
        side_calories=side_calories,
        food_water=food_water,
        drink_water=drink_water,
        total_water=food_water + drink_water,
        bowl_water=bowl_water,
        direct_water=direct_water,
        pending_bowls=pending_bowls,
    )


def category_breakdown(record: DailyRecord, catalog: Catalog) -> list[CategoryShare]:
    """Grams, calories and calorie share per food category.

    Foods of unknown category are listed in the snack row.
    """
    foods = index_catalog(catalog)
    grams: dict[FoodCategory, float] = dict.fromkeys(BREAKDOWN_ROWS, 0.0)
    calories: dict[FoodCategory, float] = dict.fromkeys(BREAKDOWN_ROWS, 0.0)
    for intake in record.food_intakes:
        food = foods.get(intake.food_id)
        if food is None:
            continue
        row = food.category if food.category in grams else FoodCategory.SNACK
        grams[row] += intake.amount_g
        calories[row] += intake.amount_g * food.calories_per_gram

    total = sum(calories.values()) or 1.0
    return [
        CategoryShare(
            category=category,
            grams=grams[category],
            calories=calories[category],
            percent=calories[category] / total * 100,
        )
        for category in BREAKDOWN_ROWS
        if grams[category] > 0
    ]


def snack_names(record: DailyRecord, catalog: Catalog) -> list[str]:
    """Unique names of snack foods eaten, in first-seen order."""
    foods = index_catalog(catalog)
    names: list[str] = []
    for intake in record.food_intakes:
        food = foods.get(intake.food_id)
        if food is not None and food.is_snack and food.name not in names:
            names.append(food.name)
    return names
