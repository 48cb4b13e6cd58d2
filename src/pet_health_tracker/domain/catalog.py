"""Domain models for the food catalog."""

from dataclasses import dataclass
from enum import Enum


class FoodCategory(Enum):
    """Canonical food categories.

    ``OTHER`` holds labels that match no known category. Such foods add
    calories and water but never side calories.
    """

    KIBBLE = "kibble"
    CANNED = "canned"
    SNACK = "snack"
    OTHER = "other"


_CATEGORY_ALIASES: dict[str, FoodCategory] = {
    "kibble": FoodCategory.KIBBLE,
    "飼料": FoodCategory.KIBBLE,
    "canned": FoodCategory.CANNED,
    "罐頭": FoodCategory.CANNED,
    "snack": FoodCategory.SNACK,
    "零食": FoodCategory.SNACK,
    # Retired side-dish category, merged into snacks.
    "side": FoodCategory.SNACK,
    "side_dish": FoodCategory.SNACK,
    "副食": FoodCategory.SNACK,
}


def parse_category(raw: object) -> FoodCategory:
    """Map a stored category label to a canonical category.

    Unrecognized labels map to ``OTHER``.
    """
    if isinstance(raw, FoodCategory):
        return raw
    label = str(raw or "").strip()
    if label in _CATEGORY_ALIASES:
        return _CATEGORY_ALIASES[label]
    return _CATEGORY_ALIASES.get(label.lower(), FoodCategory.OTHER)


@dataclass(frozen=True)
class FoodDefinition:
    """A catalog entry describing one food."""

    id: str
    name: str
    category: FoodCategory
    calories_per_gram: float
    water_content_percent: float
    order: int | None = None
    is_default: bool = False
    default_amount_g: float | None = None

    @property
    def is_snack(self) -> bool:
        """Return True when the food counts toward side calories."""
        return self.category is FoodCategory.SNACK


INITIAL_FOODS: tuple[FoodDefinition, ...] = (
    FoodDefinition("f1", "雞肉燉菜", FoodCategory.CANNED, 0.841, 85, order=0),
    FoodDefinition("f2", "鮪魚燉菜", FoodCategory.CANNED, 0.805, 84, order=1),
    FoodDefinition(
        "f3",
        "c/d stress",
        FoodCategory.KIBBLE,
        3.895,
        8,
        order=2,
        is_default=True,
        default_amount_g=30,
    ),
    FoodDefinition("f4", "LP34", FoodCategory.KIBBLE, 3.872, 7, order=3),
    FoodDefinition("f5", "LP34W", FoodCategory.CANNED, 0.816, 80.5, order=4),
    FoodDefinition("f6", "豹放鬆", FoodCategory.SNACK, 2.0, 60.5, order=5),
    FoodDefinition("f7", "雞胸肉", FoodCategory.SNACK, 1.19, 60, order=6),
)
