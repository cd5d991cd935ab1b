"""
Rating classification.

Households rate items (meals and foods) green, amber or red. Join rows from
household_meals / household_foods are classified into per-band name lists
that feed the planning prompts.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable

from mealwise.errors import InvalidInputError

logger = logging.getLogger(__name__)


class RatingBand(str, Enum):
    """Household acceptance tier for an item."""

    GREEN = "green"  # safe
    AMBER = "amber"  # sometimes acceptable
    RED = "red"  # avoid


class ItemType(str, Enum):
    MEAL = "meal"  # composite dish
    FOOD = "food"  # ingredient


# Older rows were written with "neutral" before amber existed
_RATING_ALIASES = {"neutral": RatingBand.AMBER}


def parse_rating(value: str | None) -> RatingBand:
    """
    Parse a stored or submitted rating value.

    Raises:
        InvalidInputError: if the value is not a known rating
    """
    key = (value or "").strip().lower()
    if key in _RATING_ALIASES:
        return _RATING_ALIASES[key]
    try:
        return RatingBand(key)
    except ValueError:
        raise InvalidInputError(f"Unknown rating: {value!r}")


def clamp_score(score: int | float) -> int:
    return max(0, min(10, int(score)))


def band_for_confidence(score: int | float) -> RatingBand:
    """Derive the rating band from a 0-10 confidence score."""
    score = clamp_score(score)
    if score <= 3:
        return RatingBand.RED
    if score <= 6:
        return RatingBand.AMBER
    return RatingBand.GREEN


@dataclass
class RatedItems:
    """Item names grouped by rating band."""

    green: list[str] = field(default_factory=list)
    amber: list[str] = field(default_factory=list)
    red: list[str] = field(default_factory=list)

    def bucket(self, band: RatingBand) -> list[str]:
        return getattr(self, band.value)

    def to_dict(self) -> dict[str, list[str]]:
        return {"green": self.green, "amber": self.amber, "red": self.red}


def _row_item(row: dict[str, Any]) -> tuple[dict[str, Any] | None, ItemType | None]:
    """Pull the joined item and its type out of a rating row."""
    if row.get("meals"):
        item = row["meals"]
        try:
            return item, ItemType(item.get("type") or ItemType.MEAL.value)
        except ValueError:
            return item, None
    if row.get("foods"):
        return row["foods"], ItemType.FOOD
    return None, None


def classify_items(rows: Iterable[dict[str, Any]], item_type: ItemType | str) -> RatedItems:
    """
    Classify rating join rows into green/amber/red name lists.

    Only rows whose item has `item_type` are kept. Order follows the input;
    blank names and case-insensitive duplicates are dropped.
    """
    item_type = ItemType(item_type)
    result = RatedItems()
    seen: set[str] = set()

    for row in rows or []:
        item, row_type = _row_item(row)
        if item is None or row_type != item_type:
            continue

        name = (item.get("name") or "").strip()
        if not name or name.lower() in seen:
            continue

        try:
            band = parse_rating(row.get("rating"))
        except InvalidInputError:
            logger.warning(f"Skipping {name!r}: unknown rating {row.get('rating')!r}")
            continue

        seen.add(name.lower())
        result.bucket(band).append(name)

    return result


@dataclass
class PlanningPreferences:
    """Everything about a household the planning prompts need."""

    meals: RatedItems = field(default_factory=RatedItems)
    foods: RatedItems = field(default_factory=RatedItems)
    risk_level: int = 5
    prep_time: str = "standard"  # quick | standard | any
    appetite: str = "medium"  # small | medium | large

    @property
    def eligible_items(self) -> list[str]:
        """Green meals and foods - what a plan can safely be built from."""
        return self.meals.green + self.foods.green

    @classmethod
    def from_rows(
        cls,
        meal_rows: Iterable[dict[str, Any]],
        food_rows: Iterable[dict[str, Any]],
        household_settings: dict[str, Any] | None,
    ) -> "PlanningPreferences":
        """Build preferences from rating join rows and a household_settings row."""
        meal_rows = list(meal_rows or [])
        food_rows = list(food_rows or [])
        household_settings = household_settings or {}

        risk = household_settings.get("risk_level")
        return cls(
            meals=classify_items(meal_rows, ItemType.MEAL),
            # Foods can be rated through either join table
            foods=classify_items(meal_rows + food_rows, ItemType.FOOD),
            risk_level=clamp_score(5 if risk is None else risk),
            prep_time=household_settings.get("prep_time_preference") or "standard",
            appetite=household_settings.get("kids_appetite") or "medium",
        )


def build_rating_update(
    item_type: ItemType | str,
    rating: str | None = None,
    confidence_score: int | None = None,
    is_favourite: bool | None = None,
) -> dict[str, Any]:
    """
    Build the column updates for a household rating row.

    A confidence score without an explicit rating re-derives the band.
    Confidence scores belong to foods, favourites to meals.

    Raises:
        InvalidInputError: for unknown ratings, misplaced fields or no fields
    """
    item_type = ItemType(item_type)
    updates: dict[str, Any] = {}

    if confidence_score is not None:
        if item_type != ItemType.FOOD:
            raise InvalidInputError("Confidence scores apply to foods only")
        score = clamp_score(confidence_score)
        updates["confidence_score"] = score
        updates["rating"] = band_for_confidence(score).value

    if rating is not None:
        updates["rating"] = parse_rating(rating).value

    if is_favourite is not None:
        if item_type != ItemType.MEAL:
            raise InvalidInputError("Only meals can be favourites")
        updates["is_favourite"] = is_favourite

    if not updates:
        raise InvalidInputError("No fields to update")

    return updates


def describe_rating_rows(rows: Iterable[dict[str, Any]]) -> dict[str, list[dict[str, Any]]]:
    """
    Flatten rating join rows into item dicts grouped by band.

    Used for listing a household's meals or foods; rows with a missing item or
    unknown rating are left out.
    """
    grouped: dict[str, list[dict[str, Any]]] = {band.value: [] for band in RatingBand}

    for row in rows or []:
        item, row_type = _row_item(row)
        if item is None or row_type is None:
            continue
        try:
            band = parse_rating(row.get("rating"))
        except InvalidInputError:
            continue

        entry = {
            "id": item.get("id"),
            "name": item.get("name"),
            "type": row_type.value,
            "rating": band.value,
        }
        if "confidence_score" in row:
            entry["confidence_score"] = row.get("confidence_score")
        if "is_favourite" in row:
            entry["is_favourite"] = bool(row.get("is_favourite"))
        grouped[band.value].append(entry)

    return grouped
