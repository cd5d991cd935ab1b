"""
Learning from rejected meals.

When a household reshuffles a meal away, every known food whose name shows
up in the rejected meal loses a point of confidence, and its rating band is
re-derived from the new score. Substring matching only; this is a nudge, not
an exact attribution.
"""

import logging
from typing import Any, Iterable

from mealwise.db import client as db
from mealwise.planning.ratings import ItemType, band_for_confidence, clamp_score

logger = logging.getLogger(__name__)

# Assumed confidence for foods that were never scored
DEFAULT_CONFIDENCE = 5


def foods_mentioned(meal: str, food_rows: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    """Food rating rows whose food name appears in the meal text."""
    meal_text = (meal or "").lower()
    mentioned = []
    for row in food_rows or []:
        name = ((row.get("foods") or {}).get("name") or "").strip().lower()
        if name and name in meal_text:
            mentioned.append(row)
    return mentioned


def lowered_confidence(row: dict[str, Any]) -> int:
    current = row.get("confidence_score")
    if current is None:
        current = DEFAULT_CONFIDENCE
    return clamp_score(current - 1)


async def downgrade_rejected_foods(household_id: str, rejected_meal: str) -> list[dict]:
    """
    Lower confidence for foods appearing in a rejected meal.

    Returns:
        The updated household_foods rows
    """
    rows = await db.get_food_ratings(household_id)
    updated = []

    for row in foods_mentioned(rejected_meal, rows):
        score = lowered_confidence(row)
        band = band_for_confidence(score)
        result = await db.update_item_rating(
            household_id,
            ItemType.FOOD,
            row["food_id"],
            {"confidence_score": score, "rating": band.value},
        )
        logger.info(
            f"Rejected meal {rejected_meal!r}: {row['foods']['name']} confidence -> {score} ({band.value})"
        )
        if result:
            updated.append(result)

    return updated
