"""
Defensive merge of a generated plan onto its skeleton.

The skeleton decides the shape; the AI plan only supplies content for slots
the skeleton already has. Anything the model invented is dropped and any
requested slot it left empty gets the placeholder.
"""

from typing import Any

from mealwise.errors import InvalidInputError
from mealwise.planning.days import normalize_day_name
from mealwise.planning.skeleton import Skeleton

DEFAULT_PLACEHOLDER = "TBD"


def _index_ai_days(ai_plan: Any) -> dict[str, dict[str, Any]]:
    """Map canonical day name -> AI day object, ignoring keys that are not days."""
    indexed: dict[str, dict[str, Any]] = {}
    if not isinstance(ai_plan, dict):
        return indexed

    for key, value in ai_plan.items():
        if not isinstance(key, str) or not isinstance(value, dict):
            continue
        try:
            day = normalize_day_name(key)
        except InvalidInputError:
            continue
        # Exact canonical key wins over a case variant
        if day not in indexed or key == day:
            indexed[day] = value
    return indexed


def reconcile_plan(
    skeleton: Skeleton,
    ai_plan: Any,
    placeholder: str = DEFAULT_PLACEHOLDER,
) -> dict[str, dict[str, str]]:
    """
    Overlay an AI plan onto a skeleton, slot by slot.

    Returns:
        A plan with exactly the skeleton's days and slots
    """
    ai_days = _index_ai_days(ai_plan)
    plan: dict[str, dict[str, str]] = {}

    for day, slots in skeleton.items():
        ai_day = ai_days.get(day, {})
        plan[day] = {}
        for slot in slots:
            value = ai_day.get(slot)
            if isinstance(value, str) and value.strip():
                plan[day][slot] = value.strip()
            else:
                plan[day][slot] = placeholder

    return plan
