"""
Plan skeleton builder.

The skeleton is the shape the caller asked for: only requested days, and in
each day only requested slots, each holding an empty placeholder. It is the
sole source of truth for the shape of the final plan.
"""

from typing import Any, Mapping

from mealwise.planning.days import DAYS, SLOTS, normalize_day_name

Skeleton = dict[str, dict[str, str]]


def _is_requested(config: Any, slot: str) -> bool:
    if isinstance(config, Mapping):
        return bool(config.get(slot))
    return bool(getattr(config, slot, False))


def build_skeleton(selected_days: Mapping[str, Any]) -> Skeleton:
    """
    Build a plan skeleton from a day -> {lunch, dinner} selection map.

    Day keys may use any casing; output is in canonical day order. Days with
    no requested slot are omitted entirely.

    Example:
        build_skeleton({"monday": {"lunch": True, "dinner": False}})
        # {"Monday": {"lunch": ""}}
    """
    by_day = {normalize_day_name(day): config for day, config in (selected_days or {}).items()}

    skeleton: Skeleton = {}
    for day in DAYS:
        config = by_day.get(day)
        if config is None:
            continue
        slots = {slot: "" for slot in SLOTS if _is_requested(config, slot)}
        if slots:
            skeleton[day] = slots
    return skeleton


def count_slots(skeleton: Skeleton) -> int:
    return sum(len(slots) for slots in skeleton.values())
