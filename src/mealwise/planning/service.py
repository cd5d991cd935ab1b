"""
Plan and shopping list orchestration.

Weekly plan flow, one synchronous pass per request:
ratings -> skeleton -> prompt -> generation -> parse -> reconcile -> persist.
Any failure ends the request; nothing is retried.
"""

import copy
import logging
from typing import Any, Mapping

from mealwise.config import settings
from mealwise.db import client as db
from mealwise.errors import (
    ConflictError,
    InvalidInputError,
    MissingInputError,
    NoEligibleItemsError,
    NotFoundError,
)
from mealwise.llm import client as llm
from mealwise.planning.days import (
    get_week_start,
    normalize_day_name,
    normalize_slot,
    parse_week_start,
    previous_week,
)
from mealwise.planning.learning import downgrade_rejected_foods
from mealwise.planning.parsing import (
    extract_plan_object,
    parse_json_response,
    parse_shopping_list_response,
    parse_slot_response,
)
from mealwise.planning.prompts import full_plan_prompt, shopping_list_prompt, slot_prompt
from mealwise.planning.ratings import PlanningPreferences
from mealwise.planning.reconcile import reconcile_plan
from mealwise.planning.skeleton import build_skeleton, count_slots

logger = logging.getLogger(__name__)


def _require(value: Any, name: str) -> str:
    if value is None or not str(value).strip():
        raise MissingInputError(f"Missing {name}")
    return str(value).strip()


def _resolve_week(week_start: str | None) -> str:
    return parse_week_start(week_start) if week_start else get_week_start()


def _require_slot(plan: dict | None, day: str, slot: str) -> dict:
    """Return the stored plan if it has the slot; slots are never added."""
    if plan is None:
        raise NotFoundError("No plan found for this week")
    if slot not in (plan.get(day) or {}):
        raise NotFoundError(f"{day} {slot} is not part of this plan")
    return plan


async def load_planning_preferences(household_id: str) -> PlanningPreferences:
    """Read a household's ratings and settings into planning preferences."""
    meal_rows = await db.get_meal_ratings(household_id)
    food_rows = await db.get_food_ratings(household_id)
    household_settings = await db.get_household_settings(household_id)
    return PlanningPreferences.from_rows(meal_rows, food_rows, household_settings)


async def _eligible_preferences(household_id: str) -> PlanningPreferences:
    prefs = await load_planning_preferences(household_id)
    if not prefs.eligible_items:
        raise NoEligibleItemsError("No green meals or foods to plan from. Rate some items green first.")
    return prefs


# =============================================================================
# Weekly Plans
# =============================================================================


async def generate_week_plan(
    household_id: str,
    selected_days: Mapping[str, Any] | None,
    week_start: str | None = None,
    persist: bool = True,
) -> dict:
    """
    Generate a weekly plan for the requested days and slots.

    Args:
        household_id: Household to plan for
        selected_days: day -> {"lunch": bool, "dinner": bool}
        week_start: Any date in the target week (default: current week)
        persist: Upsert the result under (household, week-start)

    Returns:
        {"plan": {...}, "week_start": "YYYY-MM-DD"}
    """
    household_id = _require(household_id, "householdId")
    if not selected_days:
        raise MissingInputError("Missing selectedDays")

    skeleton = build_skeleton(selected_days)
    if not skeleton:
        raise MissingInputError("Please select at least one meal.")

    week = _resolve_week(week_start)
    prefs = await _eligible_preferences(household_id)

    text = llm.complete(full_plan_prompt(prefs, skeleton), "plan")
    ai_plan = extract_plan_object(parse_json_response(text))
    plan = reconcile_plan(skeleton, ai_plan, placeholder=settings.plan_placeholder)

    if persist:
        await db.upsert_weekly_plan(household_id, week, plan)

    logger.info(f"Generated plan for household {household_id}, week {week}: {count_slots(skeleton)} slots")
    return {"plan": plan, "week_start": week}


async def reshuffle_slot(
    household_id: str,
    day: str,
    meal_type: str,
    existing_meal: str,
    week_start: str | None = None,
    apply: bool = False,
    learn: bool = True,
) -> dict:
    """
    Ask for one replacement meal for a single slot.

    Args:
        learn: Lower confidence for foods named in the rejected meal
        apply: Also write the replacement into the stored plan

    Returns:
        {"meal": "..."}
    """
    household_id = _require(household_id, "householdId")
    day = normalize_day_name(_require(day, "day"))
    slot = normalize_slot(_require(meal_type, "mealType"))
    existing_meal = _require(existing_meal, "existingMeal")

    # The target slot must exist before anything is generated or learned
    if apply:
        week = _resolve_week(week_start)
        plan = _require_slot(await db.get_weekly_plan(household_id, week), day, slot)

    prefs = await _eligible_preferences(household_id)

    text = llm.complete(slot_prompt(prefs, existing_meal, day, slot), "slot")
    meal = parse_slot_response(text)
    if meal.lower() == existing_meal.lower():
        logger.warning(f"Reshuffle for {day} {slot} returned the same meal: {meal!r}")

    if apply:
        updated = copy.deepcopy(plan)
        updated[day][slot] = meal
        await db.upsert_weekly_plan(household_id, week, updated)

    if learn:
        try:
            await downgrade_rejected_foods(household_id, existing_meal)
        except Exception as e:
            logger.warning(f"Failed to learn from rejected meal {existing_meal!r}: {e}")

    return {"meal": meal}


async def get_plan(household_id: str, week_start: str | None = None) -> dict:
    """Load the stored plan for a week ({"plan": None} when there is none)."""
    household_id = _require(household_id, "householdId")
    week = _resolve_week(week_start)
    plan = await db.get_weekly_plan(household_id, week)
    return {"plan": plan, "week_start": week}


async def swap_slot(household_id: str, week_start: str, day: str, meal_type: str, meal: str) -> dict:
    """
    Replace the meal in one existing slot of a stored plan.

    Only slots already in the plan can be changed; none are added.
    """
    household_id = _require(household_id, "householdId")
    week = parse_week_start(_require(week_start, "weekStart"))
    day = normalize_day_name(_require(day, "day"))
    slot = normalize_slot(_require(meal_type, "mealType"))
    if not meal or not meal.strip():
        raise InvalidInputError("Meal name cannot be blank")
    meal = meal.strip()

    plan = _require_slot(await db.get_weekly_plan(household_id, week), day, slot)

    updated = copy.deepcopy(plan)
    updated[day][slot] = meal
    await db.upsert_weekly_plan(household_id, week, updated)

    return {"plan": updated, "week_start": week}


async def copy_previous_week(household_id: str, week_start: str | None = None) -> dict:
    """Copy last week's plan into a week that has no plan yet."""
    household_id = _require(household_id, "householdId")
    week = _resolve_week(week_start)

    if await db.get_weekly_plan(household_id, week) is not None:
        raise ConflictError("This week already has a plan. Start over first if you want to replace it.")

    previous = await db.get_weekly_plan(household_id, previous_week(week))
    if previous is None:
        raise NotFoundError("No plan found for last week")

    plan = copy.deepcopy(previous)
    await db.upsert_weekly_plan(household_id, week, plan)
    return {"plan": plan, "week_start": week}


async def delete_plan(household_id: str, week_start: str) -> dict:
    """Delete a week's plan ("start over")."""
    household_id = _require(household_id, "householdId")
    week = parse_week_start(_require(week_start, "weekStart"))

    if not await db.delete_weekly_plan(household_id, week):
        raise NotFoundError("No plan found for this week")
    return {"success": True, "week_start": week}


# =============================================================================
# Shopping Lists
# =============================================================================


async def generate_shopping_list(household_id: str, week_start: str) -> dict:
    """Derive a categorised shopping list from a week's stored plan and save it."""
    if not household_id or not week_start:
        raise MissingInputError("Missing householdId or weekStart")
    week = parse_week_start(week_start)

    plan = await db.get_weekly_plan(household_id, week)
    if not plan:
        raise NotFoundError("No plan found for this week")

    text = llm.complete(shopping_list_prompt(plan), "shopping_list")
    items = parse_shopping_list_response(text)

    await db.upsert_shopping_list(household_id, week, items)
    logger.info(f"Generated shopping list for household {household_id}, week {week}")
    return {"items": items, "week_start": week}


async def get_shopping_list(household_id: str, week_start: str | None = None) -> dict:
    household_id = _require(household_id, "householdId")
    week = _resolve_week(week_start)
    items = await db.get_shopping_list(household_id, week)
    return {"items": items, "week_start": week}


async def set_shopping_item_checked(
    household_id: str,
    week_start: str,
    category: str,
    index: int,
    checked: bool,
) -> dict:
    """Tick or untick one shopping list item."""
    household_id = _require(household_id, "householdId")
    week = parse_week_start(_require(week_start, "weekStart"))

    items = await db.get_shopping_list(household_id, week)
    if items is None:
        raise NotFoundError("No shopping list found for this week")

    entries = items.get(category)
    if entries is None:
        raise NotFoundError(f"Unknown category: {category}")
    if not 0 <= index < len(entries):
        raise NotFoundError(f"No item {index} in {category}")

    updated = copy.deepcopy(items)
    updated[category][index]["checked"] = checked
    await db.upsert_shopping_list(household_id, week, updated)
    return {"items": updated, "week_start": week}
