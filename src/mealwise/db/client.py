"""
Mealwise - Supabase Client.

Low-level database access. All queries go through here.
"""

import logging
from typing import Any

from supabase import Client, create_client

from mealwise.config import settings
from mealwise.db.request_context import get_access_token, get_current_user_id
from mealwise.errors import PersistenceError
from mealwise.planning.models import DEFAULT_SETTINGS
from mealwise.planning.ratings import ItemType, RatingBand

logger = logging.getLogger(__name__)

# Singleton service-role client
_service_client: Client | None = None

# item type -> (rating join table, foreign key column, item table)
RATING_TABLES: dict[ItemType, tuple[str, str, str]] = {
    ItemType.MEAL: ("household_meals", "meal_id", "meals"),
    ItemType.FOOD: ("household_foods", "food_id", "foods"),
}

# Starting confidence for newly added foods
DEFAULT_FOOD_CONFIDENCE = 7


def get_service_client() -> Client:
    """
    Get the service-role Supabase client.

    Uses singleton pattern to reuse connection. Bypasses row-level security,
    so only use it for auth validation and when no user token is available.
    """
    global _service_client

    if _service_client is None:
        _service_client = create_client(
            settings.supabase_url,
            settings.supabase_service_role_key,
        )

    return _service_client


def get_authenticated_client(access_token: str) -> Client:
    """Get a client that runs queries as the given user (RLS applies)."""
    client = create_client(settings.supabase_url, settings.supabase_anon_key)
    client.postgrest.auth(access_token)
    return client


def get_client() -> Client:
    """Get the client for the current request: the caller's if known, else service."""
    access_token = get_access_token()
    if access_token:
        return get_authenticated_client(access_token)
    return get_service_client()


def _first(response: Any) -> dict | None:
    """First row of a response, tolerating maybe_single() returning None."""
    if response is None or not response.data:
        return None
    if isinstance(response.data, list):
        return response.data[0]
    return response.data


def _write(description: str, query: Any) -> Any:
    """Execute a write, turning any store failure into PersistenceError."""
    try:
        return query.execute()
    except Exception as e:
        logger.error(f"Failed to {description}: {e}")
        raise PersistenceError(f"Failed to {description}")


# =============================================================================
# Household Operations
# =============================================================================


async def get_household_for_user(user_id: str) -> dict | None:
    """Get the household linked to a user, with its name."""
    client = get_client()
    response = (
        client.table("user_households")
        .select("household_id, role, households(id, name)")
        .eq("user_id", user_id)
        .limit(1)
        .execute()
    )
    return _first(response)


async def create_household(user_id: str, name: str | None = None) -> dict:
    """
    Create a household owned by the user, with default settings.

    Onboarding step 1: the settings row starts at step 2.
    """
    client = get_client()

    household = _first(_write("create household", client.table("households").insert({"name": name})))
    if household is None:
        raise PersistenceError("Failed to create household")

    _write(
        "link user to household",
        client.table("user_households").insert(
            {"user_id": user_id, "household_id": household["id"], "role": "owner"}
        ),
    )
    _write(
        "create household settings",
        client.table("household_settings").insert({"household_id": household["id"], **DEFAULT_SETTINGS}),
    )

    logger.info(f"Created household {household['id']} for user {user_id}")
    return household


async def get_household_settings(household_id: str) -> dict | None:
    """Get a household's settings row."""
    client = get_client()
    response = (
        client.table("household_settings")
        .select("*")
        .eq("household_id", household_id)
        .limit(1)
        .execute()
    )
    return _first(response)


async def update_household_settings(household_id: str, updates: dict) -> dict | None:
    """Update a household's settings. Returns the updated row, None if missing."""
    client = get_client()
    response = _write(
        "update household settings",
        client.table("household_settings").update(updates).eq("household_id", household_id),
    )
    return _first(response)


# =============================================================================
# Item & Rating Operations
# =============================================================================


async def get_meal_ratings(household_id: str) -> list[dict]:
    """Get household_meals rows joined with their meal (meals carry a type)."""
    client = get_client()
    response = (
        client.table("household_meals")
        .select("meal_id, rating, is_favourite, meals(id, name, type)")
        .eq("household_id", household_id)
        .execute()
    )
    return response.data or []


async def get_food_ratings(household_id: str) -> list[dict]:
    """Get household_foods rows joined with their food."""
    client = get_client()
    response = (
        client.table("household_foods")
        .select("food_id, rating, confidence_score, foods(id, name, category)")
        .eq("household_id", household_id)
        .execute()
    )
    return response.data or []


async def add_item(
    household_id: str,
    name: str,
    item_type: ItemType,
    rating: RatingBand = RatingBand.GREEN,
    created_by: str | None = None,
) -> dict:
    """Create a meal or food and rate it for the household."""
    client = get_client()
    rating_table, fk, item_table = RATING_TABLES[item_type]

    item_row: dict[str, Any] = {"name": name, "created_by": created_by or get_current_user_id()}
    if item_type == ItemType.MEAL:
        item_row["type"] = ItemType.MEAL.value

    item = _first(_write(f"create {item_type.value}", client.table(item_table).insert(item_row)))
    if item is None:
        raise PersistenceError(f"Failed to create {item_type.value}")

    rating_row: dict[str, Any] = {"household_id": household_id, fk: item["id"], "rating": rating.value}
    if item_type == ItemType.FOOD:
        rating_row["confidence_score"] = DEFAULT_FOOD_CONFIDENCE

    # One rating row per (household, item)
    try:
        _write(
            f"rate {item_type.value}",
            client.table(rating_table).upsert(rating_row, on_conflict=f"household_id,{fk}"),
        )
    except PersistenceError:
        # Leave no item behind that no household links to
        try:
            client.table(item_table).delete().eq("id", item["id"]).execute()
        except Exception as e:
            logger.error(f"Failed to remove unlinked {item_type.value} {item['id']}: {e}")
        raise

    return {**item, "type": item_type.value, "rating": rating.value}


async def update_item_rating(household_id: str, item_type: ItemType, item_id: str, updates: dict) -> dict | None:
    """Update a household's rating row for an item. Returns None if missing."""
    client = get_client()
    rating_table, fk, _ = RATING_TABLES[item_type]
    response = _write(
        f"update {item_type.value} rating",
        client.table(rating_table).update(updates).eq("household_id", household_id).eq(fk, item_id),
    )
    return _first(response)


async def delete_item_rating(household_id: str, item_type: ItemType, item_id: str) -> bool:
    """Remove an item from a household's ratings."""
    client = get_client()
    rating_table, fk, _ = RATING_TABLES[item_type]
    response = _write(
        f"delete {item_type.value} rating",
        client.table(rating_table).delete().eq("household_id", household_id).eq(fk, item_id),
    )
    return bool(response.data)


async def get_favourite_meals(household_id: str) -> list[dict]:
    """Get the household's favourite meals (swap candidates)."""
    client = get_client()
    response = (
        client.table("household_meals")
        .select("meals(id, name, type)")
        .eq("household_id", household_id)
        .eq("is_favourite", True)
        .execute()
    )
    return [
        {"id": row["meals"]["id"], "name": row["meals"]["name"]}
        for row in response.data or []
        if row.get("meals") and (row["meals"].get("type") or "meal") == ItemType.MEAL.value
    ]


# =============================================================================
# Weekly Plan Operations
# =============================================================================


async def get_weekly_plan(household_id: str, week_start: str) -> dict | None:
    """Get the stored plan object for a (household, week-start), or None."""
    client = get_client()
    response = (
        client.table("weekly_plans")
        .select("plan_json")
        .eq("household_id", household_id)
        .eq("week_start", week_start)
        .limit(1)
        .execute()
    )
    row = _first(response)
    return row.get("plan_json") if row else None


async def upsert_weekly_plan(household_id: str, week_start: str, plan: dict) -> None:
    """Store a plan, overwriting any existing plan for the same key."""
    client = get_client()
    _write(
        "save plan",
        client.table("weekly_plans").upsert(
            {"household_id": household_id, "week_start": week_start, "plan_json": plan},
            on_conflict="household_id,week_start",
        ),
    )


async def delete_weekly_plan(household_id: str, week_start: str) -> bool:
    """Delete the plan for a week ("start over")."""
    client = get_client()
    response = _write(
        "delete plan",
        client.table("weekly_plans").delete().eq("household_id", household_id).eq("week_start", week_start),
    )
    return bool(response.data)


# =============================================================================
# Shopping List Operations
# =============================================================================


async def get_shopping_list(household_id: str, week_start: str) -> dict | None:
    """Get the stored shopping list items for a week, or None."""
    client = get_client()
    response = (
        client.table("shopping_lists")
        .select("items")
        .eq("household_id", household_id)
        .eq("week_start", week_start)
        .limit(1)
        .execute()
    )
    row = _first(response)
    return row.get("items") if row else None


async def upsert_shopping_list(household_id: str, week_start: str, items: dict) -> None:
    """Store a shopping list, overwriting any existing list for the same key."""
    client = get_client()
    _write(
        "save shopping list",
        client.table("shopping_lists").upsert(
            {"household_id": household_id, "week_start": week_start, "items": items},
            on_conflict="household_id,week_start",
        ),
    )
