"""
Household and onboarding routes.

Onboarding steps:
1. Create household (settings start at step 2)
2. Household size
3. Risk, prep time and appetite preferences
4. Starter meals and foods, all rated green
5. Complete
"""

import logging

from fastapi import APIRouter, Depends

from mealwise.db import client as db
from mealwise.errors import ConflictError, InvalidInputError, NotFoundError
from mealwise.planning.models import ONBOARDING_COMPLETE_STEP
from mealwise.planning.ratings import ItemType, RatingBand
from mealwise.web.auth import AuthenticatedUser, require_user
from mealwise.web.schemas import (
    CreateHouseholdRequest,
    HouseholdSizeRequest,
    SettingsRequest,
    StarterItemsRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/households", tags=["households"])

# Minimum starter items before a plan can be generated
MIN_STARTER_ITEMS = 3


async def _settings_or_404(household_id: str) -> dict:
    household_settings = await db.get_household_settings(household_id)
    if household_settings is None:
        raise NotFoundError("Household not found")
    return household_settings


async def _update_settings(household_id: str, updates: dict) -> dict:
    updated = await db.update_household_settings(household_id, updates)
    if updated is None:
        raise NotFoundError("Household not found")
    return updated


@router.get("/me")
async def get_my_household(user: AuthenticatedUser = Depends(require_user)):
    """Get the household linked to the current user."""
    link = await db.get_household_for_user(user.id)
    if link is None:
        raise NotFoundError("No household yet")

    household = link.get("households") or {}
    return {
        "id": link["household_id"],
        "name": household.get("name"),
        "role": link.get("role"),
        "settings": await db.get_household_settings(link["household_id"]),
    }


@router.post("")
async def create_household(req: CreateHouseholdRequest, user: AuthenticatedUser = Depends(require_user)):
    """Onboarding step 1. Returns the existing household if there is one."""
    link = await db.get_household_for_user(user.id)
    if link is not None:
        return {"id": link["household_id"], "name": (link.get("households") or {}).get("name"), "created": False}

    household = await db.create_household(user.id, req.name)
    return {"id": household["id"], "name": household.get("name"), "created": True}


@router.get("/{household_id}/settings")
async def get_settings(household_id: str, user: AuthenticatedUser = Depends(require_user)):
    return await _settings_or_404(household_id)


@router.put("/{household_id}/settings")
async def update_settings(household_id: str, req: SettingsRequest, user: AuthenticatedUser = Depends(require_user)):
    """Update risk level, prep time and appetite."""
    return await _update_settings(household_id, req.model_dump())


# =============================================================================
# Onboarding
# =============================================================================

# Page each onboarding endpoint belongs to; finishing it moves to the next
STEP_SIZE = 2
STEP_PREFERENCES = 3
STEP_ITEMS = 4


async def _current_step(household_id: str, step: int) -> int:
    """
    Current onboarding step, if the household may still submit `step`.

    Raises:
        ConflictError: the household is already past `step`
    """
    household_settings = await _settings_or_404(household_id)
    current = household_settings.get("onboarding_step") or 0
    if current > step:
        raise ConflictError(f"Onboarding step {step} is already done (household is at step {current})")
    return current


@router.post("/{household_id}/onboarding/size")
async def onboarding_size(household_id: str, req: HouseholdSizeRequest, user: AuthenticatedUser = Depends(require_user)):
    current = await _current_step(household_id, STEP_SIZE)
    return await _update_settings(
        household_id,
        {"adults": req.adults, "children": req.children, "onboarding_step": max(current, STEP_SIZE + 1)},
    )


@router.post("/{household_id}/onboarding/preferences")
async def onboarding_preferences(
    household_id: str,
    req: SettingsRequest,
    user: AuthenticatedUser = Depends(require_user),
):
    current = await _current_step(household_id, STEP_PREFERENCES)
    return await _update_settings(
        household_id,
        {**req.model_dump(), "onboarding_step": max(current, STEP_PREFERENCES + 1)},
    )


@router.post("/{household_id}/onboarding/items")
async def onboarding_items(household_id: str, req: StarterItemsRequest, user: AuthenticatedUser = Depends(require_user)):
    """Add the meals and foods the family already eats, all rated green."""
    meals = [name.strip() for name in req.meals if name.strip()]
    foods = [name.strip() for name in req.foods if name.strip()]

    if len(meals) + len(foods) < MIN_STARTER_ITEMS:
        raise InvalidInputError(f"Add at least {MIN_STARTER_ITEMS} meals or foods your family enjoys")

    current = await _current_step(household_id, STEP_ITEMS)

    added = []
    for name in meals:
        added.append(await db.add_item(household_id, name, ItemType.MEAL, RatingBand.GREEN, created_by=user.id))
    for name in foods:
        added.append(await db.add_item(household_id, name, ItemType.FOOD, RatingBand.GREEN, created_by=user.id))

    await _update_settings(household_id, {"onboarding_step": max(current, STEP_ITEMS + 1)})
    logger.info(f"Household {household_id} onboarded with {len(added)} starter items")
    return {"items": added}


@router.post("/{household_id}/onboarding/complete")
async def onboarding_complete(household_id: str, user: AuthenticatedUser = Depends(require_user)):
    """Finish onboarding. Already-complete households are returned unchanged."""
    household_settings = await _settings_or_404(household_id)
    if (household_settings.get("onboarding_step") or 0) >= ONBOARDING_COMPLETE_STEP:
        return household_settings
    return await _update_settings(household_id, {"onboarding_step": ONBOARDING_COMPLETE_STEP})
