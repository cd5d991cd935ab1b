"""
Meal and food rating routes.

Items are listed grouped by rating band; PATCH changes rating, food
confidence or meal favourite status.
"""

from fastapi import APIRouter, Depends

from mealwise.db import client as db
from mealwise.errors import InvalidInputError, NotFoundError
from mealwise.planning.ratings import ItemType, build_rating_update, describe_rating_rows, parse_rating
from mealwise.web.auth import AuthenticatedUser, require_user
from mealwise.web.schemas import AddItemRequest, RatingUpdateRequest

router = APIRouter(prefix="/households/{household_id}", tags=["items"])


@router.get("/items")
async def list_items(household_id: str, user: AuthenticatedUser = Depends(require_user)):
    """All rated meals and foods, grouped by band."""
    return {
        "meals": describe_rating_rows(await db.get_meal_ratings(household_id)),
        "foods": describe_rating_rows(await db.get_food_ratings(household_id)),
    }


@router.post("/items")
async def add_item(household_id: str, req: AddItemRequest, user: AuthenticatedUser = Depends(require_user)):
    name = req.name.strip()
    if not name:
        raise InvalidInputError("Item name cannot be blank")

    return await db.add_item(household_id, name, req.type, parse_rating(req.rating), created_by=user.id)


@router.patch("/items/{item_type}/{item_id}")
async def update_item(
    household_id: str,
    item_type: ItemType,
    item_id: str,
    req: RatingUpdateRequest,
    user: AuthenticatedUser = Depends(require_user),
):
    updates = build_rating_update(item_type, req.rating, req.confidence_score, req.is_favourite)
    updated = await db.update_item_rating(household_id, item_type, item_id, updates)
    if updated is None:
        raise NotFoundError(f"No {item_type.value} {item_id} in this household")
    return updated


@router.delete("/items/{item_type}/{item_id}")
async def delete_item(
    household_id: str,
    item_type: ItemType,
    item_id: str,
    user: AuthenticatedUser = Depends(require_user),
):
    if not await db.delete_item_rating(household_id, item_type, item_id):
        raise NotFoundError(f"No {item_type.value} {item_id} in this household")
    return {"success": True}


@router.get("/favourites")
async def list_favourites(household_id: str, user: AuthenticatedUser = Depends(require_user)):
    """Favourite meals, offered when swapping a slot."""
    return {"favourites": await db.get_favourite_meals(household_id)}
