"""Shopping list routes."""

from fastapi import APIRouter, Depends

from mealwise.planning import service
from mealwise.web.auth import AuthenticatedUser, require_user
from mealwise.web.schemas import ShoppingItemCheck, ShoppingListRequest

router = APIRouter(prefix="/shopping-lists", tags=["shopping"])


@router.post("/generate")
async def generate_shopping_list(req: ShoppingListRequest, user: AuthenticatedUser = Depends(require_user)):
    """Build and save a shopping list from the week's stored plan."""
    return await service.generate_shopping_list(req.household_id, req.week_start)


@router.get("/{household_id}")
async def get_shopping_list(
    household_id: str,
    week_start: str | None = None,
    user: AuthenticatedUser = Depends(require_user),
):
    return await service.get_shopping_list(household_id, week_start)


@router.patch("/{household_id}/{week_start}/items")
async def check_item(
    household_id: str,
    week_start: str,
    req: ShoppingItemCheck,
    user: AuthenticatedUser = Depends(require_user),
):
    """Tick or untick one item."""
    return await service.set_shopping_item_checked(household_id, week_start, req.category, req.index, req.checked)
