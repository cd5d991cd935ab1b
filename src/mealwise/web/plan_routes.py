"""
Weekly plan routes.

Generate, reshuffle, swap, copy and delete plans keyed by
(household, week-start).
"""

from fastapi import APIRouter, Depends

from mealwise.planning import service
from mealwise.web.auth import AuthenticatedUser, require_user
from mealwise.web.schemas import (
    CopyPreviousWeekRequest,
    GeneratePlanRequest,
    ReshuffleRequest,
    SwapSlotRequest,
)

router = APIRouter(prefix="/plans", tags=["plans"])


@router.post("/generate")
async def generate_plan(req: GeneratePlanRequest, user: AuthenticatedUser = Depends(require_user)):
    """
    Generate a weekly plan, or one replacement meal in slot mode.

    Full-week mode returns {"plan", "week_start"}; slot mode returns {"meal"}.
    """
    if req.mode == "slot":
        return await service.reshuffle_slot(
            req.household_id,
            req.day,
            req.meal_type,
            req.existing_meal,
            week_start=req.week_start,
            apply=req.apply,
            learn=req.learn,
        )

    return await service.generate_week_plan(
        req.household_id,
        req.selected_days,
        week_start=req.week_start,
        persist=req.persist,
    )


@router.post("/reshuffle")
async def reshuffle(req: ReshuffleRequest, user: AuthenticatedUser = Depends(require_user)):
    """Ask for a different meal for one slot."""
    return await service.reshuffle_slot(
        req.household_id,
        req.day,
        req.meal_type,
        req.existing_meal,
        week_start=req.week_start,
        apply=req.apply,
        learn=req.learn,
    )


@router.post("/copy-previous")
async def copy_previous(req: CopyPreviousWeekRequest, user: AuthenticatedUser = Depends(require_user)):
    """Copy last week's plan into a week without one."""
    return await service.copy_previous_week(req.household_id, req.week_start)


@router.get("/{household_id}")
async def get_plan(household_id: str, week_start: str | None = None, user: AuthenticatedUser = Depends(require_user)):
    """Get the plan for a week (current week by default)."""
    return await service.get_plan(household_id, week_start)


@router.patch("/{household_id}/{week_start}/slots")
async def swap_slot(
    household_id: str,
    week_start: str,
    req: SwapSlotRequest,
    user: AuthenticatedUser = Depends(require_user),
):
    """Swap the meal in one slot (e.g. for a favourite)."""
    return await service.swap_slot(household_id, week_start, req.day, req.meal_type, req.meal)


@router.delete("/{household_id}/{week_start}")
async def delete_plan(household_id: str, week_start: str, user: AuthenticatedUser = Depends(require_user)):
    """Delete a week's plan so it can be generated again."""
    return await service.delete_plan(household_id, week_start)
