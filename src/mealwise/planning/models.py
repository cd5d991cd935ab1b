"""Pydantic models shared by the planning flow and the web layer."""

from typing import Literal

from pydantic import BaseModel, Field

PrepTime = Literal["quick", "standard", "any"]
Appetite = Literal["small", "medium", "large"]


class ShoppingItem(BaseModel):
    """One line on a shopping list."""
    name: str = Field(min_length=1)
    checked: bool = False


class HouseholdPreferences(BaseModel):
    """The three household scalars that steer plan generation."""
    risk_level: int = Field(default=5, ge=0, le=10)
    prep_time_preference: PrepTime = "standard"
    kids_appetite: Appetite = "medium"


class DaySelection(BaseModel):
    """Which slots of a day should be planned."""
    lunch: bool = False
    dinner: bool = False


# Defaults written when a household is created (onboarding step 1)
DEFAULT_SETTINGS: dict = {
    **HouseholdPreferences().model_dump(),
    "onboarding_step": 2,
}

ONBOARDING_COMPLETE_STEP = 99
