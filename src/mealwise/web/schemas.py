"""
Request models for the web API.

Fields accept both snake_case and the camelCase the frontend sends
(householdId, selectedDays, mealType, existingMeal, weekStart).
Required identifiers are optional here so that a missing one is reported as
a planner input error rather than a schema error.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from mealwise.planning.models import DaySelection, HouseholdPreferences
from mealwise.planning.ratings import ItemType


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# Plans
# =============================================================================


class GeneratePlanRequest(ApiModel):
    """Full-week generation, or a single-slot reshuffle when mode == "slot"."""
    household_id: str | None = None
    mode: Literal["week", "slot"] = "week"
    selected_days: dict[str, DaySelection] | None = None
    week_start: str | None = None
    persist: bool = True
    # Slot mode
    day: str | None = None
    meal_type: str | None = None
    existing_meal: str | None = None
    apply: bool = False
    learn: bool = True


class ReshuffleRequest(ApiModel):
    household_id: str | None = None
    day: str | None = None
    meal_type: str | None = None
    existing_meal: str | None = None
    week_start: str | None = None
    apply: bool = False
    learn: bool = True


class SwapSlotRequest(ApiModel):
    day: str
    meal_type: str
    meal: str


class CopyPreviousWeekRequest(ApiModel):
    household_id: str | None = None
    week_start: str | None = None


# =============================================================================
# Shopping Lists
# =============================================================================


class ShoppingListRequest(ApiModel):
    household_id: str | None = None
    week_start: str | None = None


class ShoppingItemCheck(ApiModel):
    category: str
    index: int = Field(ge=0)
    checked: bool


# =============================================================================
# Households & Items
# =============================================================================


class CreateHouseholdRequest(ApiModel):
    name: str | None = None


class HouseholdSizeRequest(ApiModel):
    """Onboarding step 2."""
    adults: int = Field(default=2, ge=1, le=12)
    children: int = Field(default=1, ge=0, le=12)


class StarterItemsRequest(ApiModel):
    """Onboarding step 4: meals and foods the family already likes."""
    meals: list[str] = Field(default_factory=list)
    foods: list[str] = Field(default_factory=list)


class SettingsRequest(HouseholdPreferences):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AddItemRequest(ApiModel):
    name: str
    type: ItemType = ItemType.MEAL
    rating: str = "green"


class RatingUpdateRequest(ApiModel):
    rating: str | None = None
    confidence_score: int | None = Field(default=None, ge=0, le=10)
    is_favourite: bool | None = None
