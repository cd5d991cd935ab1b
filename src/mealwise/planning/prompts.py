"""
Prompt templates for plan generation, slot reshuffles and shopping lists.

Plain string assembly; the model is told the exact JSON shape to return.
"""

import json
from typing import Any

from mealwise.planning.ratings import PlanningPreferences, RatedItems
from mealwise.planning.skeleton import Skeleton


def risk_explanation(risk: int) -> str:
    """One-line guidance on how adventurous substitutions may be."""
    if risk <= 2:
        return "Stick almost entirely to familiar foods the children already like."
    if risk <= 5:
        return "Mostly familiar foods, with very small variations."
    if risk <= 7:
        return "Mix familiar foods with a few gentle new ideas."
    return "Actively introduce new meals using familiar ingredients."


def _bullets(names: list[str]) -> str:
    if not names:
        return "- (none)"
    return "\n".join(f"- {name}" for name in names)


def _preference_block(label: str, items: RatedItems) -> str:
    return f"""GREEN {label} (very comfortable):
{_bullets(items.green)}

AMBER {label} (sometimes okay):
{_bullets(items.amber)}

RED {label} (generally disliked):
{_bullets(items.red)}"""


def _household_block(prefs: PlanningPreferences) -> str:
    return f"""RISK LEVEL: {prefs.risk_level}/10
{risk_explanation(prefs.risk_level)}

COOKING CONSTRAINTS:
- Prep time preference: {prefs.prep_time}
- Appetite size: {prefs.appetite}"""


def full_plan_prompt(prefs: PlanningPreferences, skeleton: Skeleton) -> str:
    """Prompt for filling every slot of a weekly plan skeleton."""
    return f"""
You are a family meal planner for young children.

Your job is to CREATE meals using meals and foods the family already likes,
while gently encouraging variety depending on the risk level.

IMPORTANT RULES:
- Prefer green meals and green foods as a base
- Amber items are allowed depending on risk
- Avoid red items unless the risk level is 8 or higher
- Combine foods into sensible, realistic, child-friendly meals
- Each meal should usually include 1 protein, 1 carb and 1-2 vegetables

FAMILY MEAL PREFERENCES:

{_preference_block("MEALS", prefs.meals)}

FAMILY FOOD PREFERENCES:

{_preference_block("FOODS", prefs.foods)}

{_household_block(prefs)}

HERE IS THE PLAN YOU MUST FILL:
{json.dumps(skeleton, indent=2)}

OUTPUT RULES:
- Return VALID JSON ONLY, with no commentary and no code fences
- Keep EXACTLY the same days and the same meals per day as the plan above
- Do not add or remove days, and do not add or remove lunch/dinner entries
- Fill every empty string with a meal name
- Use this exact format:

{{
  "mealPlan": {{
    "Monday": {{
      "lunch": "Meal name",
      "dinner": "Meal name"
    }}
  }}
}}
"""


def slot_prompt(
    prefs: PlanningPreferences,
    existing_meal: str,
    day: str,
    meal_type: str,
) -> str:
    """Prompt for a single replacement meal in one slot."""
    return f"""
You are helping reshuffle ONE meal in a weekly plan.

SLOT: {day} {meal_type}

CURRENT MEAL (do not repeat this):
"{existing_meal}"

GOAL:
Suggest ONE alternative meal that fits the family's preferences,
without repeating the same idea.

{_preference_block("MEALS", prefs.meals)}

{_preference_block("FOODS", prefs.foods)}

{_household_block(prefs)}

RULES:
- Create a meal from ingredients
- Prefer green items, use amber items only if appropriate
- Avoid red items unless the risk level is 8 or higher
- Meal must be realistic and child-friendly
- Do NOT repeat the existing meal

OUTPUT FORMAT (JSON ONLY, no commentary, no code fences):
{{ "meal": "Meal name" }}
"""


def shopping_list_prompt(plan: dict[str, Any]) -> str:
    """Prompt for turning a stored weekly plan into a shopping list."""
    return f"""
You are generating a family shopping list.

TASK:
- Convert the weekly meal plan into a shopping list
- Extract INGREDIENTS, not meals
- Group items into logical supermarket sections
- Keep quantities vague (no numbers)
- Avoid duplicates
- Family-friendly ingredients only

WEEKLY PLAN:
{json.dumps(plan, indent=2)}

OUTPUT FORMAT (JSON ONLY, no commentary, no code fences):
{{
  "Meat & Fish": [
    {{ "name": "Chicken breast", "checked": false }}
  ],
  "Vegetables": [
    {{ "name": "Carrots", "checked": false }}
  ],
  "Carbs": [
    {{ "name": "Rice", "checked": false }}
  ],
  "Dairy": [],
  "Other": []
}}
"""
