"""
Response normalization for provider output.

The provider returns free-form text that should contain JSON. Code fences are
stripped, the rest must parse strictly; anything else ends the request.
"""

import json
import logging
import re
from typing import Any

from mealwise.errors import MalformedResponseError
from mealwise.planning.models import ShoppingItem

logger = logging.getLogger(__name__)

_LEADING_FENCE = re.compile(r"^```[a-zA-Z]*[ \t]*\n?")
_TRAILING_FENCE = re.compile(r"\n?[ \t]*```$")


def strip_code_fences(text: str | None) -> str:
    """Remove a surrounding ``` / ```json fence and whitespace."""
    cleaned = (text or "").strip()
    cleaned = _LEADING_FENCE.sub("", cleaned, count=1)
    cleaned = _TRAILING_FENCE.sub("", cleaned, count=1)
    return cleaned.strip()


def parse_json_response(text: str | None) -> dict[str, Any]:
    """
    Parse provider text as a JSON object.

    Raises:
        MalformedResponseError: if the text is not JSON or not a JSON object.
            The raw text is logged, never put in the error message.
    """
    cleaned = strip_code_fences(text)
    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError:
        logger.error(f"Provider returned invalid JSON. Raw output: {text!r}")
        raise MalformedResponseError("AI returned invalid JSON")

    if not isinstance(parsed, dict):
        logger.error(f"Provider returned JSON that is not an object. Raw output: {text!r}")
        raise MalformedResponseError("AI returned an unexpected JSON shape")

    return parsed


def extract_plan_object(parsed: dict[str, Any]) -> dict[str, Any]:
    """Find the plan under "mealPlan", then "plan", else use the object itself."""
    for key in ("mealPlan", "plan"):
        candidate = parsed.get(key)
        if isinstance(candidate, dict):
            return candidate
    return parsed


def parse_slot_response(text: str | None) -> str:
    """Parse a `{"meal": "..."}` reshuffle answer into the meal name."""
    parsed = parse_json_response(text)
    meal = parsed.get("meal")
    if not isinstance(meal, str) or not meal.strip():
        logger.error(f"Reshuffle response has no meal. Raw output: {text!r}")
        raise MalformedResponseError("AI returned no replacement meal")
    return meal.strip()


def parse_shopping_list_response(text: str | None) -> dict[str, list[dict[str, Any]]]:
    """
    Parse a shopping list answer into {category: [{name, checked}]}.

    Plain string items become unchecked items; blank names and categories that
    are not lists are dropped.
    """
    parsed = parse_json_response(text)
    items: dict[str, list[dict[str, Any]]] = {}

    for category, entries in parsed.items():
        if not isinstance(entries, list):
            logger.warning(f"Dropping shopping category {category!r}: not a list")
            continue

        normalized = []
        for entry in entries:
            if isinstance(entry, str):
                entry = {"name": entry}
            if not isinstance(entry, dict):
                continue
            name = str(entry.get("name") or "").strip()
            if not name:
                continue
            item = ShoppingItem(name=name, checked=bool(entry.get("checked", False)))
            normalized.append(item.model_dump())

        items[str(category)] = normalized

    return items
