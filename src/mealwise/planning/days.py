"""
Canonical day names, meal slots and week-start dates.

A weekly plan is stored under the ISO date of its Monday.
"""

from datetime import date, datetime, timedelta

from mealwise.errors import InvalidInputError

DAYS: tuple[str, ...] = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

SLOTS: tuple[str, ...] = ("lunch", "dinner")


def normalize_day_name(name: str) -> str:
    """
    Normalize a day name to its canonical form ("monday" -> "Monday").

    Raises:
        InvalidInputError: if the normalized name is not a day of the week
    """
    cleaned = (name or "").strip()
    canonical = cleaned[:1].upper() + cleaned[1:].lower()
    if canonical not in DAYS:
        raise InvalidInputError(f"Unknown day: {name!r}")
    return canonical


def normalize_slot(meal_type: str) -> str:
    """Normalize a slot name ("Lunch" -> "lunch")."""
    slot = (meal_type or "").strip().lower()
    if slot not in SLOTS:
        raise InvalidInputError(f"Unknown meal type: {meal_type!r}")
    return slot


def _monday_of(d: date) -> date:
    return d - timedelta(days=d.weekday())


def get_week_start(d: date | datetime | None = None) -> str:
    """
    Get the week-start (most recent Monday, local date) for a date.

    Args:
        d: Date or datetime to resolve; defaults to today

    Returns:
        ISO date string, e.g. "2026-10-12"
    """
    if d is None:
        d = date.today()
    elif isinstance(d, datetime):
        d = d.date()
    return _monday_of(d).isoformat()


def parse_week_start(value: str) -> str:
    """Resolve any ISO date to the week-start of the week containing it."""
    try:
        parsed = date.fromisoformat(value.strip())
    except (AttributeError, ValueError):
        raise InvalidInputError(f"Invalid week start: {value!r}")
    return _monday_of(parsed).isoformat()


def shift_week(week_start: str, weeks: int) -> str:
    """Get the week-start `weeks` weeks away from `week_start`."""
    base = date.fromisoformat(parse_week_start(week_start))
    return (base + timedelta(weeks=weeks)).isoformat()


def previous_week(week_start: str) -> str:
    return shift_week(week_start, -1)
