"""
Pytest configuration and fixtures for Mealwise tests.
"""

import os
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

# Set test environment before importing mealwise modules
os.environ.setdefault("OPENAI_API_KEY", "sk-test")
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "anon-test")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "service-test")
os.environ["MEALWISE_ENV"] = "development"
os.environ["MEALWISE_LOG_PROMPTS"] = "0"

# Every async query helper in mealwise.db.client
DB_FUNCTIONS = [
    "get_household_for_user",
    "create_household",
    "get_household_settings",
    "update_household_settings",
    "get_meal_ratings",
    "get_food_ratings",
    "add_item",
    "update_item_rating",
    "delete_item_rating",
    "get_favourite_meals",
    "get_weekly_plan",
    "upsert_weekly_plan",
    "delete_weekly_plan",
    "get_shopping_list",
    "upsert_shopping_list",
]


@pytest.fixture
def mock_supabase():
    """Mock Supabase client for unit tests."""
    mock_client = MagicMock()

    # Mock table operations
    mock_table = MagicMock()
    mock_table.select.return_value = mock_table
    mock_table.insert.return_value = mock_table
    mock_table.update.return_value = mock_table
    mock_table.upsert.return_value = mock_table
    mock_table.delete.return_value = mock_table
    mock_table.eq.return_value = mock_table
    mock_table.limit.return_value = mock_table
    mock_table.execute.return_value = MagicMock(data=[])

    mock_client.table.return_value = mock_table

    return mock_client


@pytest.fixture
def mock_openai():
    """Mock OpenAI client for unit tests."""
    mock_client = MagicMock()

    # Mock chat completions
    mock_completion = MagicMock()
    mock_completion.choices = [MagicMock(message=MagicMock(content='{"meal": "Chicken wraps"}'))]
    mock_client.chat.completions.create.return_value = mock_completion

    return mock_client


@pytest.fixture
def sample_meal_rows():
    """household_meals rows joined with meals."""
    return [
        {
            "meal_id": "meal-1",
            "rating": "green",
            "is_favourite": True,
            "meals": {"id": "meal-1", "name": "Spaghetti bolognese", "type": "meal"},
        },
        {
            "meal_id": "meal-2",
            "rating": "neutral",
            "is_favourite": False,
            "meals": {"id": "meal-2", "name": "Fish pie", "type": "meal"},
        },
        {
            "meal_id": "meal-3",
            "rating": "red",
            "is_favourite": False,
            "meals": {"id": "meal-3", "name": "Vegetable curry", "type": "meal"},
        },
    ]


@pytest.fixture
def sample_food_rows():
    """household_foods rows joined with foods."""
    return [
        {
            "food_id": "food-1",
            "rating": "green",
            "confidence_score": 8,
            "foods": {"id": "food-1", "name": "Chicken", "category": "protein"},
        },
        {
            "food_id": "food-2",
            "rating": "amber",
            "confidence_score": 5,
            "foods": {"id": "food-2", "name": "Broccoli", "category": "vegetables"},
        },
        {
            "food_id": "food-3",
            "rating": "red",
            "confidence_score": 2,
            "foods": {"id": "food-3", "name": "Mushrooms", "category": "vegetables"},
        },
    ]


@pytest.fixture
def sample_settings():
    return {
        "household_id": "hh-1",
        "risk_level": 4,
        "prep_time_preference": "quick",
        "kids_appetite": "small",
        "onboarding_step": 99,
    }


@pytest.fixture
def fake_db(sample_meal_rows, sample_food_rows, sample_settings):
    """
    Replace the database module everywhere it is used with async mocks.

    Ratings and settings default to the sample rows; plans and lists to None.
    """
    db = MagicMock()
    for name in DB_FUNCTIONS:
        setattr(db, name, AsyncMock(return_value=None))

    db.get_meal_ratings.return_value = sample_meal_rows
    db.get_food_ratings.return_value = sample_food_rows
    db.get_household_settings.return_value = sample_settings
    db.get_favourite_meals.return_value = []
    db.delete_weekly_plan.return_value = False
    db.delete_item_rating.return_value = False

    with (
        patch("mealwise.planning.service.db", db),
        patch("mealwise.planning.learning.db", db),
        patch("mealwise.web.household_routes.db", db),
        patch("mealwise.web.item_routes.db", db),
    ):
        yield db


@pytest.fixture
def fake_llm():
    """Patch the generation call; set .return_value to the provider text."""
    with patch("mealwise.llm.client.complete") as complete:
        complete.return_value = "{}"
        yield complete


@pytest.fixture
def test_user():
    from mealwise.web.auth import AuthenticatedUser

    return AuthenticatedUser(id="user-1", email="parent@example.com", access_token="token-1")


@pytest.fixture
def api_client(test_user):
    """TestClient with authentication bypassed."""
    from fastapi.testclient import TestClient

    from mealwise.web.app import app
    from mealwise.web.auth import require_user

    app.dependency_overrides[require_user] = lambda: test_user
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
