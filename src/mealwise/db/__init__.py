"""
Mealwise - Database access.

Supabase query helpers for households, ratings, plans and shopping lists.
"""

from mealwise.db.client import get_client, get_service_client

__all__ = [
    "get_client",
    "get_service_client",
]
