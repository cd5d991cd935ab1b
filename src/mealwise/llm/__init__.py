"""
Mealwise - LLM Client.

Provides plain-text completions for the planning flow.
"""

from mealwise.llm.client import complete, get_client
from mealwise.llm.model_router import get_model

__all__ = [
    "get_client",
    "complete",
    "get_model",
]
