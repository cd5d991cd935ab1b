"""
Mealwise - Model Router.

Selects the model and call parameters for each generation task.

Tasks:
- plan: fill a whole weekly skeleton -> gpt-4.1, bounded output
- slot: one replacement meal -> gpt-4.1, tiny output
- shopping_list: extract ingredients from a plan -> gpt-4o-mini, low temperature
"""

from typing import Literal, TypedDict


class ModelConfig(TypedDict, total=False):
    """Configuration for model calls."""

    model: str
    temperature: float
    max_tokens: int


Task = Literal["plan", "slot", "shopping_list"]

TASK_CONFIGS: dict[str, ModelConfig] = {
    "plan": {
        "model": "gpt-4.1",
        "temperature": 0.7,  # Variety across the week
        "max_tokens": 600,
    },
    "slot": {
        "model": "gpt-4.1",
        "temperature": 0.8,  # Must differ from the rejected meal
        "max_tokens": 100,
    },
    "shopping_list": {
        "model": "gpt-4o-mini",
        "temperature": 0.4,
        "max_tokens": 1200,
    },
}

# Default config if task not recognized
DEFAULT_CONFIG: ModelConfig = {
    "model": "gpt-4o-mini",
    "temperature": 0.5,
    "max_tokens": 600,
}


def get_task_config(task: Task | str) -> ModelConfig:
    """Get a copy of the model configuration for a task."""
    return TASK_CONFIGS.get(task, DEFAULT_CONFIG).copy()


def get_model(task: Task | str) -> str:
    return get_task_config(task)["model"]
