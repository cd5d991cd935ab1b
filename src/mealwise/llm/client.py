"""
Mealwise - LLM Client.

Wraps OpenAI chat completions. Every generation call goes through here:
one blocking request, raw text back, no retries.
"""

import logging

from openai import OpenAI

from mealwise.config import settings
from mealwise.errors import GenerationError
from mealwise.llm.model_router import Task, get_task_config
from mealwise.llm.prompt_logger import log_prompt

logger = logging.getLogger(__name__)

# Singleton client instance
_client: OpenAI | None = None


def get_client() -> OpenAI:
    """
    Get the OpenAI client.

    Uses singleton pattern to reuse connection.
    """
    global _client

    if _client is None:
        _client = OpenAI(api_key=settings.openai_api_key)

    return _client


def complete(prompt: str, task: Task | str) -> str:
    """
    Send a prompt and return the model's text.

    Args:
        prompt: Full prompt text
        task: Generation task, selects model/temperature/token budget

    Returns:
        The raw completion text ("" if the provider returned no content)

    Raises:
        GenerationError: if the provider call fails
    """
    client = get_client()
    config = get_task_config(task)
    model = config.pop("model")

    try:
        completion = client.chat.completions.create(
            model=model,
            messages=[{"role": "user", "content": prompt}],
            temperature=config.get("temperature", 0.5),
            max_tokens=config.get("max_tokens", 600),
        )
    except Exception as e:
        logger.exception(f"Generation call failed (task={task}, model={model})")
        log_prompt(task=str(task), model=model, prompt=prompt, error=str(e))
        raise GenerationError("Failed to reach the meal generation service") from e

    text = completion.choices[0].message.content or ""
    log_prompt(task=str(task), model=model, prompt=prompt, response_text=text)
    return text
