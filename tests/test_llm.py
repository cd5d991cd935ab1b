"""
Tests for model routing and the generation call.
"""

from unittest.mock import patch

import pytest

from mealwise.errors import GenerationError
from mealwise.llm import client as llm
from mealwise.llm.model_router import DEFAULT_CONFIG, TASK_CONFIGS, get_model, get_task_config


class TestModelRouter:

    def test_plan_budget(self):
        config = get_task_config("plan")
        assert config["model"] == "gpt-4.1"
        assert config["max_tokens"] == 600

    def test_shopping_list_uses_mini(self):
        assert get_model("shopping_list") == "gpt-4o-mini"
        assert get_task_config("shopping_list")["temperature"] == 0.4

    def test_unknown_task_gets_default(self):
        assert get_task_config("poetry") == DEFAULT_CONFIG

    def test_returns_copy(self):
        config = get_task_config("slot")
        config.pop("model")
        assert "model" in TASK_CONFIGS["slot"]


class TestComplete:

    def test_returns_message_text(self, mock_openai):
        with patch.object(llm, "get_client", return_value=mock_openai):
            text = llm.complete("Suggest a meal", "slot")

        assert text == '{"meal": "Chicken wraps"}'
        kwargs = mock_openai.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4.1"
        assert kwargs["max_tokens"] == 100
        assert kwargs["messages"] == [{"role": "user", "content": "Suggest a meal"}]

    def test_no_content_is_empty_string(self, mock_openai):
        mock_openai.chat.completions.create.return_value.choices[0].message.content = None
        with patch.object(llm, "get_client", return_value=mock_openai):
            assert llm.complete("Plan my week", "plan") == ""

    def test_provider_failure(self, mock_openai):
        mock_openai.chat.completions.create.side_effect = RuntimeError("connection reset")
        with patch.object(llm, "get_client", return_value=mock_openai):
            with pytest.raises(GenerationError) as exc:
                llm.complete("Plan my week", "plan")

        assert exc.value.status_code == 502
        assert isinstance(exc.value.__cause__, RuntimeError)


class TestPromptLogger:

    def test_disabled_writes_nothing(self, tmp_path, monkeypatch):
        from mealwise.llm import prompt_logger

        monkeypatch.setattr(prompt_logger, "LOG_PROMPTS", False)
        monkeypatch.setattr(prompt_logger, "LOG_DIR", tmp_path / "prompt_logs")

        assert prompt_logger.log_prompt(task="plan", model="gpt-4.1", prompt="Plan") is None
        assert not (tmp_path / "prompt_logs").exists()

    def test_writes_prompt_and_error(self, tmp_path, monkeypatch):
        from mealwise.llm import prompt_logger

        monkeypatch.setattr(prompt_logger, "LOG_PROMPTS", True)
        monkeypatch.setattr(prompt_logger, "LOG_DIR", tmp_path / "prompt_logs")
        prompt_logger.reset_session()

        path = prompt_logger.log_prompt(task="slot", model="gpt-4.1", prompt="Suggest a meal", error="timeout")

        assert path.name == "01_slot.md"
        content = path.read_text(encoding="utf-8")
        assert "Suggest a meal" in content
        assert "**ERROR:** timeout" in content
        prompt_logger.reset_session()
