"""
Tests for normalizing provider output.
"""

import pytest

from mealwise.errors import MalformedResponseError
from mealwise.planning.parsing import (
    extract_plan_object,
    parse_json_response,
    parse_shopping_list_response,
    parse_slot_response,
    strip_code_fences,
)

PLAN_JSON = '{"mealPlan": {"Monday": {"lunch": "Pasta"}}}'


class TestStripCodeFences:

    @pytest.mark.parametrize("fence", ["```json", "```JSON", "```"])
    def test_fenced_parses_like_unfenced(self, fence):
        fenced = f"{fence}\n{PLAN_JSON}\n```"
        assert parse_json_response(fenced) == parse_json_response(PLAN_JSON)

    def test_surrounding_whitespace(self):
        assert strip_code_fences(f"\n\n  ```json\n{PLAN_JSON}\n```  \n") == PLAN_JSON

    def test_unfenced_text_untouched(self):
        assert strip_code_fences(PLAN_JSON) == PLAN_JSON

    def test_none_is_empty(self):
        assert strip_code_fences(None) == ""


class TestParseJsonResponse:

    def test_invalid_json(self):
        with pytest.raises(MalformedResponseError) as exc:
            parse_json_response("Here is your plan: Monday pasta")
        assert exc.value.message == "AI returned invalid JSON"
        assert exc.value.status_code == 500

    def test_raw_text_not_in_error(self):
        with pytest.raises(MalformedResponseError) as exc:
            parse_json_response("secret raw output")
        assert "secret raw output" not in str(exc.value)

    def test_array_rejected(self):
        with pytest.raises(MalformedResponseError):
            parse_json_response('["Monday"]')

    def test_empty_text(self):
        with pytest.raises(MalformedResponseError):
            parse_json_response("")


class TestExtractPlanObject:

    def test_meal_plan_key(self):
        assert extract_plan_object({"mealPlan": {"Monday": {}}}) == {"Monday": {}}

    def test_plan_key(self):
        assert extract_plan_object({"plan": {"Tuesday": {}}}) == {"Tuesday": {}}

    def test_bare_object(self):
        assert extract_plan_object({"Monday": {"lunch": "Soup"}}) == {"Monday": {"lunch": "Soup"}}

    def test_non_object_meal_plan_falls_through(self):
        parsed = {"mealPlan": "none", "plan": {"Friday": {}}}
        assert extract_plan_object(parsed) == {"Friday": {}}


class TestParseSlotResponse:

    def test_meal(self):
        assert parse_slot_response('```json\n{ "meal": " Chicken wraps " }\n```') == "Chicken wraps"

    @pytest.mark.parametrize("text", ['{"meal": ""}', '{"meal": 3}', '{"dish": "Soup"}'])
    def test_missing_meal(self, text):
        with pytest.raises(MalformedResponseError):
            parse_slot_response(text)


class TestParseShoppingList:

    def test_items_normalized(self):
        text = """{
            "Vegetables": [{"name": "Carrots", "checked": false}, "Peas", {"name": "  "}],
            "Dairy": [],
            "Notes": "buy in bulk"
        }"""
        items = parse_shopping_list_response(text)

        assert items == {
            "Vegetables": [
                {"name": "Carrots", "checked": False},
                {"name": "Peas", "checked": False},
            ],
            "Dairy": [],
        }

    def test_checked_kept(self):
        items = parse_shopping_list_response('{"Carbs": [{"name": "Rice", "checked": true}]}')
        assert items["Carbs"][0]["checked"] is True
