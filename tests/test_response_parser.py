import json

import pytest

from nutrition_planner.errors import ExtractionError, ValidationError
from nutrition_planner.services.response_parser import extract_json_payload, validate_menu_payload
from tests.conftest import week_payload


class TestExtract:
    def test_fenced_json(self):
        assert extract_json_payload('```json\n{"days":[]}\n```') == {"days": []}

    def test_uppercase_fence_and_prose(self):
        raw = 'Here is your plan:\n```JSON\n{"days": [], "version": 2}\n```\nEnjoy!'
        assert extract_json_payload(raw) == {"days": [], "version": 2}

    @pytest.mark.parametrize("raw", ["no braces at all", "", "   ", None, 42, "} backwards {"])
    def test_no_object(self, raw):
        with pytest.raises(ExtractionError):
            extract_json_payload(raw)

    def test_first_open_last_close_slice(self):
        # slice is '{"a":1} suffix {"b":2}', which is not JSON
        with pytest.raises(ExtractionError):
            extract_json_payload('prefix {"a":1} suffix {"b":2}')

    def test_nested_object_kept_whole(self):
        raw = "Sure! " + json.dumps(week_payload(days=1)) + " Let me know."
        assert extract_json_payload(raw) == week_payload(days=1)


class TestValidate:
    @pytest.mark.parametrize("payload", [{}, {"days": None}, {"days": "7"}, {"days": {"1": {}}}, [], "x"])
    def test_missing_or_non_list_days(self, payload):
        with pytest.raises(ValidationError):
            validate_menu_payload(payload)

    def test_accepts_full_week(self):
        result = validate_menu_payload(week_payload())
        assert len(result.days) == 7
        assert [d.day_index for d in result.days] == list(range(1, 8))
        assert all([m.type for m in d.meals] == ["Breakfast", "Lunch", "Dinner"] for d in result.days)
        assert result.days[0].shopping_items[0].product == "Oats"
        assert result.provider_version is None

    def test_absent_shopping_items_is_empty(self):
        payload = week_payload(days=1)
        del payload["days"][0]["shoppingItems"]
        day = validate_menu_payload(payload).days[0]
        assert day.shopping_items == []

    def test_empty_days_is_valid(self):
        assert validate_menu_payload({"days": []}).days == []

    def test_lenient_shaping(self):
        payload = {
            "days": [
                "not a day",
                {
                    "meals": [
                        {"type": "dinner", "name": "Soup", "calories": "350"},
                        {"name": "Toast", "calories": -5},
                        {"type": "Lunch", "name": "Wrap", "description": "  "},
                        "junk",
                    ],
                    "shoppingItems": [{"product": "Bread", "quantity": 1}, {"quantity": "2"}, "x"],
                },
            ]
        }
        day = validate_menu_payload(payload).days[0]
        assert day.day_index == 1
        assert day.label == "Day 1"
        assert [(m.type, m.name) for m in day.meals] == [("Breakfast", "Toast"), ("Lunch", "Wrap"), ("Dinner", "Soup")]
        assert day.meals[0].calories is None
        assert day.meals[1].description is None
        assert day.meals[2].calories == 350
        assert [(i.product, i.quantity) for i in day.shopping_items] == [("Bread", "1")]

    @pytest.mark.parametrize("version, expected", [(9, 9), (0, None), ("9", None), (True, None), (2.0, 2)])
    def test_provider_version(self, version, expected):
        assert validate_menu_payload({"days": [], "version": version}).provider_version == expected


class TestOversizedNumbers:
    def test_integer_beyond_parser_digit_limit(self):
        raw = '{"days": [], "version": ' + "1" * 5000 + "}"
        with pytest.raises(ExtractionError):
            extract_json_payload(raw)

    def test_deeply_nested_payload(self):
        with pytest.raises(ExtractionError):
            extract_json_payload('{"a": ' + "[" * 100000 + "]" * 100000 + "}")

    def test_huge_calories_are_dropped(self):
        payload = extract_json_payload(
            '{"days": [{"meals": [{"type": "Lunch", "name": "Pasta", "calories": ' + "9" * 400 + "}]}]}"
        )
        meal = validate_menu_payload(payload).days[0].meals[0]
        assert meal.name == "Pasta"
        assert meal.calories is None

    def test_infinite_calories_are_dropped(self):
        payload = extract_json_payload('{"days": [{"meals": [{"name": "Soup", "calories": 1e999}]}]}')
        assert validate_menu_payload(payload).days[0].meals[0].calories is None

    @pytest.mark.parametrize("value", [2**40, "9" * 5000, "²"])
    def test_out_of_range_day_index_and_version(self, value):
        result = validate_menu_payload({"days": [{"dayIndex": value}], "version": value})
        assert result.days[0].day_index == 1
        assert result.provider_version is None
