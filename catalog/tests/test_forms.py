"""Tests for JSON-encoded multipart fields."""

import json

import pytest

from catalog.core.exceptions import FieldValidationError
from catalog.schemas.forms import parse_instructions, parse_specifications


class TestParseSpecifications:
    def test_not_sent_is_none(self):
        assert parse_specifications(None) is None

    def test_blank_is_empty_list(self):
        assert parse_specifications("   ") == []

    def test_options_deduplicated_in_order(self):
        raw = json.dumps([{"title": "Color", "options": ["Red", "Blue", "Red", " Blue ", ""]}])

        (spec,) = parse_specifications(raw)

        assert spec.title == "Color"
        assert spec.options == ["Red", "Blue"]

    def test_malformed_json_names_the_field(self):
        with pytest.raises(FieldValidationError) as exc_info:
            parse_specifications("[{not json")
        assert exc_info.value.field == "specifications"

    def test_schema_violation_reports_location(self):
        with pytest.raises(FieldValidationError) as exc_info:
            parse_specifications(json.dumps([{"options": ["a"]}]))
        assert "0.title" in exc_info.value.reason


class TestParseInstructions:
    def test_valid_instructions(self):
        raw = json.dumps([{"title": "Care", "value": ["Machine wash cold", "Do not bleach"]}])

        (instruction,) = parse_instructions(raw)

        assert instruction.value == ["Machine wash cold", "Do not bleach"]

    def test_not_a_list(self):
        with pytest.raises(FieldValidationError) as exc_info:
            parse_instructions(json.dumps({"title": "Care"}))
        assert exc_info.value.field == "instructions"
