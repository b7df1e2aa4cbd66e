"""Unit tests for studio form validation."""

import pytest

from photostudio.ui.validation import (
    MISSING_INPUT_MESSAGE,
    ValidationError,
    limit_source_images,
    validate_generation_input,
)

IMAGE = "data:image/png;base64,AAAA"


class TestLimitSourceImages:
    """Tests for limit_source_images()."""

    def test_none_is_empty(self):
        assert limit_source_images(None) == []

    def test_empty_slots_dropped(self):
        assert limit_source_images([None, "a", "", "b"]) == ["a", "b"]

    def test_keeps_first_three(self):
        assert limit_source_images(["a", "b", "c", "d", "e"]) == ["a", "b", "c"]

    def test_order_preserved(self):
        assert limit_source_images(["c", "a", "b"]) == ["c", "a", "b"]


class TestValidateGenerationInput:
    """Tests for validate_generation_input()."""

    def test_valid_input(self):
        validate_generation_input("Kim", "마이스터모터스", "강남대치", "solid", [IMAGE])

    @pytest.mark.parametrize("name", [None, "", "   "])
    def test_blank_name(self, name):
        with pytest.raises(ValidationError, match=MISSING_INPUT_MESSAGE):
            validate_generation_input(name, "마이스터모터스", "강남대치", "solid", [IMAGE])

    def test_no_images(self):
        with pytest.raises(ValidationError, match=MISSING_INPUT_MESSAGE):
            validate_generation_input("Kim", "마이스터모터스", "강남대치", "solid", [])

    def test_showroom_of_other_dealer(self):
        with pytest.raises(ValidationError, match="전시장"):
            validate_generation_input("Kim", "지엔비", "강남대치", "solid", [IMAGE])

    def test_missing_showroom(self):
        with pytest.raises(ValidationError):
            validate_generation_input("Kim", "지엔비", None, "solid", [IMAGE])

    def test_unknown_background(self):
        with pytest.raises(ValidationError, match="배경"):
            validate_generation_input("Kim", "지엔비", "대구", "gradient", [IMAGE])
