"""
Tests for the pricing service.
"""

import pytest

from quote_builder.models.quote import DiscountType, ServiceLine
from quote_builder.services.pricing_service import (
    PricingEngine,
    calculate_line_price,
    coerce_float,
    coerce_int,
    round_half_away_from_zero,
)


class TestCalculateLinePrice:
    """Tests for calculate_line_price."""

    def test_no_discount(self):
        price = calculate_line_price(800000, 3, DiscountType.NONE)
        assert price.unit_price == 800000
        assert price.amount == 2400000

    def test_percent_discount(self):
        price = calculate_line_price(800000, 1, DiscountType.PERCENT, 10)
        assert price.unit_price == 720000
        assert price.amount == 720000

    @pytest.mark.parametrize("value", [0, 12.5, 33, 50, 99.9, 100])
    def test_percent_matches_rounded_formula(self, value):
        price = calculate_line_price(123457, 7, DiscountType.PERCENT, value)
        expected_unit = round_half_away_from_zero(123457 * (1 - value / 100))
        assert price.unit_price == expected_unit
        assert price.amount == round_half_away_from_zero(expected_unit * 7)

    def test_amount_discount(self):
        price = calculate_line_price(500000, 2, DiscountType.AMOUNT, 50000)
        assert price.unit_price == 450000
        assert price.amount == 900000

    def test_amount_discount_never_negative(self):
        price = calculate_line_price(500000, 2, DiscountType.AMOUNT, 900000)
        assert price.unit_price == 0
        assert price.amount == 0

    def test_free_ignores_discount_value(self):
        price = calculate_line_price(1500000, 4, DiscountType.FREE, 37)
        assert price.unit_price == 0
        assert price.amount == 0

    def test_unrecognized_type_uses_original_price(self):
        price = calculate_line_price(700000, 2, "bogus", 50)
        assert price.unit_price == 700000
        assert price.amount == 1400000

    def test_string_discount_type(self):
        assert calculate_line_price(1000, 1, "percent", 25).unit_price == 750

    def test_percent_out_of_range_passes_through(self):
        assert calculate_line_price(1000, 1, DiscountType.PERCENT, 150).unit_price == -500
        assert calculate_line_price(1000, 1, DiscountType.PERCENT, -10).unit_price == 1100

    def test_unit_price_rounded_before_amount(self):
        # 333.5 rounds to 334 before multiplying
        price = calculate_line_price(667, 3, DiscountType.PERCENT, 50)
        assert price.unit_price == 334
        assert price.amount == 1002

    def test_idempotent(self):
        first = calculate_line_price(999999, 3, DiscountType.PERCENT, 17)
        second = calculate_line_price(999999, 3, DiscountType.PERCENT, 17)
        assert first == second


class TestRounding:
    """Tests for round_half_away_from_zero."""

    @pytest.mark.parametrize("value,expected", [
        (2.5, 3),
        (3.5, 4),
        (2.4, 2),
        (-2.5, -3),
        (0, 0),
        (720000.0, 720000),
    ])
    def test_round(self, value, expected):
        assert round_half_away_from_zero(value) == expected


class TestCoercion:
    """Tests for lenient numeric input parsing."""

    @pytest.mark.parametrize("raw,expected", [
        ("12", 12),
        (" 7 ", 7),
        ("3.9", 3),
        ("12abc", 12),
        ("abc", 0),
        ("", 0),
        (None, 0),
        (True, 0),
        (4.8, 4),
        (float("nan"), 0),
        (5, 5),
    ])
    def test_coerce_int(self, raw, expected):
        assert coerce_int(raw) == expected

    @pytest.mark.parametrize("raw,expected", [
        ("12.5", 12.5),
        ("-3", -3.0),
        (".5", 0.5),
        ("10%", 10.0),
        ("x10", 0.0),
        (None, 0.0),
        (float("inf"), 0.0),
        (7, 7.0),
    ])
    def test_coerce_float(self, raw, expected):
        assert coerce_float(raw) == expected


class TestPricingEngine:
    """Tests for PricingEngine edits."""

    @pytest.fixture
    def engine(self):
        return PricingEngine()

    @pytest.fixture
    def line(self, engine):
        return engine.price_line(ServiceLine(id=1, name="YouTube", original_price=1200000))

    def test_price_line(self, line):
        assert line.unit_price == 1200000
        assert line.amount == 1200000

    def test_quantity_edit_reprices(self, engine, line):
        updated = engine.apply_edit(line, "quantity", "3")
        assert updated.quantity == 3
        assert updated.amount == 3600000

    def test_discount_edits_reprice(self, engine, line):
        updated = engine.apply_edit(line, "discount_type", "percent")
        updated = engine.apply_edit(updated, "discount_value", "25")
        assert updated.discount_type is DiscountType.PERCENT
        assert updated.unit_price == 900000
        assert updated.amount == 900000

    def test_original_price_edit_reprices(self, engine, line):
        updated = engine.apply_edit(line, "original_price", "1000000")
        assert updated.unit_price == 1000000

    def test_original_price_edit_truncates_fraction(self, engine, line):
        updated = engine.apply_edit(line, "original_price", "800.7")
        assert updated.original_price == 800
        assert updated.unit_price == 800
        assert updated.amount == 800

    def test_invalid_number_coerces_to_zero(self, engine, line):
        updated = engine.apply_edit(line, "quantity", "many")
        assert updated.quantity == 0
        assert updated.amount == 0

    def test_unknown_discount_type_becomes_none(self, engine, line):
        updated = engine.apply_edit(line, "discount_type", "coupon")
        assert updated.discount_type is DiscountType.NONE
        assert updated.unit_price == 1200000

    def test_text_edit_does_not_reprice(self, engine):
        stale = ServiceLine(id=2, original_price=500, unit_price=0, amount=0)
        updated = engine.apply_edit(stale, "name", "KakaoTalk")
        assert updated.name == "KakaoTalk"
        assert updated.unit_price == 0
        assert updated.amount == 0

    def test_edit_returns_copy(self, engine, line):
        engine.apply_edit(line, "quantity", 5)
        assert line.quantity == 1

    @pytest.mark.parametrize("field", ["unit_price", "amount"])
    def test_derived_fields_rejected(self, engine, line, field):
        with pytest.raises(ValueError):
            engine.apply_edit(line, field, 1)

    def test_unknown_field_rejected(self, engine, line):
        with pytest.raises(ValueError):
            engine.apply_edit(line, "colour", "red")
