"""Tests for fixed-point money helpers."""

from decimal import Decimal

from pydantic import BaseModel

from storefront.core.money import Money, format_money, quantize_money, to_minor_units


class Priced(BaseModel):
    amount: Money


def test_quantize_rounds_half_up():
    assert quantize_money(Decimal("0.125")) == Decimal("0.13")
    assert quantize_money(Decimal("0.124")) == Decimal("0.12")


def test_to_minor_units():
    assert to_minor_units(Decimal("285.00")) == 28500
    assert to_minor_units(Decimal("19.995")) == 2000
    assert to_minor_units(Decimal("0.01")) == 1


def test_format_money_always_two_places():
    assert format_money(Decimal("15")) == "15.00"
    assert format_money(Decimal("20.5")) == "20.50"


def test_money_serializes_as_string_in_json():
    assert Priced(amount=Decimal("7.5")).model_dump_json() == '{"amount":"7.50"}'


def test_money_accepts_floats_without_binary_drift():
    assert Priced(amount=0.1).amount == Decimal("0.1")
    assert Priced(amount="285.00").amount == Decimal("285.00")
