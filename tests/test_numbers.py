from decimal import Decimal

import pytest

from pixelui.numbers import format_number


@pytest.mark.parametrize("value", [0, 7, 42, 12345, -1, -987])
def test_plain_integers_match_str(value):
    assert format_number(value) == str(value)


def test_precision_two():
    assert format_number(1234, precision=2) == "12.34"


def test_small_value_gets_leading_zero_before_point():
    assert format_number(5, precision=2) == "0.05"


def test_leading_zero_padding():
    assert format_number(7, length=3, leading_zero=True) == "007"


@pytest.mark.parametrize("value", [1, 9, 10, 99, 100, 12345, -3, -450])
@pytest.mark.parametrize("precision", [1, 2])
def test_precision_matches_decimal_scaling(value, precision):
    text = format_number(value, precision=precision)
    assert Decimal(text) == Decimal(value).scaleb(-precision)
    assert "." in text


@pytest.mark.parametrize("value", [0, 3, 12, 345, 98765])
def test_leading_zero_length_and_value(value):
    text = format_number(value, length=4, leading_zero=True)
    assert len(text) == max(4, len(str(value)))
    assert int(text) == value


def test_prefix_and_suffix_are_added():
    assert format_number(15, prefix="T", suffix="ms") == "T" + str(15) + "ms"


def test_long_prefix_is_ignored():
    assert format_number(5, prefix="x" * 17) == str(5)


def test_prefix_of_sixteen_is_kept():
    assert format_number(5, prefix="p" * 16) == "p" * 16 + str(5)


def test_suffix_is_truncated():
    assert format_number(1, suffix="y" * 20) == str(1) + "y" * 16


def test_negative_precision_rejected():
    with pytest.raises(ValueError):
        format_number(1, precision=-1)