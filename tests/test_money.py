from decimal import Decimal

import pytest

from chaifi.core.money import format_cents, to_cents


@pytest.mark.parametrize("value, cents", [
    ("30.00", 3000),
    ("30", 3000),
    ("0.005", 1),
    (12, 1200),
    (8.25, 825),
    (0.1, 10),
    (Decimal("19.994"), 1999),
    (None, 0),
])
def test_to_cents(value, cents):
    assert to_cents(value) == cents


@pytest.mark.parametrize("value", ["abc", "", "NaN", "Infinity"])
def test_to_cents_rejects_non_numbers(value):
    with pytest.raises(ValueError):
        to_cents(value)


def test_format_cents():
    assert format_cents(3000) == "30.00"
    assert format_cents(5) == "0.05"
    assert format_cents(0) == "0.00"
    assert format_cents(-1250) == "-12.50"


def test_float_sums_do_not_drift():
    total = sum(to_cents(0.1) for _ in range(10))
    assert format_cents(total) == "1.00"
