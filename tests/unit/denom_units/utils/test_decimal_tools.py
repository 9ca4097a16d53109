from decimal import Decimal

import pytest

from denom_units.domain.monetary.errors import PrecisionOverflowError
from denom_units.utils.decimal_tools import (
    MAX_DEC_BIT_LEN,
    as_decimal,
    dec_bit_len,
    dec_from_str,
    dec_mul,
    dec_quo,
    dec_sub,
    format_dec,
    to_dec,
    truncate_to_int,
)


def test_as_decimal_converts_float_via_string():
    assert as_decimal(0.1) == Decimal("0.1")
    assert as_decimal(7) == Decimal(7)


def test_to_dec_keeps_exactly_18_fractional_digits():
    value = to_dec("1.5")

    assert value == Decimal("1.5")
    assert value.as_tuple().exponent == -18


@pytest.mark.parametrize(
    "text, expected",
    [
        ("0.0000000000000000005", Decimal("0")),  # half, rounds to even (0)
        ("0.0000000000000000015", Decimal("0.000000000000000002")),  # half, rounds to even (2)
        ("0.0000000000000000025", Decimal("0.000000000000000002")),  # half, rounds to even (2)
        ("0.00000000000000000251", Decimal("0.000000000000000003")),  # above half
    ],
)
def test_to_dec_rounds_half_to_even(text, expected):
    assert to_dec(text) == expected


def test_to_dec_rejects_non_numbers():
    with pytest.raises(ValueError):
        to_dec("abc")

    with pytest.raises(ValueError):
        to_dec("NaN")

    with pytest.raises(ValueError):
        to_dec(float("inf"))


def test_to_dec_rejects_values_beyond_bit_budget():
    # 2^250 * 10^18 needs about 310 bits and fits
    assert dec_bit_len(to_dec(2**250)) <= MAX_DEC_BIT_LEN

    # 2^300 * 10^18 needs about 360 bits
    with pytest.raises(PrecisionOverflowError):
        to_dec(2**300)

    with pytest.raises(PrecisionOverflowError):
        to_dec("1e500")


def test_dec_from_str_accepts_signed_literals():
    assert dec_from_str("12") == Decimal("12")
    assert dec_from_str("+3.5") == Decimal("3.5")
    assert dec_from_str("-0.25") == Decimal("-0.25")
    assert dec_from_str("0.000000000000000001") == Decimal("1e-18")


@pytest.mark.parametrize("text", ["", "abc", "1.", ".5", "1e5", "1,5", " 1", "--1", "1\n", "1.5\n"])
def test_dec_from_str_rejects_malformed_literals(text):
    with pytest.raises(ValueError):
        dec_from_str(text)


def test_dec_from_str_rejects_more_than_18_fractional_digits():
    with pytest.raises(ValueError, match="fractional digits"):
        dec_from_str("1.0000000000000000001")


def test_dec_mul_and_dec_sub_are_exact():
    assert dec_mul(3, "0.000001") == Decimal("0.000003")
    assert dec_mul("1.5", "1.5") == Decimal("2.25")
    assert dec_sub("1.5", 1) == Decimal("0.5")


def test_dec_mul_rounds_product_half_to_even():
    # 0.000000001 * 0.0000000005 = 5e-19, exactly half of the last digit
    assert dec_mul("0.000000001", "0.0000000005") == Decimal("0")
    # 0.000000003 * 0.0000000005 = 1.5e-18
    assert dec_mul("0.000000003", "0.0000000005") == Decimal("0.000000000000000002")


def test_dec_quo_rounds_at_18_digits():
    assert dec_quo(1, 3) == Decimal("0.333333333333333333")
    assert dec_quo(2, 3) == Decimal("0.666666666666666667")
    assert dec_quo(1, "0.000001") == Decimal("1000000")


def test_dec_quo_rejects_zero_divisor():
    with pytest.raises(ZeroDivisionError):
        dec_quo(1, 0)


def test_dec_mul_checks_bit_budget_on_result_only():
    amount = 2**256 - 1

    # 2^256 * 10^18 needs about 316 bits, so the amount alone does not fit
    with pytest.raises(PrecisionOverflowError):
        to_dec(amount)

    assert dec_mul(amount, "0.000001") == Decimal(f"{amount // 10**6}.{amount % 10**6:06d}")


def test_dec_quo_rejects_result_beyond_bit_budget():
    with pytest.raises(PrecisionOverflowError):
        dec_quo(2**250, "0.000001")


def test_truncate_to_int_moves_toward_zero():
    assert truncate_to_int(Decimal("2.999")) == 2
    assert truncate_to_int(Decimal("-2.999")) == -2
    assert truncate_to_int(Decimal("0.666666666666666667")) == 0


def test_format_dec_uses_plain_notation():
    assert format_dec(Decimal("0.0000001")) == "0.000000100000000000"
    assert format_dec(Decimal("1000000")) == "1000000.000000000000000000"
