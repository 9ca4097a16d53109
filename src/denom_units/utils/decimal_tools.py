from __future__ import annotations

import re
from contextlib import contextmanager
from decimal import Decimal, Context, InvalidOperation, ROUND_DOWN, ROUND_HALF_EVEN, localcontext
from typing import Iterator, TypeAlias

from denom_units.domain.monetary.errors import PrecisionOverflowError

# Number of fractional digits carried by every fixed-point decimal
DEC_PRECISION = 18

# Maximum bit length of a fixed-point decimal, measured on its scaled integer (value * 10^18)
MAX_DEC_BIT_LEN = 315

# Maximum bit length of an integer coin amount
MAX_INT_BIT_LEN = 256

# Use where optimal type is `Decimal`, but other types are also acceptable (and will be converted to `Decimal`)
DecimalLike: TypeAlias = Decimal | int | str | float

_DEC_QUANTUM = Decimal(1).scaleb(-DEC_PRECISION)
_QUO_QUANTUM = Decimal(1).scaleb(-2 * DEC_PRECISION)

# Large enough that no bounded operand, product or quotient is ever rounded by the context itself
_CONTEXT_PRECISION = 400

# Any value whose adjusted exponent is above this cannot fit into MAX_DEC_BIT_LEN
_MAX_ADJUSTED_EXPONENT = 100

_DEC_LITERAL_PATTERN = re.compile(r"^[+-]?[0-9]+(?:\.[0-9]+)?$")


def as_decimal(value: DecimalLike) -> Decimal:
    """Converts input to `Decimal` safely.

    Ensures floats are converted via string to avoid precision noise.

    Args:
        value: Input value as `DecimalLike`.

    Returns:
        Value converted to `Decimal`.
    """
    if isinstance(value, Decimal):
        return value

    return Decimal(str(value))


@contextmanager
def _engine_context() -> Iterator[Context]:
    with localcontext() as ctx:
        ctx.prec = _CONTEXT_PRECISION
        ctx.rounding = ROUND_HALF_EVEN
        yield ctx


def _scaled_int(value: Decimal) -> int:
    """Return $value multiplied by 10^DEC_PRECISION as an exact integer (fraction beyond 18 places dropped)."""
    sign, digits, exponent = value.as_tuple()
    coefficient = int("".join(str(digit) for digit in digits)) if digits else 0
    shift = exponent + DEC_PRECISION
    if shift >= 0:
        scaled = coefficient * 10**shift
    else:
        scaled = coefficient // 10**-shift
    return -scaled if sign else scaled


def dec_bit_len(value: Decimal) -> int:
    """Bit length of the scaled integer behind a fixed-point decimal."""
    return abs(_scaled_int(value)).bit_length()


def check_dec_bit_len(value: Decimal) -> Decimal:
    """Return $value unchanged, or raise if it does not fit into `MAX_DEC_BIT_LEN` bits.

    Raises:
        PrecisionOverflowError: If the scaled integer of $value is longer than `MAX_DEC_BIT_LEN` bits.
    """
    bit_len = dec_bit_len(value)
    if bit_len > MAX_DEC_BIT_LEN:
        raise PrecisionOverflowError(f"Decimal value needs {bit_len} bits, which exceeds the maximum of {MAX_DEC_BIT_LEN} bits")
    return value


def check_int_bit_len(value: int) -> int:
    """Return $value unchanged, or raise if it does not fit into `MAX_INT_BIT_LEN` bits.

    Raises:
        PrecisionOverflowError: If $value is longer than `MAX_INT_BIT_LEN` bits.
    """
    bit_len = abs(value).bit_length()
    if bit_len > MAX_INT_BIT_LEN:
        raise PrecisionOverflowError(f"Integer value needs {bit_len} bits, which exceeds the maximum of {MAX_INT_BIT_LEN} bits")
    return value


def _to_fixed(value: DecimalLike, fn_name: str) -> Decimal:
    """Quantize $value to 18 fractional digits (half to even) without checking the bit budget."""
    # Raise: $value must be convertible to Decimal
    try:
        d = as_decimal(value)
    except InvalidOperation as e:
        raise ValueError(f"Cannot call `{fn_name}` because $value ({value}) cannot be converted to Decimal") from e

    # Raise: NaN and Infinity have no fixed-point representation
    if not d.is_finite():
        raise ValueError(f"Cannot call `{fn_name}` because $value ({value}) is not a finite number")

    # Raise: reject huge magnitudes before quantize would need more digits than the context has
    if d != 0 and d.adjusted() > _MAX_ADJUSTED_EXPONENT:
        raise PrecisionOverflowError(f"Cannot call `{fn_name}` because $value ({value}) exceeds the maximum of {MAX_DEC_BIT_LEN} bits")

    with _engine_context():
        return d.quantize(_DEC_QUANTUM, rounding=ROUND_HALF_EVEN)


def to_dec(value: DecimalLike) -> Decimal:
    """Convert $value into a fixed-point decimal with exactly `DEC_PRECISION` fractional digits.

    Digits beyond the 18th fractional place are rounded half to even.

    Args:
        value: Input value as `DecimalLike`.

    Returns:
        Decimal quantized to 18 fractional digits.

    Raises:
        ValueError: If $value is not a number or not finite.
        PrecisionOverflowError: If $value does not fit into `MAX_DEC_BIT_LEN` bits.
    """
    return check_dec_bit_len(_to_fixed(value, "to_dec"))


def dec_from_str(text: str) -> Decimal:
    """Parse a decimal literal like "12", "-0.5" or "+3.000001" into a fixed-point decimal.

    Unlike `to_dec`, no rounding happens: literals with more than 18 fractional digits are rejected.

    Raises:
        ValueError: If $text is not a decimal literal or carries too many fractional digits.
        PrecisionOverflowError: If the value does not fit into `MAX_DEC_BIT_LEN` bits.
    """
    if not isinstance(text, str) or not _DEC_LITERAL_PATTERN.fullmatch(text):
        raise ValueError(f"Cannot call `dec_from_str` because $text ('{text}') is not a decimal literal")

    _, _, fraction = text.partition(".")
    if len(fraction) > DEC_PRECISION:
        raise ValueError(f"Cannot call `dec_from_str` because $text ('{text}') has {len(fraction)} fractional digits, but at most {DEC_PRECISION} are allowed")

    return to_dec(Decimal(text))


# Arithmetic below checks the bit budget on results only. Operands are taken as given, so an
# integer coin amount wider than the decimal budget still converts when the result fits.


def dec_sub(a: DecimalLike, b: DecimalLike) -> Decimal:
    """Subtract two fixed-point decimals exactly."""
    a_dec, b_dec = _to_fixed(a, "dec_sub"), _to_fixed(b, "dec_sub")
    with _engine_context():
        result = a_dec - b_dec
    return check_dec_bit_len(result)


def dec_mul(a: DecimalLike, b: DecimalLike) -> Decimal:
    """Multiply two fixed-point decimals, rounding the exact product half to even at 18 places.

    Raises:
        PrecisionOverflowError: If the rounded product does not fit into `MAX_DEC_BIT_LEN` bits.
    """
    a_dec, b_dec = _to_fixed(a, "dec_mul"), _to_fixed(b, "dec_mul")
    with _engine_context():
        result = (a_dec * b_dec).quantize(_DEC_QUANTUM, rounding=ROUND_HALF_EVEN)
    return check_dec_bit_len(result)


def dec_quo(a: DecimalLike, b: DecimalLike) -> Decimal:
    """Divide two fixed-point decimals.

    The quotient is first truncated toward zero at 36 fractional digits and then rounded
    half to even at 18 digits. Both steps are needed to get the same digits as every other
    ledger implementation.

    Raises:
        ZeroDivisionError: If $b is zero.
        PrecisionOverflowError: If the result does not fit into `MAX_DEC_BIT_LEN` bits.
    """
    a_dec, b_dec = _to_fixed(a, "dec_quo"), _to_fixed(b, "dec_quo")

    # Raise: division by zero is undefined
    if b_dec == 0:
        raise ZeroDivisionError(f"Cannot call `dec_quo` because divisor $b ({b}) is zero")

    with _engine_context() as ctx:
        ctx.rounding = ROUND_DOWN
        quotient = (a_dec / b_dec).quantize(_QUO_QUANTUM, rounding=ROUND_DOWN)
        result = quotient.quantize(_DEC_QUANTUM, rounding=ROUND_HALF_EVEN)

    return check_dec_bit_len(result)


def truncate_to_int(value: Decimal) -> int:
    """Drop the fractional part of $value, moving toward zero."""
    return int(value)


def format_dec(value: Decimal) -> str:
    """Format a fixed-point decimal in plain notation with all 18 fractional digits."""
    return format(to_dec(value), "f")
