from __future__ import annotations

from decimal import Decimal

from denom_units.domain.monetary.coin import Coin, DecCoin
from denom_units.domain.monetary.denom_registry import DenomRegistry
from denom_units.domain.monetary.errors import DestNotRegisteredError, SourceNotRegisteredError
from denom_units.utils.decimal_tools import dec_mul, dec_quo, truncate_to_int


def _lookup_units(registry: DenomRegistry, src_denom: str, dst_denom: str) -> tuple[Decimal, Decimal]:
    """Validate $dst_denom and return the unit multipliers of both denominations."""
    registry.denom_validator(dst_denom)

    src_unit = registry.get_denom_unit(src_denom)
    if src_unit is None:
        raise SourceNotRegisteredError(f"Source denom not registered: '{src_denom}'")

    dst_unit = registry.get_denom_unit(dst_denom)
    if dst_unit is None:
        raise DestNotRegisteredError(f"Destination denom not registered: '{dst_denom}'")

    return src_unit, dst_unit


def convert_coin(registry: DenomRegistry, coin: Coin, denom: str) -> Coin:
    """Convert $coin into $denom, truncating the result toward zero.

    When both denominations have the same unit, the amount is copied without any arithmetic.
    Otherwise amount_dst = amount_src * unit_src / unit_dst.

    Args:
        registry: Registry with unit multipliers.
        coin: Coin to convert.
        denom: Target denomination.

    Returns:
        Coin: New coin in $denom.

    Raises:
        InvalidDenomError: If $denom is not a valid denomination name.
        SourceNotRegisteredError: If $coin.denom has no unit in $registry.
        DestNotRegisteredError: If $denom has no unit in $registry.
        PrecisionOverflowError: If an intermediate value exceeds the decimal bit budget.
        ZeroDivisionError: If the unit of $denom is zero.
    """
    src_unit, dst_unit = _lookup_units(registry, coin.denom, denom)

    if src_unit == dst_unit:
        return Coin(denom, coin.amount, registry.denom_validator)

    return Coin(denom, truncate_to_int(dec_quo(dec_mul(coin.amount, src_unit), dst_unit)), registry.denom_validator)


def convert_dec_coin(registry: DenomRegistry, coin: DecCoin, denom: str) -> DecCoin:
    """Convert $coin into $denom, keeping all 18 fractional digits.

    Raises the same errors as `convert_coin`.
    """
    src_unit, dst_unit = _lookup_units(registry, coin.denom, denom)

    if src_unit == dst_unit:
        return DecCoin(denom, coin.amount, registry.denom_validator)

    return DecCoin(denom, dec_quo(dec_mul(coin.amount, src_unit), dst_unit), registry.denom_validator)
