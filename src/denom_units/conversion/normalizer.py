from __future__ import annotations

import logging
from collections.abc import Sequence

from denom_units.conversion.converter import convert_coin, convert_dec_coin
from denom_units.domain.monetary.coin import Coin, DecCoin
from denom_units.domain.monetary.denom_registry import DenomRegistry
from denom_units.domain.monetary.errors import DenomError

logger = logging.getLogger(__name__)

# Normalization never fails: when conversion is not possible the input coin is returned unchanged,
# and callers rely on that. A zero unit surfaces as ZeroDivisionError, so it is caught with DenomError.


def normalize_coin(registry: DenomRegistry, coin: Coin) -> Coin:
    """Convert $coin to its base denomination, or return it unchanged if that is not possible."""
    try:
        base_denom = registry.get_base_denom(coin.denom)
        return convert_coin(registry, coin, base_denom)
    except (DenomError, ZeroDivisionError) as e:
        logger.debug(f"Kept coin {coin} as is, because it cannot be normalized: {e}")
        return coin


def normalize_dec_coin(registry: DenomRegistry, coin: DecCoin) -> DecCoin:
    """Convert $coin to its base denomination, or return it unchanged if that is not possible."""
    try:
        base_denom = registry.get_base_denom(coin.denom)
        return convert_dec_coin(registry, coin, base_denom)
    except (DenomError, ZeroDivisionError) as e:
        logger.debug(f"Kept dec coin {coin} as is, because it cannot be normalized: {e}")
        return coin


def normalize_coins(registry: DenomRegistry, coins: Sequence[DecCoin] | None) -> list[Coin] | None:
    """Normalize each DecCoin in $coins and truncate it to a Coin.

    Order is kept and coins with the same denomination are not merged.

    Args:
        registry: Registry with unit multipliers and base denominations.
        coins: DecCoin(s) to normalize. None is passed through.

    Returns:
        list[Coin] | None: Normalized coins, or None when $coins is None.
    """
    if coins is None:
        return None

    result: list[Coin] = []
    for coin in coins:
        normalized, _ = normalize_dec_coin(registry, coin).truncate_decimal()
        result.append(normalized)

    return result
