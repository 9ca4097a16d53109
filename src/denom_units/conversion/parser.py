from __future__ import annotations

import re

from denom_units.conversion.normalizer import normalize_coins, normalize_dec_coin
from denom_units.domain.monetary.coin import Coin, DecCoin
from denom_units.domain.monetary.denom import DenomValidator, validate_denom
from denom_units.domain.monetary.denom_registry import DenomRegistry
from denom_units.domain.monetary.errors import CoinParseError, InvalidDenomError
from denom_units.utils.decimal_tools import dec_from_str

# Amount: optional sign, digits, optional "." followed by digits
DEC_AMOUNT_REGEX = r"[+-]?[0-9]+(?:\.[0-9]+)?"

# Denom candidate: everything after the amount up to whitespace or a comma. The name itself is
# checked by a `DenomValidator`, so the grammar follows whichever validator the caller uses.
DENOM_CANDIDATE_REGEX = r"[^\s,0-9.+-][^\s,]*"

# Single coin: amount immediately followed by denom, for example "1.5atom"
DEC_COIN_PATTERN = re.compile(rf"({DEC_AMOUNT_REGEX})({DENOM_CANDIDATE_REGEX})")

# Coins in a list are separated by a comma (optionally surrounded by whitespace) or by whitespace
COIN_SEPARATOR_PATTERN = re.compile(r"\s*,\s*|\s+")


def parse_dec_coin(text: str, denom_validator: DenomValidator = validate_denom) -> DecCoin:
    """Parse one `<amount><denom>` expression like "1.5atom" into a DecCoin.

    Surrounding whitespace is ignored.

    Args:
        text: Coin expression.
        denom_validator: Predicate that checks the denom part. Defaults to `validate_denom`.

    Raises:
        CoinParseError: If $text is empty or malformed, the denom is rejected by $denom_validator,
            the amount has more than 18 fractional digits, exceeds the decimal bit budget, or is negative.
    """
    if not isinstance(text, str):
        raise CoinParseError(f"Cannot call `parse_dec_coin` because $text is not str (got type '{type(text).__name__}')")

    match = DEC_COIN_PATTERN.fullmatch(text.strip())
    if match is None:
        raise CoinParseError(f"Invalid decimal coin expression: '{text}'")

    amount_str, denom = match.groups()

    # Raise: the denom must be accepted by the validator in use
    try:
        denom_validator(denom)
    except InvalidDenomError as e:
        raise CoinParseError(f"Invalid denom '{denom}' in decimal coin expression '{text}'") from e

    # Raise: the amount must fit into the fixed-point representation
    try:
        amount = dec_from_str(amount_str)
    except ValueError as e:
        raise CoinParseError(f"Invalid amount '{amount_str}' in decimal coin expression '{text}'") from e

    # Raise: coins never carry negative amounts
    if amount < 0:
        raise CoinParseError(f"Negative amount '{amount_str}' in decimal coin expression '{text}'")

    return DecCoin(denom, amount, denom_validator)


def parse_dec_coins(text: str, denom_validator: DenomValidator = validate_denom) -> list[DecCoin]:
    """Parse a list of `<amount><denom>` expressions like "1atom,2uatom" or "1atom 2uatom".

    Order is kept and duplicate denominations stay separate entries. Empty or blank $text
    gives an empty list.

    Raises:
        CoinParseError: If any element is malformed (an empty element between two commas included).
    """
    if not isinstance(text, str):
        raise CoinParseError(f"Cannot call `parse_dec_coins` because $text is not str (got type '{type(text).__name__}')")

    text = text.strip()
    if not text:
        return []

    result: list[DecCoin] = []
    for index, element in enumerate(COIN_SEPARATOR_PATTERN.split(text)):
        try:
            result.append(parse_dec_coin(element, denom_validator))
        except CoinParseError as e:
            raise CoinParseError(f"Invalid coin #{index} ('{element}') in coins expression '{text}'") from e

    return result


def parse_coin_normalized(registry: DenomRegistry, text: str) -> Coin:
    """Parse one coin expression, convert it to its base denomination and truncate it.

    The denom is checked with the validator of $registry. Example: with `atom` (unit 1) and
    base `uatom` (unit 0.000001) registered, "1.5atom" gives Coin("uatom", 1500000).

    Raises:
        CoinParseError: If $text is not a valid coin expression.
    """
    dec_coin = parse_dec_coin(text, registry.denom_validator)
    coin, _ = normalize_dec_coin(registry, dec_coin).truncate_decimal()
    return coin


def parse_coins_normalized(registry: DenomRegistry, text: str) -> list[Coin]:
    """Parse a coins expression, then convert each coin to its base denomination and truncate it.

    Raises:
        CoinParseError: If any element of $text is not a valid coin expression.
    """
    return normalize_coins(registry, parse_dec_coins(text, registry.denom_validator))
