__version__ = "0.0.1"

from denom_units.domain.monetary.coin import Coin, DecCoin
from denom_units.domain.monetary.denom import validate_denom
from denom_units.domain.monetary.denom_registry import DenomRegistry
from denom_units.domain.monetary.errors import (
    AlreadyRegisteredError,
    CoinParseError,
    DenomError,
    DestNotRegisteredError,
    InvalidDenomError,
    NotRegisteredError,
    PrecisionOverflowError,
    SourceNotRegisteredError,
)
from denom_units.conversion.converter import convert_coin, convert_dec_coin
from denom_units.conversion.normalizer import normalize_coin, normalize_dec_coin, normalize_coins
from denom_units.conversion.parser import parse_coin_normalized, parse_coins_normalized

__all__ = [
    "Coin",
    "DecCoin",
    "DenomRegistry",
    "validate_denom",
    "convert_coin",
    "convert_dec_coin",
    "normalize_coin",
    "normalize_dec_coin",
    "normalize_coins",
    "parse_coin_normalized",
    "parse_coins_normalized",
    "DenomError",
    "InvalidDenomError",
    "AlreadyRegisteredError",
    "SourceNotRegisteredError",
    "DestNotRegisteredError",
    "NotRegisteredError",
    "CoinParseError",
    "PrecisionOverflowError",
]
