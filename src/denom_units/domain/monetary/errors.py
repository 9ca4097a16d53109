from __future__ import annotations


class DenomError(ValueError):
    """Base class for all denomination, conversion and parsing errors."""


class InvalidDenomError(DenomError):
    """Denomination name does not match the denomination grammar."""


class AlreadyRegisteredError(DenomError):
    """Denomination already has a unit multiplier recorded in the registry."""


class SourceNotRegisteredError(DenomError):
    """Coin's own denomination has no unit multiplier in the registry."""


class DestNotRegisteredError(DenomError):
    """Target denomination of a conversion has no unit multiplier in the registry."""


class NotRegisteredError(DenomError):
    """Denomination has no base-denomination link in the registry."""


class CoinParseError(DenomError):
    """Text could not be parsed as `<amount><denom>` coin(s)."""


class PrecisionOverflowError(DenomError):
    """Decimal or integer operand exceeds the fixed bit budget."""
