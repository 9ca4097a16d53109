from __future__ import annotations

import re
from typing import Callable

from denom_units.domain.monetary.errors import InvalidDenomError

# Denomination name: a letter followed by 2..127 letters, digits or one of "/:._-"
DENOM_REGEX = r"[a-zA-Z][a-zA-Z0-9/:._-]{2,127}"

DENOM_PATTERN = re.compile(rf"^{DENOM_REGEX}$")

# Pure predicate that accepts a denomination name or raises `InvalidDenomError`
DenomValidator = Callable[[str], None]


def validate_denom(denom: str) -> None:
    """Check that $denom is a well-formed denomination name.

    Args:
        denom: Name to check, for example "uatom" or "ibc/27394FB092D2".

    Raises:
        InvalidDenomError: If $denom is not a string or does not match `DENOM_PATTERN`.
    """
    if not isinstance(denom, str) or not DENOM_PATTERN.fullmatch(denom):
        raise InvalidDenomError(f"Invalid denom: '{denom}'. Expected a letter followed by 2 to 127 letters, digits or '/:._-'")


def is_valid_denom(denom: str, validator: DenomValidator = validate_denom) -> bool:
    """Return True when $validator accepts $denom."""
    try:
        validator(denom)
    except InvalidDenomError:
        return False
    return True
