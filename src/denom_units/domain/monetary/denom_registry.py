from __future__ import annotations

import logging
from decimal import Decimal
from threading import RLock

from denom_units.domain.monetary.denom import DenomValidator, is_valid_denom, validate_denom
from denom_units.domain.monetary.errors import AlreadyRegisteredError, NotRegisteredError
from denom_units.utils.decimal_tools import DecimalLike, format_dec, to_dec

logger = logging.getLogger(__name__)


class DenomRegistry:
    """Maps denomination names to unit multipliers and to their base (smallest) denomination.

    Every unit multiplier expresses a denomination's size on one reference scale shared
    by all denominations in this registry. For example registering `atom` with unit 1 and
    `uatom` with unit 0.000001 means 1atom = 1000000uatom.

    The registry is append-only. Register all denominations during startup, then share the
    instance with converters and parsers. A lock guards every access, so registering while
    other threads read is safe too.
    """

    def __init__(self, denom_validator: DenomValidator = validate_denom):
        """Create an empty registry.

        Args:
            denom_validator: Predicate that raises `InvalidDenomError` for a bad denomination
                name. Defaults to `validate_denom`.
        """
        self._denom_validator = denom_validator
        self._lock = RLock()

        # Unit multiplier per denomination, in registration order
        self._units_by_denom: dict[str, Decimal] = {}

        # Base denomination per denomination (a base maps to itself)
        self._base_denom_by_denom: dict[str, str] = {}

    @property
    def denom_validator(self) -> DenomValidator:
        """Get the predicate used to validate denomination names."""
        return self._denom_validator

    # region Registration

    def register_denom(self, denom: str, unit: DecimalLike, base_denom: str, base_unit: DecimalLike) -> None:
        """Register $denom with its $unit together with its base denomination.

        If $base_denom already has a unit, it is overwritten with $base_unit. Only $denom
        itself is checked for duplicates.

        Args:
            denom: Denomination to register.
            unit: Unit multiplier of $denom (Decimal-like, nonnegative).
            base_denom: Smallest denomination of the same asset.
            base_unit: Unit multiplier of $base_denom (Decimal-like, nonnegative).

        Raises:
            InvalidDenomError: If $denom is not a valid denomination name.
            AlreadyRegisteredError: If $denom already has a unit. The registry stays unchanged.
            ValueError: If $unit or $base_unit is negative or not a number.
        """
        self._denom_validator(denom)

        # Convert before taking the lock, so a bad unit never leaves a partial registration
        unit_dec = self._to_unit(unit, "unit")
        base_unit_dec = self._to_unit(base_unit, "base_unit")

        with self._lock:
            # Raise: $denom can be registered only once
            if denom in self._units_by_denom:
                raise AlreadyRegisteredError(f"Cannot call `register_denom` because denom '{denom}' is already registered")

            self._units_by_denom[denom] = unit_dec
            self._units_by_denom[base_denom] = base_unit_dec
            self._base_denom_by_denom[denom] = base_denom
            self._base_denom_by_denom[base_denom] = base_denom

        logger.debug(f"Registered denom '{denom}' (unit {format_dec(unit_dec)}) with base denom '{base_denom}' (unit {format_dec(base_unit_dec)})")

    @staticmethod
    def _to_unit(value: DecimalLike, name: str) -> Decimal:
        result = to_dec(value)

        # Raise: unit multipliers are magnitudes, so they cannot be negative
        if result < 0:
            raise ValueError(f"Cannot call `register_denom` because ${name} ({value}) is negative")

        return result

    # endregion

    # region Lookup

    def get_denom_unit(self, denom: str) -> Decimal | None:
        """Return the unit multiplier of $denom, or None.

        None is returned both for an invalid denomination name and for a valid name that
        was never registered.
        """
        if not is_valid_denom(denom, self._denom_validator):
            return None

        with self._lock:
            return self._units_by_denom.get(denom)

    def get_base_denom(self, denom: str) -> str:
        """Return the base denomination linked to $denom.

        Raises:
            NotRegisteredError: If $denom has no base denomination.
        """
        with self._lock:
            base_denom = self._base_denom_by_denom.get(denom)

        if not base_denom:
            raise NotRegisteredError(f"Cannot call `get_base_denom` because denom '{denom}' has no registered base denom")

        return base_denom

    def is_registered(self, denom: str) -> bool:
        """Check whether $denom has a unit multiplier."""
        return self.get_denom_unit(denom) is not None

    def list_denoms(self) -> list[str]:
        """List all denominations with a unit multiplier, in registration order."""
        with self._lock:
            return list(self._units_by_denom.keys())

    # endregion

    def __contains__(self, denom: object) -> bool:
        return isinstance(denom, str) and self.is_registered(denom)

    def __len__(self) -> int:
        with self._lock:
            return len(self._units_by_denom)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({len(self)} denoms)"
