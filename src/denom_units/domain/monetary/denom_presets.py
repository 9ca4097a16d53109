from decimal import Decimal

from denom_units.domain.monetary.denom_registry import DenomRegistry


# Staking token: 1 atom = 1_000_000 uatom
ATOM = "atom"
UATOM = "uatom"
ATOM_UNIT = Decimal("1")
UATOM_UNIT = Decimal("0.000001")


def register_atom_denoms(registry: DenomRegistry) -> None:
    """Register `atom` with its base denomination `uatom` in $registry.

    Raises:
        AlreadyRegisteredError: If `atom` is already registered in $registry.
    """
    registry.register_denom(ATOM, ATOM_UNIT, UATOM, UATOM_UNIT)
