from decimal import Decimal
from threading import Barrier, Thread

import pytest

from denom_units.domain.monetary.denom_registry import DenomRegistry
from denom_units.domain.monetary.errors import AlreadyRegisteredError, InvalidDenomError, NotRegisteredError
from tests.helpers.helper_registry import create_atom_registry


def test_register_denom_records_units_and_base_links():
    registry = create_atom_registry()

    assert registry.get_denom_unit("atom") == Decimal("1")
    assert registry.get_denom_unit("uatom") == Decimal("0.000001")
    assert registry.get_base_denom("atom") == "uatom"
    assert registry.get_base_denom("uatom") == "uatom"
    assert registry.list_denoms() == ["atom", "uatom"]
    assert len(registry) == 2
    assert "atom" in registry


def test_register_denom_twice_keeps_original_unit():
    registry = create_atom_registry()

    with pytest.raises(AlreadyRegisteredError):
        registry.register_denom("atom", "1000", "natom", "0.000000001")

    # Registry must stay unchanged after the failed registration
    assert registry.get_denom_unit("atom") == Decimal("1")
    assert registry.get_denom_unit("natom") is None
    assert registry.get_base_denom("atom") == "uatom"
    assert registry.list_denoms() == ["atom", "uatom"]


def test_register_denom_rejects_invalid_name():
    registry = DenomRegistry()

    with pytest.raises(InvalidDenomError):
        registry.register_denom("1atom", 1, "uatom", "0.000001")

    assert len(registry) == 0


def test_register_denom_rejects_negative_unit():
    registry = DenomRegistry()

    with pytest.raises(ValueError, match="negative"):
        registry.register_denom("atom", "-1", "uatom", "0.000001")

    assert len(registry) == 0


def test_register_denom_overwrites_existing_base_unit():
    registry = create_atom_registry()

    # `uatom` is registered again as a base, with a different unit. This is accepted.
    registry.register_denom("matom", "0.001", "uatom", "0.000002")

    assert registry.get_denom_unit("uatom") == Decimal("0.000002")
    assert registry.get_base_denom("matom") == "uatom"
    assert registry.list_denoms() == ["atom", "uatom", "matom"]


def test_get_denom_unit_returns_none_for_invalid_and_unregistered_names():
    registry = create_atom_registry()

    assert registry.get_denom_unit("1atom") is None
    assert registry.get_denom_unit("btc") is None
    assert not registry.is_registered("btc")


def test_get_base_denom_raises_for_unknown_denom():
    registry = create_atom_registry()

    with pytest.raises(NotRegisteredError):
        registry.get_base_denom("btc")

    with pytest.raises(NotRegisteredError):
        registry.get_base_denom("")


def test_registry_uses_injected_validator():
    def only_upper_case(denom: str) -> None:
        if not denom.isupper():
            raise InvalidDenomError(f"Denom '{denom}' is not upper case")

    registry = DenomRegistry(denom_validator=only_upper_case)
    registry.register_denom("ATOM", 1, "UATOM", "0.000001")

    assert registry.get_denom_unit("ATOM") == Decimal("1")
    with pytest.raises(InvalidDenomError):
        registry.register_denom("atom", 1, "uatom", "0.000001")


def test_concurrent_registration_of_same_denom_succeeds_once():
    registry = DenomRegistry()
    thread_count = 16
    barrier = Barrier(thread_count)
    outcomes: list[str] = []

    def register(index: int) -> None:
        barrier.wait()
        try:
            registry.register_denom("atom", index + 1, "uatom", "0.000001")
            outcomes.append("ok")
        except AlreadyRegisteredError:
            outcomes.append("duplicate")

    threads = [Thread(target=register, args=(i,)) for i in range(thread_count)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert outcomes.count("ok") == 1
    assert outcomes.count("duplicate") == thread_count - 1
