from __future__ import annotations

from decimal import Decimal

from denom_units.domain.monetary.denom import DenomValidator, validate_denom
from denom_units.utils.decimal_tools import DecimalLike, check_int_bit_len, dec_sub, format_dec, to_dec, truncate_to_int


class Coin:
    """Amount of one denomination that cannot be split below one unit of that denomination.

    Attributes:
        denom (str): Denomination name, for example "uatom".
        amount (int): Nonnegative number of whole units.
    """

    __slots__ = ("_denom", "_amount", "_denom_validator")

    def __init__(self, denom: str, amount: int, denom_validator: DenomValidator = validate_denom):
        """Initialize a Coin.

        Args:
            denom: Denomination name matching the denomination grammar.
            amount: Nonnegative integer amount.
            denom_validator: Predicate that checks $denom. Defaults to `validate_denom`.

        Raises:
            InvalidDenomError: If $denom is not a valid denomination name.
            TypeError: If $amount is not an int.
            ValueError: If $amount is negative.
            PrecisionOverflowError: If $amount is longer than `MAX_INT_BIT_LEN` bits.
        """
        denom_validator(denom)

        # Raise: bool is an int subclass but never a meaningful amount
        if not isinstance(amount, int) or isinstance(amount, bool):
            raise TypeError(f"Cannot call `Coin.__init__` because $amount is not int (got type '{type(amount).__name__}')")

        # Raise: coins never carry negative amounts
        if amount < 0:
            raise ValueError(f"Cannot call `Coin.__init__` because $amount ({amount}) is negative")

        self._denom = denom
        self._denom_validator = denom_validator
        self._amount = check_int_bit_len(amount)

    @property
    def denom(self) -> str:
        """Get the denomination name."""
        return self._denom

    @property
    def amount(self) -> int:
        """Get the integer amount."""
        return self._amount

    @property
    def denom_validator(self) -> DenomValidator:
        """Get the predicate this coin's denom was checked with."""
        return self._denom_validator

    def is_zero(self) -> bool:
        return self._amount == 0

    def __eq__(self, other) -> bool:
        """Check equality with another Coin (same denom and amount)."""
        if not isinstance(other, Coin):
            return False
        return self.denom == other.denom and self.amount == other.amount

    def __hash__(self) -> int:
        return hash((self.denom, self.amount))

    def __str__(self) -> str:
        """Return string like '1000000uatom'."""
        return f"{self.amount}{self.denom}"

    def __repr__(self) -> str:
        """Return string like 'Coin(uatom, 1000000)'."""
        return f"{self.__class__.__name__}({self.denom}, {self.amount})"


class DecCoin:
    """Amount of one denomination that may carry a fractional part.

    The amount is a fixed-point decimal with exactly 18 fractional digits (see `to_dec`).

    Attributes:
        denom (str): Denomination name, for example "atom".
        amount (Decimal): Nonnegative fixed-point amount.
    """

    __slots__ = ("_denom", "_amount", "_denom_validator")

    def __init__(self, denom: str, amount: DecimalLike, denom_validator: DenomValidator = validate_denom):
        """Initialize a DecCoin.

        Args:
            denom: Denomination name matching the denomination grammar.
            amount: Nonnegative Decimal-like amount. Digits beyond 18 fractional places are rounded half to even.
            denom_validator: Predicate that checks $denom. Defaults to `validate_denom`.

        Raises:
            InvalidDenomError: If $denom is not a valid denomination name.
            ValueError: If $amount cannot be converted to Decimal or is negative.
            PrecisionOverflowError: If $amount does not fit into `MAX_DEC_BIT_LEN` bits.
        """
        denom_validator(denom)

        decimal_amount = to_dec(amount)

        # Raise: coins never carry negative amounts
        if decimal_amount < 0:
            raise ValueError(f"Cannot call `DecCoin.__init__` because $amount ({amount}) is negative")

        self._denom = denom
        self._denom_validator = denom_validator
        self._amount = decimal_amount.copy_abs()

    @property
    def denom(self) -> str:
        """Get the denomination name."""
        return self._denom

    @property
    def amount(self) -> Decimal:
        """Get the fixed-point amount."""
        return self._amount

    @property
    def denom_validator(self) -> DenomValidator:
        """Get the predicate this coin's denom was checked with."""
        return self._denom_validator

    def is_zero(self) -> bool:
        return self._amount == 0

    def truncate_decimal(self) -> tuple[Coin, DecCoin]:
        """Split this DecCoin into its whole part and the fractional change.

        Returns:
            tuple[Coin, DecCoin]: Coin with the amount truncated toward zero, and a DecCoin
            of the same denom holding the dropped fraction.
        """
        whole = truncate_to_int(self._amount)
        change = dec_sub(self._amount, whole)
        return Coin(self._denom, whole, self._denom_validator), DecCoin(self._denom, change, self._denom_validator)

    @classmethod
    def from_coin(cls, coin: Coin) -> DecCoin:
        """Create a DecCoin carrying the same denom and amount as $coin."""
        return cls(coin.denom, coin.amount, coin.denom_validator)

    def __eq__(self, other) -> bool:
        """Check equality with another DecCoin (same denom and amount)."""
        if not isinstance(other, DecCoin):
            return False
        return self.denom == other.denom and self.amount == other.amount

    def __hash__(self) -> int:
        return hash((self.denom, self.amount))

    def __str__(self) -> str:
        """Return string like '1.500000000000000000atom'."""
        return f"{format_dec(self.amount)}{self.denom}"

    def __repr__(self) -> str:
        """Return string like 'DecCoin(atom, 1.500000000000000000)'."""
        return f"{self.__class__.__name__}({self.denom}, {format_dec(self.amount)})"
