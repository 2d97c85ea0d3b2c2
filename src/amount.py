import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Union

SCALE = 4
UNITS_PER_WHOLE = 10 ** SCALE

_QUANTUM = Decimal(1).scaleb(-SCALE)
_DECIMAL_PATTERN = re.compile(r"-?[0-9]+(?:\.[0-9]+)?")


@dataclass(frozen=True, order=True)
class Amount:
    """
    Exact fixed-point money value with 4 fractional digits.
    Stored as an integer count of 0.0001 units, so arithmetic never rounds.
    """

    units: int = 0

    @classmethod
    def parse(cls, text: str) -> "Amount":
        """
        Parse a plain decimal string such as "1.5" or "-0.0001".
        Raises ValueError for anything else, including exponents, digit
        separators and more than 4 significant fractional digits.
        """
        text = text.strip()
        if not _DECIMAL_PATTERN.fullmatch(text):
            raise ValueError(f"invalid amount {text!r}")
        return cls.from_decimal(Decimal(text))

    @classmethod
    def from_decimal(cls, value: Union[Decimal, int]) -> "Amount":
        value = Decimal(value)
        if not value.is_finite():
            raise ValueError(f"amount must be finite, got {value}")
        try:
            quantized = value.quantize(_QUANTUM)
        except InvalidOperation:
            raise ValueError(f"amount out of range: {value}") from None
        if quantized != value:
            raise ValueError(f"amount {value} has more than {SCALE} decimal places")
        return cls(int(quantized.scaleb(SCALE)))

    def to_decimal(self) -> Decimal:
        return Decimal(self.units).scaleb(-SCALE)

    def is_negative(self) -> bool:
        return self.units < 0

    def __add__(self, other: "Amount") -> "Amount":
        if not isinstance(other, Amount):
            return NotImplemented
        return Amount(self.units + other.units)

    def __sub__(self, other: "Amount") -> "Amount":
        if not isinstance(other, Amount):
            return NotImplemented
        return Amount(self.units - other.units)

    def __neg__(self) -> "Amount":
        return Amount(-self.units)

    def __str__(self) -> str:
        sign = "-" if self.units < 0 else ""
        whole, fraction = divmod(abs(self.units), UNITS_PER_WHOLE)
        return f"{sign}{whole}.{fraction:0{SCALE}d}"

    def __repr__(self) -> str:
        return f"Amount({self})"


ZERO = Amount(0)
