"""Exact signed amounts parsed from ``TRNAMT`` values."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from fractions import Fraction

from ofx_reader.errors import InvalidAmountError


@dataclass(frozen=True, slots=True)
class Amount:
    """Arbitrary-precision amount backed by a ``Fraction``.

    Values accept plain decimals (``-20.50``), exponent form (``1e3``) and
    rationals (``1/3``). Nothing is rounded on the way in.
    """

    value: Fraction = field(default_factory=Fraction)

    @classmethod
    def parse(cls, text: str) -> Amount:
        """Parse ``text`` into an ``Amount`` or raise ``InvalidAmountError``."""

        cleaned = text.strip()
        if not cleaned:
            raise InvalidAmountError(text)
        try:
            return cls(Fraction(cleaned))
        except (ValueError, ZeroDivisionError) as exc:
            raise InvalidAmountError(text) from exc

    def sign(self) -> int:
        """Return ``-1``, ``0`` or ``1`` following the sign of the value."""

        return (self.value > 0) - (self.value < 0)

    def quantize(self, places: int = 2) -> Decimal:
        """Return the value as a ``Decimal`` rounded half-to-even to ``places`` digits.

        Rounding happens on the exact fraction, so no decimal context limits apply.
        """

        return _exact_decimal(round(self.value * 10**places), places)

    def __str__(self) -> str:
        value = self.value
        if value.denominator == 1:
            return str(value.numerator)
        remainder = value.denominator
        twos = fives = 0
        while remainder % 2 == 0:
            remainder //= 2
            twos += 1
        while remainder % 5 == 0:
            remainder //= 5
            fives += 1
        if remainder != 1:
            return f'{value.numerator}/{value.denominator}'
        places = max(twos, fives)
        scaled = value.numerator * 10**places // value.denominator
        return format(_exact_decimal(scaled, places), 'f')


def _exact_decimal(scaled: int, places: int) -> Decimal:
    """Build ``scaled * 10**-places`` digit by digit, without context rounding."""

    digits = tuple(int(char) for char in str(abs(scaled)))
    return Decimal((int(scaled < 0), digits, -places))
