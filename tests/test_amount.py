from decimal import Decimal
from fractions import Fraction

import pytest

from ofx_reader.amount import Amount
from ofx_reader.errors import InvalidAmountError


@pytest.mark.parametrize(
    ('text', 'expected'),
    [
        ('200.00', Fraction(200)),
        ('-52.25', Fraction(-209, 4)),
        ('+0.10', Fraction(1, 10)),
        ('1/3', Fraction(1, 3)),
        ('1.5e2', Fraction(150)),
        ('  -7  ', Fraction(-7)),
    ],
)
def test_parse_is_exact(text: str, expected: Fraction) -> None:
    assert Amount.parse(text).value == expected


@pytest.mark.parametrize('text', ['12.34.56', 'abc', '', '   ', '1/0', '$5.00', '1,000.00', 'nan'])
def test_parse_rejects_malformed(text: str) -> None:
    with pytest.raises(InvalidAmountError) as excinfo:
        Amount.parse(text)
    assert excinfo.value.text == text
    assert repr(text) in str(excinfo.value)


def test_sign() -> None:
    assert Amount.parse('0.01').sign() == 1
    assert Amount.parse('-0.01').sign() == -1
    assert Amount.parse('0.00').sign() == 0
    assert Amount().sign() == 0


def test_str_renders_terminating_values_positionally() -> None:
    assert str(Amount.parse('-20.50')) == '-20.5'
    assert str(Amount.parse('1500.00')) == '1500'
    assert str(Amount.parse('0.001')) == '0.001'
    assert str(Amount.parse('-0.125')) == '-0.125'
    assert str(Amount.parse('2/3')) == '2/3'


@pytest.mark.parametrize('text', ['-52.25', '0.1', '123456789012345678901234567890.123', '1/7', '-3e-9'])
def test_textual_form_reparses_to_equal_value(text: str) -> None:
    amount = Amount.parse(text)
    assert Amount.parse(str(amount)) == amount


def test_quantize_for_display() -> None:
    assert Amount.parse('-20.5').quantize(2) == Decimal('-20.50')
    assert Amount.parse('1/3').quantize(4) == Decimal('0.3333')
    assert Amount.parse('2.675').quantize(2) == Decimal('2.68')


def test_quantize_handles_values_beyond_decimal_context_precision() -> None:
    assert Amount.parse('1e30').quantize(2) == Decimal('1000000000000000000000000000000.00')
    assert Amount.parse('-123456789012345678901234567890.125').quantize(2) == Decimal(
        '-123456789012345678901234567890.12'
    )


def test_str_never_uses_exponent_notation() -> None:
    assert str(Amount.parse('1e-10')) == '0.0000000001'
    assert str(Amount.parse('1e30')) == '1000000000000000000000000000000'


def test_sum_stays_exact() -> None:
    total = sum((Amount.parse(text).value for text in ('0.1', '0.2')), Fraction(0))
    assert total == Fraction(3, 10)
