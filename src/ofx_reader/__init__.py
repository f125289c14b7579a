"""Read OFX bank/brokerage statements into typed Python objects.

>>> from ofx_reader import parse_text
>>> statement = parse_text('<OFX><ACCTID>1234<STMTTRN><TRNAMT>10.00</STMTTRN></OFX>')
>>> statement.account_number, len(statement.transactions)
('1234', 1)
"""

from __future__ import annotations

from importlib import metadata as _metadata

from ofx_reader.amount import Amount
from ofx_reader.dates import parse_datetime
from ofx_reader.errors import InvalidAmountError, InvalidDateTimeError, InvalidHeaderError, OfxError, TokenStreamError
from ofx_reader.models import AccountKind, Ofx, Transaction, TransactionKind
from ofx_reader.walker import parse, parse_text

__all__ = [
    'AccountKind',
    'Amount',
    'InvalidAmountError',
    'InvalidDateTimeError',
    'InvalidHeaderError',
    'Ofx',
    'OfxError',
    'TokenStreamError',
    'Transaction',
    'TransactionKind',
    'parse',
    'parse_datetime',
    'parse_text',
]


def __getattr__(name: str) -> str:
    """Provide ``__version__`` from the installed distribution metadata."""

    if name == '__version__':
        return _metadata.version('ofx-reader')
    raise AttributeError(name)
