"""Single-pass state machine projecting OFX markup events onto an ``Ofx``."""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import TYPE_CHECKING, assert_never

from ofx_reader.amount import Amount
from ofx_reader.dates import parse_datetime
from ofx_reader.errors import TokenStreamError
from ofx_reader.markup import CharacterData, CloseTag, OpenTag, iter_events
from ofx_reader.models import AccountKind, Ofx, Transaction, TransactionKind

if TYPE_CHECKING:  # pragma: no cover - typing helpers only
    from collections.abc import Iterable

    from ofx_reader.markup import Event

LOGGER = logging.getLogger(__name__)

TRANSACTION_TAG = 'STMTTRN'


class Field(Enum):
    """Target for the next character-data event."""

    NONE = auto()
    ACCOUNT_ID = auto()
    BRANCH_ID = auto()
    BANK_ID = auto()
    ACCOUNT_TYPE = auto()
    TRANS_AMOUNT = auto()
    TRANS_DATE_POSTED = auto()
    TRANS_USER_DATE = auto()
    TRANS_ID = auto()
    TRANS_DESC = auto()
    TRANS_MEMO = auto()


FIELD_TAGS: dict[str, Field] = {
    'ACCTID': Field.ACCOUNT_ID,
    'BRANCHID': Field.BRANCH_ID,
    'BANKID': Field.BANK_ID,
    'ACCTTYPE': Field.ACCOUNT_TYPE,
    'DTPOSTED': Field.TRANS_DATE_POSTED,
    'DTUSER': Field.TRANS_USER_DATE,
    'FITID': Field.TRANS_ID,
    'TRNAMT': Field.TRANS_AMOUNT,
    'NAME': Field.TRANS_DESC,
    'MEMO': Field.TRANS_MEMO,
}
"""Leaf tags that arm a field; names are matched case-sensitively."""


class DocumentWalker:
    """Consume markup events and assemble an ``Ofx`` aggregate.

    OFX v1 does not guarantee end tags, so open tags are tracked on an explicit
    stack and a close event pops everything above its matching start tag.
    """

    def __init__(self) -> None:
        self.ofx = Ofx()
        self.stack: list[str] = []
        self.armed = Field.NONE
        self.transaction: Transaction | None = None

    def feed(self, event: Event) -> None:
        """Process a single markup event."""

        match event:
            case OpenTag(name=name):
                self._open(name)
            case CharacterData(text=text):
                self._data(text.strip())
            case CloseTag(name=name):
                self._close(name)
            case _:
                LOGGER.debug('Unknown: %r', event)

    def _open(self, name: str) -> None:
        self.stack.append(name)
        field = FIELD_TAGS.get(name)
        if field is not None:
            self.armed = field
        elif name == TRANSACTION_TAG:
            if self.transaction is not None:
                LOGGER.debug('Discarding unsealed transaction %r', self.transaction.transaction_id)
            self.transaction = Transaction()

    def _data(self, text: str) -> None:
        field, self.armed = self.armed, Field.NONE
        match field:
            case Field.NONE:
                return
            case Field.ACCOUNT_ID:
                self.ofx.account_number = text
            case Field.BRANCH_ID:
                self.ofx.branch_code = text
            case Field.BANK_ID:
                self.ofx.bank_code = text
            case Field.ACCOUNT_TYPE:
                self.ofx.account_type = AccountKind.from_ofx(text)
            case (
                Field.TRANS_AMOUNT
                | Field.TRANS_DATE_POSTED
                | Field.TRANS_USER_DATE
                | Field.TRANS_ID
                | Field.TRANS_DESC
                | Field.TRANS_MEMO
            ):
                self._transaction_data(field, text)
            case _:
                assert_never(field)

    def _transaction_data(self, field: Field, text: str) -> None:
        txn = self.transaction
        if txn is None:
            LOGGER.debug('Ignoring %s outside of a transaction: %r', field.name, text)
            return
        match field:
            case Field.TRANS_DESC:
                txn.description = text
            case Field.TRANS_MEMO:
                txn.memo = text
            case Field.TRANS_ID:
                txn.transaction_id = text
            case Field.TRANS_DATE_POSTED:
                txn.posted_date = parse_datetime(text)
            case Field.TRANS_USER_DATE:
                txn.user_date = parse_datetime(text)
            case Field.TRANS_AMOUNT:
                txn.amount = Amount.parse(text)
                txn.kind = TransactionKind.for_amount(txn.amount)
            case _:  # pragma: no cover - only transaction fields are routed here
                raise AssertionError(field)

    def _close(self, name: str) -> None:
        while self.stack:
            popped = self.stack.pop()
            if popped == TRANSACTION_TAG:
                self._seal()
            if popped == name:
                return

    def _seal(self) -> None:
        if self.transaction is None:
            return
        self.ofx.transactions.append(self.transaction)
        self.transaction = None


def parse(events: Iterable[Event], *, strict: bool = True) -> Ofx:
    """Walk ``events`` and return the assembled ``Ofx``.

    ``InvalidAmountError`` and ``InvalidDateTimeError`` abort the walk. A
    ``TokenStreamError`` is re-raised with the partial aggregate attached when
    ``strict`` is set; otherwise the partial aggregate is returned.
    """

    walker = DocumentWalker()
    try:
        for event in events:
            walker.feed(event)
    except TokenStreamError as exc:
        exc.partial = walker.ofx
        if strict:
            raise
        LOGGER.warning('Markup stream truncated, keeping %d transactions: %s', len(walker.ofx.transactions), exc)
    return walker.ofx


def parse_text(text: str, *, strict: bool = True) -> Ofx:
    """Tokenize an OFX body (header already removed) and walk it."""

    return parse(iter_events(text), strict=strict)
