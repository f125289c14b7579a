"""Shared data models used across OFX Reader modules."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from ofx_reader.amount import Amount

if TYPE_CHECKING:  # pragma: no cover - type-checking imports only
    from datetime import datetime
    from pathlib import Path


class SourceFormat(str, Enum):
    """Input formats recognized by the discovery step."""

    OFX = 'ofx'
    UNKNOWN = 'unknown'


class AccountKind(str, Enum):
    """Account type as reported by ``ACCTTYPE``."""

    UNKNOWN = 'unknown'
    CHECKING = 'checking'
    SAVINGS = 'savings'

    @classmethod
    def from_ofx(cls, value: str) -> AccountKind:
        """Map an OFX ``ACCTTYPE`` value onto an ``AccountKind``."""

        return ACCOUNT_TYPE_MAP.get(value.strip().upper(), cls.UNKNOWN)


ACCOUNT_TYPE_MAP: dict[str, AccountKind] = {
    'CHECKING': AccountKind.CHECKING,
    'SAVINGS': AccountKind.SAVINGS,
}


class TransactionKind(str, Enum):
    """Direction of a statement line, derived from the sign of its amount."""

    DEBIT = 'debit'
    CREDIT = 'credit'

    @classmethod
    def for_amount(cls, amount: Amount) -> TransactionKind:
        """Return ``CREDIT`` for strictly positive amounts, ``DEBIT`` otherwise."""

        return cls.CREDIT if amount.sign() > 0 else cls.DEBIT


@dataclass(slots=True)
class Transaction:
    """One ``STMTTRN`` statement line."""

    kind: TransactionKind = TransactionKind.DEBIT
    description: str = ''
    memo: str = ''
    posted_date: datetime | None = None
    user_date: datetime | None = None
    transaction_id: str = ''
    amount: Amount = field(default_factory=Amount)

    def __str__(self) -> str:
        posted = self.posted_date.isoformat() if self.posted_date else '?'
        return f'{self.kind.value} {posted} {self.transaction_id or "-"} {self.description!r} {self.amount}'


@dataclass(slots=True)
class Ofx:
    """Parsed statement: account identity and transactions in document order."""

    account_type: AccountKind = AccountKind.UNKNOWN
    bank_code: str = ''
    branch_code: str = ''
    account_number: str = ''
    transactions: list[Transaction] = field(default_factory=list)

    def __str__(self) -> str:
        lines = [
            f'Account Type: {self.account_type.value}',
            f'Bank Code: {self.bank_code}',
            f'Branch Code: {self.branch_code}',
            f'Account Number: {self.account_number}',
        ]
        lines.extend(str(txn) for txn in self.transactions)
        return '\n'.join(lines)


@dataclass(slots=True)
class ProcessingJob:
    """Description of the work needed to read an input file."""

    source_path: Path
    source_format: SourceFormat


@dataclass(slots=True)
class ProcessingResult:
    """Outcome of reading an input file."""

    job: ProcessingJob
    statement: Ofx = field(default_factory=Ofx)
    ofx_version: int | None = None
    warnings: list[str] = field(default_factory=list)

    def has_transactions(self) -> bool:
        """Return ``True`` if the statement contains at least one transaction."""

        return bool(self.statement.transactions)

    def summary(self) -> str:
        """Return a human readable summary string for logging/UX."""

        count = len(self.statement.transactions)
        account = self.statement.account_number
        account_text = f'account {account}' if account else 'no account info'
        return f'{self.job.source_path.name}: {count} transactions, {account_text}'
