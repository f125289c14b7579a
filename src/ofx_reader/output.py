"""Output utilities for rendering parsed statements as CSV or JSON."""

from __future__ import annotations

import csv
import io
import json
from datetime import UTC
from pathlib import Path
from typing import TYPE_CHECKING

from ofx_reader.config import OUTPUT_FORMATS, ReaderSettings, default_settings
from ofx_reader.models import Ofx, ProcessingResult

if TYPE_CHECKING:  # pragma: no cover - typing helpers only
    from datetime import datetime

    from ofx_reader.models import Transaction

CSV_FIELDS = ['transaction_id', 'date', 'kind', 'description', 'memo', 'amount']


def format_date(value: datetime | None, settings: ReaderSettings) -> str:
    """Render ``value`` with the configured format, converting to UTC if asked."""

    if value is None:
        return ''
    if settings.timezone == 'utc':
        value = value.astimezone(UTC)
    return value.strftime(settings.date_format)


def _transaction_row(txn: Transaction, settings: ReaderSettings) -> dict[str, str]:
    return {
        'transaction_id': txn.transaction_id,
        'date': format_date(txn.posted_date, settings),
        'kind': txn.kind.value,
        'description': txn.description,
        'memo': txn.memo,
        'amount': format(txn.amount.quantize(settings.amount_places), 'f'),
    }


def build_csv_payload(statement: Ofx, settings: ReaderSettings | None = None) -> str:
    """Serialize the statement's transactions into a CSV string."""

    if not isinstance(statement, Ofx):
        raise TypeError('statement must be an Ofx instance')

    resolved = settings or default_settings()
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=CSV_FIELDS)
    writer.writeheader()
    for txn in statement.transactions:
        writer.writerow(_transaction_row(txn, resolved))
    return buffer.getvalue()


def build_json_payload(statement: Ofx, settings: ReaderSettings | None = None) -> str:
    """Serialize account identity and transactions into a JSON document."""

    if not isinstance(statement, Ofx):
        raise TypeError('statement must be an Ofx instance')

    resolved = settings or default_settings()
    transactions: list[dict[str, object]] = []
    for txn in statement.transactions:
        row: dict[str, object] = dict(_transaction_row(txn, resolved))
        # Exact value alongside the rounded display amount.
        row['exact_amount'] = str(txn.amount)
        row['user_date'] = format_date(txn.user_date, resolved) or None
        transactions.append(row)
    payload = {
        'account_type': statement.account_type.value,
        'bank_code': statement.bank_code,
        'branch_code': statement.branch_code,
        'account_number': statement.account_number,
        'transactions': transactions,
    }
    return json.dumps(payload, indent=2) + '\n'


def render(statement: Ofx, fmt: str, settings: ReaderSettings | None = None) -> str:
    """Render ``statement`` in the requested output format."""

    if fmt == 'csv':
        return build_csv_payload(statement, settings)
    if fmt == 'json':
        return build_json_payload(statement, settings)
    raise ValueError(f'Unsupported output format: {fmt!r} (expected one of {", ".join(OUTPUT_FORMATS)})')


def write_output(
    result: ProcessingResult,
    *,
    output_path: Path | str | None,
    fmt: str = 'csv',
    settings: ReaderSettings | None = None,
) -> str:
    """Write the rendered payload to ``output_path`` if provided and return it."""

    if not isinstance(result, ProcessingResult):
        raise TypeError('invalid processing result')

    payload = render(result.statement, fmt, settings)
    if output_path:
        path = Path(output_path)
        with path.open('w', encoding='utf-8', newline='') as handle:
            handle.write(payload)
    return payload
