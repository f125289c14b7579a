import json
from datetime import UTC, datetime, timedelta, timezone
from pathlib import Path

import pytest

from ofx_reader.amount import Amount
from ofx_reader.config import ReaderSettings
from ofx_reader.models import AccountKind, Ofx, ProcessingJob, ProcessingResult, SourceFormat, Transaction, TransactionKind
from ofx_reader.output import build_csv_payload, build_json_payload, format_date, render, write_output

PST = timezone(timedelta(hours=-8), 'PST')


def _statement() -> Ofx:
    return Ofx(
        account_type=AccountKind.CHECKING,
        bank_code='987654321',
        account_number='098-121',
        transactions=[
            Transaction(
                kind=TransactionKind.DEBIT,
                description='Coffee, large',
                memo='Latte',
                posted_date=datetime(2024, 1, 1, 20, 0, tzinfo=PST),
                transaction_id='1',
                amount=Amount.parse('-3.5'),
            ),
            Transaction(
                kind=TransactionKind.CREDIT,
                description='Deposit',
                posted_date=datetime(2024, 1, 2, tzinfo=UTC),
                transaction_id='2',
                amount=Amount.parse('1/3'),
            ),
        ],
    )


def test_build_csv_payload() -> None:
    payload = build_csv_payload(_statement())
    lines = payload.splitlines()
    assert lines[0] == 'transaction_id,date,kind,description,memo,amount'
    assert lines[1] == '1,2024-01-02,debit,"Coffee, large",Latte,-3.50'
    assert lines[2] == '2,2024-01-02,credit,Deposit,,0.33'
    assert payload.count('\n') == 3


def test_csv_keeps_original_zone_and_places() -> None:
    settings = ReaderSettings(timezone='original', amount_places=3, date_format='%d/%m/%Y')
    lines = build_csv_payload(_statement(), settings).splitlines()
    assert lines[1].endswith('01/01/2024,debit,"Coffee, large",Latte,-3.500')


def test_build_json_payload() -> None:
    document = json.loads(build_json_payload(_statement()))
    assert document['account_type'] == 'checking'
    assert document['account_number'] == '098-121'
    assert document['branch_code'] == ''
    first, second = document['transactions']
    assert first['amount'] == '-3.50'
    assert first['exact_amount'] == '-3.5'
    assert first['user_date'] is None
    assert second['exact_amount'] == '1/3'


def test_format_date_handles_missing_value() -> None:
    assert format_date(None, ReaderSettings()) == ''


def test_render_rejects_unknown_format() -> None:
    with pytest.raises(ValueError, match='Unsupported output format'):
        render(_statement(), 'xml')


def test_write_output_writes_file(tmp_path: Path) -> None:
    job = ProcessingJob(source_path=tmp_path / 'input.ofx', source_format=SourceFormat.OFX)
    result = ProcessingResult(job=job, statement=_statement())
    output_file = tmp_path / 'out.json'
    payload = write_output(result, output_path=output_file, fmt='json')
    with output_file.open('r', encoding='utf-8', newline='') as handle:
        assert handle.read() == payload


def test_build_csv_payload_requires_statement() -> None:
    with pytest.raises(TypeError):
        build_csv_payload([])  # type: ignore[arg-type]


def test_write_output_requires_processing_result() -> None:
    with pytest.raises(TypeError):
        write_output(object(), output_path=None)  # type: ignore[arg-type]


def test_csv_renders_amounts_wider_than_decimal_context() -> None:
    statement = Ofx(transactions=[Transaction(transaction_id='big', amount=Amount.parse('1e30'))])
    lines = build_csv_payload(statement).splitlines()
    assert lines[1].endswith(',1000000000000000000000000000000.00')
