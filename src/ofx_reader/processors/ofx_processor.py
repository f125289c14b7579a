"""OFX/QFX processing pipeline for OFX Reader."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, BinaryIO

from ofx_reader.errors import InvalidHeaderError
from ofx_reader.models import ProcessingJob, ProcessingResult
from ofx_reader.walker import parse_text
from ofxtools.header import OFXHeaderError, parse_header

if TYPE_CHECKING:  # pragma: no cover - typing helpers only
    from ofx_reader.models import Ofx

LOGGER = logging.getLogger(__name__)


def read_body(handle: BinaryIO) -> tuple[int, str]:
    """Return ``(ofx_version, decoded_body)`` using the ``ofxtools`` header parser."""

    try:
        header, body = parse_header(handle)
    except (OFXHeaderError, UnicodeDecodeError) as exc:
        raise InvalidHeaderError(f'Invalid OFX header: {exc}') from exc
    version = int(getattr(header, 'version', 0) or 0)
    LOGGER.debug('Read OFX v%s body (%d characters)', version, len(body))
    return version, body


def _collect_warnings(statement: Ofx) -> list[str]:
    warnings_list: list[str] = []
    for index, txn in enumerate(statement.transactions, start=1):
        if txn.posted_date is None:
            label = txn.transaction_id or f'#{index}'
            warnings_list.append(f'Transaction {label} has no posted date.')
    return warnings_list


def process_ofx(job: ProcessingJob, *, strict: bool = True) -> ProcessingResult:
    """Process an OFX/QFX file and return a ``ProcessingResult``."""

    path = job.source_path
    with path.open('rb') as handle:
        version, body = read_body(handle)

    statement = parse_text(body, strict=strict)
    return ProcessingResult(
        job=job,
        statement=statement,
        ofx_version=version or None,
        warnings=_collect_warnings(statement),
    )
