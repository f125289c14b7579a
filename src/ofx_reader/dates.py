"""Parsing for OFX ``DTxxx`` date/time values."""

from __future__ import annotations

import re
from datetime import UTC, datetime, timedelta, timezone
from decimal import Decimal, InvalidOperation

from ofx_reader.errors import InvalidDateTimeError

DATETIME_PATTERN = re.compile(
    r"""
    (?P<stamp>[0-9]+(?:\.[0-9]*)?)
    (?:\[\s*(?P<offset>[-+]?[0-9]+(?:\.[0-9]+)?)\s*(?::\s*(?P<name>[^\]]*?)\s*)?\])?
    """,
    re.VERBOSE,
)
"""Digits with an optional fraction, then an optional ``[offset:name]`` suffix."""

DATETIME_FORMATS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r'[0-9]{14}\.[0-9]+'), '%Y%m%d%H%M%S.%f'),
    (re.compile(r'[0-9]{14}'), '%Y%m%d%H%M%S'),
    (re.compile(r'[0-9]{8}'), '%Y%m%d'),
)
"""Supported layouts, tried in order; the first structural match wins."""

_MAX_FRACTION_DIGITS = 6


def _resolve_zone(offset: str | None, name: str | None, original: str) -> timezone:
    if offset is None:
        return UTC
    try:
        delta = timedelta(hours=float(Decimal(offset)))
    except InvalidOperation as exc:  # pragma: no cover - regex guards the shape
        raise InvalidDateTimeError(original) from exc
    if abs(delta) >= timedelta(hours=24):
        raise InvalidDateTimeError(original)
    if name:
        return timezone(delta, name)
    return timezone(delta)


def _trim_fraction(stamp: str) -> str:
    head, dot, fraction = stamp.partition('.')
    if not dot:
        return stamp
    return f'{head}.{fraction[:_MAX_FRACTION_DIGITS]}'


def parse_datetime(text: str) -> datetime:
    """Parse an OFX date/time string into a timezone-aware ``datetime``.

    ``20070329``, ``20070329131415`` and ``20070329131415.123`` are accepted,
    each optionally followed by ``[-8:PST]``. The bracketed offset is in hours
    and the digits are taken as wall-clock time in that zone; without a
    bracket the value is UTC.
    """

    cleaned = text.strip()
    match = DATETIME_PATTERN.fullmatch(cleaned)
    if match is None:
        raise InvalidDateTimeError(text)

    zone = _resolve_zone(match.group('offset'), match.group('name'), text)
    stamp = match.group('stamp')
    for layout, fmt in DATETIME_FORMATS:
        if not layout.fullmatch(stamp):
            continue
        try:
            parsed = datetime.strptime(_trim_fraction(stamp), fmt)
        except ValueError:
            continue
        return parsed.replace(tzinfo=zone)
    raise InvalidDateTimeError(text)
