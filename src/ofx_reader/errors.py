"""Exception hierarchy raised while reading OFX documents."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - typing helpers only
    from ofx_reader.models import Ofx


class OfxError(ValueError):
    """Base class for all OFX reading failures."""


class InvalidAmountError(OfxError):
    """Raised when ``TRNAMT`` text is not a valid signed decimal."""

    def __init__(self, text: str) -> None:
        super().__init__(f'Unable to parse {text!r} as an amount')
        self.text = text


class InvalidDateTimeError(OfxError):
    """Raised when a date field matches none of the supported layouts."""

    def __init__(self, text: str) -> None:
        super().__init__(f'Invalid OFX date/time string: {text!r}')
        self.text = text


class TokenStreamError(OfxError):
    """Raised when the markup stream breaks before a clean end of input.

    ``partial`` holds whatever aggregate had been built before the failure,
    once the walker has attached it.
    """

    def __init__(self, message: str, offset: int, partial: Ofx | None = None) -> None:
        super().__init__(f'{message} (at offset {offset})')
        self.offset = offset
        self.partial = partial


class InvalidHeaderError(OfxError):
    """Raised when the OFX header block is missing or malformed."""
