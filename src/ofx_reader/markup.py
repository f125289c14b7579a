"""Markup events for OFX bodies, produced by the ``ofxtools`` tokenizer."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeAlias

from ofx_reader.errors import TokenStreamError
from ofxtools.Parser import ParseError, TreeBuilder

if TYPE_CHECKING:  # pragma: no cover - typing helpers only
    from collections.abc import Iterator

_POSITION = re.compile(r'position=\[(?P<start>\d+):\d+\]')


@dataclass(frozen=True, slots=True)
class OpenTag:
    name: str


@dataclass(frozen=True, slots=True)
class CloseTag:
    name: str


@dataclass(frozen=True, slots=True)
class CharacterData:
    text: str


Event: TypeAlias = OpenTag | CloseTag | CharacterData


class EventBuilder(TreeBuilder):
    """``TreeBuilder`` that records events instead of building elements.

    ``ofxtools`` handles both SGML (v1, optional end tags) and XML (v2) bodies,
    strips surrounding whitespace and closes data-bearing leaves itself.
    """

    def __init__(self) -> None:
        super().__init__()
        self.events: list[Event] = []

    def start(self, tag: str, attrs: dict[str, str]) -> None:  # type: ignore[override]
        self.events.append(OpenTag(tag))

    def data(self, data: str) -> None:
        self.events.append(CharacterData(data))

    def end(self, tag: str) -> None:  # type: ignore[override]
        self.events.append(CloseTag(tag))


def _error_offset(exc: ParseError) -> int:
    match = _POSITION.search(str(exc))
    return int(match.group('start')) if match else 0


def iter_events(text: str) -> Iterator[Event]:
    """Yield markup events for ``text``.

    Events recognized before a tokenizer failure are yielded first, then
    ``TokenStreamError`` is raised. A trailing ``<`` with no closing ``>``
    counts as a truncated stream.
    """

    builder = EventBuilder()
    try:
        builder.feed(text)
    except ParseError as exc:
        yield from builder.events
        raise TokenStreamError(str(exc), _error_offset(exc)) from exc

    yield from builder.events
    last_open = text.rfind('<')
    if last_open != -1 and text.find('>', last_open) == -1:
        raise TokenStreamError('Unterminated tag', last_open)
