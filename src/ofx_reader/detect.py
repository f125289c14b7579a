"""Input discovery helpers for OFX Reader."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ofx_reader.models import ProcessingJob, SourceFormat

if TYPE_CHECKING:  # pragma: no cover - typing helpers only
    from collections.abc import Iterable, Iterator
    from pathlib import Path

FORMAT_MAP: dict[str, SourceFormat] = {
    '.ofx': SourceFormat.OFX,
    '.qfx': SourceFormat.OFX,
}
"""Mapping between file suffixes and supported ``SourceFormat`` values."""

SNIFF_BYTES = 512
OFX_MARKERS = (b'OFXHEADER', b'<OFX>')


def looks_like_ofx(path: Path) -> bool:
    """Return ``True`` if the first bytes of ``path`` carry an OFX header or root tag."""

    try:
        with path.open('rb') as handle:
            head = handle.read(SNIFF_BYTES)
    except OSError:
        return False
    upper = head.upper()
    return any(marker in upper for marker in OFX_MARKERS)


def detect_format(path: Path, *, sniff: bool = False) -> SourceFormat:
    """Infer the ``SourceFormat`` for ``path`` from its suffix.

    With ``sniff`` set, files with an unknown suffix are recognized by content.
    """

    fmt = FORMAT_MAP.get(path.suffix.lower(), SourceFormat.UNKNOWN)
    if fmt is SourceFormat.UNKNOWN and sniff and looks_like_ofx(path):
        return SourceFormat.OFX
    return fmt


def iter_jobs(target: Path) -> Iterator[ProcessingJob]:
    """Yield ``ProcessingJob`` entries for ``target`` (file or directory).

    Explicitly named files are sniffed when their suffix is unknown; directory
    entries are only picked up by suffix.
    """

    expanded = target.expanduser()
    if expanded.is_file():
        fmt = detect_format(expanded, sniff=True)
        if fmt is SourceFormat.UNKNOWN:
            raise ValueError(f'Unsupported input format: {expanded.suffix or expanded.name}')
        yield ProcessingJob(source_path=expanded, source_format=fmt)
        return

    if not expanded.is_dir():
        raise FileNotFoundError(f'Input path not found: {expanded}')

    for entry in sorted(expanded.iterdir()):
        if entry.is_file() and detect_format(entry) is SourceFormat.OFX:
            yield ProcessingJob(source_path=entry, source_format=SourceFormat.OFX)


def gather_jobs(paths: Iterable[Path]) -> list[ProcessingJob]:
    """Collect processing jobs for all provided ``paths``."""

    jobs: list[ProcessingJob] = []
    for path in paths:
        jobs.extend(iter_jobs(path))
    return jobs
