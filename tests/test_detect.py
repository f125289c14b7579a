from pathlib import Path

import pytest

from ofx_reader.detect import detect_format, gather_jobs, iter_jobs, looks_like_ofx
from ofx_reader.models import SourceFormat


def test_detect_format_extensions(tmp_path: Path) -> None:
    ofx_file = tmp_path / 'statement.ofx'
    ofx_file.write_text('ofx', encoding='utf-8')
    qfx_file = tmp_path / 'STATEMENT.QFX'
    qfx_file.write_text('qfx', encoding='utf-8')
    csv_file = tmp_path / 'statement.csv'
    csv_file.write_text('header\n', encoding='utf-8')

    assert detect_format(ofx_file) is SourceFormat.OFX
    assert detect_format(qfx_file) is SourceFormat.OFX
    assert detect_format(csv_file) is SourceFormat.UNKNOWN


def test_sniffing_recognizes_content(tmp_path: Path) -> None:
    download = tmp_path / 'download.txt'
    download.write_text('\nOFXHEADER:100\nDATA:OFXSGML\n', encoding='utf-8')
    notes = tmp_path / 'notes.txt'
    notes.write_text('nothing to see', encoding='utf-8')

    assert looks_like_ofx(download)
    assert not looks_like_ofx(notes)
    assert not looks_like_ofx(tmp_path / 'missing.txt')
    assert detect_format(download) is SourceFormat.UNKNOWN
    assert detect_format(download, sniff=True) is SourceFormat.OFX


def test_iter_jobs_directory(tmp_path: Path) -> None:
    first = tmp_path / 'a.ofx'
    first.write_text('data', encoding='utf-8')
    second = tmp_path / 'b.qfx'
    second.write_text('data', encoding='utf-8')
    (tmp_path / 'notes.txt').write_text('<OFX>', encoding='utf-8')
    (tmp_path / 'nested.ofx').mkdir()

    jobs = list(iter_jobs(tmp_path))
    assert [job.source_path for job in jobs] == [first, second]
    assert all(job.source_format is SourceFormat.OFX for job in jobs)


def test_iter_jobs_file_sniffs_unknown_extension(tmp_path: Path) -> None:
    export = tmp_path / 'export.dat'
    export.write_text('<OFX></OFX>', encoding='utf-8')
    (job,) = iter_jobs(export)
    assert job.source_path == export


def test_iter_jobs_file_unknown_extension(tmp_path: Path) -> None:
    weird = tmp_path / 'weird.ext'
    weird.write_text('x', encoding='utf-8')

    with pytest.raises(ValueError, match='Unsupported input format'):
        list(iter_jobs(weird))


def test_iter_jobs_missing_path(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        list(iter_jobs(tmp_path / 'unknown'))


def test_gather_jobs_multiple_targets(tmp_path: Path) -> None:
    single = tmp_path / 'first.ofx'
    single.write_text('data', encoding='utf-8')
    folder = tmp_path / 'nested'
    folder.mkdir()
    other = folder / 'second.qfx'
    other.write_text('data', encoding='utf-8')

    jobs = gather_jobs([single, folder])
    assert {job.source_path for job in jobs} == {single, other}
