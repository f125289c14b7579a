"""Command-line interface for OFX Reader."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from ofx_reader import __version__ as pkg_version
from ofx_reader.config import DEFAULT_CONFIG_PATH, OUTPUT_FORMATS, ReaderSettings, default_settings, load_settings
from ofx_reader.detect import gather_jobs
from ofx_reader.errors import OfxError
from ofx_reader.models import ProcessingResult
from ofx_reader.output import render, write_output
from ofx_reader.processors.ofx_processor import process_ofx

LOGGER = logging.getLogger('ofx_reader.cli')
if not LOGGER.handlers:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
    LOGGER.addHandler(handler)
LOGGER.setLevel(logging.INFO)
LOGGER.propagate = False


def _emit(message: str, args: argparse.Namespace, *, verbose_only: bool = False, error: bool = False) -> None:
    """Log ``message`` honoring ``--quiet``/``--verbose`` flags."""

    if verbose_only and not args.verbose:
        return
    if args.quiet and not error:
        return
    level = logging.ERROR if error else logging.INFO
    LOGGER.log(level, message)


def _resolve_settings(args: argparse.Namespace) -> ReaderSettings:
    if args.config is not None:
        return load_settings(args.config)
    if DEFAULT_CONFIG_PATH.expanduser().is_file():
        return load_settings()
    return default_settings()


def _destination(result: ProcessingResult, args: argparse.Namespace, fmt: str) -> Path | None:
    if args.stdout:
        return None
    if args.output is not None:
        return Path(args.output)
    source = result.job.source_path
    if args.output_dir is not None:
        return Path(args.output_dir) / f'{source.stem}.{fmt}'
    return source.with_name(f'{source.stem}.{fmt}')


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='Read OFX/QFX statements into CSV or JSON')
    parser.add_argument('targets', nargs='+', type=Path, help='Input files or directories')
    parser.add_argument('-c', '--config', type=Path, help='Path to configuration TOML')
    parser.add_argument('-o', '--output', type=Path, help='Path to write the rendered output')
    parser.add_argument('--output-dir', type=Path, help='Directory to write per-file outputs')
    parser.add_argument('-f', '--format', choices=OUTPUT_FORMATS, help='Output format (default from config)')
    parser.add_argument('--stdout', action='store_true', help='Print rendered output to stdout')
    parser.add_argument(
        '--lenient',
        action='store_true',
        help='Keep transactions read before a truncated or corrupt markup stream',
    )
    parser.add_argument('-V', '--version', action='version', version=f'%(prog)s {pkg_version}')
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument('-q', '--quiet', action='store_true', help='Suppress informational output')
    verbosity.add_argument('-v', '--verbose', action='store_true', help='Print verbose progress details')
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    if args.output and args.output_dir:
        raise ValueError('Use either --output or --output-dir, not both')
    if args.stdout and (args.output or args.output_dir):
        raise ValueError('--stdout is incompatible with --output or --output-dir')
    settings = _resolve_settings(args)
    fmt = args.format or settings.output_format
    strict = settings.strict_token_stream and not args.lenient
    jobs = gather_jobs(args.targets)
    if args.output and len(jobs) != 1:
        raise ValueError('--output can only be used when a single job is specified')

    failures = 0
    for job in jobs:
        try:
            result = process_ofx(job, strict=strict)
        except (OfxError, OSError) as exc:
            _emit(f'Error processing {job.source_path}: {exc}', args, error=True)
            failures += 1
            continue
        _emit(result.summary(), args)
        for warning in result.warnings:
            _emit(f'Warning: {warning}', args, error=True)
        if result.ofx_version:
            _emit(f'OFX version {result.ofx_version}', args, verbose_only=True)
        destination = _destination(result, args, fmt)
        if destination is None:
            sys.stdout.write(render(result.statement, fmt, settings))
            continue
        destination.parent.mkdir(parents=True, exist_ok=True)
        write_output(result, output_path=destination, fmt=fmt, settings=settings)
        _emit(f'Wrote {destination}', args, verbose_only=True)
    return 1 if failures else 0


if __name__ == '__main__':  # pragma: no cover
    raise SystemExit(main())
