"""Configuration utilities and dataclasses for OFX Reader."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

DEFAULT_CONFIG_PATH: Path = Path.home() / '.local/etc/ofx_reader.toml'
"""Default location for the user provided TOML configuration file."""

OUTPUT_FORMATS = ('csv', 'json')
TIMEZONE_MODES = ('utc', 'original')

BASE_SETTINGS: dict[str, Any] = {
    'strict_token_stream': True,
    'amount_places': 2,
    'date_format': '%Y-%m-%d',
    'output_format': 'csv',
    'timezone': 'utc',
}
"""Default settings merged with any local overrides."""


@dataclass(frozen=True, slots=True)
class ReaderSettings:
    """Structured settings controlling parsing strictness and output rendering."""

    strict_token_stream: bool = True
    amount_places: int = 2
    date_format: str = '%Y-%m-%d'
    output_format: str = 'csv'
    timezone: str = 'utc'


def _require(raw: Mapping[str, Any], key: str, kind: type) -> Any:
    """Return ``raw[key]`` (or its base default), rejecting values of the wrong TOML type."""

    value = raw.get(key, BASE_SETTINGS[key])
    # bool is an int subclass; neither may stand in for the other
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise ValueError(f'{key} must be a {kind.__name__}, got {value!r}')
    return value


def _prepare_settings(raw: Mapping[str, Any]) -> ReaderSettings:
    """Convert a raw dictionary into ``ReaderSettings`` with proper types."""

    output_format = _require(raw, 'output_format', str).lower()
    if output_format not in OUTPUT_FORMATS:
        raise ValueError(f'Unsupported output_format: {output_format!r}')
    timezone_mode = _require(raw, 'timezone', str).lower()
    if timezone_mode not in TIMEZONE_MODES:
        raise ValueError(f'Unsupported timezone mode: {timezone_mode!r}')
    places = _require(raw, 'amount_places', int)
    if places < 0:
        raise ValueError('amount_places must not be negative')
    return ReaderSettings(
        strict_token_stream=_require(raw, 'strict_token_stream', bool),
        amount_places=places,
        date_format=_require(raw, 'date_format', str),
        output_format=output_format,
        timezone=timezone_mode,
    )


def default_settings() -> ReaderSettings:
    """Return settings built from ``BASE_SETTINGS`` alone."""

    return _prepare_settings(BASE_SETTINGS)


def load_settings(path: Path | None = None) -> ReaderSettings:
    """Load ``ReaderSettings`` from the provided TOML file path."""

    config_path = (path or DEFAULT_CONFIG_PATH).expanduser()
    if not config_path.is_file():
        raise FileNotFoundError(f'Configuration file not found: {config_path}')

    with config_path.open('rb') as handle:
        overrides = tomllib.load(handle)

    # Settings may live at the top level or under a [reader] table.
    section = overrides.get('reader', overrides)
    return _prepare_settings({**BASE_SETTINGS, **section})
