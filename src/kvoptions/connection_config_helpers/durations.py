"""Duration parsing for textual configuration sources."""

from __future__ import annotations

import re

from ..config.errors import ConfigurationError

_SECONDS_PATTERN = re.compile(r"^-?\d+(?:\.\d+)?$")
_SEGMENT = r"(\d+(?:\.\d+)?)(us|µs|ms|s|m|h)"
_DURATION_PATTERN = re.compile(rf"^(-?)((?:{_SEGMENT})+)$")
_SEGMENT_PATTERN = re.compile(_SEGMENT)

_UNIT_SECONDS = {
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}


def parse_duration(text: str, *, name: str = "duration") -> float:
    """
    Parse ``text`` into seconds.

    Bare numbers are seconds, so sentinels such as ``"-1"`` and ``"-2"`` keep
    their exact value. Otherwise ``text`` is one or more ``<number><unit>``
    segments with units ``us``, ``ms``, ``s``, ``m`` and ``h``, e.g. ``"1m30s"``.

    Raises:
        ConfigurationError: If ``text`` is not a duration
    """
    stripped = text.strip()
    if _SECONDS_PATTERN.match(stripped):
        return float(stripped)

    match = _DURATION_PATTERN.match(stripped)
    if match is None:
        raise ConfigurationError.invalid_format(name, text, "a number of seconds or a value like '250ms', '5s', '1m30s'")
    seconds = sum(float(value) * _UNIT_SECONDS[unit] for value, unit in _SEGMENT_PATTERN.findall(match.group(2)))
    return -seconds if match.group(1) else seconds


__all__ = ["parse_duration"]
