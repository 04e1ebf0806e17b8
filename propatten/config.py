"""INI-style path configuration and big-endian binary grid readers."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from os import PathLike
from typing import Dict, List, Optional, Union

_SYNOPTIC_HOURS = (0, 6, 12, 18)
_ERA_LEVELS = 22
_MONTHS = 12
_BLANKS = " \t"

PathArg = Union[str, "PathLike[str]"]


def nearest_synoptic_hour(hour: int) -> str:
    """Return, as two digits, the last of 00/06/12/18 lying within 24 hours of ``hour``."""
    chosen = 0
    for candidate in _SYNOPTIC_HOURS:
        if abs(candidate - hour) < 24:
            chosen = candidate
    return f"{chosen:02d}"


@dataclass(frozen=True)
class ParsedLine:
    """One meaningful configuration line: a section header or a key/value pair."""

    section: Optional[str] = None
    key: str = ""
    value: str = ""


def parse_line(line: str) -> Optional[ParsedLine]:
    """Parse one configuration line; return None for blank, comment or malformed lines."""
    if not line:
        return None

    end_pos = len(line) - 1
    hash_pos = line.find("#")
    if hash_pos != -1:
        if hash_pos == 0:
            return None
        end_pos = hash_pos - 1

    open_pos = line.find("[")
    if open_pos != -1:
        close_pos = line.find("]")
        if close_pos != -1:
            start = open_pos + 1
            length = close_pos - 1
            name = line[start:start + length] if length >= 0 else line[start:]
            return ParsedLine(section=name)

    span = 1 - end_pos
    body = line if span < 0 else line[:span]
    eq_pos = body.find("=")
    if eq_pos == -1:
        return None

    key = body[:eq_pos].strip(_BLANKS)
    if not key:
        return None

    span = end_pos - eq_pos
    value = body[eq_pos + 1:eq_pos + 1 + span] if span >= 0 else body[eq_pos + 1:]
    value = value.strip(_BLANKS)
    for control in ("\r", "\n"):
        index = value.find(control)
        if index > 0:
            value = value[:index] + value[index + 1:]
    return ParsedLine(key=key, value=value)


@dataclass
class IniConfig:
    """Sectioned key/value settings read from a simple INI file."""

    settings: Dict[str, Dict[str, str]] = field(default_factory=dict)

    def read(self, filename: PathArg) -> None:
        """Replace the settings with those read from ``filename``.

        Raises OSError when the file cannot be opened.
        """
        self.settings.clear()
        with open(filename, encoding="utf-8", newline="") as handle:
            text = handle.read()
        lines = text.split("\n")
        if lines and lines[-1] == "":
            lines.pop()

        section = ""
        pairs: Dict[str, str] = {}
        for line in lines:
            parsed = parse_line(line)
            if parsed is None:
                continue
            if parsed.section is not None:
                section = parsed.section
            if section in self.settings:
                pairs[parsed.key] = parsed.value
                self.settings[section] = dict(pairs)
            else:
                pairs = {}
                self.settings[section] = {}

    def get(self, section: str, item: str, default: str) -> str:
        """Return the value of ``item`` in ``section``, or ``default``."""
        return self.settings.get(section, {}).get(item, default)

    def dir_path(self, key: str) -> str:
        """Return the directory configured under ``key`` in the ``path`` section."""
        return self.get("path", key, "")


def float_from_big_endian(data: bytes) -> float:
    """Decode the first four bytes of ``data`` as a big-endian IEEE single."""
    if len(data) < 4:
        raise ValueError(f"need 4 bytes, got {len(data)}")
    return struct.unpack(">f", bytes(data[:4]))[0]


def read_era15_hm(path: PathArg, month: int, ilat: int, ilong: int) -> List[float]:
    """Read the 22 level values for ``month`` (1-12) from a big-endian grid file.

    ``ilat`` and ``ilong`` are accepted but not used. A month outside 1-12
    yields zeros. Raises OSError if the file cannot be opened and ValueError
    if it is too short.
    """
    count = _ERA_LEVELS * _MONTHS
    with open(path, "rb") as handle:
        payload = handle.read(4 * count)
    if len(payload) < 4 * count:
        raise ValueError(f"{path}: expected {4 * count} bytes, got {len(payload)}")
    values = struct.unpack(f">{count}f", payload)
    rows = (values[level * _MONTHS:(level + 1) * _MONTHS] for level in range(_ERA_LEVELS))
    if not 1 <= month <= _MONTHS:
        return [0.0] * _ERA_LEVELS
    return [row[month - 1] for row in rows]