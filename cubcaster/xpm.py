"""Reader for the small XPM subset used as wall, door and sprite textures."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Iterable, NamedTuple

from cubcaster.core import CubError, is_hex, is_number

_INT_MAX = 2**31 - 1
_HEADER_LINE = 4
_COLOR_MARKER = " c #"
_MISSING_COLOR = -1


@dataclass
class Texture:
    """A decoded texture: ``pixels[row][column]`` holds 0xRRGGBB colours.

    Pixels whose key is not in the colour table hold -1; rows the file
    does not provide stay 0.
    """

    width: int
    height: int
    pixels: list[list[int]]
    colors: dict[str, int] = field(default_factory=dict)


class _Header(NamedTuple):
    width: int
    height: int
    n_keys: int
    key_len: int


def _parse_header(line: str) -> _Header:
    text = line.strip(',"\n')
    tokens = [token for token in text.split(" ") if token]
    if len(tokens) != 4 or not all(is_number(token) for token in tokens):
        raise CubError(f"invalid XPM header: {line.rstrip()!r}")
    values = [int(token) for token in tokens]
    if any(value > _INT_MAX for value in values):
        raise CubError(f"XPM header value too large: {line.rstrip()!r}")
    return _Header(*values)


def _unquote(line: str) -> str:
    return line.strip(",\n").strip('"')


def _parse_color(line: str, key_len: int) -> tuple[str, int]:
    text = _unquote(line)
    hex_part = text[key_len + len(_COLOR_MARKER):]
    if (
        len(text) != key_len + 10
        or text[key_len:key_len + len(_COLOR_MARKER)] != _COLOR_MARKER
        or not is_hex(hex_part)
    ):
        raise CubError(f"invalid XPM colour line: {line.rstrip()!r}")
    return text[:key_len], int(hex_part, 16)


def _parse_row(line: str, header: _Header, colors: dict[str, int]) -> list[int]:
    text = _unquote(line)
    if len(text) != header.width * header.key_len:
        raise CubError(f"XPM pixel row has wrong length: {line.rstrip()!r}")
    if header.key_len == 0:
        return [colors.get("", _MISSING_COLOR)] * header.width
    return [
        colors.get(text[start:start + header.key_len], _MISSING_COLOR)
        for start in range(0, len(text), header.key_len)
    ]


def parse_xpm(lines: Iterable[str]) -> Texture:
    """Decode XPM text given line by line.

    The fourth line holds ``width height colours chars-per-pixel``; the
    colour lines follow it directly, one line is skipped, then the pixel
    rows follow. Other lines are ignored.
    """
    header: _Header | None = None
    colors: dict[str, int] = {}
    pixels: list[list[int]] = []
    for number, line in enumerate(lines, start=1):
        if number == _HEADER_LINE:
            header = _parse_header(line)
            pixels = [[0] * header.width for _ in range(header.height)]
        elif header is None:
            continue
        elif number <= header.n_keys + _HEADER_LINE:
            key, value = _parse_color(line, header.key_len)
            colors[key] = value
        elif header.n_keys + 5 < number <= header.n_keys + 5 + header.height:
            pixels[number - 6 - header.n_keys] = _parse_row(line, header, colors)
    if header is None:
        raise CubError("XPM data ends before its header line")
    return Texture(header.width, header.height, pixels, colors)


def load_texture(path: str | os.PathLike[str]) -> Texture:
    """Read and decode an ``.xpm`` file."""
    name = os.fspath(path).strip("\n")
    if not name.endswith(".xpm"):
        raise CubError(f"texture is not an .xpm file: {name!r}")
    try:
        with open(name, encoding="latin-1", newline="") as handle:
            return parse_xpm(handle)
    except OSError as exc:
        raise CubError(f"cannot read texture {name!r}: {exc}") from exc