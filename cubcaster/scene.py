"""Reader for ``.cub`` scene descriptions: textures, colours and the tile map."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable, Iterable, Sequence

from cubcaster.core import CubError, Tile, encode_rgb, is_number
from cubcaster.xpm import Texture
from cubcaster.xpm import load_texture as _load_xpm_texture

TextureLoader = Callable[[str], Texture]

_TEXTURE_FIELDS = {
    "NO": "north",
    "EA": "east",
    "SO": "south",
    "WE": "west",
    "DO": "door",
    "S": "sprite",
}
_COLOR_FIELDS = {"F": "floor", "C": "ceiling"}
_MAP_LINE_STARTS = (" ", "1", "2", "\n")
_TILE_CHARS = {
    " ": Tile.EMPTY,
    "0": Tile.FLOOR,
    "1": Tile.WALL,
    "2": Tile.SPRITE,
    "D": Tile.DOOR,
    "N": Tile.PLAYER_N,
    "E": Tile.PLAYER_E,
    "S": Tile.PLAYER_S,
    "W": Tile.PLAYER_W,
}


@dataclass
class Scene:
    """Everything a ``.cub`` file describes.

    ``tiles[row][column]`` holds the map; every row has the same length,
    short rows being padded with empty tiles.
    """

    north: Texture
    east: Texture
    south: Texture
    west: Texture
    door: Texture
    sprite: Texture
    floor: int
    ceiling: int
    tiles: list[list[Tile]]

    @property
    def height(self) -> int:
        """Number of map rows."""
        return len(self.tiles)

    @property
    def width(self) -> int:
        """Number of map columns."""
        return len(self.tiles[0]) if self.tiles else 0


def is_map_line(line: str) -> bool:
    """Return True if the line can belong to the tile map."""
    return line.startswith(_MAP_LINE_STARTS)


def is_texture_id(word: str) -> bool:
    """Return True for the texture identifiers NO, EA, SO, WE, DO and S."""
    return word in _TEXTURE_FIELDS


def parse_color(words: Sequence[str]) -> int:
    """Decode the words following ``F`` or ``C`` into a 0xRRGGBB colour.

    Spaces and newlines are dropped, the rest is split on commas (empty
    pieces are ignored) and must give exactly three numbers from 0 to 255.
    """
    joined = "".join(words).replace(" ", "").replace("\n", "")
    parts = [part for part in joined.split(",") if part]
    if len(parts) != 3 or not all(is_number(part) for part in parts):
        raise CubError(f"invalid colour: {joined!r}")
    red, green, blue = (int(part) for part in parts)
    if not all(0 <= value <= 255 for value in (red, green, blue)):
        raise CubError(f"colour channel out of range: {joined!r}")
    return encode_rgb(red, green, blue)


def _decode_row(text: str, width: int) -> list[Tile]:
    row: list[Tile] = []
    for char in text:
        try:
            row.append(_TILE_CHARS[char])
        except KeyError:
            raise CubError(f"invalid character {char!r} in map") from None
    row.extend([Tile.EMPTY] * (width - len(row)))
    return row


class _SceneBuilder:
    def __init__(self, load_texture: TextureLoader) -> None:
        self._load_texture = load_texture
        self.textures: dict[str, Texture] = {}
        self.colors: dict[str, int] = {}
        self.rows: list[str] = []
        self.blank_rows = 0

    @property
    def map_found(self) -> bool:
        return bool(self.rows)

    def feed(self, line: str) -> None:
        if is_map_line(line) and (self.map_found or not line.startswith("\n")):
            self.rows.append(line.removesuffix("\n"))
            return
        words = [word for word in line.split(" ") if word]
        if not words:
            if self.map_found:
                self.blank_rows += 1
            return
        first = words[0]
        if self.map_found and (is_texture_id(first) or first in _COLOR_FIELDS):
            raise CubError(f"scene element {first!r} after the map")
        if is_texture_id(first) and len(words) in (2, 3):
            self._set_texture(words)
        elif first in _COLOR_FIELDS:
            self._set_color(words)
        elif first == "\n" and not self.map_found:
            return
        else:
            raise CubError(f"unexpected line in scene: {line.rstrip()!r}")

    def _set_texture(self, words: list[str]) -> None:
        if len(words) == 3 and not words[2].startswith("\n"):
            raise CubError(f"trailing text after texture path: {words[2]!r}")
        name = _TEXTURE_FIELDS[words[0]]
        if name in self.textures:
            raise CubError(f"texture {words[0]!r} given twice")
        self.textures[name] = self._load_texture(words[1].strip("\n"))

    def _set_color(self, words: list[str]) -> None:
        color = parse_color(words[1:])
        name = _COLOR_FIELDS[words[0]]
        if name in self.colors:
            raise CubError(f"colour {words[0]!r} given twice")
        self.colors[name] = color

    def build(self) -> Scene:
        missing = [
            name
            for name in (*_TEXTURE_FIELDS.values(), *_COLOR_FIELDS.values())
            if name not in self.textures and name not in self.colors
        ]
        if missing or not self.map_found:
            what = ", ".join(missing + ([] if self.map_found else ["map"]))
            raise CubError(f"scene not complete, missing: {what}")
        width = max(len(row) for row in self.rows)
        tiles = [_decode_row(row, width) for row in self.rows]
        tiles.extend([Tile.EMPTY] * width for _ in range(self.blank_rows))
        return Scene(tiles=tiles, **self.textures, **self.colors)


def parse_scene(lines: Iterable[str], load_texture: TextureLoader) -> Scene:
    """Build a scene from lines that keep their trailing newlines.

    ``load_texture`` is called with each texture path and returns its
    texture; its errors propagate.
    """
    builder = _SceneBuilder(load_texture)
    for line in lines:
        builder.feed(line)
    return builder.build()


def load_scene(path: str | os.PathLike[str]) -> Scene:
    """Read a ``.cub`` file and the ``.xpm`` textures it names."""
    try:
        with open(path, "rb") as handle:
            return parse_scene(
                (raw.decode("latin-1") for raw in handle), _load_xpm_texture
            )
    except OSError as exc:
        raise CubError(f"cannot read scene {os.fspath(path)!r}: {exc}") from exc