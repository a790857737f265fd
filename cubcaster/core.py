"""Shared constants, tile kinds, key codes and small helpers."""

from __future__ import annotations

import math
from enum import IntEnum

MOV_STEP = 0.0666
ROT_STEP = 0.0785
SCREEN_HEIGHT = 768
SCREEN_WIDTH = 1024
FOV_DEG = 90.0

_DIGITS = frozenset("0123456789")
_HEX_DIGITS = frozenset("0123456789ABCDEF")


class CubError(Exception):
    """Raised when a scene, texture or map cannot be used."""


class Tile(IntEnum):
    """Kinds of map cell."""

    EMPTY = 0
    FLOOR = 1
    WALL = 2
    SPRITE = 3
    DOOR = 4
    DOOR_OPEN = 5
    PLAYER_N = 6
    PLAYER_E = 7
    PLAYER_S = 8
    PLAYER_W = 9

    @property
    def is_player(self) -> bool:
        """True for the four player start tiles."""
        return self in _PLAYER_TILES


_PLAYER_TILES = frozenset(
    {Tile.PLAYER_N, Tile.PLAYER_E, Tile.PLAYER_S, Tile.PLAYER_W}
)


class Key(IntEnum):
    """X11 key codes the game reacts to."""

    W = 119
    E = 101
    A = 97
    S = 115
    D = 100
    F = 102
    ARROW_LEFT = 65361
    ARROW_RIGHT = 65363
    ESCAPE = 65307


def is_wall_door_closed(tile: int) -> bool:
    """Return True if the tile blocks movement and rays (wall or closed door)."""
    return tile in (Tile.WALL, Tile.DOOR)


def is_hex(text: str) -> bool:
    """Return True if every character is an upper-case hexadecimal digit."""
    return all(ch in _HEX_DIGITS for ch in text)


def is_number(text: str) -> bool:
    """Return True if every character is an ASCII decimal digit."""
    return all(ch in _DIGITS for ch in text)


def encode_rgb(red: int, green: int, blue: int) -> int:
    """Pack three 8-bit channels into a 0xRRGGBB integer."""
    for name, value in (("red", red), ("green", green), ("blue", blue)):
        if not 0 <= value <= 255:
            raise ValueError(f"{name} channel out of range: {value}")
    return red << 16 | green << 8 | blue


def dir_x(degrees: float) -> float:
    """X component of the unit vector pointing at the given angle."""
    return math.cos(degrees / 180 * math.pi)


def dir_y(degrees: float) -> float:
    """Y component of the unit vector pointing at the given angle."""
    return math.sin(degrees / 180 * math.pi)


def build_trig_tables() -> tuple[tuple[float, ...], tuple[float, ...], tuple[float, ...]]:
    """Return (sin, cos, tan) tables of absolute values for whole degrees 0..359."""
    radians = [degree / 180 * math.pi for degree in range(360)]
    sin_table = tuple(abs(math.sin(r)) for r in radians)
    cos_table = tuple(abs(math.cos(r)) for r in radians)
    tan_table = tuple(abs(math.tan(r)) for r in radians)
    return sin_table, cos_table, tan_table