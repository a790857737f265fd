"""Game state built from a scene: the player, the sprites and the validated map."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Sequence

from cubcaster.core import SCREEN_WIDTH, CubError, Tile, build_trig_tables
from cubcaster.scene import Scene, load_scene

PLANE_SCALE = 0.66


@dataclass
class Player:
    """Position, view direction, camera plane and the currently held controls."""

    x: float
    y: float
    dir_x: float
    dir_y: float
    plane_x: float
    plane_y: float
    mov_forward: bool = False
    mov_backward: bool = False
    rot_left: bool = False
    rot_right: bool = False
    strafe_left: bool = False
    strafe_right: bool = False

    @classmethod
    def from_tile(cls, row: int, col: int, tile: int) -> Player:
        """Place a player in the centre of a start tile, facing its direction."""
        kind = Tile(tile)
        if not kind.is_player:
            raise ValueError(f"not a player start tile: {kind.name}")
        dir_x = float((kind is Tile.PLAYER_E) - (kind is Tile.PLAYER_W))
        dir_y = float((kind is Tile.PLAYER_S) - (kind is Tile.PLAYER_N))
        return cls(
            x=col + 0.5,
            y=row + 0.5,
            dir_x=dir_x,
            dir_y=dir_y,
            plane_x=-dir_y * PLANE_SCALE,
            plane_y=dir_x * PLANE_SCALE,
        )


@dataclass
class Sprite:
    """A billboard standing in the centre of a map cell, with its render state."""

    x: float
    y: float
    distance: float = 0.0
    transform_x: float = 0.0
    transform_y: float = 0.0
    width: int = 0
    height: int = 0
    screen_x: int = 0
    draw_start_y: int = 0
    draw_start_x: int = 0
    draw_end_y: int = 0
    draw_end_x: int = 0
    tex_x: int = 0
    tex_y: int = 0


def _tile_at(tiles: Sequence[Sequence[int]], row: int, col: int) -> int:
    if 0 <= row < len(tiles) and 0 <= col < len(tiles[row]):
        return tiles[row][col]
    return Tile.EMPTY


def _neighbours(tiles: Sequence[Sequence[int]], row: int, col: int) -> list[int]:
    return [
        _tile_at(tiles, row - 1, col),
        _tile_at(tiles, row + 1, col),
        _tile_at(tiles, row, col - 1),
        _tile_at(tiles, row, col + 1),
    ]


def _check_enclosed(
    tiles: Sequence[Sequence[int]],
    row: int,
    col: int,
    width: int,
    edge_message: str,
    void_message: str,
) -> None:
    if row in (0, len(tiles) - 1) or col in (0, width - 1):
        raise CubError(edge_message)
    if Tile.EMPTY in _neighbours(tiles, row, col):
        raise CubError(void_message)


def validate_map(tiles: Sequence[Sequence[int]]) -> tuple[Player, list[Sprite]]:
    """Check that the map is closed and return its single player and its sprites."""
    width = max((len(row) for row in tiles), default=0)
    player: Player | None = None
    sprites: list[Sprite] = []
    for row, line in enumerate(tiles):
        for col, value in enumerate(line):
            tile = Tile(value)
            if tile is Tile.FLOOR:
                _check_enclosed(
                    tiles, row, col, width,
                    "Floor on the map edge not allowed", "Map not closed",
                )
            elif tile is Tile.DOOR:
                _check_enclosed(
                    tiles, row, col, width,
                    "Door on the map edge not allowed", "Door into nothing. Not good.",
                )
                if Tile.DOOR in _neighbours(tiles, row, col):
                    raise CubError("Double doors are too fancy for this project")
            elif tile is Tile.SPRITE:
                _check_enclosed(
                    tiles, row, col, width,
                    "Sprite on the map edge not allowed",
                    "Sprite next to void. Don't do that.",
                )
                sprites.append(Sprite(x=col + 0.5, y=row + 0.5))
            elif tile.is_player:
                _check_enclosed(
                    tiles, row, col, width,
                    "Player on the map edge not allowed",
                    "Player next to void. Don't do that.",
                )
                if player is not None:
                    raise CubError("Multiple players detected")
                player = Player.from_tile(row, col, tile)
    if player is None:
        raise CubError("No player")
    return player, sprites


@dataclass
class World:
    """The scene being played together with the mutable game state."""

    scene: Scene
    player: Player
    sprites: list[Sprite] = field(default_factory=list)
    z_buffer: list[float] = field(default_factory=lambda: [0.0] * SCREEN_WIDTH)
    trig: tuple[tuple[float, ...], tuple[float, ...], tuple[float, ...]] = field(
        default_factory=build_trig_tables, repr=False
    )

    @property
    def tiles(self) -> list[list[Tile]]:
        """The scene's tile map; doors are toggled in place."""
        return self.scene.tiles

    @classmethod
    def from_scene(cls, scene: Scene) -> World:
        """Validate the scene's map and set up the player and sprites."""
        player, sprites = validate_map(scene.tiles)
        return cls(scene=scene, player=player, sprites=sprites)

    @classmethod
    def load(cls, path: str | os.PathLike[str]) -> World:
        """Read a ``.cub`` file and build the world from it."""
        return cls.from_scene(load_scene(path))