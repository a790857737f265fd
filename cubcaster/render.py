"""Software renderer: textured walls by ray casting, billboard sprites and a minimap."""

from __future__ import annotations

import math
import sys
from array import array
from dataclasses import dataclass, field
from operator import attrgetter
from typing import NamedTuple, Sequence

from cubcaster.core import (
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    CubError,
    Tile,
    is_wall_door_closed,
)
from cubcaster.world import Sprite, World
from cubcaster.xpm import Texture

_COLOR_MASK = 0xFFFFFFFF
_NO_DELTA = 10000.0
_MIN_DISTANCE = 1e-9

_MINIMAP_SCALE = 10
_MINIMAP_RADIUS = 100
_MINIMAP_OUTSIDE = 0xFFFFFF
_MINIMAP_DEFAULT = 0xD3D3D3
_MINIMAP_COLORS = {
    Tile.EMPTY: 0xFFFFFF,
    Tile.WALL: 0x000000,
    Tile.DOOR: 0x00FF00,
    Tile.DOOR_OPEN: 0x0000FF,
    Tile.SPRITE: 0xFF00FF,
}
_MINIMAP_PLAYER = range(97, 103)
_MINIMAP_PLAYER_COLOR = 0xFF0000


@dataclass
class Frame:
    """A frame buffer of 0xRRGGBB pixels, ``width`` columns by ``height`` rows."""

    width: int = SCREEN_WIDTH
    height: int = SCREEN_HEIGHT
    pixels: list[int] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(f"invalid frame size {self.width}x{self.height}")
        self.pixels = [0] * (self.width * self.height)

    def _inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def put(self, x: int, y: int, color: int) -> None:
        """Set one pixel; positions outside the frame are ignored."""
        if self._inside(x, y):
            self.pixels[y * self.width + x] = color & _COLOR_MASK

    def get(self, x: int, y: int) -> int:
        """Return the pixel at (x, y)."""
        if not self._inside(x, y):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} frame")
        return self.pixels[y * self.width + x]

    def _put_column(self, x: int, colors: Sequence[int]) -> None:
        if not 0 <= x < self.width:
            return
        count = min(len(colors), self.height)
        self.pixels[x:x + count * self.width:self.width] = [
            color & _COLOR_MASK for color in colors[:count]
        ]

    def to_bytes(self) -> bytes:
        """Pixels row by row, four little-endian bytes each."""
        data = array("I")
        if data.itemsize == 4:
            data.extend(self.pixels)
            if sys.byteorder != "little":
                data.byteswap()
            return data.tobytes()
        return b"".join(pixel.to_bytes(4, "little") for pixel in self.pixels)


class _Hit(NamedTuple):
    map_x: int
    map_y: int
    side: int
    ray_dir_x: float
    ray_dir_y: float
    distance: float


def _trace(world: World, ray_n: int) -> _Hit:
    """Walk the grid along one screen column's ray until a wall or closed door."""
    p, tiles = world.player, world.tiles
    camera_x = 2 * ray_n / SCREEN_WIDTH - 1
    ray_x = p.dir_x + p.plane_x * camera_x
    ray_y = p.dir_y + p.plane_y * camera_x
    map_x, map_y = int(p.x), int(p.y)
    delta_x = _NO_DELTA if ray_x == 0 else abs(1 / ray_x)
    delta_y = _NO_DELTA if ray_y == 0 else abs(1 / ray_y)
    if ray_x < 0:
        step_x, side_x = -1, (p.x - map_x) * delta_x
    else:
        step_x, side_x = 1, (map_x + 1 - p.x) * delta_x
    if ray_y < 0:
        step_y, side_y = -1, (p.y - map_y) * delta_y
    else:
        step_y, side_y = 1, (map_y + 1 - p.y) * delta_y
    while True:
        if side_x < side_y:
            side_x += delta_x
            map_x += step_x
            side = 0
        else:
            side_y += delta_y
            map_y += step_y
            side = 1
        if not (0 <= map_y < len(tiles) and 0 <= map_x < len(tiles[map_y])):
            raise CubError("ray left the map")
        if is_wall_door_closed(tiles[map_y][map_x]):
            break
    distance = side_x - delta_x if side == 0 else side_y - delta_y
    return _Hit(map_x, map_y, side, ray_x, ray_y, distance)


def _choose_texture(world: World, hit: _Hit) -> Texture:
    scene = world.scene
    if world.tiles[hit.map_y][hit.map_x] == Tile.DOOR:
        return scene.door
    if hit.side:
        return scene.south if hit.ray_dir_y > 0 else scene.north
    return scene.east if hit.ray_dir_x > 0 else scene.west


def cast_ray(world: World, frame: Frame, ray_n: int) -> None:
    """Draw screen column ``ray_n`` (ceiling, textured wall, floor) and record its depth."""
    hit = _trace(world, ray_n)
    texture = _choose_texture(world, hit)
    p, scene = world.player, world.scene
    line_height = int(SCREEN_HEIGHT / max(hit.distance, _MIN_DISTANCE))
    half = SCREEN_HEIGHT // 2
    draw_start = max(half - line_height // 2, 0)
    draw_end = min(line_height // 2 + half, SCREEN_HEIGHT - 1)
    if hit.side:
        wall_x = p.x + hit.distance * hit.ray_dir_x
    else:
        wall_x = p.y + hit.distance * hit.ray_dir_y
    wall_x -= math.floor(wall_x)
    image_x = int(wall_x * texture.width)
    if (hit.side == 0 and hit.ray_dir_x > 0) or (hit.side and hit.ray_dir_y < 0):
        image_x = texture.width - image_x - 1
    world.z_buffer[ray_n] = hit.distance

    wall: list[int] = []
    if draw_end > draw_start:
        step = texture.height / line_height
        position = (draw_start - half + line_height // 2) * step
        last_row = texture.height - 1
        for _ in range(draw_start, draw_end):
            row = min(int(position), last_row)
            wall.append(texture.pixels[row][image_x])
            position += step
    column = (
        [scene.ceiling] * draw_start
        + wall
        + [scene.floor] * (SCREEN_HEIGHT - draw_end)
    )
    frame._put_column(ray_n, column)


def render_pov(world: World, frame: Frame) -> None:
    """Cast one ray per screen column."""
    for ray_n in range(SCREEN_WIDTH):
        cast_ray(world, frame, ray_n)


def _place_sprite(sprite: Sprite) -> None:
    half_h, half_w = SCREEN_HEIGHT // 2, SCREEN_WIDTH // 2
    del half_w
    sprite.draw_start_y = max(-(sprite.height // 2) + half_h, 0)
    sprite.draw_end_y = min(sprite.height // 2 + half_h, SCREEN_HEIGHT - 1)
    sprite.draw_start_x = max(-(sprite.width // 2) + sprite.screen_x, 0)
    sprite.draw_end_x = min(sprite.width // 2 + sprite.screen_x, SCREEN_WIDTH - 1)


def _set_tex_x(texture: Texture, sprite: Sprite, stripe: int) -> None:
    tex_x = (stripe - sprite.draw_start_x) * texture.width // sprite.width
    sprite.tex_x = min(max(tex_x, 0), texture.width - 1)


def _set_tex_y(texture: Texture, sprite: Sprite, y: int) -> None:
    tex_y = (y - sprite.draw_start_y) * texture.height // sprite.height
    sprite.tex_y = min(max(tex_y, 0), texture.height - 1)


def _draw_stripes(world: World, frame: Frame, sprite: Sprite) -> None:
    texture = world.scene.sprite
    for stripe in range(sprite.draw_start_x, sprite.draw_end_x):
        _set_tex_x(texture, sprite, stripe)
        if not 0 < sprite.transform_y < world.z_buffer[stripe]:
            continue
        for y in range(sprite.draw_start_y, sprite.draw_end_y):
            _set_tex_y(texture, sprite, y)
            color = texture.pixels[sprite.tex_y][sprite.tex_x]
            if color & 0xFFFFFF:
                frame.put(stripe, y, color)


def _draw_sprite(world: World, frame: Frame, sprite: Sprite) -> None:
    p = world.player
    rel_x = sprite.x - p.x
    rel_y = sprite.y - p.y
    det = p.plane_x * p.dir_y - p.dir_x * p.plane_y
    if det == 0:
        return
    inv_det = 1.0 / det
    sprite.transform_x = inv_det * (p.dir_y * rel_x - p.dir_x * rel_y)
    sprite.transform_y = inv_det * (-p.plane_y * rel_x + p.plane_x * rel_y)
    if sprite.transform_y <= 0:
        return
    texture = world.scene.sprite
    sprite.screen_x = int(
        (SCREEN_WIDTH // 2) * (1 + sprite.transform_x / sprite.transform_y)
    )
    sprite.height = abs(int(SCREEN_HEIGHT / sprite.transform_y))
    sprite.width = sprite.height * texture.height // texture.width
    _place_sprite(sprite)
    _draw_stripes(world, frame, sprite)


def render_sprites(world: World, frame: Frame) -> None:
    """Draw the sprites farthest first, hidden where a wall column is nearer."""
    p = world.player
    for sprite in world.sprites:
        dx = sprite.x - p.x
        dy = sprite.y - p.y
        sprite.distance = dx * dx + dy * dy
    world.sprites.sort(key=attrgetter("distance"), reverse=True)
    for sprite in world.sprites:
        _draw_sprite(world, frame, sprite)


def _minimap_color(world: World, row: int, col: int) -> int:
    tiles = world.tiles
    if row >= len(tiles) or col >= len(tiles[row]):
        return _MINIMAP_OUTSIDE
    return _MINIMAP_COLORS.get(tiles[row][col], _MINIMAP_DEFAULT)


def render_minimap(world: World, frame: Frame) -> None:
    """Draw a 10-pixels-per-cell map around the player in the top-left corner."""
    p = world.player
    top = int(_MINIMAP_SCALE * p.y - _MINIMAP_RADIUS)
    bottom = int(_MINIMAP_SCALE * p.y + _MINIMAP_RADIUS)
    left = int(_MINIMAP_SCALE * p.x - _MINIMAP_RADIUS)
    right = int(_MINIMAP_SCALE * p.x + _MINIMAP_RADIUS)
    for screen_y, i in enumerate(range(top, bottom)):
        for screen_x, j in enumerate(range(left, right)):
            if i < 0 or j < 0:
                color = _MINIMAP_OUTSIDE
            else:
                color = _minimap_color(world, i // _MINIMAP_SCALE, j // _MINIMAP_SCALE)
            frame.put(screen_x, screen_y, color)
    for x in _MINIMAP_PLAYER:
        for y in _MINIMAP_PLAYER:
            frame.put(x, y, _MINIMAP_PLAYER_COLOR)


def render_scene(world: World) -> Frame:
    """Render walls, sprites and the minimap into a new screen-sized frame."""
    frame = Frame()
    render_pov(world, frame)
    render_sprites(world, frame)
    render_minimap(world, frame)
    return frame