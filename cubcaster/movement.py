"""Player motion, input handling and door toggling."""

from __future__ import annotations

import math

from cubcaster.core import (
    MOV_STEP,
    ROT_STEP,
    SCREEN_WIDTH,
    Key,
    Tile,
    is_wall_door_closed,
)
from cubcaster.world import Player, World

_KEY_FLAGS = {
    Key.W: "mov_forward",
    Key.S: "mov_backward",
    Key.A: "strafe_left",
    Key.D: "strafe_right",
    Key.ARROW_LEFT: "rot_left",
    Key.ARROW_RIGHT: "rot_right",
}
_NO_DELTA = 10000.0


def rotate(player: Player) -> None:
    """Turn the view by one step for each held rotation control."""
    old_dir_x = player.dir_x
    old_plane_x = player.plane_x
    for enabled, angle in ((player.rot_right, ROT_STEP), (player.rot_left, -ROT_STEP)):
        if not enabled:
            continue
        cos_a, sin_a = math.cos(angle), math.sin(angle)
        player.dir_x = player.dir_x * cos_a - player.dir_y * sin_a
        player.dir_y = old_dir_x * sin_a + player.dir_y * cos_a
        player.plane_x = player.plane_x * cos_a - player.plane_y * sin_a
        player.plane_y = old_plane_x * sin_a + player.plane_y * cos_a


def _wall_offset(delta: float) -> float:
    if delta > 0:
        return -0.01
    if delta < 0:
        return 1.01
    return 0.0


def _step(world: World, dx: float, dy: float) -> None:
    """Move by (dx, dy), stopping just short of walls and closed doors per axis."""
    player, tiles = world.player, world.tiles
    target_x = player.x + dx
    if not is_wall_door_closed(tiles[int(player.y)][int(target_x)]):
        player.x = target_x
    else:
        player.x = int(target_x) + _wall_offset(dx)
    target_y = player.y + dy
    if not is_wall_door_closed(tiles[int(target_y)][int(player.x)]):
        player.y = target_y
    else:
        player.y = int(target_y) + _wall_offset(dy)


def translate_forward(world: World) -> None:
    """Step along the view direction."""
    p = world.player
    _step(world, p.dir_x * MOV_STEP, p.dir_y * MOV_STEP)


def translate_backward(world: World) -> None:
    """Step against the view direction."""
    p = world.player
    _step(world, -p.dir_x * MOV_STEP, -p.dir_y * MOV_STEP)


def translate_left(world: World) -> None:
    """Strafe against the camera plane."""
    p = world.player
    _step(world, -p.plane_x * MOV_STEP, -p.plane_y * MOV_STEP)


def translate_right(world: World) -> None:
    """Strafe along the camera plane."""
    p = world.player
    _step(world, p.plane_x * MOV_STEP, p.plane_y * MOV_STEP)


def move(world: World) -> None:
    """Apply one frame of rotation and translation from the held controls."""
    p = world.player
    rotate(p)
    if p.mov_forward and not p.mov_backward:
        translate_forward(world)
    if p.mov_backward and not p.mov_forward:
        translate_backward(world)
    if p.strafe_left and not p.strafe_right:
        translate_left(world)
    if p.strafe_right and not p.strafe_left:
        translate_right(world)


def _set_control(player: Player, keycode: int, pressed: bool) -> None:
    name = _KEY_FLAGS.get(keycode)
    if name is not None:
        setattr(player, name, pressed)


def key_press(world: World, keycode: int) -> None:
    """Start the control bound to the key, if any."""
    _set_control(world.player, keycode, True)


def key_release(world: World, keycode: int) -> bool:
    """Stop the control bound to the key; return False when the game should quit."""
    if keycode == Key.ESCAPE:
        return False
    if keycode == Key.E:
        toggle_door(world)
    _set_control(world.player, keycode, False)
    return True


def mouse_move(world: World, x: int) -> None:
    """Rotate while the pointer is in the leftmost or rightmost eighth of the screen."""
    octant = SCREEN_WIDTH // 8
    world.player.rot_left = x < octant
    world.player.rot_right = x > SCREEN_WIDTH - octant


def toggle_door(world: World) -> None:
    """Open or close the door the centre of the view points at."""
    p, tiles = world.player, world.tiles
    camera_x = 2 * (SCREEN_WIDTH // 2) / SCREEN_WIDTH - 1
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
        else:
            side_y += delta_y
            map_y += step_y
        if not (0 <= map_y < len(tiles) and 0 <= map_x < len(tiles[map_y])):
            return
        tile = tiles[map_y][map_x]
        if is_wall_door_closed(tile) or tile == Tile.DOOR_OPEN:
            break
    if tile == Tile.DOOR_OPEN:
        tiles[map_y][map_x] = Tile.DOOR
    elif tile == Tile.DOOR:
        tiles[map_y][map_x] = Tile.DOOR_OPEN