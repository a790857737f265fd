import copy
import math

import pytest

from cubcaster.core import MOV_STEP, SCREEN_WIDTH, Key, Tile
from cubcaster.movement import (
    key_press,
    key_release,
    mouse_move,
    move,
    rotate,
    toggle_door,
    translate_backward,
    translate_forward,
    translate_left,
    translate_right,
)
from cubcaster.scene import Scene
from cubcaster.world import World
from cubcaster.xpm import Texture

CHARS = {
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

ROOM = ("111111", "100001", "10D001", "100001", "10N001", "111111")


def make_world(*rows):
    tex = Texture(1, 1, [[0]])
    tiles = [[CHARS[c] for c in row] for row in rows]
    scene = Scene(
        north=tex, east=tex, south=tex, west=tex, door=tex, sprite=tex,
        floor=0, ceiling=0, tiles=tiles,
    )
    return World.from_scene(scene)


def test_forward_moves_along_direction():
    world = make_world(*ROOM)
    x0, y0 = world.player.x, world.player.y
    translate_forward(world)
    assert world.player.x == x0
    assert world.player.y == pytest.approx(y0 - MOV_STEP)


def test_backward_moves_against_direction():
    world = make_world(*ROOM)
    y0 = world.player.y
    translate_forward(world)
    translate_backward(world)
    assert world.player.y == pytest.approx(y0)


def test_strafes_follow_plane():
    world = make_world(*ROOM)
    x0, y0 = world.player.x, world.player.y
    translate_right(world)
    assert world.player.x > x0
    assert world.player.y == y0
    translate_left(world)
    translate_left(world)
    assert world.player.x < x0


def test_forward_stops_before_wall():
    world = make_world("111", "1N1", "111")
    world.player.y = 1.02
    translate_forward(world)
    assert world.player.y == pytest.approx(1.01)
    assert world.player.x == 1.5


def test_backward_stops_before_wall():
    world = make_world("111", "1N1", "111")
    world.player.y = 1.98
    translate_backward(world)
    assert 1.98 < world.player.y < 2


def test_closed_door_blocks_and_open_door_lets_through():
    world = make_world(*ROOM)
    for _ in range(40):
        translate_forward(world)
    assert world.player.y >= 3
    toggle_door(world)
    assert world.tiles[2][2] == Tile.DOOR_OPEN
    for _ in range(40):
        translate_forward(world)
    assert 1 <= world.player.y < 2


def test_rotate_right_then_left_restores_direction():
    world = make_world(*ROOM)
    p = world.player
    start = (p.dir_x, p.dir_y, p.plane_x, p.plane_y)
    p.rot_right = True
    rotate(p)
    assert p.dir_x > 0
    assert math.hypot(p.dir_x, p.dir_y) == pytest.approx(1.0)
    p.rot_right, p.rot_left = False, True
    rotate(p)
    assert (p.dir_x, p.dir_y, p.plane_x, p.plane_y) == pytest.approx(start)


def test_move_with_opposing_keys_stays_put():
    world = make_world(*ROOM)
    p = world.player
    p.mov_forward = p.mov_backward = True
    p.strafe_left = p.strafe_right = True
    before = (p.x, p.y)
    move(world)
    assert (p.x, p.y) == before


def test_move_rotates_then_translates():
    world = make_world(*ROOM)
    p = world.player
    x0 = p.x
    p.rot_right = True
    p.mov_forward = True
    move(world)
    assert p.dir_x > 0
    assert p.x > x0


def test_key_press_and_release_toggle_controls():
    world = make_world(*ROOM)
    key_press(world, Key.W)
    key_press(world, Key.ARROW_LEFT)
    assert world.player.mov_forward and world.player.rot_left
    assert key_release(world, Key.W) is True
    assert not world.player.mov_forward
    assert world.player.rot_left


def test_key_release_escape_requests_quit():
    world = make_world(*ROOM)
    assert key_release(world, Key.ESCAPE) is False


def test_key_release_e_toggles_door():
    world = make_world(*ROOM)
    assert key_release(world, Key.E) is True
    assert world.tiles[2][2] == Tile.DOOR_OPEN
    key_release(world, Key.E)
    assert world.tiles[2][2] == Tile.DOOR


def test_unbound_key_changes_nothing():
    world = make_world(*ROOM)
    before = copy.deepcopy(world.player)
    key_press(world, Key.F)
    assert world.player == before


def test_toggle_door_facing_wall_changes_nothing():
    world = make_world(*ROOM)
    world.player.dir_x, world.player.dir_y = 1.0, 0.0
    world.player.plane_x, world.player.plane_y = 0.0, 0.66
    before = copy.deepcopy(world.tiles)
    toggle_door(world)
    assert world.tiles == before


@pytest.mark.parametrize(
    "x, left, right",
    [(0, True, False), (SCREEN_WIDTH // 2, False, False), (SCREEN_WIDTH - 1, False, True)],
)
def test_mouse_move_edges_rotate(x, left, right):
    world = make_world(*ROOM)
    mouse_move(world, x)
    assert (world.player.rot_left, world.player.rot_right) == (left, right)