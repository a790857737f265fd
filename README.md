# cubcaster

A small first-person raycasting engine. It reads a `.cub` scene description
that names its wall, door and sprite textures (XPM files), the floor and
ceiling colours and a tile map, checks that the map is closed, and then lets
you walk through it in a 1024×768 pygame window.

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Running

```
cubcaster path/to/map.cub
```

The single argument must be a file name ending in `.cub`; anything else
prints `Usage: [cubcaster <map.cub>]` on standard error and exits with
status 1. Any error in the scene (missing or duplicate properties, bad
colours, unreadable or malformed textures, invalid map characters, an open
map, no player or more than one) is reported on standard error after a line
reading `Error`, and the program exits with status 1.

### Controls

| Key / action           | Effect                               |
|------------------------|--------------------------------------|
| `W` / `S`              | move forward / backward              |
| `A` / `D`              | strafe left / right                  |
| left / right arrow     | turn left / right                    |
| mouse at screen edge   | turn while the pointer is in the left or right eighth of the window |
| `E` (on release)       | open or close the door straight ahead |
| `Escape`, window close | quit                                 |

Movement stops just short of walls and closed doors; open doors can be
walked through. A minimap centred on the player is drawn in the top-left
corner.

## Scene files

A scene file holds property lines followed by the map:

```
NO ./textures/north.xpm
SO ./textures/south.xpm
WE ./textures/west.xpm
EA ./textures/east.xpm
DO ./textures/door.xpm
S  ./textures/sprite.xpm
F 220,100,0
C 225,30,0

111111
100101
1020N1
1D0001
111111
```

* `NO`, `SO`, `WE`, `EA` – wall textures; `DO` – door texture;
  `S` – sprite texture. Each must appear exactly once and name a file ending
  in `.xpm`. Paths are opened as given, relative to the current directory.
* `F` and `C` – floor and ceiling colours as `R,G,B`, each 0–255. Each must
  appear exactly once.
* Properties may not follow the map.
* Map rows begin with a space, `1` or `2`. Map characters: space (nothing),
  `0` floor, `1` wall, `2` sprite, `D` door, and one of `N`, `E`, `S`, `W`
  for the player's start and facing direction. Short rows are padded with
  empty space.

Every floor, door, sprite and player tile must be enclosed: none may sit on
the map's edge or next to empty space, and doors may not touch other doors.

### Textures

Only a small XPM subset is read: the fourth line holds
`width height colours chars-per-pixel`, the colour lines follow directly in
the form `"<key> c #RRGGBB"` (six upper-case hex digits), one line is
skipped, and then come the pixel rows. Sprite pixels of colour black are
drawn as transparent.

## Using it as a library

```python
from cubcaster.world import World
from cubcaster.movement import key_press, move
from cubcaster.core import Key
from cubcaster.render import render_scene

world = World.load("maps/level.cub")
key_press(world, Key.W)
move(world)
frame = render_scene(world)
pixel = frame.get(512, 384)   # 0xRRGGBB
raw = frame.to_bytes()        # four little-endian bytes per pixel, row by row
```

* `cubcaster.scene.load_scene` parses a scene file on its own;
  `cubcaster.scene.parse_scene(lines, load_texture)` takes the lines and a
  texture loader of your choosing.
* `cubcaster.xpm.load_texture` reads one XPM file; `parse_xpm` decodes lines.
* `cubcaster.world.validate_map` checks a tile grid and returns its player
  and sprites.
* `cubcaster.movement` holds `move`, `rotate`, the `translate_*` steps,
  `key_press`, `key_release`, `mouse_move` and `toggle_door`.
* `cubcaster.render` holds `Frame`, `cast_ray`, `render_pov`,
  `render_sprites`, `render_minimap` and `render_scene`.
* Errors in scenes, textures and maps raise `cubcaster.core.CubError`.

## What it does not do

There is no sound, no shooting, no enemies and no saving: sprites are
static billboards, and the only interaction with the world is opening and
closing doors. Textures must be XPM files in the subset above; no other
image formats are read.