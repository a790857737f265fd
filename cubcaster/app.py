"""Command-line entry point: load a ``.cub`` scene and play it in a window."""

from __future__ import annotations

import sys
from typing import Sequence

from cubcaster.core import SCREEN_HEIGHT, SCREEN_WIDTH, CubError, Key
from cubcaster.movement import key_press, key_release, mouse_move, move
from cubcaster.render import Frame, render_scene
from cubcaster.world import World

USAGE = "Usage: [cubcaster <map.cub>]"
_SCENE_SUFFIX = ".cub"
_WINDOW_TITLE = "cubcaster"
_FRAMES_PER_SECOND = 60


def check_arguments(argv: Sequence[str]) -> str:
    """Return the scene path from the arguments, or raise CubError with the usage."""
    if len(argv) != 1:
        raise CubError(USAGE)
    path = argv[0]
    dot = path.rfind(".")
    if dot < 0 or path[dot:] != _SCENE_SUFFIX:
        raise CubError(USAGE)
    return path


def _frame_to_rgb(frame: Frame) -> bytes:
    """Repack the frame's little-endian 0xRRGGBB words as packed RGB bytes."""
    data = frame.to_bytes()
    rgb = bytearray(len(data) // 4 * 3)
    rgb[0::3] = data[2::4]
    rgb[1::3] = data[1::4]
    rgb[2::3] = data[0::4]
    return bytes(rgb)


def _run(world: World) -> int:
    """Open the window and run the game loop until the player quits."""
    import pygame

    key_codes = {
        pygame.K_w: Key.W,
        pygame.K_e: Key.E,
        pygame.K_a: Key.A,
        pygame.K_s: Key.S,
        pygame.K_d: Key.D,
        pygame.K_f: Key.F,
        pygame.K_LEFT: Key.ARROW_LEFT,
        pygame.K_RIGHT: Key.ARROW_RIGHT,
        pygame.K_ESCAPE: Key.ESCAPE,
    }
    pygame.init()
    try:
        screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        pygame.display.set_caption(_WINDOW_TITLE)
        clock = pygame.time.Clock()
        while True:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    return 0
                if event.type == pygame.KEYDOWN:
                    code = key_codes.get(event.key)
                    if code is not None:
                        key_press(world, code)
                elif event.type == pygame.KEYUP:
                    code = key_codes.get(event.key)
                    if code is not None and not key_release(world, code):
                        return 0
                elif event.type == pygame.MOUSEMOTION:
                    mouse_move(world, event.pos[0])
            move(world)
            frame = render_scene(world)
            image = pygame.image.frombuffer(
                _frame_to_rgb(frame), (frame.width, frame.height), "RGB"
            )
            screen.blit(image, (0, 0))
            pygame.display.flip()
            clock.tick(_FRAMES_PER_SECOND)
    finally:
        pygame.quit()


def main(argv: Sequence[str] | None = None) -> int:
    """Run the game; return the process exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        path = check_arguments(args)
    except CubError as exc:
        print(exc, file=sys.stderr)
        return 1
    try:
        world = World.load(path)
    except CubError as exc:
        print(f"Error\n{exc}", file=sys.stderr)
        return 1
    try:
        return _run(world)
    except CubError as exc:
        print(f"Error\n{exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())