"""Raycasting engine for .cub scenes: scene and XPM parsing, movement, rendering and a pygame front end."""

__version__ = "0.1.0"