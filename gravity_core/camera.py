#!/usr/bin/env python3
"""
Camera utilities for 2D world-to-screen transforms.

World space is y-up with the origin at the view centre when the camera is at rest;
screen space is pygame's y-down pixels.
"""
from typing import List, Tuple
from .constants import (
    DEFAULT_SCALE,
    MIN_SCALE,
    VIEW_HEIGHT,
    VIEW_WIDTH,
    ZOOM_LINE_STEP,
)


class Camera2D:
    """
    Simple 2D camera that maps world coordinates to screen pixels.

    scale is world units per pixel; zooming adds to it linearly the way an
    orthographic projection scale does.
    """

    def __init__(self, center=(0.0, 0.0), scale: float = DEFAULT_SCALE):
        self.center: List[float] = [center[0], center[1]]
        self.scale = max(MIN_SCALE, float(scale))
        self.viewport_size = (VIEW_WIDTH, VIEW_HEIGHT)

    def set_viewport_size(self, w: int, h: int) -> None:
        self.viewport_size = (w, h)

    def world_to_screen(self, pos: Tuple[float, float]) -> Tuple[int, int]:
        cx, cy = self.center
        px = (pos[0] - cx) / self.scale + self.viewport_size[0] / 2
        py = self.viewport_size[1] / 2 - (pos[1] - cy) / self.scale
        return (int(px), int(py))

    def screen_to_world(self, screen: Tuple[int, int]) -> Tuple[float, float]:
        cx, cy = self.center
        wx = (screen[0] - self.viewport_size[0] / 2) * self.scale + cx
        wy = (self.viewport_size[1] / 2 - screen[1]) * self.scale + cy
        return (wx, wy)

    def screen_length(self, world: float) -> float:
        return world / self.scale

    def zoom_lines(self, lines: float) -> None:
        """Mouse wheel notches; scrolling up zooms out."""
        self.scale = max(MIN_SCALE, self.scale + ZOOM_LINE_STEP * lines)

    def pan_pixels(self, dx_pixels, dy_pixels):
        # Dragging right moves the view left; screen y is flipped relative to world y
        self.center[0] -= dx_pixels * self.scale
        self.center[1] += dy_pixels * self.scale
