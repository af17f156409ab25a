#!/usr/bin/env python3
"""
Gravity Sandbox application entry point and viewport/inspector coordination.

What this module does
- Starts two event loops: a Pygame viewport thread (drawing and mouse/keyboard input)
  and an optional Dear PyGui inspector (running on the main thread).
- Both talk to one SimulationController, which owns the bodies and the placement
  gesture; all access is guarded by its re-entrant lock.

Controls (viewport)
- Left press, hold, release: place a body. Holding grows it; it is launched opposite
  to the drag direction.
- Right click: cancel the placement in progress.
- S: spawn a random batch. Space: remove every body. P: pause/resume.
- Ctrl + mouse move: pan. Mouse wheel: zoom.

Running
1) Install dependencies: `pip install -e .`
2) Run this module: `python gravity_sandbox.py` (add `--no-inspector` for the viewport only)
"""

import argparse
import logging
import math
import random
import threading
import time
from typing import Optional

# GUI and Rendering libs
import pygame
from pygame import gfxdraw
import dearpygui.dearpygui as dpg

from gravity_core.camera import Camera2D
from gravity_core.constants import (
    BACKGROUND_COLOR,
    HUD_COLOR,
    INDICATOR_COLOR,
    PLACEHOLDER_COLOR,
    SAFE_COORD_LIMIT,
    VIEW_HEIGHT,
    VIEW_WIDTH,
    WINDOW_TITLE,
)
from gravity_core.placement import launch_velocity
from gravity_core.simulation import SimulationController
from gravity_core.vector_utils import vec_is_finite

logger = logging.getLogger("gravity_sandbox")

# ============================================================
# Pygame Viewport Thread
# ============================================================

class PygameRenderer(threading.Thread):
    """
    Pygame loop: forwards input to the controller, ticks it once per frame and draws
    bodies plus placement feedback.
    """
    def __init__(self, sim: SimulationController):
        super().__init__(daemon=True)
        self.sim = sim
        self.camera = Camera2D(center=(0.0, 0.0))
        self.surface = None
        self.clock = None
        self.placing = False
        self.running = True

    def run(self):
        pygame.init()
        pygame.display.set_caption(WINDOW_TITLE)
        self.surface = pygame.display.set_mode((self.sim.width, self.sim.height), pygame.RESIZABLE)
        self.camera.set_viewport_size(self.sim.width, self.sim.height)
        self.clock = pygame.time.Clock()
        logger.info("Viewport opened at %dx%d", self.sim.width, self.sim.height)

        last_time = time.perf_counter()
        while self.running and self.sim.running:
            now = time.perf_counter()
            real_dt = now - last_time
            last_time = now

            # Input handling
            self.handle_events()

            # Physics step
            self.sim.tick(real_dt)

            # Draw
            self.draw()

            # Limit FPS
            self.clock.tick(60)

        pygame.quit()
        logger.info("Viewport closed")

    def cursor_world(self):
        return self.camera.screen_to_world(pygame.mouse.get_pos())

    def handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.sim.running = False
                self.running = False

            elif event.type == pygame.VIDEORESIZE:
                self.surface = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                self.camera.set_viewport_size(event.w, event.h)
                self.sim.set_view_size(event.w, event.h)

            elif event.type == pygame.MOUSEWHEEL:
                self.camera.zoom_lines(event.y)

            elif event.type == pygame.MOUSEBUTTONDOWN:
                if event.button == 1:  # left click
                    self.sim.gesture_start(self.camera.screen_to_world(event.pos))
                    self.placing = True
                elif event.button == 3:  # right click cancels
                    self.sim.gesture_cancel()

            elif event.type == pygame.MOUSEBUTTONUP:
                if event.button == 1:
                    self.sim.gesture_end(self.camera.screen_to_world(event.pos))
                    self.placing = False

            elif event.type == pygame.MOUSEMOTION:
                if pygame.key.get_mods() & pygame.KMOD_CTRL:
                    self.camera.pan_pixels(event.rel[0], event.rel[1])

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_SPACE:
                    self.sim.clear_all()
                elif event.key == pygame.K_s:
                    self.sim.spawn_random()
                elif event.key == pygame.K_p:
                    self.sim.toggle_pause()

        # Held button grows the placeholder once per poll
        if self.placing and pygame.mouse.get_pressed()[0]:
            self.sim.gesture_drag(self.cursor_world())

    def draw(self):
        surf = self.surface
        surf.fill(BACKGROUND_COLOR)

        # Snapshot for consistency during draw
        bodies = self.sim.body_views()
        gesture = self.sim.gesture_view()

        for b in bodies:
            if not vec_is_finite(b.position):
                continue
            screen_pos_s = _safe_point(self.camera.world_to_screen(b.position))
            if screen_pos_s is None:
                continue
            vis_r = max(1, int(self.camera.screen_length(b.radius)))
            if vis_r > SAFE_COORD_LIMIT:
                continue
            try:
                gfxdraw.filled_circle(surf, screen_pos_s[0], screen_pos_s[1], vis_r, b.color)
                gfxdraw.aacircle(surf, screen_pos_s[0], screen_pos_s[1], vis_r, b.color)
            except OverflowError:
                pass

        if gesture.active:
            self.draw_placeholder(surf, gesture)

        # HUD text
        draw_text(surf, "Drag: place body | Right: cancel | S: spawn | Space: clear | P: pause | Ctrl+move: pan | Wheel: zoom",
                  10, 10, HUD_COLOR)
        with self.sim.lock:
            playing = self.sim.playing
        draw_text(surf, f"Bodies: {len(bodies)}  [{'Playing' if playing else 'Paused'}]", 10, 30, HUD_COLOR)

        pygame.display.flip()

    def draw_placeholder(self, surf, gesture):
        anchor_s = _safe_point(self.camera.world_to_screen(gesture.anchor))
        if anchor_s is None:
            return
        vis_r = int(self.camera.screen_length(gesture.radius))
        if vis_r > 0:
            try:
                gfxdraw.filled_circle(surf, anchor_s[0], anchor_s[1], vis_r, PLACEHOLDER_COLOR)
            except OverflowError:
                pass

        # Launch direction: opposite to the drag, length tracks launch speed
        vx, vy = launch_velocity(gesture.anchor, self.cursor_world())
        if vx == 0 and vy == 0:
            return
        tip_world = (gesture.anchor[0] + vx * 0.5, gesture.anchor[1] + vy * 0.5)
        tip_s = _safe_point(self.camera.world_to_screen(tip_world))
        if tip_s:
            pygame.draw.line(surf, INDICATOR_COLOR, anchor_s, tip_s, 2)
            draw_arrow_head(surf, tip_s, anchor_s, INDICATOR_COLOR)

_cached_font = None

def draw_text(surface, text, x, y, color):
    global _cached_font
    if not pygame.font.get_init():
        pygame.font.init()
    if _cached_font is None:
        _cached_font = pygame.font.Font(None, 18)
    img = _cached_font.render(text, True, color)
    surface.blit(img, (x, y))

def _safe_point(pt):
    try:
        x, y = int(pt[0]), int(pt[1])
    except (OverflowError, ValueError):
        return None
    if -SAFE_COORD_LIMIT <= x <= SAFE_COORD_LIMIT and -SAFE_COORD_LIMIT <= y <= SAFE_COORD_LIMIT:
        return (x, y)
    return None

def draw_arrow_head(surface, tip, tail, color):
    # Small triangle for arrow head
    dx = tip[0] - tail[0]
    dy = tip[1] - tail[1]
    ang = math.atan2(dy, dx)
    size = 8
    left = (tip[0] - size * math.cos(ang - math.pi / 6), tip[1] - size * math.sin(ang - math.pi / 6))
    right = (tip[0] - size * math.cos(ang + math.pi / 6), tip[1] - size * math.sin(ang + math.pi / 6))
    left_s = _safe_point(left)
    right_s = _safe_point(right)
    if left_s and right_s:
        pygame.draw.polygon(surface, color, [tip, left_s, right_s])

# ============================================================
# Dear PyGui Inspector
# ============================================================

class Inspector:
    """
    Dear PyGui window listing every live body, with spawn/clear/pause controls.
    """
    def __init__(self, sim: SimulationController):
        self.sim = sim
        self.count_id = None
        self.state_id = None
        self.table_id = None

        self._build_ui()

        # Periodic sync using frame callbacks rather than timers
        self._schedule_sync()

    def _schedule_sync(self):
        """Reschedule the periodic sync callback (~10Hz at 60 FPS)."""
        dpg.set_frame_callback(dpg.get_frame_count() + 6, self._sync_ui_with_sim)

    def _build_ui(self):
        dpg.create_context()
        dpg.create_viewport(title=f"{WINDOW_TITLE} - Inspector", width=620, height=520)

        with dpg.window(label="Bodies", width=600, height=500, pos=(10, 10), tag="main_window"):
            with dpg.group(horizontal=True):
                dpg.add_button(label="Spawn random", callback=lambda: self.sim.spawn_random())
                dpg.add_button(label="Clear all", callback=lambda: self.sim.clear_all())
                dpg.add_button(label="Pause/Play", callback=lambda: self.sim.toggle_pause())
            with dpg.group(horizontal=True):
                self.count_id = dpg.add_text("Bodies: 0")
                self.state_id = dpg.add_text("")
            dpg.add_separator()
            with dpg.table(header_row=True, resizable=True, borders_innerH=True,
                           borders_outerH=True, borders_innerV=True) as self.table_id:
                for label in ("id", "radius", "mass", "position", "velocity"):
                    dpg.add_table_column(label=label)

        dpg.setup_dearpygui()
        dpg.show_viewport()
        dpg.set_primary_window("main_window", True)

    def _sync_ui_with_sim(self):
        bodies = self.sim.snapshot_bodies()
        bad = set(self.sim.non_finite_ids())
        with self.sim.lock:
            playing = self.sim.playing

        dpg.set_value(self.count_id, f"Bodies: {len(bodies)}")
        dpg.set_value(self.state_id, "Playing" if playing else "Paused")

        # Rows live in slot 1; columns in slot 0 stay
        dpg.delete_item(self.table_id, children_only=True, slot=1)
        for b in bodies:
            color = (255, 120, 120) if b.id in bad else (220, 220, 220)
            with dpg.table_row(parent=self.table_id):
                dpg.add_text(str(b.id), color=color)
                dpg.add_text(f"{b.radius:.2f}")
                dpg.add_text(f"{b.mass:.3e}")
                dpg.add_text(f"({b.position[0]:.1f}, {b.position[1]:.1f})")
                dpg.add_text(f"({b.velocity[0]:.2f}, {b.velocity[1]:.2f})")

        if self.sim.running:
            self._schedule_sync()
        else:
            dpg.stop_dearpygui()

# ============================================================
# Application Entry
# ============================================================

def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Interactive 2D gravity sandbox")
    p.add_argument("--width", type=int, default=VIEW_WIDTH, help="viewport width in pixels")
    p.add_argument("--height", type=int, default=VIEW_HEIGHT, help="viewport height in pixels")
    p.add_argument("--seed", type=int, default=None, help="seed for random spawns and colours")
    p.add_argument("--no-inspector", action="store_true", help="run the viewport without the inspector window")
    p.add_argument("--log-level", default="INFO",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="logging verbosity")
    return p.parse_args(argv)

def main(argv: Optional[list] = None):
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    sim = SimulationController(args.width, args.height, rng=random.Random(args.seed), populate=True)
    renderer = PygameRenderer(sim)

    if args.no_inspector:
        renderer.run()
        return

    # Start Pygame viewport thread
    renderer.start()

    Inspector(sim)

    # Run Dear PyGui event loop
    try:
        dpg.start_dearpygui()
    finally:
        # Stop simulation and renderer
        sim.running = False
        renderer.running = False
        renderer.join(timeout=2.0)
        dpg.destroy_context()

if __name__ == "__main__":
    main()
