#!/usr/bin/env python3
"""
Ball gravity simulator application entry point and UI/renderer coordination.

What this module does
- Starts three loops: the simulation clock thread (fixed-rate physics), a Pygame
  rendering thread (viewport) and the Dear PyGui control panel (main thread).
- All of them share one SimulationRun that owns the bodies; every access is
  guarded by its re-entrant lock.
- The control panel selects the scenario, restarts the run and shows live
  readouts of every body plus total momentum and energy.

Threading model
- SimulationClock fires every 1/STEPS_PER_SECOND s and performs SPEED steps.
- PygameRenderer redraws at FPS through BallRenderer, independently of the clock.
- The ControlPanel refreshes its readouts on a periodic frame callback.

Running
1) Install dependencies: `pip install -e .`
2) Run this module: `python gravity_sim.py`

Two windows will open: the viewport (Pygame) and the controls (Dear PyGui).
Closing either shuts the application down.
"""

import logging
import threading
from typing import Optional

import pygame
from pygame import gfxdraw
import dearpygui.dearpygui as dpg

from ballsim.constants import (
    BACKGROUND_COLOR,
    DEFAULT_SCENARIO,
    FPS,
    SAFE_COORD_LIMIT,
    VIEW_HEIGHT,
    VIEW_WIDTH,
)
from ballsim.data_models import Scenario
from ballsim.errors import SimulationError
from ballsim.physics import total_energy, total_momentum
from ballsim.presets_loader import get_scenario, list_scenarios
from ballsim.render import BallRenderer, DrawingSurface
from ballsim.simulation import ClockSettings, SimulationClock, SimulationRun

logger = logging.getLogger("gravity_sim")


# ============================================================
# Pygame drawing surface
# ============================================================

def _safe_point(x, y):
    if -SAFE_COORD_LIMIT <= x <= SAFE_COORD_LIMIT and -SAFE_COORD_LIMIT <= y <= SAFE_COORD_LIMIT:
        return (x, y)
    return None


class PygameSurface(DrawingSurface):
    """DrawingSurface backed by a pygame display surface."""

    def __init__(self, surface, background=BACKGROUND_COLOR):
        self.surface = surface
        self.background = background

    def clear_rect(self, x, y, w, h):
        self.surface.fill(self.background, pygame.Rect(x, y, w, h))

    def fill_circle(self, cx, cy, r, color):
        # Balls drifting far off-screen are simply not drawn
        if _safe_point(cx, cy) is None:
            return
        try:
            gfxdraw.filled_circle(self.surface, cx, cy, r, color)
            gfxdraw.aacircle(self.surface, cx, cy, r, color)
        except (OverflowError, pygame.error):
            pass


# ============================================================
# Pygame Renderer Thread
# ============================================================

class PygameRenderer(threading.Thread):
    """
    Pygame loop: redraws the balls at FPS and handles the window events.
    """
    def __init__(self, sim: SimulationRun):
        super().__init__(daemon=True, name="renderer")
        self.sim = sim
        self.balls: Optional[BallRenderer] = None
        self.clock = None
        self.running = True

    def run(self):
        pygame.init()
        pygame.display.set_caption("Ball Gravity - Viewport")
        display = pygame.display.set_mode((VIEW_WIDTH, VIEW_HEIGHT))
        display.fill(BACKGROUND_COLOR)
        self.balls = BallRenderer(self.sim, PygameSurface(display))
        self.clock = pygame.time.Clock()

        while self.running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False

            self.balls.frame()
            pygame.display.flip()

            # Limit FPS
            self.clock.tick(FPS)

        pygame.quit()


# ============================================================
# Simulation lifecycle
# ============================================================

def restart_simulation(sim: SimulationRun, clock: Optional[SimulationClock], scenario: Scenario,
                       settings: Optional[ClockSettings] = None) -> SimulationClock:
    """Stop the current clock, reseed the run from scenario and start a fresh clock."""
    if clock is not None:
        clock.running = False
        clock.join(timeout=2.0)
    sim.load_scenario(scenario)
    logger.info("Loaded scenario %r with %d bodies", scenario.name, len(scenario.bodies))
    new_clock = SimulationClock(sim, settings)
    new_clock.start()
    return new_clock


# ============================================================
# Dear PyGui UI
# ============================================================

class ControlPanel:
    """
    Dear PyGui interface: scenario selection, run readouts and status line.
    """
    def __init__(self, sim: SimulationRun, clock: SimulationClock, renderer: PygameRenderer):
        self.sim = sim
        self.clock = clock
        self.renderer = renderer

        self.status_msg_id = None
        self.scenario_combo_id = None
        self.description_id = None
        self.time_id = None
        self.bodies_id = None
        self.momentum_id = None
        self.energy_id = None

        self._build_ui()
        self._schedule_sync()

    def _schedule_sync(self):
        """Reschedule the periodic sync callback using frame callbacks (approx ~10Hz)."""
        dpg.set_frame_callback(dpg.get_frame_count() + 6, self._sync_ui_with_sim)

    def _build_ui(self):
        dpg.create_context()
        dpg.create_viewport(title="Ball Gravity - Controls", width=460, height=420)

        with dpg.window(label="Controls", width=440, height=400, pos=(10, 10), tag="main_window"):
            with dpg.group(horizontal=True):
                dpg.add_text("Scenario:")
                self.scenario_combo_id = dpg.add_combo(list_scenarios(), default_value=self.sim.scenario_name,
                                                       width=220,
                                                       callback=lambda s, a, u: self.load_scenario(a))
                dpg.add_button(label="Restart",
                               callback=lambda: self.load_scenario(dpg.get_value(self.scenario_combo_id)))
            self.description_id = dpg.add_text(get_scenario(self.sim.scenario_name).description,
                                              wrap=420, color=(170, 170, 170))

            dpg.add_separator()
            self.time_id = dpg.add_text("")
            self.bodies_id = dpg.add_text("")
            dpg.add_separator()
            self.momentum_id = dpg.add_text("")
            self.energy_id = dpg.add_text("")

            dpg.add_separator()
            self.status_msg_id = dpg.add_text("")

        dpg.setup_dearpygui()
        dpg.show_viewport()
        dpg.set_primary_window("main_window", True)

    # -----------------------
    # UI Callbacks
    # -----------------------

    def _set_status(self, msg: str, color=(180, 220, 180)):
        dpg.set_value(self.status_msg_id, msg)
        dpg.configure_item(self.status_msg_id, color=color)

    def _set_error(self, msg: str):
        dpg.set_value(self.status_msg_id, msg)
        dpg.configure_item(self.status_msg_id, color=(255, 120, 120))

    def load_scenario(self, name: str):
        try:
            scenario = get_scenario(name)
        except SimulationError as exc:
            self._set_error(str(exc))
            return
        self.clock = restart_simulation(self.sim, self.clock, scenario, self.clock.settings)
        dpg.set_value(self.description_id, scenario.description)
        self._set_status(f"Loaded scenario: {scenario.name}")

    def _sync_ui_with_sim(self):
        """
        Periodic UI update reflecting the current state of the run.
        """
        with self.sim.lock:
            steps = self.sim.steps
            elapsed = self.sim.elapsed
        states = self.sim.snapshot()

        dpg.set_value(self.time_id, f"Steps: {steps}   Simulated time: {elapsed:.2f} s")
        lines = []
        for i, b in enumerate(states):
            label = b.name or f"#{i + 1}"
            lines.append(f"{label}: pos=({b.position.x:.1f}, {b.position.y:.1f})  "
                         f"vel=({b.velocity.x:.1f}, {b.velocity.y:.1f})  m={b.mass:g}")
        dpg.set_value(self.bodies_id, "\n".join(lines))

        p = total_momentum(states)
        dpg.set_value(self.momentum_id, f"Total momentum: ({p.x:.4g}, {p.y:.4g})")
        try:
            dpg.set_value(self.energy_id, f"Total energy: {total_energy(states):.6g}")
        except SimulationError:
            dpg.set_value(self.energy_id, "Total energy: n/a")

        if self.clock.halted:
            self._set_error(f"Simulation halted: {self.clock.failure}")

        if not self.renderer.is_alive():
            dpg.stop_dearpygui()
            return
        # Reschedule next sync
        self._schedule_sync()


# ============================================================
# Application Entry
# ============================================================

def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    sim = SimulationRun()
    clock = restart_simulation(sim, None, get_scenario(DEFAULT_SCENARIO))

    renderer = PygameRenderer(sim)

    # Start Pygame renderer thread
    renderer.start()

    ui = ControlPanel(sim, clock, renderer)

    # Run Dear PyGui event loop
    try:
        dpg.start_dearpygui()
    finally:
        # Stop simulation and renderer
        ui.clock.running = False
        renderer.running = False
        ui.clock.join(timeout=2.0)
        renderer.join(timeout=2.0)
        dpg.destroy_context()


if __name__ == "__main__":
    main()
