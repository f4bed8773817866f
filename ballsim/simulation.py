#!/usr/bin/env python3
"""
Simulation run state and the fixed-rate simulation clock.

SimulationRun owns the bodies of the active scenario and a re-entrant lock.
Every read or write of body state from another thread goes through it.

SimulationClock is a background thread that fires every 1/steps_per_second
seconds of wall-clock time and performs `speed` integration steps of
1/steps_per_second simulated seconds each, so simulated time runs `speed`
times faster than real time. The lock is taken per step rather than per tick,
so a renderer may observe the bodies between two steps of the same tick.
"""
import logging
import threading
import time
from dataclasses import dataclass
from typing import List, Optional

from .constants import SPEED, STEPS_PER_SECOND
from .data_models import Body, Scenario
from .errors import InvalidArgument, SimulationError
from .physics import move_and_apply_gravity
from .vector import Vector

logger = logging.getLogger(__name__)


class ClockSettings:
    """Container for the simulation clock rates."""
    def __init__(self, steps_per_second: int = STEPS_PER_SECOND, speed: int = SPEED):
        for name, value in (("steps_per_second", steps_per_second), ("speed", speed)):
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise InvalidArgument(name, value, "a positive integer")
        self.steps_per_second = steps_per_second
        self.speed = speed

    @property
    def step_duration(self) -> float:
        """Simulated seconds advanced by a single integration step."""
        return 1 / self.steps_per_second

    @property
    def tick_interval(self) -> float:
        """Wall-clock seconds between two clock ticks."""
        return 1 / self.steps_per_second


@dataclass(frozen=True)
class BodyState:
    """Point-in-time copy of a body, safe to read outside the lock."""
    name: str
    position: Vector
    velocity: Vector
    mass: float


class SimulationRun:
    """
    Owns the body collection of the running scenario.

    The clock thread steps it; the renderer and the UI read it. All access is
    guarded by `lock`.
    """

    def __init__(self, bodies: Optional[List[Body]] = None, scenario_name: str = ""):
        self.lock = threading.RLock()
        self.bodies: List[Body] = []
        self.scenario_name = ""
        self.steps = 0
        self.elapsed = 0.0  # simulated seconds
        # Bumped whenever the body list is replaced so observers can rebuild.
        self.generation = 0
        self.replace_bodies(bodies or [], scenario_name)

    @classmethod
    def from_scenario(cls, scenario: Scenario) -> "SimulationRun":
        return cls(scenario.spawn(), scenario.name)

    def replace_bodies(self, bodies: List[Body], scenario_name: str = "") -> None:
        with self.lock:
            self.bodies = list(bodies)
            self.scenario_name = scenario_name
            self.steps = 0
            self.elapsed = 0.0
            self.generation += 1

    def load_scenario(self, scenario: Scenario) -> None:
        self.replace_bodies(scenario.spawn(), scenario.name)

    def step(self, duration: float) -> None:
        """Advance every body by one integration step of the given duration."""
        with self.lock:
            move_and_apply_gravity(self.bodies, duration)
            self.steps += 1
            self.elapsed += duration

    def snapshot(self) -> List[BodyState]:
        with self.lock:
            return [BodyState(b.name, b.position, b.velocity, b.mass) for b in self.bodies]


class SimulationClock(threading.Thread):
    """
    Fixed-rate driver for a SimulationRun.

    Any SimulationError (or arithmetic failure such as an overflow) raised
    while stepping halts the clock for good; the error is kept in `failure`
    and the bodies are left as they were when it was raised.
    """

    def __init__(self, sim: SimulationRun, settings: Optional[ClockSettings] = None):
        super().__init__(daemon=True, name="simulation-clock")
        self.sim = sim
        self.settings = settings or ClockSettings()
        self.running = True
        self.failure: Optional[Exception] = None

    @property
    def halted(self) -> bool:
        return self.failure is not None

    def tick(self) -> None:
        """Perform one clock tick: `speed` integration steps."""
        duration = self.settings.step_duration
        for _ in range(self.settings.speed):
            self.sim.step(duration)

    def run(self):
        interval = self.settings.tick_interval
        logger.info("Simulation clock started for %r (%d steps/s, speed %dx)",
                    self.sim.scenario_name, self.settings.steps_per_second, self.settings.speed)
        next_tick = time.perf_counter()
        while self.running:
            try:
                self.tick()
            except (SimulationError, ArithmeticError) as exc:
                self.failure = exc
                logger.exception("Simulation halted after %d steps", self.sim.steps)
                break

            next_tick += interval
            delay = next_tick - time.perf_counter()
            if delay > 0:
                time.sleep(delay)
            else:
                # Fell behind; resynchronise instead of bursting to catch up
                next_tick = time.perf_counter()
        logger.info("Simulation clock stopped")
