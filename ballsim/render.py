#!/usr/bin/env python3
"""
Rendering adapter: draws one circle per body on an abstract drawing surface.

The adapter never touches body state. Each frame it snapshots the current
positions under the run lock, erases the bounding box every ball occupied in
the previous frame and draws the balls at their new positions.
"""
import math
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from .constants import BALL_COLOR, BALL_RADIUS
from .data_models import Body
from .simulation import SimulationRun
from .vector import Vector

Rect = Tuple[int, int, int, int]  # x, y, w, h


class DrawingSurface(ABC):
    """Rectangular drawable area the renderer paints on."""

    @abstractmethod
    def clear_rect(self, x: int, y: int, w: int, h: int) -> None:
        ...

    @abstractmethod
    def fill_circle(self, cx: int, cy: int, r: int, color: Tuple[int, int, int]) -> None:
        ...


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class BallItem:
    """
    The on-screen representation of a single body.

    Holds a non-owning reference to the body and remembers the rectangle it
    was last drawn in so that rectangle can be erased on the next frame.
    """

    def __init__(self, body: Body, radius: int = BALL_RADIUS, color=BALL_COLOR):
        self.body = body
        self.radius = radius
        self.color = color
        self.rendered_rectangle: Optional[Rect] = None

    def rectangle_at(self, position: Vector) -> Rect:
        cx, cy = _round_half_up(position.x), _round_half_up(position.y)
        return (cx - self.radius, cy - self.radius, 2 * self.radius + 1, 2 * self.radius + 1)

    @property
    def rectangle(self) -> Rect:
        """Bounding box of the body at its current position."""
        return self.rectangle_at(self.body.position)

    def clear_last_location(self, surface: DrawingSurface) -> None:
        if self.rendered_rectangle is None:
            return
        surface.clear_rect(*self.rendered_rectangle)
        self.rendered_rectangle = None

    def redraw(self, surface: DrawingSurface, position: Vector) -> None:
        self.rendered_rectangle = self.rectangle_at(position)
        surface.fill_circle(_round_half_up(position.x), _round_half_up(position.y), self.radius, self.color)


class BallRenderer:
    """
    Draws every body of a SimulationRun once per frame().

    The item list is rebuilt whenever the run's bodies are replaced (e.g. a new
    scenario was loaded).
    """

    def __init__(self, sim: SimulationRun, surface: DrawingSurface, radius: int = BALL_RADIUS):
        self.sim = sim
        self.surface = surface
        self.radius = radius
        self.items: List[BallItem] = []
        self._generation = None

    def _rebuild_items(self) -> None:
        for item in self.items:
            item.clear_last_location(self.surface)
        self.items = [BallItem(b, self.radius) for b in self.sim.bodies]
        self._generation = self.sim.generation

    def frame(self) -> None:
        with self.sim.lock:
            if self._generation != self.sim.generation:
                self._rebuild_items()
            snapshot = [(item, item.body.position) for item in self.items]

        # Erase everything first so a ball's old box can't wipe another's new circle
        for item, _ in snapshot:
            item.clear_last_location(self.surface)
        for item, position in snapshot:
            item.redraw(self.surface, position)
