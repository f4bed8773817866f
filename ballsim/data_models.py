#!/usr/bin/env python3
"""
Data models for the ball gravity simulator.

This module defines the mutable Body shared between physics and rendering,
and the read-only Scenario description used to seed a run.

Units and usage
- Positions are in pixels of the drawing surface, velocities in pixels per second.
- Masses are unscaled; the gravitational constant is implicitly 1.
- Body instances are mutated by the simulation thread; access is coordinated by
  SimulationRun using a lock.
"""
from dataclasses import dataclass, field
from typing import List, Tuple

from .errors import InvalidArgument
from .vector import Vector, check_number, check_vector


class Body:
    """
    A point mass with a position and a velocity.

    Position and velocity are re-validated on every assignment; mass is fixed
    for the lifetime of the body.
    """

    def __init__(self, position: Vector, velocity: Vector, mass: float, name: str = ""):
        check_vector(position, "position")
        check_vector(velocity, "velocity")
        check_number(mass, "mass")
        if mass <= 0:
            raise InvalidArgument("mass", mass, "a positive number")
        self.position = position
        self.velocity = velocity
        self._mass = mass
        self.name = name

    @property
    def mass(self) -> float:
        return self._mass

    @property
    def position(self) -> Vector:
        return self._position

    @position.setter
    def position(self, new_position: Vector) -> None:
        check_vector(new_position, "position")
        self._position = new_position

    @property
    def velocity(self) -> Vector:
        return self._velocity

    @velocity.setter
    def velocity(self, new_velocity: Vector) -> None:
        check_vector(new_velocity, "velocity")
        self._velocity = new_velocity

    def apply_force(self, force: Vector, duration: float) -> None:
        """
        Change the velocity of this body according to Newton's second law.

        The force is treated as constant for the whole duration (semi-implicit
        Euler velocity update).

        Args:
            force: Force acting on the body.
            duration: How long the force acts, in seconds.
        """
        check_vector(force, "force")
        check_number(duration, "duration")
        self.velocity = self.velocity.add(force.scale(duration / self.mass))

    def move(self, duration: float) -> None:
        """Advance the position by applying the current velocity for duration seconds."""
        check_number(duration, "duration")
        self.position = self.position.add(self.velocity.scale(duration))

    def __repr__(self) -> str:
        return (f"Body(name={self.name!r}, position={self.position!r}, "
                f"velocity={self.velocity!r}, mass={self.mass!r})")


@dataclass(frozen=True)
class BodySpec:
    """Initial conditions for one body of a scenario."""
    position: Tuple[float, float]
    velocity: Tuple[float, float]
    mass: float
    name: str = ""

    def spawn(self) -> Body:
        return Body(Vector.from_pair(self.position), Vector.from_pair(self.velocity), self.mass, self.name)


@dataclass(frozen=True)
class Scenario:
    """
    A named, ordered set of initial body conditions.

    Scenarios are never mutated; spawn() builds a fresh list of bodies each
    time so the same scenario can seed any number of runs.
    """
    name: str
    bodies: Tuple[BodySpec, ...]
    description: str = field(default="", compare=False)

    def spawn(self) -> List[Body]:
        return [spec.spawn() for spec in self.bodies]
