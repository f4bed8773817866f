#!/usr/bin/env python3
"""
Core Physics Engine for the ball gravity simulator

Responsibilities
- Compute the pairwise gravitational attraction between two bodies.
- Advance all bodies by one fixed time step (move first, then apply forces).
- Provide small diagnostics for a running system (momentum, energy).

Units and conventions
- Positions are in pixels, velocities in pixels per second, durations in seconds.
- Masses are unscaled and the gravitational constant is implicitly 1, so
  F = m1 * m2 / r^2.

Numerical notes
- There is no softening: two bodies at the same position have no defined
  attraction and DegenerateState is raised instead of producing NaN. The same
  holds for a separation so small that |d|^2 underflows to zero.
- The step moves every body with its current velocity before any force is
  evaluated, then applies each pairwise force immediately (not batched). The
  ordering is part of the model: changing it changes the trajectories.
- Complexity is O(N^2) per step (direct summation).

Threading
- Functions here are pure compute over the bodies they are given. Callers that
  share bodies between threads (SimulationRun) hold a lock around each call.
"""

from typing import Iterable, Protocol, Sequence

from .data_models import Body
from .errors import DegenerateState
from .vector import Vector


class PointMass(Protocol):
    """Anything the diagnostics can read: a Body or a snapshot of one."""
    position: Vector
    velocity: Vector
    mass: float


def attraction(body_a: Body, body_b: Body) -> Vector:
    """
    Calculate the force experienced by body_a as a result of the presence of body_b.

    With d the vector pointing from body_b to body_a, the force is

        F = d / |d| * -(m_a * m_b) / |d|^2

    i.e. directed from body_a towards body_b. Neither body is modified.

    Raises:
        DegenerateState: if the two bodies occupy the same position, or are so
            close that the squared separation underflows to zero.
    """
    distance = body_a.position.add(body_b.position.scale(-1))
    r = distance.magnitude()
    if r == 0:
        raise DegenerateState(body_a, body_b)
    r_squared = r * r
    if r_squared == 0:
        raise DegenerateState(body_a, body_b, "are too close to resolve")
    force_magnitude = -(body_a.mass * body_b.mass) / r_squared
    return distance.scale(force_magnitude / r)


def move_and_apply_gravity(bodies: Sequence[Body], duration: float) -> None:
    """
    Perform one integration step of the given duration on all bodies, in place.

    1) Every body moves according to its current velocity.
    2) For every ordered pair (i, j), i != j, the attraction on body i due to
       body j is applied to body i straight away.
    """
    for body in bodies:
        body.move(duration)

    n = len(bodies)
    for i in range(n):
        body_i = bodies[i]
        for j in range(n):
            if j == i:
                continue
            body_i.apply_force(attraction(body_i, bodies[j]), duration)


def total_momentum(bodies: Iterable[PointMass]) -> Vector:
    """Sum of m * v over all bodies."""
    momentum = Vector(0.0, 0.0)
    for b in bodies:
        momentum = momentum.add(b.velocity.scale(b.mass))
    return momentum


def kinetic_energy(bodies: Iterable[PointMass]) -> float:
    return sum(0.5 * b.mass * b.velocity.magnitude() * b.velocity.magnitude() for b in bodies)


def potential_energy(bodies: Sequence[PointMass]) -> float:
    """
    Gravitational potential energy, -sum(m_i * m_j / r_ij) over unordered pairs.

    Raises:
        DegenerateState: if any two bodies are coincident.
    """
    energy = 0.0
    n = len(bodies)
    for i in range(n):
        for j in range(i + 1, n):
            r = bodies[i].position.add(bodies[j].position.scale(-1)).magnitude()
            if r == 0:
                raise DegenerateState(bodies[i], bodies[j])
            energy -= bodies[i].mass * bodies[j].mass / r
    return energy


def total_energy(bodies: Sequence[PointMass]) -> float:
    return kinetic_energy(bodies) + potential_energy(bodies)
