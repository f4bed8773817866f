#!/usr/bin/env python3
"""
Immutable 2D vector used for positions, velocities and forces.

Every arithmetic operation returns a new Vector; instances are never mutated.
Arguments are validated eagerly so a non-finite value stops the simulation at
the operation that produced it instead of spreading NaNs through later steps.
"""
import math
from dataclasses import dataclass
from numbers import Real
from typing import Sequence

from .errors import InvalidArgument


def check_number(value, name: str) -> None:
    """Raise InvalidArgument unless value is a finite real number (bools excluded)."""
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidArgument(name, value)
    try:
        finite = math.isfinite(value)
    except OverflowError:
        # ints too large to convert to float
        finite = False
    if not finite:
        raise InvalidArgument(name, value)


def check_vector(value, name: str) -> None:
    if not isinstance(value, Vector):
        raise InvalidArgument(name, value, "a Vector")


@dataclass(frozen=True)
class Vector:
    x: float
    y: float

    def __post_init__(self):
        check_number(self.x, "x")
        check_number(self.y, "y")

    @classmethod
    def from_pair(cls, pair: Sequence[float]) -> "Vector":
        """Build a vector from an (x, y) sequence, e.g. a JSON array."""
        try:
            x, y = pair
        except (TypeError, ValueError):
            raise InvalidArgument("pair", pair, "an (x, y) pair") from None
        return cls(x, y)

    def add(self, other: "Vector") -> "Vector":
        """Return the vector sum of this vector and other."""
        check_vector(other, "other")
        return Vector(self.x + other.x, self.y + other.y)

    def scale(self, k: float) -> "Vector":
        """Return this vector multiplied by the scalar k."""
        check_number(k, "k")
        return Vector(self.x * k, self.y * k)

    def magnitude(self) -> float:
        return math.hypot(self.x, self.y)

    def __add__(self, other):
        if not isinstance(other, Vector):
            return NotImplemented
        return self.add(other)

    def __mul__(self, k):
        if isinstance(k, Vector):
            return NotImplemented
        return self.scale(k)

    __rmul__ = __mul__

    def __neg__(self):
        return self.scale(-1)

    def __iter__(self):
        yield self.x
        yield self.y
