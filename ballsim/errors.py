#!/usr/bin/env python3
"""
Exception types raised by the simulation core.

All of them derive from SimulationError so a driver can stop on any failure
with a single except clause, while tests can still tell the causes apart.
"""


class SimulationError(Exception):
    """Base class for every failure raised by the simulation core."""


class InvalidArgument(SimulationError, ValueError):
    """
    A value of the wrong type (or a non-finite number) was passed to a
    constructor or an operation.

    Attributes:
        field: name of the offending argument or attribute
        value: the rejected value
    """

    def __init__(self, field: str, value, expected: str = "a finite number"):
        self.field = field
        self.value = value
        self.expected = expected
        super().__init__(f"{field}: {value!r} is not {expected}")


class DegenerateState(SimulationError, ArithmeticError):
    """
    The attraction between two bodies is undefined because they occupy the
    same position (or are too close for their squared separation to be
    represented).
    """

    def __init__(self, body_a, body_b, reason: str = "are coincident"):
        self.body_a = body_a
        self.body_b = body_b
        super().__init__(
            f"bodies {_label(body_a)} and {_label(body_b)} {reason} at {body_a.position}"
        )


def _label(body) -> str:
    name = getattr(body, "name", "")
    return repr(name) if name else f"<{id(body):#x}>"
