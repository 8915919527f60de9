"""Interval domain — closed integer ranges and per-register interval state."""

from __future__ import annotations

from dataclasses import dataclass

from .ir import Register
from .vm import truncating_div
from . import constants


@dataclass(frozen=True)
class Interval:
    """A closed integer range [low, high]."""

    low: int
    high: int

    def __post_init__(self) -> None:
        if self.low > self.high:
            raise ValueError(f"empty interval [{self.low}, {self.high}]")

    @classmethod
    def point(cls, value: int) -> Interval:
        return cls(value, value)

    @property
    def is_point(self) -> bool:
        return self.low == self.high

    def contains(self, value: int) -> bool:
        return self.low <= value <= self.high

    def is_within(self, low: int, high: int) -> bool:
        return low <= self.low and self.high <= high

    def is_disjoint(self, other: Interval) -> bool:
        return self.high < other.low or other.high < self.low

    def __str__(self) -> str:
        return f"[{self.low}, {self.high}]"


ZERO = Interval.point(0)
DIGITS = Interval(constants.DIGIT_MIN, constants.DIGIT_MAX)
BOOLEAN = Interval(0, 1)


def _hull(values: list[int]) -> Interval:
    return Interval(min(values), max(values))


def add(lhs: Interval, rhs: Interval) -> Interval:
    return Interval(lhs.low + rhs.low, lhs.high + rhs.high)


def multiply(lhs: Interval, rhs: Interval) -> Interval:
    return _hull([a * b for a in (lhs.low, lhs.high) for b in (rhs.low, rhs.high)])


def _nonzero_parts(divisor: Interval) -> list[Interval]:
    """Split *divisor* into its strictly negative and strictly positive parts."""
    parts = []
    if divisor.low <= -1:
        parts.append(Interval(divisor.low, min(divisor.high, -1)))
    if divisor.high >= 1:
        parts.append(Interval(max(divisor.low, 1), divisor.high))
    return parts


def divide(lhs: Interval, rhs: Interval) -> Interval:
    """Truncating quotient bounds taken at the corners of each sign-constant
    part of the divisor. A divisor of exactly zero leaves *lhs* unchanged
    since execution fails there."""
    parts = _nonzero_parts(rhs)
    if not parts:
        return lhs
    return _hull(
        [
            truncating_div(a, b)
            for part in parts
            for a in (lhs.low, lhs.high)
            for b in (part.low, part.high)
        ]
    )


def modulo(lhs: Interval, rhs: Interval) -> Interval:
    """Remainder bounds: the sign follows the dividend and the magnitude stays
    below the largest divisor magnitude."""
    bound = max(abs(rhs.low), abs(rhs.high)) - 1
    if bound < 0:
        return lhs
    low = 0 if lhs.low >= 0 else max(lhs.low, -bound)
    high = 0 if lhs.high <= 0 else min(lhs.high, bound)
    return Interval(low, high)


@dataclass(frozen=True)
class IntervalState:
    """Exactly one interval per register, threaded through the forward pass."""

    intervals: tuple[Interval, ...] = (ZERO,) * constants.REGISTER_COUNT

    @classmethod
    def from_values(cls, values: list[int]) -> IntervalState:
        return cls(tuple(Interval.point(v) for v in values))

    def __getitem__(self, register: Register) -> Interval:
        return self.intervals[register.index]

    def with_interval(self, register: Register, interval: Interval) -> IntervalState:
        updated = list(self.intervals)
        updated[register.index] = interval
        return IntervalState(tuple(updated))

    def __str__(self) -> str:
        return " ".join(f"{reg}={self[reg]}" for reg in Register)
