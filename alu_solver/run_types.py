"""Solve pipeline data types (pure data, no business logic)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .ir import Register
from . import constants


class DigitOrder(Enum):
    """Order in which candidate digits are tried at each position."""

    DESCENDING = "descending"  # largest accepted numeral
    ASCENDING = "ascending"  # smallest accepted numeral

    def digits(self) -> range:
        if self == DigitOrder.DESCENDING:
            return range(constants.DIGIT_MAX, constants.DIGIT_MIN - 1, -1)
        return range(constants.DIGIT_MIN, constants.DIGIT_MAX + 1)


@dataclass(frozen=True)
class SearchConfig:
    """Groups optimizer and digit search configuration."""

    order: DigitOrder = DigitOrder.DESCENDING
    output_register: Register = Register(constants.DEFAULT_OUTPUT_REGISTER)
    target: int = constants.DEFAULT_TARGET
    prune: bool = True
    parallel: bool = False
    max_workers: int | None = None
    max_rounds: int = constants.FIXPOINT_MAX_ROUNDS


@dataclass
class SolveStats:
    """Timing and size statistics for each pipeline stage."""

    digit_count: int = 0
    order: str = ""

    # Stage timings (seconds)
    validate_time: float = 0.0
    optimize_time: float = 0.0
    split_time: float = 0.0
    search_time: float = 0.0
    total_time: float = 0.0

    # Output sizes
    raw_instruction_count: int = 0
    optimized_instruction_count: int = 0
    fixpoint_rounds: int = 0
    segment_count: int = 0
    evaluations: int = 0

    def report(self) -> str:
        lines = [
            "═══ Solve Statistics ═══",
            f"  Program: {self.raw_instruction_count} instructions,"
            f" {self.digit_count} digits ({self.order})",
            "",
            f"  {'Stage':<20} {'Time':>10}  {'Output':>30}",
            f"  {'─' * 20} {'─' * 10}  {'─' * 30}",
        ]

        stages = [
            ("Validate", self.validate_time, ""),
            (
                "Optimize",
                self.optimize_time,
                f"{self.optimized_instruction_count} instructions,"
                f" {self.fixpoint_rounds} rounds",
            ),
            ("Split", self.split_time, f"{self.segment_count} segments"),
            ("Search", self.search_time, f"{self.evaluations} segment runs"),
        ]
        for name, t, output in stages:
            time_str = f"{t * 1000:>8.1f}ms"
            lines.append(f"  {name:<20} {time_str:>10}  {output:>30}")

        lines.append(f"  {'─' * 20} {'─' * 10}  {'─' * 30}")
        lines.append(f"  {'Total':<20} {self.total_time * 1000:>8.1f}ms")
        return "\n".join(lines)
