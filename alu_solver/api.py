"""Composable API functions for the optimize-then-search pipeline.

Each function is one caller-facing workflow: validate a program, optimize
and search it for an accepted digit sequence, or render it as text.
"""

from __future__ import annotations

import dataclasses
import logging
import time

from .errors import ExhaustedInputError, MalformedProgramError
from .ir import Opcode, Program
from .ir_stats import count_opcodes
from .optimizer import run_fixpoint
from .parser import parse_program
from .run_types import DigitOrder, SearchConfig, SolveStats
from .search import SegmentPredicate, search_digits
from .segments import split_segments

logger = logging.getLogger(__name__)


def validate_program(program: Program) -> None:
    """Reject programs the optimizer and splitter cannot work with.

    Raises:
        MalformedProgramError: The program is empty or does not start with
            an input read.
    """
    if len(program) == 0:
        raise MalformedProgramError("program is empty")
    if program[0].opcode != Opcode.READ_INPUT:
        raise MalformedProgramError(
            f"program must start with an input read, found '{program[0]}'"
        )


def _resolve_config(order: DigitOrder, config: SearchConfig | None) -> SearchConfig:
    if config is None:
        return SearchConfig(order=order)
    return dataclasses.replace(config, order=order)


def solve_with_stats(
    program: Program,
    digit_count: int,
    order: DigitOrder = DigitOrder.DESCENDING,
    config: SearchConfig | None = None,
    predicate: SegmentPredicate | None = None,
) -> tuple[tuple[int, ...], SolveStats]:
    """Optimize *program*, split it per digit and search for an accepted input.

    Args:
        program: The raw program.
        digit_count: Expected number of input digits N.
        order: DESCENDING for the largest numeral, ASCENDING for the smallest.
        config: Output register, target and search options.
        predicate: Custom per-segment acceptance check.

    Returns:
        The N accepted digits and the per-stage statistics.

    Raises:
        MalformedProgramError: The program fails validation.
        ExhaustedInputError: The program does not read exactly N digits.
        SearchExhaustedError: No digit sequence is accepted.
    """
    cfg = _resolve_config(order, config)
    stats = SolveStats(
        digit_count=digit_count,
        order=order.value,
        raw_instruction_count=len(program),
    )
    total_start = time.perf_counter()

    t0 = time.perf_counter()
    validate_program(program)
    reads = program.input_count()
    if reads != digit_count:
        raise ExhaustedInputError(
            f"program reads {reads} digit(s) but {digit_count} were requested"
        )
    stats.validate_time = time.perf_counter() - t0
    logger.info(
        "Solving %d-instruction program: %s", len(program), count_opcodes(program)
    )

    t0 = time.perf_counter()
    fixpoint = run_fixpoint(program, cfg.output_register, cfg.max_rounds)
    stats.optimize_time = time.perf_counter() - t0
    stats.optimized_instruction_count = len(fixpoint.program)
    stats.fixpoint_rounds = fixpoint.rounds

    t0 = time.perf_counter()
    segments = split_segments(fixpoint.program)
    stats.split_time = time.perf_counter() - t0
    stats.segment_count = len(segments)

    t0 = time.perf_counter()
    result = search_digits(segments, cfg, predicate)
    stats.search_time = time.perf_counter() - t0
    stats.evaluations = result.evaluations

    stats.total_time = time.perf_counter() - total_start
    return result.digits, stats


def solve(
    program: Program,
    digit_count: int,
    order: DigitOrder = DigitOrder.DESCENDING,
    config: SearchConfig | None = None,
    predicate: SegmentPredicate | None = None,
) -> tuple[int, ...]:
    """Return the first accepted N-digit input in *order*. See :func:`solve_with_stats`."""
    digits, _stats = solve_with_stats(program, digit_count, order, config, predicate)
    return digits


def solve_source(
    source: str,
    digit_count: int,
    order: DigitOrder = DigitOrder.DESCENDING,
    config: SearchConfig | None = None,
    predicate: SegmentPredicate | None = None,
) -> str:
    """Parse program text and return the accepted numeral as a string."""
    digits = solve(parse_program(source), digit_count, order, config, predicate)
    return "".join(str(d) for d in digits)


def dump_program(program: Program) -> str:
    """Return a human-readable text dump, one instruction per line."""
    return "\n".join(f"  {inst}" for inst in program)


def opcode_stats(source: str) -> dict[str, int]:
    """Parse program text and return opcode mnemonic frequency counts."""
    return count_opcodes(parse_program(source))
