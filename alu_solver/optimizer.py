"""Fixpoint driver — alternate the interval and liveness passes until stable."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .errors import NonTerminationError
from .interval_pass import optimize_intervals
from .ir import Program, Register
from .liveness import eliminate_dead_code
from . import constants

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FixpointResult:
    program: Program
    rounds: int


def run_fixpoint(
    program: Program,
    output: Register,
    max_rounds: int = constants.FIXPOINT_MAX_ROUNDS,
) -> FixpointResult:
    """Repeat {interval pass, liveness pass} until a round changes nothing.

    Stability is decided by structural equality of the Program, not by
    identity or hashing.

    Raises:
        NonTerminationError: No fixpoint within *max_rounds* rounds.
    """
    current = program
    for round_no in range(1, max_rounds + 1):
        candidate = eliminate_dead_code(optimize_intervals(current), output)
        logger.debug(
            "Fixpoint round %d: %d -> %d instructions",
            round_no,
            len(current),
            len(candidate),
        )
        if candidate == current:
            logger.info(
                "Optimizer reached a fixpoint after %d round(s): %d -> %d instructions",
                round_no,
                len(program),
                len(current),
            )
            return FixpointResult(program=current, rounds=round_no)
        current = candidate

    raise NonTerminationError(
        f"optimizer did not reach a fixpoint within {max_rounds} rounds"
    )


def optimize(
    program: Program,
    output: Register = Register(constants.DEFAULT_OUTPUT_REGISTER),
    max_rounds: int = constants.FIXPOINT_MAX_ROUNDS,
) -> Program:
    """Optimize *program* for the value of *output* at program end."""
    return run_fixpoint(program, output, max_rounds).program
