"""Forward interval pass — rewrite instructions using tracked value ranges.

Every register carries an Interval that over-approximates its concrete value
at the current program point. Each instruction is first rewritten into a
cheaper equivalent using those intervals (or dropped when it is a no-op),
then the destination interval is updated from the rewritten instruction.

The bounds are sound for the programs this package targets, where every
tracked range stays non-negative. Mixed-sign ranges combined with division
and modulo are bounded conservatively but carry no guarantee.
"""

from __future__ import annotations

import logging
from typing import Iterable

from . import intervals
from .intervals import Interval, IntervalState
from .ir import Instruction, Opcode, Program, Register, Value

logger = logging.getLogger(__name__)

_IDENTITY_OPERAND: dict[Opcode, int] = {
    Opcode.ADD: 0,
    Opcode.MULTIPLY: 1,
    Opcode.DIVIDE: 1,
}


def operand_interval(operand: Value, state: IntervalState) -> Interval:
    if isinstance(operand, Register):
        return state[operand]
    return Interval.point(operand)


def _assign(inst: Instruction, operand: Value) -> Instruction:
    return Instruction(opcode=Opcode.ASSIGN, register=inst.register, operand=operand)


def rewrite(inst: Instruction, state: IntervalState) -> Instruction | None:
    """Return a cheaper equivalent of *inst*, or None when it is a no-op.

    Rules are tried in order and the first match wins; a rule that produces
    a different instruction feeds it back through the table.
    """
    if inst.opcode == Opcode.READ_INPUT:
        return inst

    op = inst.opcode
    operand = inst.operand
    dst = state[inst.register]
    val = operand_interval(operand, state)

    if not inst.reads_register and _IDENTITY_OPERAND.get(op) == operand:
        return None
    if op in (Opcode.MULTIPLY, Opcode.DIVIDE) and dst == intervals.ZERO:
        return None
    if op == Opcode.MULTIPLY and val == intervals.ZERO:
        return rewrite(_assign(inst, 0), state)
    if op == Opcode.ADD and dst == intervals.ZERO:
        return rewrite(_assign(inst, operand), state)
    if inst.reads_register and val.is_point:
        return rewrite(inst.with_operand(val.low), state)
    if op == Opcode.ASSIGN and val == dst and val.is_point:
        return None
    if (
        op == Opcode.MODULO
        and not inst.reads_register
        and dst.is_within(0, operand - 1)
    ):
        return None
    if (
        op == Opcode.MODULO
        and inst.reads_register
        and dst.low >= 0
        and val.low > dst.high
    ):
        return None
    if op == Opcode.COMPARE_EQUAL and dst.is_disjoint(val):
        return rewrite(_assign(inst, 0), state)
    if op == Opcode.COMPARE_EQUAL and dst.is_point and dst == val:
        return rewrite(_assign(inst, 1), state)
    return inst


def transfer(inst: Instruction, state: IntervalState) -> IntervalState:
    """Update the destination interval after executing *inst* abstractly."""
    if inst.opcode == Opcode.READ_INPUT:
        return state.with_interval(inst.register, intervals.DIGITS)

    dst = state[inst.register]
    val = operand_interval(inst.operand, state)
    op = inst.opcode

    if op == Opcode.ADD:
        result = intervals.add(dst, val)
    elif op == Opcode.MULTIPLY:
        result = intervals.multiply(dst, val)
    elif op == Opcode.DIVIDE:
        result = intervals.divide(dst, val)
    elif op == Opcode.MODULO:
        result = intervals.modulo(dst, val)
    elif op == Opcode.COMPARE_EQUAL:
        result = intervals.BOOLEAN
    else:
        result = val
    return state.with_interval(inst.register, result)


def step(
    inst: Instruction, state: IntervalState
) -> tuple[Instruction | None, IntervalState]:
    """Rewrite one instruction and advance the interval state past it."""
    rewritten = rewrite(inst, state)
    if rewritten is None:
        return None, state
    return rewritten, transfer(rewritten, state)


def run_interval_pass(
    instructions: Iterable[Instruction], state: IntervalState | None = None
) -> tuple[list[Instruction], IntervalState]:
    """Fold :func:`step` over *instructions* starting from *state*.

    Args:
        instructions: Instructions in program order.
        state: Intervals at entry; all registers at [0, 0] when None.

    Returns:
        The surviving (possibly rewritten) instructions and the exit state.
    """
    current = state if state is not None else IntervalState()
    kept: list[Instruction] = []
    for inst in instructions:
        rewritten, current = step(inst, current)
        if rewritten is not None:
            kept.append(rewritten)
    return kept, current


def optimize_intervals(program: Program) -> Program:
    """One forward pass over *program* from the all-zero register state."""
    kept, exit_state = run_interval_pass(program)
    logger.debug(
        "Interval pass: %d -> %d instructions, exit %s",
        len(program),
        len(kept),
        exit_state,
    )
    return Program(tuple(kept))
