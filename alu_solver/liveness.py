"""Backward liveness pass — drop instructions whose result is never read."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from .ir import READ_MODIFY_WRITE, Instruction, Opcode, Program, Register
from . import constants

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Liveness:
    """One "is-used" flag per register."""

    flags: tuple[bool, ...] = (False,) * constants.REGISTER_COUNT

    @classmethod
    def observing(cls, output: Register) -> Liveness:
        return cls().with_flag(output, True)

    def __getitem__(self, register: Register) -> bool:
        return self.flags[register.index]

    def with_flag(self, register: Register, used: bool) -> Liveness:
        updated = list(self.flags)
        updated[register.index] = used
        return Liveness(tuple(updated))


def transfer(inst: Instruction, live: Liveness) -> Liveness:
    """Liveness before *inst*, given liveness after it. *inst* is kept."""
    if inst.opcode == Opcode.READ_INPUT:
        return live.with_flag(inst.register, False)
    if inst.opcode == Opcode.ASSIGN:
        live = live.with_flag(inst.register, False)
        if inst.reads_register:
            live = live.with_flag(inst.operand, True)
        return live
    if inst.opcode in READ_MODIFY_WRITE and inst.reads_register:
        return live.with_flag(inst.operand, True)
    return live


def live_instruction_mask(
    instructions: Sequence[Instruction], output: Register
) -> list[bool]:
    """Decide, per instruction, whether it survives the backward pass.

    Input reads always survive because they consume a digit even when the
    value they load is dead.
    """
    live = Liveness.observing(output)
    mask = [False] * len(instructions)
    for idx in range(len(instructions) - 1, -1, -1):
        inst = instructions[idx]
        if not live[inst.register] and inst.opcode != Opcode.READ_INPUT:
            continue
        mask[idx] = True
        live = transfer(inst, live)
    return mask


def eliminate_dead_code(program: Program, output: Register) -> Program:
    """Return *program* without instructions that cannot affect *output*."""
    mask = live_instruction_mask(program.instructions, output)
    kept = tuple(inst for inst, alive in zip(program, mask) if alive)
    logger.debug("Liveness pass: %d -> %d instructions", len(program), len(kept))
    return Program(kept)
