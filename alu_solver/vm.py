"""Concrete interpreter — register file and instruction execution."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Iterable

from .errors import ExecutionArithmeticError, ExhaustedInputError
from .ir import Instruction, Opcode, Register
from . import constants


@dataclass
class RegisterFile:
    values: list[int] = field(default_factory=lambda: [0] * constants.REGISTER_COUNT)

    def __getitem__(self, register: Register) -> int:
        return self.values[register.index]

    def __setitem__(self, register: Register, value: int) -> None:
        self.values[register.index] = value

    def copy(self) -> RegisterFile:
        return RegisterFile(list(self.values))

    def as_dict(self) -> dict[str, int]:
        return {reg.value: self.values[reg.index] for reg in Register}


def truncating_div(lhs: int, rhs: int) -> int:
    """Integer division rounding toward zero."""
    if rhs == 0:
        raise ExecutionArithmeticError(f"division by zero ({lhs} / 0)")
    quotient = abs(lhs) // abs(rhs)
    return quotient if (lhs < 0) == (rhs < 0) else -quotient


def truncating_mod(lhs: int, rhs: int) -> int:
    """Remainder of truncating division; takes the sign of the dividend."""
    if rhs == 0:
        raise ExecutionArithmeticError(f"modulo by zero ({lhs} % 0)")
    return lhs - rhs * truncating_div(lhs, rhs)


class Operators:
    """Binary operator evaluation, keyed by opcode."""

    BINOP_TABLE: dict[Opcode, Callable[[int, int], int]] = {
        Opcode.ADD: lambda a, b: a + b,
        Opcode.MULTIPLY: lambda a, b: a * b,
        Opcode.DIVIDE: truncating_div,
        Opcode.MODULO: truncating_mod,
        Opcode.COMPARE_EQUAL: lambda a, b: int(a == b),
        Opcode.ASSIGN: lambda _a, b: b,
    }

    @classmethod
    def eval_binop(cls, opcode: Opcode, lhs: int, rhs: int) -> int:
        return cls.BINOP_TABLE[opcode](lhs, rhs)


def _resolve(registers: RegisterFile, operand: Register | int) -> int:
    if isinstance(operand, Register):
        return registers[operand]
    return operand


def execute(
    instructions: Iterable[Instruction],
    inputs: Iterable[int],
    registers: RegisterFile | None = None,
) -> RegisterFile:
    """Run *instructions* against *registers* (fresh if omitted), in place.

    Args:
        instructions: The instructions to run, in order.
        inputs: Digits consumed one per input read.
        registers: Register file to mutate; a zeroed one is created when None.

    Returns:
        The register file after the last instruction.

    Raises:
        ExhaustedInputError: An input read found no digits left.
        ExecutionArithmeticError: Division or modulo by zero.
    """
    regs = registers if registers is not None else RegisterFile()
    queue = deque(inputs)

    for inst in instructions:
        if inst.opcode == Opcode.READ_INPUT:
            if not queue:
                raise ExhaustedInputError(f"'{inst}' executed with no input left")
            regs[inst.register] = queue.popleft()
            continue
        regs[inst.register] = Operators.eval_binop(
            inst.opcode, regs[inst.register], _resolve(regs, inst.operand)
        )

    return regs
