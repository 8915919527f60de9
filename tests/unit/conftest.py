"""Shared helpers for the optimizer and search test suites."""

import itertools
import random

from alu_solver.ir import Instruction, Opcode, Program, Register
from alu_solver.vm import RegisterFile, execute

REGISTERS = list(Register)

NEGATE = """
inp x
mul x -1
"""

TRIPLE_CHECK = """
inp z
inp x
mul z 3
eql z x
"""

BINARY = """
inp w
add z w
mod z 2
div w 2
add y w
mod y 2
div w 2
add x w
mod x 2
div w 2
mod w 2
"""

MONAD_BLOCK = """\
inp w
mul x 0
add x z
mod x 26
div z 1
add x 13
eql x w
eql x 0
mul y 0
add y 25
mul y x
add y 1
mul z y
mul y 0
add y w
add y 8
mul y x
add z y
"""

PAIRED_BLOCKS = """\
inp w
mul x 0
add x z
mod x 26
div z 1
add x 10
eql x w
eql x 0
mul y 0
add y 25
mul y x
add y 1
mul z y
mul y 0
add y w
add y 10
mul y x
add z y
inp w
mul x 0
add x z
mod x 26
div z 26
add x -11
eql x w
eql x 0
mul y 0
add y 25
mul y x
add y 1
mul z y
mul y 0
add y w
add y 12
mul y x
add z y
"""


def make_inst(opcode: Opcode, register: Register, operand=None) -> Instruction:
    """Helper to build an Instruction concisely."""
    return Instruction(opcode=opcode, register=register, operand=operand)


def make_program(*specs) -> Program:
    """Helper: build a Program from (opcode, register[, operand]) tuples."""
    return Program(tuple(make_inst(*spec) for spec in specs))


def all_inputs(count: int):
    """Every digit sequence of length *count* over 1..9."""
    return itertools.product(range(1, 10), repeat=count)


def run_registers(program, inputs) -> list[int]:
    return execute(program, inputs, RegisterFile()).values


def random_program(rng: random.Random, max_reads: int = 3, max_body: int = 6) -> Program:
    """Random program whose intermediates stay non-negative.

    Registers start at zero and inputs are 1..9; only add / mul / eql take
    non-negative operands and div / mod take positive constants, so no value
    ever goes below zero.
    """
    insts: list[Instruction] = []
    for _ in range(rng.randint(1, max_reads)):
        insts.append(make_inst(Opcode.READ_INPUT, rng.choice(REGISTERS)))
        for _ in range(rng.randint(0, max_body)):
            op = rng.choice(
                [
                    Opcode.ADD,
                    Opcode.MULTIPLY,
                    Opcode.DIVIDE,
                    Opcode.MODULO,
                    Opcode.COMPARE_EQUAL,
                ]
            )
            if op in (Opcode.DIVIDE, Opcode.MODULO):
                operand = rng.randint(1, 6)
            elif rng.random() < 0.5:
                operand = rng.choice(REGISTERS)
            else:
                operand = rng.randint(0, 6)
            insts.append(make_inst(op, rng.choice(REGISTERS), operand))
    return Program(tuple(insts))
