"""Tests for the text loader."""

import pytest

from alu_solver.errors import MalformedProgramError
from alu_solver.ir import Opcode, Register
from alu_solver.parser import parse_instruction, parse_program

from tests.unit.conftest import (
    BINARY,
    MONAD_BLOCK,
    NEGATE,
    TRIPLE_CHECK,
    make_program,
)


class TestParseProgram:
    def test_negate(self):
        assert parse_program(NEGATE) == make_program(
            (Opcode.READ_INPUT, Register.X),
            (Opcode.MULTIPLY, Register.X, -1),
        )

    def test_register_operands(self):
        assert parse_program(TRIPLE_CHECK) == make_program(
            (Opcode.READ_INPUT, Register.Z),
            (Opcode.READ_INPUT, Register.X),
            (Opcode.MULTIPLY, Register.Z, 3),
            (Opcode.COMPARE_EQUAL, Register.Z, Register.X),
        )

    def test_binary_decomposition(self):
        program = parse_program(BINARY)
        assert len(program) == 11
        assert program[1] == parse_instruction("add z w")
        assert program[3].opcode == Opcode.DIVIDE
        assert program[3].operand == 2

    def test_block_length(self):
        program = parse_program(MONAD_BLOCK)
        assert len(program) == 18
        assert program.input_count() == 1

    def test_blank_lines_are_ignored(self):
        assert len(parse_program("\n\ninp w\n\n   \nadd z w\n")) == 2

    def test_empty_source_gives_empty_program(self):
        assert len(parse_program("")) == 0


class TestParseErrors:
    def test_unknown_mnemonic(self):
        with pytest.raises(MalformedProgramError, match="unknown instruction"):
            parse_program("inp w\nsub z 1")

    def test_unknown_register(self):
        with pytest.raises(MalformedProgramError, match="unknown register"):
            parse_instruction("add q 1")

    def test_bad_operand(self):
        with pytest.raises(MalformedProgramError, match="neither a register"):
            parse_instruction("add x 1.5")

    def test_wrong_arity(self):
        with pytest.raises(MalformedProgramError, match="takes 2 argument"):
            parse_instruction("add x")
        with pytest.raises(MalformedProgramError, match="takes 1 argument"):
            parse_instruction("inp w 3")

    def test_assign_is_reserved(self):
        with pytest.raises(MalformedProgramError, match="reserved"):
            parse_instruction("set x 1")

    def test_error_reports_line_number(self):
        with pytest.raises(MalformedProgramError, match="line 3"):
            parse_program("inp w\nadd z w\nadd r 1")
