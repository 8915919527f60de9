"""Tests for splitting a program into per-digit segments."""

import random

import pytest

from alu_solver.errors import MalformedProgramError
from alu_solver.ir import Opcode, Program, Register
from alu_solver.parser import parse_program
from alu_solver.segments import Segment, split_segments

from tests.unit.conftest import PAIRED_BLOCKS, make_program, random_program


class TestSplitSegments:
    def test_one_segment_per_read(self):
        segments = split_segments(parse_program(PAIRED_BLOCKS))
        assert len(segments) == 2
        assert [seg.index for seg in segments] == [0, 1]
        assert all(len(seg) == 18 for seg in segments)

    def test_each_segment_starts_with_read(self):
        for seg in split_segments(parse_program(PAIRED_BLOCKS)):
            assert seg.instructions[0].opcode == Opcode.READ_INPUT

    def test_no_read_inside_segment_body(self):
        for seg in split_segments(parse_program(PAIRED_BLOCKS)):
            body = seg.instructions[1:]
            assert all(inst.opcode != Opcode.READ_INPUT for inst in body)

    def test_single_read_program(self):
        program = make_program((Opcode.READ_INPUT, Register.W))
        segments = split_segments(program)
        assert segments == [Segment(index=0, instructions=tuple(program))]

    def test_consecutive_reads(self):
        program = make_program(
            (Opcode.READ_INPUT, Register.W),
            (Opcode.READ_INPUT, Register.X),
            (Opcode.ADD, Register.Z, Register.X),
        )
        segments = split_segments(program)
        assert [len(seg) for seg in segments] == [1, 2]

    def test_empty_program_rejected(self):
        with pytest.raises(MalformedProgramError):
            split_segments(Program(()))

    def test_program_not_starting_with_read_rejected(self):
        program = make_program(
            (Opcode.ADD, Register.Z, 1),
            (Opcode.READ_INPUT, Register.W),
        )
        with pytest.raises(MalformedProgramError):
            split_segments(program)

    def test_str_lists_instructions(self):
        (seg,) = split_segments(make_program((Opcode.READ_INPUT, Register.W)))
        assert str(seg) == "[segment 0]\n  inp w"


class TestSegmentProperties:
    @pytest.mark.parametrize("seed", range(40))
    def test_concatenation_reconstructs_program(self, seed):
        program = random_program(random.Random(seed))
        segments = split_segments(program)
        rebuilt = Program(
            tuple(inst for seg in segments for inst in seg.instructions)
        )
        assert rebuilt == program

    @pytest.mark.parametrize("seed", range(40))
    def test_segment_count_matches_reads(self, seed):
        program = random_program(random.Random(seed))
        assert len(split_segments(program)) == program.input_count()
