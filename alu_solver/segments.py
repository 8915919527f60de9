"""Segment splitter — partition a program into one slice per input digit."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import MalformedProgramError
from .ir import Instruction, Opcode, Program


@dataclass(frozen=True)
class Segment:
    """Instructions from one input read up to, not including, the next."""

    index: int
    instructions: tuple[Instruction, ...]

    def __len__(self) -> int:
        return len(self.instructions)

    def __str__(self) -> str:
        body = "\n".join(f"  {inst}" for inst in self.instructions)
        return f"[segment {self.index}]\n{body}"


def split_segments(program: Program) -> list[Segment]:
    """Open a new segment at each input read; everything else joins the open one."""
    if len(program) == 0 or program[0].opcode != Opcode.READ_INPUT:
        raise MalformedProgramError("program must start with an input read")

    groups: list[list[Instruction]] = []
    for inst in program:
        if inst.opcode == Opcode.READ_INPUT:
            groups.append([])
        groups[-1].append(inst)

    return [Segment(index=i, instructions=tuple(group)) for i, group in enumerate(groups)]
