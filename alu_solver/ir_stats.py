"""Pure functions for computing statistics over instruction sequences."""

from __future__ import annotations

from collections import Counter
from typing import Iterable

from alu_solver.ir import Instruction


def count_opcodes(instructions: Iterable[Instruction]) -> dict[str, int]:
    """Return a frequency map of opcode mnemonics in the given instructions.

    Args:
        instructions: Instructions or a Program.

    Returns:
        A dict mapping mnemonic strings ("inp", "add", ...) to their
        occurrence counts. Empty dict for an empty input.
    """
    return dict(Counter(inst.opcode.value for inst in instructions))
