"""ALU program optimizer and digit search package."""

from .api import (  # noqa: F401
    solve,
    solve_with_stats,
    solve_source,
    validate_program,
    dump_program,
    opcode_stats,
)
from .ir import Instruction, Opcode, Program, Register  # noqa: F401
from .optimizer import optimize  # noqa: F401
from .parser import parse_program  # noqa: F401
from .run_types import DigitOrder, SearchConfig  # noqa: F401
