"""IR Design — four-register straight-line arithmetic instructions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Union

from pydantic import BaseModel, ConfigDict, model_validator


class Opcode(str, Enum):
    # Input
    READ_INPUT = "inp"
    # Read-modify-write arithmetic
    ADD = "add"
    MULTIPLY = "mul"
    DIVIDE = "div"
    MODULO = "mod"
    COMPARE_EQUAL = "eql"
    # Optimizer-introduced
    ASSIGN = "set"


class Register(str, Enum):
    W = "w"
    X = "x"
    Y = "y"
    Z = "z"

    @property
    def index(self) -> int:
        return _REGISTER_INDEX[self]

    def __str__(self) -> str:
        return self.value


_REGISTER_INDEX: dict[Register, int] = {reg: i for i, reg in enumerate(Register)}

Value = Union[Register, int]

# Opcodes whose result depends on the destination's previous value
READ_MODIFY_WRITE: frozenset[Opcode] = frozenset(
    {
        Opcode.ADD,
        Opcode.MULTIPLY,
        Opcode.DIVIDE,
        Opcode.MODULO,
        Opcode.COMPARE_EQUAL,
    }
)


class Instruction(BaseModel):
    model_config = ConfigDict(frozen=True)

    opcode: Opcode
    register: Register
    operand: Register | int | None = None

    @model_validator(mode="after")
    def _check_operand(self) -> Instruction:
        if self.opcode == Opcode.READ_INPUT and self.operand is not None:
            raise ValueError("inp takes no operand")
        if self.opcode != Opcode.READ_INPUT and self.operand is None:
            raise ValueError(f"{self.opcode.value} requires an operand")
        return self

    @property
    def reads_register(self) -> bool:
        return isinstance(self.operand, Register)

    def with_operand(self, operand: Value) -> Instruction:
        return Instruction(opcode=self.opcode, register=self.register, operand=operand)

    def __str__(self) -> str:
        if self.operand is None:
            return f"{self.opcode.value} {self.register}"
        return f"{self.opcode.value} {self.register} {self.operand}"


@dataclass(frozen=True)
class Program:
    """An immutable instruction sequence; equality is structural."""

    instructions: tuple[Instruction, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.instructions, tuple):
            object.__setattr__(self, "instructions", tuple(self.instructions))

    def __iter__(self) -> Iterator[Instruction]:
        return iter(self.instructions)

    def __len__(self) -> int:
        return len(self.instructions)

    def __getitem__(self, index: int) -> Instruction:
        return self.instructions[index]

    def input_count(self) -> int:
        return sum(1 for inst in self.instructions if inst.opcode == Opcode.READ_INPUT)

    def __str__(self) -> str:
        return "\n".join(str(inst) for inst in self.instructions)
