"""Text loader — one ``op register [operand]`` instruction per line."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from .errors import MalformedProgramError
from .ir import Instruction, Opcode, Program, Register
from . import constants

logger = logging.getLogger(__name__)

_REGISTER_NAMES: dict[str, Register] = {reg.value: reg for reg in Register}


def _parse_operand(token: str, line_no: int) -> Register | int:
    if token in _REGISTER_NAMES:
        return _REGISTER_NAMES[token]
    try:
        return int(token)
    except ValueError as exc:
        raise MalformedProgramError(
            f"line {line_no}: {token!r} is neither a register nor an integer"
        ) from exc


def parse_instruction(line: str, line_no: int = 1) -> Instruction:
    """Map a single source line to an Instruction."""
    parts = line.split()
    if not parts:
        raise MalformedProgramError(f"line {line_no}: empty instruction")

    mnemonic = parts[0]
    if mnemonic == constants.ASSIGN_MNEMONIC:
        raise MalformedProgramError(
            f"line {line_no}: '{mnemonic}' is reserved for optimizer output"
        )
    try:
        opcode = Opcode(mnemonic)
    except ValueError as exc:
        raise MalformedProgramError(
            f"line {line_no}: unknown instruction {mnemonic!r}"
        ) from exc

    expected = 2 if opcode == Opcode.READ_INPUT else 3
    if len(parts) != expected:
        raise MalformedProgramError(
            f"line {line_no}: '{mnemonic}' takes {expected - 1} argument(s), "
            f"got {len(parts) - 1}"
        )

    register = _REGISTER_NAMES.get(parts[1])
    if register is None:
        raise MalformedProgramError(f"line {line_no}: unknown register {parts[1]!r}")

    operand = _parse_operand(parts[2], line_no) if expected == 3 else None
    try:
        return Instruction(opcode=opcode, register=register, operand=operand)
    except ValidationError as exc:
        raise MalformedProgramError(f"line {line_no}: {exc}") from exc


def parse_program(source: str) -> Program:
    """Parse a whole program; blank lines and surrounding indentation are ignored."""
    instructions = [
        parse_instruction(line.strip(), line_no)
        for line_no, line in enumerate(source.splitlines(), start=1)
        if line.strip()
    ]
    logger.debug("Parsed %d instructions", len(instructions))
    return Program(tuple(instructions))
