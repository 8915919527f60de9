"""Named constants — eliminates magic numbers across the codebase."""

from __future__ import annotations

REGISTER_COUNT = 4

DIGIT_MIN = 1
DIGIT_MAX = 9

DEFAULT_OUTPUT_REGISTER = "z"
DEFAULT_TARGET = 0

FIXPOINT_MAX_ROUNDS = 100

ASSIGN_MNEMONIC = "set"
