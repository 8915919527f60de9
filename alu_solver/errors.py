"""Exception hierarchy for program validation, execution and search."""

from __future__ import annotations


class AluError(Exception):
    """Base class for every error raised by this package."""

    pass


class MalformedProgramError(AluError):
    """Raised when a program is empty, does not start with an input read,
    or references something that is not a register."""

    pass


class ExhaustedInputError(AluError):
    """Raised when an input read executes with no digits left."""

    pass


class ExecutionArithmeticError(AluError, ArithmeticError):
    """Raised on division or modulo by zero during concrete execution."""

    pass


class SearchExhaustedError(AluError):
    """Raised when no digit sequence satisfies the acceptance predicate."""

    pass


class NonTerminationError(AluError):
    """Raised when the optimizer fails to reach a fixpoint within its round cap."""

    pass
