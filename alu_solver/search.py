"""Digit search — backtracking over segments with the concrete interpreter."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Iterator, Sequence

from .errors import MalformedProgramError, SearchExhaustedError
from .interval_pass import run_interval_pass
from .intervals import IntervalState
from .ir import Instruction, Register
from .run_types import SearchConfig
from .segments import Segment
from .vm import RegisterFile, execute

logger = logging.getLogger(__name__)

# (position, registers after that position's segment) -> keep this digit?
SegmentPredicate = Callable[[int, RegisterFile], bool]


@dataclass(frozen=True)
class SearchResult:
    digits: tuple[int, ...]
    registers: RegisterFile
    evaluations: int

    @property
    def numeral(self) -> str:
        return "".join(str(d) for d in self.digits)


def reachable_target(
    segments: Sequence[Segment],
    output: Register,
    target: int,
    prune: bool = True,
) -> SegmentPredicate:
    """Build the default acceptance predicate.

    After the last segment the output register must equal *target* exactly.
    Before that, when *prune* is set, the remaining segments are run through
    the interval pass from the snapshot's exact values, and the digit is
    rejected if *target* lies outside the resulting output interval.
    """
    last = len(segments) - 1
    suffixes: list[tuple[Instruction, ...]] = [
        tuple(inst for seg in segments[i + 1 :] for inst in seg.instructions)
        for i in range(len(segments))
    ]

    def accept(position: int, registers: RegisterFile) -> bool:
        if position == last:
            return registers[output] == target
        if not prune:
            return True
        _kept, exit_state = run_interval_pass(
            suffixes[position], IntervalState.from_values(registers.values)
        )
        return exit_state[output].contains(target)

    return accept


class DigitSearch:
    """Depth-first search over per-segment digit choices.

    Candidates at each position are tried in the configured order; the
    first one accepted by the predicate is descended into, and the next one
    is tried only if every completion of the deeper positions fails.
    """

    def __init__(
        self,
        segments: Sequence[Segment],
        config: SearchConfig,
        predicate: SegmentPredicate,
    ):
        self._segments = segments
        self._config = config
        self._accept = predicate
        self._executor: ThreadPoolExecutor | None = None
        self.evaluations = 0

    def _run(
        self, position: int, snapshot: RegisterFile, digit: int
    ) -> tuple[int, RegisterFile, bool]:
        regs = execute(self._segments[position].instructions, [digit], snapshot.copy())
        return digit, regs, self._accept(position, regs)

    def _accepted(
        self, position: int, snapshot: RegisterFile
    ) -> Iterator[tuple[int, RegisterFile]]:
        digits = self._config.order.digits()
        if self._executor is None:
            for digit in digits:
                self.evaluations += 1
                _digit, regs, ok = self._run(position, snapshot, digit)
                if ok:
                    yield digit, regs
            return

        # All candidates of a position run concurrently; map() keeps policy order.
        results = list(
            self._executor.map(lambda d: self._run(position, snapshot, d), digits)
        )
        self.evaluations += len(results)
        for digit, regs, ok in results:
            if ok:
                yield digit, regs

    def _descend(
        self, position: int, snapshot: RegisterFile
    ) -> tuple[list[int], RegisterFile] | None:
        if position == len(self._segments):
            return [], snapshot
        for digit, regs in self._accepted(position, snapshot):
            logger.debug("Position %d: trying digit %d", position, digit)
            found = self._descend(position + 1, regs)
            if found is not None:
                rest, final = found
                return [digit] + rest, final
        return None

    def run(self) -> SearchResult:
        if self._config.parallel:
            with ThreadPoolExecutor(max_workers=self._config.max_workers) as executor:
                self._executor = executor
                try:
                    found = self._descend(0, RegisterFile())
                finally:
                    self._executor = None
        else:
            found = self._descend(0, RegisterFile())

        if found is None:
            raise SearchExhaustedError(
                f"no {len(self._segments)}-digit input is accepted "
                f"(after {self.evaluations} segment runs)"
            )
        digits, registers = found
        return SearchResult(
            digits=tuple(digits), registers=registers, evaluations=self.evaluations
        )


def search_digits(
    segments: Sequence[Segment],
    config: SearchConfig = SearchConfig(),
    predicate: SegmentPredicate | None = None,
) -> SearchResult:
    """Find the first accepted digit sequence in *config.order*.

    Args:
        segments: Optimized program segments, one per input digit.
        config: Digit order, output register, target and execution options.
        predicate: Per-segment acceptance check; defaults to
            :func:`reachable_target` built from *config*.

    Returns:
        The accepted digits, the final register file and the number of
        segment executions performed.

    Raises:
        SearchExhaustedError: No digit sequence is accepted.
    """
    if not segments:
        raise MalformedProgramError("nothing to search: program has no input reads")

    accept = predicate or reachable_target(
        segments, config.output_register, config.target, config.prune
    )
    result = DigitSearch(segments, config, accept).run()
    logger.info(
        "Digit search (%s) found %s after %d segment runs",
        config.order.value,
        result.numeral,
        result.evaluations,
    )
    return result
