# solver.py
# Public entry points: validate, build, search, collect

from __future__ import annotations

import time
from collections.abc import Mapping
from contextlib import closing
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, List, Optional, Sequence, Union

from dancing_links.dlx import DLX, SearchEvent
from dancing_links.errors import InvalidOptions
from dancing_links.log import get_logger
from dancing_links.matrix import build_dlx, build_sparse

logger = get_logger(__name__)

Solution = List[int]


@dataclass(frozen=True)
class SolveOptions:
    """Options for a single solve call.

    ``max_solutions`` of 0 means "find every solution"; a positive value
    stops the search as soon as that many have been found.
    """

    max_solutions: int = 0

    def __post_init__(self) -> None:
        value = self.max_solutions
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidOptions(
                f"max_solutions must be an int, got {type(value).__name__}"
            )
        if value < 0:
            raise InvalidOptions(f"max_solutions must be >= 0, got {value}")

    @classmethod
    def from_value(
        cls, value: Union["SolveOptions", Mapping[str, Any], None]
    ) -> "SolveOptions":
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        if isinstance(value, Mapping):
            unknown = sorted(set(value) - {"max_solutions"})
            if unknown:
                raise InvalidOptions(f"unknown option(s): {', '.join(map(str, unknown))}")
            max_solutions = value.get("max_solutions")
            return cls(0 if max_solutions is None else max_solutions)
        raise InvalidOptions(
            f"options must be SolveOptions, a mapping or None, got {type(value).__name__}"
        )


OptionsLike = Union[SolveOptions, Mapping[str, Any], None]


def _collect(dlx: DLX, opts: SolveOptions) -> List[Solution]:
    start = time.perf_counter()
    solutions: List[Solution] = []
    with closing(dlx.solutions()) as found:
        for sol in found:
            solutions.append(sol)
            if opts.max_solutions and len(solutions) >= opts.max_solutions:
                break

    stats = dlx.stats
    logger.debug(
        "search done: %d solution(s), %d node(s), %d dead end(s) in %.3f s%s",
        len(solutions),
        stats.nodes,
        stats.dead_ends,
        time.perf_counter() - start,
        " (cap reached)" if opts.max_solutions and len(solutions) >= opts.max_solutions else "",
    )
    return solutions


def _log_built(dlx: DLX) -> None:
    logger.debug(
        "built structure: %d row(s), %d column(s), %d node(s)",
        dlx.num_rows,
        dlx.num_columns,
        dlx.num_nodes,
    )


def solve(matrix: Sequence[Sequence[Any]], options: OptionsLike = None) -> List[Solution]:
    """Solve an exact cover problem.

    Args:
        matrix: Rectangular sequence of rows; any truthy cell counts as a 1.
        options: ``SolveOptions``, a mapping with ``max_solutions``, or None.

    Returns:
        Solutions in discovery order. Each solution lists the input row
        indices in the order they were chosen. Empty if there is none.

    Raises:
        InvalidOptions: ``max_solutions`` is negative or not an int.
        InvalidMatrixShape: The matrix is empty or not rectangular.
    """
    opts = SolveOptions.from_value(options)
    dlx = build_dlx(matrix)
    _log_built(dlx)
    return _collect(dlx, opts)


def solve_sparse(
    num_columns: int,
    rows: Iterable[Iterable[int]],
    options: OptionsLike = None,
) -> List[Solution]:
    """Like :func:`solve`, with each row given as its column indices."""
    opts = SolveOptions.from_value(options)
    dlx = build_sparse(num_columns, rows)
    _log_built(dlx)
    return _collect(dlx, opts)


def solve_one(matrix: Sequence[Sequence[Any]]) -> Optional[Solution]:
    sols = solve(matrix, SolveOptions(max_solutions=1))
    return sols[0] if sols else None


def trace(matrix: Sequence[Sequence[Any]]) -> Iterator[SearchEvent]:
    """Yield the events of a full search, for debugging and teaching.

    The matrix is validated and built eagerly, so shape errors surface on the
    call rather than on the first ``next()``.
    """
    dlx = build_dlx(matrix)
    _log_built(dlx)
    return dlx.steps()
