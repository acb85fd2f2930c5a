"""dancing_links: exact cover solver using Knuth's Dancing Links.

Primary API:
    solve() - All (or up to N) exact covers of a 0/1 matrix
    solve_one() - First exact cover, or None
    solve_sparse() - Same as solve() for rows given as column indices
    trace() - Search events for debugging
    DLX - The linked structure and search, for incremental use

Example:
    from dancing_links import solve

    matrix = [
        [1, 0, 0, 1, 0, 0, 1],
        [1, 0, 0, 1, 0, 0, 0],
        [0, 0, 0, 1, 1, 0, 1],
        [0, 0, 1, 0, 1, 1, 0],
        [0, 1, 1, 0, 0, 1, 1],
        [0, 1, 0, 0, 0, 0, 1],
    ]
    solve(matrix)  # [[1, 3, 5]]
"""

from __future__ import annotations

from dancing_links.dlx import DLX, SearchEvent, SearchStats
from dancing_links.errors import DancingLinksError, InvalidMatrixShape, InvalidOptions
from dancing_links.matrix import build_dlx, build_sparse
from dancing_links.solver import SolveOptions, solve, solve_one, solve_sparse, trace

__version__ = "1.0.0"

__all__ = [
    "__version__",
    # Entry points
    "solve",
    "solve_one",
    "solve_sparse",
    "trace",
    "SolveOptions",
    # Structure
    "DLX",
    "SearchEvent",
    "SearchStats",
    "build_dlx",
    "build_sparse",
    # Errors
    "DancingLinksError",
    "InvalidMatrixShape",
    "InvalidOptions",
]
