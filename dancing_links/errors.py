# errors.py
# Exceptions raised while building or configuring a search

from __future__ import annotations


class DancingLinksError(Exception):
    """Base class for every error raised by dancing_links."""


class InvalidMatrixShape(DancingLinksError, ValueError):
    """The input matrix cannot be turned into a linked structure.

    Raised for empty matrices, rows of differing length, rows that are not
    sequences, and sparse rows with out-of-range or repeated column indices.
    """


class InvalidOptions(DancingLinksError, ValueError):
    """Solve options are malformed (e.g. a negative ``max_solutions``)."""
