# matrix.py
# Turns dense or sparse row descriptions into a fresh DLX structure

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Iterable, List

from dancing_links.dlx import DLX
from dancing_links.errors import InvalidMatrixShape


def _check_row(row_id: int, row: Any) -> None:
    if isinstance(row, (str, bytes)) or not isinstance(row, Sequence):
        raise InvalidMatrixShape(
            f"row {row_id} is not a sequence of cells: {type(row).__name__}"
        )


def matrix_width(matrix: Sequence[Sequence[Any]]) -> int:
    """Validate the matrix shape and return its column count.

    The first row fixes the width; every other row must match it. Checked in
    full before anything is built.
    """
    if isinstance(matrix, (str, bytes)) or not isinstance(matrix, Sequence):
        raise InvalidMatrixShape(
            f"matrix must be a sequence of rows, got {type(matrix).__name__}"
        )
    if len(matrix) == 0:
        raise InvalidMatrixShape("matrix has no rows")

    _check_row(0, matrix[0])
    width = len(matrix[0])
    if width == 0:
        raise InvalidMatrixShape("matrix has no columns")

    for row_id, row in enumerate(matrix):
        _check_row(row_id, row)
        if len(row) != width:
            raise InvalidMatrixShape(
                f"row {row_id} has {len(row)} columns, expected {width}"
            )
    return width


def build_dlx(matrix: Sequence[Sequence[Any]]) -> DLX:
    """Build the linked structure for a dense 0/1 matrix.

    Any truthy cell is a 1. Rows without a single 1 are kept as row ids but
    add no nodes, so they can never be part of a solution.
    """
    dlx = DLX(matrix_width(matrix))
    for row_id, row in enumerate(matrix):
        dlx.add_row(row_id, [col for col, value in enumerate(row) if value])
    return dlx


def build_sparse(num_columns: int, rows: Iterable[Iterable[int]]) -> DLX:
    """Build the linked structure from per-row lists of column indices."""
    if isinstance(num_columns, bool) or not isinstance(num_columns, int):
        raise InvalidMatrixShape(
            f"num_columns must be an int, got {type(num_columns).__name__}"
        )
    if num_columns <= 0:
        raise InvalidMatrixShape("matrix has no columns")

    # Materialise first so a bad row fails before any node is linked
    row_lists: List[List[int]] = []
    for row_id, row in enumerate(rows):
        if isinstance(row, (str, bytes)):
            raise InvalidMatrixShape(f"row {row_id} is not a list of column indices")
        try:
            row_lists.append(list(row))
        except TypeError as exc:
            raise InvalidMatrixShape(
                f"row {row_id} is not a list of column indices"
            ) from exc
    if not row_lists:
        raise InvalidMatrixShape("matrix has no rows")

    for row_id, cols in enumerate(row_lists):
        seen = set()
        for c in cols:
            if isinstance(c, bool) or not isinstance(c, int) or not 0 <= c < num_columns:
                raise InvalidMatrixShape(
                    f"row {row_id}: column index {c!r} out of range [0, {num_columns})"
                )
            if c in seen:
                raise InvalidMatrixShape(f"row {row_id}: column index {c} given twice")
            seen.add(c)

    dlx = DLX(num_columns)
    for row_id, cols in enumerate(row_lists):
        dlx.add_row(row_id, cols)
    return dlx
