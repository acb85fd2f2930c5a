# dlx.py
# Algorithm X (Dancing Links) implementation

from __future__ import annotations

from contextlib import closing
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional

from dancing_links.errors import InvalidMatrixShape

# Search event types, in the order they typically appear.
INIT = "INIT"
CHOOSE_COL = "CHOOSE_COL"
COVER_COL = "COVER_COL"
SELECT_ROW = "SELECT_ROW"
UNSELECT_ROW = "UNSELECT_ROW"
UNCOVER_COL = "UNCOVER_COL"
BACKTRACK = "BACKTRACK"
SOLUTION = "SOLUTION"


class ColumnNode:
    """Column header; also the sentinel of its own vertical ring."""

    __slots__ = ("name", "size", "left", "right", "up", "down")

    def __init__(self, name: int):
        self.name = name
        self.size = 0
        self.left: ColumnNode = self
        self.right: ColumnNode = self
        self.up: "Node" = self  # type: ignore[assignment]
        self.down: "Node" = self  # type: ignore[assignment]


class Node:
    __slots__ = ("column", "row_id", "left", "right", "up", "down")

    def __init__(self, column: ColumnNode, row_id: int):
        self.column = column
        self.row_id = row_id
        self.left: Node = self
        self.right: Node = self
        self.up: Node = self
        self.down: Node = self


@dataclass(frozen=True)
class SearchEvent:
    type: str
    state: tuple[int, ...]  # row ids chosen so far, by depth
    column: Optional[int] = None
    row: Optional[int] = None
    size: Optional[int] = None


@dataclass
class SearchStats:
    nodes: int = 0  # search levels entered
    solutions: int = 0
    dead_ends: int = 0  # levels whose best column had no rows left


class DLX:
    """Sparse exact cover matrix with the Algorithm X search on top.

    Columns are created up front; rows are linked in with :meth:`add_row`.
    Every search leaves the structure exactly as it found it, even when the
    caller stops iterating before the search is exhausted.
    """

    def __init__(self, num_columns: int):
        self.header = ColumnNode(-1)
        # Create column headers in a circular doubly-linked list.
        self.columns = [ColumnNode(i) for i in range(num_columns)]
        last = self.header
        for col in self.columns:
            col.left = last
            col.right = self.header
            last.right = col
            self.header.left = col
            last = col
        self.num_rows = 0
        self.num_nodes = 0
        self.stats = SearchStats()

    @property
    def num_columns(self) -> int:
        return len(self.columns)

    def add_row(self, row_id: int, column_indices: Iterable[int]) -> None:
        indices = sorted(column_indices)
        for prev_idx, c_idx in zip([None] + indices, indices):
            if not 0 <= c_idx < len(self.columns):
                raise InvalidMatrixShape(
                    f"row {row_id}: column index {c_idx} out of range "
                    f"[0, {len(self.columns)})"
                )
            if c_idx == prev_idx:
                raise InvalidMatrixShape(
                    f"row {row_id}: column index {c_idx} given twice"
                )

        first_node: Node | None = None
        prev: Node | None = None

        for c_idx in indices:
            column = self.columns[c_idx]
            node = Node(column, row_id)

            # Insert into column (at bottom)
            node.down = column
            node.up = column.up
            column.up.down = node
            column.up = node
            column.size += 1

            # Link horizontally within row
            if first_node is None:
                first_node = node
            if prev is not None:
                node.left = prev
                node.right = first_node
                prev.right = node
                first_node.left = node
            prev = node

        self.num_rows += 1
        self.num_nodes += len(indices)

    def cover(self, column: ColumnNode) -> None:
        column.right.left = column.left
        column.left.right = column.right
        row = column.down
        while row is not column:
            node = row.right
            while node is not row:
                node.down.up = node.up
                node.up.down = node.down
                node.column.size -= 1
                node = node.right
            row = row.down

    def uncover(self, column: ColumnNode) -> None:
        row = column.up
        while row is not column:
            node = row.left
            while node is not row:
                node.column.size += 1
                node.down.up = node
                node.up.down = node
                node = node.left
            row = row.up
        column.right.left = column
        column.left.right = column

    def choose_column(self) -> ColumnNode:
        # Heuristic: choose column with smallest size, first one on ties.
        c = self.header.right
        best = c
        while c is not self.header:
            if c.size < best.size:
                best = c
            c = c.right
        return best

    def _select(self, row: Node) -> None:
        node = row.right
        while node is not row:
            self.cover(node.column)
            node = node.right

    def _release(self, row: Node) -> None:
        node = row.left
        while node is not row:
            self.uncover(node.column)
            node = node.left

    def _search(self, trace: bool = False) -> Iterator[SearchEvent]:
        """Depth-first search on an explicit stack.

        Each frame holds the column covered at that depth and the candidate
        row currently tried there. ``solution`` holds one node per depth
        whose row is currently selected, so a frame's row is selected exactly
        when ``len(solution) == len(stack)`` for the top frame. Only
        ``SOLUTION`` events are produced unless ``trace`` is set.
        """
        header = self.header
        stats = self.stats = SearchStats()
        solution: List[Node] = []
        stack: List[list] = []

        def state() -> tuple[int, ...]:
            return tuple(node.row_id for node in solution)

        try:
            while True:
                # Enter a new level
                stats.nodes += 1
                if header.right is header:
                    stats.solutions += 1
                    yield SearchEvent(SOLUTION, state())
                else:
                    column = self.choose_column()
                    if trace:
                        yield SearchEvent(
                            CHOOSE_COL, state(), column=column.name, size=column.size
                        )
                    if column.size == 0:
                        stats.dead_ends += 1
                        if trace:
                            yield SearchEvent(BACKTRACK, state(), column=column.name)
                    else:
                        self.cover(column)
                        stack.append([column, column])
                        if trace:
                            yield SearchEvent(COVER_COL, state(), column=column.name)

                # Move to the next candidate row, backtracking as needed
                while stack:
                    frame = stack[-1]
                    column, row = frame
                    if len(solution) == len(stack):
                        solution.pop()
                        self._release(row)
                        if trace:
                            yield SearchEvent(UNSELECT_ROW, state(), row=row.row_id)

                    row = frame[1] = row.down
                    if row is column:
                        stack.pop()
                        self.uncover(column)
                        if trace:
                            yield SearchEvent(UNCOVER_COL, state(), column=column.name)
                        continue

                    self._select(row)
                    solution.append(row)
                    if trace:
                        yield SearchEvent(SELECT_ROW, state(), row=row.row_id)
                    break
                else:
                    return
        finally:
            # Restore the structure if the consumer stopped early
            while stack:
                column, _ = stack.pop()
                if len(solution) > len(stack):
                    self._release(solution.pop())
                self.uncover(column)

    def solutions(self) -> Iterator[List[int]]:
        """Yield every exact cover as a list of row ids, in search order."""
        with closing(self._search()) as events:
            for event in events:
                yield list(event.state)

    def solve_one(self) -> Optional[List[int]]:
        with closing(self.solutions()) as sols:
            return next(sols, None)

    def steps(self) -> Iterator[SearchEvent]:
        """
        Generator that yields events describing the solving process.
        Every event carries the partial solution at that moment.
        """
        yield SearchEvent(INIT, ())
        yield from self._search(trace=True)
