from __future__ import annotations

import sys

import pytest

from dancing_links.dlx import (
    BACKTRACK,
    CHOOSE_COL,
    COVER_COL,
    DLX,
    INIT,
    SELECT_ROW,
    SOLUTION,
    UNCOVER_COL,
    UNSELECT_ROW,
)
from dancing_links.errors import InvalidMatrixShape
from dancing_links.matrix import build_dlx


def _all_objects(dlx: DLX) -> list:
    objs: list = [dlx.header, *dlx.columns]
    for col in dlx.columns:
        node = col.down
        while node is not col:
            objs.append(node)
            node = node.down
    return objs


def _snapshot(objs: list) -> list:
    return [
        (id(o.left), id(o.right), id(o.up), id(o.down), getattr(o, "size", None))
        for o in objs
    ]


def _column_walk(col) -> list[int]:
    ids = []
    node = col.down
    while node is not col:
        ids.append(node.row_id)
        node = node.down
    return ids


def _live_columns(dlx: DLX) -> list[int]:
    names = []
    c = dlx.header.right
    while c is not dlx.header:
        names.append(c.name)
        c = c.right
    return names


def test_columns_form_a_ring_in_order():
    dlx = DLX(4)
    assert _live_columns(dlx) == [0, 1, 2, 3]
    assert dlx.header.left is dlx.columns[-1]
    assert dlx.columns[0].left is dlx.header


def test_add_row_links_row_and_column_rings():
    dlx = DLX(3)
    dlx.add_row(0, [2, 0])
    dlx.add_row(1, [0])

    col0, col1, col2 = dlx.columns
    assert (col0.size, col1.size, col2.size) == (2, 0, 1)
    assert _column_walk(col0) == [0, 1]
    assert col1.down is col1 and col1.up is col1

    first = col0.down
    assert first.right.column is col2
    assert first.right.right is first
    assert first.left is first.right

    lone = col0.up
    assert lone.row_id == 1
    assert lone.left is lone and lone.right is lone
    assert (dlx.num_rows, dlx.num_nodes) == (2, 3)


def test_add_row_without_columns_adds_no_nodes():
    dlx = DLX(2)
    dlx.add_row(0, [])
    assert dlx.num_rows == 1
    assert dlx.num_nodes == 0
    assert all(col.size == 0 for col in dlx.columns)


@pytest.mark.parametrize("cols", [[3], [-1], [0, 0]])
def test_add_row_rejects_bad_indices(cols):
    dlx = DLX(3)
    with pytest.raises(InvalidMatrixShape):
        dlx.add_row(0, cols)
    assert dlx.num_nodes == 0


def test_cover_detaches_column_and_conflicting_rows(knuth_matrix):
    dlx = build_dlx(knuth_matrix)
    col0 = dlx.columns[0]
    dlx.cover(col0)

    assert 0 not in _live_columns(dlx)
    # rows 0 and 1 touch column 0, so they vanish from columns 3 and 6
    assert _column_walk(dlx.columns[3]) == [2]
    assert _column_walk(dlx.columns[6]) == [2, 4, 5]
    assert dlx.columns[3].size == 1
    assert dlx.columns[6].size == 3
    # the covered column itself keeps its rows
    assert _column_walk(col0) == [0, 1]


def test_uncover_restores_structure_exactly(knuth_matrix):
    dlx = build_dlx(knuth_matrix)
    objs = _all_objects(dlx)
    before = _snapshot(objs)

    dlx.cover(dlx.columns[3])
    dlx.cover(dlx.columns[0])
    assert _snapshot(objs) != before
    dlx.uncover(dlx.columns[0])
    dlx.uncover(dlx.columns[3])

    assert _snapshot(objs) == before


def test_size_matches_live_nodes_after_covering(knuth_matrix):
    dlx = build_dlx(knuth_matrix)
    dlx.cover(dlx.columns[4])
    c = dlx.header.right
    while c is not dlx.header:
        assert c.size == len(_column_walk(c))
        c = c.right


def test_choose_column_picks_smallest_first_on_ties(knuth_matrix):
    dlx = build_dlx(knuth_matrix)
    # columns 0, 1, 2, 4, 5 all hold two rows; the first one wins
    assert dlx.choose_column() is dlx.columns[0]

    dlx.cover(dlx.columns[0])
    # column 3 drops to one live row (row 2)
    assert dlx.choose_column() is dlx.columns[3]


def test_solutions_and_stats(knuth_matrix):
    dlx = build_dlx(knuth_matrix)
    assert list(dlx.solutions()) == [[1, 3, 5]]
    assert dlx.stats.solutions == 1
    # root, dead end under row 0, then rows 1, 3, 5 and the solved level
    assert dlx.stats.nodes == 5
    assert dlx.stats.dead_ends == 1


def test_solve_one_returns_none_without_solution():
    dlx = build_dlx([[1, 0], [1, 0]])
    assert dlx.solve_one() is None


def test_search_is_repeatable_on_same_structure(knuth_matrix):
    dlx = build_dlx(knuth_matrix)
    objs = _all_objects(dlx)
    before = _snapshot(objs)

    assert list(dlx.solutions()) == [[1, 3, 5]]
    assert _snapshot(objs) == before
    assert list(dlx.solutions()) == [[1, 3, 5]]


def test_abandoned_search_restores_structure():
    # Empty 2x2 board of dominoes: two tilings
    cells = 4
    rows = [[0, 1], [2, 3], [0, 2], [1, 3]]
    dlx = DLX(cells)
    for row_id, cols in enumerate(rows):
        dlx.add_row(row_id, cols)
    objs = _all_objects(dlx)
    before = _snapshot(objs)

    gen = dlx.solutions()
    first = next(gen)
    assert sorted(first) in ([0, 1], [2, 3])
    gen.close()

    assert _snapshot(objs) == before
    assert len(list(dlx.solutions())) == 2


def test_structure_restored_when_trace_stops_anywhere(knuth_matrix):
    dlx = build_dlx(knuth_matrix)
    objs = _all_objects(dlx)
    before = _snapshot(objs)
    total = len(list(dlx.steps()))

    for stop in range(total):
        steps = dlx.steps()
        for _ in range(stop):
            next(steps)
        steps.close()
        assert _snapshot(objs) == before, f"not restored after {stop} events"


def test_steps_describe_the_search(knuth_matrix):
    events = list(build_dlx(knuth_matrix).steps())

    assert events[0].type == INIT
    assert events[1].type == CHOOSE_COL
    assert (events[1].column, events[1].size) == (0, 2)
    assert events[2].type == COVER_COL
    assert events[-1].type == UNCOVER_COL
    assert events[-1].column == 0

    solutions = [e for e in events if e.type == SOLUTION]
    assert [e.state for e in solutions] == [(1, 3, 5)]

    selects = sum(e.type == SELECT_ROW for e in events)
    unselects = sum(e.type == UNSELECT_ROW for e in events)
    covers = sum(e.type == COVER_COL for e in events)
    uncovers = sum(e.type == UNCOVER_COL for e in events)
    assert selects == unselects
    assert covers == uncovers


def test_steps_report_dead_column():
    events = list(build_dlx([[1, 0], [1, 0]]).steps())
    assert [e.type for e in events] == [INIT, CHOOSE_COL, BACKTRACK]
    assert events[1].column == 1
    assert events[1].size == 0


def test_deep_search_does_not_recurse():
    width = sys.getrecursionlimit() * 3
    dlx = DLX(width)
    for i in range(width):
        dlx.add_row(i, [i])

    assert dlx.solve_one() == list(range(width))
