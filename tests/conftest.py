"""Shared fixtures for the dancing_links test suite."""

from __future__ import annotations

import pytest


@pytest.fixture
def knuth_matrix() -> list[list[int]]:
    # The example from Knuth's "Dancing Links" paper.
    return [
        [1, 0, 0, 1, 0, 0, 1],
        [1, 0, 0, 1, 0, 0, 0],
        [0, 0, 0, 1, 1, 0, 1],
        [0, 0, 1, 0, 1, 1, 0],
        [0, 1, 1, 0, 0, 1, 1],
        [0, 1, 0, 0, 0, 0, 1],
    ]
