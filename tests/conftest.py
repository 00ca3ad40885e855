import numpy as np
import pytest

import core_game as cg


def picture(*rows: str) -> np.ndarray:
    """Turn '#'/'.' rows (top row first) into an int8 occupancy array."""
    return np.array([[1 if ch == "#" else 0 for ch in row.replace(" ", "")] for row in rows], dtype=np.int8)


def bottom_rows(grid: np.ndarray, n: int) -> np.ndarray:
    return (grid[-n:] != 0).astype(np.int8)


@pytest.fixture
def empty_grid():
    return cg.create_grid()
