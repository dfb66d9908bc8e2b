import numpy as np
import pytest

from pegboard.profile import Contour, Region


def _region(outer, holes=()):
    return Region(
        Contour(np.asarray(outer, dtype=np.float64), "outline"),
        tuple(Contour(np.asarray(h, dtype=np.float64), "hole") for h in holes),
    )


@pytest.fixture
def make_region():
    """Region from plain coordinate rings, in any orientation."""
    return _region


@pytest.fixture
def square_with_hole():
    return _region(
        [(0, 0), (10, 0), (10, 10), (0, 10)],
        [[(4, 4), (6, 4), (6, 6), (4, 6)]],
    )


@pytest.fixture
def unit_square():
    return _region([(0, 0), (1, 0), (1, 1), (0, 1)])
