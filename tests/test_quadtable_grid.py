import numpy as np
import pytest

from quadtable.errors import InvalidArgument
from quadtable.grid import linspace


def test_linspace_endpoints_are_exact_and_count_matches() -> None:
    a, b, n = 0.1, 0.7, 7
    grid = linspace(a, b, n)
    assert grid.shape == (n,)
    assert grid[0] == a
    assert grid[-1] == b


def test_linspace_interior_is_monotonic_and_evenly_spaced() -> None:
    grid = linspace(-1.3, 2.9, 41)
    steps = np.diff(grid)
    assert np.all(steps > 0.0)
    np.testing.assert_allclose(steps, (2.9 - -1.3) / 40.0, rtol=1e-12)


def test_linspace_matches_numpy_on_simple_grid() -> None:
    np.testing.assert_allclose(linspace(0.0, 1.0, 5), [0.0, 0.25, 0.5, 0.75, 1.0], rtol=0, atol=0)
    np.testing.assert_allclose(linspace(2.0, 5.0, 13), np.linspace(2.0, 5.0, 13), rtol=1e-14)


def test_linspace_two_points_is_just_the_endpoints() -> None:
    assert linspace(3.0, 4.0, 2).tolist() == [3.0, 4.0]


def test_linspace_degenerate_count_does_not_raise_unless_validated() -> None:
    assert linspace(0.0, 1.0, 1).size == 1
    with pytest.raises(InvalidArgument):
        linspace(0.0, 1.0, 1, validate=True)
