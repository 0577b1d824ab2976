from __future__ import annotations

import numpy as np

from quadtable.errors import check_points


def linspace(a: float, b: float, n: int, *, validate: bool = False) -> np.ndarray:
    """
    n evenly spaced points from a to b.

    Endpoints are assigned directly, interior points are a + (k-1)*h for the
    1-based index k in [2, n-1], so grid[0] == a and grid[-1] == b exactly.
    """
    if validate:
        check_points(n)
    n = int(n)
    a = float(a)
    b = float(b)
    out = np.empty(max(n, 0), dtype=float)
    if n <= 0:
        return out
    with np.errstate(divide="ignore", invalid="ignore"):
        h = np.float64(b - a) / np.float64(n - 1)
    k = np.arange(1, n - 1, dtype=float)
    out[1 : n - 1] = a + k * h
    out[0] = a
    out[n - 1] = b
    return out
