from __future__ import annotations

from typing import Sequence

from quadtable.types import RATIO_MODES


class InvalidArgument(ValueError):
    """Raised by opt-in validation for degenerate quadrature inputs."""


def check_interval(a: float, b: float) -> None:
    if not float(a) < float(b):
        raise InvalidArgument(f"interval must satisfy a < b (got a={a!r}, b={b!r})")


def check_points(n: int, *, minimum: int = 2, even: bool = False) -> None:
    if int(n) < int(minimum):
        raise InvalidArgument(f"n must be >= {minimum} (got n={n!r})")
    if even and int(n) % 2 != 0:
        raise InvalidArgument(f"n must be even (got n={n!r})")


def check_ratio_mode(ratio_mode: str) -> None:
    # Not opt-in: an unknown mode is a programming error, not degenerate numeric input.
    if str(ratio_mode) not in RATIO_MODES:
        raise ValueError(f"ratio_mode must be one of {list(RATIO_MODES)} (got {ratio_mode!r})")


def check_nvals(nvals: Sequence[int]) -> None:
    if len(nvals) == 0:
        raise InvalidArgument("nvals must not be empty")
