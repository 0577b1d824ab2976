from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Literal

Integrand = Callable[[float], float]
QuadratureRule = Callable[[Integrand, float, float, int], float]
RatioMode = Literal["successive", "privatized"]

RATIO_MODES: tuple[str, ...] = ("successive", "privatized")


@dataclass(frozen=True, slots=True)
class ErrorTableRow:
    n: int
    estimate: float
    error: float
    ratio: float


@dataclass(frozen=True, slots=True)
class QuadratureConfig:
    workers: int = 1
    ratio_mode: RatioMode = "successive"
    validate: bool = False
    chunks_per_worker: int = 1
