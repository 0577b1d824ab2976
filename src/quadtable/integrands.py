from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Mapping

from quadtable.types import Integrand

OSCILLATORY_K = 50.0


@dataclass(frozen=True, slots=True)
class SampleIntegrand:
    name: str
    f: Integrand
    a: float
    b: float
    int_true: float
    description: str = ""


def _one(x: float) -> float:
    return 1.0


def _square(x: float) -> float:
    return x * x


def _cubic(x: float) -> float:
    return 1.0 + x**3


def _oscillatory(x: float) -> float:
    return 1.0 + x**3 + math.sin(OSCILLATORY_K * x)


SAMPLES: Mapping[str, SampleIntegrand] = {
    s.name: s
    for s in (
        SampleIntegrand("one", _one, 0.0, 1.0, 1.0, "f(x) = 1"),
        SampleIntegrand("square", _square, 0.0, 1.0, 1.0 / 3.0, "f(x) = x^2"),
        SampleIntegrand("cubic", _cubic, 0.0, 2.0, 6.0, "f(x) = 1 + x^3"),
        SampleIntegrand("sin", math.sin, 0.0, math.pi, 2.0, "f(x) = sin(x)"),
        SampleIntegrand("exp", math.exp, 0.0, 1.0, math.e - 1.0, "f(x) = exp(x)"),
        SampleIntegrand(
            "oscillatory",
            _oscillatory,
            0.0,
            2.0,
            6.0 + (1.0 - math.cos(2.0 * OSCILLATORY_K)) / OSCILLATORY_K,
            f"f(x) = 1 + x^3 + sin({OSCILLATORY_K:g} x)",
        ),
    )
}


def get_sample(name: str) -> SampleIntegrand:
    try:
        return SAMPLES[str(name)]
    except KeyError:
        raise ValueError(f"unknown integrand {name!r}; expected one of {sorted(SAMPLES)}") from None
