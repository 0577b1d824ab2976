from __future__ import annotations

import logging
from concurrent.futures import Executor, Future, as_completed
from typing import Iterable

import numpy as np

from quadtable.types import Integrand

logger = logging.getLogger(__name__)


def chunk_sum(f: Integrand, a: float, h: float, ks: np.ndarray) -> float:
    acc = 0.0
    for k in ks.tolist():
        acc += float(f(a + float(k) * h))
    return acc


def split_indices(indices: np.ndarray, chunks: int) -> list[np.ndarray]:
    idx = np.asarray(indices, dtype=np.int64)
    if idx.size == 0:
        return []
    parts = np.array_split(idx, max(1, min(int(chunks), int(idx.size))))
    return [p for p in parts if p.size]


def submit_partial_sums(
    f: Integrand,
    *,
    a: float,
    h: float,
    indices: np.ndarray,
    executor: Executor,
    chunks: int,
) -> list[Future]:
    """Fork: one task per chunk of the index set, each summing f(a + k*h)."""
    return [executor.submit(chunk_sum, f, float(a), float(h), part) for part in split_indices(indices, chunks)]


def join_partial_sums(futures: Iterable[Future]) -> float:
    # Partials are combined in completion order; float addition order is not fixed.
    total = 0.0
    for fut in as_completed(list(futures)):
        total += float(fut.result())
    return total


def parallel_sum(
    f: Integrand,
    *,
    a: float,
    h: float,
    indices: np.ndarray,
    executor: Executor | None = None,
    chunks: int = 1,
) -> float:
    """Sum of f(a + k*h) over the index set, as a fork-join reduction when an executor is given."""
    idx = np.asarray(indices, dtype=np.int64)
    if executor is None or int(chunks) <= 1:
        return chunk_sum(f, float(a), float(h), idx)
    futures = submit_partial_sums(f, a=a, h=h, indices=idx, executor=executor, chunks=chunks)
    logger.debug("parallel_sum: %d points in %d chunks", int(idx.size), len(futures))
    return join_partial_sums(futures)
