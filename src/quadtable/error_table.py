from __future__ import annotations

import logging
import sys
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Sequence, TextIO

import numpy as np

from quadtable.errors import check_interval, check_nvals, check_points, check_ratio_mode
from quadtable.types import ErrorTableRow, Integrand, QuadratureRule, RatioMode

logger = logging.getLogger(__name__)

TABLE_HEADER = "      n         approximation        error       ratio"


def error_ratio(last_error: float, error: float) -> float:
    """last_error / error with IEEE semantics: x/0 -> inf, 0/0 -> nan."""
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.float64(last_error) / np.float64(error))


def _estimate(f: Integrand, a: float, b: float, n: int, method: QuadratureRule) -> float:
    t0 = time.perf_counter()
    value = float(method(f, a, b, n))
    logger.debug("error_table: n=%d estimate=%r in %.3f ms", n, value, (time.perf_counter() - t0) * 1000.0)
    return value


def error_table(
    f: Integrand,
    a: float,
    b: float,
    nvals: Sequence[int],
    int_true: float,
    method: QuadratureRule,
    *,
    workers: int = 1,
    ratio_mode: RatioMode = "successive",
    validate: bool = False,
) -> tuple[ErrorTableRow, ...]:
    """
    Apply a quadrature rule for each n in nvals and tabulate the errors.

    Estimates are independent and are computed on a thread pool when
    workers > 1. Rows are always returned in the order of nvals.

    ratio_mode="successive": ratio = error of the previous row / error of this
    row, threaded in input order after all estimates are in; the first row is
    seeded with 0.0.
    ratio_mode="privatized": every row seeds its own last_error = 0.0, so every
    ratio is 0.0 / error (0.0 for non-zero finite errors).
    """
    check_ratio_mode(ratio_mode)
    if validate:
        check_nvals(nvals)
        check_interval(a, b)
        for n in nvals:
            check_points(n)
    a = float(a)
    b = float(b)
    int_true = float(int_true)
    ns = [int(n) for n in nvals]

    workers = max(1, int(workers))
    if workers <= 1 or len(ns) <= 1:
        estimates = [_estimate(f, a, b, n, method) for n in ns]
    else:
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="error_table") as pool:
            futures = [pool.submit(_estimate, f, a, b, n, method) for n in ns]
            estimates = [fut.result() for fut in futures]

    rows: list[ErrorTableRow] = []
    last_error = 0.0
    for n, estimate in zip(ns, estimates, strict=True):
        error = abs(estimate - int_true)
        if ratio_mode == "successive":
            ratio = error_ratio(last_error, error)
            last_error = error
        else:
            ratio = error_ratio(0.0, error)
        rows.append(ErrorTableRow(n=n, estimate=estimate, error=error, ratio=ratio))
    return tuple(rows)


def format_row(row: ErrorTableRow) -> str:
    return f"{int(row.n):8d}{float(row.estimate):22.14E}{float(row.error):13.3E}{float(row.ratio):13.3E}"


def format_error_table(rows: Iterable[ErrorTableRow], *, header: bool = True) -> str:
    lines = [TABLE_HEADER] if header else []
    lines.extend(format_row(r) for r in rows)
    return "\n".join(lines) + "\n"


def print_error_table(
    f: Integrand,
    a: float,
    b: float,
    nvals: Sequence[int],
    int_true: float,
    method: QuadratureRule,
    *,
    workers: int = 1,
    ratio_mode: RatioMode = "successive",
    validate: bool = False,
    file: TextIO | None = None,
) -> tuple[ErrorTableRow, ...]:
    rows = error_table(
        f,
        a,
        b,
        nvals,
        int_true,
        method,
        workers=workers,
        ratio_mode=ratio_mode,
        validate=validate,
    )
    out = file if file is not None else sys.stdout
    out.write(format_error_table(rows))
    return rows
