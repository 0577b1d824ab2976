from __future__ import annotations

import hashlib
import math
from typing import Sequence

from quadtable.error_table import error_ratio
from quadtable.types import ErrorTableRow


def _stable_float_token(x: float) -> str:
    v = float(x)
    if math.isfinite(v):
        return f"{v:.10g}"
    return "nan" if math.isnan(v) else ("inf" if v > 0 else "-inf")


def table_checksum_sha256(rows: Sequence[ErrorTableRow]) -> str:
    h = hashlib.sha256()
    for r in rows:
        h.update(str(int(r.n)).encode("utf-8"))
        for v in (r.estimate, r.error, r.ratio):
            h.update(b",")
            h.update(_stable_float_token(v).encode("utf-8"))
        h.update(b"\n")
    return h.hexdigest().upper()


def observed_orders(rows: Sequence[ErrorTableRow]) -> list[float]:
    """
    Observed order of accuracy between consecutive rows:
    p_j = log(error_{j-1} / error_j) / log(n_j / n_{j-1}).

    Computed from the errors, not from row.ratio, so it is meaningful for
    either ratio mode. The first row and any pair with a non-positive or
    non-finite ratio give nan.
    """
    out: list[float] = []
    for j, row in enumerate(rows):
        if j == 0:
            out.append(float("nan"))
            continue
        prev = rows[j - 1]
        ratio = error_ratio(prev.error, row.error)
        n_ratio = float(row.n) / float(prev.n) if int(prev.n) > 0 else float("nan")
        if not (math.isfinite(ratio) and ratio > 0.0 and math.isfinite(n_ratio) and n_ratio > 0.0 and n_ratio != 1.0):
            out.append(float("nan"))
            continue
        out.append(float(math.log(ratio) / math.log(n_ratio)))
    return out


def last_finite(values: Sequence[float]) -> float:
    for v in reversed(list(values)):
        if math.isfinite(float(v)):
            return float(v)
    return float("nan")
