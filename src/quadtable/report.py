from __future__ import annotations

import math
from pathlib import Path
from typing import List, Sequence

import matplotlib.pyplot as plt
import pandas as pd

from quadtable.metrics import last_finite, observed_orders, table_checksum_sha256
from quadtable.types import ErrorTableRow

FRAME_COLUMNS = ["n", "approximation", "error", "ratio", "observed_order"]


def rows_to_frame(rows: Sequence[ErrorTableRow]) -> pd.DataFrame:
    orders = observed_orders(rows)
    records = [
        {
            "n": int(r.n),
            "approximation": float(r.estimate),
            "error": float(r.error),
            "ratio": float(r.ratio),
            "observed_order": float(p),
        }
        for r, p in zip(rows, orders, strict=True)
    ]
    return pd.DataFrame(records, columns=FRAME_COLUMNS)


def write_table_csv(rows: Sequence[ErrorTableRow], path: str | Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    rows_to_frame(rows).to_csv(path, index=False)
    return path


def _fmt(x: float) -> str:
    v = float(x)
    if math.isnan(v):
        return "nan"
    return f"{v:.3e}"


def render_report_md(
    rows: Sequence[ErrorTableRow],
    *,
    title: str = "Quadrature error table",
    rule: str = "",
    integrand: str = "",
    plot_path: str | Path | None = None,
    out_path: str | Path | None = None,
) -> str:
    orders = observed_orders(rows)
    lines: List[str] = [f"# {title}", ""]
    if rule:
        lines.append(f"- rule: `{rule}`")
    if integrand:
        lines.append(f"- integrand: `{integrand}`")
    lines.append(f"- rows: {len(rows)}")
    lines.append(f"- observed order (last pair): {_fmt(last_finite(orders))}")
    lines.append(f"- checksum: `{table_checksum_sha256(rows)}`")
    lines += [
        "",
        "| n | approximation | error | ratio | observed order |",
        "| --- | --- | --- | --- | --- |",
    ]
    for r, p in zip(rows, orders, strict=True):
        lines.append(f"| {int(r.n)} | {float(r.estimate):.14e} | {_fmt(r.error)} | {_fmt(r.ratio)} | {_fmt(p)} |")
    if plot_path is not None:
        lines += ["", f"![convergence]({Path(plot_path).as_posix()})"]
    text = "\n".join(lines) + "\n"
    if out_path is not None:
        out = Path(out_path)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(text, encoding="utf-8")
    return text


def plot_convergence(
    rows: Sequence[ErrorTableRow],
    path: str | Path,
    *,
    title: str = "error vs n",
    label: str = "error",
) -> Path:
    """Log-log plot of error against n. Rows with zero or non-finite error are left out."""
    pts = [(int(r.n), float(r.error)) for r in rows if int(r.n) > 0 and math.isfinite(float(r.error)) and float(r.error) > 0.0]
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fig = plt.figure(figsize=(6, 4.5))
    ax = fig.add_subplot(1, 1, 1)
    if pts:
        ax.loglog([p[0] for p in pts], [p[1] for p in pts], marker="o", label=label)
        ax.legend()
    ax.set_xlabel("n")
    ax.set_ylabel("absolute error")
    ax.set_title(title)
    ax.grid(True, which="both", alpha=0.3)
    fig.tight_layout()
    fig.savefig(path, dpi=150)
    plt.close(fig)
    return path
