import math
from pathlib import Path

import pandas as pd

from quadtable.error_table import error_table
from quadtable.integrands import SAMPLES, get_sample
from quadtable.metrics import last_finite, observed_orders, table_checksum_sha256
from quadtable.report import FRAME_COLUMNS, plot_convergence, render_report_md, rows_to_frame, write_table_csv
from quadtable.rules import simpson, trapezoid


def _sin_rows(rule):
    return error_table(math.sin, 0.0, math.pi, [16, 32, 64, 128], 2.0, rule)


def test_observed_orders_match_rule_order() -> None:
    trap = observed_orders(_sin_rows(trapezoid))
    simp = observed_orders(_sin_rows(simpson))
    assert math.isnan(trap[0]) and math.isnan(simp[0])
    assert abs(trap[-1] - 2.0) < 0.1
    assert abs(simp[-1] - 4.0) < 0.1
    assert math.isclose(last_finite(trap), trap[-1])
    assert math.isnan(last_finite([float("nan")]))


def test_checksum_is_deterministic_and_sensitive_to_rows() -> None:
    rows = _sin_rows(trapezoid)
    c1 = table_checksum_sha256(rows)
    c2 = table_checksum_sha256(_sin_rows(trapezoid))
    assert c1 == c2
    assert len(c1) == 64
    assert c1 != table_checksum_sha256(rows[:-1])


def test_sample_integrands_exact_values() -> None:
    for sample in SAMPLES.values():
        est = simpson(sample.f, sample.a, sample.b, 4096)
        assert math.isclose(est, sample.int_true, rel_tol=1e-8), sample.name
    assert get_sample("sin").int_true == 2.0


def test_frame_csv_and_markdown(tmp_path: Path) -> None:
    rows = _sin_rows(simpson)
    df = rows_to_frame(rows)
    assert list(df.columns) == FRAME_COLUMNS
    assert df["n"].tolist() == [16, 32, 64, 128]

    csv_path = write_table_csv(rows, tmp_path / "out" / "table.csv")
    back = pd.read_csv(csv_path)
    assert back["n"].tolist() == [16, 32, 64, 128]
    assert all(math.isclose(x, r.error, rel_tol=1e-12) for x, r in zip(back["error"].tolist(), rows))

    md_path = tmp_path / "report.md"
    text = render_report_md(rows, rule="simpson", integrand="f(x) = sin(x)", plot_path="conv.png", out_path=md_path)
    assert md_path.read_text(encoding="utf-8") == text
    assert "| n | approximation | error | ratio | observed order |" in text
    assert "![convergence](conv.png)" in text
    assert table_checksum_sha256(rows) in text


def test_plot_convergence_writes_png(tmp_path: Path) -> None:
    rows = _sin_rows(trapezoid)
    out = plot_convergence(rows, tmp_path / "plots" / "conv.png", title="trapezoid")
    assert out.exists()
    assert out.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"
