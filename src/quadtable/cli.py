from __future__ import annotations

import argparse
import functools
import json
import logging
import sys
from pathlib import Path

from quadtable.config import config_to_dict, load_quadrature_config
from quadtable.error_table import error_table, format_error_table
from quadtable.integrands import SAMPLES, get_sample
from quadtable.metrics import observed_orders, table_checksum_sha256
from quadtable.report import plot_convergence, render_report_md, write_table_csv
from quadtable.rules import RULES, simpson
from quadtable.types import RATIO_MODES, QuadratureConfig

logger = logging.getLogger(__name__)


def _parse_table_args(argv: list[str] | None = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Quadrature error table: rule x integrand x nvals -> n | approximation | error | ratio.")
    ap.add_argument("--function", choices=sorted(SAMPLES), default="sin", help="Sample integrand (default: sin).")
    ap.add_argument("--rule", choices=sorted(RULES), default="trapezoid", help="Quadrature rule.")
    ap.add_argument("--a", type=float, default=None, help="Left endpoint (default: the integrand's own).")
    ap.add_argument("--b", type=float, default=None, help="Right endpoint (default: the integrand's own).")
    ap.add_argument("--int_true", type=float, default=None, help="True integral (default: the integrand's exact value).")
    ap.add_argument("--nvals", type=int, nargs="+", default=[10, 100, 1000], help="Resolutions, one row each.")
    ap.add_argument("--config", default="", help="JSON/YAML config with workers, ratio_mode, validate, chunks_per_worker.")
    ap.add_argument("--workers", type=int, default=None, help="Row-level worker threads (overrides config).")
    ap.add_argument("--reduction_workers", type=int, default=1, help="Worker threads inside Simpson reductions.")
    ap.add_argument("--ratio_mode", choices=list(RATIO_MODES), default=None, help="Error ratio semantics (overrides config).")
    ap.add_argument("--validate", action=argparse.BooleanOptionalAction, default=None, help="Reject degenerate inputs.")
    ap.add_argument("--out", default="", help="Write rows as JSON to this path.")
    ap.add_argument("--csv", default="", help="Write rows as CSV to this path.")
    ap.add_argument("--report", default="", help="Write a markdown report to this path.")
    ap.add_argument("--plot", default="", help="Write a log-log convergence PNG to this path.")
    ap.add_argument(
        "--log_level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Logging level (default: WARNING).",
    )
    return ap.parse_args(argv)


def _resolve_config(args: argparse.Namespace) -> QuadratureConfig:
    base = load_quadrature_config(args.config) if args.config else QuadratureConfig()
    data = config_to_dict(base)
    if args.workers is not None:
        data["workers"] = int(args.workers)
    if args.ratio_mode is not None:
        data["ratio_mode"] = str(args.ratio_mode)
    if args.validate is not None:
        data["validate"] = bool(args.validate)
    return QuadratureConfig(**data)


def main_table(argv: list[str] | None = None) -> int:
    args = _parse_table_args(argv)
    logging.basicConfig(level=str(args.log_level).upper(), format="%(levelname)s %(name)s: %(message)s")
    if any(int(n) < 1 for n in args.nvals):
        raise SystemExit("--nvals must be positive integers")

    cfg = _resolve_config(args)
    sample = get_sample(args.function)
    a = float(sample.a if args.a is None else args.a)
    b = float(sample.b if args.b is None else args.b)
    int_true = float(sample.int_true if args.int_true is None else args.int_true)

    if args.rule == "simpson":
        method = functools.partial(
            simpson,
            workers=int(args.reduction_workers),
            chunks_per_worker=int(cfg.chunks_per_worker),
            validate=bool(cfg.validate),
        )
    else:
        method = functools.partial(RULES[args.rule], validate=bool(cfg.validate))

    logger.info("table: rule=%s function=%s a=%r b=%r nvals=%s", args.rule, sample.name, a, b, list(args.nvals))
    rows = error_table(
        sample.f,
        a,
        b,
        list(args.nvals),
        int_true,
        method,
        workers=int(cfg.workers),
        ratio_mode=cfg.ratio_mode,
        validate=bool(cfg.validate),
    )
    sys.stdout.write(format_error_table(rows))

    if args.out:
        payload = {
            "schema_version": "quadtable_error_table.v1",
            "rule": str(args.rule),
            "function": sample.name,
            "a": a,
            "b": b,
            "int_true": int_true,
            "config": config_to_dict(cfg),
            "rows": [
                {"n": r.n, "approximation": r.estimate, "error": r.error, "ratio": r.ratio, "observed_order": p}
                for r, p in zip(rows, observed_orders(rows), strict=True)
            ],
            "checksum": table_checksum_sha256(rows),
        }
        Path(args.out).write_text(json.dumps(payload, sort_keys=True, indent=2) + "\n", encoding="utf-8")
    if args.csv:
        write_table_csv(rows, args.csv)
    if args.plot:
        plot_convergence(rows, args.plot, title=f"{args.rule}: {sample.description}", label=str(args.rule))
    if args.report:
        render_report_md(
            rows,
            rule=str(args.rule),
            integrand=sample.description,
            plot_path=args.plot or None,
            out_path=args.report,
        )
    return 0


if __name__ == "__main__":
    raise SystemExit(main_table())
