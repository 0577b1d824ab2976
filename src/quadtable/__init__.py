from __future__ import annotations

from importlib import metadata

from quadtable.error_table import error_table, format_error_table, print_error_table
from quadtable.errors import InvalidArgument
from quadtable.grid import linspace
from quadtable.reduction import parallel_sum
from quadtable.rules import RULES, get_rule, simpson, trapezoid
from quadtable.types import ErrorTableRow, QuadratureConfig

try:
    __version__ = metadata.version("quadtable")
except metadata.PackageNotFoundError:
    __version__ = "0.1.0"

__all__ = [
    "ErrorTableRow",
    "InvalidArgument",
    "QuadratureConfig",
    "RULES",
    "error_table",
    "format_error_table",
    "get_rule",
    "linspace",
    "parallel_sum",
    "print_error_table",
    "simpson",
    "trapezoid",
]
