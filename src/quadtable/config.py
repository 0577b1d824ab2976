from __future__ import annotations

import json
from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, Mapping

import yaml

from quadtable.errors import check_ratio_mode
from quadtable.types import QuadratureConfig


def config_from_dict(data: Mapping[str, Any]) -> QuadratureConfig:
    """
    Build a QuadratureConfig from a mapping with an optional section:
    - quadrature: {...}
    Flat keys take precedence over the section.
    """
    merged: Dict[str, Any] = {}
    section = data.get("quadrature", {})
    if isinstance(section, Mapping):
        merged.update(section)
    for key, value in data.items():
        if key != "quadrature":
            merged[key] = value

    cfg = QuadratureConfig(**merged)
    check_ratio_mode(cfg.ratio_mode)
    return cfg


def config_to_dict(cfg: QuadratureConfig) -> Dict[str, Any]:
    return {f.name: getattr(cfg, f.name) for f in fields(cfg)}


def load_quadrature_config(path: str | Path) -> QuadratureConfig:
    path = Path(path)
    text = path.read_text(encoding="utf-8")

    if path.suffix in {".yaml", ".yml"}:
        data = yaml.safe_load(text) or {}
    else:
        data = json.loads(text)

    if not isinstance(data, Mapping):
        raise ValueError(f"config {path} must contain a top-level object")

    return config_from_dict(data)
