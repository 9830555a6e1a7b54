"""Plot settings, with optional YAML file and command-line overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace

import yaml


__all__ = ['PlotConfig', 'load_config']


@dataclass(frozen=True)
class PlotConfig:
    output_dir: str = 'plots'
    tree_name: str = 'tree'
    y_floor: float = 170.0
    bin_size: float = 10.0
    sample_interval: float = 16.0
    time_max: float = 720.0
    dpi: int = 100
    # Figure sizes in inches; 3600x3000 and 800x600 pixels at 100 dpi.
    combined_size: tuple = (36.0, 30.0)
    single_size: tuple = (8.0, 6.0)

    def __post_init__(self):
        for name in ('y_floor', 'bin_size', 'sample_interval', 'time_max'):
            object.__setattr__(self, name, _number(name, getattr(self, name)))
        object.__setattr__(self, 'dpi', int(_number('dpi', self.dpi)))
        for name in ('bin_size', 'sample_interval', 'time_max', 'dpi'):
            if getattr(self, name) <= 0:
                raise ValueError(
                    f'{name} must be positive, got {getattr(self, name)}'
                )
        for name in ('combined_size', 'single_size'):
            value = getattr(self, name)
            try:
                size = tuple(_number(name, v) for v in value)
            except TypeError:
                raise ValueError(
                    f'{name} must be [width, height], got {value!r}'
                ) from None
            if len(size) != 2 or min(size) <= 0:
                raise ValueError(f'{name} must be [width, height], got {size}')
            object.__setattr__(self, name, size)


def _number(name, value):
    # bool is an int subclass; 'yes' in YAML must not become 1.0
    if isinstance(value, bool):
        raise ValueError(f'{name} must be a number, got {value!r}')
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValueError(f'{name} must be a number, got {value!r}') from None


def load_config(yaml_path=None, overrides=None):
    """Build a ``PlotConfig`` from defaults, a YAML file and overrides.

    Args:
        yaml_path: optional YAML file with a mapping of ``PlotConfig`` keys.
        overrides: dict of values that take precedence over the file;
            entries set to None are ignored.
    """
    known = {f.name for f in fields(PlotConfig)}
    cfg = {}
    if yaml_path:
        if not os.path.isfile(yaml_path):
            raise ValueError(f'Config file not found: {yaml_path}')
        with open(yaml_path, 'r', encoding='utf-8') as fh:
            loaded = yaml.safe_load(fh) or {}
        if not isinstance(loaded, dict):
            raise ValueError(f'Config file {yaml_path} must hold a mapping')
        cfg.update(loaded)
    for key, value in (overrides or {}).items():
        if value is not None:
            cfg[key] = value
    unknown = sorted(set(cfg) - known)
    if unknown:
        raise ValueError(f"Unknown config key(s): {', '.join(unknown)}")
    return replace(PlotConfig(), **cfg)
