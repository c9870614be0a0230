#!/usr/bin/env python3
"""
Runtime configuration for the maze pathfinder
Defaults live in CONFIG; environment variables and explicit overrides
are layered on top by load_config()
"""

import copy
import os

# --- CONFIG ---
CONFIG = {
    "width": 50,
    "height": 50,
    "seed": None,          # None for a fresh maze every run
    "tick_ms": 20,         # Driver timer interval
    "log_level": "INFO",
    "log_dir": None,       # Set to a directory to enable rotating log files
    "figure_size": (10, 7.5),
    "colors": {
        "bg": (255, 255, 255),
        "wall": (0, 0, 0),
        "origin": (0, 255, 0),
        "target": (255, 0, 0),
        "path": (51, 255, 255),
        "closed": (255, 185, 104),
        "open": (255, 235, 180),
        "player": (119, 0, 200),
    }
}

# Environment variable -> (config key, parser)
ENV_OVERRIDES = {
    "MAZE_WIDTH": ("width", int),
    "MAZE_HEIGHT": ("height", int),
    "MAZE_SEED": ("seed", int),
    "MAZE_TICK_MS": ("tick_ms", int),
    "MAZE_LOG_LEVEL": ("log_level", str),
    "MAZE_LOG_DIR": ("log_dir", str),
}


def load_config(environ=None, **overrides):
    """Return a copy of CONFIG updated from the environment, then overrides.

    Overrides whose value is None are ignored so argparse defaults can be
    passed straight through.
    """
    environ = os.environ if environ is None else environ
    config = copy.deepcopy(CONFIG)

    for var, (key, parse) in ENV_OVERRIDES.items():
        raw = environ.get(var)
        if raw is None or raw == "":
            continue
        try:
            config[key] = parse(raw)
        except ValueError:
            raise ValueError(f"Invalid value for {var}: {raw!r}")

    for key, value in overrides.items():
        if key not in config:
            raise KeyError(f"Unknown config key: {key}")
        if value is not None:
            config[key] = value

    return config


def updates_per_tick(width: int, height: int) -> int:
    """Generation/search units performed per driver tick"""
    return max(1, width * height // 120)
