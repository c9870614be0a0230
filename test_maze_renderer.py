#!/usr/bin/env python3
"""
Renderer tests (headless, Agg backend)
"""
import matplotlib
matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np

from maze_app import parse_args
from maze_config import CONFIG, load_config
from maze_renderer import MazeRenderer
from maze_search import SearchStrategy
from maze_session import MazeSession


def generated_session(width=5, height=4, seed=2):
    session = MazeSession(load_config(environ={}, width=width, height=height, seed=seed))
    while session.generating:
        session.tick()
    return session


def test_cell_image_colours():
    session = generated_session()
    img = MazeRenderer(session).cell_image()
    colors = CONFIG["colors"]

    assert img.shape == (4, 5, 3)
    assert img.dtype == np.uint8
    assert tuple(img[0, 0]) == colors["origin"]
    assert tuple(img[3, 4]) == colors["target"]
    assert tuple(img[1, 1]) == colors["bg"]


def test_cell_image_shows_solution():
    session = generated_session()
    session.start_search(SearchStrategy.BREADTH_FIRST)
    result = None
    while result is None:
        result = session.tick()

    img = MazeRenderer(session).cell_image()
    for node in result.path[1:-1]:
        assert tuple(img[node.y, node.x]) == CONFIG["colors"]["path"]


def test_fully_walled_grid_segments():
    session = MazeSession(load_config(environ={}, width=3, height=2, seed=0))
    segments = MazeRenderer(session).wall_segments()
    # Every interior wall once plus the boundary
    interior = len(session.grid.edges)
    boundary = 2 * 3 + 2 * 2
    assert len(segments) == interior + boundary


def test_generated_maze_segments():
    session = generated_session(6, 6)
    segments = MazeRenderer(session).wall_segments()
    assert len(segments) == len(session.grid.walls) + 2 * 6 + 2 * 6
    assert ((0, 0), (0, 1)) in segments
    assert ((5, 6), (6, 6)) in segments


def test_render_to_axes():
    session = generated_session()
    session.handle_key('u')
    fig, ax = plt.subplots()
    try:
        MazeRenderer(session).render(ax)
        assert len(ax.images) == 1
        assert len(ax.collections) == 1
        assert len(ax.patches) == 1
        assert "5x4 Maze" in ax.get_title()
        fig.canvas.draw()
    finally:
        plt.close(fig)


def test_parse_args():
    args = parse_args(["--width", "20", "--seed", "9"])
    assert args.width == 20
    assert args.seed == 9
    assert args.height is None
