#!/usr/bin/env python3
"""
Kruskal generator tests: spanning tree shape, determinism and resumability
"""
import logging
from collections import deque

import pytest

from maze_generator import MazeGenerator
from maze_grid import build_grid


def reachable_from_origin(grid):
    seen = {grid.origin}
    queue = deque([grid.origin])
    while queue:
        node = queue.popleft()
        for neighbor in grid.passable_neighbors(node, ignore_visited=True):
            if neighbor not in seen:
                seen.add(neighbor)
                queue.append(neighbor)
    return seen


def opened_positions(generator):
    return [(e.from_node.position, e.to_node.position) for e in generator.opened]


def standing_positions(grid):
    return sorted((e.from_node.position, e.to_node.position) for e in grid.walls)


def test_single_wall_grid_opens_in_one_step():
    grid = build_grid(1, 2, seed=0)
    generator = MazeGenerator(grid)
    assert len(grid.edges) == 1
    assert not generator.done

    assert generator.step(1) == 1
    assert generator.done
    assert grid.walls == set()
    assert generator.opened == list(grid.edges)


@pytest.mark.parametrize("width,height", [(1, 1), (1, 5), (5, 1), (4, 3), (10, 10), (17, 9)])
def test_generation_builds_spanning_tree(width, height):
    grid = build_grid(width, height, seed=width * 31 + height)
    generator = MazeGenerator(grid)
    generator.run_to_completion()

    assert generator.done
    opened = len(grid.edges) - len(grid.walls)
    assert opened == width * height - 1
    assert len(generator.opened) == opened
    assert len(grid.open_passages()) == opened

    # n - 1 passages plus full reachability means connected and acyclic
    assert reachable_from_origin(grid) == set(grid)
    assert len({node.label for node in grid}) == 1
    assert generator.progress == 1.0


def test_standing_walls_would_close_cycles():
    grid = build_grid(6, 6, seed=5)
    MazeGenerator(grid).run_to_completion()
    labels = {node.label for node in grid}
    assert len(labels) == 1
    assert not grid.worklist


def test_same_seed_same_maze():
    a = build_grid(12, 8, seed=42)
    b = build_grid(12, 8, seed=42)
    gen_a, gen_b = MazeGenerator(a), MazeGenerator(b)
    gen_a.run_to_completion()
    gen_b.run_to_completion()

    assert opened_positions(gen_a) == opened_positions(gen_b)
    assert standing_positions(a) == standing_positions(b)


def test_step_budget_does_not_change_result():
    budgets = [1, 3, 7, 2, 50]

    reference = MazeGenerator(build_grid(9, 7, seed=7))
    reference.run_to_completion()

    single = MazeGenerator(build_grid(9, 7, seed=7))
    while not single.done:
        single.step(1)

    mixed = MazeGenerator(build_grid(9, 7, seed=7))
    calls = 0
    while not mixed.done:
        mixed.step(budgets[calls % len(budgets)])
        calls += 1

    assert opened_positions(single) == opened_positions(reference)
    assert opened_positions(mixed) == opened_positions(reference)
    assert standing_positions(single.grid) == standing_positions(reference.grid)
    assert standing_positions(mixed.grid) == standing_positions(reference.grid)


def test_step_opens_at_most_budget():
    generator = MazeGenerator(build_grid(8, 8, seed=1))
    assert generator.step(5) == 5
    assert len(generator.opened) == 5
    assert not generator.done


def test_step_after_done_is_noop():
    generator = MazeGenerator(build_grid(3, 3, seed=1))
    generator.run_to_completion()
    walls = set(generator.grid.walls)
    assert generator.step(10) == 0
    assert generator.grid.walls == walls


def test_single_cell_is_already_done():
    generator = MazeGenerator(build_grid(1, 1))
    assert generator.done
    assert generator.step(1) == 0


def test_completion_logs_passages_and_region(caplog):
    generator = MazeGenerator(build_grid(5, 4, seed=8))
    with caplog.at_level(logging.DEBUG, logger="maze_generator"):
        generator.run_to_completion()
    assert "Maze generated: 5x4, 19 passages opened" in caplog.text
    assert "Origin region spans 20 of 20 cells" in caplog.text


@pytest.mark.parametrize("budget", [0, -2, 1.5, None])
def test_invalid_budget_rejected(budget):
    generator = MazeGenerator(build_grid(3, 3, seed=1))
    with pytest.raises(ValueError):
        generator.step(budget)
    assert generator.opened == []
