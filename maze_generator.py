#!/usr/bin/env python3
"""
Incremental maze generator using randomized Kruskal's algorithm
- Wall records are processed in ascending random weight
- A wall is opened when it joins two unconnected regions, otherwise it stays
- Work is bounded per step() call so generation can be animated
"""

import logging
from typing import List

from connectivity import merge, partition, same
from maze_grid import Edge, Grid

logger = logging.getLogger(__name__)


class MazeGenerator:
    """Resumable Kruskal spanning-tree generator over a Grid"""

    def __init__(self, grid: Grid):
        self.grid = grid
        self.worklist = grid.worklist
        self.walls = grid.walls
        self.opened: List[Edge] = []
        self.done = not self.worklist

    def step(self, max_ops: int = 1) -> int:
        """Open up to max_ops walls; returns how many were opened"""
        if isinstance(max_ops, bool) or not isinstance(max_ops, int) or max_ops <= 0:
            raise ValueError(f"max_ops must be a positive integer, got {max_ops!r}")

        opened = 0
        for _ in range(max_ops):
            if self._open_next() is None:
                break
            opened += 1

        if not self.worklist and not self.done:
            self.done = True
            logger.info(
                f"Maze generated: {self.grid.width}x{self.grid.height}, "
                f"{len(self.grid.open_passages())} passages opened, {len(self.walls)} walls standing"
            )
            logger.debug(f"Origin region spans {len(partition(self.grid.origin))} of {len(self.grid)} cells")
        return opened

    def _open_next(self):
        """Process candidates until one wall is opened or the worklist runs out"""
        while self.worklist:
            edge = self.worklist.popleft()
            if same(edge.from_node, edge.to_node):
                # Would close a cycle, leave it standing
                continue
            self.walls.discard(edge)
            merge(edge.from_node, edge.to_node)
            self.opened.append(edge)
            return edge
        return None

    def run_to_completion(self) -> int:
        """Generate the rest of the maze in one go"""
        total = 0
        while not self.done:
            total += self.step(max(1, len(self.worklist)))
        return total

    @property
    def progress(self) -> float:
        """Fraction of spanning-tree passages opened so far"""
        needed = len(self.grid) - 1
        if needed == 0:
            return 1.0
        return len(self.opened) / needed
