#!/usr/bin/env python3
"""
Renders a maze session to a matplotlib axes
- Cell colours come from the session's node classification
- Walls are drawn for every standing wall record and the outer boundary
- The player token is drawn while manual play is active
"""

from typing import List, Tuple

import matplotlib.patches as patches
import numpy as np
from matplotlib.collections import LineCollection

from maze_config import CONFIG
from maze_grid import Direction
from maze_search import NodeState

Segment = Tuple[Tuple[float, float], Tuple[float, float]]

STATE_COLORS = {
    NodeState.UNVISITED: "bg",
    NodeState.OPEN: "open",
    NodeState.CLOSED: "closed",
    NodeState.PATH: "path",
    NodeState.ORIGIN: "origin",
    NodeState.TARGET: "target",
}


class MazeRenderer:
    """Renders a MazeSession with imshow for cells and a LineCollection for walls"""

    def __init__(self, session, colors=None):
        self.session = session
        self.colors = colors or CONFIG["colors"]

    def cell_image(self) -> np.ndarray:
        """One RGB pixel per cell, rows indexed by y"""
        grid = self.session.grid
        img = np.zeros((grid.height, grid.width, 3), dtype=np.uint8)
        img[:, :] = self.colors["bg"]
        for node in grid:
            state = self.session.classify(node)
            img[node.y, node.x] = self.colors[STATE_COLORS[state]]
        return img

    def wall_segments(self) -> List[Segment]:
        """Line segments, in cell units, for every wall that should be drawn"""
        grid = self.session.grid
        segments = []
        for node in grid:
            x, y = node.x, node.y
            # Right and bottom walls cover every interior pair once
            if grid.does_wall_exist(node, Direction.RIGHT):
                segments.append(((x + 1, y), (x + 1, y + 1)))
            if grid.does_wall_exist(node, Direction.BOTTOM):
                segments.append(((x, y + 1), (x + 1, y + 1)))
            if node.left is None:
                segments.append(((x, y), (x, y + 1)))
            if node.top is None:
                segments.append(((x, y), (x + 1, y)))
        return segments

    def render(self, ax):
        """Render complete maze to axes"""
        grid = self.session.grid
        wall_color = np.array(self.colors["wall"]) / 255.0

        ax.clear()
        ax.imshow(self.cell_image(), extent=(0, grid.width, grid.height, 0),
                  interpolation="nearest")

        line_width = max(0.5, 200.0 / max(grid.width, grid.height))
        ax.add_collection(LineCollection(self.wall_segments(), colors=[wall_color],
                                         linewidths=line_width))

        player = self.session.player
        if player is not None and self.session.manual:
            token = patches.Circle((player.x + 0.5, player.y + 0.5), 0.33,
                                   facecolor=np.array(self.colors["player"]) / 255.0,
                                   linewidth=0)
            ax.add_patch(token)

        ax.set_aspect('equal')
        ax.set_xlim(0, grid.width)
        ax.set_ylim(grid.height, 0)
        ax.set_axis_off()
        ax.set_title(f"{grid.width}x{grid.height} Maze - Kruskal\n{self.session.status()}")
