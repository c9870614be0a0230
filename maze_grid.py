#!/usr/bin/env python3
"""
Grid topology for Kruskal maze generation
- Nodes laid out in a width x height grid, origin (0,0) top-left
- One wall record per pair of adjacent nodes, each with a distinct random weight
- Wall records still in Grid.walls are standing; removed ones are open passages
"""

from collections import deque
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple

import numpy as np

from error_handling import MazeConstructionError

WEIGHT_RANGE = 10 ** 6


class Direction(Enum):
    """Neighbor slot of a node, with its coordinate offset"""
    LEFT = (-1, 0)
    RIGHT = (1, 0)
    TOP = (0, -1)
    BOTTOM = (0, 1)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITE[self]


_OPPOSITE = {
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
    Direction.TOP: Direction.BOTTOM,
    Direction.BOTTOM: Direction.TOP,
}

# Examination order for every neighbor query
DIRECTION_ORDER = (Direction.LEFT, Direction.RIGHT, Direction.TOP, Direction.BOTTOM)


class Node:
    """Represents a maze cell"""

    def __init__(self, x: int, y: int, label: int):
        self.x = x
        self.y = y
        self.label = label
        self.visited = False
        self.g_cost = 0
        self.h_cost = 0
        self.left: Optional["Node"] = None
        self.right: Optional["Node"] = None
        self.top: Optional["Node"] = None
        self.bottom: Optional["Node"] = None

    @property
    def f_cost(self) -> int:
        return self.g_cost + self.h_cost

    @property
    def position(self) -> Tuple[int, int]:
        return (self.x, self.y)

    def neighbor(self, direction: Direction) -> Optional["Node"]:
        return getattr(self, direction.name.lower())

    def neighbors(self) -> List[Optional["Node"]]:
        """Structural neighbors in left, right, top, bottom order (None at edges)"""
        return [self.left, self.right, self.top, self.bottom]

    def link_right(self, node: "Node"):
        self.right = node
        node.left = self

    def link_bottom(self, node: "Node"):
        self.bottom = node
        node.top = self

    def __repr__(self):
        return f"Node({self.x},{self.y})"


class Edge:
    """Wall record between two adjacent nodes"""

    __slots__ = ("from_node", "to_node", "weight")

    def __init__(self, from_node: Node, to_node: Node, weight: int):
        self.from_node = from_node
        self.to_node = to_node
        self.weight = weight

    def connects(self, a: Node, b: Node) -> bool:
        return ((self.from_node is a and self.to_node is b) or
                (self.from_node is b and self.to_node is a))

    def __repr__(self):
        return f"Edge({self.from_node.x},{self.from_node.y} - {self.to_node.x},{self.to_node.y}, w={self.weight})"


def heuristic_distance(a: Node, b: Node) -> int:
    """Octile-style distance: 14 per diagonal step, 10 per straight step"""
    dx = abs(b.x - a.x)
    dy = abs(b.y - a.y)
    if dx > dy:
        return 14 * dy + 10 * (dx - dy)
    return 14 * dx + 10 * (dy - dx)


class Grid:
    """The maze board: nodes, wall records and the Kruskal worklist"""

    def __init__(self, width: int, height: int, nodes: List[List[Node]], edges: List[Edge]):
        self.width = width
        self.height = height
        self.nodes = nodes
        self.edges = tuple(edges)
        self.walls = set(self.edges)
        self.worklist = deque(sorted(self.edges, key=lambda e: e.weight))
        self.origin = self.get(0, 0)
        self.target = self.get(width - 1, height - 1)
        self._edge_index: Dict[Tuple[int, int], Edge] = {
            self._pair_key(e.from_node, e.to_node): e for e in self.edges
        }

    def _pair_key(self, a: Node, b: Node) -> Tuple[int, int]:
        i = a.y * self.width + a.x
        j = b.y * self.width + b.x
        return (i, j) if i < j else (j, i)

    def get(self, x: int, y: int) -> Node:
        """Get node at logical coordinates"""
        return self.nodes[x][y]

    def __iter__(self) -> Iterator[Node]:
        for column in self.nodes:
            yield from column

    def __len__(self):
        return self.width * self.height

    def edge_between(self, a: Node, b: Node) -> Optional[Edge]:
        """Wall record for an adjacent pair, standing or not"""
        return self._edge_index.get(self._pair_key(a, b))

    def has_wall(self, a: Node, b: Node) -> bool:
        edge = self.edge_between(a, b)
        return edge is not None and edge in self.walls

    def passable_neighbors(self, node: Node, ignore_visited: bool = False) -> List[Node]:
        """Neighbors reachable through an open passage.

        Visited neighbors are skipped unless ignore_visited is set (manual
        play may revisit cells; searches may not).
        """
        result = []
        for direction in DIRECTION_ORDER:
            neighbor = node.neighbor(direction)
            if neighbor is None:
                continue
            if self.has_wall(node, neighbor):
                continue
            if neighbor.visited and not ignore_visited:
                continue
            result.append(neighbor)
        return result

    def does_wall_exist(self, node: Node, direction: Direction) -> bool:
        """Whether a wall is drawn on that side of node; boundaries always are"""
        neighbor = node.neighbor(direction)
        if neighbor is None:
            return True
        return self.has_wall(node, neighbor)

    def open_passages(self) -> List[Edge]:
        """Records no longer standing, in construction order"""
        return [e for e in self.edges if e not in self.walls]

    def reset_visits(self):
        """Restore every node to unvisited, keeping the maze design"""
        for node in self:
            node.visited = False


def build_grid(width: int, height: int, rng: Optional[np.random.Generator] = None,
               seed: Optional[int] = None) -> Grid:
    """Construct a fully walled grid with randomly weighted wall records"""
    for name, value in (("width", width), ("height", height)):
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise MazeConstructionError(f"{name} must be an integer, got {value!r}")
        if value <= 0:
            raise MazeConstructionError(f"{name} must be positive, got {value}")
    width, height = int(width), int(height)

    if rng is None:
        rng = np.random.default_rng(seed)

    nodes = [[Node(x, y, y * width + x) for y in range(height)] for x in range(width)]
    origin = nodes[0][0]
    target = nodes[width - 1][height - 1]

    pairs = []
    for x in range(width):
        for y in range(height):
            node = nodes[x][y]
            node.h_cost = heuristic_distance(node, target)
            # Frozen distance from origin, never recomputed along a path
            node.g_cost = heuristic_distance(node, origin)
            if x < width - 1:
                node.link_right(nodes[x + 1][y])
                pairs.append((node, nodes[x + 1][y]))
            if y < height - 1:
                node.link_bottom(nodes[x][y + 1])
                pairs.append((node, nodes[x][y + 1]))

    weights = rng.choice(max(WEIGHT_RANGE, len(pairs)), size=len(pairs), replace=False)
    edges = [Edge(a, b, int(w)) for (a, b), w in zip(pairs, weights)]

    return Grid(width, height, nodes, edges)
