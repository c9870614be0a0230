#!/usr/bin/env python3
"""
Incremental maze solvers: depth-first, breadth-first, A* and manual play.

Every engine is a small state machine driven by step(max_ops): one unit of
work per op, so a driver can animate the search. BFS and A* find the target
first and then walk the parent map back to the origin one node per op.

The A* engine scores nodes with the g cost frozen at grid construction
(heuristic distance from the origin) rather than the accumulated path cost,
and never re-parents an open node.
"""

import logging
import time
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Set

from error_handling import ConsistencyError, InvalidStateError
from maze_generator import MazeGenerator
from maze_grid import Direction, Grid, Node

logger = logging.getLogger(__name__)


class SearchStrategy(Enum):
    DEPTH_FIRST = "DFS"
    BREADTH_FIRST = "BFS"
    A_STAR = "A*"
    USER = "USER"


class SearchPhase(Enum):
    IDLE = "idle"
    SEARCHING = "searching"
    BACKTRACKING = "backtracking"
    DONE = "done"


class NodeState(Enum):
    """How a node should be drawn"""
    UNVISITED = "unvisited"
    OPEN = "open"
    CLOSED = "closed"
    PATH = "path"
    ORIGIN = "origin"
    TARGET = "target"


@dataclass
class SearchResult:
    """Completion event for one run"""
    strategy: SearchStrategy
    path: List[Node]
    nodes_explored: int
    elapsed: float
    solved: bool = True

    def summary(self) -> Dict:
        return {
            'strategy': self.strategy.value,
            'solved': self.solved,
            'nodes_explored': self.nodes_explored,
            'path_length': len(self.path),
            'elapsed_seconds': round(self.elapsed, 2),
        }


class SearchEngine:
    """Shared lifecycle for all strategies"""

    strategy: SearchStrategy = None

    def __init__(self, grid: Grid, generator: MazeGenerator):
        self.grid = grid
        self.generator = generator
        self.phase = SearchPhase.IDLE
        self.origin: Optional[Node] = None
        self.closed: Set[Node] = set()
        self.parents: Dict[Node, Node] = {}
        self.result: Optional[SearchResult] = None
        self._start_time = None
        self._found_time = None
        self._clear()

    def _require_generated(self):
        if not self.generator.done:
            raise InvalidStateError("Maze generation has not finished")

    def start(self, origin: Optional[Node] = None):
        """Begin a fresh run from origin (grid origin by default)"""
        self._require_generated()
        self.reset()
        self.grid.reset_visits()
        self.origin = origin or self.grid.origin
        self.origin.visited = True
        self._start_time = time.perf_counter()
        self.phase = SearchPhase.SEARCHING
        self._begin()
        logger.debug(f"{self.strategy.value} started at {self.origin}")

    def _begin(self):
        raise NotImplementedError

    def reset(self):
        """Discard all run state"""
        self.phase = SearchPhase.IDLE
        self.origin = None
        self.closed = set()
        self.parents = {}
        self.result = None
        self._start_time = None
        self._found_time = None
        self._clear()

    def _clear(self):
        raise NotImplementedError

    def step(self, max_ops: int = 1) -> Optional[SearchResult]:
        """Advance by up to max_ops units; returns the result once complete"""
        self._require_generated()
        if self.phase is SearchPhase.IDLE:
            raise InvalidStateError(f"{self.strategy.value} search has not been started")
        if isinstance(max_ops, bool) or not isinstance(max_ops, int) or max_ops <= 0:
            raise ValueError(f"max_ops must be a positive integer, got {max_ops!r}")

        for _ in range(max_ops):
            if self.phase is SearchPhase.DONE:
                break
            if self.phase is SearchPhase.SEARCHING:
                self._search_unit()
            else:
                self._backtrack_unit()
        return self.result

    def _search_unit(self):
        raise NotImplementedError

    def _backtrack_unit(self):
        raise NotImplementedError

    def elapsed(self) -> float:
        """Seconds since start, frozen once the target was found"""
        if self._start_time is None:
            return 0.0
        end = self._found_time if self._found_time is not None else time.perf_counter()
        return end - self._start_time

    @property
    def nodes_explored(self) -> int:
        return len(self.closed)

    def _finish(self, path: List[Node], solved: bool = True):
        if self._found_time is None:
            self._found_time = time.perf_counter()
        self.phase = SearchPhase.DONE
        self.result = SearchResult(
            strategy=self.strategy,
            path=path,
            nodes_explored=self.nodes_explored,
            elapsed=self.elapsed(),
            solved=solved,
        )
        logger.debug(f"{self.strategy.value} finished: {self.result.summary()}")

    def _frontier_contains(self, node: Node) -> bool:
        return False

    def _path_contains(self, node: Node) -> bool:
        return False

    def classify(self, node: Node) -> NodeState:
        if node is self.grid.origin:
            return NodeState.ORIGIN
        if node is self.grid.target:
            return NodeState.TARGET
        if self._path_contains(node):
            return NodeState.PATH
        if self._frontier_contains(node):
            return NodeState.OPEN
        if node in self.closed:
            return NodeState.CLOSED
        return NodeState.UNVISITED


class DepthFirstSearch(SearchEngine):
    """Stack-based DFS; the stack itself is the path once the target is on top"""

    strategy = SearchStrategy.DEPTH_FIRST

    def _begin(self):
        self.stack = [self.origin]
        self._on_stack = {self.origin}

    def _clear(self):
        self.stack = []
        self._on_stack = set()

    def _search_unit(self):
        if not self.stack:
            raise ConsistencyError(
                f"DFS stack emptied before reaching {self.grid.target}"
            )
        current = self.stack[-1]
        if current is self.grid.target:
            self._finish(list(self.stack))
            return

        neighbors = self.grid.passable_neighbors(current)
        if neighbors:
            nxt = neighbors[0]
            nxt.visited = True
            self.closed.add(nxt)
            self.stack.append(nxt)
            self._on_stack.add(nxt)
        else:
            self._on_stack.discard(self.stack.pop())

    def _path_contains(self, node: Node) -> bool:
        return node in self._on_stack


class _ParentWalkSearch(SearchEngine):
    """Search followed by a parent-map walk from the target back to origin"""

    def _clear(self):
        self.path: List[Node] = []
        self._on_path: Set[Node] = set()

    def _found(self, target: Node):
        self._found_time = time.perf_counter()
        self.path = [target]
        self._on_path = {target}
        if target is self.origin:
            self._finish([target])
        else:
            self.phase = SearchPhase.BACKTRACKING

    def _backtrack_unit(self):
        parent = self.parents[self.path[-1]]
        self.path.append(parent)
        self._on_path.add(parent)
        if parent is self.origin:
            self._finish(list(reversed(self.path)))

    def _path_contains(self, node: Node) -> bool:
        return node in self._on_path


class BreadthFirstSearch(_ParentWalkSearch):
    """FIFO search; parent links give the fewest-edges path"""

    strategy = SearchStrategy.BREADTH_FIRST

    def _begin(self):
        self.queue = deque([self.origin])

    def _clear(self):
        super()._clear()
        self.queue = deque()

    def _search_unit(self):
        if not self.queue:
            raise ConsistencyError(
                f"BFS queue emptied before reaching {self.grid.target}"
            )
        current = self.queue.popleft()
        if current is self.grid.target:
            self._found(current)
            return

        for neighbor in self.grid.passable_neighbors(current):
            if neighbor in self.closed or neighbor in self.parents:
                continue
            self.parents[neighbor] = current
            neighbor.visited = True
            self.closed.add(neighbor)
            self.queue.append(neighbor)

    def _frontier_contains(self, node: Node) -> bool:
        return node in self.queue


class AStarSearch(_ParentWalkSearch):
    """Best-first search on f = g + h, ties broken by lower h"""

    strategy = SearchStrategy.A_STAR

    def _begin(self):
        self.open = [self.origin]
        self._open_set = {self.origin}

    def _clear(self):
        super()._clear()
        self.open: List[Node] = []
        self._open_set: Set[Node] = set()

    def _select(self) -> Node:
        current = self.open[0]
        for node in self.open[1:]:
            if (node.f_cost < current.f_cost or
                    (node.f_cost == current.f_cost and node.h_cost < current.h_cost)):
                current = node
        return current

    def _search_unit(self):
        if not self.open:
            raise ConsistencyError(
                f"A* open set emptied before reaching {self.grid.target}"
            )
        current = self._select()
        self.open.remove(current)
        self._open_set.discard(current)
        self.closed.add(current)

        if current is self.grid.target:
            self._found(current)
            return

        for neighbor in self.grid.passable_neighbors(current):
            if neighbor in self.closed or neighbor in self._open_set:
                continue
            # First discovery wins; open nodes are never re-parented
            self.parents[neighbor] = current
            neighbor.visited = True
            self.open.append(neighbor)
            self._open_set.add(neighbor)

    def _frontier_contains(self, node: Node) -> bool:
        return node in self._open_set


class ManualNavigator(SearchEngine):
    """Player-driven traversal; each move is validated against the walls"""

    strategy = SearchStrategy.USER

    def _begin(self):
        self.player = self.origin
        self.trail = [self.origin]
        self.closed.add(self.origin)

    def _clear(self):
        self.player: Optional[Node] = None
        self.trail: List[Node] = []

    def move(self, direction: Direction) -> bool:
        """Move the player one cell; False (and no change) if a wall is in the way"""
        if self.phase is not SearchPhase.SEARCHING:
            raise InvalidStateError("No manual run in progress")

        target = self.player.neighbor(direction)
        if target is None:
            return False
        if target not in self.grid.passable_neighbors(self.player, ignore_visited=True):
            return False

        self.player = target
        target.visited = True
        self.closed.add(target)
        self.trail.append(target)
        return True

    def _search_unit(self):
        if self.player is self.grid.target:
            self._finish(list(self.trail))

    def forfeit(self) -> SearchResult:
        """Give up the current run"""
        if self.phase is not SearchPhase.SEARCHING:
            raise InvalidStateError("No manual run in progress")
        self._finish(list(self.trail), solved=False)
        return self.result

    def _path_contains(self, node: Node) -> bool:
        return node is self.player


_ENGINES = {
    SearchStrategy.DEPTH_FIRST: DepthFirstSearch,
    SearchStrategy.BREADTH_FIRST: BreadthFirstSearch,
    SearchStrategy.A_STAR: AStarSearch,
    SearchStrategy.USER: ManualNavigator,
}


def create_search(strategy: SearchStrategy, grid: Grid, generator: MazeGenerator) -> SearchEngine:
    return _ENGINES[strategy](grid, generator)
