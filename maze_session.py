#!/usr/bin/env python3
"""
Run state for one interactive maze session.

The driver owns a MazeSession and calls tick() at a fixed rate; key presses
go through handle_key(). A new maze replaces grid, generator and search
engine wholesale.
"""

import logging
from typing import Optional

from error_handling import InvalidStateError, handle_errors
from maze_config import load_config, updates_per_tick
from maze_generator import MazeGenerator
from maze_grid import Direction, Node, build_grid
from maze_search import (ManualNavigator, NodeState, SearchEngine, SearchPhase,
                         SearchResult, SearchStrategy, create_search)
from monitoring import log_run_summary, monitor_generation, monitor_search

logger = logging.getLogger(__name__)

CONTROLS = """
------CONTROLS------
[n]: Generate new maze
[d]: Select DFS
[b]: Select BFS
[a]: Select A* (A Star)

---PLAYER CONTROL---
[u]: Toggle user control on/off
[<][^][>][v]: Move player icon
--------------------"""

SEARCH_KEYS = {
    'd': SearchStrategy.DEPTH_FIRST,
    'b': SearchStrategy.BREADTH_FIRST,
    'a': SearchStrategy.A_STAR,
}

MOVE_KEYS = {
    'left': Direction.LEFT,
    'right': Direction.RIGHT,
    'up': Direction.TOP,
    'down': Direction.BOTTOM,
}


class MazeSession:
    """Grid, generator and the active search for one window"""

    def __init__(self, config=None):
        self.config = config or load_config()
        self.width = self.config['width']
        self.height = self.config['height']
        self.budget = updates_per_tick(self.width, self.height)
        self.grid = None
        self.generator = None
        self.search: Optional[SearchEngine] = None
        self.last_result: Optional[SearchResult] = None
        self.new_maze(self.config['seed'])

    def new_maze(self, seed=None):
        """Discard everything and start generating a fresh maze"""
        self.grid = build_grid(self.width, self.height, seed=seed)
        self.generator = MazeGenerator(self.grid)
        self.search = None
        self.last_result = None
        logger.info(f"Initializing new {self.width}x{self.height} maze...")

    @property
    def generating(self) -> bool:
        return not self.generator.done

    @property
    def searching(self) -> bool:
        return self.search is not None and self.search.phase in (
            SearchPhase.SEARCHING, SearchPhase.BACKTRACKING)

    @property
    def manual(self) -> bool:
        return isinstance(self.search, ManualNavigator) and self.searching

    @property
    def player(self) -> Optional[Node]:
        if isinstance(self.search, ManualNavigator):
            return self.search.player
        return None

    @handle_errors()
    def start_search(self, strategy: SearchStrategy) -> SearchEngine:
        """Start a new run, replacing any finished one"""
        if self.generating:
            raise InvalidStateError("Cannot search while the maze is still being generated")
        engine = create_search(strategy, self.grid, self.generator)
        engine.start()
        self.search = engine
        self.last_result = None
        logger.info(f"Search started: {strategy.value}")
        return engine

    def reset_search(self):
        """Drop the current run, keeping the maze"""
        if self.search is not None:
            self.search.reset()
        self.search = None
        self.last_result = None
        self.grid.reset_visits()

    def tick(self) -> Optional[SearchResult]:
        """One driver frame: advance generation or the active search"""
        if self.generating:
            self._advance_generation()
            return None
        if self.searching:
            return self._advance_search()
        return None

    @monitor_generation
    def _advance_generation(self):
        return self.generator.step(self.budget)

    @monitor_search
    @handle_errors()
    def _advance_search(self) -> Optional[SearchResult]:
        result = self.search.step(self.budget)
        if result is not None:
            self._report(result)
        return result

    def _report(self, result: SearchResult):
        self.last_result = result
        log_run_summary(result)

    def move(self, direction: Direction) -> bool:
        """Manual move; False when refused or no manual run is active"""
        if not self.manual:
            return False
        moved = self.search.move(direction)
        if moved:
            # Report arrival immediately instead of waiting for the next tick
            self._advance_search()
        return moved

    def toggle_manual(self):
        """Start manual play, or forfeit the run in progress"""
        if self.manual:
            logger.info("User forfeit. Thanks for playing!")
            self._report(self.search.forfeit())
            return None
        logger.info("User in control. Try your best!")
        return self.start_search(SearchStrategy.USER)

    def classify(self, node: Node) -> NodeState:
        if self.search is not None:
            return self.search.classify(node)
        if node is self.grid.origin:
            return NodeState.ORIGIN
        if node is self.grid.target:
            return NodeState.TARGET
        return NodeState.UNVISITED

    def status(self) -> str:
        if self.generating:
            return f"Generating... {self.generator.progress:.0%}"
        if self.manual:
            return "Player in control"
        if self.searching:
            return f"Solving ({self.search.strategy.value})..."
        if self.last_result is not None:
            summary = self.last_result.summary()
            verdict = "Solved" if self.last_result.solved else "Forfeit"
            return (f"{verdict} ({summary['strategy']}): {summary['nodes_explored']} explored, "
                    f"{summary['elapsed_seconds']}s")
        return "Ready"

    def handle_key(self, key: str):
        """Dispatch one key press"""
        if key == 'n':
            self.new_maze()
            print("Press C for controls")
            return

        if key == 'c':
            print(CONTROLS)
            return

        # Everything else waits for the current task, except player moves
        if (self.generating or self.searching) and not self.manual:
            return

        try:
            if key in SEARCH_KEYS:
                if self.manual:
                    # Forfeit with 'u' first
                    return
                self.start_search(SEARCH_KEYS[key])
            elif key == 'u':
                self.toggle_manual()
            elif key in MOVE_KEYS:
                self.move(MOVE_KEYS[key])
        except InvalidStateError:
            # Already logged by handle_errors; the key is simply ignored
            pass
