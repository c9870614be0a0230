#!/usr/bin/env python3
"""
Interactive maze window
- Generates a maze with Kruskal's algorithm, animated tick by tick
- D / B / A solve it with DFS, BFS or A*; U hands control to the player
- N generates a new maze, C prints the controls
"""

import argparse

import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation

from error_handling import maze_logger
from maze_config import load_config
from maze_renderer import MazeRenderer
from maze_session import MazeSession
from monitoring import performance_monitor


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Kruskal maze generator and pathfinder")
    p.add_argument('--width', type=int, default=None, help='maze width in cells')
    p.add_argument('--height', type=int, default=None, help='maze height in cells')
    p.add_argument('--seed', type=int, default=None, help='random seed for a reproducible maze')
    p.add_argument('--tick-ms', type=int, default=None, help='driver timer interval in milliseconds')
    p.add_argument('--log-level', default=None, help='DEBUG, INFO, WARNING or ERROR')
    p.add_argument('--log-dir', default=None, help='directory for rotating log files')
    return p.parse_args(argv)


def main(argv=None):
    """Main function to generate and display the maze"""
    args = parse_args(argv)
    config = load_config(width=args.width, height=args.height, seed=args.seed,
                         tick_ms=args.tick_ms, log_level=args.log_level,
                         log_dir=args.log_dir)
    maze_logger.setup_logging(config['log_level'], config['log_dir'])
    performance_monitor.frame_budget = config['tick_ms'] / 1000.0

    session = MazeSession(config)
    renderer = MazeRenderer(session, config['colors'])
    print("Press C for controls")

    # Arrow keys and C belong to the maze, not matplotlib's navigation toolbar
    for keymap in ('keymap.back', 'keymap.forward'):
        plt.rcParams[keymap] = []

    fig, ax = plt.subplots(figsize=config['figure_size'])

    def on_key(event):
        if event.key:
            session.handle_key(event.key)

    def on_tick(_frame):
        session.tick()
        renderer.render(ax)
        return []

    fig.canvas.mpl_connect('key_press_event', on_key)

    # Keep a reference, otherwise the timer is garbage collected
    animation = FuncAnimation(fig, on_tick, interval=config['tick_ms'],
                              cache_frame_data=False)
    renderer.render(ax)
    plt.show()
    return animation


if __name__ == "__main__":
    main()
