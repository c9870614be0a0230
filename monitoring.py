#!/usr/bin/env python3
"""
Performance monitoring and run reporting for the maze pathfinder
"""

import json
import logging
import threading
import time
from datetime import datetime
from functools import wraps

from error_handling import maze_logger
from maze_config import CONFIG

logger = logging.getLogger(__name__)


class PerformanceMonitor:
    """Per-operation timing for driver ticks and finished runs.

    A tick slower than frame_budget seconds means the animation is dropping
    frames; those are counted and logged through MazeLogger.log_performance.
    """

    def __init__(self, logger, frame_budget=CONFIG['tick_ms'] / 1000.0):
        self.logger = logger
        self.frame_budget = frame_budget
        self.metrics = {}
        self.lock = threading.Lock()

    def time_operation(self, operation_name):
        """Decorator to time operations"""
        def decorator(func):
            @wraps(func)
            def wrapper(*args, **kwargs):
                started = time.perf_counter()
                failure = None
                try:
                    return func(*args, **kwargs)
                except Exception as e:
                    failure = f"{type(e).__name__}: {e}"
                    raise
                finally:
                    self.record_metric(operation_name, time.perf_counter() - started,
                                       failure is None, failure)
            return wrapper
        return decorator

    def record_metric(self, operation, duration, success=True, error=None):
        """Record one timed call of operation"""
        with self.lock:
            metric = self.metrics.setdefault(operation, {
                'calls': 0,
                'seconds': 0.0,
                'fastest': None,
                'slowest': 0.0,
                'failures': [],
                'over_budget': 0,
            })
            metric['calls'] += 1
            metric['seconds'] += duration
            if metric['fastest'] is None or duration < metric['fastest']:
                metric['fastest'] = duration
            metric['slowest'] = max(metric['slowest'], duration)
            if not success:
                metric['failures'].append(error)
                del metric['failures'][:-10]

            # Whole runs are expected to span many frames; only ticks are budgeted
            if operation.endswith('_tick') and duration > self.frame_budget:
                metric['over_budget'] += 1
                self.logger.log_performance(operation, duration, {
                    'frame_budget': self.frame_budget,
                    'over_budget': metric['over_budget'],
                })

    def get_metrics(self):
        """Snapshot of every operation recorded so far, durations in ms"""
        with self.lock:
            snapshot = {}
            for operation, metric in self.metrics.items():
                calls = metric['calls']
                failed = len(metric['failures'])
                snapshot[operation] = {
                    'count': calls,
                    'avg_duration_ms': round(metric['seconds'] / calls * 1000, 2),
                    'min_duration_ms': round(metric['fastest'] * 1000, 2),
                    'max_duration_ms': round(metric['slowest'] * 1000, 2),
                    'success_rate': round((calls - failed) / calls * 100, 2),
                    'error_count': failed,
                    'recent_errors': metric['failures'][-5:],
                    'over_budget': metric['over_budget'],
                }
            return snapshot

    def reset(self):
        with self.lock:
            self.metrics.clear()


# Global instance
performance_monitor = PerformanceMonitor(maze_logger)


def log_run_summary(result):
    """Report a finished (or forfeited) run"""
    summary = result.summary()
    logger.info("------------")
    logger.info("MAZE SOLVED." if result.solved else "RUN FORFEITED.")
    logger.info("------------")
    logger.info(f"Pathfinder:     {summary['strategy']}")
    logger.info(f"Nodes explored: {summary['nodes_explored']}")
    logger.info(f"Path length:    {summary['path_length']}")
    logger.info(f"Time elapsed:   {summary['elapsed_seconds']}")
    logger.debug(f"RUN: {json.dumps(dict(summary, timestamp=datetime.now().isoformat()))}")

    performance_monitor.record_metric(f"search_{summary['strategy']}", result.elapsed, result.solved)
    return summary


# Monitoring decorators
def monitor_generation(func):
    """Monitor maze generation ticks"""
    return performance_monitor.time_operation('generation_tick')(func)


def monitor_search(func):
    """Monitor search ticks"""
    return performance_monitor.time_operation('search_tick')(func)
