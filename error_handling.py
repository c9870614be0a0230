#!/usr/bin/env python3
"""
Structured Error Handling and Logging for the Kruskal Maze Pathfinder
Error taxonomy for grid construction, generation and search, plus the
logger wrapper used by every module
"""

import traceback
import logging
import logging.handlers
import json
import datetime
import functools
import inspect
from typing import Any, Callable, Dict, Optional
from pathlib import Path


class MazeError(Exception):
    """Base class for all maze errors"""


class InvalidStateError(MazeError):
    """Operation requested in a state that does not allow it.

    Recoverable: the caller may retry once the state changes (for example
    after generation completes). Raising it never modifies any state.
    """


class ConsistencyError(MazeError):
    """A search frontier emptied before reaching the target.

    The generator always produces a connected maze, so this means the wall
    set or the connectivity labels are corrupt. Never retried.
    """


class MazeConstructionError(MazeError, ValueError):
    """Invalid grid dimensions"""


class MazeLogger:
    """Logging system with structured output and error bookkeeping"""

    def __init__(self, name: str = "maze"):
        self.logger = logging.getLogger(name)
        self.error_counts = {}
        self.critical_errors = []

    def setup_logging(self, log_level: str = "INFO", log_dir: Optional[str] = None):
        """Attach console and (optionally) rotating file handlers to the root logger"""
        root_logger = logging.getLogger()
        detailed_formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'
        )

        json_formatter = logging.Formatter(
            '{"timestamp": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "function": "%(funcName)s", "line": %(lineno)d, "message": "%(message)s"}'
        )

        root_logger.setLevel(getattr(logging, log_level.upper()))

        # Clear existing handlers
        for handler in list(root_logger.handlers):
            root_logger.removeHandler(handler)
            handler.close()

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(detailed_formatter)
        console_handler.setLevel(getattr(logging, log_level.upper()))
        root_logger.addHandler(console_handler)

        if log_dir:
            Path(log_dir).mkdir(parents=True, exist_ok=True)

            # File handler for all logs
            file_handler = logging.handlers.RotatingFileHandler(
                str(Path(log_dir) / 'maze.log'), maxBytes=10*1024*1024, backupCount=5
            )
            file_handler.setFormatter(detailed_formatter)
            file_handler.setLevel(logging.DEBUG)
            root_logger.addHandler(file_handler)

            # JSON handler for structured analysis
            json_handler = logging.handlers.RotatingFileHandler(
                str(Path(log_dir) / 'maze_structured.log'), maxBytes=5*1024*1024, backupCount=3
            )
            json_handler.setFormatter(json_formatter)
            json_handler.setLevel(logging.WARNING)
            root_logger.addHandler(json_handler)

            # Error-only handler
            error_handler = logging.handlers.RotatingFileHandler(
                str(Path(log_dir) / 'maze_errors.log'), maxBytes=5*1024*1024, backupCount=3
            )
            error_handler.setFormatter(detailed_formatter)
            error_handler.setLevel(logging.ERROR)
            root_logger.addHandler(error_handler)

        return root_logger

    def log_error(self, error: Exception, context: Dict[str, Any] = None):
        """Log error with full context and stack trace"""
        error_type = type(error).__name__
        error_msg = str(error)

        self.error_counts[error_type] = self.error_counts.get(error_type, 0) + 1

        frame = inspect.currentframe().f_back
        func_name = frame.f_code.co_name if frame else 'unknown'
        line_no = frame.f_lineno if frame else 0

        if isinstance(error, InvalidStateError):
            # Recoverable, the caller simply retries later
            self.logger.warning(f"Rejected in {func_name}:{line_no} - {error_type}: {error_msg}")
        else:
            self.logger.error(f"Error in {func_name}:{line_no} - {error_type}: {error_msg}")
            self.logger.debug(f"Full stack trace:\n{traceback.format_exc()}")

        if context:
            self.logger.info(f"Error context: {json.dumps(context, indent=2, default=str)}")

        if self._is_critical_error(error):
            self.critical_errors.append({
                'timestamp': datetime.datetime.now().isoformat(),
                'error_type': error_type,
                'message': error_msg,
                'function': func_name,
                'line': line_no,
                'context': context
            })

    def log_performance(self, operation: str, duration: float, details: Dict[str, Any] = None):
        """Log performance metrics"""
        self.logger.info(f"Performance: {operation} completed in {duration:.3f}s")

        if details:
            self.logger.debug(f"Performance details: {json.dumps(details, default=str)}")

    def _is_critical_error(self, error: Exception) -> bool:
        """Corrupted maze state is the only critical condition"""
        return isinstance(error, (ConsistencyError, MemoryError, RecursionError))

    def get_error_summary(self) -> Dict[str, Any]:
        """Get summary of all logged errors"""
        return {
            'total_errors': sum(self.error_counts.values()),
            'error_types': self.error_counts.copy(),
            'critical_errors': len(self.critical_errors),
            'recent_critical': self.critical_errors[-5:] if self.critical_errors else []
        }


def handle_errors(logger: MazeLogger = None):
    """Decorator that logs failures with call context and re-raises them"""
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except MazeError as e:
                context = {
                    'function': func.__name__,
                    'module': func.__module__,
                    'args_count': len(args),
                    'kwargs_keys': list(kwargs.keys()),
                    'timestamp': datetime.datetime.now().isoformat()
                }
                (logger or maze_logger).log_error(e, context)
                raise

        return wrapper
    return decorator


# Global logger instance
maze_logger = MazeLogger()
