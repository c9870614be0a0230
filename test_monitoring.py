#!/usr/bin/env python3
"""
Logging, error handling, metrics and configuration tests
"""
import logging

import pytest

from error_handling import (ConsistencyError, InvalidStateError, MazeConstructionError,
                            MazeError, MazeLogger, handle_errors)
from maze_config import CONFIG, load_config, updates_per_tick
from maze_search import SearchResult, SearchStrategy
from monitoring import PerformanceMonitor, log_run_summary, performance_monitor


def test_error_hierarchy():
    assert issubclass(InvalidStateError, MazeError)
    assert issubclass(ConsistencyError, MazeError)
    assert issubclass(MazeConstructionError, MazeError)
    assert issubclass(MazeConstructionError, ValueError)


def test_handle_errors_logs_and_reraises(caplog):
    test_logger = MazeLogger("maze.test")

    @handle_errors(test_logger)
    def corrupt():
        raise ConsistencyError("frontier emptied")

    with caplog.at_level(logging.INFO):
        with pytest.raises(ConsistencyError):
            corrupt()

    assert "ConsistencyError: frontier emptied" in caplog.text
    assert '"function": "corrupt"' in caplog.text
    summary = test_logger.get_error_summary()
    assert summary['total_errors'] == 1
    assert summary['error_types'] == {'ConsistencyError': 1}
    assert summary['critical_errors'] == 1


def test_invalid_state_is_a_warning(caplog):
    test_logger = MazeLogger("maze.test_warning")

    @handle_errors(test_logger)
    def too_early():
        raise InvalidStateError("still generating")

    with caplog.at_level(logging.WARNING):
        with pytest.raises(InvalidStateError):
            too_early()

    records = [r for r in caplog.records if r.name == "maze.test_warning"]
    assert records and all(r.levelno == logging.WARNING for r in records)
    assert test_logger.get_error_summary()['critical_errors'] == 0


def test_handle_errors_passes_results_through():
    @handle_errors()
    def fine(x):
        return x * 2

    assert fine(21) == 42


def test_setup_logging_with_log_dir(tmp_path):
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        MazeLogger("maze.files").setup_logging("DEBUG", str(tmp_path / "logs"))
        logging.getLogger("maze.files").error("written to disk")
        for handler in root.handlers:
            handler.flush()
        assert "written to disk" in (tmp_path / "logs" / "maze.log").read_text()
        assert "written to disk" in (tmp_path / "logs" / "maze_errors.log").read_text()
        assert (tmp_path / "logs" / "maze_structured.log").exists()
    finally:
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()
        for handler in saved_handlers:
            root.addHandler(handler)
        root.setLevel(saved_level)


def test_performance_monitor_records_operations():
    monitor = PerformanceMonitor(MazeLogger("maze.perf"))

    @monitor.time_operation('work')
    def work(fail=False):
        if fail:
            raise ValueError("boom")
        return "ok"

    assert work() == "ok"
    with pytest.raises(ValueError):
        work(fail=True)

    metrics = monitor.get_metrics()['work']
    assert metrics['count'] == 2
    assert metrics['error_count'] == 1
    assert metrics['success_rate'] == 50.0
    assert metrics['recent_errors'] == ["ValueError: boom"]
    assert metrics['over_budget'] == 0

    monitor.reset()
    assert monitor.get_metrics() == {}


def test_slow_ticks_count_against_frame_budget(caplog):
    monitor = PerformanceMonitor(MazeLogger("maze.frames"), frame_budget=0.02)
    with caplog.at_level(logging.INFO):
        monitor.record_metric('search_tick', 0.05)
        monitor.record_metric('search_tick', 0.01)
        monitor.record_metric('search_BFS', 3.0)

    metrics = monitor.get_metrics()
    assert metrics['search_tick']['over_budget'] == 1
    assert metrics['search_tick']['max_duration_ms'] == 50.0
    assert metrics['search_BFS']['over_budget'] == 0
    assert "Performance: search_tick completed in 0.050s" in caplog.text


def test_log_run_summary(caplog):
    result = SearchResult(SearchStrategy.A_STAR, path=[], nodes_explored=17, elapsed=0.1234)
    with caplog.at_level(logging.INFO):
        summary = log_run_summary(result)

    assert summary['strategy'] == "A*"
    assert summary['elapsed_seconds'] == 0.12
    assert "Nodes explored: 17" in caplog.text
    assert "MAZE SOLVED." in caplog.text
    assert 'search_A*' in performance_monitor.get_metrics()


def test_log_forfeited_run(caplog):
    result = SearchResult(SearchStrategy.USER, path=[], nodes_explored=3, elapsed=2.0, solved=False)
    with caplog.at_level(logging.INFO):
        log_run_summary(result)
    assert "RUN FORFEITED." in caplog.text


def test_load_config_defaults_and_overrides():
    config = load_config(environ={})
    assert config == CONFIG
    assert config is not CONFIG

    config = load_config(environ={}, width=7, height=None)
    assert config['width'] == 7
    assert config['height'] == CONFIG['height']

    config['colors']['bg'] = (1, 2, 3)
    assert CONFIG['colors']['bg'] == (255, 255, 255)


def test_load_config_from_environment():
    config = load_config(environ={"MAZE_WIDTH": "12", "MAZE_SEED": "4", "MAZE_LOG_LEVEL": "DEBUG",
                                  "MAZE_HEIGHT": ""})
    assert config['width'] == 12
    assert config['seed'] == 4
    assert config['log_level'] == "DEBUG"
    assert config['height'] == CONFIG['height']

    # Explicit overrides win over the environment
    assert load_config(environ={"MAZE_WIDTH": "12"}, width=3)['width'] == 3


def test_load_config_rejects_bad_values():
    with pytest.raises(ValueError):
        load_config(environ={"MAZE_WIDTH": "wide"})
    with pytest.raises(KeyError):
        load_config(environ={}, depth=3)


def test_updates_per_tick():
    assert updates_per_tick(1, 1) == 1
    assert updates_per_tick(10, 10) == 1
    assert updates_per_tick(50, 50) == 20
    assert updates_per_tick(100, 60) == 50
