import logging

from watersort import engine
from watersort.logging_utils import get_level_from_string, setup_logger
from watersort.solver import solve
from watersort.types import Color


def test_level_lookup():
    assert get_level_from_string("DEBUG") == logging.DEBUG
    assert get_level_from_string("nonsense") == logging.WARNING


def test_search_summary_written_to_file(tmp_path):
    log_file = tmp_path / "solver.log"
    logger = setup_logger("watersort", level=logging.INFO, log_file=str(log_file))
    setup_logger("watersort", level=logging.INFO, log_file=str(log_file))
    try:
        red = Color("Red", 255, 0, 0)
        solve(engine.new_puzzle(1, [[red], []]))
    finally:
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)

    text = log_file.read_text(encoding="utf-8")
    assert "watersort.solver - INFO - Search finished: outcome=already_solved" in text
    assert len(logger.handlers) == 0


def test_repeated_setup_replaces_handlers(tmp_path):
    log_file = tmp_path / "debug.log"
    setup_logger("watersort.test_setup", level=logging.DEBUG)
    logger = setup_logger("watersort.test_setup", level=logging.DEBUG, log_file=str(log_file))
    try:
        assert len(logger.handlers) == 2
        assert not logger.propagate
    finally:
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)

    text = log_file.read_text(encoding="utf-8")
    assert f"Logging configured: level=DEBUG file={log_file}" in text
