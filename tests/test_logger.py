#!/usr/bin/env python3
"""
Unit tests for the run Logger.

Run with:
    pytest tests/test_logger.py
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from wisard.logger import Logger, create_logger


def test_console_only_logger_has_no_file():
    """Test that no file is created unless asked for."""
    logger = Logger("console_only", console=False)
    logger("nothing to see")
    assert logger.log_file is None
    logger.close()


def test_file_logger_writes_messages(tmp_path):
    """Test that messages, headers and metrics reach the log file."""
    logger = Logger("run", log_dir=str(tmp_path), console=False)
    logger("Training...")
    logger.header("Results")
    logger.metrics({"accuracy": 0.91234, "samples": 60000})
    logger.warning("low fill ratio")
    logger.close()

    path = Path(logger.log_file)
    assert path.parent == tmp_path
    assert path.name.startswith("run_")

    text = path.read_text()
    assert "Training..." in text
    assert "  Results" in text
    assert "=" * 70 in text
    assert "accuracy : 0.9123" in text
    assert "samples  : 60000" in text
    assert "low fill ratio" in text


def test_date_based_directory(tmp_path):
    """Test the logs/YYYY/MM/DD layout under the project root."""
    logger = Logger("dated", project_root=str(tmp_path), to_file=True, console=False)
    logger("hello")
    logger.close()

    path = Path(logger.log_file)
    assert path.parents[3] == tmp_path / "logs"
    assert len(path.parent.name) == 2


def test_create_logger_factory(tmp_path):
    """Test the factory and repr."""
    logger = create_logger("factory", log_dir=str(tmp_path), console=False)
    assert "factory" in repr(logger)
    assert logger.log_file is not None
    logger.close()
