"""Logging setup keeps stdout free for JSON-RPC."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest

from ario_mcp.utils.logger import setup_mcp_logging


@pytest.fixture
def restore_root_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_all_output_goes_to_stderr(restore_root_logging) -> None:
    root = setup_mcp_logging(level="warning")

    assert root.level == logging.WARNING
    assert len(root.handlers) == 1
    assert root.handlers[0].stream is sys.stderr
    assert all(getattr(handler, "stream", None) is not sys.stdout for handler in root.handlers)
    assert logging.getLogger("httpx").level == logging.WARNING


def test_log_file_adds_file_handler(restore_root_logging, tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "server.log"

    root = setup_mcp_logging(level="DEBUG", log_file=str(log_file))
    logging.getLogger("ario_mcp.test").debug("written to file")
    for handler in root.handlers:
        handler.flush()

    file_handlers = [h for h in root.handlers if isinstance(h, logging.FileHandler)]
    assert len(root.handlers) == 2
    assert len(file_handlers) == 1
    assert Path(file_handlers[0].baseFilename) == log_file
    assert "written to file" in log_file.read_text()
