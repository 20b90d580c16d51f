"""Logging configuration for the command-line tools."""

from __future__ import annotations

import logging
import sys
from typing import Optional

ROOT_LOGGER_NAME = "dungeon"


class TopicFormatter(logging.Formatter):
    """Prefix each line with a short level and the logger's last name component."""

    def format(self, record: logging.LogRecord) -> str:
        level_name = record.levelname[:5]
        topic = record.name.split(".")[-1][:9]
        prefix = f"{level_name:<5}:{topic:<9}: "
        message = super().format(record)
        return "\n".join(f"{prefix}{line}" for line in message.split("\n"))


def setup_logging(level: int = logging.WARNING, log_file: Optional[str] = None) -> logging.Logger:
    """Attach a console handler (and optionally a file handler) to the ``dungeon`` logger."""
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(TopicFormatter())
    root_logger.addHandler(console)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        root_logger.addHandler(file_handler)

    root_logger.propagate = False
    return root_logger
