"""Logging setup for the tour booking app.

Log records go to a file and, optionally, stderr, each prefixed with a
short symbol for its level.
"""

import logging
import os

from settings import AppConfig


_SYMBOLIC_PREFIXES = {
    "DEBUG": "[~]",
    "INFO": "[*]",
    "WARNING": "[!]",
    "ERROR": "[!]",
    "CRITICAL": "[x]",
}


class SymbolicFormatter(logging.Formatter):
    """Formatter that prepends a symbolic level indicator."""

    def format(self, record):
        symbol = _SYMBOLIC_PREFIXES.get(record.levelname, "[?]")
        return f"{symbol} {super().format(record)}"


def setup_logger(config: AppConfig) -> None:
    """Configure the root logger from `config`.

    Args:
        config: AppConfig carrying log_level, log_file and log_to_stderr.
    """
    log_level = getattr(logging, config.log_level.upper(), logging.INFO)
    logger = logging.getLogger()
    logger.setLevel(log_level)
    logger.handlers.clear()

    formatter = SymbolicFormatter("%(asctime)s %(name)s: %(message)s")

    if config.log_to_stderr:
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)

    if config.log_file:
        log_dir = os.path.dirname(config.log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(config.log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())
