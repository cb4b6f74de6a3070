"""Application configuration.

Settings come from an optional INI-style file. Anything missing or
unreadable falls back to the defaults below.
"""

import configparser
import logging
import os

from dataclasses import dataclass

# Constants
DEFAULT_CONFIG_FILE = "config/tours.conf"
DEFAULT_DATA_FILE = "users.txt"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FILE = "logs/tours.log"


@dataclass
class AppConfig:
    """
    Runtime settings for the booking app.

    Attributes:
        data_file (str): Path of the user database.
        log_level (str): Name of the root logging level.
        log_file (str): Log file path, empty to disable file logging.
        log_to_stderr (bool): Also log to stderr (off by default, it
            interleaves with the menus).
    """
    data_file: str = DEFAULT_DATA_FILE

    log_level: str = DEFAULT_LOG_LEVEL
    log_file: str = DEFAULT_LOG_FILE
    log_to_stderr: bool = False

    def __str__(self):
        return (
            f"========= Tour Booking Configuration =========\n"
            f"    Data File:     {self.data_file}\n"
            f"    Log File:      {self.log_file}\n"
            f"    Log to STDERR: {self.log_to_stderr}\n"
            f"    Log Level:     {self.log_level}\n"
            f"=============================================="
        )


def _to_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_config_file(path: str = DEFAULT_CONFIG_FILE) -> AppConfig:
    """Loads configuration from an INI-style config file."""
    if not os.path.exists(path):
        return AppConfig()

    cfg = configparser.ConfigParser()
    try:
        cfg.read(path, encoding="utf-8")
    except configparser.Error as ex:
        # logging is not set up yet at this point
        print(f"Warning: could not parse config file '{path}': {ex}. Using defaults.")
        return AppConfig()

    # Helper to safely get and convert values
    def get(section, option, fallback, conv=str):
        try:
            return conv(cfg.get(section, option))
        except (configparser.Error, ValueError):
            return fallback

    level = get("Logging", "log_level", DEFAULT_LOG_LEVEL).upper()
    if not isinstance(logging.getLevelName(level), int):
        level = DEFAULT_LOG_LEVEL

    return AppConfig(
        data_file=get("Storage", "data_file", DEFAULT_DATA_FILE),
        log_level=level,
        log_file=get("Logging", "log_file", DEFAULT_LOG_FILE),
        log_to_stderr=get("Logging", "log_to_stderr", False, _to_bool),
    )
