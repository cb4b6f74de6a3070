"""Entry point for the tour booking system.

Loads config/tours.conf (if present), sets up logging and runs the
interactive menu until the user exits.
"""

import logging
import sys

import cli
from app_logger import setup_logger
from settings import load_config_file


def main():
    if sys.version_info < (3, 9):
        print("Error! This program requires Python 3.9 or newer.")
        sys.exit(1)

    config = load_config_file()
    setup_logger(config)
    logging.debug("Parsed configuration:\n%s", config)

    cli.main(config)

    logging.info("Shutdown complete.")


if __name__ == "__main__":
    main()
