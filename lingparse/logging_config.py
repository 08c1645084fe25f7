"""Logging setup for the lingparse command line.

The library modules only create loggers; handlers are installed here and
only by the console entry point.
"""

import logging
import sys
from typing import Optional


def setup_logging(level=logging.WARNING, debug=False, log_file: Optional[str] = None):
    """
    Set up logging for the command line tool.

    Args:
        level: Logging level (default: WARNING).
        debug: If True, enables DEBUG level with file/line context.
        log_file: Optional path of a file to append log records to.
    """
    # Clear existing handlers to avoid duplicates
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    if debug:
        level = logging.DEBUG
        format_string = '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'
    else:
        format_string = '%(asctime)s - %(levelname)s - %(message)s'

    formatter = logging.Formatter(format_string)

    # Console output goes to stderr so stdout stays clean for trees and JSON
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    root_logger.setLevel(level)
    if debug:
        logging.debug("DEBUG MODE ENABLED - Verbose logging active")
