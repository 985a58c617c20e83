"""
SubnetMaze Color Log Formatter - ANSI Color-Coded Log Message Formatting

PURPOSE:
    Color-coded console log output so transit and mask changes stand out from
    the per-tick debug noise. Colors are dropped when NO_COLOR is set or the
    stream is not a terminal.

WHO READS ME:
    - main.py: setup_logging() installs CustomFormatter on the root handlers

COLOR SCHEME:
    - DEBUG: Grey
    - INFO: Cyan
    - WARNING: Yellow
    - ERROR: Red
    - CRITICAL: Bold Red

LOG FORMAT:
    %(asctime)s - %(name)s - %(message)s
    Example: "2026-10-19 13:04:26,789 - subnetmaze.navigator - arrived at 10.2.0.1"
"""

import logging
import os
import sys


class CustomFormatter(logging.Formatter):
    """return a formatter that prints log messages with color"""

    grey = "\x1b[38;20m"
    yellow = "\x1b[33;20m"
    red = "\x1b[31;20m"
    cyan = "\x1b[36;20m"
    bold_red = "\x1b[31;1m"
    reset = "\x1b[0m"
    template = "%(asctime)s - %(name)s - %(message)s"

    COLORS = {
        logging.DEBUG: grey,
        logging.INFO: cyan,
        logging.WARNING: yellow,
        logging.ERROR: red,
        logging.CRITICAL: bold_red,
    }

    def __init__(self, use_color: bool | None = None):
        super().__init__(self.template)
        if use_color is None:
            use_color = "NO_COLOR" not in os.environ and sys.stderr.isatty()
        self.use_color = use_color
        self._formatters = {
            level: logging.Formatter(color + self.template + self.reset)
            for level, color in self.COLORS.items()
        }

    def format(self, record):
        formatter = self._formatters.get(record.levelno) if self.use_color else None
        if formatter is None:
            return super().format(record)
        return formatter.format(record)
