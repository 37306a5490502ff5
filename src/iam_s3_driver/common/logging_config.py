"""
Colored console logging for the S3 storage driver.

Makes driver and AWS SDK output easy to tell apart from the host
application's own logs in a terminal.
"""

import logging
import os
import sys
from typing import Optional


class Colors:
    """ANSI color codes for terminal output."""
    RESET = '\033[0m'
    BOLD = '\033[1m'

    RED = '\033[31m'
    GREEN = '\033[32m'
    YELLOW = '\033[33m'
    BLUE = '\033[34m'
    MAGENTA = '\033[35m'
    CYAN = '\033[36m'


class ColoredFormatter(logging.Formatter):
    """
    Formatter that adds colors to log levels and storage logger names.

    Color scheme:
    - DEBUG: Cyan
    - INFO: Green
    - WARNING: Yellow
    - ERROR: Red
    - CRITICAL: Bold Red
    - Driver logs (logger name under 'iam_s3_driver'): Blue
    - AWS SDK logs ('boto3', 'botocore', 'urllib3'): Magenta
    """

    LEVEL_COLORS = {
        logging.DEBUG: Colors.CYAN,
        logging.INFO: Colors.GREEN,
        logging.WARNING: Colors.YELLOW,
        logging.ERROR: Colors.RED,
        logging.CRITICAL: Colors.BOLD + Colors.RED,
    }

    DRIVER_LOGGER_PREFIX = 'iam_s3_driver'
    SDK_LOGGER_PREFIXES = ('boto3', 'botocore', 'urllib3')

    def __init__(self, fmt: Optional[str] = None, datefmt: Optional[str] = None, use_colors: bool = True):
        """
        Initialize the colored formatter.

        Args:
            fmt: Log format string
            datefmt: Date format string
            use_colors: Whether to use colors (disabled automatically for non-TTY outputs)
        """
        super().__init__(fmt, datefmt)
        self.use_colors = use_colors and self._supports_color()

    @staticmethod
    def _supports_color() -> bool:
        if os.environ.get('NO_COLOR'):
            return False
        if os.environ.get('FORCE_COLOR'):
            return True
        if not hasattr(sys.stdout, 'isatty') or not sys.stdout.isatty():
            return False
        if sys.platform == 'win32':
            return bool(os.environ.get('ANSICON') or os.environ.get('WT_SESSION'))
        return True

    def _name_color(self, record: logging.LogRecord) -> str:
        if record.name.startswith(self.DRIVER_LOGGER_PREFIX):
            return Colors.BLUE
        if record.name.startswith(self.SDK_LOGGER_PREFIXES):
            return Colors.MAGENTA
        return ''

    def format(self, record: logging.LogRecord) -> str:
        if not self.use_colors:
            return super().format(record)

        levelname_orig = record.levelname
        name_orig = record.name

        level_color = self.LEVEL_COLORS.get(record.levelno, '')
        record.levelname = f"{level_color}{record.levelname}{Colors.RESET}"

        name_color = self._name_color(record)
        if name_color:
            record.name = f"{name_color}{record.name}{Colors.RESET}"

        try:
            return super().format(record)
        finally:
            record.levelname = levelname_orig
            record.name = name_orig


def setup_colored_logging(
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    date_format: Optional[str] = None,
    use_colors: bool = True,
    sdk_level: int = logging.WARNING,
) -> None:
    """
    Configure colored console logging on the root logger.

    Should be called once, early in application startup. Existing root
    handlers are replaced.

    Args:
        level: The logging level (default: INFO)
        format_string: Custom format string (default: timestamp, name, level, message)
        date_format: Custom date format string
        use_colors: Whether to use colors (default: True, auto-detects TTY support)
        sdk_level: Level for the chatty boto3/botocore loggers (default: WARNING)

    Example:
        >>> from iam_s3_driver.common.logging_config import setup_colored_logging
        >>> setup_colored_logging(level=logging.DEBUG)
    """
    if format_string is None:
        format_string = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

    if date_format is None:
        date_format = '%Y-%m-%d %H:%M:%S'

    formatter = ColoredFormatter(
        fmt=format_string,
        datefmt=date_format,
        use_colors=use_colors
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    for name in ColoredFormatter.SDK_LOGGER_PREFIXES:
        logging.getLogger(name).setLevel(sdk_level)

