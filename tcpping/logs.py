# tcpping/logs.py
import logging
import sys
from typing import Literal

import colorama

LOG_FORMAT = "%(asctime)s [%(levelname)-7s] %(name)s - %(message)s"
DATE_FORMAT = "%H:%M:%S"


class ColoredFormatter(logging.Formatter):
    """Wraps each record in a level-dependent colour, reset at the end of the line."""

    DEFAULT_COLORS = {
        logging.DEBUG: colorama.Fore.LIGHTBLACK_EX,
        logging.INFO: colorama.Fore.GREEN,
        logging.WARNING: colorama.Fore.YELLOW,
        logging.ERROR: colorama.Fore.RED + colorama.Style.BRIGHT,
        logging.CRITICAL: colorama.Back.RED + colorama.Fore.WHITE + colorama.Style.BRIGHT,
    }

    def __init__(self,
                 fmt: str = LOG_FORMAT,
                 datefmt: str | None = DATE_FORMAT,
                 style: Literal['%', '{', '$'] = '%',
                 colors: dict[int, str] | None = None):
        super().__init__(fmt=fmt, datefmt=datefmt, style=style)
        colors = colors or {}
        self.formats = {
            level: logging.Formatter(
                colors.get(level, color) + fmt + colorama.Style.RESET_ALL,
                datefmt=datefmt,
                style=style,
            )
            for level, color in self.DEFAULT_COLORS.items()
        }

    def format(self, record):
        formatter = self.formats.get(record.levelno)
        if formatter is None:
            return super().format(record)
        return formatter.format(record)


def setup_logging(level: int | str = logging.WARNING, colored: bool | None = None) -> logging.Logger:
    """
    Configure the "tcpping" logger with one stderr handler. Calling it again
    replaces the handler rather than stacking another one.
    colored=None colours only when stderr is a terminal.
    """
    if colored is None:
        colored = sys.stderr.isatty()
    if colored:
        colorama.just_fix_windows_console()

    handler = logging.StreamHandler(sys.stderr)
    if colored:
        handler.setFormatter(ColoredFormatter())
    else:
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    logger = logging.getLogger("tcpping")
    logger.handlers = [handler]
    logger.setLevel(level)
    logger.propagate = False
    return logger
