"""docmodel logging.

Every module gets its logger from :any:`get_logger`, which parents it under the
``docmodel`` root logger.  The root logger owns a single stream handler
(:any:`_STDERR_HANDLER`) whose level is read from the ``__DOCMODEL_LOG_LEVEL__``
environment variable, and optionally a debug file handler when
``__DOCMODEL_LOG_FILE__`` is set.
"""

import os
import re
import sys
import shutil
import logging
import textwrap
from logging import handlers
import termcolor

ROOT_LOGGER_NAME = 'docmodel'

LOG_LEVEL = os.environ.get('__DOCMODEL_LOG_LEVEL__', 'WARNING').upper()
"""str: Threshold of the console handler."""

LOG_FILE = os.environ.get('__DOCMODEL_LOG_FILE__', '')
"""str: Absolute path to the debug log file, empty when disabled."""

TERM_SIZE = shutil.get_terminal_size((80, 24))
"""tuple: (width, height) of the terminal window."""

LINE_WIDTH = TERM_SIZE[0]
"""int: Maximum length of a line printed to the console."""

_COLORS = {
    'CRITICAL': 'red',
    'ERROR': 'red',
    'WARNING': 'yellow',
    'DEBUG': 'cyan',
}

# Don't make this a raw string!  \033 is unicode for '\x1b'.
_COLOR_CONTROL_RE = re.compile('\033\\[([0-9]|3[0-8]|4[0-8])m')


class LogFormatter(logging.Formatter):
    """Custom log message formatter.

    Messages at INFO level are printed as-is, other levels are prefixed with
    their level name and the emitting module, and colorized when allowed.

    Args:
        line_width (int): Wrap messages to this width. 0 disables wrapping.
        printable_only (bool): Strip color control characters from the output.
        allow_colors (bool): Use termcolor to highlight the level prefix.
    """

    def __init__(self, line_width=LINE_WIDTH, printable_only=False, allow_colors=True):
        super().__init__()
        self.line_width = line_width
        self.printable_only = printable_only
        self.allow_colors = allow_colors and not printable_only

    def _wrap(self, text):
        if not self.line_width:
            return text
        return '\n'.join(
            textwrap.fill(line, self.line_width) if line else line
            for line in text.splitlines())

    def format(self, record):
        message = record.getMessage()
        if record.levelno != logging.INFO:
            prefix = f"[{record.levelname}] {record.name}:"
            color = _COLORS.get(record.levelname)
            if color and self.allow_colors:
                prefix = termcolor.colored(prefix, color)
            message = f"{prefix} {message}"
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        message = self._wrap(message)
        if self.printable_only:
            message = re.sub(_COLOR_CONTROL_RE, '', message)
        return message


def set_log_level(level):
    """Change the console handler threshold.

    Args:
        level (str): A level name accepted by :any:`logging`, e.g. 'DEBUG'.
    """
    global LOG_LEVEL
    LOG_LEVEL = level.upper()
    _STDERR_HANDLER.setLevel(LOG_LEVEL)


def debug_mode():
    return LOG_LEVEL == 'DEBUG'


def get_logger(name):
    """Returns a customized logging object.

    Args:
        name (str): Name of the logger, usually `__name__` of the calling module.

    Returns:
        logging.Logger: A logger parented under the docmodel root logger.
    """
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


_STDERR_HANDLER = logging.StreamHandler(sys.stderr)
_STDERR_HANDLER.setFormatter(
    LogFormatter(line_width=LINE_WIDTH,
                 printable_only=not sys.stderr.isatty()))
_STDERR_HANDLER.setLevel(LOG_LEVEL)

_ROOT_LOGGER = logging.getLogger(ROOT_LOGGER_NAME)
_ROOT_LOGGER.setLevel(logging.DEBUG)
_ROOT_LOGGER.propagate = False
_ROOT_LOGGER.addHandler(_STDERR_HANDLER)

if LOG_FILE:
    _FILE_HANDLER = handlers.RotatingFileHandler(LOG_FILE,
                                                 maxBytes=1000000,
                                                 backupCount=3)
    _FILE_HANDLER.setFormatter(
        logging.Formatter('%(asctime)s [%(levelname)s] %(name)s: %(message)s'))
    _FILE_HANDLER.setLevel(logging.DEBUG)
    _ROOT_LOGGER.addHandler(_FILE_HANDLER)
