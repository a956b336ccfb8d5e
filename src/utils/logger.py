"""
Category logger

Compact, human-readable log lines for a long-running asyncio process:

    [14:23:45] STATE      ✓ State step
               ├─ state: hue_steps
               └─ aimed_index: 3

Every module binds its own category once at import time:

    log = get_logger().for_category(LogCategory.ENGINE)
    log.debug("Transition added", targets=[3])

configure_logger() mutates the shared Logger, so those module-level bound
loggers follow the loaded configuration.
"""

import sys
from datetime import datetime
from typing import Any, Dict, List, Optional, TextIO

from models.enums import LogLevel, LogCategory


class Colors:
    """ANSI escape codes"""
    RESET = '\033[0m'
    DIM = '\033[2m'

    RED = '\033[31m'
    GREEN = '\033[32m'
    YELLOW = '\033[33m'
    BLUE = '\033[34m'
    MAGENTA = '\033[35m'
    CYAN = '\033[36m'
    WHITE = '\033[37m'

    BRIGHT_GREEN = '\033[92m'
    BRIGHT_YELLOW = '\033[93m'
    BRIGHT_BLUE = '\033[94m'
    BRIGHT_MAGENTA = '\033[95m'
    BRIGHT_CYAN = '\033[96m'
    BRIGHT_WHITE = '\033[97m'


CATEGORY_COLORS = {
    LogCategory.CONFIG: Colors.CYAN,
    LogCategory.ENGINE: Colors.MAGENTA,
    LogCategory.TRANSITION: Colors.BRIGHT_MAGENTA,
    LogCategory.STATE: Colors.BRIGHT_CYAN,
    LogCategory.MIDI: Colors.BRIGHT_BLUE,
    LogCategory.EVENT: Colors.BRIGHT_YELLOW,
    LogCategory.API: Colors.BRIGHT_GREEN,
    LogCategory.SYSTEM: Colors.BRIGHT_WHITE,
    LogCategory.LIFECYCLE: Colors.BLUE,
    LogCategory.SHUTDOWN: Colors.RED,
}

LEVEL_STYLE = {
    # level: (rank, symbol, color)
    LogLevel.DEBUG: (0, '·', Colors.DIM),
    LogLevel.INFO: (1, '✓', Colors.GREEN),
    LogLevel.WARN: (2, '⚠', Colors.YELLOW),
    LogLevel.ERROR: (3, '✗', Colors.RED),
}

CATEGORY_WIDTH = 10
DETAIL_INDENT = " " * 11


def format_detail(key: str, value: Any) -> str:
    """One detail line; exceptions render as 'Type: message'"""
    if isinstance(value, BaseException):
        value = f"{type(value).__name__}: {value}"
    return f"{key}: {value}"


class Logger:
    """
    Shared structured logger

    Attributes:
        min_level: Threshold for categories without an override
        category_levels: Per-category thresholds (e.g. ENGINE at DEBUG while
            everything else stays at INFO; the engine logs every add/release)
        use_colors: ANSI colors on/off
        stream: Output stream, stdout unless redirected
    """

    def __init__(
        self,
        min_level: LogLevel = LogLevel.INFO,
        use_colors: bool = True,
        stream: Optional[TextIO] = None
    ):
        self.min_level = min_level
        self.use_colors = use_colors
        self.category_levels: Dict[LogCategory, LogLevel] = {}
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        # Resolved per write so redirected/captured stdout is honored
        return self._stream or sys.stdout

    def set_stream(self, stream: Optional[TextIO]) -> None:
        self._stream = stream

    def threshold(self, category: LogCategory) -> LogLevel:
        return self.category_levels.get(category, self.min_level)

    def is_enabled(self, category: LogCategory, level: LogLevel) -> bool:
        return LEVEL_STYLE[level][0] >= LEVEL_STYLE[self.threshold(category)][0]

    def _paint(self, text: str, color: str) -> str:
        return f"{color}{text}{Colors.RESET}" if self.use_colors else text

    def format(
        self,
        category: LogCategory,
        message: str,
        level: LogLevel,
        details: List[str]
    ) -> List[str]:
        """Render one record as output lines (header first, then the detail tree)"""
        _, symbol, color = LEVEL_STYLE[level]
        header = " ".join([
            datetime.now().strftime('[%H:%M:%S]'),
            self._paint(category.name.ljust(CATEGORY_WIDTH), CATEGORY_COLORS.get(category, Colors.WHITE)),
            self._paint(symbol, color),
            self._paint(message, color),
        ])

        lines = [header]
        last = len(details) - 1
        for i, detail in enumerate(details):
            branch = "└─" if i == last else "├─"
            lines.append(f"{DETAIL_INDENT}{self._paint(branch, Colors.DIM)} {detail}")
        return lines

    def log(
        self,
        category: LogCategory,
        message: str,
        level: LogLevel = LogLevel.INFO,
        details: Optional[list] = None,
        **kwargs
    ) -> None:
        """
        Write a record if the category's threshold allows it

        Args:
            category: Log category (ENGINE, MIDI, ...)
            message: Headline
            level: Severity
            details: Preformatted detail strings
            **kwargs: Extra details rendered as "key: value"
        """
        if not self.is_enabled(category, level):
            return

        all_details = list(details or [])
        all_details.extend(format_detail(k, v) for k, v in kwargs.items())

        out = self.stream
        for line in self.format(category, message, level, all_details):
            out.write(line + "\n")
        out.flush()

    def debug(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.DEBUG, **kw)
    def info(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.INFO, **kw)
    def warn(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.WARN, **kw)
    def error(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.ERROR, **kw)

    def for_category(self, category: LogCategory) -> 'BoundLogger':
        return BoundLogger(self, category)


class BoundLogger:
    """Logger with a fixed default category"""

    def __init__(self, base: Logger, category: LogCategory):
        self._base = base
        self._category = category

    @property
    def category(self) -> LogCategory:
        return self._category

    def is_enabled(self, level: LogLevel) -> bool:
        """Guard for details that are costly to build"""
        return self._base.is_enabled(self._category, level)

    def log(self, message: str, level: LogLevel = LogLevel.INFO, category: Optional[LogCategory] = None, **kw):
        self._base.log(category or self._category, message, level, **kw)

    def debug(self, message: str, **kw): self.log(message, LogLevel.DEBUG, **kw)
    def info(self, message: str, **kw): self.log(message, LogLevel.INFO, **kw)
    def warn(self, message: str, **kw): self.log(message, LogLevel.WARN, **kw)
    def error(self, message: str, **kw): self.log(message, LogLevel.ERROR, **kw)

    def with_category(self, category: LogCategory) -> 'BoundLogger':
        return BoundLogger(self._base, category)


_logger = Logger()


def get_logger() -> Logger:
    return _logger


def get_category_logger(category: LogCategory) -> BoundLogger:
    return _logger.for_category(category)


def configure_logger(
    min_level: LogLevel = LogLevel.INFO,
    use_colors: bool = True,
    category_levels: Optional[Dict[LogCategory, LogLevel]] = None
) -> None:
    """Reconfigure the shared logger in place"""
    _logger.min_level = min_level
    _logger.use_colors = use_colors
    _logger.category_levels = dict(category_levels or {})
