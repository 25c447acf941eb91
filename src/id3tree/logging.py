"""loguru integration for id3tree.

The tree builder reports each split at a custom SPLIT level, between DEBUG
and INFO. The package logger is disabled on import; `enable_logging` turns it
on for a stderr handler and returns a handle that turns it off again.

Importing this module removes loguru's default handler (ID 0), so records
from `enable_logging` are printed once.
"""

from __future__ import annotations

import contextlib
import sys
import threading
import warnings
from typing import TYPE_CHECKING, ClassVar, Final, Literal

from loguru import logger

if TYPE_CHECKING:
    from types import TracebackType

    from loguru import Record

PACKAGE_NAME: Final[str] = __name__.split(".")[0]

with contextlib.suppress(ValueError):
    logger.remove(0)

# Register custom SPLIT level (between DEBUG=10 and INFO=20)
SPLIT_LEVEL: Final[str] = "SPLIT"
SPLIT_LEVEL_NUMBER: Final[int] = 15


def _register_split_level() -> None:
    """Register the SPLIT level, warning if it already exists with another number."""
    try:
        existing_level = logger.level(SPLIT_LEVEL)
    except ValueError:
        logger.level(SPLIT_LEVEL, no=SPLIT_LEVEL_NUMBER, icon="🌿")
    else:
        if existing_level.no != SPLIT_LEVEL_NUMBER:
            msg = f"SPLIT level already registered with numeric value {existing_level.no}, expected {SPLIT_LEVEL_NUMBER}"
            warnings.warn(msg, stacklevel=2)


_register_split_level()

type LogLevel = Literal[
    "TRACE",
    "DEBUG",
    "SPLIT",
    "INFO",
    "WARNING",
    "ERROR",
    "CRITICAL",
]

type LogFormat = Literal["short", "full"]


class LoggingHandle:
    """Owns one stderr handler added by `enable_logging`.

    Examples:
        >>> with enable_logging(level="SPLIT"):  # doctest: +SKIP
        ...     tree = build_tree(dataset)

        >>> handle = enable_logging()  # doctest: +SKIP
        >>> tree = build_tree(dataset)  # doctest: +SKIP
        >>> handle.disable()  # doctest: +SKIP
    """

    _active_ids: ClassVar[set[int]] = set()
    _lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self, handler_id: int) -> None:
        """Track `handler_id` as an open handle.

        Args:
            handler_id (int): ID returned by `logger.add`.
        """
        self.handler_id: int | None = handler_id
        with LoggingHandle._lock:
            LoggingHandle._active_ids.add(handler_id)

    def disable(self) -> None:
        """Remove the handler associated with this logging handle.

        Closing the last open handle disables the id3tree logger again.
        Calling this twice is a no-op.
        """
        with LoggingHandle._lock:
            if self.handler_id is None:
                return
            LoggingHandle._active_ids.discard(self.handler_id)
            with contextlib.suppress(ValueError):
                logger.remove(self.handler_id)
            self.handler_id = None
            if not LoggingHandle._active_ids:
                logger.disable(PACKAGE_NAME)

    def __enter__(self) -> LoggingHandle:
        """Return this handle."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Disable this handle, whether or not the block raised."""
        self.disable()

    @classmethod
    def get_active_handle_count(cls) -> int:
        """Return the number of currently active logging handles.

        Returns:
            int: Count of active handles that have not been disabled.
        """
        with cls._lock:
            return len(cls._active_ids)


def enable_logging(
    *,
    level: LogLevel = "INFO",
    log_format: LogFormat = "short",
) -> LoggingHandle:
    """Enable id3tree logging to stderr.

    Each call returns an independent handle that owns its own handler; call
    the handle's disable() method or use it as a context manager to clean up.

    Args:
        level (LogLevel): Minimum log level to display. Defaults to "INFO",
            which reports one line per built tree. Use "SPLIT" to follow every
            split, "DEBUG" to also see the winning gain at each node, and
            "TRACE" to see every candidate score and leaf.
        log_format (LogFormat): "short" (default) shows the function name;
            "full" shows module:function:line.

    Returns:
        LoggingHandle: Independent handle for managing the logging handler.

    Examples:
        >>> with enable_logging(level="SPLIT"):  # doctest: +SKIP
        ...     build_tree(dataset)
    """
    logger.enable(PACKAGE_NAME)

    if log_format == "short":
        format_str = (
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "  # noqa: RUF027 - loguru format string
            "<cyan>{function}</cyan> - "
            "<level>{message}</level> {extra}"
        )
    else:  # "full"
        format_str = (
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "  # noqa: RUF027 - loguru format string
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level> {extra}"
        )

    handler_id = logger.add(
        sys.stderr,
        level=level,
        filter=_is_id3tree_record,
        format=format_str,
    )

    return LoggingHandle(handler_id)


def _is_id3tree_record(record: Record) -> bool:
    """Pass only records emitted from inside the id3tree package.

    Args:
        record (Record): The loguru Record object to filter.

    Returns:
        bool: True if the record is from the id3tree package.
    """
    name = record["name"]
    return name is not None and name.startswith(PACKAGE_NAME)
