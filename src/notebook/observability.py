"""Logging utilities for the notebook CLI.

Provides the persistent error log (one append-only file kept open for the
life of the process), diagnostic console logging and operation timing.
"""
import logging
import time
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Optional, Protocol, Union

logger = logging.getLogger(__name__)

# Logging format with ISO 8601 timestamps
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"

# The error log keeps the "ERROR <message>" line shape
ERROR_LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"
ERROR_LOG_DATE_FORMAT = "%Y/%m/%d %H:%M:%S"
ERROR_LOG_FILENAME = "app.log"


class ErrorLogger(Protocol):
    """Anything that can record an error."""

    def log_error(self, err: BaseException) -> None:
        ...


class FileErrorLogger:
    """Appends error messages to ``<log_dir>/app.log``.

    The file is opened once on construction and stays open until close().
    Write failures are handled by the logging module and never raised to
    the caller.
    """

    def __init__(self, log_dir: Union[str, Path]):
        self.log_path = Path(log_dir) / ERROR_LOG_FILENAME
        self.log_path.parent.mkdir(parents=True, exist_ok=True)

        self._handler = logging.FileHandler(
            self.log_path, mode="a", encoding="utf-8"
        )
        self._handler.setFormatter(
            logging.Formatter(ERROR_LOG_FORMAT, datefmt=ERROR_LOG_DATE_FORMAT)
        )
        # One logger per file so several instances (tests) don't share handlers
        self._logger = logging.getLogger(f"notebook.errors.{id(self)}")
        self._logger.setLevel(logging.ERROR)
        self._logger.propagate = False
        self._logger.addHandler(self._handler)

    def log_error(self, err: BaseException) -> None:
        """Write an error line to the log file."""
        self._logger.error("%s", err)

    def close(self) -> None:
        """Release the log file handle."""
        self._logger.removeHandler(self._handler)
        self._handler.close()

    def __enter__(self) -> "FileErrorLogger":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def configure_logging(
    level: int = logging.WARNING,
    console: bool = True,
) -> logging.Logger:
    """Configure diagnostic logging for the notebook logger hierarchy.

    Args:
        level: Logging level (default: WARNING)
        console: Log to stderr (default: True)

    Returns:
        The configured ``notebook`` logger
    """
    root_logger = logging.getLogger("notebook")
    root_logger.setLevel(level)

    if console and not any(
        isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
        for h in root_logger.handlers
    ):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(
            logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
        )
        root_logger.addHandler(console_handler)

    return root_logger


@contextmanager
def timed_operation(operation: str, **context):
    """Context manager for timing and logging operations.

    Args:
        operation: Name of the operation being performed
        **context: Additional context to include in log messages

    Yields:
        A dictionary where you can store result info (e.g., result_count)

    Example:
        with timed_operation('list_notes', tag='work') as op:
            notes = repo.get_notes_by_tag('work')
            op['result_count'] = len(notes)
    """
    correlation_id = str(uuid.uuid4())[:8]
    start_time = time.perf_counter()
    result_info: Dict[str, Any] = {}

    context_str = ', '.join(f'{k}={v}' for k, v in context.items())
    logger.debug(f"[{correlation_id}] START {operation} ({context_str})")

    error_msg: Optional[str] = None
    try:
        yield result_info
    except Exception as e:
        error_msg = str(e)
        raise
    finally:
        duration_ms = (time.perf_counter() - start_time) * 1000
        result_str = ', '.join(f'{k}={v}' for k, v in result_info.items())
        status = 'OK' if error_msg is None else f'ERROR: {error_msg}'
        logger.debug(
            f"[{correlation_id}] END {operation} "
            f"({duration_ms:.2f}ms) [{status}] {result_str}"
        )
