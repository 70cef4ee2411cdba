"""Structured logging helpers for the mention pipeline.

`PprintLogger` wraps a standard `logging.Logger` so that dict payloads,
pydantic models and documents can be passed straight to the log methods:

    ```python
    logger = setup_logging()
    logger.debug({"message": "Linked mentions", "document": doc, "people": people})
    ```

Documents are summarized (path, type, metadata) rather than dumped in full,
since their rendered output can be large.
"""

import inspect
import logging
from pprint import pformat
from typing import Any

from pydantic import BaseModel

from sitementions.document import BaseDocument

# Document fields that are left out of log output
_BULKY_FIELDS = {"content", "output"}


class PprintLogger:
    """A logger wrapper that adds pprint support to standard logging methods."""

    def __init__(self, logger: logging.Logger):
        self._logger = logger

    def _format_value(self, value: Any) -> Any:
        """Turn pydantic models into plain data so pformat can lay them out."""
        if isinstance(value, BaseDocument):
            return value.model_dump(mode="json", exclude=_BULKY_FIELDS)
        if isinstance(value, BaseModel):
            return value.model_dump(mode="json")
        if isinstance(value, dict):
            return {key: self._format_value(item) for key, item in value.items()}
        if isinstance(value, (list, tuple)):
            return [self._format_value(item) for item in value]
        return value

    def _format_message(self, msg: Any, pprint: bool = True) -> str:
        """Format a message, optionally using pprint.

        Strings are passed through untouched. Pydantic models are dumped to
        plain data (documents without their content/output) and laid out
        with pformat along with any other structure.
        """
        if not pprint or isinstance(msg, str):
            return str(msg)
        return pformat(self._format_value(msg), width=120, depth=None, sort_dicts=False)

    def debug(self, msg: Any, *args, pprint: bool = True, **kwargs) -> None:
        """Log a debug message with optional pprint formatting."""
        if self._logger.isEnabledFor(logging.DEBUG):
            self._logger.debug(self._format_message(msg, pprint=pprint), *args, stacklevel=2, **kwargs)

    def info(self, msg: Any, *args, pprint: bool = True, **kwargs) -> None:
        """Log an info message with optional pprint formatting."""
        self._logger.info(self._format_message(msg, pprint=pprint), *args, stacklevel=2, **kwargs)

    def warning(self, msg: Any, *args, pprint: bool = True, **kwargs) -> None:
        """Log a warning message with optional pprint formatting."""
        self._logger.warning(self._format_message(msg, pprint=pprint), *args, stacklevel=2, **kwargs)

    def error(self, msg: Any, *args, pprint: bool = True, **kwargs) -> None:
        """Log an error message with optional pprint formatting."""
        self._logger.error(self._format_message(msg, pprint=pprint), *args, stacklevel=2, **kwargs)

    def exception(self, msg: Any, *args, pprint: bool = True, **kwargs) -> None:
        """Log an exception message with optional pprint formatting."""
        self._logger.exception(self._format_message(msg, pprint=pprint), *args, stacklevel=2, **kwargs)

    def __getattr__(self, name: str) -> Any:
        """Delegate any other attributes to the underlying logger."""
        return getattr(self._logger, name)


def setup_logging(name: str | None = None, level: int = logging.INFO) -> PprintLogger:
    """Set up logging and return a PprintLogger instance.

    Args:
        name: Logger name. Defaults to the calling module's ``__name__``.
        level: Level for the logger and its stream handler.
    """
    if name is None:
        frame = inspect.currentframe().f_back  # type: ignore[union-attr]
        name = frame.f_globals.get("__name__", "sitementions")  # type: ignore[union-attr]
    logger = logging.getLogger(name)
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setLevel(level)
        formatter = logging.Formatter("%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return PprintLogger(logger)
