"""Loguru configuration for ginitree training and prediction records.

Every record ginitree emits carries an ``event`` key in its ``extra`` dict:

- ``"split"`` (SPLIT level): an accepted split with its feature, threshold,
  gain and child sizes.
- ``"leaf"`` (TRACE level): a finished leaf with its class counts and the
  reason the branch stopped.
- ``"fit"`` (INFO level): one summary per successful training run.
- ``"frame"`` (DEBUG level): the columns a DataFrame fit used.
- ``"rejected"`` (WARNING level): input refused at the API boundary,
  rendered as its message followed by its context.

``enable_logging()`` attaches a sink that renders each event with its own
layout instead of dumping the raw context. The package logger stays
disabled until at least one handle is active.
"""

from __future__ import annotations

import contextlib
import sys
import threading
from typing import TYPE_CHECKING, Final, Literal, TextIO, TypeAlias

from loguru import logger

if TYPE_CHECKING:
    from types import TracebackType

    from loguru import Record

PACKAGE_NAME: Final[str] = __name__.split(".")[0]

with contextlib.suppress(ValueError):
    logger.remove(0)

SPLIT_LEVEL: Final[str] = "SPLIT"
SPLIT_LEVEL_NUMBER: Final[int] = 15

try:
    logger.level(SPLIT_LEVEL)
except ValueError:
    logger.level(SPLIT_LEVEL, no=SPLIT_LEVEL_NUMBER, color="<green>")

LogLevel: TypeAlias = Literal["TRACE", "DEBUG", "SPLIT", "INFO", "WARNING", "ERROR"]

_PREFIX: Final[str] = "{time:HH:mm:ss.SSS} | <level>{level: <7}</level> | "

_EVENT_LAYOUTS: Final[dict[str, str]] = {
    "split": (
        "split x[{extra[feature_index]}] <= {extra[threshold]}"
        " gain={extra[gain]} left={extra[left_samples]} right={extra[right_samples]}"
    ),
    "leaf": "leaf class={extra[predicted_class]} counts={extra[class_counts]} ({extra[reason]})",
    "fit": (
        "trained {extra[n_samples]}x{extra[n_features]}"
        " depth={extra[depth]}/{extra[max_depth]} leaves={extra[leaf_count]}"
    ),
}

_registry_lock = threading.Lock()
_active_handler_ids: set[int] = set()


class LoggingHandle:
    """An attached ginitree sink; detach it with `disable()` or a `with` block."""

    def __init__(self, handler_id: int) -> None:
        self.handler_id: int | None = handler_id

    def disable(self) -> None:
        """Detach the sink. Disabling the last handle silences the package again."""
        with _registry_lock:
            if self.handler_id is None:
                return
            _active_handler_ids.discard(self.handler_id)
            with contextlib.suppress(ValueError):
                logger.remove(self.handler_id)
            self.handler_id = None
            if not _active_handler_ids:
                logger.disable(PACKAGE_NAME)

    def __enter__(self) -> LoggingHandle:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.disable()


def active_handle_count() -> int:
    """Return how many `enable_logging` handles are still attached."""
    with _registry_lock:
        return len(_active_handler_ids)


def enable_logging(
    *,
    level: LogLevel = "INFO",
    sink: TextIO | None = None,
    colorize: bool | None = None,
) -> LoggingHandle:
    """Render ginitree records to `sink` (stderr by default).

    Args:
        level (LogLevel): Minimum level. "INFO" shows one line per fit and
            any rejected input; "SPLIT" adds every accepted split; "TRACE"
            adds every leaf.
        sink (TextIO | None): Stream to write to. Defaults to `sys.stderr`.
        colorize (bool | None): Force ANSI colors on or off; `None` lets
            loguru decide from the stream.

    Returns:
        LoggingHandle: Handle that detaches the sink again.

    Examples:
        >>> with enable_logging(level="SPLIT"):  # doctest: +SKIP
        ...     fit(feature_matrix, labels, max_depth=3)
        12:00:00.000 | SPLIT   | split x[2] <= 0.0 gain=0.333333 left=4 right=6
    """
    handler_id = logger.add(
        sink if sink is not None else sys.stderr,
        level=level,
        format=_render,
        filter=PACKAGE_NAME,
        colorize=colorize,
    )
    with _registry_lock:
        _active_handler_ids.add(handler_id)
    logger.enable(PACKAGE_NAME)
    return LoggingHandle(handler_id)


def _render(record: Record) -> str:
    """Pick the layout for a record from its `event` key.

    Records without a known event show their message followed by their
    context as `key=value` pairs.
    """
    extra = record["extra"]
    layout = _EVENT_LAYOUTS.get(extra.get("event", ""))
    if layout is None:
        context = " ".join(f"{key}={{extra[{key}]}}" for key in extra if key != "event")
        layout = "{message} " + context if context else "{message}"
    return _PREFIX + layout + "\n{exception}"
