"""Shared logger utilities and templates.

Hey future me - this makes logging consistent across all modules!

USAGE:
    from playreign.infrastructure.observability.logger_template import (
        get_module_logger,
        log_operation,
    )

    logger = get_module_logger(__name__)

    with log_operation(logger, "timeline.build", kind="artist"):
        reigns = replay_reigns(events)
"""

import logging
import time
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any


def get_module_logger(name: str) -> logging.Logger:
    """Get logger for module with standard config.

    Args:
        name: Module name (use __name__)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)


# Yo, the timeline engine is plain synchronous CPU work, so this is a regular (not async)
# context manager. It logs {operation}.started / .completed / .failed with duration_ms and
# re-raises on failure so the caller decides what to do.
@contextmanager
def log_operation(
    logger: logging.Logger,
    operation: str,
    log_level: int = logging.INFO,
    **context: Any,
) -> Iterator[dict[str, Any]]:
    """Context manager for logging operation start/end with automatic timing.

    The yielded dict can be filled inside the block; its items are added to
    the completion log (e.g. result counts).

    Args:
        logger: Logger instance from get_module_logger()
        operation: Operation name (e.g., "timeline.build")
        log_level: Level for start/completion logs (failures always log ERROR)
        **context: Additional fields to include in logs

    Example:
        >>> with log_operation(logger, "timeline.build", kind="song") as result:
        ...     reigns = build()
        ...     result["reigns"] = len(reigns)
    """
    start = time.perf_counter()
    logger.log(log_level, f"{operation}.started", extra=context)
    result: dict[str, Any] = {}

    try:
        yield result
    except Exception as e:
        duration_ms = int((time.perf_counter() - start) * 1000)
        logger.error(
            f"{operation}.failed",
            extra={
                **context,
                "duration_ms": duration_ms,
                "error": str(e),
                "error_type": type(e).__name__,
            },
            exc_info=True,
        )
        raise

    duration_ms = int((time.perf_counter() - start) * 1000)
    logger.log(
        log_level,
        f"{operation}.completed",
        extra={**context, **result, "duration_ms": duration_ms},
    )


def log_slow_operation(
    logger: logging.Logger,
    operation: str,
    duration_ms: int,
    threshold_ms: int = 100,
    **context: Any,
) -> bool:
    """Log warning if operation exceeded threshold.

    Args:
        logger: Logger instance
        operation: Operation name
        duration_ms: Actual operation duration
        threshold_ms: Threshold for "slow" (default: 100ms)
        **context: Additional fields (e.g., kind, events)

    Returns:
        True if the warning was logged
    """
    if duration_ms <= threshold_ms:
        return False
    logger.warning(
        "operation.slow",
        extra={
            **context,
            "operation": operation,
            "duration_ms": duration_ms,
            "threshold_ms": threshold_ms,
        },
    )
    return True
