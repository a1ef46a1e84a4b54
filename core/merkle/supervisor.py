"""
Merkle Execution Supervisor
Runs a reduction as a separate unit of work, bounded by a deadline.

The work runs on its own daemon thread and reports once through a
future. The caller waits for whichever comes first: the result or the
deadline. Cancellation is cooperative: on timeout the worker is abandoned,
not stopped, and its eventual result is discarded. A daemon worker never
holds up interpreter exit, so a CLI run that times out returns at once.
Work submitted here must have no side effects besides producing its
return value.
"""
from __future__ import annotations

import concurrent.futures
import logging
import threading
from typing import Any, Callable, TypeVar

from core.schemas.errors import ProcessTimedOutException


logger = logging.getLogger(__name__)

T = TypeVar("T")


def _complete(future: concurrent.futures.Future, work: Callable[..., Any], args: tuple) -> None:
    if not future.set_running_or_notify_cancel():
        return
    try:
        result = work(*args)
    except BaseException as e:
        future.set_exception(e)
    else:
        future.set_result(result)


def run_with_deadline(
    work: Callable[..., T],
    *args: Any,
    timeout_ms: float,
    label: str | None = None,
) -> T:
    """
    Run `work(*args)` on a worker thread and wait at most `timeout_ms`.

    Args:
        work: Callable producing the result
        *args: Positional arguments passed to `work`
        timeout_ms: Deadline in milliseconds
        label: Optional name of the work, used in logs and error details

    Returns:
        Whatever `work` returns

    Raises:
        ProcessTimedOutException: If the deadline elapses first
        Exception: Any exception raised by `work` propagates unchanged
    """
    if timeout_ms < 0:
        raise ValueError(f"timeout_ms must be non-negative, got {timeout_ms}")

    future: concurrent.futures.Future = concurrent.futures.Future()
    worker = threading.Thread(
        target=_complete,
        args=(future, work, args),
        name=f"merkle-{label or 'work'}",
        daemon=True,
    )
    worker.start()

    try:
        return future.result(timeout=timeout_ms / 1000.0)
    except concurrent.futures.TimeoutError:
        if future.done():
            # work itself raised TimeoutError
            raise
        logger.warning(f"{label or 'work'} abandoned after {timeout_ms} ms deadline")
        raise ProcessTimedOutException(timeout_ms, process=label) from None


__all__ = ["run_with_deadline"]
