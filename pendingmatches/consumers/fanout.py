"""Concurrent fan-out of upstream calls.

One worker per item, results collected as they complete. The first failure
observed is raised right away: workers still queued are cancelled, workers
already running finish on their own (the HTTP client has no cancellation
hook) and whatever they return is discarded.
"""

import logging
from collections.abc import Callable, Iterable
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from typing import TypeVar

logger = logging.getLogger(__name__)

ItemT = TypeVar("ItemT")
ResultT = TypeVar("ResultT")

# Max parallel requests per fan-out
MAX_WORKERS = 50


def _log_discarded(label: str) -> Callable[[Future], None]:
    def callback(future: Future) -> None:
        if future.cancelled():
            return
        error = future.exception()
        if error is not None:
            logger.debug("[FANOUT] %s: discarded late failure: %s", label, error)
        else:
            logger.debug("[FANOUT] %s: discarded late result", label)

    return callback


def fan_out(
    func: Callable[[ItemT], ResultT],
    items: Iterable[ItemT],
    max_workers: int = MAX_WORKERS,
    label: str = "fanout",
) -> list[ResultT]:
    """Call func on every item concurrently.

    Args:
        func: Unit of work, typically one upstream call
        items: Inputs, one worker each
        max_workers: Upper bound on threads for this call
        label: Name used in log lines and thread names

    Returns:
        Results in completion order (callers sort)

    Raises:
        Whatever the first failed worker raised
    """
    items = list(items)
    if not items:
        return []

    executor = ThreadPoolExecutor(
        max_workers=max(1, min(len(items), max_workers)),
        thread_name_prefix=label,
    )
    try:
        futures: dict[Future, ItemT] = {executor.submit(func, item): item for item in items}
        results: list[ResultT] = []
        for future in as_completed(futures):
            try:
                results.append(future.result())
            except Exception as e:
                pending = [f for f in futures if not f.done()]
                logger.warning(
                    "[FANOUT] %s: worker for %r failed, abandoning %d in-flight: %s",
                    label,
                    futures[future],
                    len(pending),
                    e,
                )
                for other in pending:
                    other.add_done_callback(_log_discarded(label))
                raise
        return results
    finally:
        # Queued work never starts; running workers are not waited on
        executor.shutdown(wait=False, cancel_futures=True)
