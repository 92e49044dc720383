"""
Per-state batch execution.

States never interact in any engine computation, so a batch is a plain map.
With more than one worker the map runs on a thread pool; results are always
returned in the order the states were given.
"""

from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import TypeVar

import structlog

logger = structlog.get_logger()

T = TypeVar("T")


def map_states(
    fn: Callable[[str], T],
    states: Sequence[str],
    max_workers: int = 1,
) -> list[T]:
    """
    Apply ``fn`` to every state.

    Args:
        fn: Per-state computation; must not share mutable state across calls
        states: States to process, in output order
        max_workers: Thread pool size; 1 or less runs sequentially

    Returns:
        One result per state, aligned with ``states``
    """
    if max_workers <= 1 or len(states) <= 1:
        return [fn(state) for state in states]

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [executor.submit(fn, state) for state in states]
        results = [future.result() for future in futures]

    logger.debug("state_batch_parallel", states=len(states), max_workers=max_workers)
    return results
