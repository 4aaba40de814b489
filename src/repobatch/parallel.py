# parallel.py
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Sequence, TypeVar

T = TypeVar("T")
R = TypeVar("R")


def fan_out(fn: Callable[[T], R], items: Sequence[T]) -> List[R]:
    """
    Run fn(item) for every item concurrently and join all of them.

    - Every item is submitted before anything is awaited.
    - Results come back positionally (input order), never by completion.
    - No short-circuit: callers are expected to turn failures into values.
      If fn raises anyway, every sibling still runs to completion, then the
      first failure in input order is re-raised and the other siblings'
      results are discarded.

    Each call owns its pool with one worker per item, so nested fan-outs
    never wait on a worker held by their own parent. Limiting remote calls
    is the caller's job (see runner.run_batch).
    """
    items = list(items)
    if not items:
        return []

    with ThreadPoolExecutor(max_workers=len(items)) as pool:
        futures = [pool.submit(fn, item) for item in items]
    # leaving the `with` block waits for every future
    return [f.result() for f in futures]
