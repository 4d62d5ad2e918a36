import time
from typing import Iterable, Iterator, Optional


def next_id(existing_ids: Iterable[int], now_ms: Optional[int] = None) -> int:
    """
    Return an id above every existing one.

    Ids stay millisecond-timestamp shaped so they sort with data written by
    earlier versions, but never repeat when several records are created in
    the same millisecond.
    """
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    return max(now_ms, max(existing_ids, default=0) + 1)


def id_sequence(existing_ids: Iterable[int], now_ms: Optional[int] = None) -> Iterator[int]:
    """Yield consecutive fresh ids starting from next_id()."""
    current = next_id(existing_ids, now_ms)
    while True:
        yield current
        current += 1
