# === FILE: site_harvest/crawler/frontier.py ===
"""
Crawl frontier: FIFO queue of pending nodes plus the enqueued and visited sets.
"""
from __future__ import annotations

from collections import deque
from typing import Deque, Iterator, Optional, Set

from site_harvest.crawler.models import FrontierNode
from site_harvest.logger import logger


class Frontier:
    """Breadth-first queue with exact-URL deduplication and an optional size cap.

    A URL is admitted at most once for the lifetime of the frontier: the
    ``enqueued`` set is updated together with the queue and never shrinks, so
    a URL that was queued and later processed is rejected as well.
    """

    def __init__(self, max_size: Optional[int] = None) -> None:
        if max_size is not None and max_size < 1:
            raise ValueError("max_size must be >= 1")
        self.max_size = max_size
        self._queue: Deque[FrontierNode] = deque()
        self._enqueued: Set[str] = set()
        self.visited: Set[str] = set()
        self.dropped = 0

    def push(self, node: FrontierNode) -> bool:
        """Enqueue *node*; return False if it is a duplicate or the queue is full."""
        if node.url in self.visited or node.url in self._enqueued:
            return False
        if self.max_size is not None and len(self._queue) >= self.max_size:
            self.dropped += 1
            logger.debug("Queue full, dropped %s", node.url)
            return False
        self._queue.append(node)
        self._enqueued.add(node.url)
        return True

    def pop(self) -> FrontierNode:
        """Remove and return the oldest node. Raises IndexError when empty."""
        return self._queue.popleft()

    def mark_visited(self, url: str) -> None:
        self.visited.add(url)

    def is_visited(self, url: str) -> bool:
        return url in self.visited

    def is_enqueued(self, url: str) -> bool:
        return url in self._enqueued

    def __len__(self) -> int:
        return len(self._queue)

    def __bool__(self) -> bool:
        return bool(self._queue)

    def __iter__(self) -> Iterator[FrontierNode]:
        return iter(tuple(self._queue))


__all__ = ["Frontier"]
