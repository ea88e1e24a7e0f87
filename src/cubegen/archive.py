"""
Bounded top-k archive of completed structures.

Keeps the ``capacity`` best distinct structures seen so far. Ties are broken
by arrival order: a newcomer must strictly beat the current minimum to enter,
and among several entries sharing the minimum score the latest arrival is
evicted first. All public methods are serialized by one lock.
"""
import heapq
import itertools
import logging
import threading
from typing import List, Set, Tuple

from cubegen.geometry import Structure

logger = logging.getLogger(__name__)


class TopKArchive:
    """Score-ordered retention of the best ``capacity`` structures."""

    def __init__(self, capacity: int):
        if capacity <= 0:
            raise ValueError(f"Archive capacity must be positive, got {capacity}")
        self.capacity = capacity
        # min-heap of (score, -arrival, structure): root is the next eviction
        self._heap: List[Tuple[float, int, Structure]] = []
        self._members: Set[Structure] = set()
        self._arrivals = itertools.count()
        self._lock = threading.Lock()

    def offer(self, structure: Structure) -> bool:
        """Insert ``structure`` if it qualifies. Returns True if retained."""
        score = structure.score
        with self._lock:
            if structure in self._members:
                return False
            entry = (score, -next(self._arrivals), structure)
            if len(self._heap) < self.capacity:
                heapq.heappush(self._heap, entry)
                self._members.add(structure)
                return True
            if score <= self._heap[0][0]:
                return False
            _, _, evicted = heapq.heapreplace(self._heap, entry)
            self._members.discard(evicted)
            self._members.add(structure)
        logger.debug("Archive evicted score=%.2f for score=%.2f", evicted.score, score)
        return True

    def snapshot(self) -> List[Structure]:
        """Retained structures, best first; ties in arrival order."""
        with self._lock:
            entries = list(self._heap)
        entries.sort(key=lambda e: (-e[0], -e[1]))
        return [e[2] for e in entries]

    def __len__(self) -> int:
        with self._lock:
            return len(self._heap)
