"""
K-way merger for sorted chunks.

Combines the sorted chunks into a single ascending array. Chunks are
only read; the merged output is a new array.

Strategies:
- 'scan': each step scans the head of every live chunk for the minimum.
  O(n * k), with k ~ sqrt(n).
- 'heap': heapq keyed on (value, chunk index). O(n log k).

Both take the lowest chunk index on equal values, so they produce the
same output and advance the same cursors.
"""

import heapq
import logging
import numpy as np
from typing import List

from .config import Chunk, MERGE_SCAN, MERGE_HEAP, VALID_MERGE_STRATEGIES

logger = logging.getLogger(__name__)


class KWayMerger:
    """
    Merges a sorted chunk set into one sorted array.

    Usage:
        merger = KWayMerger(strategy='scan')
        merged = merger.merge(sorted_chunks)
        print(merger.steps)  # selection steps taken
    """

    def __init__(self, strategy: str = MERGE_SCAN):
        """
        Initialize merger.

        Args:
            strategy: 'scan' or 'heap'
        """
        if strategy not in VALID_MERGE_STRATEGIES:
            raise ValueError(
                f"Invalid merge strategy: {strategy}. "
                f"Must be one of {VALID_MERGE_STRATEGIES}"
            )
        self.strategy = strategy
        self.steps = 0

    def merge(self, chunks: List[Chunk]) -> np.ndarray:
        """
        Merge sorted chunks.

        Args:
            chunks: Chunks in chunk order, each sorted ascending

        Returns:
            Merged int64 array. With a single chunk, that chunk's values
            are returned unchanged.
        """
        self.steps = 0

        if not chunks:
            return np.empty(0, dtype=np.int64)
        if len(chunks) == 1:
            return chunks[0].values

        # Plain lists: per-element reads on ndarrays are much slower
        heads = [c.values.tolist() for c in chunks]
        total = sum(len(h) for h in heads)
        result = np.empty(total, dtype=np.int64)

        if self.strategy == MERGE_HEAP:
            self._merge_heap(heads, result)
        else:
            self._merge_scan(heads, result)

        logger.debug(
            f"Merged {len(chunks)} chunks ({total} values) "
            f"with '{self.strategy}' in {self.steps} steps"
        )
        return result

    def _merge_scan(self, heads: List[list], result: np.ndarray):
        """Repeatedly select the smallest head across all live cursors."""
        lengths = [len(h) for h in heads]
        cursors = [0] * len(heads)
        out = 0

        while True:
            min_idx = -1
            min_val = 0

            for i, head in enumerate(heads):
                if cursors[i] >= lengths[i]:
                    continue
                val = head[cursors[i]]
                # Strict '<' keeps the first (lowest index) chunk on ties
                if min_idx == -1 or val < min_val:
                    min_val = val
                    min_idx = i

            if min_idx == -1:
                break

            result[out] = min_val
            out += 1
            cursors[min_idx] += 1
            self.steps += 1

    def _merge_heap(self, heads: List[list], result: np.ndarray):
        """Select the smallest head through a min-heap of (value, chunk index)."""
        heap = [(head[0], i) for i, head in enumerate(heads) if head]
        heapq.heapify(heap)
        cursors = [0] * len(heads)
        out = 0

        while heap:
            val, i = heap[0]
            result[out] = val
            out += 1
            cursors[i] += 1
            self.steps += 1

            if cursors[i] < len(heads[i]):
                heapq.heapreplace(heap, (heads[i][cursors[i]], i))
            else:
                heapq.heappop(heap)


def merge(chunks: List[Chunk], strategy: str = MERGE_SCAN) -> np.ndarray:
    """Merge sorted chunks (convenience wrapper)."""
    return KWayMerger(strategy).merge(chunks)
