"""
Chunk partitioner for parallel sorting.

Splits a sequence into contiguous, near-equal chunks. Chunks are numpy
views into a single backing array so that sorting a chunk in place
reorders the backing array directly.
"""

import math
import numpy as np
from typing import List, Sequence, Union
from .config import Chunk, MIN_CHUNKS


def compute_chunk_count(n_values: int) -> int:
    """
    Number of chunks requested for a sequence of n_values.

    max(MIN_CHUNKS, ceil(sqrt(n))), using integer arithmetic so large
    inputs do not pick up float rounding.
    """
    root = math.isqrt(n_values)
    if root * root < n_values:
        root += 1
    return max(MIN_CHUNKS, root)


def as_backing_array(sequence: Union[Sequence[int], np.ndarray]) -> np.ndarray:
    """Return sequence as a 1-D int64 array, reusing it when already one."""
    if isinstance(sequence, np.ndarray) and sequence.dtype == np.int64 and sequence.ndim == 1:
        return sequence
    return np.asarray(sequence, dtype=np.int64).reshape(-1)


class ChunkPartitioner:
    """
    Partitions a sequence into chunks for parallel sorting.

    The first (n % k) chunks get one extra value, so chunk sizes differ
    by at most one. Chunks that would be empty (only when n < k) are
    dropped, so fewer than k chunks may be returned.
    """

    def __init__(self, sequence: Union[Sequence[int], np.ndarray]):
        """
        Initialize partitioner.

        Args:
            sequence: Values to partition. An int64 ndarray is used as the
                      backing array directly; anything else is converted
                      once and exposed as ``self.values``.
        """
        self.values = as_backing_array(sequence)
        self.n_values = len(self.values)
        self.n_chunks = compute_chunk_count(self.n_values)

    def partition(self) -> List[Chunk]:
        """
        Partition the backing array into chunks.

        Returns:
            List of Chunk objects in sequence order
        """
        chunks = []
        base = self.n_values // self.n_chunks
        remainder = self.n_values % self.n_chunks

        start = 0
        for i in range(self.n_chunks):
            # Distribute remainder across first chunks
            size = base + (1 if i < remainder else 0)
            if size == 0:
                continue

            chunks.append(Chunk(
                chunk_id=len(chunks),
                start=start,
                end=start + size,
                values=self.values[start:start + size]
            ))
            start += size

        return chunks

    def get_partition_stats(self, chunks: List[Chunk]) -> dict:
        """
        Get statistics about the partition.

        Args:
            chunks: List of chunks from partition()

        Returns:
            Dictionary with partition statistics
        """
        if not chunks:
            return {
                'n_chunks': 0,
                'total_values': 0
            }

        sizes = [c.n_values for c in chunks]

        return {
            'n_chunks': len(chunks),
            'requested_chunks': self.n_chunks,
            'total_values': sum(sizes),
            'min_values_per_chunk': min(sizes),
            'max_values_per_chunk': max(sizes),
            'avg_values_per_chunk': sum(sizes) / len(chunks),
            'size_spread': max(sizes) - min(sizes),
        }


def partition(sequence: Union[Sequence[int], np.ndarray]) -> List[Chunk]:
    """Partition sequence into chunks (convenience wrapper)."""
    return ChunkPartitioner(sequence).partition()
