"""
Parallel chunk sorting.

Splits a sequence of integers into ~sqrt(n) contiguous chunks, sorts the
chunks concurrently on threads, and k-way merges them into one sorted
sequence.

Main components:
- ChunkPartitioner: Splits a sequence into chunk views
- sort_chunk: Worker function that sorts one chunk in place
- KWayMerger: Merges the sorted chunks
- ParallelSortCoordinator / process: Run the whole pipeline
"""

from .config import (
    SortConfig,
    Chunk,
    ChunkSortResult,
    SortProgress,
    SortResult,
    MIN_CHUNKS,
    MERGE_SCAN,
    MERGE_HEAP,
    VALID_MERGE_STRATEGIES
)
from .partitioner import ChunkPartitioner, compute_chunk_count, partition
from .worker import sort_chunk, ChunkSortError
from .merger import KWayMerger, merge
from .coordinator import (
    ParallelSortCoordinator,
    process,
    sort_all,
    sort_chunks_concurrently,
    get_optimal_workers,
    check_sort_memory_budget
)

__all__ = [
    # Config
    'SortConfig',
    'Chunk',
    'ChunkSortResult',
    'SortProgress',
    'SortResult',
    'MIN_CHUNKS',
    'MERGE_SCAN',
    'MERGE_HEAP',
    'VALID_MERGE_STRATEGIES',
    # Partitioner
    'ChunkPartitioner',
    'compute_chunk_count',
    'partition',
    # Worker
    'sort_chunk',
    'ChunkSortError',
    # Merger
    'KWayMerger',
    'merge',
    # Coordinator
    'ParallelSortCoordinator',
    'process',
    'sort_all',
    'sort_chunks_concurrently',
    'get_optimal_workers',
    'check_sort_memory_budget',
]
