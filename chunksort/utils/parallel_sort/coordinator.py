"""
Coordinator for parallel chunk sorting.

Orchestrates the full sort pipeline:
1. Copy the input into a fresh int64 backing array
2. Partition the backing array into chunk views
3. Sort every chunk concurrently (fork), wait for all of them (join)
4. Merge the sorted chunks into a new array

The pipeline holds no state between runs, so independent sequences can
be sorted from several threads at once.
"""

import time
import logging
import numpy as np
import psutil
from typing import Optional, Callable, List, Dict, Sequence, Tuple, Union
from concurrent.futures import ThreadPoolExecutor, as_completed

from .config import (
    SortConfig,
    Chunk,
    ChunkSortResult,
    SortProgress,
    SortResult
)
from .partitioner import ChunkPartitioner
from .worker import sort_chunk, ChunkSortError
from .merger import KWayMerger

logger = logging.getLogger(__name__)

# Peak bytes held per value during a run: backing array + merged array
# (8 bytes each) plus merge head lists and the returned list (boxed ints)
BYTES_PER_VALUE = 8 + 8 + 2 * (8 + 28)


def get_optimal_workers(n_chunks: int, n_workers: Optional[int] = None) -> int:
    """
    Get number of sort threads for a chunk set.

    One thread per chunk unless n_workers caps the pool.
    """
    if n_chunks <= 0:
        return 0
    if n_workers:
        return max(1, min(n_workers, n_chunks))
    return n_chunks


def check_sort_memory_budget(
    n_values: int,
    safety_factor: float = 0.7
) -> Tuple[bool, float, float, str]:
    """
    Pre-flight memory check before sorting.

    The whole sequence is memory-resident for the duration of a run.

    Args:
        n_values: Number of values to sort
        safety_factor: Fraction of available memory considered safe (default 70%)

    Returns:
        Tuple of (is_safe, available_mb, required_mb, message)
    """
    available_mb = psutil.virtual_memory().available / (1024**2)
    required_mb = (n_values * BYTES_PER_VALUE) / (1024**2)

    is_safe = required_mb < available_mb * safety_factor

    if is_safe:
        message = (
            f"Memory OK: ~{required_mb:.1f} MB required for sorting, "
            f"{available_mb:.0f} MB available"
        )
    else:
        message = (
            f"MEMORY WARNING: Sorting {n_values:,} values requires ~{required_mb:.0f} MB, "
            f"only {available_mb:.0f} MB available ({safety_factor*100:.0f}% threshold)."
        )

    return is_safe, available_mb, required_mb, message


def sort_chunks_concurrently(
    chunks: List[Chunk],
    n_workers: Optional[int] = None,
    on_chunk_sorted: Optional[Callable[[ChunkSortResult], None]] = None
) -> Dict[int, ChunkSortResult]:
    """
    Sort every chunk in place on its own thread and wait for all of them.

    Args:
        chunks: Chunks to sort
        n_workers: Optional cap on the number of threads
        on_chunk_sorted: Optional callback, invoked on the calling thread
                         as each chunk finishes

    Returns:
        Dictionary of chunk_id -> ChunkSortResult

    Raises:
        ChunkSortError: If any chunk failed to sort. Raised only after
                        every chunk task has finished.
    """
    results: Dict[int, ChunkSortResult] = {}
    if not chunks:
        return results

    workers = get_optimal_workers(len(chunks), n_workers)
    failures: Dict[int, Exception] = {}

    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix='chunk-sort') as executor:
        futures = {executor.submit(sort_chunk, chunk): chunk.chunk_id for chunk in chunks}

        for future in as_completed(futures):
            chunk_id = futures[future]
            try:
                result = future.result()
            except Exception as e:
                logger.error(f"Chunk {chunk_id} sort failed: {e}")
                failures[chunk_id] = e
                continue

            results[chunk_id] = result
            if on_chunk_sorted:
                on_chunk_sorted(result)

    if failures:
        chunk_id = min(failures)
        error = failures[chunk_id]
        raise ChunkSortError(chunk_id, str(error)) from error

    return results


def sort_all(chunks: List[Chunk], n_workers: Optional[int] = None) -> List[Chunk]:
    """
    Sort every chunk concurrently, in place.

    Returns:
        The same chunk list, now sorted chunk-wise
    """
    sort_chunks_concurrently(chunks, n_workers)
    return chunks


def process(
    sequence: Union[Sequence[int], np.ndarray],
    config: Optional[SortConfig] = None
) -> List[int]:
    """
    Sort a sequence: partition, sort chunks in parallel, merge.

    The input is copied first and never modified.

    Args:
        sequence: Integers to sort
        config: Optional sort configuration

    Returns:
        New list with the same values in non-decreasing order
    """
    config = config or SortConfig()
    values = np.array(sequence, dtype=np.int64).reshape(-1)

    chunks = ChunkPartitioner(values).partition()
    sort_all(chunks, n_workers=config.n_workers)
    return KWayMerger(config.merge_strategy).merge(chunks).tolist()


class ParallelSortCoordinator:
    """
    Orchestrates a parallel sort run with progress reporting.

    Same pipeline as process(), instrumented for the command line:
    progress callbacks, partition statistics, timing, and optional
    snapshots of the chunks before and after sorting.

    Usage:
        config = SortConfig(keep_chunk_snapshots=True)
        coordinator = ParallelSortCoordinator(config)
        result = coordinator.run(numbers, progress_callback=on_progress)
    """

    def __init__(self, config: Optional[SortConfig] = None):
        """
        Initialize coordinator.

        Args:
            config: Sort configuration (defaults if None)
        """
        self.config = config or SortConfig()
        # Validate strategy up front rather than after sorting
        KWayMerger(self.config.merge_strategy)

    def run(
        self,
        sequence: Union[Sequence[int], np.ndarray],
        progress_callback: Optional[Callable[[SortProgress], None]] = None
    ) -> SortResult:
        """
        Run the full sort pipeline.

        Args:
            sequence: Integers to sort (not modified)
            progress_callback: Optional callback for progress updates

        Returns:
            SortResult with sorted values and run statistics
        """
        start_time = time.time()
        values = np.array(sequence, dtype=np.int64).reshape(-1)
        n_values = len(values)

        def report(phase: str, n_chunks: int = 0, chunks_sorted: int = 0):
            if progress_callback:
                progress_callback(SortProgress(
                    phase=phase,
                    n_values=n_values,
                    n_chunks=n_chunks,
                    chunks_sorted=chunks_sorted,
                    elapsed_time=time.time() - start_time
                ))

        # Phase 1: Pre-flight check and partition
        report('partitioning')

        is_safe, _, _, message = check_sort_memory_budget(
            n_values, self.config.memory_safety_factor
        )
        if is_safe:
            logger.debug(message)
        else:
            logger.warning(message)

        partitioner = ChunkPartitioner(values)
        chunks = partitioner.partition()
        stats = partitioner.get_partition_stats(chunks)
        logger.info(
            f"Partitioned {n_values:,} values into {stats['n_chunks']} chunks"
            + (f" ({stats['min_values_per_chunk']}-{stats['max_values_per_chunk']} values each)"
               if chunks else "")
        )

        chunks_before = None
        if self.config.keep_chunk_snapshots:
            chunks_before = [c.values.tolist() for c in chunks]

        # Phase 2: Sort chunks in parallel
        n_workers = get_optimal_workers(len(chunks), self.config.n_workers)
        report('sorting', n_chunks=len(chunks))

        sorted_count = 0

        def on_chunk_sorted(result: ChunkSortResult):
            nonlocal sorted_count
            sorted_count += 1
            report('sorting', n_chunks=len(chunks), chunks_sorted=sorted_count)

        chunk_results = sort_chunks_concurrently(chunks, self.config.n_workers, on_chunk_sorted)
        logger.info(f"Sorted {len(chunks)} chunks on {n_workers} threads")

        chunks_after = None
        if self.config.keep_chunk_snapshots:
            chunks_after = [c.values.tolist() for c in chunks]

        # Phase 3: Merge
        report('merging', n_chunks=len(chunks), chunks_sorted=len(chunks))
        merger = KWayMerger(self.config.merge_strategy)
        merged = merger.merge(chunks).tolist()

        # Phase 4: Finalize
        report('finalizing', n_chunks=len(chunks), chunks_sorted=len(chunks))
        elapsed = time.time() - start_time
        throughput = n_values / elapsed if elapsed > 0 else 0.0
        logger.info(
            f"Sort complete: {n_values:,} values in {elapsed:.3f}s "
            f"({throughput:,.0f} values/s, {merger.steps} merge steps)"
        )

        return SortResult(
            values=merged,
            n_values=n_values,
            n_chunks=len(chunks),
            n_workers_used=n_workers,
            merge_strategy=self.config.merge_strategy,
            merge_steps=merger.steps,
            elapsed_time=elapsed,
            throughput_values_per_sec=throughput,
            chunk_times={cid: r.elapsed_time for cid, r in chunk_results.items()},
            chunks_before=chunks_before,
            chunks_after=chunks_after
        )
