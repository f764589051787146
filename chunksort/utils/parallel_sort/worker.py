"""
Worker function for parallel chunk sorting.

Each call sorts one chunk in place. Workers run as threads so that the
chunk views keep aliasing the shared backing array; numpy releases the
GIL while sorting, so chunk sorts proceed in parallel. Chunks never
overlap, so no locking is needed.
"""

import time
import logging

from .config import Chunk, ChunkSortResult

logger = logging.getLogger(__name__)


class ChunkSortError(RuntimeError):
    """Raised when sorting a chunk fails; aborts the whole sort."""

    def __init__(self, chunk_id: int, message: str):
        self.chunk_id = chunk_id
        super().__init__(f"Sorting chunk {chunk_id} failed: {message}")


def sort_chunk(chunk: Chunk) -> ChunkSortResult:
    """
    Sort a single chunk ascending, in place.

    Args:
        chunk: Chunk whose values view is sorted

    Returns:
        ChunkSortResult with timing for this chunk
    """
    start_time = time.time()

    # Sorts the view, and therefore the backing array, without copying
    chunk.values.sort(kind='stable')

    elapsed = time.time() - start_time
    logger.debug(f"Chunk {chunk.chunk_id}: sorted {chunk.n_values} values in {elapsed * 1000:.2f} ms")

    return ChunkSortResult(
        chunk_id=chunk.chunk_id,
        n_values=chunk.n_values,
        elapsed_time=elapsed
    )
