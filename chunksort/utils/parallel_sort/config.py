"""
Configuration dataclasses for parallel chunk sorting.
"""

from dataclasses import dataclass, field
from typing import Optional, Dict, List
import numpy as np


# Floor on the number of chunks a sequence is split into
MIN_CHUNKS = 4

MERGE_SCAN = 'scan'
MERGE_HEAP = 'heap'
VALID_MERGE_STRATEGIES = [MERGE_SCAN, MERGE_HEAP]


@dataclass
class SortConfig:
    """Configuration for a parallel sort run."""
    n_workers: Optional[int] = None     # One thread per chunk if None
    merge_strategy: str = MERGE_SCAN    # 'scan' (linear minimum search) or 'heap'
    keep_chunk_snapshots: bool = False  # Copy chunk contents before/after sorting
    memory_safety_factor: float = 0.7   # Fraction of available memory considered safe


@dataclass
class Chunk:
    """A contiguous run of the sequence assigned to one sort task."""
    chunk_id: int
    start: int              # First index in the backing array (inclusive)
    end: int                # Last index in the backing array (exclusive)
    values: np.ndarray      # View of backing[start:end], not a copy

    @property
    def n_values(self) -> int:
        return self.end - self.start


@dataclass
class ChunkSortResult:
    """Result from sorting a single chunk."""
    chunk_id: int
    n_values: int
    elapsed_time: float


@dataclass
class SortProgress:
    """Progress information for callbacks."""
    phase: str                  # 'partitioning', 'sorting', 'merging', 'finalizing'
    n_values: int
    n_chunks: int = 0
    chunks_sorted: int = 0
    elapsed_time: float = 0.0


@dataclass
class SortResult:
    """Final result of a parallel sort run."""
    values: List[int]
    n_values: int
    n_chunks: int
    n_workers_used: int
    merge_strategy: str
    merge_steps: int
    elapsed_time: float
    throughput_values_per_sec: float
    chunk_times: Dict[int, float] = field(default_factory=dict)
    # Populated only when SortConfig.keep_chunk_snapshots is set
    chunks_before: Optional[List[List[int]]] = None
    chunks_after: Optional[List[List[int]]] = None
