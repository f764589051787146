#!/usr/bin/env python3
"""
Parallel Chunk Sort - Main Entry Point

Sorts integers by splitting them into ~sqrt(n) chunks, sorting the chunks
concurrently, and k-way merging the results.

Modes:
- Random:    generate N random integers in [0, 999] (N >= 10)
- File:      sort the integers in one file (one per line, >= 10 values)
- Directory: sort every '*.txt' file in a directory into '<dir>_sorted/'

Usage:
    chunksort -r 50
    chunksort -i numbers.txt
    chunksort -d data/
"""
import sys
import logging
import argparse
from dataclasses import replace
from typing import List, Optional

import numpy as np

from chunksort.utils.integer_io import (
    generate_random_integers,
    load_integers,
    format_sequence,
    format_chunks,
)
from chunksort.utils.batch_sorter import BatchSorter
from chunksort.utils.parallel_sort import (
    SortConfig,
    ParallelSortCoordinator,
    ChunkSortError,
    MERGE_SCAN,
    VALID_MERGE_STRATEGIES,
)

# Set up logging
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog='chunksort',
        description='Sort integers with parallel chunk sorting and k-way merge',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  chunksort -r 50                      # 50 random integers
  chunksort -r 1000 --seed 7           # Reproducible random input
  chunksort -i numbers.txt             # Sort one file
  chunksort -d data/                   # Sort every data/*.txt into data_sorted/
  chunksort -d data/ --merge-strategy heap
        """
    )

    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument(
        '-r', '--random',
        type=int,
        metavar='N',
        help='Generate N random integers (N >= 10)'
    )
    mode.add_argument(
        '-i', '--input',
        type=str,
        metavar='FILE',
        help='Input file with one integer per line'
    )
    mode.add_argument(
        '-d', '--directory',
        type=str,
        metavar='DIR',
        help='Directory of input files to sort'
    )

    parser.add_argument(
        '--seed',
        type=int,
        default=None,
        help='Seed for random generation (default: unpredictable)'
    )
    parser.add_argument(
        '--workers',
        type=int,
        default=None,
        help='Maximum sort threads (default: one per chunk)'
    )
    parser.add_argument(
        '--merge-strategy',
        choices=VALID_MERGE_STRATEGIES,
        default=MERGE_SCAN,
        help='K-way merge strategy (default: scan)'
    )
    parser.add_argument(
        '--suffix',
        type=str,
        default='.txt',
        help='Input file suffix for directory mode (default: .txt)'
    )
    parser.add_argument(
        '-o', '--output-dir',
        type=str,
        default=None,
        help='Output directory for directory mode (default: <DIR>_sorted)'
    )
    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        default='WARNING',
        help='Logging level (default: WARNING)'
    )

    return parser


def _sort_and_print(numbers: List[int], config: SortConfig):
    """Sort numbers and print the chunks before and after sorting."""
    print("Original numbers:")
    print(format_sequence(numbers))

    result = ParallelSortCoordinator(replace(config, keep_chunk_snapshots=True)).run(numbers)

    print("\nChunks before sorting:")
    for line in format_chunks(result.chunks_before):
        print(line)

    print("\nChunks after sorting:")
    for line in format_chunks(result.chunks_after):
        print(line)

    print("\nFinal sorted result:")
    print(format_sequence(result.values))


def run_random(count: int, config: SortConfig, seed: Optional[int] = None) -> int:
    """-r mode: sort freshly generated random integers."""
    rng = np.random.default_rng(seed)
    numbers = generate_random_integers(count, rng)
    _sort_and_print(numbers, config)
    return 0


def run_input_file(path: str, config: SortConfig) -> int:
    """-i mode: sort the integers in one file."""
    numbers = load_integers(path)
    _sort_and_print(numbers, config)
    return 0


def run_directory(
    directory: str,
    config: SortConfig,
    suffix: str = '.txt',
    output_dir: Optional[str] = None
) -> int:
    """-d mode: sort every matching file into the output directory."""
    sorter = BatchSorter(directory, output_dir=output_dir, suffix=suffix, config=config)
    result = sorter.run()

    print(f"Sorted files saved in directory: {result.output_dir}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.workers is not None and args.workers < 1:
        parser.error("--workers must be >= 1")

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s'
    )

    config = SortConfig(n_workers=args.workers, merge_strategy=args.merge_strategy)

    try:
        if args.random is not None:
            return run_random(args.random, config, seed=args.seed)
        if args.input:
            return run_input_file(args.input, config)
        return run_directory(args.directory, config, args.suffix, args.output_dir)

    except (ValueError, OSError, ChunkSortError) as e:
        logger.error(str(e))
        return 1


if __name__ == '__main__':
    sys.exit(main())
