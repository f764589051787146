"""
Batch sorting of every integer file in a directory.

Each matching file is read, sorted, and written under the same name to
an output directory next to the input directory. Files that fail to
parse or hold too few values are skipped; I/O errors abort the batch.
Files already written by the time of an abort are left in place.
"""

import time
import logging
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional, Callable, List, Union

from chunksort.utils.integer_io import (
    InputValidationError,
    IntegerParseError,
    discover_input_files,
    load_integers,
    write_integers
)
from chunksort.utils.parallel_sort import SortConfig, process

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_SUFFIX = '_sorted'


@dataclass
class SkippedFile:
    """An input file left out of the batch."""
    path: Path
    reason: str


@dataclass
class BatchProgress:
    """Progress information for callbacks."""
    current_file: str
    files_done: int
    total_files: int
    elapsed_time: float = 0.0


@dataclass
class BatchResult:
    """Final result of a batch run."""
    input_dir: Path
    output_dir: Path
    written: List[Path] = field(default_factory=list)
    skipped: List[SkippedFile] = field(default_factory=list)
    n_values: int = 0
    elapsed_time: float = 0.0


def default_output_dir(input_dir: Union[str, Path], suffix: str = DEFAULT_OUTPUT_SUFFIX) -> Path:
    """Sibling directory named '<input_dir><suffix>'."""
    # Resolve so "." and ".." still name a real sibling
    input_dir = Path(input_dir).resolve()
    return input_dir.parent / f"{input_dir.name}{suffix}"


class BatchSorter:
    """
    Sorts every matching file in a directory.

    Usage:
        sorter = BatchSorter('data/')
        result = sorter.run()
        print(result.output_dir, len(result.written), len(result.skipped))
    """

    def __init__(
        self,
        input_dir: Union[str, Path],
        output_dir: Union[str, Path, None] = None,
        suffix: str = '.txt',
        config: Optional[SortConfig] = None,
        output_dir_suffix: str = DEFAULT_OUTPUT_SUFFIX
    ):
        """
        Initialize batch sorter.

        Args:
            input_dir: Directory to scan (non-recursive)
            output_dir: Where sorted files go (default: sibling '<input_dir>_sorted')
            suffix: File name suffix of input files
            config: Sort configuration passed to process()
            output_dir_suffix: Suffix for the default output directory name
        """
        self.input_dir = Path(input_dir)
        self.output_dir = Path(output_dir) if output_dir else default_output_dir(
            self.input_dir, output_dir_suffix
        )
        self.suffix = suffix
        self.config = config or SortConfig()

    def run(
        self,
        progress_callback: Optional[Callable[[BatchProgress], None]] = None
    ) -> BatchResult:
        """
        Sort all input files.

        Returns:
            BatchResult listing written and skipped files

        Raises:
            FileNotFoundError: If the input directory does not exist
            NotADirectoryError: If the input path is not a directory
            OSError: On any read or write failure
        """
        start_time = time.time()

        if not self.input_dir.exists():
            raise FileNotFoundError(f"Input directory not found: {self.input_dir}")
        if not self.input_dir.is_dir():
            raise NotADirectoryError(f"Not a directory: {self.input_dir}")

        self.output_dir.mkdir(parents=True, exist_ok=True)

        input_files = discover_input_files(self.input_dir, self.suffix)
        logger.info(f"Found {len(input_files)} '*{self.suffix}' files in {self.input_dir}")

        result = BatchResult(input_dir=self.input_dir, output_dir=self.output_dir)

        for i, input_path in enumerate(input_files):
            if progress_callback:
                progress_callback(BatchProgress(
                    current_file=input_path.name,
                    files_done=i,
                    total_files=len(input_files),
                    elapsed_time=time.time() - start_time
                ))

            try:
                numbers = load_integers(input_path)
            except (IntegerParseError, InputValidationError) as e:
                logger.warning(f"Skipping {input_path.name}: {e}")
                result.skipped.append(SkippedFile(path=input_path, reason=str(e)))
                continue

            sorted_numbers = process(numbers, self.config)
            output_path = write_integers(self.output_dir / input_path.name, sorted_numbers)

            result.written.append(output_path)
            result.n_values += len(sorted_numbers)
            logger.debug(f"Sorted {input_path.name}: {len(sorted_numbers)} values")

        result.elapsed_time = time.time() - start_time
        logger.info(
            f"Batch complete: {len(result.written)} written, {len(result.skipped)} skipped, "
            f"{result.n_values:,} values in {result.elapsed_time:.2f}s"
        )
        return result
