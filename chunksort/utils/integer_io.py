"""
Integer sequence sources and sinks.

Provides:
- Random sequence generation from a caller-owned numpy Generator
- Reading newline-delimited integer files (one value per non-blank line)
- Atomic writing of newline-delimited integer files
- Input file discovery for batch mode
- Console formatting of sequences and chunks
"""

import os
import re
import shutil
import logging
import tempfile
import numpy as np
from pathlib import Path
from typing import List, Sequence, Union

logger = logging.getLogger(__name__)

# Minimum number of values accepted for a sort run
MIN_VALUES = 10

# Random values are drawn from [0, RANDOM_MAX]
RANDOM_MAX = 999

# Output files get the usual 0666 & ~umask permissions
OUTPUT_FILE_MODE = 0o666

INT64_MIN = int(np.iinfo(np.int64).min)
INT64_MAX = int(np.iinfo(np.int64).max)

_INTEGER_RE = re.compile(r'^[+-]?[0-9]+$')


class InputValidationError(ValueError):
    """Raised when an input sequence is too short to sort."""
    pass


class IntegerParseError(ValueError):
    """Raised when a non-blank line is not a valid integer."""

    def __init__(self, line_number: int, text: str, path: Union[str, Path, None] = None):
        self.line_number = line_number
        self.text = text
        self.path = path
        location = f"{path}, line {line_number}" if path is not None else f"line {line_number}"
        super().__init__(f"Invalid integer at {location}: {text!r}")


def generate_random_integers(
    count: int,
    rng: np.random.Generator
) -> List[int]:
    """
    Generate count random integers uniformly from [0, RANDOM_MAX].

    Args:
        count: Number of values to generate
        rng: Generator owned by the caller (seed it for reproducible output)

    Returns:
        List of random integers

    Raises:
        InputValidationError: If count < MIN_VALUES
    """
    if count < MIN_VALUES:
        raise InputValidationError(f"N must be >= {MIN_VALUES}, got {count}")

    return rng.integers(0, RANDOM_MAX, size=count, endpoint=True, dtype=np.int64).tolist()


def parse_integer(text: str, line_number: int, path: Union[str, Path, None] = None) -> int:
    """Parse one stripped line as a signed 64-bit integer."""
    if not _INTEGER_RE.match(text):
        raise IntegerParseError(line_number, text, path)

    value = int(text)
    if value < INT64_MIN or value > INT64_MAX:
        raise IntegerParseError(line_number, text, path)
    return value


def read_integers(path: Union[str, Path]) -> List[int]:
    """
    Read one integer per non-blank line.

    Args:
        path: Input file path

    Returns:
        Integers in file order

    Raises:
        IntegerParseError: On the first non-blank line that is not an integer
        OSError: If the file cannot be opened or read
    """
    values = []

    # Undecodable bytes become U+FFFD and then fail as a parse error
    with open(path, 'r', encoding='utf-8', errors='replace') as f:
        for line_number, line in enumerate(f, start=1):
            text = line.strip()
            if not text:
                continue
            values.append(parse_integer(text, line_number, path))

    logger.debug(f"Read {len(values)} integers from {path}")
    return values


def load_integers(path: Union[str, Path]) -> List[int]:
    """
    Read integers from a file and require at least MIN_VALUES of them.

    Raises:
        InputValidationError: If fewer than MIN_VALUES integers were read
        IntegerParseError: On an invalid line
        OSError: If the file cannot be read
    """
    values = read_integers(path)
    if len(values) < MIN_VALUES:
        raise InputValidationError(
            f"{path}: input file must contain at least {MIN_VALUES} valid integers, "
            f"found {len(values)}"
        )
    return values


def _current_umask() -> int:
    """Read the process umask (os.umask can only read it by setting it)."""
    umask = os.umask(0)
    os.umask(umask)
    return umask


def write_integers(path: Union[str, Path], values: Sequence[int]) -> Path:
    """
    Write one integer per line.

    Uses write-to-temp-then-rename, so a failed write never leaves a
    partial output file behind.

    Args:
        path: Output file path (parent directory must exist)
        values: Integers to write

    Returns:
        Path of the written file
    """
    path = Path(path)

    temp_fd, temp_path = tempfile.mkstemp(
        suffix='.tmp',
        prefix=f'.{path.name}.',
        dir=str(path.parent),
    )

    n_written = 0

    try:
        with open(temp_fd, 'w', encoding='utf-8') as f:
            for value in values:
                f.write(f"{value}\n")
                n_written += 1

        os.chmod(temp_path, OUTPUT_FILE_MODE & ~_current_umask())
        shutil.move(temp_path, str(path))

    except Exception:
        if os.path.exists(temp_path):
            os.unlink(temp_path)
        raise

    logger.debug(f"Wrote {n_written} integers to {path}")
    return path


def discover_input_files(directory: Union[str, Path], suffix: str = '.txt') -> List[Path]:
    """
    List regular files in directory ending with suffix (non-recursive).

    Returns:
        Matching paths sorted by file name
    """
    directory = Path(directory)
    files = [
        p for p in directory.iterdir()
        if p.is_file() and p.name.endswith(suffix)
    ]
    return sorted(files, key=lambda p: p.name)


def format_sequence(values: Sequence[int]) -> str:
    """Format values as '[v1 v2 ...]'."""
    return '[' + ' '.join(str(v) for v in values) + ']'


def format_chunks(chunks: Sequence[Sequence[int]]) -> List[str]:
    """Format one 'Chunk i: [...]' line per chunk."""
    return [f"Chunk {i}: {format_sequence(c)}" for i, c in enumerate(chunks)]
