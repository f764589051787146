"""Utilities package - helper functions and tools."""
from .integer_io import (
    InputValidationError,
    IntegerParseError,
    generate_random_integers,
    read_integers,
    load_integers,
    write_integers,
    discover_input_files,
)
from .batch_sorter import BatchSorter, BatchResult, SkippedFile

__all__ = [
    'InputValidationError',
    'IntegerParseError',
    'generate_random_integers',
    'read_integers',
    'load_integers',
    'write_integers',
    'discover_input_files',
    'BatchSorter',
    'BatchResult',
    'SkippedFile',
]
