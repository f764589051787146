"""
Pytest configuration and fixtures for chunk sort tests.
"""
import numpy as np
import pytest
from pathlib import Path

# Add project root to path
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest.fixture
def rng():
    """Seeded random generator."""
    return np.random.default_rng(42)


@pytest.fixture
def scenario_values():
    """Ten distinct digits in scrambled order."""
    return [5, 3, 8, 1, 9, 2, 7, 4, 6, 0]


@pytest.fixture
def input_dir(tmp_path):
    """Directory with a mix of valid, invalid and short integer files."""
    data_dir = tmp_path / 'data'
    data_dir.mkdir()

    (data_dir / 'a.txt').write_text('\n'.join(str(v) for v in [9, -3, 7, 7, 0, 12, 5, 1, 2, 8]) + '\n')
    (data_dir / 'b.txt').write_text('\n'.join(str(v) for v in range(20, 0, -1)) + '\n')
    (data_dir / 'bad.txt').write_text('1\n2\nthree\n4\n5\n6\n7\n8\n9\n10\n')
    (data_dir / 'short.txt').write_text('3\n1\n2\n')
    (data_dir / 'notes.md').write_text('10\n9\n8\n7\n6\n5\n4\n3\n2\n1\n')
    (data_dir / 'nested.txt').mkdir()

    return data_dir
