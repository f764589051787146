"""
Tests for integer sequence sources and sinks.
"""

import os
import stat

import numpy as np
import pytest

from chunksort.utils.integer_io import (
    InputValidationError,
    IntegerParseError,
    discover_input_files,
    format_chunks,
    format_sequence,
    generate_random_integers,
    load_integers,
    read_integers,
    write_integers,
)


class TestRandomGeneration:
    """Test random sequence generation."""

    def test_count_and_range(self, rng):
        values = generate_random_integers(500, rng)

        assert len(values) == 500
        assert min(values) >= 0
        assert max(values) <= 999

    def test_same_seed_same_values(self):
        first = generate_random_integers(50, np.random.default_rng(7))
        second = generate_random_integers(50, np.random.default_rng(7))

        assert first == second

    def test_generator_is_caller_owned(self):
        rng = np.random.default_rng(7)
        first = generate_random_integers(20, rng)
        second = generate_random_integers(20, rng)

        # Draws advance the caller's generator
        assert first != second

    def test_range_endpoints_inclusive(self, rng):
        values = generate_random_integers(20000, rng)

        assert set(values) == set(range(1000))

    @pytest.mark.parametrize('count', [-1, 0, 9])
    def test_too_few(self, rng, count):
        with pytest.raises(InputValidationError, match="N must be >= 10"):
            generate_random_integers(count, rng)

    def test_minimum_accepted(self, rng):
        assert len(generate_random_integers(10, rng)) == 10


class TestReadIntegers:
    """Test newline-delimited integer parsing."""

    def test_read_with_blank_lines_and_whitespace(self, tmp_path):
        path = tmp_path / 'values.txt'
        path.write_text("  5\n\n-3\n\t+7  \n   \n0\n")

        assert read_integers(path) == [5, -3, 7, 0]

    def test_no_trailing_newline(self, tmp_path):
        path = tmp_path / 'values.txt'
        path.write_text("1\n2\n3")

        assert read_integers(path) == [1, 2, 3]

    def test_empty_file(self, tmp_path):
        path = tmp_path / 'empty.txt'
        path.write_text("")

        assert read_integers(path) == []

    @pytest.mark.parametrize('bad_line', ['abc', '1.5', '12abc', '1 2', '1_000', '--4', '0x10'])
    def test_parse_error_reports_line_number(self, tmp_path, bad_line):
        path = tmp_path / 'values.txt'
        path.write_text(f"1\n\n2\n{bad_line}\n5\n")

        with pytest.raises(IntegerParseError) as exc_info:
            read_integers(path)

        assert exc_info.value.line_number == 4
        assert "line 4" in str(exc_info.value)

    def test_out_of_int64_range(self, tmp_path):
        path = tmp_path / 'values.txt'
        path.write_text("1\n9223372036854775807\n9223372036854775808\n")

        with pytest.raises(IntegerParseError) as exc_info:
            read_integers(path)

        assert exc_info.value.line_number == 3

    def test_undecodable_bytes_are_parse_errors(self, tmp_path):
        path = tmp_path / 'values.txt'
        path.write_bytes(b"1\n2\n\xff\xfe\n")

        with pytest.raises(IntegerParseError) as exc_info:
            read_integers(path)

        assert exc_info.value.line_number == 3

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_integers(tmp_path / 'missing.txt')

    def test_load_requires_min_count(self, tmp_path):
        path = tmp_path / 'values.txt'
        path.write_text("\n".join(str(i) for i in range(9)) + "\n")

        with pytest.raises(InputValidationError, match="at least 10"):
            load_integers(path)

    def test_load_accepts_ten(self, tmp_path):
        path = tmp_path / 'values.txt'
        path.write_text("\n".join(str(i) for i in range(10)) + "\n")

        assert load_integers(path) == list(range(10))


class TestWriteIntegers:
    """Test writing integer files."""

    def test_write_one_per_line(self, tmp_path):
        path = tmp_path / 'out.txt'

        written = write_integers(path, [-2, 0, 3])

        assert written == path
        assert path.read_text() == "-2\n0\n3\n"

    def test_overwrites_existing(self, tmp_path):
        path = tmp_path / 'out.txt'
        path.write_text("old\n")

        write_integers(path, [1])

        assert path.read_text() == "1\n"

    def test_written_file_reads_back(self, tmp_path):
        path = tmp_path / 'out.txt'
        write_integers(path, [3, 1, 2])

        assert read_integers(path) == [3, 1, 2]

    def test_failed_write_leaves_no_files(self, tmp_path):
        path = tmp_path / 'out.txt'

        def values():
            yield 1
            raise RuntimeError("source failed")

        with pytest.raises(RuntimeError):
            write_integers(path, values())

        assert list(tmp_path.iterdir()) == []

    def test_missing_directory(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            write_integers(tmp_path / 'nope' / 'out.txt', [1])

    @pytest.mark.parametrize('umask, expected_mode', [(0o022, 0o644), (0o077, 0o600), (0o002, 0o664)])
    def test_file_mode_follows_umask(self, tmp_path, umask, expected_mode):
        path = tmp_path / 'out.txt'

        old_umask = os.umask(umask)
        try:
            write_integers(path, [1, 2])
        finally:
            os.umask(old_umask)

        assert stat.S_IMODE(path.stat().st_mode) == expected_mode


class TestDiscoverInputFiles:
    """Test batch input discovery."""

    def test_suffix_filter_and_order(self, input_dir):
        files = discover_input_files(input_dir)

        assert [p.name for p in files] == ['a.txt', 'b.txt', 'bad.txt', 'short.txt']

    def test_custom_suffix(self, input_dir):
        files = discover_input_files(input_dir, suffix='.md')

        assert [p.name for p in files] == ['notes.md']

    def test_non_recursive(self, input_dir):
        sub = input_dir / 'sub'
        sub.mkdir()
        (sub / 'deep.txt').write_text("1\n")

        assert 'deep.txt' not in [p.name for p in discover_input_files(input_dir)]


class TestFormatting:
    """Test console formatting."""

    def test_format_sequence(self):
        assert format_sequence([1, -2, 3]) == "[1 -2 3]"
        assert format_sequence([]) == "[]"

    def test_format_chunks(self):
        assert format_chunks([[3, 5], [1]]) == ["Chunk 0: [3 5]", "Chunk 1: [1]"]
