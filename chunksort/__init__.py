"""Chunk sort - sqrt(n) partitioning, threaded chunk sorts and k-way merge."""
__version__ = '1.0.0'
