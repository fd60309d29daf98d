"""Exact pattern matching engines and their benchmarking harness."""

__version__ = "0.1.0"
