"""Maximal exact matches, suffix-array sample files and FASTQ splitting for read alignment."""

__version__ = "0.1.0"

__all__ = ["common", "mems", "fastq", "mem_output", "samples", "lcp_samples"]