"""Phi and Phi-inverse functions that also report the LCP with the neighbouring suffix."""

from __future__ import annotations

from typing import Sequence

from memkit.common import SSABYTES, fail, read_bytes_file
from memkit.samples import PhiIndex


def read_slcp(filename) -> list[int]:
    """Read the sampled LCP values of a ``.slcp`` file (5-byte little-endian records)."""
    data = read_bytes_file(filename)
    if len(data) % SSABYTES != 0:
        fail(f"invalid file {filename}")
    view = memoryview(data)
    return [
        int.from_bytes(view[offset : offset + SSABYTES], "little")
        for offset in range(0, len(data), SSABYTES)
    ]


def _delta(j: int, i: int) -> int:
    return i - j if j < i else i + 1


def phi_lcp(
    pred: PhiIndex,
    samples_last: Sequence[int],
    slcp: Sequence[int],
    n: int,
    i: int,
) -> tuple[int, int]:
    """Return the text position preceding ``i`` in suffix-array order and their LCP."""
    jr = pred.predecessor_rank_circular(i)
    j = pred.select(jr)
    run = pred.to_run[jr]
    if run == 0:
        raise ValueError(f"Phi is undefined for the first suffix ({i})")
    idx = run - 1
    if idx >= len(samples_last) or idx + 1 >= len(slcp):
        raise IndexError(f"run {run} has no sample")
    delta = _delta(j, i)
    return (samples_last[idx] + delta) % n, slcp[idx + 1] - delta + 1


def phi_inv_lcp(
    pred_start: PhiIndex,
    samples_start: Sequence[int],
    slcp: Sequence[int],
    n: int,
    i: int,
) -> tuple[int, int]:
    """Return the text position following ``i`` in suffix-array order and their LCP."""
    jr = pred_start.predecessor_rank_circular(i)
    j = pred_start.select(jr)
    run = pred_start.to_run[jr]
    if run + 1 >= len(samples_start):
        raise ValueError(f"Phi inverse is undefined for the last suffix ({i})")
    if run + 1 >= len(slcp):
        raise IndexError(f"run {run + 1} has no LCP sample")
    delta = _delta(j, i)
    return (samples_start[run + 1] + delta) % n, slcp[run + 1] - delta + 1


def lcp_ms_file_extension(thresholds_extension: str) -> str:
    """File extension of a serialized matching-statistics index with sampled LCPs."""
    return thresholds_extension + ".full.lcp.ms"