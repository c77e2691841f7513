"""Suffix-array samples and the Phi / Phi-inverse functions of the r-index."""

from __future__ import annotations

from bisect import bisect_left
from dataclasses import dataclass, field
from typing import Iterable, Iterator

from memkit.common import SSABYTES, fail, read_bytes_file

TERMINATOR = 1
ALPHABET_SIZE = 256
_PAIR_BYTES = 2 * SSABYTES


@dataclass
class PhiIndex:
    """Sorted text positions of sampled runs and the BWT run of each one.

    ``positions`` is in increasing order; ``to_run[k]`` is the BWT run
    (0 to r-1) whose sample is ``positions[k]``. ``size`` is the text length.
    """

    positions: list[int]
    to_run: list[int]
    size: int
    _count: int = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if len(self.positions) != len(self.to_run):
            raise ValueError("positions and to_run must have the same length")
        if any(a > b for a, b in zip(self.positions, self.positions[1:])):
            raise ValueError("positions must be sorted")
        self._count = len(self.positions)

    def __len__(self) -> int:
        return self._count

    def rank(self, i: int) -> int:
        """Number of sampled positions strictly smaller than ``i``."""
        return bisect_left(self.positions, i)

    def predecessor_rank_circular(self, i: int) -> int:
        """Rank of the closest sampled position before ``i``, wrapping to the last one."""
        if not self._count:
            raise ValueError("empty predecessor structure")
        rank = self.rank(i)
        return self._count - 1 if rank == 0 else rank - 1

    def select(self, rank: int) -> int:
        """Sampled position of the given rank."""
        if not 0 <= rank < self._count:
            raise IndexError(f"rank {rank} out of range")
        return self.positions[rank]


def _read_pairs(filename) -> Iterator[tuple[int, int]]:
    data = read_bytes_file(filename)
    if len(data) % SSABYTES != 0:
        fail(f"invalid file {filename}")
    usable = len(data) - len(data) % _PAIR_BYTES
    view = memoryview(data)
    for offset in range(0, usable, _PAIR_BYTES):
        left = int.from_bytes(view[offset : offset + SSABYTES], "little")
        right = int.from_bytes(view[offset + SSABYTES : offset + _PAIR_BYTES], "little")
        yield left, right


def _sample_value(right: int, n: int) -> int:
    return right - 1 if right else n - 1


def read_samples(filename, n: int) -> list[int]:
    """Read the SA samples of a ``.ssa`` or ``.esa`` file, one per BWT run."""
    return [_sample_value(right, n) for _, right in _read_pairs(filename)]


def build_phi(filename, n: int) -> PhiIndex:
    """Build the predecessor structure over the samples of ``filename``."""
    samples = []
    for run, (_, right) in enumerate(_read_pairs(filename)):
        value = _sample_value(right, n)
        if value >= n:
            raise ValueError(f"sample {value} exceeds text length {n}")
        samples.append((value, run))
    samples.sort()
    return PhiIndex([value for value, _ in samples], [run for _, run in samples], n)


def _run_lengths(lengths) -> Iterable[int]:
    if isinstance(lengths, (bytes, bytearray, memoryview)):
        raw = bytes(lengths)
        return (
            int.from_bytes(raw[offset : offset + SSABYTES], "little")
            for offset in range(0, len(raw) - len(raw) % SSABYTES, SSABYTES)
        )
    return lengths


def build_f(heads: bytes, lengths, terminator: int = TERMINATOR) -> tuple[list[int], int]:
    """Build the F column from the run heads and run lengths of a BWT.

    ``lengths`` is either a sequence of integers or the raw content of a
    lengths file (5-byte little-endian records). Symbols not greater than
    ``terminator`` count as the terminator. Returns ``(F, terminator_position)``
    where ``F[c]`` is the number of symbols smaller than ``c`` and
    ``terminator_position`` is the run holding the terminator.
    """
    counts = [0] * ALPHABET_SIZE
    terminator_position = 0
    for run, (head, length) in enumerate(zip(heads, _run_lengths(lengths))):
        if head > terminator:
            counts[head] += length
        else:
            counts[terminator] += length
            terminator_position = run
    f_column = [0] * ALPHABET_SIZE
    total = 0
    for c in range(1, ALPHABET_SIZE):
        total += counts[c - 1]
        f_column[c] = total
    return f_column, terminator_position


def _delta(j: int, i: int) -> int:
    return i - j if j < i else i + 1


def phi(pred: PhiIndex, samples_last: list[int], n: int, i: int) -> int:
    """Text position preceding ``i`` in suffix-array order."""
    jr = pred.predecessor_rank_circular(i)
    j = pred.select(jr)
    run = pred.to_run[jr]
    if run == 0:
        raise ValueError(f"Phi is undefined for the first suffix ({i})")
    return (samples_last[run - 1] + _delta(j, i)) % n


def phi_inv(pred_start: PhiIndex, samples_start: list[int], n: int, i: int) -> int:
    """Text position following ``i`` in suffix-array order."""
    jr = pred_start.predecessor_rank_circular(i)
    j = pred_start.select(jr)
    run = pred_start.to_run[jr]
    if run + 1 >= len(samples_start):
        raise ValueError(f"Phi inverse is undefined for the last suffix ({i})")
    return (samples_start[run + 1] + _delta(j, i)) % n


def ms_file_extension(thresholds_extension: str) -> str:
    """File extension of a serialized matching-statistics index."""
    return thresholds_extension + ".full.ms"