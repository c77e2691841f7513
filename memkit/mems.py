"""MEM records and alignment statistics."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntFlag

from memkit.common import info


class Mate(IntFlag):
    """Origin of a MEM: which mate and which strand it was found on."""

    MATE_1 = 0
    MATE_2 = 1
    FORWARD = 0
    REVERSE_COMPLEMENT = 2


@dataclass
class Mem:
    """A maximal exact match between a read and the reference.

    ``rpos`` is the read position used for chaining: for a MEM on the forward
    strand it is the last character in the read, for one on the reverse
    strand it is the first.
    """

    pos: int
    length: int
    idx: int
    mate: int = Mate.MATE_1
    rpos: int = 0
    occs: list[int] = field(default_factory=list)
    total_occ: int = 0
    num_filtered: int = 0
    count_dict: dict[str, int] = field(default_factory=dict)


@dataclass
class Statistics:
    """Counters collected while aligning reads."""

    processed_reads: int = 0
    aligned_reads: int = 0
    orphan_reads: int = 0
    orphan_recovered_reads: int = 0

    def __iadd__(self, other: "Statistics") -> "Statistics":
        if not isinstance(other, Statistics):
            return NotImplemented
        self.processed_reads += other.processed_reads
        self.aligned_reads += other.aligned_reads
        self.orphan_reads += other.orphan_reads
        self.orphan_recovered_reads += other.orphan_recovered_reads
        return self

    def __add__(self, other: "Statistics") -> "Statistics":
        if not isinstance(other, Statistics):
            return NotImplemented
        total = Statistics(
            self.processed_reads,
            self.aligned_reads,
            self.orphan_reads,
            self.orphan_recovered_reads,
        )
        total += other
        return total

    def to_string(self) -> str:
        """Return the counters as tab-indented lines."""
        return (
            f"\n\t       Processed reads: {self.processed_reads}"
            f"\n\t         Aligned reads: {self.aligned_reads}"
            f"\n\t          Orphan reads: {self.orphan_reads}"
            f"\n\tOrphan recovered reads: {self.orphan_recovered_reads}"
        )

    def report(self) -> None:
        """Log the counters."""
        info("   Alignment statistics ")
        info("       Processed reads: ", self.processed_reads)
        info("         Aligned reads: ", self.aligned_reads)
        info("          Orphan reads: ", self.orphan_reads)
        info("Orphan recovered reads: ", self.orphan_recovered_reads)