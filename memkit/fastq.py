"""Reading FASTA/FASTQ files and splitting them for parallel processing."""

from __future__ import annotations

import gzip
import os
import shutil
from dataclasses import dataclass
from typing import BinaryIO, Iterator

from memkit.common import fail

_BUFFER_SIZE = 16384
_GZIP_MAGIC = b"\x1f\x8b"


@dataclass
class SequenceRecord:
    """One FASTA or FASTQ record; ``qual`` is empty for FASTA."""

    name: str
    comment: str = ""
    seq: str = ""
    qual: str = ""


def is_gzipped(filename) -> bool:
    """Return True when the file starts with the gzip magic bytes."""
    try:
        with open(filename, "rb") as handle:
            head = handle.read(2)
    except OSError:
        fail(f"Opening file {filename}")
        raise  # unreachable; fail always raises
    return head == _GZIP_MAGIC


def file_size(filename) -> int:
    """Size in bytes of an uncompressed file."""
    if is_gzipped(filename):
        raise ValueError("The input is gzipped!")
    return os.path.getsize(filename)


def next_record_start(stream: BinaryIO) -> int:
    """Return the offset of the first FASTQ record at or after the stream position."""
    if stream.tell() == 0 and stream.read(1) == b"@":
        return 0

    stream.seek(max(stream.tell() - 1, 0))

    window: list[tuple[bytes, int]] = []
    for _ in range(4):
        while True:
            c = stream.read(1)
            if not c or c == b"\n":
                break
        if not c:
            return stream.tell()
        c = stream.read(1)
        if not c:
            return stream.tell()
        window.append((c, stream.tell() - 1))

    for i in range(2):
        if window[i][0] == b"@" and window[i + 2][0] == b"+":
            return window[i][1]
        if window[i][0] == b"+" and window[i + 2][0] == b"@":
            return window[i + 2][1]

    return stream.tell()


def split_fastq(filename, n_parts: int) -> list[int]:
    """Split an uncompressed FASTQ file into ``n_parts`` record-aligned ranges.

    Returns ``n_parts + 1`` offsets; part ``i`` spans ``starts[i]:starts[i+1]``.
    """
    if n_parts < 1:
        raise ValueError("n_parts must be at least 1")
    size = file_size(filename)
    starts = []
    with open(filename, "rb") as handle:
        for i in range(n_parts):
            handle.seek(size * i // n_parts)
            starts.append(next_record_start(handle))
    starts.append(size)
    return starts


def append_file(filename, out: BinaryIO) -> None:
    """Copy the whole content of ``filename`` to the binary stream ``out``."""
    try:
        with open(filename, "rb") as handle:
            shutil.copyfileobj(handle, out, _BUFFER_SIZE)
    except OSError:
        fail(f"open() file {filename} failed")


class _Lines:
    """Line reader that tracks the offset of the next unread byte."""

    def __init__(self, handle: BinaryIO, offset: int) -> None:
        self._handle = handle
        self._pending: bytes | None = None
        self.offset = offset

    def readline(self) -> bytes:
        if self._pending is not None:
            line, self._pending = self._pending, None
        else:
            line = self._handle.readline()
        self.offset += len(line)
        return line

    def unread(self, line: bytes) -> None:
        self._pending = line
        self.offset -= len(line)


def _strip(line: bytes) -> bytes:
    return line.rstrip(b"\r\n")


def _read_record(lines: _Lines) -> SequenceRecord | None:
    while True:
        line = lines.readline()
        if not line:
            return None
        if line[:1] in (b">", b"@"):
            break

    parts = _strip(line[1:]).split(None, 1)
    name = parts[0] if parts else b""
    comment = parts[1] if len(parts) > 1 else b""

    seq = bytearray()
    is_fastq = False
    while True:
        line = lines.readline()
        if not line:
            break
        head = line[:1]
        if head == b"+":
            is_fastq = True
            break
        if head in (b">", b"@"):
            lines.unread(line)
            break
        seq += _strip(line)

    qual = bytearray()
    if is_fastq:
        while True:
            line = lines.readline()
            if not line:
                break
            qual += _strip(line)
            if len(qual) >= len(seq):
                break
        if len(qual) != len(seq):
            raise ValueError(f"quality length differs from sequence length in record {name.decode('latin-1')}")

    return SequenceRecord(
        name.decode("latin-1"),
        comment.decode("latin-1"),
        seq.decode("latin-1"),
        qual.decode("latin-1"),
    )


def read_sequences(path, start: int = 0, end: int | None = None) -> Iterator[SequenceRecord]:
    """Yield the records of a (possibly gzipped) FASTA/FASTQ file.

    Reading begins at byte ``start`` of the uncompressed content and stops
    before the first record that begins at or after ``end``.
    """
    opener = gzip.open if is_gzipped(path) else open
    with opener(path, "rb") as handle:
        if start:
            handle.seek(start)
        lines = _Lines(handle, start)
        while end is None or lines.offset < end:
            record = _read_record(lines)
            if record is None:
                break
            yield record