"""Shared helpers: logging, binary file I/O, LCP construction and sequence utilities."""

from __future__ import annotations

import contextlib
import inspect
import os
import struct
import sys
import time
from dataclasses import dataclass
from typing import BinaryIO, Iterator, Sequence

# Special symbols used by the prefix-free parsing construction.
DOLLAR = 2
END_OF_WORD = 1
END_OF_DICT = 0

THRBYTES = 5  # bytes per threshold entry
SSABYTES = 5  # bytes per suffix-array sample entry

_SIZE = struct.Struct("<Q")
_BYTE_ORDER_CHARS = "@=<>!"

_COMPLEMENT = {"A": "T", "T": "A", "G": "C", "C": "G"}


class FatalError(RuntimeError):
    """Raised when an unrecoverable error is reported."""


def now_time() -> str:
    """Return the current local time formatted as ``%X``."""
    return time.strftime("%X", time.localtime())


def format_message(*args) -> str:
    """Join the arguments with single spaces."""
    return " ".join(str(arg) for arg in args)


def info(*args) -> None:
    """Print an informational message on standard output."""
    print(f"[INFO] {now_time()} - Message: {format_message(*args)}", flush=True)


def _caller_location() -> tuple[str, int]:
    frame = inspect.currentframe()
    try:
        caller = frame.f_back.f_back if frame and frame.f_back else None
        if caller is None:
            return "<unknown>", 0
        return caller.f_code.co_filename, caller.f_lineno
    finally:
        del frame


def warning(*args) -> None:
    """Print a warning with the caller's file and line on standard output."""
    filename, line = _caller_location()
    print(
        f"[WARNING] {now_time()} - File: {filename}\n"
        f"Line: {line}\n"
        f"Message: {format_message(*args)}",
        flush=True,
    )


def fail(*args) -> None:
    """Report an error on standard error and raise :class:`FatalError`."""
    filename, line = _caller_location()
    message = format_message(*args)
    print(
        f"[ERROR] {now_time()} - File: {filename}\n"
        f"Line: {line}\n"
        f"Message: {message}",
        file=sys.stderr,
        flush=True,
    )
    raise FatalError(message)


def csv(*args) -> str:
    """Join the arguments as a comma separated line."""
    return ", ".join(str(arg) for arg in args)


@dataclass
class Timing:
    """Elapsed time of a :func:`timed` block, in seconds."""

    label: str
    elapsed: float = 0.0


@contextlib.contextmanager
def timed(label: str) -> Iterator[Timing]:
    """Measure the enclosed block and log its elapsed time."""
    timing = Timing(label)
    if label:
        info(label)
    start = time.perf_counter()
    try:
        yield timing
    finally:
        timing.elapsed = time.perf_counter() - start
        info("Elapsed time (s):", timing.elapsed)


def _struct(fmt: str) -> struct.Struct:
    if fmt and fmt[0] in _BYTE_ORDER_CHARS:
        return struct.Struct(fmt)
    return struct.Struct("<" + fmt)


def _unpack_all(layout: struct.Struct, data: bytes) -> list:
    single = len(layout.unpack(bytes(layout.size))) == 1
    if single:
        return [item[0] for item in layout.iter_unpack(data)]
    return list(layout.iter_unpack(data))


def _read_whole(filename) -> bytes:
    try:
        with open(filename, "rb") as handle:
            return handle.read()
    except OSError:
        fail(f"open() file {filename} failed")
        raise  # unreachable; fail always raises


def read_array(filename, fmt: str) -> list:
    """Read a file made of fixed-size records laid out as ``fmt``."""
    layout = _struct(fmt)
    data = _read_whole(filename)
    if len(data) % layout.size != 0:
        fail(f"invalid file {filename}")
    return _unpack_all(layout, data)


def read_bytes_file(filename) -> bytes:
    """Return the whole content of a file."""
    return _read_whole(filename)


def read_fasta_file(filename) -> bytes:
    """Concatenate the sequence lines of a FASTA file, skipping headers."""
    data = iter(_read_whole(filename))
    newline, header = ord("\n"), ord(">")
    sequence = bytearray()
    for c in data:
        if c == header:
            for c in data:
                if c == newline:
                    break
        else:
            sequence.append(c)
            for c in data:
                if c == newline:
                    break
                sequence.append(c)
    return bytes(sequence)


def write_array(filename, values: Sequence, fmt: str) -> int:
    """Write ``values`` as fixed-size records; return the number of bytes written."""
    layout = _struct(fmt)
    try:
        with open(filename, "wb") as handle:
            for value in values:
                packed = layout.pack(*value) if isinstance(value, tuple) else layout.pack(value)
                handle.write(packed)
    except OSError:
        fail(f"open() file {filename} failed")
    return layout.size * len(values)


def file_exists(name) -> bool:
    """Return True when ``name`` can be stat'ed."""
    try:
        os.stat(name)
    except OSError:
        return False
    return True


def lcp_array(s: Sequence, isa: Sequence[int], sa: Sequence[int]) -> list[int]:
    """Kasai et al. LCP array of ``s`` given its suffix array and its inverse."""
    n = len(sa)
    lcp = [0] * n
    size = len(s)
    l = 0
    for i in range(n):
        k = isa[i]
        if k > 0:
            j = sa[k - 1]
            while i + l < size and j + l < size and s[i + l] == s[j + l]:
                l += 1
            lcp[k] = l
            if l > 0:
                l -= 1
    return lcp


def lcp_array_cyclic_text(s: Sequence, isa: Sequence[int], sa: Sequence[int]) -> list[int]:
    """Kasai et al. LCP array treating ``s`` as a circular text."""
    n = len(sa)
    lcp = [0] * n
    l = 0
    for i in range(n):
        k = isa[i]
        if k > 0:
            j = sa[k - 1]
            while l <= n and s[(i + l) % n] == s[(j + l) % n]:
                l += 1
            lcp[k] = l
            if l > 0:
                l -= 1
    return lcp


def serialize_vector(values: Sequence, out: BinaryIO, fmt: str) -> int:
    """Write the length as a 64-bit integer followed by the packed values."""
    layout = _struct(fmt)
    out.write(_SIZE.pack(len(values)))
    for value in values:
        out.write(layout.pack(value))
    return _SIZE.size + layout.size * len(values)


def load_vector(stream: BinaryIO, fmt: str) -> list:
    """Read a vector written by :func:`serialize_vector`."""
    header = stream.read(_SIZE.size)
    if len(header) != _SIZE.size:
        raise EOFError("truncated vector length")
    (count,) = _SIZE.unpack(header)
    layout = _struct(fmt)
    payload = stream.read(count * layout.size)
    if len(payload) != count * layout.size:
        raise EOFError("truncated vector data")
    return _unpack_all(layout, payload)


def ilog2_32(v: int) -> int:
    """Floor of log2 of a 32-bit value; -1 for zero."""
    return (v & 0xFFFFFFFF).bit_length() - 1


def complement(c: str) -> str:
    """Complement of a nucleotide; other characters are returned unchanged."""
    return _COMPLEMENT.get(c, c)


def reverse_complement(seq: str) -> str:
    """Reverse complement of a nucleotide sequence."""
    return "".join(complement(c) for c in reversed(seq))


def print_blast_like(tseq: Sequence[int], qseq: Sequence[int], cigar: Sequence[int]) -> str:
    """Render an alignment in three lines: target, match bars and query."""
    target: list[str] = []
    bars: list[str] = []
    query: list[str] = []
    q_off = t_off = 0
    for entry in cigar:
        op, length = entry & 0xF, entry >> 4
        if op in (0, 7, 8):
            for j in range(length):
                q, t = qseq[q_off + j], tseq[t_off + j]
                bars.append("*" if q != t else "|")
                target.append(str(t))
                query.append(str(q))
            q_off += length
            t_off += length
        elif op == 1:
            for j in range(length):
                target.append(" ")
                bars.append(" ")
                query.append(str(qseq[q_off + j]))
            q_off += length
        elif op in (2, 3):
            for j in range(length):
                query.append(" ")
                bars.append(" ")
                target.append(str(tseq[t_off + j]))
            t_off += length
        else:
            raise ValueError(f"unsupported CIGAR operation {op}")
    return "".join(target) + "\n" + "".join(bars) + "\n" + "".join(query) + "\n"