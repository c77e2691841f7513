"""Computing MEMs from matching-statistics pointers and writing them out."""

from __future__ import annotations

import os
import struct
from typing import BinaryIO, Callable, Iterator, Sequence

from memkit.common import fail

_SIZE = struct.Struct("<Q")
_PAIR = struct.Struct("<QQ")

Mems = list[tuple[int, int]]


def compute_mems(
    read: Sequence,
    pointers: Sequence[int],
    char_at: Callable[[int], object],
    n: int,
) -> Mems:
    """Return the ``(read position, length)`` pairs of the maximal exact matches.

    ``pointers`` holds one matching-statistics pointer per read position,
    ``char_at`` gives random access to the reference of length ``n``.
    A match is extended only when its pointer does not simply continue the
    previous one; otherwise the previous length, shortened by one, is kept.
    """
    read_len = len(read)
    mems: Mems = []
    previous_length = 0
    previous_pos: int | None = None
    l = 0
    for i, pos in enumerate(pointers):
        continues = previous_pos is not None and pos == previous_pos + 1
        if not continues:
            while i + l < read_len and pos + l < n and read[i + l] == char_at(pos + l):
                l += 1
        length = l
        l = l - 1 if l > 0 else 0
        if i == 0 or length >= previous_length:
            mems.append((i, length))
        previous_length = length
        previous_pos = pos
    return mems


def write_mem_record(out: BinaryIO, name, mems: Sequence[tuple[int, int]]) -> int:
    """Write one read's MEMs in the binary temporary format.

    The record is the name length, the name bytes, the number of MEMs and
    then the MEMs as pairs of unsigned 64-bit integers. Returns the number
    of bytes written.
    """
    raw_name = name.encode("latin-1") if isinstance(name, str) else bytes(name)
    payload = bytearray(_SIZE.pack(len(raw_name)))
    payload += raw_name
    payload += _SIZE.pack(len(mems))
    for position, length in mems:
        payload += _PAIR.pack(position, length)
    out.write(payload)
    return len(payload)


def _read_exact(stream: BinaryIO, size: int, what: str) -> bytes:
    data = stream.read(size)
    if len(data) != size:
        fail(f"fread() {what} failed")
    return data


def read_mem_records(stream: BinaryIO) -> Iterator[tuple[str, Mems]]:
    """Yield ``(name, mems)`` for every record written by :func:`write_mem_record`."""
    while True:
        header = stream.read(_SIZE.size)
        if len(header) < _SIZE.size:
            return
        (name_length,) = _SIZE.unpack(header)
        name = _read_exact(stream, name_length, "read name").decode("latin-1")
        (count,) = _SIZE.unpack(_read_exact(stream, _SIZE.size, "MEM count"))
        data = _read_exact(stream, count * _PAIR.size, "MEMs")
        yield name, [tuple(pair) for pair in _PAIR.iter_unpack(data)]


def format_mem_line(mems: Sequence[tuple[int, int]]) -> str:
    """Render MEMs as ``(pos,len) `` items on a single line, without newline."""
    return "".join(f"({position},{length}) " for position, length in mems)


def temp_filename(prefix: str, index: int) -> str:
    """Name of the temporary MEM file written by worker ``index``."""
    return f"{prefix}_{index}.mems.tmp.out"


def merge_mem_files(prefix: str, n_parts: int) -> int:
    """Merge the temporary files into ``prefix.mems`` and delete them.

    Each read becomes a ``>name`` line followed by its MEMs line.
    Returns the number of reads written.
    """
    out_name = f"{prefix}.mems"
    try:
        out = open(out_name, "w", encoding="latin-1", newline="\n")
    except OSError:
        fail(f"open() file {out_name} failed")
        raise  # unreachable; fail always raises

    n_seq = 0
    with out:
        for index in range(n_parts):
            tmp_name = temp_filename(prefix, index)
            try:
                handle = open(tmp_name, "rb")
            except OSError:
                fail(f"open() file {tmp_name} failed")
                raise  # unreachable; fail always raises
            with handle:
                for name, mems in read_mem_records(handle):
                    out.write(f">{name}\n")
                    out.write(format_mem_line(mems) + "\n")
                    n_seq += 1
            try:
                os.remove(tmp_name)
            except OSError:
                fail(f"remove() file {tmp_name} failed")
    return n_seq