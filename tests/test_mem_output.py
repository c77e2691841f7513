import io
import struct

import pytest

from memkit.common import FatalError
from memkit.mem_output import (
    compute_mems,
    format_mem_line,
    merge_mem_files,
    read_mem_records,
    temp_filename,
    write_mem_record,
)


def test_compute_mems_exact_match_consecutive_pointers():
    ref = "ACGT"
    mems = compute_mems("ACGT", [0, 1, 2, 3], ref.__getitem__, len(ref))
    assert mems == [(0, len(ref))]


def test_compute_mems_no_match_keeps_every_position():
    ref = "CCCC"
    mems = compute_mems("AAAA", [0, 0, 0, 0], ref.__getitem__, len(ref))
    assert mems == [(0, 0), (1, 0), (2, 0), (3, 0)]


def test_compute_mems_bounded_by_reference_length():
    ref = "ACGTACGT"
    read = "ACGTACGT"
    mems = compute_mems(read, [4, 0, 0, 0, 0, 0, 0, 0], ref.__getitem__, len(ref))
    assert mems[0][0] == 0
    assert mems[0][1] == len(ref) - 4
    for position, length in mems:
        assert length <= len(read) - position


def test_compute_mems_empty_read():
    assert compute_mems("", [], lambda i: "A", 10) == []


def test_write_mem_record_wire_bytes():
    buf = io.BytesIO()
    written = write_mem_record(buf, "r", [(1, 2)])
    expected = struct.pack("<Q", 1) + b"r" + struct.pack("<Q", 1) + struct.pack("<QQ", 1, 2)
    assert buf.getvalue() == expected
    assert written == len(expected)


def test_records_round_trip():
    buf = io.BytesIO()
    records = [("read1", [(0, 30), (5, 40)]), ("read2", []), ("read3", [(7, 25)])]
    for name, mems in records:
        write_mem_record(buf, name, mems)
    buf.seek(0)
    assert list(read_mem_records(buf)) == records


def test_truncated_record_raises():
    buf = io.BytesIO()
    write_mem_record(buf, "read1", [(0, 30)])
    data = buf.getvalue()[:-4]
    with pytest.raises(FatalError):
        list(read_mem_records(io.BytesIO(data)))


def test_partial_header_ends_reading():
    buf = io.BytesIO()
    write_mem_record(buf, "x", [(1, 1)])
    buf.write(b"\x01\x02")
    buf.seek(0)
    assert list(read_mem_records(buf)) == [("x", [(1, 1)])]


def test_format_mem_line():
    assert format_mem_line([(0, 5), (3, 2)]) == "(0,5) (3,2) "
    assert format_mem_line([]) == ""


def test_temp_filename():
    assert temp_filename("out", 0) == "out_0.mems.tmp.out"


def test_merge_mem_files(tmp_path):
    prefix = str(tmp_path / "sample")
    with open(temp_filename(prefix, 0), "wb") as handle:
        write_mem_record(handle, "r1", [(0, 5)])
    with open(temp_filename(prefix, 1), "wb") as handle:
        write_mem_record(handle, "r2", [(1, 3), (4, 6)])
        write_mem_record(handle, "r3", [])

    count = merge_mem_files(prefix, 2)

    assert count == 3
    content = (tmp_path / "sample.mems").read_text(encoding="latin-1")
    assert content == ">r1\n(0,5) \n>r2\n(1,3) (4,6) \n>r3\n\n"
    assert not (tmp_path / "sample_0.mems.tmp.out").exists()
    assert not (tmp_path / "sample_1.mems.tmp.out").exists()


def test_merge_missing_temp_file_raises(tmp_path):
    prefix = str(tmp_path / "missing")
    with pytest.raises(FatalError):
        merge_mem_files(prefix, 1)