import pytest

from memkit.mems import Mate, Mem, Statistics


@pytest.mark.parametrize(
    "mate, expected",
    [
        (Mate.MATE_1, 0),
        (Mate.MATE_2, 1),
        (Mate.FORWARD, 0),
        (Mate.REVERSE_COMPLEMENT, 2),
        (Mate.MATE_2 | Mate.REVERSE_COMPLEMENT, 3),
    ],
)
def test_mem_stores_mate_flag(mate, expected):
    mem = Mem(4, 12, 1, mate, 9)
    assert mem.mate == expected
    assert mem.rpos == 9


def test_mem_short_constructor_defaults():
    mem = Mem(10, 25, 3)
    assert (mem.pos, mem.length, mem.idx) == (10, 25, 3)
    assert mem.mate == 0
    assert mem.rpos == 0
    assert mem.occs == []
    assert mem.total_occ == 0
    assert mem.num_filtered == 0
    assert mem.count_dict == {}


def test_mem_full_constructor():
    mem = Mem(10, 25, 3, Mate.MATE_2 | Mate.REVERSE_COMPLEMENT, 7)
    assert mem.mate == 3
    assert mem.rpos == 7


def test_mem_lists_are_independent():
    a = Mem(0, 1, 0)
    b = Mem(0, 1, 0)
    a.occs.append(5)
    a.count_dict["chr1"] = 2
    assert b.occs == []
    assert b.count_dict == {}


def test_statistics_iadd():
    total = Statistics(1, 2, 3, 4)
    total += Statistics(10, 20, 30, 40)
    assert total == Statistics(11, 22, 33, 44)


def test_statistics_add_leaves_operands():
    a = Statistics(1, 1, 1, 1)
    b = Statistics(2, 0, 0, 5)
    c = a + b
    assert c == Statistics(3, 1, 1, 6)
    assert a == Statistics(1, 1, 1, 1)


def test_statistics_to_string():
    stats = Statistics(5, 4, 3, 2)
    assert stats.to_string() == (
        "\n\t       Processed reads: 5"
        "\n\t         Aligned reads: 4"
        "\n\t          Orphan reads: 3"
        "\n\tOrphan recovered reads: 2"
    )


def test_statistics_report(capsys):
    Statistics(7, 6, 5, 4).report()
    out = capsys.readouterr().out
    lines = out.strip().splitlines()
    assert len(lines) == 5
    assert "Alignment statistics" in lines[0]
    assert lines[1].endswith("Processed reads:  7")
    assert lines[4].endswith("Orphan recovered reads:  4")