# memkit

memkit is a small library for the data files and read handling around
matching-statistics read alignment. With it you can:

- compute maximal exact matches (MEMs) of a read from its matching-statistics
  pointers and random access to the reference;
- write MEM records in a binary per-part format, read them back, and merge
  the parts into a plain `.mems` text file;
- split an uncompressed FASTQ file into byte ranges that start on record
  boundaries, and read FASTA/FASTQ records (plain or gzipped) from such a range;
- read `.ssa` / `.esa` suffix-array sample files and `.slcp` files
  (5-byte little-endian integers), build the Phi and Phi-inverse predecessor
  structures, and step through the suffix array with them, with or without
  LCP values;
- build the F column of a BWT from its run heads and run lengths;
- use the shared helpers: reverse complement, Kasai LCP arrays, FASTA reading,
  fixed-size binary arrays, BLAST-like alignment printing and timestamped log
  messages.

It depends only on the standard library and supports Python 3.10 and later.

## Modules

| Module | Contents |
| --- | --- |
| `memkit.common` | `info`, `warning`, `fail`, `FatalError`, `format_message`, `now_time`, `csv`, `timed`, `read_array`, `write_array`, `read_bytes_file`, `read_fasta_file`, `file_exists`, `serialize_vector`, `load_vector`, `lcp_array`, `lcp_array_cyclic_text`, `complement`, `reverse_complement`, `ilog2_32`, `print_blast_like` |
| `memkit.mems` | `Mem`, `Mate` and `Statistics` (supports `+` and `+=`, `to_string()`, `report()`) |
| `memkit.fastq` | `SequenceRecord`, `is_gzipped`, `file_size`, `next_record_start`, `split_fastq`, `append_file`, `read_sequences` |
| `memkit.mem_output` | `compute_mems`, `write_mem_record`, `read_mem_records`, `format_mem_line`, `temp_filename`, `merge_mem_files` |
| `memkit.samples` | `PhiIndex` (`rank`, `predecessor_rank_circular`, `select`), `read_samples`, `build_phi`, `build_f`, `phi`, `phi_inv`, `ms_file_extension` |
| `memkit.lcp_samples` | `read_slcp`, `phi_lcp`, `phi_inv_lcp`, `lcp_ms_file_extension` |

## Examples

Reverse complement of a read:

```python
from memkit.common import reverse_complement

reverse_complement("AACG")  # "CGTT"
```

Reading a FASTQ file in independent parts:

```python
from memkit.fastq import split_fastq, read_sequences

starts = split_fastq("reads.fq", 4)
for start, end in zip(starts, starts[1:]):
    for record in read_sequences("reads.fq", start, end):
        print(record.name, len(record.seq))
```

`split_fastq` returns `n_parts + 1` offsets; it raises `ValueError` for a
gzipped file.

Computing MEMs for a read and writing the plain output:

```python
from memkit.mem_output import compute_mems, format_mem_line

mems = compute_mems(read, pointers, reference.__getitem__, len(reference))
print(format_mem_line(mems))
```

Here `pointers` are the read's matching-statistics pointers, one per read
position, and the third argument returns the reference character at a
position. Each MEM is a `(position in read, length)` pair, and a line of
output looks like `(0,25) (7,31) `.

To produce a `.mems` file, write each read with `write_mem_record` into the
binary file named by `temp_filename(prefix, i)`, then call
`merge_mem_files(prefix, n_parts)`. It writes `prefix.mems` with a `>name`
line and a MEMs line per read, deletes the temporary files and returns the
number of reads.

Stepping through the suffix array with Phi:

```python
from memkit.samples import build_phi, read_samples, phi

n = len(text)
pred = build_phi("ref.fa.ssa", n)
samples_last = read_samples("ref.fa.esa", n)
previous = phi(pred, samples_last, n, position)
```

`phi_inv` does the same in the other direction, taking the structure built
from the `.esa` file and the samples read from the `.ssa` file.
`memkit.lcp_samples.phi_lcp` and `phi_inv_lcp` also take the values read by
`read_slcp` and return the neighbouring position together with the length of
the prefix it shares with the suffix at `position`.

## What memkit does not do

memkit has no command-line programs. It does not build an r-index, a
run-length BWT, thresholds or a random-access grammar of the reference, and
it does not compute matching-statistics pointers itself: those come from
elsewhere and are passed in. It reads the sample and LCP files but does not
produce them.

## Errors

Unreadable or malformed input raises an exception: `memkit.common.fail`
prints the message on standard error and raises `FatalError`; other problems
raise `ValueError`, `IndexError` or `EOFError`. `phi` and `phi_inv` (and their
LCP variants) raise `ValueError` where the neighbouring suffix is undefined.

## Running the tests

Install the `test` extra and run `pytest` from the project root.