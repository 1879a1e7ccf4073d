"""Chromosome-table decoder.

Strict five-column tab-separated format:
    chrom [TAB] start [TAB] stop [TAB] strand [TAB] geneid
"""

from syntenybook.decoders.base import LineReader
from syntenybook.decoders.records import AnnotationRecord, Strand
from syntenybook.errors import ChromTableError


def parse_chrom_line(line: str) -> AnnotationRecord:
    parts = line.split("\t")
    if len(parts) < 5:
        raise ChromTableError("ChromTable entry with missing fields", line)

    chrom, start, end, strand, gene_id = parts[:5]
    if strand not in ("+", "-"):
        raise ChromTableError("unrecognized strand format", line)
    try:
        start_pos = int(start)
        end_pos = int(end)
    except ValueError:
        raise ChromTableError("invalid coordinates", line) from None

    return AnnotationRecord(
        chromosome=chrom,
        start=start_pos,
        end=end_pos,
        id=gene_id,
        strand=Strand(strand),
    )


class ChromTableReader(LineReader):
    format_name = "chromosome table"

    def parse_line(self, line: str) -> AnnotationRecord:
        return parse_chrom_line(line)
