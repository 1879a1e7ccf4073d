"""BED decoder.

Whitespace-separated columns: chrom, start, end, then optionally name,
score and strand. Extra columns (BED12) are ignored.
"""

from syntenybook.decoders.base import LineReader
from syntenybook.decoders.records import AnnotationRecord, Strand
from syntenybook.errors import BedError


def parse_bed_line(line: str) -> AnnotationRecord:
    parts = line.split()
    if len(parts) < 3:
        raise BedError("BED entry with missing fields", line)

    try:
        start = int(parts[1])
        end = int(parts[2])
    except ValueError:
        raise BedError("invalid coordinates", line) from None

    return AnnotationRecord(
        chromosome=parts[0],
        start=start,
        end=end,
        id=parts[3] if len(parts) > 3 else None,
        strand=Strand.parse(parts[5]) if len(parts) > 5 else Strand.UNKNOWN,
    )


class BedReader(LineReader):
    format_name = "BED"

    def parse_line(self, line: str) -> AnnotationRecord:
        return parse_bed_line(line)
