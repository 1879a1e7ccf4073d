"""GFF3 decoder.

GFF3 lines carry nine tab-separated columns:
    seqid, source, type, start, end, score, strand, phase, attributes

Attributes follow the gmod convention: `key=value` pairs separated by `;`,
with multiple values separated by `,`.
"""

from typing import Optional

from syntenybook.decoders.base import LineReader
from syntenybook.decoders.records import GffRecord, Phase, Strand
from syntenybook.errors import GffError

GFF_COLUMNS = 9


def _optional(field: str) -> Optional[str]:
    return None if field == "." else field


def parse_gff_attributes(attr_string: str) -> tuple:
    """Parse a GFF3 attribute column into ((key, (values...)), ...) pairs.

    Raises:
        GffError: If a pair does not contain exactly one `=`
    """
    if attr_string == ".":
        return ()
    attrs = []
    for pair in attr_string.split(";"):
        if not pair.strip():
            continue
        parts = pair.split("=")
        if len(parts) != 2:
            raise GffError("attribute entry must contain exactly one `=`", pair)
        attrs.append((parts[0], tuple(parts[1].split(","))))
    return tuple(attrs)


def parse_gff_line(line: str) -> GffRecord:
    parts = line.split("\t")
    if len(parts) < GFF_COLUMNS:
        raise GffError("invalid entry", line)

    seqid, source, feature_class, start, end, score, strand, phase, attributes = parts[:GFF_COLUMNS]

    try:
        start_pos = int(start)
        end_pos = int(end)
    except ValueError:
        raise GffError("invalid coordinates", line) from None

    try:
        parsed_score = None if score == "." else float(score)
    except ValueError:
        raise GffError("invalid score value", line) from None

    parsed_phase = None
    if phase != ".":
        try:
            parsed_phase = Phase(int(phase))
        except ValueError:
            raise GffError("invalid phase value", phase) from None

    attrs = parse_gff_attributes(attributes)
    ids = next((values for key, values in attrs if key.lower() == "id"), ())
    return GffRecord(
        chromosome=seqid,
        start=start_pos,
        end=end_pos,
        id=ids[0] if ids else None,
        strand=Strand.parse(strand),
        feature_class=_optional(feature_class),
        source=_optional(source),
        score=parsed_score,
        phase=parsed_phase,
        attributes=attrs,
    )


class GffReader(LineReader):
    format_name = "GFF3"

    def parse_line(self, line: str) -> GffRecord:
        return parse_gff_line(line)
