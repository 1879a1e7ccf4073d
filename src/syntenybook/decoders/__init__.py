"""Line-oriented decoders for GFF3, BED and chromosome-table annotations."""

from pathlib import Path
from typing import Union

from syntenybook.decoders.base import LineReader
from syntenybook.decoders.bed import BedReader, parse_bed_line
from syntenybook.decoders.chrom import ChromTableReader, parse_chrom_line
from syntenybook.decoders.gff import GffReader, parse_gff_attributes, parse_gff_line
from syntenybook.decoders.open import is_gzipped, open_annotation, strip_compression_suffix
from syntenybook.decoders.records import AnnotationRecord, GffRecord, Phase, Strand
from syntenybook.errors import UnsupportedFileTypeError

EXTENSION_READERS = {
    ".gff": GffReader,
    ".gff3": GffReader,
    ".bed": BedReader,
}


def reader_for(path: Union[str, Path], chrom_table: bool = False) -> LineReader:
    """
    Pick a decoder for an annotation file.

    Args:
        path: Annotation file, optionally gzip-compressed
        chrom_table: Read the file as a chromosome table regardless of extension

    Returns:
        A restartable reader yielding AnnotationRecord instances

    Raises:
        UnsupportedFileTypeError: If the extension is not recognised
    """
    path = Path(path)
    if chrom_table:
        return ChromTableReader(path)

    name = strip_compression_suffix(path.name)
    suffix = Path(name).suffix.lower()
    reader_cls = EXTENSION_READERS.get(suffix)
    if reader_cls is None:
        raise UnsupportedFileTypeError(str(path))
    return reader_cls(path)


__all__ = [
    "AnnotationRecord",
    "BedReader",
    "ChromTableReader",
    "GffReader",
    "GffRecord",
    "LineReader",
    "Phase",
    "Strand",
    "is_gzipped",
    "open_annotation",
    "parse_bed_line",
    "parse_chrom_line",
    "parse_gff_attributes",
    "parse_gff_line",
    "reader_for",
]
