"""Tests for the GFF3, BED and chromosome-table decoders."""

import gzip
from pathlib import Path

import pytest

from syntenybook.decoders import (
    BedReader,
    ChromTableReader,
    GffReader,
    Phase,
    Strand,
    is_gzipped,
    parse_bed_line,
    parse_chrom_line,
    parse_gff_attributes,
    parse_gff_line,
    reader_for,
)
from syntenybook.errors import (
    BedError,
    CannotOpenFileError,
    ChromTableError,
    GffError,
    ReadError,
    UnsupportedFileTypeError,
)


GFF_CONTENT = """##gff-version 3
#!genome-build test
chr1\tensembl\tgene\t100\t200\t.\t+\t.\tID=gene:G1;Name=alpha
chr1\tensembl\tmRNA\t100\t200\t.\t+\t.\tID=transcript:T1;Parent=gene:G1

chr1\tensembl\tgene\t300\t400\t0.5\t-\t0\tID=gene:G2
chr2\tensembl\tgene\t50\t80\t.\t.\t.\tID=gene:G3;Dbxref=a,b,c
"""


@pytest.fixture
def gff_file(tmp_path: Path) -> Path:
    path = tmp_path / "Homo_sapiens.gff3"
    path.write_text(GFF_CONTENT)
    return path


# ============================================================================
# GFF3
# ============================================================================

def test_parse_gff_line_fields():
    record = parse_gff_line("chr1\tsrc\tgene\t100\t200\t0.5\t+\t1\tID=gene:G1;Name=x")

    assert record.chromosome == "chr1"
    assert record.source == "src"
    assert record.feature_class == "gene"
    assert record.start == 100
    assert record.end == 200
    assert record.score == 0.5
    assert record.strand is Strand.DIRECT
    assert record.phase is Phase.ONE_SHIFTED
    assert record.id == "gene:G1"
    assert record.attribute("name") == ["x"]


def test_parse_gff_line_dots_are_absent_values():
    record = parse_gff_line("chr1\t.\t.\t1\t2\t.\t.\t.\tID=x")

    assert record.source is None
    assert record.feature_class is None
    assert record.score is None
    assert record.strand is Strand.UNKNOWN
    assert record.phase is None


def test_parse_gff_attributes_multiple_values():
    attrs = parse_gff_attributes("ID=g1;Parent=a,b;Note=n;")

    assert attrs == (("ID", ("g1",)), ("Parent", ("a", "b")), ("Note", ("n",)))


def test_gff_parent_is_first_value():
    record = parse_gff_line("chr1\t.\texon\t1\t2\t.\t+\t.\tParent=t1,t2")

    assert record.parent == "t1"
    assert record.id is None


def test_gff_id_key_is_case_insensitive():
    record = parse_gff_line("chr1\t.\tgene\t1\t2\t.\t+\t.\tid=lower")

    assert record.id == "lower"


def test_gff_incorrect_attribute():
    with pytest.raises(GffError):
        parse_gff_line("chr1\t.\tgene\t1\t2\t.\t+\t.\tID=a=b")


def test_gff_record_too_short():
    with pytest.raises(GffError) as exc_info:
        parse_gff_line("chr1\t.\tgene\t1\t2")

    assert "chr1" in str(exc_info.value)


def test_gff_invalid_phase():
    with pytest.raises(GffError):
        parse_gff_line("chr1\t.\tgene\t1\t2\t.\t+\t3\tID=x")


def test_gff_invalid_coordinates():
    with pytest.raises(GffError):
        parse_gff_line("chr1\t.\tgene\tone\t2\t.\t+\t.\tID=x")


def test_gff_feature_class_filter():
    gene = parse_gff_line("chr1\t.\tgene\t1\t2\t.\t+\t.\tID=x")
    no_class = parse_gff_line("chr1\t.\t.\t1\t2\t.\t+\t.\tID=x")

    assert gene.is_class("gene")
    assert not gene.is_class("mRNA")
    assert not no_class.is_class("gene")


def test_gff_reader_skips_comments_and_blank_lines(gff_file: Path):
    records = list(GffReader(gff_file))

    assert len(records) == 4
    assert [r.id for r in records] == ["gene:G1", "transcript:T1", "gene:G2", "gene:G3"]


def test_reader_is_restartable(gff_file: Path):
    reader = GffReader(gff_file)

    assert list(reader) == list(reader)


# ============================================================================
# BED
# ============================================================================

def test_parse_bed_line_minimal():
    record = parse_bed_line("chr1 10 20")

    assert record.chromosome == "chr1"
    assert record.start == 10
    assert record.end == 20
    assert record.id is None
    assert record.strand is Strand.UNKNOWN


def test_parse_bed_line_full():
    record = parse_bed_line("chr1\t10\t20\tg1\t0\t-\t10\t20")

    assert record.id == "g1"
    assert record.strand is Strand.REVERSE


def test_bed_score_column_is_not_kept():
    record = parse_bed_line("chr1\t10\t20\tg1\tnot-a-score\t+")

    assert record.id == "g1"
    assert record.strand is Strand.DIRECT
    assert not hasattr(record, "score")


def test_bed_records_have_no_class():
    record = parse_bed_line("chr1\t10\t20\tg1")

    assert record.is_class("gene")
    assert record.is_class("anything")


def test_bed_missing_fields():
    with pytest.raises(BedError):
        parse_bed_line("chr1\t10")


def test_bed_reader(tmp_path: Path):
    path = tmp_path / "mouse.bed"
    path.write_text("# header\nchr1\t0\t10\tg1\t0\t+\nchr1\t20\t30\tg2\n")

    records = list(BedReader(path))

    assert [r.id for r in records] == ["g1", "g2"]
    assert records[0].strand is Strand.DIRECT


# ============================================================================
# Chromosome tables
# ============================================================================

def test_parse_chrom_line():
    record = parse_chrom_line("chr3\t5\t50\t-\tgeneA")

    assert record.chromosome == "chr3"
    assert record.start == 5
    assert record.end == 50
    assert record.strand is Strand.REVERSE
    assert record.id == "geneA"


def test_chrom_table_requires_strand():
    with pytest.raises(ChromTableError):
        parse_chrom_line("chr3\t5\t50\t.\tgeneA")


def test_chrom_table_requires_five_columns():
    with pytest.raises(ChromTableError):
        parse_chrom_line("chr3\t5\t50\t+")


def test_chrom_table_reader(tmp_path: Path):
    path = tmp_path / "table.txt"
    path.write_text("chr1\t1\t2\t+\ta\nchr1\t3\t4\t-\tb\n")

    assert [r.id for r in ChromTableReader(path)] == ["a", "b"]


# ============================================================================
# Opening and dispatch
# ============================================================================

def test_gzip_detected_by_magic_not_extension(tmp_path: Path):
    path = tmp_path / "Homo_sapiens.gff3"
    with gzip.open(path, "wt") as f:
        f.write(GFF_CONTENT)

    assert is_gzipped(path)
    assert len(list(reader_for(path))) == 4


def test_plain_file_with_gz_extension(tmp_path: Path):
    path = tmp_path / "Homo_sapiens.gff3.gz"
    path.write_text(GFF_CONTENT)

    assert not is_gzipped(path)
    assert len(list(reader_for(path))) == 4


def test_reader_for_dispatch(tmp_path: Path):
    assert isinstance(reader_for(tmp_path / "a.gff"), GffReader)
    assert isinstance(reader_for(tmp_path / "a.gff3.gz"), GffReader)
    assert isinstance(reader_for(tmp_path / "a.bed"), BedReader)
    assert isinstance(reader_for(tmp_path / "a.bed.gz"), BedReader)
    assert isinstance(reader_for(tmp_path / "a.txt", chrom_table=True), ChromTableReader)


def test_reader_for_unknown_extension(tmp_path: Path):
    with pytest.raises(UnsupportedFileTypeError) as exc_info:
        reader_for(tmp_path / "annotations.gtf")

    assert "annotations.gtf" in str(exc_info.value)


def test_missing_file_cannot_be_opened(tmp_path: Path):
    with pytest.raises(CannotOpenFileError):
        list(GffReader(tmp_path / "missing.gff3"))


def test_truncated_gzip_is_a_read_error(tmp_path: Path):
    path = tmp_path / "Homo_sapiens.gff3.gz"
    data = gzip.compress((GFF_CONTENT * 50).encode())
    path.write_bytes(data[: len(data) // 2])

    with pytest.raises(ReadError) as exc_info:
        list(GffReader(path))

    assert exc_info.value.filename == str(path)
