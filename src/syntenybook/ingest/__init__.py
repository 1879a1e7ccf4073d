"""Ingestion pipeline: annotation files -> landscapes -> genomes table."""

from syntenybook.ingest.genome import (
    group_by_chromosome,
    ingest,
    ingest_genomes,
    read_annotations,
    sort_genome,
)
from syntenybook.ingest.load import build_database, chromosome_rows, write_genomes
from syntenybook.ingest.models import Annotation, Genome, Genomes
from syntenybook.ingest.patterns import compile_pattern, extract_id, extract_species
from syntenybook.ingest.windows import left_window, right_window, tail_windows

__all__ = [
    "Annotation",
    "Genome",
    "Genomes",
    "build_database",
    "chromosome_rows",
    "compile_pattern",
    "extract_id",
    "extract_species",
    "group_by_chromosome",
    "ingest",
    "ingest_genomes",
    "left_window",
    "read_annotations",
    "right_window",
    "sort_genome",
    "tail_windows",
    "write_genomes",
]
