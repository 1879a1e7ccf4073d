"""Data models for ingested annotations."""

from dataclasses import dataclass

from syntenybook.decoders.records import Strand

# species -> chromosome -> annotations sorted by start
Genome = dict[str, list["Annotation"]]
Genomes = dict[str, Genome]


@dataclass(frozen=True)
class Annotation:
    """A gene kept for windowing: its canonical id resolved to a family."""
    id: str
    chromosome: str
    start: int
    stop: int
    strand: Strand
    family: int
