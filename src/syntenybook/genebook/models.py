"""Query-time gene records."""

from dataclasses import dataclass, field
from enum import Enum

from syntenybook.decoders.records import Strand
from syntenybook.landscape import TailGene


class Strategy(str, Enum):
    """How a gene book retrieves rows from the database."""

    IN_MEMORY = "in-memory"
    CACHED = "cached"
    INLINE = "inline"


@dataclass
class Gene:
    """A gene and its landscape, as served by a gene book.

    Attributes:
        id: Value of the book's id column for this gene
        species: Species the gene belongs to
        chromosome: Chromosome name
        position: Start coordinate, as found in the annotation file
        strand: Gene orientation
        family: Family (ancestral) id
        left_landscape: Preceding genes, farthest first
        right_landscape: Following genes, nearest first
    """
    id: str
    species: str
    chromosome: str
    position: int
    strand: Strand
    family: int
    left_landscape: list[TailGene] = field(default_factory=list)
    right_landscape: list[TailGene] = field(default_factory=list)

    def as_tail_gene(self) -> TailGene:
        return TailGene(family=self.family, strand=self.strand)

    def landscape(self) -> list[TailGene]:
        """Local gene order: left tail, the gene itself, right tail."""
        return [*self.left_landscape, self.as_tail_gene(), *self.right_landscape]

    def families(self) -> list[int]:
        return [tail_gene.family for tail_gene in self.landscape()]
