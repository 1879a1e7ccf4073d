"""Landscape query engine: gene books over a genomes database."""

from syntenybook.genebook.book import (
    GeneBook,
    InlineGeneBook,
    PreloadedGeneBook,
    cached,
    gene_from_row,
    in_memory,
    inline,
    open_genebook,
)
from syntenybook.genebook.models import Gene, Strategy

__all__ = [
    "Gene",
    "GeneBook",
    "InlineGeneBook",
    "PreloadedGeneBook",
    "Strategy",
    "cached",
    "gene_from_row",
    "in_memory",
    "inline",
    "open_genebook",
]
