"""Turn annotation files into per-chromosome, start-sorted gene lists.

For every record of the configured feature class, the canonical gene id is
captured from the raw record id and resolved to a family. Genes outside
every family are dropped; a canonical id seen twice in the same file keeps
its first occurrence.
"""

import re
from pathlib import Path
from typing import Iterable, Optional, Union

import structlog

from syntenybook.decoders import reader_for
from syntenybook.errors import RecordWithoutIdError
from syntenybook.families.models import FamilyIndex
from syntenybook.ingest.models import Annotation, Genome, Genomes
from syntenybook.ingest.patterns import (
    ID_GROUP,
    SPECIES_GROUP,
    compile_pattern,
    extract_id,
    extract_species,
)
from syntenybook.sources import expand_sources

logger = structlog.get_logger()


def sort_genome(genome: Genome) -> None:
    """Stable-sort every chromosome by start; ties keep encounter order."""
    for annotations in genome.values():
        annotations.sort(key=lambda a: a.start)


def read_annotations(
    path: Union[str, Path],
    species_regex: re.Pattern,
    id_regex: re.Pattern,
    feature_class: Optional[str],
    family_index: FamilyIndex,
    chrom_table: bool = False,
) -> tuple[str, list[Annotation]]:
    """
    Read the family genes of one annotation file, in file order.

    Args:
        path: GFF3/BED file (or chromosome table when `chrom_table` is set)
        species_regex: Compiled pattern with a `species` group, applied to the file name
        id_regex: Compiled pattern with an `id` group, applied to raw record ids
        feature_class: GFF3 feature type to keep; None or "" keeps everything
        family_index: Member id -> family id index
        chrom_table: Read the file as a chromosome table

    Returns:
        (species, annotations) with duplicates removed

    Raises:
        SpeciesNotFoundError, UnsupportedFileTypeError, RecordWithoutIdError,
        IdNotFoundError, DecodeError, FileError
    """
    path = Path(path)
    logger.info("genome_parse", path=str(path))
    species = extract_species(path, species_regex)
    reader = reader_for(path, chrom_table=chrom_table)
    logger.info("genome_species", species=species, format=reader.format_name)

    seen: set[str] = set()
    annotations: list[Annotation] = []
    skipped = 0
    for record in reader:
        if feature_class and not record.is_class(feature_class):
            continue
        if record.id is None:
            raise RecordWithoutIdError(record.location)

        gene_id = extract_id(record.id, id_regex)
        family = family_index.lookup(gene_id)
        if family is None:
            skipped += 1
            logger.debug("genome_id_not_in_families", id=gene_id)
            continue
        if gene_id in seen:
            logger.debug("genome_duplicate_id", id=gene_id, location=record.location)
            continue
        seen.add(gene_id)
        annotations.append(Annotation(
            id=gene_id,
            chromosome=record.chromosome,
            start=record.start,
            stop=record.end,
            strand=record.strand,
            family=family,
        ))

    logger.info(
        "genome_parsed",
        species=species,
        kept=len(annotations),
        skipped_without_family=skipped,
    )
    return species, annotations


def group_by_chromosome(annotations: Iterable[Annotation], genome: Optional[Genome] = None) -> Genome:
    """Append annotations to their chromosome lists, then sort each list."""
    genome = {} if genome is None else genome
    for annotation in annotations:
        genome.setdefault(annotation.chromosome, []).append(annotation)
    sort_genome(genome)
    return genome


def ingest(
    path: Union[str, Path],
    species_pattern: str,
    id_pattern: str,
    feature_class: Optional[str],
    family_index: FamilyIndex,
    chrom_table: bool = False,
) -> tuple[str, list[Annotation]]:
    """
    Ingest one annotation file.

    Returns:
        (species, annotations) where annotations are grouped by chromosome
        and sorted by start within each chromosome

    Raises:
        InvalidRegexError, MissingCaptureGroupError: On bad patterns
        plus every error of `read_annotations`
    """
    species_regex = compile_pattern(species_pattern, SPECIES_GROUP)
    id_regex = compile_pattern(id_pattern, ID_GROUP)
    species, annotations = read_annotations(
        path, species_regex, id_regex, feature_class, family_index, chrom_table
    )
    genome = group_by_chromosome(annotations)
    return species, [a for chromosome in genome.values() for a in chromosome]


def ingest_genomes(
    sources: Iterable[Union[str, Path]],
    species_pattern: str,
    id_pattern: str,
    feature_class: Optional[str],
    family_index: FamilyIndex,
    chrom_table: bool = False,
) -> Genomes:
    """
    Ingest every annotation file of `sources` into species -> chromosome lists.

    Both patterns are checked before any file is opened. Files of the same
    species are merged; duplicate removal applies within each file.

    Returns:
        Genomes mapping; species whose files kept no gene are absent
    """
    species_regex = compile_pattern(species_pattern, SPECIES_GROUP)
    id_regex = compile_pattern(id_pattern, ID_GROUP)

    genomes: Genomes = {}
    for path in expand_sources(sources):
        species, annotations = read_annotations(
            path, species_regex, id_regex, feature_class, family_index, chrom_table
        )
        if not annotations:
            logger.warning("genome_empty", species=species, path=str(path))
            continue
        group_by_chromosome(annotations, genomes.setdefault(species, {}))
    return genomes
