"""Compute landscapes and write the genomes table."""

from typing import Optional, Sequence

import polars as pl
import structlog

from syntenybook import __version__
from syntenybook.families import build_family_index
from syntenybook.ingest.genome import ingest_genomes
from syntenybook.ingest.models import Annotation, Genomes
from syntenybook.ingest.windows import tail_windows
from syntenybook.landscape import encode_tail
from syntenybook.persistence import GENOME_SCHEMA, GenomeStore, ProvenanceTracker

logger = structlog.get_logger()


def chromosome_rows(
    species: str,
    chromosome: str,
    annotations: Sequence[Annotation],
    window: int,
) -> pl.DataFrame:
    """
    Build the genomes-table rows of one chromosome.

    Args:
        species: Species name
        chromosome: Chromosome name
        annotations: Genes of the chromosome, sorted by start
        window: Number of neighbours stored on each side

    Returns:
        DataFrame with GENOME_SCHEMA columns, one row per gene
    """
    rows = {column: [] for column in GENOME_SCHEMA}
    for annotation, left, right in tail_windows(annotations, window):
        rows["species"].append(species)
        rows["chr"].append(chromosome)
        rows["ancestral_id"].append(annotation.family)
        rows["id"].append(annotation.id)
        rows["start"].append(annotation.start)
        rows["stop"].append(annotation.stop)
        rows["direction"].append(annotation.strand.char)
        rows["left_tail_ids"].append(encode_tail(left))
        rows["right_tail_ids"].append(encode_tail(right))
    return pl.DataFrame(rows, schema=GENOME_SCHEMA)


def write_genomes(store: GenomeStore, genomes: Genomes, window: int) -> int:
    """
    Recreate the genomes table from `genomes`.

    Each chromosome is committed on its own; indices are created once every
    row is written.

    Returns:
        Number of rows written
    """
    store.reset_genomes_table()
    total = 0
    for species, genome in genomes.items():
        logger.debug("genomes_insert_species", species=species, chromosomes=len(genome))
        for chromosome, annotations in genome.items():
            df = chromosome_rows(species, chromosome, annotations, window)
            total += store.insert_chromosome(df)
            logger.debug("genomes_insert_chromosome", species=species, chr=chromosome, rows=len(df))

    logger.info("genomes_create_indices")
    store.create_indices()
    return total


def build_database(
    config: "SyntenyConfig",
    provenance: Optional[ProvenanceTracker] = None,
) -> dict:
    """
    Run the whole build: families, genomes, landscapes, database.

    Args:
        config: Validated configuration
        provenance: Tracker to record steps in; created from config if None

    Returns:
        Summary dict with species, gene and family counts
    """
    settings = config.build
    provenance = provenance or ProvenanceTracker.from_config(config)

    logger.info("build_families_start", sources=len(settings.families))
    family_index = build_family_index(settings.families, name_families=settings.name_families)
    provenance.record_step("parse_families", {
        "family_count": family_index.family_count,
        "member_count": len(family_index),
        "overwritten_members": family_index.overwritten,
    })

    logger.info("build_genomes_start", sources=len(settings.genomes))
    genomes = ingest_genomes(
        settings.genomes,
        settings.species_pattern,
        settings.id_pattern,
        settings.feature_class,
        family_index,
        chrom_table=settings.chrom_table,
    )
    provenance.record_step("parse_genomes", {
        "species_count": len(genomes),
        "chromosome_count": sum(len(g) for g in genomes.values()),
    })

    logger.info("build_database_start", database=str(config.database), window=settings.window)
    with GenomeStore.from_config(config) as store:
        gene_count = write_genomes(store, genomes, settings.window)
        provenance.record_step("write_genomes", {
            "gene_count": gene_count,
            "window": settings.window,
        })
        store.write_build_info(
            window=settings.window,
            species_count=len(genomes),
            gene_count=gene_count,
            family_count=family_index.family_count,
            version=__version__,
        )
        provenance.save_to_store(store)

    summary = {
        "species_count": len(genomes),
        "gene_count": gene_count,
        "family_count": family_index.family_count,
        "window": settings.window,
    }
    logger.info("build_complete", **summary)
    return summary
