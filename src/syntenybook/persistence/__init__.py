"""Persistence layer for the genomes table and build provenance."""

from syntenybook.persistence.duckdb_store import (
    GENOME_COLUMNS,
    GENOME_SCHEMA,
    GENOMES_TABLE,
    GenomeStore,
    connect,
    read_build_info,
)
from syntenybook.persistence.provenance import ProvenanceTracker

__all__ = [
    "GENOME_COLUMNS",
    "GENOME_SCHEMA",
    "GENOMES_TABLE",
    "GenomeStore",
    "ProvenanceTracker",
    "connect",
    "read_build_info",
]
