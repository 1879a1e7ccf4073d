"""Tests for the DuckDB genome store and provenance tracking."""

import json
from pathlib import Path

import duckdb
import polars as pl
import pytest

from syntenybook.config.loader import load_config
from syntenybook.decoders import Strand
from syntenybook.ingest import Annotation, chromosome_rows, write_genomes
from syntenybook.persistence import GENOME_COLUMNS, GenomeStore, ProvenanceTracker


@pytest.fixture
def test_config(tmp_path):
    """Create a minimal test config."""
    config_path = tmp_path / "test_config.yaml"
    config_path.write_text("""
database: {database}
build:
  families:
    - {families}
  genomes:
    - {genomes}
  species_pattern: '(?P<species>[^.]+)'
  id_pattern: '(?P<id>.+)'
  window: 4
""".format(
        database=str(tmp_path / "test.duckdb"),
        families=str(tmp_path / "families"),
        genomes=str(tmp_path / "genomes"),
    ))
    return load_config(config_path)


def genome(n: int, chromosome: str = "chr1") -> list[Annotation]:
    return [
        Annotation(f"{chromosome}_g{i}", chromosome, i * 10, i * 10 + 5, Strand.DIRECT, i)
        for i in range(n)
    ]


# ============================================================================
# DuckDB Store Tests
# ============================================================================

def test_store_creates_database(tmp_path):
    """GenomeStore creates the .duckdb file and its parent directories."""
    db_path = tmp_path / "nested" / "test.duckdb"
    assert not db_path.exists()

    store = GenomeStore(db_path)
    store.close()

    assert db_path.exists()


def test_reset_creates_empty_table(tmp_path):
    with GenomeStore(tmp_path / "test.duckdb") as store:
        store.reset_genomes_table()
        assert store.count_rows() == 0

        columns = store.execute_query("SELECT * FROM genomes").columns
        assert columns == GENOME_COLUMNS


def test_insert_chromosome(tmp_path):
    with GenomeStore(tmp_path / "test.duckdb") as store:
        store.reset_genomes_table()
        written = store.insert_chromosome(chromosome_rows("sp", "chr1", genome(4), 2))

        assert written == 4
        df = store.execute_query("SELECT * FROM genomes ORDER BY start")
        assert df["id"].to_list() == ["chr1_g0", "chr1_g1", "chr1_g2", "chr1_g3"]
        assert df["right_tail_ids"].to_list() == ["+1.+2", "+2.+3", "+3", ""]


def test_insert_empty_chromosome_is_noop(tmp_path):
    with GenomeStore(tmp_path / "test.duckdb") as store:
        store.reset_genomes_table()
        assert store.insert_chromosome(chromosome_rows("sp", "chr1", [], 2)) == 0
        assert store.count_rows() == 0


def test_write_genomes_replaces_previous_table(tmp_path):
    with GenomeStore(tmp_path / "test.duckdb") as store:
        write_genomes(store, {"sp": {"chr1": genome(5)}}, window=2)
        assert store.count_rows() == 5

        write_genomes(store, {"other": {"chr1": genome(2), "chr2": genome(3, "chr2")}}, window=2)
        assert store.count_rows() == 5
        species = store.execute_query("SELECT DISTINCT species FROM genomes")["species"].to_list()
        assert species == ["other"]


def test_indices_created(tmp_path):
    with GenomeStore(tmp_path / "test.duckdb") as store:
        write_genomes(store, {"sp": {"chr1": genome(3)}}, window=1)
        names = set(
            store.execute_query(
                "SELECT index_name FROM duckdb_indexes() WHERE table_name = 'genomes'"
            )["index_name"].to_list()
        )

    assert names == {"genomes_species", "genomes_chr", "genomes_id", "genomes_start"}


def test_build_info_roundtrip(tmp_path):
    with GenomeStore(tmp_path / "test.duckdb") as store:
        assert store.read_build_info() is None

        store.write_build_info(window=7, species_count=2, gene_count=10, family_count=4, version="0.1.0")
        info = store.read_build_info()

    assert info["window_size"] == 7
    assert info["species_count"] == 2
    assert info["gene_count"] == 10
    assert info["family_count"] == 4
    assert info["version"] == "0.1.0"


def test_failed_insert_rolls_back(tmp_path):
    with GenomeStore(tmp_path / "test.duckdb") as store:
        store.reset_genomes_table()
        store.insert_chromosome(chromosome_rows("sp", "chr1", genome(2), 1))

        bad = pl.DataFrame({"species": ["sp"]})
        with pytest.raises(duckdb.Error):
            store.insert_chromosome(bad)

        assert store.count_rows() == 2


def test_export_parquet(tmp_path):
    parquet_path = tmp_path / "output" / "genomes.parquet"

    with GenomeStore(tmp_path / "test.duckdb") as store:
        write_genomes(store, {"sp": {"chr1": genome(3)}}, window=1)
        store.export_parquet(parquet_path)

    assert parquet_path.exists()
    loaded = pl.read_parquet(parquet_path)
    assert loaded.shape == (3, len(GENOME_COLUMNS))


def test_data_persists_after_close(tmp_path):
    db_path = tmp_path / "test.duckdb"

    with GenomeStore(db_path) as store:
        write_genomes(store, {"sp": {"chr1": genome(3)}}, window=1)

    with GenomeStore(db_path) as store:
        assert store.count_rows() == 3


# ============================================================================
# Provenance Tests
# ============================================================================

def test_provenance_metadata_structure(test_config):
    tracker = ProvenanceTracker("0.1.0", test_config)

    metadata = tracker.create_metadata()

    assert metadata["version"] == "0.1.0"
    assert metadata["config_hash"] == test_config.config_hash()
    assert metadata["build_parameters"]["window"] == 4
    assert "families" not in metadata["build_parameters"]
    assert metadata["processing_steps"] == []


def test_provenance_records_steps(test_config):
    tracker = ProvenanceTracker("0.1.0", test_config)

    tracker.record_step("parse_families")
    tracker.record_step("write_genomes", {"gene_count": 120})

    steps = tracker.get_steps()
    assert len(steps) == 2
    assert steps[0]["step_name"] == "parse_families"
    assert "timestamp" in steps[0]
    assert steps[1]["details"]["gene_count"] == 120


def test_provenance_sidecar_roundtrip(test_config, tmp_path):
    tracker = ProvenanceTracker("0.1.0", test_config)
    tracker.record_step("test_step", {"key": "value"})

    sidecar_path = tracker.save_sidecar(tmp_path / "genomes.duckdb")

    assert sidecar_path == tmp_path / "genomes.provenance.json"
    loaded = ProvenanceTracker.load_sidecar(sidecar_path)
    assert loaded["config_hash"] == test_config.config_hash()
    assert loaded["processing_steps"][0]["step_name"] == "test_step"


def test_provenance_save_to_store(test_config, tmp_path):
    tracker = ProvenanceTracker("0.1.0", test_config)
    tracker.record_step("test_step")

    with GenomeStore(tmp_path / "test.duckdb") as store:
        tracker.save_to_store(store)
        rows = store.conn.execute("SELECT * FROM _provenance").fetchall()

    assert len(rows) == 1
    assert rows[0][0] == "0.1.0"
    assert rows[0][1] == test_config.config_hash()
    assert json.loads(rows[0][3])[0]["step_name"] == "test_step"
