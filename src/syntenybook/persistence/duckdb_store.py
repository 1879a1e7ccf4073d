"""DuckDB-backed storage for the genomes table."""

from pathlib import Path
from typing import Optional

import duckdb
import polars as pl
import structlog

from syntenybook.errors import FailedToConnectError

logger = structlog.get_logger()

GENOMES_TABLE = "genomes"
BUILD_INFO_TABLE = "_build_info"

# Column order of the genomes table; row frames are built in this order
GENOME_COLUMNS = [
    "species",
    "chr",
    "ancestral_id",
    "id",
    "start",
    "stop",
    "direction",
    "left_tail_ids",
    "right_tail_ids",
]

GENOME_SCHEMA = {
    "species": pl.Utf8,
    "chr": pl.Utf8,
    "ancestral_id": pl.Int64,
    "id": pl.Utf8,
    "start": pl.Int64,
    "stop": pl.Int64,
    "direction": pl.Utf8,
    "left_tail_ids": pl.Utf8,
    "right_tail_ids": pl.Utf8,
}

GENOME_INDICES = {
    "genomes_species": "species",
    "genomes_chr": "chr",
    "genomes_id": "id",
    "genomes_start": "start",
}


def connect(db_path: Path, read_only: bool = False) -> duckdb.DuckDBPyConnection:
    """Open a DuckDB connection, reporting failures with the database name.

    Raises:
        FailedToConnectError: If DuckDB cannot open the file
    """
    db_path = Path(db_path)
    if read_only and not db_path.exists():
        raise FailedToConnectError(str(db_path), "no such file")
    try:
        return duckdb.connect(str(db_path), read_only=read_only)
    except duckdb.Error as e:
        raise FailedToConnectError(str(db_path), str(e)) from e


class GenomeStore:
    """
    Writer for the genomes table.

    The table is dropped and recreated on every build; rows are written one
    chromosome at a time, each chromosome inside its own transaction, so a
    reader never sees a partially written chromosome.
    """

    def __init__(self, db_path: Path):
        """
        Open (or create) the database.

        Args:
            db_path: Path to DuckDB database file. Parent directories
                     are created automatically.
        """
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.conn = connect(self.db_path)

    def reset_genomes_table(self) -> None:
        """Drop the genomes table (and its indices) and create it empty."""
        logger.info("genomes_table_reset", database=str(self.db_path))
        self.conn.execute(f"DROP TABLE IF EXISTS {GENOMES_TABLE}")
        self.conn.execute(f"""
            CREATE TABLE {GENOMES_TABLE} (
                species VARCHAR, chr VARCHAR, ancestral_id BIGINT, id VARCHAR,
                start BIGINT, stop BIGINT, direction VARCHAR,
                left_tail_ids VARCHAR, right_tail_ids VARCHAR
            )
        """)

    def insert_chromosome(self, df: pl.DataFrame) -> int:
        """
        Append the rows of one chromosome in a single transaction.

        Args:
            df: Rows with GENOME_COLUMNS

        Returns:
            Number of rows written
        """
        if df.is_empty():
            return 0

        columns = ", ".join(GENOME_COLUMNS)
        self.conn.begin()
        try:
            self.conn.execute(
                f"INSERT INTO {GENOMES_TABLE} ({columns}) SELECT {columns} FROM df"
            )
            self.conn.commit()
        except duckdb.Error as e:
            self.conn.rollback()
            logger.error("genomes_insert_rolled_back", error=str(e))
            raise
        return len(df)

    def create_indices(self) -> None:
        for name, column in GENOME_INDICES.items():
            self.conn.execute(f"CREATE INDEX {name} ON {GENOMES_TABLE}({column})")

    def write_build_info(
        self,
        window: int,
        species_count: int,
        gene_count: int,
        family_count: int,
        version: str,
    ) -> None:
        """Record the parameters of the build that produced the genomes table."""
        self.conn.execute(f"""
            CREATE OR REPLACE TABLE {BUILD_INFO_TABLE} (
                window_size INTEGER,
                species_count INTEGER,
                gene_count BIGINT,
                family_count INTEGER,
                version VARCHAR,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)
        self.conn.execute(f"""
            INSERT INTO {BUILD_INFO_TABLE}
                (window_size, species_count, gene_count, family_count, version)
            VALUES (?, ?, ?, ?, ?)
        """, [window, species_count, gene_count, family_count, version])

    def read_build_info(self) -> Optional[dict]:
        return read_build_info(self.conn)

    def count_rows(self) -> int:
        return self.conn.execute(f"SELECT COUNT(*) FROM {GENOMES_TABLE}").fetchone()[0]

    def export_parquet(self, output_path: Path) -> None:
        """
        Export the genomes table to Parquet format.

        Args:
            output_path: Path to output Parquet file
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        # COPY does not accept a prepared parameter for the target file
        target = str(output_path).replace("'", "''")
        self.conn.execute(f"COPY {GENOMES_TABLE} TO '{target}' (FORMAT PARQUET)")

    def execute_query(
        self,
        query: str,
        params: Optional[list] = None
    ) -> pl.DataFrame:
        """
        Execute arbitrary SQL query and return polars DataFrame.

        Args:
            query: SQL query to execute
            params: Optional query parameters

        Returns:
            Query results as polars DataFrame
        """
        if params:
            result = self.conn.execute(query, params)
        else:
            result = self.conn.execute(query)
        return result.pl()

    def close(self) -> None:
        """Close the DuckDB connection."""
        if self.conn:
            self.conn.close()
            self.conn = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    @classmethod
    def from_config(cls, config: "SyntenyConfig") -> "GenomeStore":
        return cls(config.database)


def read_build_info(conn: duckdb.DuckDBPyConnection) -> Optional[dict]:
    """Parameters of the last build, or None for databases without them."""
    try:
        row = conn.execute(f"""
            SELECT window_size, species_count, gene_count, family_count, version, created_at
            FROM {BUILD_INFO_TABLE}
        """).fetchone()
    except duckdb.CatalogException:
        return None
    if row is None:
        return None
    return {
        "window_size": row[0],
        "species_count": row[1],
        "gene_count": row[2],
        "family_count": row[3],
        "version": row[4],
        "created_at": row[5],
    }
