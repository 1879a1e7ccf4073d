"""Gene books: id-keyed access to genes and their landscapes.

Three retrieval strategies share one contract (`GeneBook`):

- in-memory: every row is loaded when the book is opened
- cached: only the rows of an explicit id list are loaded
- inline: nothing is loaded; each lookup runs one point query on a shared,
  lock-guarded connection

All three truncate stored tails to the book's window the same way, resolve
an id matching several rows to the first row written, and raise
UnknownIdError for ids absent from the database.
"""

import threading
from pathlib import Path
from typing import Iterable, Optional, Protocol, Sequence, runtime_checkable

import duckdb
import polars as pl
import structlog

from syntenybook.decoders.records import Strand
from syntenybook.errors import BookClosedError, FailedToConnectError, ImmutableBookError, UnknownIdError
from syntenybook.genebook.models import Gene, Strategy
from syntenybook.landscape import decode_tail, truncate_left, truncate_right
from syntenybook.persistence import GENOMES_TABLE, connect, read_build_info

logger = structlog.get_logger()

# Text columns usable as lookup keys
ID_COLUMNS = ("id", "chr", "species")

ROW_COLUMNS = "species, chr, start, direction, ancestral_id, left_tail_ids, right_tail_ids"


@runtime_checkable
class GeneBook(Protocol):
    """Read access to the genes of a database, keyed by an id column."""

    strategy: Strategy
    window: int

    def lookup(self, gene_id: str) -> Gene:
        """Gene stored under `gene_id`; raises UnknownIdError if absent."""
        ...

    def get(self, gene_id: str, default: Optional[Gene] = None) -> Optional[Gene]:
        ...

    def get_mut(self, gene_id: str) -> Gene:
        """The stored Gene object itself, for in-place edits."""
        ...

    def species(self) -> list[str]:
        ...

    def close(self) -> None:
        ...


def check_id_column(id_column: str) -> str:
    if id_column not in ID_COLUMNS:
        raise ValueError(
            f"id_column must be one of {', '.join(ID_COLUMNS)}, got {id_column!r}"
        )
    return id_column


def gene_from_row(gene_id: str, row: dict, window: int) -> Gene:
    """Build a Gene from a genomes row, truncating both tails to `window`."""
    return Gene(
        id=gene_id,
        species=row["species"],
        chromosome=row["chr"],
        position=row["start"],
        strand=Strand.parse(row["direction"]),
        family=row["ancestral_id"],
        left_landscape=truncate_left(decode_tail(row["left_tail_ids"] or ""), window),
        right_landscape=truncate_right(decode_tail(row["right_tail_ids"] or ""), window),
    )


def _warn_if_window_exceeds_build(conn: duckdb.DuckDBPyConnection, window: int, db_path: Path) -> None:
    build_info = read_build_info(conn)
    if build_info is not None and window > build_info["window_size"]:
        logger.warning(
            "genebook_window_exceeds_build",
            database=str(db_path),
            requested=window,
            stored=build_info["window_size"],
        )


def _load_genes(df: pl.DataFrame, window: int) -> dict[str, Gene]:
    """Genes keyed by id; rows must come in rowid order, the first row of a key wins."""
    genes: dict[str, Gene] = {}
    for row in df.iter_rows(named=True):
        if row["key"] not in genes:
            genes[row["key"]] = gene_from_row(row["key"], row, window)
    return genes


class PreloadedGeneBook:
    """
    Gene book whose genes all live in a dict.

    Used by both the in-memory and the cached strategies; they only differ
    in which rows are loaded.
    """

    def __init__(self, genes: dict[str, Gene], species: list[str], window: int, strategy: Strategy):
        self.genes = genes
        self._species = species
        self.window = window
        self.strategy = strategy

    def lookup(self, gene_id: str) -> Gene:
        try:
            return self.genes[gene_id]
        except KeyError:
            raise UnknownIdError(gene_id) from None

    def get(self, gene_id: str, default: Optional[Gene] = None) -> Optional[Gene]:
        return self.genes.get(gene_id, default)

    def get_mut(self, gene_id: str) -> Gene:
        return self.lookup(gene_id)

    def species(self) -> list[str]:
        return list(self._species)

    def close(self) -> None:
        pass

    def __len__(self) -> int:
        return len(self.genes)

    def __contains__(self, gene_id: str) -> bool:
        return gene_id in self.genes

    def __iter__(self):
        return iter(self.genes.values())

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


class InlineGeneBook:
    """
    Gene book that queries the database on every lookup.

    The connection is shared by all callers and guarded by a lock, so
    concurrent lookups from several threads run one at a time.
    """

    strategy = Strategy.INLINE

    def __init__(self, conn: duckdb.DuckDBPyConnection, window: int, id_column: str):
        self._conn = conn
        self._lock = threading.Lock()
        self.window = window
        self.id_column = check_id_column(id_column)

    def _connection(self) -> duckdb.DuckDBPyConnection:
        if self._conn is None:
            raise BookClosedError()
        return self._conn

    def lookup(self, gene_id: str) -> Gene:
        with self._lock:
            df = self._connection().execute(
                f"SELECT {ROW_COLUMNS} FROM {GENOMES_TABLE} "
                f"WHERE {self.id_column} = ? ORDER BY rowid LIMIT 1",
                [gene_id],
            ).pl()
        if df.is_empty():
            raise UnknownIdError(gene_id)
        return gene_from_row(gene_id, df.row(0, named=True), self.window)

    def get(self, gene_id: str, default: Optional[Gene] = None) -> Optional[Gene]:
        try:
            return self.lookup(gene_id)
        except UnknownIdError:
            return default

    def get_mut(self, gene_id: str) -> Gene:
        raise ImmutableBookError()

    def species(self) -> list[str]:
        with self._lock:
            rows = self._connection().execute(
                f"SELECT DISTINCT species FROM {GENOMES_TABLE} ORDER BY species"
            ).fetchall()
        return [row[0] for row in rows]

    def close(self) -> None:
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


def _open(db_path: Path) -> duckdb.DuckDBPyConnection:
    return connect(Path(db_path), read_only=True)


def _query(conn: duckdb.DuckDBPyConnection, db_path: Path, query: str, params: Optional[list] = None) -> pl.DataFrame:
    try:
        if params:
            return conn.execute(query, params).pl()
        return conn.execute(query).pl()
    except duckdb.CatalogException as e:
        raise FailedToConnectError(str(db_path), f"no {GENOMES_TABLE} table") from e


def in_memory(db_path: Path, window: int, id_column: str = "id") -> PreloadedGeneBook:
    """
    Load every row of the database into memory.

    Args:
        db_path: DuckDB database written by a build
        window: Number of neighbours kept on each side of a gene
        id_column: Column used as lookup key

    Raises:
        FailedToConnectError: If the database cannot be opened
    """
    id_column = check_id_column(id_column)
    logger.info("genebook_caching", database=str(db_path), strategy=Strategy.IN_MEMORY.value)
    conn = _open(db_path)
    try:
        _warn_if_window_exceeds_build(conn, window, db_path)
        df = _query(
            conn, db_path, f"SELECT {id_column} AS key, {ROW_COLUMNS} FROM {GENOMES_TABLE} ORDER BY rowid"
        )
        species = _query(
            conn, db_path, f"SELECT DISTINCT species FROM {GENOMES_TABLE} ORDER BY species"
        )["species"].to_list()
    finally:
        conn.close()

    genes = _load_genes(df, window)
    logger.info("genebook_cached", genes=len(genes), species=len(species))
    return PreloadedGeneBook(genes, species, window, Strategy.IN_MEMORY)


def cached(db_path: Path, window: int, ids: Iterable[str], id_column: str = "id") -> PreloadedGeneBook:
    """
    Load only the rows whose id column is in `ids`.

    Args:
        db_path: DuckDB database written by a build
        window: Number of neighbours kept on each side of a gene
        ids: Ids to load; ids missing from the database are simply absent
        id_column: Column used as lookup key

    Raises:
        FailedToConnectError: If the database cannot be opened
    """
    id_column = check_id_column(id_column)
    ids = list(dict.fromkeys(ids))
    logger.info("genebook_caching", database=str(db_path), strategy=Strategy.CACHED.value, ids=len(ids))
    conn = _open(db_path)
    try:
        _warn_if_window_exceeds_build(conn, window, db_path)
        if ids:
            placeholders = ", ".join("?" for _ in ids)
            df = _query(
                conn,
                db_path,
                f"SELECT {id_column} AS key, {ROW_COLUMNS} FROM {GENOMES_TABLE} "
                f"WHERE {id_column} IN ({placeholders}) ORDER BY rowid",
                ids,
            )
        else:
            df = None
    finally:
        conn.close()

    genes = _load_genes(df, window) if df is not None else {}
    species = sorted({gene.species for gene in genes.values()})
    logger.info("genebook_cached", genes=len(genes), species=len(species))
    return PreloadedGeneBook(genes, species, window, Strategy.CACHED)


def inline(db_path: Path, window: int, id_column: str = "id") -> InlineGeneBook:
    """
    Open a gene book that queries the database lazily.

    Raises:
        FailedToConnectError: If the database cannot be opened
    """
    id_column = check_id_column(id_column)
    conn = _open(db_path)
    try:
        _warn_if_window_exceeds_build(conn, window, db_path)
    except duckdb.Error:
        conn.close()
        raise
    return InlineGeneBook(conn, window, id_column)


def open_genebook(
    db_path: Path,
    window: int,
    strategy: Strategy = Strategy.IN_MEMORY,
    ids: Optional[Sequence[str]] = None,
    id_column: str = "id",
) -> GeneBook:
    """
    Open a gene book with the given strategy.

    Args:
        db_path: DuckDB database written by a build
        window: Number of neighbours kept on each side of a gene
        strategy: Retrieval strategy
        ids: Ids to preload; required by the cached strategy
        id_column: Column used as lookup key
    """
    strategy = Strategy(strategy)
    if strategy is Strategy.IN_MEMORY:
        return in_memory(db_path, window, id_column)
    if strategy is Strategy.CACHED:
        if ids is None:
            raise ValueError("the cached strategy needs an explicit list of ids")
        return cached(db_path, window, ids, id_column)
    return inline(db_path, window, id_column)
