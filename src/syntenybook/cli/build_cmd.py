"""Build command: index annotated genomes into the genomes table.

Orchestrates the full build flow:
1. Load config (with command-line overrides)
2. Parse family files into the family index
3. Parse annotation files into sorted per-chromosome gene lists
4. Compute landscapes and write them to DuckDB with provenance
"""

import logging
import sys
from pathlib import Path

import click
import duckdb

from syntenybook.config.loader import load_config_with_overrides
from syntenybook.errors import SyntenyBookError
from syntenybook.ingest import build_database
from syntenybook.persistence import GenomeStore, ProvenanceTracker

logger = logging.getLogger(__name__)


@click.command('build')
@click.option(
    '--window',
    type=click.IntRange(min=0),
    default=None,
    help='Override the number of neighbours stored on each side of a gene'
)
@click.option(
    '--database',
    type=click.Path(path_type=Path),
    default=None,
    help='Override the DuckDB database path'
)
@click.option(
    '--chrom-table',
    is_flag=True,
    help='Read annotation files as chromosome tables'
)
@click.option(
    '--provenance',
    'provenance_path',
    type=click.Path(path_type=Path),
    default=None,
    help='Also write provenance metadata to a JSON sidecar next to this path'
)
@click.pass_context
def build(ctx, window, database, chrom_table, provenance_path):
    """Build the landscape database from family and annotation files.

    The genomes table is dropped and rebuilt from scratch on every run.

    Examples:

        # Build with the settings of the config file
        syntenybook build

        # Store 20 neighbours per side in another database
        syntenybook build --window 20 --database out/genomes.duckdb
    """
    config_path = ctx.obj['config_path']

    click.echo(click.style("=== Syntenybook Build ===", bold=True))
    click.echo()

    try:
        click.echo("Loading configuration...")
        config = load_config_with_overrides(config_path, {
            'build.window': window,
            'database': database,
            'build.chrom_table': True if chrom_table else None,
        })
        click.echo(click.style(f"  Config loaded: {config_path}", fg='green'))
        click.echo(f"  Database: {config.database}")
        click.echo(f"  Window: {config.build.window}")
        click.echo()

        provenance = ProvenanceTracker.from_config(config)
        click.echo("Building database...")
        summary = build_database(config, provenance)

        if provenance_path is not None:
            sidecar = provenance.save_sidecar(provenance_path)
            click.echo(f"  Provenance: {sidecar}")

    except (SyntenyBookError, FileNotFoundError, ValueError) as e:
        click.echo(click.style(f"Build failed: {e}", fg='red'), err=True)
        logger.debug("Build failed", exc_info=True)
        sys.exit(1)

    click.echo()
    click.echo(click.style("=== Build Summary ===", bold=True))
    click.echo(f"Species: {summary['species_count']}")
    click.echo(f"Genes:   {summary['gene_count']}")
    click.echo(f"Families: {summary['family_count']}")
    click.echo(f"Window:  {summary['window']}")
    click.echo()
    click.echo(click.style("Build complete", fg='green'))


@click.command('export')
@click.argument('output', type=click.Path(path_type=Path))
@click.option(
    '--database',
    type=click.Path(path_type=Path),
    default=None,
    help='Override the DuckDB database path'
)
@click.pass_context
def export(ctx, output, database):
    """Export the genomes table to a Parquet file."""
    config_path = ctx.obj['config_path']

    try:
        config = load_config_with_overrides(config_path, {'database': database})
        with GenomeStore.from_config(config) as store:
            store.export_parquet(output)
            rows = store.count_rows()
    except (SyntenyBookError, FileNotFoundError, ValueError, duckdb.Error) as e:
        click.echo(click.style(f"Export failed: {e}", fg='red'), err=True)
        sys.exit(1)

    click.echo(click.style(f"Exported {rows} rows to {output}", fg='green'))
