"""Main CLI entry point for syntenybook.

Provides the command group with global options and the subcommands.
"""

import logging
from pathlib import Path

import click

from syntenybook import __version__
from syntenybook.config.loader import load_config
from syntenybook.cli.build_cmd import build, export
from syntenybook.cli.lookup_cmd import lookup, species


logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


@click.group()
@click.option(
    '--config',
    type=click.Path(path_type=Path),
    default='config/default.yaml',
    help='Path to configuration YAML file'
)
@click.option(
    '--verbose',
    is_flag=True,
    help='Enable verbose logging (DEBUG level)'
)
@click.pass_context
def cli(ctx, config, verbose):
    """Syntenybook: build and query per-gene synteny landscapes.

    Indexes annotated genomes against gene families and serves, for any
    gene, the families and strands of its chromosomal neighbours.
    """
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config
    ctx.obj['verbose'] = verbose

    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logging.debug("Verbose logging enabled")


@cli.command()
@click.pass_context
def info(ctx):
    """Display version and configuration summary."""
    config_path = ctx.obj['config_path']

    click.echo(f"Syntenybook v{__version__}")
    click.echo(f"Config: {config_path}")
    click.echo()

    try:
        config = load_config(config_path)

        config_hash = config.config_hash()
        click.echo(f"Config Hash: {config_hash[:16]}...")
        click.echo()

        click.echo(click.style("Build:", bold=True))
        click.echo(f"  Database:        {config.database}")
        click.echo(f"  Family sources:  {len(config.build.families)}")
        click.echo(f"  Genome sources:  {len(config.build.genomes)}")
        click.echo(f"  Species pattern: {config.build.species_pattern}")
        click.echo(f"  ID pattern:      {config.build.id_pattern}")
        click.echo(f"  Feature class:   {config.build.feature_class}")
        click.echo(f"  Window:          {config.build.window}")
        click.echo()

        click.echo(click.style("Query:", bold=True))
        click.echo(f"  Window:    {config.query.window}")
        click.echo(f"  Strategy:  {config.query.strategy.value}")
        click.echo(f"  ID column: {config.query.id_column}")

    except Exception as e:
        click.echo(click.style(f"Error loading config: {e}", fg='red'), err=True)
        ctx.exit(1)


cli.add_command(build)
cli.add_command(export)
cli.add_command(lookup)
cli.add_command(species)


if __name__ == '__main__':
    cli()
