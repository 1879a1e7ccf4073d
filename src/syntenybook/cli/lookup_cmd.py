"""Query commands: look genes up in a landscape database."""

import logging
import sys
from pathlib import Path

import click
import duckdb

from syntenybook.config.loader import load_config_with_overrides
from syntenybook.errors import SyntenyBookError, UnknownIdError
from syntenybook.genebook import Strategy, open_genebook
from syntenybook.genebook.models import Gene

logger = logging.getLogger(__name__)


def format_landscape(gene: Gene) -> str:
    """Render a landscape as tokens, with the gene itself in brackets."""
    left = [t.to_token() for t in gene.left_landscape]
    right = [t.to_token() for t in gene.right_landscape]
    return " ".join([*left, f"[{gene.as_tail_gene().to_token()}]", *right])


def _load(config_path, window, strategy, database):
    return load_config_with_overrides(config_path, {
        'query.window': window,
        'query.strategy': strategy,
        'database': database,
    })


@click.command('lookup')
@click.argument('ids', nargs=-1, required=True)
@click.option(
    '--window',
    type=click.IntRange(min=0),
    default=None,
    help='Override the number of neighbours returned on each side'
)
@click.option(
    '--strategy',
    type=click.Choice([s.value for s in Strategy]),
    default=None,
    help='Override the retrieval strategy'
)
@click.option(
    '--database',
    type=click.Path(path_type=Path),
    default=None,
    help='Override the DuckDB database path'
)
@click.pass_context
def lookup(ctx, ids, window, strategy, database):
    """Print the landscape of one or more genes.

    Unknown ids are reported and make the command exit with status 1
    once every id has been processed.
    """
    config_path = ctx.obj['config_path']

    try:
        config = _load(config_path, window, strategy, database)
        book = open_genebook(
            config.database,
            config.query.window,
            strategy=config.query.strategy,
            ids=list(ids),
            id_column=config.query.id_column,
        )
    except (SyntenyBookError, FileNotFoundError, ValueError) as e:
        click.echo(click.style(f"Error: {e}", fg='red'), err=True)
        logger.debug("Opening gene book failed", exc_info=True)
        sys.exit(1)

    missing = 0
    with book:
        for gene_id in ids:
            try:
                gene = book.lookup(gene_id)
            except UnknownIdError as e:
                click.echo(click.style(str(e), fg='yellow'), err=True)
                missing += 1
                continue
            except (SyntenyBookError, duckdb.Error) as e:
                click.echo(click.style(f"Error: {e}", fg='red'), err=True)
                logger.debug("Lookup failed", exc_info=True)
                sys.exit(1)
            click.echo(
                f"{gene.id}\t{gene.species}\t{gene.chromosome}\t{gene.position}\t"
                f"{gene.strand.char}\t{gene.family}\t{format_landscape(gene)}"
            )

    if missing:
        sys.exit(1)


@click.command('species')
@click.option(
    '--database',
    type=click.Path(path_type=Path),
    default=None,
    help='Override the DuckDB database path'
)
@click.pass_context
def species(ctx, database):
    """List the species present in a landscape database."""
    config_path = ctx.obj['config_path']

    try:
        config = _load(config_path, None, Strategy.INLINE.value, database)
        with open_genebook(config.database, config.query.window, strategy=Strategy.INLINE) as book:
            names = book.species()
    except (SyntenyBookError, FileNotFoundError, ValueError) as e:
        click.echo(click.style(f"Error: {e}", fg='red'), err=True)
        sys.exit(1)

    for name in names:
        click.echo(name)
