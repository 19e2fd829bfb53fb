import click
import logging
from flask.cli import with_appcontext
from .models import db
from .utils import REFERENCES, find_dangling_references

logger = logging.getLogger(__name__)


@click.command('init-db')
@with_appcontext
def init_db_command():
    """Create the database tables for every record type."""
    logger.info("Starting database initialization")
    db.create_all()
    logger.info("Database tables created successfully")
    click.echo('Initialized the database.')


@click.command('check-references')
@click.option('--collection', type=click.Choice(list(REFERENCES)),
              help='Only check one collection')
@with_appcontext
def check_references_command(collection):
    """Report records whose reference points at a record that no longer exists."""
    logger.info("Checking by-id references between collections")
    dangling = find_dangling_references(collection)

    if not dangling:
        click.echo('No dangling references found.')
        return

    for name, ids in dangling.items():
        click.echo(f"{name}: {len(ids)} dangling reference(s): {', '.join(str(i) for i in ids)}")
        logger.warning(f"Dangling references in {name}: {ids}")
    raise click.exceptions.Exit(1)
