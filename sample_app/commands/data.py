"""
CLI Commands for sample data.

    flask data seed            # Seed sample data if tables are empty
    flask data seed --force    # Delete everything, then seed
    flask data reset           # Delete every widget and widget type
    flask data stats           # Show table counts
"""

import click
from flask.cli import with_appcontext
from ..extensions import db
from ..services.seed import seed_sample_data, reset_data, is_empty, table_counts


@click.group('data')
def data_cli():
    """Sample data commands."""
    pass


@data_cli.command('seed')
@click.option('--force', is_flag=True, help='Delete existing rows before seeding')
@with_appcontext
def seed(force):
    """Create tables and insert the sample widget types and widgets."""
    db.create_all()

    if force:
        reset_data()
        click.echo('Existing data deleted')
    elif not is_empty():
        click.echo('Tables already contain data, skipping (use --force to reseed)')
        return

    counts = seed_sample_data()
    click.echo(f"Seeded {counts['widgetTypes']['total']} widget types and {counts['widgets']['total']} widgets")


@data_cli.command('reset')
@click.confirmation_option(prompt='Delete every widget and widget type?')
@with_appcontext
def reset():
    """Delete every widget and widget type."""
    reset_data()
    click.echo('All widgets and widget types deleted')


@data_cli.command('stats')
@with_appcontext
def stats():
    """Show widget type and widget counts."""
    counts = table_counts()
    for table, values in counts.items():
        click.echo(f"{table}: {values['total']} total, {values['active']} active")


def init_app(app):
    app.cli.add_command(data_cli)
