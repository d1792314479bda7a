"""
MODGEN CLI Entry Point

Scaffolding for NestJS + Mongoose modules from a declarative models file.
"""

import click

from modgen.config import Config
from modgen.logging import setup_logging
from modgen.cli.commands import generate, undo


def _version_callback(ctx, param, value):
    """Display version and exit."""
    if value:
        from modgen import __version__
        click.echo(f'MODGEN CLI v{__version__}')
        ctx.exit()


@click.group()
@click.option('--version', '-V', is_flag=True, callback=_version_callback, expose_value=False, is_eager=True, help='Show version and exit')
@click.option('--env-file', default=None, help='Environment file to load (defaults to .env)')
@click.option('--verbose', '-v', is_flag=True, default=False, help='Show generator log messages')
def cli(env_file, verbose):
    """
    MODGEN CLI - Module scaffolding for NestJS + Mongoose

    Generates layered modules from a models file and registers them in
    the resource provider file.
    """
    Config.load_from_env(env_file)
    try:
        Config.validate()
    except ValueError as e:
        raise click.ClickException(f"Invalid configuration: {e}")

    if verbose:
        setup_logging(level="DEBUG")
    elif Config.VERBOSE_LOGGING:
        setup_logging(level=Config.LOG_LEVEL)
    else:
        setup_logging(level="WARNING")


# Register all command groups
cli.add_command(generate)
cli.add_command(undo)


if __name__ == '__main__':
    cli()
