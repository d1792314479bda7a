"""
MODGEN CLI - Utilities

Progress indicators and error formatting for CLI commands.
"""

import click
from contextlib import contextmanager

from modgen.core.errors import ModgenError


class CLIError(ModgenError):
    """
    Error raised by CLI commands themselves (not by the generator).

    Attributes:
        message: Error message
        suggestion: Actionable suggestion for the user
        error_code: Optional error code for documentation reference
    """


@contextmanager
def progress_step(message: str):
    """
    Context manager for a single progress step.

    Usage:
        with progress_step("Writing barang.entity.ts"):
            write_file()
    """
    click.secho(f"  [....] {message}", fg='blue', nl=False)
    try:
        yield
        click.echo('\r', nl=False)
        click.secho(f"  [ OK ] {message}", fg='green')
    except Exception:
        click.echo('\r', nl=False)
        click.secho(f"  [FAIL] {message}", fg='red')
        raise


def banner(title: str):
    """Print a command banner."""
    click.secho("\n" + "=" * 50, fg='cyan', bold=True)
    click.secho(title, fg='cyan', bold=True)
    click.secho("=" * 50 + "\n", fg='cyan', bold=True)


def handle_error(error: Exception, context: str = None):
    """
    Print an error with its suggestion.

    Args:
        error: The exception that occurred
        context: Optional context about what operation failed
    """
    click.echo()

    if isinstance(error, ModgenError):
        if error.error_code:
            click.secho(f"[ERROR {error.error_code}] ", fg='red', bold=True, nl=False)
        else:
            click.secho("[ERROR] ", fg='red', bold=True, nl=False)

        click.secho(error.message, fg='red')

        if error.suggestion:
            click.secho("\n[TIP] ", fg='yellow', bold=True, nl=False)
            click.secho(error.suggestion, fg='yellow')

    elif isinstance(error, FileNotFoundError):
        click.secho("[ERROR] ", fg='red', bold=True, nl=False)
        click.secho(f"File not found: {error.filename or error}", fg='red')
        click.secho("\n[TIP] ", fg='yellow', bold=True, nl=False)
        click.secho("Check that the file path is correct and the file exists.", fg='yellow')

    elif isinstance(error, PermissionError):
        click.secho("[ERROR] ", fg='red', bold=True, nl=False)
        click.secho(f"Permission denied: {error.filename or error}", fg='red')
        click.secho("\n[TIP] ", fg='yellow', bold=True, nl=False)
        click.secho("Check file permissions or run with appropriate privileges.", fg='yellow')

    else:
        click.secho("[ERROR] ", fg='red', bold=True, nl=False)
        if context:
            click.secho(f"{context}: {error}", fg='red')
        else:
            click.secho(str(error), fg='red')

    click.echo()


def success_message(message: str, details: dict = None):
    """
    Display a success message with optional details.

    Args:
        message: Main success message
        details: Optional dict of key-value details to display
    """
    click.echo()
    click.secho("=" * 50, fg='green', bold=True)
    click.secho(f"[SUCCESS] {message}", fg='green', bold=True)
    click.secho("=" * 50, fg='green', bold=True)

    if details:
        click.echo()
        for key, value in details.items():
            click.secho(f"  {key}: ", fg='blue', nl=False)
            click.secho(str(value), fg='cyan')

    click.echo()


def next_steps(steps: list, title: str = "Next Steps"):
    """
    Display next steps for the user.

    Args:
        steps: List of step strings
        title: Section title
    """
    click.echo()
    click.secho(f"{title}:", fg='yellow', bold=True)

    for i, step in enumerate(steps, 1):
        click.secho(f"  {i}. ", fg='yellow', nl=False)
        click.secho(step, fg='cyan')

    click.echo()
