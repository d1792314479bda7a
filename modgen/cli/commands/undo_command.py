"""
MODGEN CLI - Undo Command

Reverts generation runs recorded in .modgen/history.json.
"""

import datetime
import sys

import click

from ..history import get_history
from ..utils import CLIError, handle_error, progress_step, success_message
from .helpers import resolve_project_root


@click.command()
@click.option('--list', 'list_ops', is_flag=True, help='List recent operations')
@click.option('--operation-id', '-op', help='Specific operation ID to undo')
@click.option('--force', is_flag=True, help='Skip confirmation prompt')
@click.option('--limit', default=10, help='Number of operations to list (default: 10)')
@click.option('--root', default=None, type=click.Path(file_okay=False),
              help='Project root (defaults to the current directory)')
def undo(list_ops, operation_id, force, limit, root):
    """
    Undo recent generation runs.

    Created files are deleted, modified files (the registry and overwritten
    modules) are restored from backup.

    Examples:
        modgen undo --list                    # List recent operations
        modgen undo                           # Undo last operation
        modgen undo --operation-id op_12345   # Undo specific operation
        modgen undo --force                   # Undo last without confirmation
    """
    try:
        history = get_history(resolve_project_root(root))

        if list_ops:
            _list_operations(history, limit)
            return

        if operation_id:
            operation = history.get_operation(operation_id)
            if not operation:
                raise CLIError(
                    f"Operation '{operation_id}' not found",
                    suggestion="Run 'modgen undo --list' to see available operations.",
                    error_code="U001"
                )
        else:
            operation = history.get_last_operation()
            if not operation:
                click.secho("[INFO] No operations to undo.", fg='yellow')
                return

        _show_operation_details(operation)

        if not force:
            click.echo()
            if not click.confirm("Do you want to undo this operation?", default=False):
                click.secho("[CANCELLED] Operation not undone.", fg='yellow')
                return

        with progress_step("Rolling back operation"):
            try:
                rollback_log = history.rollback_operation(operation)
            except CLIError:
                raise
            except Exception as e:
                raise CLIError(
                    f"Failed to rollback operation: {e}",
                    suggestion="Some files may have been partially rolled back. "
                               "Check the project directory and manually clean up if needed.",
                    error_code="U002"
                )

        success_message(
            f"Successfully rolled back: {operation.command}",
            {
                "Operation ID": operation.operation_id,
                "Files affected": len(rollback_log)
            }
        )

        if rollback_log:
            click.secho("Rollback details:", fg='blue', bold=True)
            for item in rollback_log:
                click.secho(f"  - {item}", fg='cyan')

    except Exception as e:
        handle_error(e, "Undo failed")
        sys.exit(1)


def _list_operations(history, limit):
    """List recent operations."""
    operations = history.list_operations(limit)

    if not operations:
        click.secho("[INFO] No operations in history.", fg='yellow')
        return

    click.secho("\nRecent Operations:", fg='blue', bold=True)
    click.secho("=" * 60, fg='blue')

    for i, op in enumerate(reversed(operations), 1):
        click.secho(f"{i:2d}. {op.operation_id}", fg='green', bold=True, nl=False)
        click.secho(f" - {op.command}", fg='white')
        click.secho(f"    {_format_timestamp(op.timestamp)}", fg='cyan')

        affected_count = len(op.files_created) + len(op.files_modified)
        if affected_count > 0:
            click.secho(f"    Files affected: {affected_count}", fg='yellow')

        click.echo()

    click.secho(f"Showing {len(operations)} most recent operations.", fg='yellow')
    click.secho("Use 'modgen undo --operation-id <ID>' to undo a specific operation.", fg='cyan')


def _show_operation_details(operation):
    """Show detailed information about an operation."""
    click.secho("\nOperation Details:", fg='blue', bold=True)
    click.secho("=" * 40, fg='blue')

    click.secho("ID: ", fg='blue', nl=False)
    click.secho(operation.operation_id, fg='green', bold=True)

    click.secho("Command: ", fg='blue', nl=False)
    click.secho(operation.command, fg='white')

    click.secho("Time: ", fg='blue', nl=False)
    click.secho(_format_timestamp(operation.timestamp), fg='cyan')

    if operation.files_created:
        click.secho(f"\nFiles Created ({len(operation.files_created)}):", fg='yellow')
        for file_path in operation.files_created:
            click.secho(f"  + {file_path}", fg='green')

    if operation.files_modified:
        click.secho(f"\nFiles Modified ({len(operation.files_modified)}):", fg='yellow')
        for file_path in operation.files_modified:
            click.secho(f"  ~ {file_path}", fg='blue')

    if operation.directories_created:
        click.secho(f"\nDirectories Created ({len(operation.directories_created)}):", fg='yellow')
        for dir_path in operation.directories_created:
            click.secho(f"  + {dir_path}/", fg='green')


def _format_timestamp(timestamp):
    return datetime.datetime.fromtimestamp(timestamp).strftime("%Y-%m-%d %H:%M:%S")
