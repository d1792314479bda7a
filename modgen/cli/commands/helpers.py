"""
MODGEN CLI - Shared Helper Functions

Utility functions used across CLI commands.
"""

from pathlib import Path

import click
from questionary import Style

from modgen.config import Config
from ..utils import CLIError


# Custom style for questionary prompts
custom_style = Style([
    ('qmark', 'fg:#673ab7 bold'),          # Question mark
    ('question', 'bold'),                   # Question text
    ('answer', 'fg:#2196f3 bold'),         # Selected answer
    ('pointer', 'fg:#673ab7 bold'),        # Selection pointer
    ('highlighted', 'fg:#2196f3 bold'),    # Highlighted choice
    ('selected', 'fg:#4caf50 bold'),       # Selected choice
    ('separator', 'fg:#cc5454'),           # Separator
    ('instruction', ''),                    # Instructions
    ('text', ''),                           # Plain text
    ('disabled', 'fg:#858585 italic')      # Disabled choices
])


def resolve_project_root(root) -> Path:
    """Project root from --root, falling back to Config.PROJECT_ROOT."""
    return Path(root or Config.PROJECT_ROOT).resolve()


def require_registry(registry_path: Path):
    """
    Check the resource provider file exists before generating anything.

    Raises:
        CLIError: If the registry file is missing
    """
    if not registry_path.is_file():
        raise CLIError(
            f"Registry file not found: {registry_path}",
            suggestion="Run modgen from the project root, pass --root, or set MODGEN_REGISTRY_FILE.\n"
                       f"  The file must declare: {Config.Internal.REGISTRY_MARKER} = [];",
            error_code="E001"
        )


def relative_to_root(path: Path, root: Path) -> str:
    """Display a path relative to the project root when possible."""
    try:
        return str(Path(path).relative_to(root))
    except ValueError:
        return str(path)


def validate_models_file(ctx, param, value):
    """
    Validate the --models option for Click commands.

    Raises:
        click.BadParameter: If the extension is not supported
    """
    if value is None:
        return None

    if Path(value).suffix.lower() not in ('.json', '.py'):
        raise click.BadParameter("Models file must be a .json or .py file")

    return value
