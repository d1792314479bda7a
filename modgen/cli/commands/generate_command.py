"""
MODGEN CLI - Generate Commands

Handles code generation for modules and use cases.
"""

import sys
from pathlib import Path

import click
import questionary

from modgen.config import Config
from modgen.core.generator import ModuleGenerator
from modgen.core.loader import load_models
from modgen.core.registry import module_import_line
from modgen.core.schema import build_module_specs
from modgen.core.usecase import MODULE_FILE_PATTERN, find_module_files, generate_use_case, use_case_paths
from ..history import OperationTracker
from ..utils import CLIError, banner, handle_error, next_steps, progress_step, success_message
from .helpers import custom_style, relative_to_root, require_registry, resolve_project_root, validate_models_file


@click.group()
def generate():
    """
    Generate code (modules, use cases)

    Available generators:
    - modules: Generate every module declared in the models file
    - use-case: Add a create use case to existing modules
    """
    pass


@generate.command(name='modules')
@click.option('--models', default=None, callback=validate_models_file,
              help='Models file (.json or .py). Defaults to MODGEN_MODELS_FILE.')
@click.option('--root', default=None, type=click.Path(file_okay=False),
              help='Project root (defaults to the current directory)')
@click.option('--registry', default=None,
              help='Resource provider file, relative to the project root')
@click.option('--dry-run', is_flag=True, default=False,
              help='Preview changes without writing files')
def generate_modules(models, root, registry, dry_run):
    """
    Generate modules from a models file.

    Each collection becomes a module under src/module/<folder>/<name>/ and
    is registered in src/module/resource.provider.ts.

    WARNING: generated files are overwritten on every run.

    Examples:
        modgen generate modules
        modgen generate modules --models model/models.json
        modgen generate modules --models model/index.py --dry-run
    """
    banner("Generating Modules")

    try:
        project_root = resolve_project_root(root)
        models_path = project_root / (models or Config.MODELS_FILE)
        specs = build_module_specs(load_models(models_path))

        if not specs:
            click.secho(f"[INFO] No modules declared in {models_path}", fg='yellow', bold=True)
            return

        generator = ModuleGenerator(
            project_root,
            modules_dir=Config.MODULES_DIR,
            registry_file=registry or Config.REGISTRY_FILE,
            registry_marker=Config.Internal.REGISTRY_MARKER,
        )

        if dry_run:
            _show_plan(generator, specs, project_root)
            return

        require_registry(generator.registry_path)

        existing = [path for spec in specs for path in generator.plan(spec) if path.exists()]
        if existing:
            click.secho(f"[WARN] {len(existing)} generated file(s) will be overwritten. "
                        f"Manual edits to them are lost.", fg='yellow', bold=True)
            click.echo()

        registered = 0
        with OperationTracker("generate modules", {"models": str(models_path)}, project_root) as tracker:
            tracker.track_file_modification(generator.registry_path)
            for path in existing:
                tracker.track_file_modification(path)

            for spec in specs:
                with progress_step(f"{spec.folder_name}/{spec.file_name} ({spec.collection_name})"):
                    result = generator.generate(spec)

                for directory in result.materialized.directories_created:
                    tracker.track_directory_creation(directory)
                for path in result.materialized.files_created:
                    tracker.track_file_creation(path)

                if result.registered:
                    registered += 1
                else:
                    click.secho(f"         {spec.binding_name} already registered", fg='cyan')

        success_message(
            f"Generated {len(specs)} module(s)",
            {
                "Models": relative_to_root(models_path, project_root),
                "Registered": registered,
                "Operation ID": tracker.operation.operation_id,
            }
        )
        next_steps([
            "Add fields to the generated DTOs in controller/dto/",
            "Run 'modgen generate use-case' to add create use cases",
            "Run 'modgen undo' to revert this run",
        ])

    except Exception as e:
        handle_error(e, "Failed to generate modules")
        sys.exit(1)


def _show_plan(generator: ModuleGenerator, specs, project_root: Path):
    """Dry-run preview of the files a run would write."""
    click.secho("[DRY-RUN] Preview of changes (no files will be written):", fg='yellow', bold=True)
    click.secho("=" * 50, fg='yellow')

    for spec in specs:
        click.secho(f"\nModule {spec.canonical_name} ", fg='green', bold=True, nl=False)
        click.secho(f"(collection: {spec.collection_name})", fg='magenta')
        for path in generator.plan(spec):
            action = "overwrite" if path.exists() else "create"
            click.secho(f"  Would {action}: {relative_to_root(path, project_root)}", fg='cyan')

    click.secho(f"\nWould register in {relative_to_root(generator.registry_path, project_root)}:", fg='blue')
    for spec in specs:
        click.secho(f"  {module_import_line(spec)}", fg='white')

    click.secho("\n[TIP] Remove --dry-run flag to write files.", fg='blue')
    click.echo()


@generate.command(name='use-case')
@click.option('--module', 'module_files', multiple=True,
              help='Module file (e.g. src/module/master/barang/barang.module.ts). Repeatable.')
@click.option('--root', default=None, type=click.Path(file_okay=False),
              help='Project root (defaults to the current directory)')
def generate_use_case_command(module_files, root):
    """
    Generate a create use case for existing modules.

    Without --module, an interactive checkbox lists every module found.

    Examples:
        modgen generate use-case
        modgen generate use-case --module src/module/master/barang/barang.module.ts
    """
    banner("Generating Use Cases")

    try:
        project_root = resolve_project_root(root)
        modules_dir = project_root / Config.MODULES_DIR

        if module_files:
            selected = [_validate_module_file(project_root / module_file) for module_file in module_files]
        else:
            found = find_module_files(modules_dir)
            if not found:
                click.secho(f"[INFO] No modules found in {modules_dir}", fg='yellow', bold=True)
                return

            selected = questionary.checkbox(
                "Select the modules to generate a use case for:",
                choices=[
                    questionary.Choice(relative_to_root(path, modules_dir), value=path)
                    for path in found
                ],
                style=custom_style
            ).ask()

        if not selected:
            click.secho("[INFO] There is no module selected.", fg='yellow')
            return

        with OperationTracker("generate use-case", {"modules": [str(p) for p in selected]}, project_root) as tracker:
            for module_file in selected:
                targets = use_case_paths(module_file)
                for path in targets:
                    if path.exists():
                        tracker.track_file_modification(path)
                created = [path for path in targets if not path.exists()]

                with progress_step(f"create use case for {relative_to_root(module_file, modules_dir)}"):
                    generate_use_case(module_file)

                for path in created:
                    tracker.track_file_creation(path)

        success_message(f"Generated {len(selected)} use case(s)")

    except Exception as e:
        handle_error(e, "Failed to generate use case")
        sys.exit(1)


def _validate_module_file(path: Path) -> Path:
    """
    Raises:
        CLIError: If path is not a module aggregator file
    """
    if not path.is_file() or not MODULE_FILE_PATTERN.match(path.name):
        raise CLIError(
            f"Not a module file: {path}",
            suggestion="Pass the top-level <name>.module.ts file of a generated module.",
            error_code="E002"
        )
    return path.resolve()
