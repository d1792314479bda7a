"""
MODGEN Core - Use-Case Generator

Adds a "create" use case and its request DTO to modules that were already
generated. Modules are discovered by their top-level ``<name>.module.ts``
aggregator file.
"""

import logging
import re
from pathlib import Path
from typing import List

from ._template_loader import jinja_env
from .naming import to_canonical_name, to_file_name, to_variable_name


logger = logging.getLogger(__name__)

# Top-level aggregators only; barang.repository.module.ts has an extra dot
MODULE_FILE_PATTERN = re.compile(r"^[a-z0-9_-]+\.module\.ts$")


def find_module_files(modules_dir) -> List[Path]:
    """
    Recursively find module aggregator files below modules_dir.

    Returns:
        Sorted list of matching files (empty if the directory does not exist)
    """
    modules_dir = Path(modules_dir)
    if not modules_dir.is_dir():
        return []
    return sorted(
        path for path in modules_dir.rglob("*.module.ts")
        if path.is_file() and MODULE_FILE_PATTERN.match(path.name)
    )


def _context(canonical_name: str) -> dict:
    return {
        'name': canonical_name,
        'file': to_file_name(canonical_name),
        'var': to_variable_name(canonical_name),
    }


def render_create_dto(canonical_name: str) -> str:
    """zod request DTO for the create use case."""
    return jinja_env.get_template("use_case/create_dto.ts.j2").render(**_context(canonical_name))


def render_create_use_case(canonical_name: str) -> str:
    """Create<Name>UseCase wired to the module's repository provider."""
    return jinja_env.get_template("use_case/create_use_case.ts.j2").render(**_context(canonical_name))


def canonical_name_for(module_file: Path) -> str:
    """barang.module.ts -> Barang, kode-group.module.ts -> KodeGroup"""
    stem = Path(module_file).name[:-len(".module.ts")]
    return to_canonical_name(stem)


def use_case_paths(module_file) -> List[Path]:
    """DTO and use-case files generated for a module aggregator, DTO first."""
    module_root = Path(module_file).parent
    file_name = to_file_name(canonical_name_for(module_file))
    return [
        module_root / "controller" / "dto" / f"create-{file_name}-request.dto.ts",
        module_root / "use-case" / f"create-{file_name}.use-case.ts",
    ]


def generate_use_case(module_file) -> List[Path]:
    """
    Write the create use case and its DTO next to a module aggregator.

    Files are overwritten, like every generated file.

    Returns:
        Paths written, DTO first
    """
    module_file = Path(module_file)
    module_root = module_file.parent
    canonical_name = canonical_name_for(module_file)
    dto_file, use_case_file = use_case_paths(module_file)

    dto_file.parent.mkdir(parents=True, exist_ok=True)
    use_case_file.parent.mkdir(parents=True, exist_ok=True)

    dto_file.write_text(render_create_dto(canonical_name), encoding="utf-8")
    use_case_file.write_text(render_create_use_case(canonical_name), encoding="utf-8")

    logger.info(f"Create use case for {canonical_name} written to {module_root}")
    return [dto_file, use_case_file]
