"""
MODGEN Core - Module Generator

Orchestrates a generation run: render every artifact of a module, write
them under the module root, then register the module in the resource
provider file.

The run stops at the first failing module. Modules generated before the
failure stay on disk; running again converges because directory creation is
idempotent and files are overwritten.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List

from .errors import GenerationError
from .materializer import MaterializeResult, materialize
from .registry import REGISTRY_MARKER, module_import_line, register_binding
from .renderer import artifact_path, render_module, ArtifactKind
from .schema import ModuleSpec


logger = logging.getLogger(__name__)

DEFAULT_MODULES_DIR = Path("src") / "module"
DEFAULT_REGISTRY_FILE = DEFAULT_MODULES_DIR / "resource.provider.ts"


@dataclass
class ModuleResult:
    """Outcome of generating one module."""

    module: ModuleSpec
    materialized: MaterializeResult
    registered: bool


class ModuleGenerator:
    """
    Generates modules below a project root.

    Usage:
        generator = ModuleGenerator(project_root=Path.cwd())
        for result in generator.generate_all(specs):
            print(result.module.canonical_name, result.registered)
    """

    def __init__(self, project_root=None, modules_dir=None, registry_file=None,
                 registry_marker: str = REGISTRY_MARKER):
        self.project_root = Path(project_root) if project_root else Path.cwd()
        self.modules_dir = self.project_root / (modules_dir or DEFAULT_MODULES_DIR)
        self.registry_path = self.project_root / (registry_file or DEFAULT_REGISTRY_FILE)
        self.registry_marker = registry_marker

    def module_root(self, module: ModuleSpec) -> Path:
        """Directory holding all files of a module."""
        return self.modules_dir / module.folder_name / module.file_name

    def plan(self, module: ModuleSpec) -> List[Path]:
        """Absolute paths of the files a module generates."""
        root = self.module_root(module)
        return [root / artifact_path(kind, module) for kind in ArtifactKind]

    def generate(self, module: ModuleSpec) -> ModuleResult:
        """
        Render, write and register a single module.

        Raises:
            GenerationError: Naming the module and the step that failed
        """
        step = "render"
        try:
            artifacts = render_module(module)

            step = "materialize"
            materialized = materialize(self.module_root(module), artifacts)
            logger.info(
                f"Module {module.canonical_name} written with collection name {module.collection_name}"
            )

            step = "register"
            registered = register_binding(
                self.registry_path,
                module.binding_name,
                module_import_line(module),
                marker=self.registry_marker,
            )
        except Exception as e:
            logger.error(f"Generating {module.collection_name} failed during {step}: {e}")
            raise GenerationError(module.collection_name, step, e) from e

        return ModuleResult(module=module, materialized=materialized, registered=registered)

    def generate_all(self, modules: Iterable[ModuleSpec], on_module=None) -> List[ModuleResult]:
        """
        Generate modules in order, stopping at the first failure.

        Args:
            modules: Module specs to generate
            on_module: Optional callback receiving each ModuleResult as it completes
        """
        results = []
        for module in modules:
            result = self.generate(module)
            results.append(result)
            if on_module is not None:
                on_module(result)
        return results
