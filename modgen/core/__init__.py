"""
MODGEN Core - Code Generation Engine

Naming, schema, rendering, file output and registry patching.
"""

from .errors import (
    ModgenError,
    InvalidIdentifierError,
    MarkerNotFoundError,
    DuplicateBindingError,
    SchemaError,
    GenerationError,
)
from .naming import to_canonical_name, strip_known_prefix, extract_module_name
from .schema import FieldSpec, ModuleSpec, parse_fields, build_module_spec, build_module_specs
from .renderer import ArtifactKind, Artifact, render_artifact, render_module
from .materializer import materialize, MaterializeResult
from .registry import register_binding, RegistryDocument, module_import_line
from .generator import ModuleGenerator, ModuleResult

__all__ = [
    "ModgenError",
    "InvalidIdentifierError",
    "MarkerNotFoundError",
    "DuplicateBindingError",
    "SchemaError",
    "GenerationError",
    "to_canonical_name",
    "strip_known_prefix",
    "extract_module_name",
    "FieldSpec",
    "ModuleSpec",
    "parse_fields",
    "build_module_spec",
    "build_module_specs",
    "ArtifactKind",
    "Artifact",
    "render_artifact",
    "render_module",
    "materialize",
    "MaterializeResult",
    "register_binding",
    "RegistryDocument",
    "module_import_line",
    "ModuleGenerator",
    "ModuleResult",
]
