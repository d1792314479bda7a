"""
MODGEN - Module scaffolding for NestJS + Mongoose backends

Turns a declarative description of data collections into a layered module
(schema, entity, mapper, repository, providers, controller) and registers
each module in the project's resource provider file.

Quick Start:
    from modgen import ModuleGenerator, build_module_specs, load_models

    specs = build_module_specs(load_models("model/models.json"))
    ModuleGenerator(project_root=".").generate_all(specs)

Logging:
    from modgen import setup_logging

    setup_logging(level="DEBUG")  # Generator messages on stderr

Command line:
    modgen generate modules --models model/models.json
    modgen generate use-case
    modgen undo --list
"""

__version__ = "0.1.0"


from modgen.config import Config, DevConfig, ProdConfig
from modgen.core.errors import (
    ModgenError,
    InvalidIdentifierError,
    MarkerNotFoundError,
    DuplicateBindingError,
    SchemaError,
    GenerationError,
)
from modgen.core.schema import FieldSpec, ModuleSpec, parse_fields, build_module_specs
from modgen.core.loader import load_models
from modgen.core.generator import ModuleGenerator
from modgen.logging import get_logger, setup_logging

__all__ = [
    # Core
    "ModuleGenerator",
    "FieldSpec",
    "ModuleSpec",
    "parse_fields",
    "build_module_specs",
    "load_models",
    # Config
    "Config",
    "DevConfig",
    "ProdConfig",
    # Logging
    "get_logger",
    "setup_logging",
    # Errors
    "ModgenError",
    "InvalidIdentifierError",
    "MarkerNotFoundError",
    "DuplicateBindingError",
    "SchemaError",
    "GenerationError",
    # Version
    "__version__",
]
