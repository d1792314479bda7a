"""
MODGEN Core - Models Loader

Reads the declarative models description from disk.

Supported formats:
    models.json  - a list of folder groups, or {"models": [...]}
    models.py    - a module exposing a ``models`` variable
"""

import importlib.util
import json
import logging
from pathlib import Path
from typing import Any, List

from .errors import SchemaError


logger = logging.getLogger(__name__)


def _load_json(path: Path) -> Any:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise SchemaError(f"Invalid JSON in {path}: {e}")

    if isinstance(data, dict):
        if "models" not in data:
            raise SchemaError(f"{path} must contain a 'models' list")
        return data["models"]
    return data


def _load_python(path: Path) -> Any:
    module_name = f"modgen_models_{path.stem}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise SchemaError(f"Cannot import models from {path}")

    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except SyntaxError as e:
        raise SchemaError(f"Syntax error in {path}: {e}")

    if not hasattr(module, "models"):
        raise SchemaError(
            f"{path} does not define 'models'",
            suggestion="Declare a module-level variable: models = [{'master': [...]}]",
        )
    return module.models


def load_models(path) -> List[Any]:
    """
    Load the models description from a .json or .py file.

    Raises:
        FileNotFoundError: If the file does not exist
        SchemaError: If the file cannot be parsed or has an unsupported extension
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(2, "Models file not found", str(path))

    suffix = path.suffix.lower()
    if suffix == ".json":
        models = _load_json(path)
    elif suffix == ".py":
        models = _load_python(path)
    else:
        raise SchemaError(
            f"Unsupported models file: {path.name}",
            suggestion="Use a .json file or a .py file defining 'models'.",
        )

    if not isinstance(models, list):
        raise SchemaError(f"'models' in {path} must be a list, got {type(models).__name__}")

    logger.info(f"Loaded {len(models)} folder group(s) from {path}")
    return models
