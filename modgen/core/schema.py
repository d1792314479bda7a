"""
MODGEN Core - Schema Model

Normalizes the declarative models description into typed module specs.

Input shape:
    [
        {"master": [
            {"tm_barang": {"kode_barcode": "string", "stok?": "number"}},
        ]},
    ]
"""

from dataclasses import dataclass, field
from typing import Any, List, Mapping, Sequence, Tuple

from modgen.config import Config
from .errors import InvalidIdentifierError, SchemaError
from .naming import extract_module_name, to_file_name, to_variable_name


# Trailing marker on a field key that makes the field optional
OPTIONAL_MARKER = Config.Internal.OPTIONAL_MARKER


@dataclass(frozen=True)
class FieldSpec:
    """A single property of a generated entity."""

    name: str
    type: str
    required: bool = True


@dataclass(frozen=True)
class ModuleSpec:
    """Everything the templates need to render one module."""

    folder_group: str
    canonical_name: str
    collection_name: str
    fields: Tuple[FieldSpec, ...] = field(default_factory=tuple)

    @property
    def file_name(self) -> str:
        return to_file_name(self.canonical_name)

    @property
    def variable_name(self) -> str:
        return to_variable_name(self.canonical_name)

    @property
    def folder_name(self) -> str:
        return self.folder_group.lower()

    @property
    def binding_name(self) -> str:
        """Symbol registered in the resource provider array."""
        return f"{self.canonical_name}Module"


def parse_fields(raw: Mapping[str, str]) -> List[FieldSpec]:
    """
    Convert a field map into FieldSpecs, keeping insertion order.

    A key ending in ``?`` is optional: the marker is stripped and the field
    gets required=False.

    Examples:
        {"name": "string", "qty?": "number"}
        -> [FieldSpec("name", "string", True), FieldSpec("qty", "number", False)]
    """
    fields = []
    for key, type_name in raw.items():
        if key.endswith(OPTIONAL_MARKER):
            fields.append(FieldSpec(name=key[:-len(OPTIONAL_MARKER)], type=type_name, required=False))
        else:
            fields.append(FieldSpec(name=key, type=type_name, required=True))
    return fields


def build_module_spec(folder_group: str, collection_name: str, field_map: Mapping[str, str]) -> ModuleSpec:
    """
    Build the ModuleSpec for one collection.

    Raises:
        InvalidIdentifierError: If the collection has no known prefix or no name after it
        SchemaError: If the field map is not a mapping of strings
    """
    canonical_name = extract_module_name(collection_name)
    if not canonical_name:
        raise InvalidIdentifierError(
            collection_name,
            f"Invalid collection name '{collection_name}': nothing left after the prefix",
        )

    if not isinstance(field_map, Mapping):
        raise SchemaError(f"Fields of '{collection_name}' must be a mapping, got {type(field_map).__name__}")
    for key, type_name in field_map.items():
        if not isinstance(key, str) or not isinstance(type_name, str):
            raise SchemaError(f"Field '{key}' of '{collection_name}' must map a name to a type string")

    return ModuleSpec(
        folder_group=folder_group,
        canonical_name=canonical_name,
        collection_name=collection_name,
        fields=tuple(parse_fields(field_map)),
    )


def build_module_specs(models: Sequence[Mapping[str, Any]]) -> List[ModuleSpec]:
    """
    Build every module spec declared in a models description.

    All specs are built up front so that a bad identifier anywhere stops
    the run before a single file is written.

    Raises:
        SchemaError: If the description has the wrong shape or declares a module name twice
        InvalidIdentifierError: If a collection name is not recognised
    """
    if isinstance(models, (str, bytes)) or not isinstance(models, Sequence):
        raise SchemaError(f"Models must be a list of folder groups, got {type(models).__name__}")

    specs = []
    seen = {}
    locations = {}
    for group in models:
        if not isinstance(group, Mapping):
            raise SchemaError(f"Folder group must be a mapping, got {type(group).__name__}")

        for folder_group, collections in group.items():
            if isinstance(collections, (str, bytes)) or not isinstance(collections, Sequence):
                raise SchemaError(f"Folder group '{folder_group}' must hold a list of collections")

            for entry in collections:
                if not isinstance(entry, Mapping):
                    raise SchemaError(f"Collections in '{folder_group}' must be {{name: fields}} mappings")

                for collection_name, field_map in entry.items():
                    spec = build_module_spec(folder_group, collection_name, field_map)
                    # Module symbols share one namespace in the registry
                    if spec.binding_name in seen:
                        raise SchemaError(
                            f"Module '{spec.canonical_name}' is declared twice "
                            f"('{seen[spec.binding_name]}' and '{collection_name}')",
                            suggestion="Collections must have distinct names after their prefix, "
                                       "even across folder groups.",
                        )
                    seen[spec.binding_name] = collection_name

                    location = (spec.folder_name, spec.file_name)
                    if location in locations:
                        raise SchemaError(
                            f"Modules '{locations[location]}' and '{collection_name}' would both be "
                            f"written to {spec.folder_name}/{spec.file_name}",
                            suggestion="Rename one of the collections.",
                        )
                    locations[location] = collection_name
                    specs.append(spec)

    return specs
