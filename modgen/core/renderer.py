"""
MODGEN Core - Template Set

Pure rendering functions keyed by ArtifactKind. Each kind has a fixed
relative output path and a Jinja2 template; rendering never touches the
filesystem.
"""

from enum import Enum
from pathlib import PurePosixPath
from typing import List, NamedTuple

from ._template_loader import jinja_env
from .schema import ModuleSpec


class ArtifactKind(Enum):
    """The files generated for every module, in generation order."""

    DATA_SCHEMA = "data_schema"
    DOMAIN_ENTITY = "domain_entity"
    MAPPER = "mapper"
    REPOSITORY_PORT = "repository_port"
    REPOSITORY_IMPL = "repository_impl"
    REPOSITORY_PROVIDER_BINDING = "repository_provider"
    REPOSITORY_AGGREGATOR_MODULE = "repository_module"
    USE_CASE_PROVIDER_BINDING = "use_case_provider"
    USE_CASE_AGGREGATOR_MODULE = "use_case_module"
    ENTRY_POINT_HANDLER = "controller"
    AGGREGATOR_MODULE = "module"

    @property
    def template_name(self) -> str:
        return f"module/{self.value}.ts.j2"


# Relative path of each artifact; {file} is the module's file name
ARTIFACT_PATHS = {
    ArtifactKind.DATA_SCHEMA: "repository/{file}.mongo-entity.ts",
    ArtifactKind.DOMAIN_ENTITY: "domain/{file}.entity.ts",
    ArtifactKind.MAPPER: "domain/{file}.mapper.ts",
    ArtifactKind.REPOSITORY_PORT: "interface/{file}.repository.port.ts",
    ArtifactKind.REPOSITORY_IMPL: "repository/{file}.repository.service.ts",
    ArtifactKind.REPOSITORY_PROVIDER_BINDING: "repository/{file}.repository-provider.ts",
    ArtifactKind.REPOSITORY_AGGREGATOR_MODULE: "repository/{file}.repository.module.ts",
    ArtifactKind.USE_CASE_PROVIDER_BINDING: "use-case/{file}.use-case-provider.ts",
    ArtifactKind.USE_CASE_AGGREGATOR_MODULE: "use-case/{file}.use-case.module.ts",
    ArtifactKind.ENTRY_POINT_HANDLER: "controller/{file}.controller.ts",
    ArtifactKind.AGGREGATOR_MODULE: "{file}.module.ts",
}


class Artifact(NamedTuple):
    """A rendered file, relative to the module root."""

    kind: ArtifactKind
    path: PurePosixPath
    content: str


def template_context(module: ModuleSpec) -> dict:
    """Names shared by every template."""
    return {
        'module': module,
        'name': module.canonical_name,
        'file': module.file_name,
        'var': module.variable_name,
        'collection': module.collection_name,
        'fields': module.fields,
    }


def artifact_path(kind: ArtifactKind, module: ModuleSpec) -> PurePosixPath:
    """Path of an artifact relative to the module root."""
    return PurePosixPath(ARTIFACT_PATHS[kind].format(file=module.file_name))


def render_artifact(kind: ArtifactKind, module: ModuleSpec) -> str:
    """Render the text of a single artifact."""
    template = jinja_env.get_template(kind.template_name)
    return template.render(**template_context(module))


def render_module(module: ModuleSpec) -> List[Artifact]:
    """Render every artifact of a module, one per ArtifactKind."""
    return [
        Artifact(kind, artifact_path(kind, module), render_artifact(kind, module))
        for kind in ArtifactKind
    ]
