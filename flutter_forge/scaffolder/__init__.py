"""FlutterForge scaffolder -- renders Dart source trees.

Every template is a pure function from its parameters to a ``FileSet``; only
:mod:`flutter_forge.scaffolder.writer` touches the filesystem.

Quick usage::

    from flutter_forge.scaffolder import GenerationRequest, TargetKind, generate

    request = GenerationRequest(
        kind=TargetKind.MODEL,
        name="Task",
        fields=["id:String", "title:String", "dueDate:DateTime?@due_date"],
    )
    files = generate(request)
"""

from flutter_forge.scaffolder.entity_template import EntityTemplate
from flutter_forge.scaffolder.errors import (
    DuplicateFieldError,
    InvalidNameError,
    MalformedFieldSpecError,
    OutputExistsError,
    ProjectNameError,
    ScaffoldError,
    UnknownMethodWarning,
)
from flutter_forge.scaffolder.feature_template import FeatureTemplate
from flutter_forge.scaffolder.fields import FieldSpec, parse_field_specs
from flutter_forge.scaffolder.fileset import FileSet
from flutter_forge.scaffolder.model_template import ModelTemplate
from flutter_forge.scaffolder.project_template import (
    BUILTIN_FEATURES,
    ArchitecturePattern,
    ProjectTemplate,
    StateManagement,
)
from flutter_forge.scaffolder.repository_template import (
    METHOD_CATALOG,
    RepositoryLayout,
    RepositoryTemplate,
)
from flutter_forge.scaffolder.request import GenerationRequest, TargetKind, generate
from flutter_forge.scaffolder.templates import TemplateRenderer
from flutter_forge.scaffolder.writer import project_exists, write_fileset

__all__ = [
    "ArchitecturePattern",
    "BUILTIN_FEATURES",
    "DuplicateFieldError",
    "EntityTemplate",
    "FeatureTemplate",
    "FieldSpec",
    "FileSet",
    "GenerationRequest",
    "InvalidNameError",
    "METHOD_CATALOG",
    "MalformedFieldSpecError",
    "ModelTemplate",
    "OutputExistsError",
    "ProjectNameError",
    "ProjectTemplate",
    "RepositoryLayout",
    "RepositoryTemplate",
    "ScaffoldError",
    "StateManagement",
    "TargetKind",
    "TemplateRenderer",
    "UnknownMethodWarning",
    "generate",
    "parse_field_specs",
    "project_exists",
    "write_fileset",
]
