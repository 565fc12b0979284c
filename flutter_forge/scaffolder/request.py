"""Structured generation requests.

:class:`GenerationRequest` captures every decision for one generation call
and :func:`generate` turns it into a project-relative :class:`FileSet`.
Field specs are parsed and names validated up front, so a bad request fails
before any template renders.
"""

from __future__ import annotations

import posixpath
from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field, model_validator

from .components import render_page, render_service, render_use_case, render_widget
from .entity_template import EntityTemplate
from .feature_template import FeatureTemplate
from .fields import FieldSpec, parse_field_specs
from .fileset import FileSet
from .model_template import ModelTemplate
from .naming import canonical_snake_case, validate_name
from .project_template import DEFAULT_ORG, ArchitecturePattern, ProjectTemplate, StateManagement
from .repository_template import RepositoryLayout, RepositoryTemplate

if TYPE_CHECKING:
    from ..config import ForgeConfig


class TargetKind(str, Enum):
    """What a request generates."""
    ENTITY = "entity"
    MODEL = "model"
    REPOSITORY = "repository"
    FEATURE = "feature"
    PROJECT = "project"
    USECASE = "usecase"
    WIDGET = "widget"
    PAGE = "page"
    SERVICE = "service"


_NEEDS_FEATURE = {TargetKind.USECASE, TargetKind.PAGE}


class GenerationRequest(BaseModel):
    """All inputs of one generation call.

    Only the options relevant to ``kind`` are read; the rest keep their
    defaults.  ``fields`` holds raw ``name:type`` strings, parsed by
    :func:`generate`.
    """

    kind: TargetKind
    name: str
    feature: str | None = Field(default=None, description="Owning feature, if any")

    # Models and entities
    fields: list[str] = Field(default_factory=list)
    use_freezed: bool = True
    include_json: bool = True
    include_equatable: bool = False

    # Repositories and services
    methods: list[str] = Field(default_factory=list)
    include_remote: bool = True
    include_local: bool = True
    include_entity: bool | None = Field(
        default=None,
        description="Emit the entity with a repository; defaults to True outside a feature",
    )

    # Features
    include_repository: bool = True
    include_use_case: bool = True
    include_tests: bool = True
    entities: list[str] = Field(default_factory=list)

    # Projects
    org_identifier: str = DEFAULT_ORG
    architecture: ArchitecturePattern = ArchitecturePattern.CLEAN
    state_management: StateManagement = StateManagement.RIVERPOD
    features: list[str] = Field(default_factory=list)
    include_ci: bool = True

    # Components
    input_type: str = "void"
    output_type: str = "void"
    stateful: bool = False
    include_scaffold: bool = True

    @model_validator(mode="after")
    def _feature_present(self) -> "GenerationRequest":
        if self.kind in _NEEDS_FEATURE and not self.feature:
            raise ValueError(f"a {self.kind.value} must belong to a feature")
        return self


# ---------------------------------------------------------------------------
# Dispatcher
# ---------------------------------------------------------------------------


def generate(request: GenerationRequest, config: "ForgeConfig | None" = None) -> FileSet:
    """Generate the files described by *request*.

    Paths in the result are relative to the project root (for
    ``TargetKind.PROJECT``, the root of the new project).

    Raises:
        InvalidNameError: For unsafe or empty names.
        MalformedFieldSpecError: For field specs that do not parse.
        DuplicateFieldError: For repeated field names.
    """
    features_dir = config.features_dir if config else "lib/src/features"
    core_dir = config.core_dir if config else "lib/src/core"
    tests_dir = config.tests_dir if config else "test/features"

    validate_name(request.name, f"{request.kind.value} name")
    feature_dir = None
    if request.feature:
        feature = canonical_snake_case(validate_name(request.feature, "feature name"))
        feature_dir = posixpath.join(features_dir, feature)
    fields = parse_field_specs(request.fields)

    kind = request.kind
    if kind is TargetKind.ENTITY:
        return _entity(request, fields, feature_dir, core_dir)
    if kind is TargetKind.MODEL:
        return _model(request, fields, feature_dir, core_dir)
    if kind is TargetKind.REPOSITORY:
        return _repository(request, feature_dir, core_dir)
    if kind is TargetKind.FEATURE:
        return _feature(request, features_dir, tests_dir)
    if kind is TargetKind.PROJECT:
        return ProjectTemplate(
            request.name,
            request.org_identifier,
            request.architecture,
            request.state_management,
            request.features,
            include_tests=request.include_tests,
            include_ci=request.include_ci,
            features_dir=features_dir,
            core_dir=core_dir,
            tests_dir=tests_dir,
        ).generate()
    if kind is TargetKind.USECASE:
        return render_use_case(
            request.name, request.feature, request.input_type, request.output_type,
            features_dir=features_dir, core_dir=core_dir,
        )
    if kind is TargetKind.WIDGET:
        return render_widget(
            request.name, request.feature, stateful=request.stateful,
            features_dir=features_dir, core_dir=core_dir,
        )
    if kind is TargetKind.PAGE:
        return render_page(
            request.name, request.feature,
            include_scaffold=request.include_scaffold, features_dir=features_dir,
        )
    return render_service(request.name, request.methods, core_dir=core_dir)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _entity(
    request: GenerationRequest,
    fields: list[FieldSpec],
    feature_dir: str | None,
    core_dir: str,
) -> FileSet:
    entity = EntityTemplate(request.name, fields or None)
    base = (
        posixpath.join(feature_dir, "domain/entities")
        if feature_dir else posixpath.join(core_dir, "entities")
    )
    return FileSet({posixpath.join(base, entity.file_name): entity.generate()})


def _model(
    request: GenerationRequest,
    fields: list[FieldSpec],
    feature_dir: str | None,
    core_dir: str,
) -> FileSet:
    model = ModelTemplate(
        request.name,
        fields,
        use_freezed=request.use_freezed,
        include_json=request.include_json,
        include_equatable=request.include_equatable,
    )
    base = (
        posixpath.join(feature_dir, "data/models")
        if feature_dir else posixpath.join(core_dir, "models")
    )
    return FileSet({posixpath.join(base, model.file_name): model.generate()})


def _repository(request: GenerationRequest, feature_dir: str | None, core_dir: str) -> FileSet:
    include_entity = request.include_entity
    if include_entity is None:
        include_entity = feature_dir is None
    template = RepositoryTemplate(
        request.name,
        request.methods,
        include_remote=request.include_remote,
        include_local=request.include_local,
        layout=RepositoryLayout.feature() if feature_dir else RepositoryLayout.standalone(),
        include_entity=include_entity,
    )
    base = feature_dir or posixpath.join(core_dir, "data")
    return template.generate().prefixed(base)


def _feature(request: GenerationRequest, features_dir: str, tests_dir: str) -> FileSet:
    template = FeatureTemplate(
        request.name,
        include_repository=request.include_repository,
        include_use_case=request.include_use_case,
        entities=request.entities,
    )
    files = template.generate().prefixed(posixpath.join(features_dir, template.feature_name))
    if request.include_tests:
        files.update(
            template.generate_tests().prefixed(posixpath.join(tests_dir, template.feature_name))
        )
    return files
