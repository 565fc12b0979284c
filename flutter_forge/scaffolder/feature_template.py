"""Feature slice generation.

A feature is one vertical slice of the app laid out in three layers::

    domain/        entities, repository interface, use cases
    data/          models, repository implementation, data sources
    presentation/  state, notifier/providers, pages, widgets

Domain and data modules are produced by the entity, model and repository
templates.  Presentation skeletons and placeholder tests are rendered from
the Jinja2 templates under ``templates/feature/``.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable

from .entity_template import DEFAULT_ENTITY_FIELDS, EntityTemplate, entity_class_name
from .fileset import FileSet
from .model_template import ModelTemplate
from .naming import (
    canonical_snake_case,
    to_camel_case,
    to_pascal_case,
    to_sentence_case,
    to_snake_case,
    validate_name,
)
from .repository_template import RepositoryLayout, RepositoryTemplate
from .templates import TemplateRenderer


class FeatureBackend(str, Enum):
    """What the generated notifier calls to load and mutate items."""
    USE_CASES = "usecase"
    REPOSITORY = "repository"
    MEMORY = "memory"


# Names of the placeholder test cases, per generated test module.
TEST_CASE_NAMES: dict[str, tuple[str, ...]] = {
    "repository": (
        "getAll returns list of entities",
        "getById returns entity when found",
        "create returns created entity",
        "update returns updated entity",
        "delete completes successfully",
    ),
    "provider": (
        "initial state is correct",
        "loadItems updates state correctly",
        "createItem adds item to state",
        "deleteItem removes item from state",
    ),
    "page": (
        "renders loading indicator initially",
        "renders list when loaded",
        "renders error message on failure",
    ),
}

_TEST_IMPORTS: dict[str, tuple[str, ...]] = {
    "repository": (
        "package:flutter_test/flutter_test.dart",
        "package:mocktail/mocktail.dart",
    ),
    "provider": (
        "package:flutter_test/flutter_test.dart",
        "package:flutter_riverpod/flutter_riverpod.dart",
    ),
    "page": (
        "package:flutter/material.dart",
        "package:flutter_test/flutter_test.dart",
        "package:flutter_riverpod/flutter_riverpod.dart",
    ),
}

# (prefix, repository method, gerund, call doc, return type, parameter, argument)
_USE_CASES: tuple[tuple[str, str, str, str, str, str, str], ...] = (
    ("Get", "getAll", "retrieving", "Retrieves all {name} entities.",
     "Future<List<{entity}>>", "", ""),
    ("Create", "create", "creating", "Creates a new {name} entity.",
     "Future<{entity}>", "{entity} entity", "entity"),
    ("Update", "update", "updating", "Updates an existing {name} entity.",
     "Future<{entity}>", "{entity} entity", "entity"),
    ("Delete", "delete", "deleting", "Deletes a {name} entity by [id].",
     "Future<void>", "String id", "id"),
)

_PRESENTATION = (
    ("feature/presentation/state.dart.j2", "presentation/providers/{f}_state.dart"),
    ("feature/presentation/provider.dart.j2", "presentation/providers/{f}_provider.dart"),
    ("feature/presentation/page.dart.j2", "presentation/pages/{f}_page.dart"),
    ("feature/presentation/detail_page.dart.j2", "presentation/pages/{f}_detail_page.dart"),
    ("feature/presentation/card.dart.j2", "presentation/widgets/{f}_card.dart"),
    ("feature/presentation/list.dart.j2", "presentation/widgets/{f}_list.dart"),
    ("feature/presentation/form.dart.j2", "presentation/widgets/{f}_form.dart"),
)


class FeatureTemplate:
    """Composes a complete feature slice into one FileSet.

    Args:
        feature_name: Feature name; normalised to snake_case for paths.
        include_repository: Emit the repository implementation and both
            data sources.
        include_use_case: Emit the four single-operation use cases.
        entities: Additional entity names.  Each one that differs from the
            feature name gets its own entity and model module.
        renderer: Template renderer, mainly for tests.
    """

    def __init__(
        self,
        feature_name: str,
        include_repository: bool = True,
        include_use_case: bool = True,
        entities: Iterable[str] | None = None,
        *,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.feature_name = canonical_snake_case(validate_name(feature_name, "feature name"))
        self.include_repository = include_repository
        self.include_use_case = include_use_case
        self.entities = [validate_name(e, "entity name") for e in (entities or [])]
        self.renderer = renderer or TemplateRenderer()

    # -- Names -------------------------------------------------------------

    @property
    def pascal(self) -> str:
        return to_pascal_case(self.feature_name)

    @property
    def camel(self) -> str:
        return to_camel_case(self.feature_name)

    @property
    def entity_name(self) -> str:
        return entity_class_name(self.feature_name)

    @property
    def entity_file(self) -> str:
        """Entity module stem, as written by :class:`EntityTemplate`."""
        return to_snake_case(self.entity_name)

    @property
    def backend(self) -> FeatureBackend:
        if self.include_use_case:
            return FeatureBackend.USE_CASES
        if self.include_repository:
            return FeatureBackend.REPOSITORY
        return FeatureBackend.MEMORY

    @property
    def extra_entities(self) -> list[str]:
        """snake_case names of listed entities other than the feature's own."""
        names: list[str] = []
        seen = {self.entity_name}
        for entity in self.entities:
            class_name = entity_class_name(entity)
            if class_name in seen:
                continue
            seen.add(class_name)
            names.append(canonical_snake_case(class_name[: -len("Entity")] or class_name))
        return names

    def repository_template(self) -> RepositoryTemplate:
        return RepositoryTemplate(
            self.pascal,
            layout=RepositoryLayout.feature(),
            entity_name=self.entity_name,
        )

    # -- Generation --------------------------------------------------------

    def generate(self) -> FileSet:
        """Render every module of the feature slice."""
        files = FileSet()
        f = self.feature_name

        for name in [f, *self.extra_entities]:
            self._add_entity_and_model(files, name)

        repository = self.repository_template()
        if self.include_repository:
            files.update(repository.generate())
        elif self.include_use_case:
            files.add(repository.interface_path, repository.generate_interface())

        if self.include_use_case:
            for parts in _USE_CASES:
                path = f"domain/usecases/{parts[0].lower()}_{f}_usecase.dart"
                files.add(path, self._use_case(*parts))

        pairs = [(template, output.format(f=f)) for template, output in _PRESENTATION]
        files.update(self.renderer.render_many(pairs, self._context()))
        return files

    def generate_tests(self) -> FileSet:
        """Render the three placeholder test modules (paths are file names only)."""
        files = FileSet()
        groups = {
            "repository": f"{self.pascal}Repository",
            "provider": f"{self.pascal}Provider",
            "page": f"{self.pascal}Page",
        }
        for kind, group in groups.items():
            files.add(
                f"{self.feature_name}_{kind}_test.dart",
                self.renderer.render(
                    "feature/test/feature_test.dart.j2",
                    {
                        "imports": _TEST_IMPORTS[kind],
                        "group": group,
                        "cases": TEST_CASE_NAMES[kind],
                        "widget": kind == "page",
                    },
                ),
            )
        return files

    # -- Internal helpers --------------------------------------------------

    def _context(self) -> dict[str, object]:
        return {
            "feature": self.feature_name,
            "pascal": self.pascal,
            "camel": self.camel,
            "entity": self.entity_name,
            "entity_file": self.entity_file,
            "title": to_sentence_case(self.pascal),
            "backend": self.backend.value,
            "include_repository": self.include_repository,
            "include_use_case": self.include_use_case,
        }

    def _add_entity_and_model(self, files: FileSet, name: str) -> None:
        entity = EntityTemplate(name)
        entity_path = f"domain/entities/{entity.file_name}"
        files.add(entity_path, entity.generate())

        model = ModelTemplate(
            f"{to_pascal_case(name)}Model",
            DEFAULT_ENTITY_FIELDS,
            use_freezed=True,
            include_json=True,
            documentation=(
                f"Data model for {to_pascal_case(name)}.\n\n"
                "Handles serialization and deserialization of data."
            ),
            entity_name=entity.class_name,
            entity_import=f"../../{entity_path}",
        )
        files.add(f"data/models/{model.file_name}", model.generate())

    def _use_case(
        self, prefix: str, method: str, gerund: str, doc: str,
        returns: str, param: str, arg: str,
    ) -> str:
        f = self.feature_name
        entity = self.entity_name
        name = f"{prefix}{self.pascal}UseCase"
        returns = returns.replace("{entity}", entity)
        param = param.replace("{entity}", entity)
        lines = []
        if prefix != "Delete":
            lines.append(f"import '../entities/{self.entity_file}.dart';")
        lines += [
            f"import '../repositories/{f}_repository.dart';",
            "",
            f"/// Use case for {gerund} {self.pascal} entities.",
            f"class {name} {{",
            f"  /// Creates a new [{name}].",
            f"  const {name}(this._repository);",
            "",
            f"  final {self.pascal}Repository _repository;",
            "",
            f"  /// {doc.replace('{name}', self.pascal)}",
            f"  {returns} call({param}) {{",
            f"    return _repository.{method}({arg});",
            "  }",
            "}",
        ]
        return "\n".join(lines) + "\n"
