"""Whole-project scaffolding orchestrator.

Takes a project name, organisation identifier, architecture pattern and
state-management choice and produces the complete FileSet for a new Flutter
application: root files, architecture core files, test helpers, CI
workflows and one feature slice per requested feature.
"""

from __future__ import annotations

import posixpath
from enum import Enum
from typing import Any, Iterable

from .feature_template import FeatureTemplate
from .fileset import FileSet
from .naming import (
    canonical_snake_case,
    to_pascal_case,
    to_sentence_case,
    validate_name,
    validate_org_identifier,
    validate_project_name,
)
from .repository_template import relative_import
from .templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Choices
# ---------------------------------------------------------------------------


class ArchitecturePattern(str, Enum):
    """Layout of the shared ``core`` code."""
    CLEAN = "clean"
    MVVM = "mvvm"
    FEATURE = "feature"


class StateManagement(str, Enum):
    """State-management package wired into the entry point."""
    RIVERPOD = "riverpod"
    BLOC = "bloc"
    PROVIDER = "provider"


BUILTIN_FEATURES: tuple[str, ...] = (
    "auth",
    "settings",
    "onboarding",
    "profile",
    "notifications",
)

DEFAULT_ORG = "com.example"


# ---------------------------------------------------------------------------
# Template tables: (template path, output path)
# ---------------------------------------------------------------------------

_ROOT_FILES: tuple[tuple[str, str], ...] = (
    ("project/main.dart.j2", "lib/main.dart"),
    ("project/app.dart.j2", "lib/src/app.dart"),
    ("project/pubspec.yaml.j2", "pubspec.yaml"),
    ("project/analysis_options.yaml.j2", "analysis_options.yaml"),
    ("project/README.md.j2", "README.md"),
    ("project/gitignore.j2", ".gitignore"),
)

# Output paths are relative to the core directory.
_ARCHITECTURE_FILES: dict[ArchitecturePattern, tuple[tuple[str, str], ...]] = {
    ArchitecturePattern.CLEAN: (
        ("architecture/clean/usecase.dart.j2", "usecases/usecase.dart"),
        ("architecture/clean/failures.dart.j2", "errors/failures.dart"),
        ("architecture/clean/exceptions.dart.j2", "errors/exceptions.dart"),
    ),
    ArchitecturePattern.MVVM: (
        ("architecture/mvvm/base_view_model.dart.j2", "base/base_view_model.dart"),
        ("architecture/mvvm/base_view.dart.j2", "base/base_view.dart"),
    ),
    ArchitecturePattern.FEATURE: (
        ("architecture/feature/base_feature.dart.j2", "base/base_feature.dart"),
    ),
}

_TEST_FILES: tuple[tuple[str, str], ...] = (
    ("testing/test_helpers.dart.j2", "test/helpers/test_helpers.dart"),
    ("testing/mocks.dart.j2", "test/helpers/mocks.dart"),
    ("testing/widget_test.dart.j2", "test/widget_test.dart"),
)

_CI_FILES: tuple[tuple[str, str], ...] = (
    ("ci/ci.yml.j2", ".github/workflows/ci.yml"),
    ("ci/release.yml.j2", ".github/workflows/release.yml"),
)

_APP_FILE = "lib/src/app.dart"


# ---------------------------------------------------------------------------
# ProjectTemplate
# ---------------------------------------------------------------------------


class ProjectTemplate:
    """Composes a complete Flutter project into one FileSet.

    Every name is validated in the constructor, so an invalid project name,
    organisation or feature fails before any text is rendered.

    Args:
        project_name: Package name; lowercase snake_case, not a Dart keyword.
        org_identifier: Reverse-domain organisation, e.g. ``com.example``.
        architecture: Which architecture core files to emit.
        state_management: Which state-management package to wire in.
        features: Feature names.  Built-in names and any valid snake_case
            identifier are accepted; duplicates are dropped.
        include_tests: Emit test helpers and per-feature placeholder tests.
        include_ci: Emit GitHub Actions workflows.
        features_dir: Project-relative directory holding feature slices.
        core_dir: Project-relative directory holding shared core code.
        tests_dir: Project-relative directory holding feature tests.
    """

    def __init__(
        self,
        project_name: str,
        org_identifier: str = DEFAULT_ORG,
        architecture: ArchitecturePattern | str = ArchitecturePattern.CLEAN,
        state_management: StateManagement | str = StateManagement.RIVERPOD,
        features: Iterable[str] = (),
        *,
        include_tests: bool = True,
        include_ci: bool = True,
        features_dir: str = "lib/src/features",
        core_dir: str = "lib/src/core",
        tests_dir: str = "test/features",
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.project_name = validate_project_name(project_name)
        self.org_identifier = validate_org_identifier(org_identifier)
        self.architecture = ArchitecturePattern(architecture)
        self.state_management = StateManagement(state_management)
        self.features = list(dict.fromkeys(
            canonical_snake_case(validate_name(f, "feature name")) for f in features
        ))
        self.include_tests = include_tests
        self.include_ci = include_ci
        self.features_dir = features_dir.strip("/")
        self.core_dir = core_dir.strip("/")
        self.tests_dir = tests_dir.strip("/")
        self.renderer = renderer or TemplateRenderer()

    @property
    def app_class(self) -> str:
        pascal = to_pascal_case(self.project_name)
        return pascal if pascal.endswith("App") else f"{pascal}App"

    @property
    def title(self) -> str:
        return to_sentence_case(to_pascal_case(self.project_name))

    # -- Public API --------------------------------------------------------

    def generate(self) -> FileSet:
        """Render the whole project.

        Feature slices are merged last, so a feature file replaces any
        earlier file at the same path.
        """
        context = self._build_context()

        # 1. Entry point, app shell, manifest, lint config, README
        files = self.renderer.render_many(_ROOT_FILES, context)

        # 2. Architecture core files
        files.update(self.generate_architecture_files(context))

        # 3. Test helpers
        if self.include_tests:
            files.update(self.renderer.render_many(_TEST_FILES, context))

        # 4. CI/CD workflows
        if self.include_ci:
            files.update(self.renderer.render_many(_CI_FILES, context))

        # 5. Feature slices
        return files.merge(self.generate_features())

    def generate_architecture_files(self, context: dict[str, Any] | None = None) -> FileSet:
        pairs = [
            (template, posixpath.join(self.core_dir, output))
            for template, output in _ARCHITECTURE_FILES[self.architecture]
        ]
        return self.renderer.render_many(pairs, context or self._build_context())

    def generate_features(self) -> FileSet:
        """Render every requested feature slice under the features directory."""
        files = FileSet()
        for name in self.features:
            feature = FeatureTemplate(name, renderer=self.renderer)
            files.update(feature.generate().prefixed(self._feature_dir(name)))
            if self.include_tests:
                files.update(
                    feature.generate_tests().prefixed(posixpath.join(self.tests_dir, name))
                )
        return files

    # -- Context building --------------------------------------------------

    def _feature_dir(self, name: str) -> str:
        return posixpath.join(self.features_dir, name)

    def _build_context(self) -> dict[str, Any]:
        """Build the Jinja2 template context from the project settings."""
        features = []
        for name in self.features:
            page_path = posixpath.join(
                self._feature_dir(name), "presentation/pages", f"{name}_page.dart"
            )
            features.append({
                "name": name,
                "title": to_sentence_case(to_pascal_case(name)),
                "page": f"{to_pascal_case(name)}Page",
                "import": relative_import(_APP_FILE, page_path),
            })
        return {
            "project_name": self.project_name,
            "org_identifier": self.org_identifier,
            "architecture": self.architecture.value,
            "state_management": self.state_management.value,
            "app_class": self.app_class,
            "title": self.title,
            "features": features,
            "include_tests": self.include_tests,
        }
