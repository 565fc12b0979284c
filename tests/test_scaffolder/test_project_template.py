"""Tests for ProjectTemplate.

Covers:
- Root, architecture, test-helper and CI file sets
- pubspec.yaml and workflow YAML validity per state-management choice
- Entry point and app shell wiring
- Feature slices, including app imports
- Name validation and custom directories
"""

from __future__ import annotations

import pytest
import yaml

from flutter_forge.scaffolder.errors import InvalidNameError, ProjectNameError
from flutter_forge.scaffolder.project_template import (
    BUILTIN_FEATURES,
    ArchitecturePattern,
    ProjectTemplate,
    StateManagement,
)


pytestmark = pytest.mark.unit

ROOT_FILES = {
    "lib/main.dart",
    "lib/src/app.dart",
    "pubspec.yaml",
    "analysis_options.yaml",
    "README.md",
    ".gitignore",
}
CLEAN_FILES = {
    "lib/src/core/usecases/usecase.dart",
    "lib/src/core/errors/failures.dart",
    "lib/src/core/errors/exceptions.dart",
}
TEST_FILES = {
    "test/helpers/test_helpers.dart",
    "test/helpers/mocks.dart",
    "test/widget_test.dart",
}
CI_FILES = {".github/workflows/ci.yml", ".github/workflows/release.yml"}


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def project_files(renderer):
    """A default clean/riverpod project without features."""
    return ProjectTemplate("my_app", renderer=renderer).generate()


# ---------------------------------------------------------------------------
# File sets
# ---------------------------------------------------------------------------


class TestFileSet:
    def test_default_paths(self, project_files) -> None:
        assert set(project_files.paths) == ROOT_FILES | CLEAN_FILES | TEST_FILES | CI_FILES

    def test_without_tests_and_ci(self, renderer) -> None:
        files = ProjectTemplate(
            "my_app", include_tests=False, include_ci=False, renderer=renderer
        ).generate()
        assert set(files.paths) == ROOT_FILES | CLEAN_FILES

    def test_mvvm(self, renderer) -> None:
        files = ProjectTemplate("my_app", architecture="mvvm", renderer=renderer).generate()
        assert "lib/src/core/base/base_view_model.dart" in files
        assert "lib/src/core/base/base_view.dart" in files
        assert not CLEAN_FILES & set(files.paths)

    def test_feature_first(self, renderer) -> None:
        files = ProjectTemplate(
            "my_app", architecture=ArchitecturePattern.FEATURE, renderer=renderer
        ).generate()
        base = files["lib/src/core/base/base_feature.dart"]
        assert "abstract class BaseFeature" in base
        assert "class FeatureRegistry" in base

    def test_no_template_syntax_left(self, renderer) -> None:
        files = ProjectTemplate(
            "my_app", state_management="bloc", features=["auth"], renderer=renderer
        ).generate()
        for path in files.paths:
            assert "{%" not in files[path], path
            assert "{{" not in files[path], path


class TestArchitectureFiles:
    def test_relative_to_core_dir(self, renderer) -> None:
        template = ProjectTemplate("my_app", core_dir="lib/core/", renderer=renderer)
        files = template.generate_architecture_files()
        assert set(files.paths) == {
            "lib/core/usecases/usecase.dart",
            "lib/core/errors/failures.dart",
            "lib/core/errors/exceptions.dart",
        }


# ---------------------------------------------------------------------------
# Manifest and workflows
# ---------------------------------------------------------------------------


class TestPubspec:
    @pytest.mark.parametrize(
        ("state", "extra"),
        [("riverpod", None), ("bloc", "flutter_bloc"), ("provider", "provider")],
    )
    def test_dependencies(self, renderer, state: str, extra: str | None) -> None:
        files = ProjectTemplate("my_app", state_management=state, renderer=renderer).generate()
        pubspec = yaml.safe_load(files["pubspec.yaml"])
        assert pubspec["name"] == "my_app"
        deps = pubspec["dependencies"]
        assert "flutter_riverpod" in deps
        assert "equatable" in deps
        assert "freezed_annotation" in deps
        for other in ("flutter_bloc", "provider"):
            assert (other in deps) == (other == extra)
        dev = pubspec["dev_dependencies"]
        assert {"build_runner", "freezed", "json_serializable", "mocktail"} <= set(dev)
        assert pubspec["flutter"]["uses-material-design"] is True

    def test_analysis_options_is_yaml(self, project_files) -> None:
        assert isinstance(yaml.safe_load(project_files["analysis_options.yaml"]), dict)


class TestWorkflows:
    def test_ci_jobs(self, project_files) -> None:
        ci = yaml.safe_load(project_files[".github/workflows/ci.yml"])
        assert set(ci["jobs"]) == {"analyze", "test", "build-android", "build-web"}
        assert ci["jobs"]["test"]["needs"] == "analyze"
        # PyYAML reads the bare ``on`` key as a boolean.
        assert "push" in ci[True]

    def test_artifact_names_use_project(self, project_files) -> None:
        ci = yaml.safe_load(project_files[".github/workflows/ci.yml"])
        names = [
            step["with"]["name"]
            for job in ci["jobs"].values()
            for step in job["steps"]
            if step.get("uses", "").startswith("actions/upload-artifact")
        ]
        assert names == ["my_app-apk", "my_app-web"]

    def test_release(self, project_files) -> None:
        release = yaml.safe_load(project_files[".github/workflows/release.yml"])
        assert release[True]["push"]["tags"] == ["v*"]


# ---------------------------------------------------------------------------
# Entry point and app shell
# ---------------------------------------------------------------------------


class TestEntryPoint:
    def test_riverpod(self, project_files) -> None:
        main = project_files["lib/main.dart"]
        assert "    const ProviderScope(\n      child: MyApp(),\n    )," in main
        assert "flutter_bloc" not in main
        assert "MultiProvider" not in main

    def test_bloc(self, renderer) -> None:
        main = ProjectTemplate("my_app", state_management="bloc", renderer=renderer).generate()[
            "lib/main.dart"
        ]
        assert "import 'package:flutter_bloc/flutter_bloc.dart';" in main
        assert "  Bloc.observer = const AppBlocObserver();" in main
        assert "class AppBlocObserver extends BlocObserver {" in main

    def test_provider(self, renderer) -> None:
        files = ProjectTemplate(
            "my_app", state_management=StateManagement.PROVIDER, renderer=renderer
        ).generate()
        assert "ChangeNotifierProvider(create: (_) => AppState())" in files["lib/main.dart"]
        assert "class AppState extends ChangeNotifier {" in files["lib/src/app.dart"]


class TestAppShell:
    def test_app_class_name(self, renderer) -> None:
        assert ProjectTemplate("my_app", renderer=renderer).app_class == "MyApp"
        assert ProjectTemplate("todo", renderer=renderer).app_class == "TodoApp"

    def test_title(self, project_files) -> None:
        app = project_files["lib/src/app.dart"]
        assert "      title: 'My App'," in app
        assert "class MyApp extends StatelessWidget {" in app
        assert "class MyAppHome extends StatelessWidget {" in app
        assert "AppState" not in app

    def test_empty_home(self, project_files) -> None:
        assert "flutter-forge generate feature <name>" in project_files["lib/src/app.dart"]

    def test_widget_test_imports_package(self, project_files) -> None:
        test = project_files["test/widget_test.dart"]
        assert "import 'package:my_app/src/app.dart';" in test
        assert "expect(find.text('My App'), findsOneWidget);" in test


# ---------------------------------------------------------------------------
# Features
# ---------------------------------------------------------------------------


class TestFeatures:
    def test_builtin_features(self) -> None:
        assert BUILTIN_FEATURES == ("auth", "settings", "onboarding", "profile", "notifications")

    def test_feature_slices_and_tests(self, renderer) -> None:
        files = ProjectTemplate("my_app", features=["auth", "settings"], renderer=renderer).generate()
        for name in ("auth", "settings"):
            assert f"lib/src/features/{name}/presentation/pages/{name}_page.dart" in files
            assert f"lib/src/features/{name}/domain/usecases/get_{name}_usecase.dart" in files
            assert f"test/features/{name}/{name}_repository_test.dart" in files

    def test_app_links_feature_pages(self, renderer) -> None:
        app = ProjectTemplate("my_app", features=["auth"], renderer=renderer).generate()[
            "lib/src/app.dart"
        ]
        assert "import 'features/auth/presentation/pages/auth_page.dart';" in app
        assert "builder: (_) => const AuthPage()" in app
        assert "title: const Text('Auth')," in app

    def test_feature_tests_skipped_without_tests(self, renderer) -> None:
        files = ProjectTemplate(
            "my_app", features=["auth"], include_tests=False, renderer=renderer
        ).generate()
        assert not [p for p in files.paths if p.startswith("test/")]

    def test_duplicates_dropped(self, renderer) -> None:
        template = ProjectTemplate("my_app", features=["auth", "Auth", "user_profile", "UserProfile"])
        assert template.features == ["auth", "user_profile"]

    def test_custom_directories(self, renderer) -> None:
        files = ProjectTemplate(
            "my_app",
            features=["auth"],
            features_dir="lib/features",
            tests_dir="test/unit",
            renderer=renderer,
        ).generate()
        assert "lib/features/auth/presentation/pages/auth_page.dart" in files
        assert "test/unit/auth/auth_page_test.dart" in files
        assert "import 'features/auth/presentation/pages/auth_page.dart';" not in files[
            "lib/src/app.dart"
        ]
        assert "import '../features/auth/presentation/pages/auth_page.dart';" in files[
            "lib/src/app.dart"
        ]


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class TestValidation:
    @pytest.mark.parametrize("name", ["MyApp", "my-app", "1app", "class", ""])
    def test_invalid_project_name(self, name: str) -> None:
        with pytest.raises((ProjectNameError, InvalidNameError)):
            ProjectTemplate(name)

    def test_invalid_feature_name(self) -> None:
        with pytest.raises(InvalidNameError):
            ProjectTemplate("my_app", features=["../auth"])

    def test_invalid_org(self) -> None:
        with pytest.raises(InvalidNameError):
            ProjectTemplate("my_app", org_identifier="not an org")

    def test_unknown_architecture(self) -> None:
        with pytest.raises(ValueError):
            ProjectTemplate("my_app", architecture="layered")
