"""Tests for TemplateRenderer."""

from __future__ import annotations

from pathlib import Path

import jinja2
import pytest

from flutter_forge.scaffolder.templates import TemplateRenderer


pytestmark = pytest.mark.unit


class TestFilters:
    @pytest.mark.parametrize(
        ("template", "expected"),
        [
            ("{{ name | snake_case }}", "user_profile"),
            ("{{ name | pascal_case }}", "UserProfile"),
            ("{{ name | camel_case }}", "userProfile"),
            ("{{ name | sentence_case }}", "User Profile"),
        ],
    )
    def test_casing_filters(self, renderer, template: str, expected: str) -> None:
        assert renderer.render_string(template, {"name": "UserProfile"}) == expected


class TestRendering:
    def test_missing_variable_raises(self, renderer) -> None:
        with pytest.raises(jinja2.UndefinedError):
            renderer.render_string("{{ missing }}", {})

    def test_no_html_escaping(self, renderer) -> None:
        assert renderer.render_string("{{ t }}", {"t": "List<String>"}) == "List<String>"

    def test_keeps_trailing_newline(self, renderer) -> None:
        assert renderer.render_string("a\n", {}) == "a\n"

    def test_render_packaged_template(self, renderer) -> None:
        content = renderer.render("architecture/clean/usecase.dart.j2", {})
        assert "abstract class UseCase<Type, Params>" in content

    def test_render_many_returns_fileset(self, renderer) -> None:
        files = renderer.render_many(
            [
                ("architecture/clean/failures.dart.j2", "lib/errors/failures.dart"),
                ("architecture/clean/exceptions.dart.j2", "lib/errors/exceptions.dart"),
            ],
            {},
        )
        assert files.paths == ["lib/errors/failures.dart", "lib/errors/exceptions.dart"]

    def test_render_many_fails_whole_batch(self, renderer) -> None:
        with pytest.raises(jinja2.UndefinedError):
            renderer.render_many(
                [
                    ("architecture/clean/failures.dart.j2", "a.dart"),
                    ("project/pubspec.yaml.j2", "pubspec.yaml"),
                ],
                {},
            )


class TestListTemplates:
    def test_all(self, renderer) -> None:
        names = renderer.list_templates()
        assert names == sorted(names)
        assert "project/pubspec.yaml.j2" in names
        assert "ci/ci.yml.j2" in names

    def test_prefix(self, renderer) -> None:
        names = renderer.list_templates("feature")
        assert "feature/presentation/provider.dart.j2" in names
        assert "feature/test/feature_test.dart.j2" in names
        assert all(n.startswith("feature/") for n in names)

    def test_unknown_prefix(self, renderer) -> None:
        assert renderer.list_templates("nope") == []


class TestCustomDirectory:
    def test_loads_from_given_dir(self, tmp_path: Path) -> None:
        (tmp_path / "hello.dart.j2").write_text("// {{ name | pascal_case }}\n", encoding="utf-8")
        renderer = TemplateRenderer(tmp_path)
        assert renderer.render("hello.dart.j2", {"name": "my_app"}) == "// MyApp\n"
        assert renderer.list_templates() == ["hello.dart.j2"]
